"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared across API domains:
generic messages and paginated lists.
"""

import math
from typing import Any
from pydantic import BaseModel


class MessageResponse(BaseModel):
    """범용 메시지 응답 스키마.

    Generic message response schema. Services return localized
    confirmation messages which routers wrap in this schema.

    Attributes:
        message: 응답 메시지 (Response message string)
    """

    message: str


class PaginatedResponse(BaseModel):
    """페이지네이션 응답 스키마.

    Paginated response wrapper schema.

    Attributes:
        items: 항목 목록 (List of result items)
        total: 전체 항목 수 (Total count across all pages)
        page: 현재 페이지 번호 (Current page number, 1-based)
        per_page: 페이지당 항목 수 (Items per page)
        pages: 전체 페이지 수 (Total number of pages)
    """

    items: list[Any]
    total: int
    page: int
    per_page: int
    pages: int = 0

    @classmethod
    def build(cls, items: list[Any], total: int, page: int, per_page: int) -> "PaginatedResponse":
        """전체 페이지 수를 계산하여 응답을 생성합니다 (pages = ceil(total/per_page))."""
        pages: int = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(items=items, total=total, page=page, per_page=per_page, pages=pages)
