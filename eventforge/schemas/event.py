"""이벤트 Pydantic 요청/응답 스키마 정의.

Event Pydantic request/response schema definitions.
"""

from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field


class EventCreate(BaseModel):
    """이벤트 생성 요청 스키마.

    Attributes:
        name: 이벤트 이름 (Event name)
        description: 설명 (Description)
        address: 장소 (Venue, optional for online events)
        category: 분류 (Category label)
        image_url: 대표 이미지 URL (Picture URL, optional)
        is_online: 온라인 여부 (Held online)
        price: 참가비 (Entry price, >= 0)
        min_age: 최소 연령 (Minimum age, optional)
        max_age: 최대 연령 (Maximum age, optional)
        is_one_time: 일회성 여부 (One-time vs recurring)
        reason_for_recurrence: 반복 주기 설명 (Required for recurring events)
        starts_at: 시작 일시 (Start)
        ends_at: 종료 일시 (End, after start)
    """

    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    address: str | None = Field(default=None, max_length=255)
    category: str = Field(min_length=1, max_length=100)
    image_url: str | None = None
    is_online: bool = False
    price: Decimal = Field(default=Decimal("0"), ge=0)
    min_age: int | None = Field(default=None, ge=0)
    max_age: int | None = Field(default=None, ge=0)
    is_one_time: bool = True
    reason_for_recurrence: str | None = Field(default=None, max_length=255)
    starts_at: datetime
    ends_at: datetime


class EventUpdate(BaseModel):
    """이벤트 수정 요청 스키마 (부분 업데이트)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    image_url: str | None = None
    is_online: bool | None = None
    price: Decimal | None = Field(default=None, ge=0)
    min_age: int | None = Field(default=None, ge=0)
    max_age: int | None = Field(default=None, ge=0)
    is_one_time: bool | None = None
    reason_for_recurrence: str | None = Field(default=None, max_length=255)
    starts_at: datetime | None = None
    ends_at: datetime | None = None


class EventResponse(BaseModel):
    """이벤트 응답 스키마."""

    id: str
    organisation_id: str
    organisation_name: str | None = None
    name: str
    description: str
    address: str | None = None
    category: str
    image_url: str | None = None
    is_online: bool
    price: Decimal
    min_age: int | None = None
    max_age: int | None = None
    is_one_time: bool
    reason_for_recurrence: str | None = None
    starts_at: datetime
    ends_at: datetime
    created_at: datetime
