"""사용자 관련 Pydantic 응답 스키마 — 관리자 사용자 관리용.

User Pydantic response schemas for the admin user management endpoints.
"""

from datetime import datetime
from pydantic import BaseModel


class UserResponse(BaseModel):
    """관리자용 사용자 응답 스키마.

    Attributes:
        id: 사용자 UUID (User identifier)
        email: 로그인 이메일 (Login email)
        full_name: 실명 (Full name)
        phone_number: 연락처 (Phone, nullable)
        role: 역할 (ORGANISATION or ADMIN)
        is_enabled: 이메일 인증 여부 (Email confirmed)
        is_non_locked: 잠금 해제 상태 (Not locked)
        is_approved_by_admin: 관리자 승인 여부 (Approved)
        organisation_name: 조직 이름 (Organisation name, nullable)
        created_at: 가입 일시 (Registration timestamp)
    """

    id: str
    email: str
    full_name: str
    phone_number: str | None = None
    role: str
    is_enabled: bool
    is_non_locked: bool
    is_approved_by_admin: bool
    organisation_name: str | None = None
    created_at: datetime
