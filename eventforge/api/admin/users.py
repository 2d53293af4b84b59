"""관리자 사용자 라우터 — 사용자 목록, 승인, 잠금/해제 엔드포인트.

Admin User Router — User listing with filters, account approval, and
lock/unlock endpoints. ADMIN role only.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.api.deps import require_admin
from eventforge.database import get_db
from eventforge.models.user import User
from eventforge.schemas.common import MessageResponse
from eventforge.schemas.user import UserResponse
from eventforge.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("/", response_model=list[UserResponse])
async def list_users(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
    role: Annotated[str | None, Query(description="역할 필터 (ORGANISATION, ADMIN)")] = None,
    is_enabled: Annotated[bool | None, Query(description="이메일 인증 여부 필터")] = None,
    is_non_locked: Annotated[bool | None, Query(description="잠금 해제 상태 필터")] = None,
    is_approved_by_admin: Annotated[bool | None, Query(description="관리자 승인 여부 필터")] = None,
) -> list[UserResponse]:
    """사용자 목록을 필터 조건으로 조회합니다.

    List users with optional filters (role, is_enabled, is_non_locked, is_approved_by_admin).
    """
    filters: dict[str, str | bool | None] = {
        "role": role,
        "is_enabled": is_enabled,
        "is_non_locked": is_non_locked,
        "is_approved_by_admin": is_approved_by_admin,
    }
    return await user_service.list_users(db, filters)


@router.patch("/{user_id}/approve", response_model=MessageResponse)
async def approve_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    """계정 승인."""
    message: str = await user_service.set_approve_by_admin_to_true(db, user_id)
    await db.commit()
    return MessageResponse(message=message)


@router.patch("/{user_id}/lock", response_model=MessageResponse)
async def lock_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    """계정 잠금 — 리프레시 토큰 폐기 포함."""
    message: str = await user_service.lock_account_by_id(db, user_id)
    await db.commit()
    return MessageResponse(message=message)


@router.patch("/{user_id}/unlock", response_model=MessageResponse)
async def unlock_user(
    user_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_admin)],
) -> MessageResponse:
    """계정 잠금 해제."""
    message: str = await user_service.unlock_account_by_id(db, user_id)
    await db.commit()
    return MessageResponse(message=message)
