"""조직 프로필 라우터 — 로그인한 조직 계정의 프로필 조회/수정."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.api.deps import require_organisation
from eventforge.database import get_db
from eventforge.models.user import User
from eventforge.schemas.organisation import OrganisationResponse, OrganisationUpdate
from eventforge.services.organisation_service import organisation_service

router: APIRouter = APIRouter()


@router.get("", response_model=OrganisationResponse)
async def get_profile(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> OrganisationResponse:
    """내 조직 프로필 조회."""
    return await organisation_service.get_profile(db, current_user)


@router.put("", response_model=OrganisationResponse)
async def update_profile(
    data: OrganisationUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> OrganisationResponse:
    """내 조직 프로필 수정 (부분 업데이트)."""
    result: OrganisationResponse = await organisation_service.update_profile(db, current_user, data)
    await db.commit()
    return result
