"""공개 조직 라우터 — 조직 목록 및 상세."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.database import get_db
from eventforge.schemas.organisation import OrganisationResponse
from eventforge.services.organisation_service import organisation_service

router: APIRouter = APIRouter()


@router.get("/", response_model=list[OrganisationResponse])
async def list_organisations(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[OrganisationResponse]:
    """공개 조직 목록 (이름순)."""
    return await organisation_service.list_public(db)


@router.get("/{organisation_id}", response_model=OrganisationResponse)
async def get_organisation(
    organisation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrganisationResponse:
    """공개 조직 상세."""
    return await organisation_service.get_public(db, organisation_id)
