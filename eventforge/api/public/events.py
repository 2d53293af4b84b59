"""공개 이벤트 라우터 — 인증 없이 조회 가능한 이벤트 엔드포인트.

Public Event Router — Event listings visible without authentication.
Only events of unlocked, admin-approved organisations are returned.
"""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.database import get_db
from eventforge.schemas.common import PaginatedResponse
from eventforge.schemas.event import EventResponse
from eventforge.services.event_service import event_service

router: APIRouter = APIRouter()


@router.get("/upcoming", response_model=list[EventResponse])
async def upcoming_events(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EventResponse]:
    """가장 가까운 예정 이벤트 3개."""
    return await event_service.get_three_upcoming_events(db)


@router.get("/one-time", response_model=PaginatedResponse)
async def one_time_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    state: Annotated[Literal["active", "expired"], Query(description="active(만료 전) 또는 expired")] = "active",
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
    sort: Annotated[str | None, Query(description="정렬 컬럼, '-' 접두사는 내림차순")] = None,
) -> PaginatedResponse:
    """일회성 이벤트 페이지 조회."""
    return await event_service.get_events_page(db, True, state, page, per_page, sort)


@router.get("/recurring", response_model=PaginatedResponse)
async def recurring_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    state: Annotated[Literal["active", "expired"], Query(description="active(만료 전) 또는 expired")] = "active",
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
    sort: Annotated[str | None, Query(description="정렬 컬럼, '-' 접두사는 내림차순")] = None,
) -> PaginatedResponse:
    """반복 이벤트 페이지 조회."""
    return await event_service.get_events_page(db, False, state, page, per_page, sort)


@router.get("/organisations/{organisation_id}/one-time", response_model=list[EventResponse])
async def organisation_one_time_events(
    organisation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EventResponse]:
    """조직의 일회성 이벤트 목록 (생성일 순)."""
    return await event_service.get_one_time_events_by_organisation(db, organisation_id)


@router.get("/organisations/{organisation_id}/recurring", response_model=list[EventResponse])
async def organisation_recurring_events(
    organisation_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EventResponse]:
    """조직의 반복 이벤트 목록 (생성일 순)."""
    return await event_service.get_recurrence_events_by_organisation(db, organisation_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EventResponse:
    """이벤트 상세 조회."""
    return await event_service.get_event_detail(db, event_id)
