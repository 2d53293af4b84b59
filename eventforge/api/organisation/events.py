"""조직 이벤트 라우터 — 로그인한 조직의 이벤트 CRUD.

Organisation Event Router — CRUD on the events owned by the logged-in
organisation. Events of other organisations answer 404.
"""

from typing import Annotated, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.api.deps import require_organisation
from eventforge.database import get_db
from eventforge.models.user import User
from eventforge.schemas.event import EventCreate, EventResponse, EventUpdate
from eventforge.services.event_service import event_service

router: APIRouter = APIRouter()


@router.get("/", response_model=list[EventResponse])
async def list_events(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
    state: Annotated[
        Literal["active", "expired", "upcoming"] | None,
        Query(description="상태 필터 — 생략 시 전체 (Omit for all events)"),
    ] = None,
) -> list[EventResponse]:
    """내 조직 이벤트 목록 (시작일 순)."""
    return await event_service.list_own_events(db, current_user, state)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> EventResponse:
    """내 조직 이벤트 상세."""
    return await event_service.get_own_event(db, current_user, event_id)


@router.post("/", response_model=EventResponse, status_code=201)
async def create_event(
    data: EventCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> EventResponse:
    """이벤트 생성."""
    result: EventResponse = await event_service.create_event(db, current_user, data)
    await db.commit()
    return result


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    data: EventUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> EventResponse:
    """이벤트 수정 (부분 업데이트)."""
    result: EventResponse = await event_service.update_event(db, current_user, event_id, data)
    await db.commit()
    return result


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> None:
    """이벤트 삭제."""
    await event_service.delete_event(db, current_user, event_id)
    await db.commit()
