"""이벤트 레포지토리 — 상태/유형별 이벤트 조회 쿼리.

Event Repository — Event lookups split by temporal state and type.

Conditions:
    legal user:  소유 사용자가 잠금 해제 + 관리자 승인 (owner unlocked and admin-approved)
    unexpired:   ends_at >= now
    expired:     ends_at < now
    active:      starts_at < now AND ends_at >= now
    upcoming:    starts_at > now

Organisation-scoped queries (by organisation or owner user id) do not apply
the legal user condition; every public query does.
"""

from datetime import datetime
from typing import Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventforge.models.event import Event
from eventforge.models.organisation import Organisation
from eventforge.models.user import User
from eventforge.repositories.base import BaseRepository
from eventforge.repositories.organisation_repository import legal_user_condition

# 정렬 가능한 컬럼 — "-" 접두사는 내림차순 (Sortable columns; "-" prefix sorts descending)
SORTABLE_COLUMNS = {
    "starts_at": Event.starts_at,
    "ends_at": Event.ends_at,
    "created_at": Event.created_at,
    "name": Event.name,
}
DEFAULT_SORT: str = "starts_at"


def resolve_sort(sort: str | None):
    """정렬 문자열을 ORDER BY 절로 변환합니다.

    Translate "column" / "-column" into an ORDER BY clause.

    Raises:
        ValueError: 허용되지 않은 컬럼 (Column not in SORTABLE_COLUMNS)
    """
    sort = sort or DEFAULT_SORT
    descending: bool = sort.startswith("-")
    column = SORTABLE_COLUMNS.get(sort.lstrip("-"))
    if column is None:
        raise ValueError(f"Unsupported sort column: {sort}")
    return column.desc() if descending else column.asc()


class EventRepository(BaseRepository[Event]):
    """이벤트 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Event)

    def _legal_query(self) -> Select:
        """공개 조회용 기본 쿼리 — Organisation/User 조인 + legal user 조건."""
        return (
            select(Event)
            .join(Organisation, Event.organisation_id == Organisation.id)
            .join(User, Organisation.user_id == User.id)
            .options(selectinload(Event.organisation))
            .where(*legal_user_condition())
        )

    async def _list(self, db: AsyncSession, query: Select) -> list[Event]:
        result = await db.execute(query)
        return list(result.scalars().all())

    # --- 조직 이벤트: 상태별 (Organisation events by state) ---

    async def find_all_expired_events(
        self, db: AsyncSession, organisation_id: UUID, now: datetime
    ) -> list[Event]:
        """조직의 종료된 이벤트를 시작일 순으로 조회합니다."""
        query: Select = (
            select(Event)
            .options(selectinload(Event.organisation))
            .where(Event.organisation_id == organisation_id, Event.ends_at < now)
            .order_by(Event.starts_at.asc())
        )
        return await self._list(db, query)

    async def find_all_active_events(
        self, db: AsyncSession, organisation_id: UUID, now: datetime
    ) -> list[Event]:
        """조직의 진행 중인 이벤트를 시작일 순으로 조회합니다."""
        query: Select = (
            select(Event)
            .options(selectinload(Event.organisation))
            .where(
                Event.organisation_id == organisation_id,
                Event.starts_at < now,
                Event.ends_at >= now,
            )
            .order_by(Event.starts_at.asc())
        )
        return await self._list(db, query)

    async def find_all_upcoming_events(
        self, db: AsyncSession, organisation_id: UUID, now: datetime
    ) -> list[Event]:
        """조직의 예정된 이벤트를 시작일 순으로 조회합니다."""
        query: Select = (
            select(Event)
            .options(selectinload(Event.organisation))
            .where(Event.organisation_id == organisation_id, Event.starts_at > now)
            .order_by(Event.starts_at.asc())
        )
        return await self._list(db, query)

    # --- 공개 쿼리 (Public queries, legal user condition applied) ---

    async def find_three_upcoming_events(
        self, db: AsyncSession, now: datetime
    ) -> list[Event]:
        """가장 가까운 예정 이벤트 3개를 조회합니다 (Next three upcoming events)."""
        query: Select = (
            self._legal_query()
            .where(Event.starts_at > now)
            .order_by(Event.starts_at.asc())
            .limit(3)
        )
        return await self._list(db, query)

    async def find_event_by_id_with_condition(
        self, db: AsyncSession, event_id: UUID
    ) -> Event | None:
        """공개 가능한 이벤트를 ID로 조회합니다."""
        query: Select = self._legal_query().where(Event.id == event_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_all_one_time_events_by_organisation_id(
        self, db: AsyncSession, organisation_id: UUID
    ) -> list[Event]:
        """조직의 공개 일회성 이벤트를 생성일 순으로 조회합니다."""
        query: Select = (
            self._legal_query()
            .where(Event.is_one_time.is_(True), Event.organisation_id == organisation_id)
            .order_by(Event.created_at.asc())
        )
        return await self._list(db, query)

    async def find_all_recurrence_events_by_organisation_id(
        self, db: AsyncSession, organisation_id: UUID
    ) -> list[Event]:
        """조직의 공개 반복 이벤트를 생성일 순으로 조회합니다."""
        query: Select = (
            self._legal_query()
            .where(Event.is_one_time.is_(False), Event.organisation_id == organisation_id)
            .order_by(Event.created_at.asc())
        )
        return await self._list(db, query)

    async def _find_page(
        self,
        db: AsyncSession,
        is_one_time: bool,
        expired: bool,
        now: datetime,
        page: int,
        per_page: int,
        sort: str | None,
    ) -> tuple[Sequence[Event], int]:
        """유형/만료 여부별 공개 이벤트 페이지 조회 공통 로직."""
        time_condition = Event.ends_at < now if expired else Event.ends_at >= now
        query: Select = (
            self._legal_query()
            .where(Event.is_one_time.is_(is_one_time), time_condition)
            .order_by(resolve_sort(sort), Event.id)
        )
        return await self.get_paginated(db, query, page, per_page)

    async def find_all_active_one_time_events(
        self, db: AsyncSession, now: datetime, page: int = 1, per_page: int = 20, sort: str | None = None
    ) -> tuple[Sequence[Event], int]:
        """만료되지 않은 공개 일회성 이벤트 페이지 (Unexpired one-time events)."""
        return await self._find_page(db, True, False, now, page, per_page, sort)

    async def find_all_active_recurrence_events(
        self, db: AsyncSession, now: datetime, page: int = 1, per_page: int = 20, sort: str | None = None
    ) -> tuple[Sequence[Event], int]:
        """만료되지 않은 공개 반복 이벤트 페이지 (Unexpired recurring events)."""
        return await self._find_page(db, False, False, now, page, per_page, sort)

    async def find_all_expired_one_time_events(
        self, db: AsyncSession, now: datetime, page: int = 1, per_page: int = 20, sort: str | None = None
    ) -> tuple[Sequence[Event], int]:
        """만료된 공개 일회성 이벤트 페이지 (Expired one-time events)."""
        return await self._find_page(db, True, True, now, page, per_page, sort)

    async def find_all_expired_recurrence_events(
        self, db: AsyncSession, now: datetime, page: int = 1, per_page: int = 20, sort: str | None = None
    ) -> tuple[Sequence[Event], int]:
        """만료된 공개 반복 이벤트 페이지 (Expired recurring events)."""
        return await self._find_page(db, False, True, now, page, per_page, sort)

    # --- 조직 계정 전용 (Organisation-account queries) ---

    async def find_all_events_for_organisation_by_user_id(
        self, db: AsyncSession, user_id: UUID
    ) -> list[Event]:
        """소유 사용자 ID로 조직의 전체 이벤트를 조회합니다 (잠금 계정 제외)."""
        query: Select = (
            select(Event)
            .options(selectinload(Event.organisation))
            .join(Organisation, Event.organisation_id == Organisation.id)
            .join(User, Organisation.user_id == User.id)
            .where(User.id == user_id, User.is_non_locked.is_(True))
            .order_by(Event.starts_at.asc())
        )
        return await self._list(db, query)

    async def find_event_by_id_and_user_id(
        self, db: AsyncSession, user_id: UUID, event_id: UUID
    ) -> Event | None:
        """소유 사용자의 이벤트를 ID로 조회합니다."""
        query: Select = (
            select(Event)
            .options(selectinload(Event.organisation))
            .join(Organisation, Event.organisation_id == Organisation.id)
            .where(Organisation.user_id == user_id, Event.id == event_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


event_repository: EventRepository = EventRepository()
