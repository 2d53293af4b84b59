"""이벤트 서비스 — 공개 이벤트 조회 및 조직 이벤트 CRUD 비즈니스 로직.

Event Service — Public event queries (legal user condition applied by the
repository) and organisation-owned event CRUD with bounds validation.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.models.event import Event
from eventforge.models.organisation import Organisation
from eventforge.models.user import User
from eventforge.repositories.event_repository import event_repository
from eventforge.repositories.organisation_repository import organisation_repository
from eventforge.schemas.common import PaginatedResponse
from eventforge.schemas.event import EventCreate, EventResponse, EventUpdate
from eventforge.utils.exceptions import BadRequestError, NotFoundError
from eventforge.utils.timeutils import as_utc, utc_now

EVENT_NOT_FOUND_MESSAGE: str = "Събитието не е намерено."
ORGANISATION_NOT_FOUND_MESSAGE: str = "Организацията не е намерена."
INVALID_DATES_MESSAGE: str = "Началната дата трябва да бъде преди крайната дата."
INVALID_AGE_RANGE_MESSAGE: str = "Минималната възраст не може да бъде по-голяма от максималната."
MISSING_RECURRENCE_REASON_MESSAGE: str = "Периодичните събития изискват описание на повторението."
INVALID_STATE_MESSAGE: str = "Невалидно състояние на събитията."

# NULL 허용 필드 — Columns that may be cleared with an explicit null
NULLABLE_FIELDS: frozenset[str] = frozenset({"address", "image_url", "min_age", "max_age", "reason_for_recurrence"})

# 공개 페이지 조회 상태 — Public paged states
PUBLIC_STATES: tuple[str, ...] = ("active", "expired")
# 조직 조회 상태 — Organisation list states
ORGANISATION_STATES: tuple[str, ...] = ("active", "expired", "upcoming")


class EventService:
    """이벤트 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, event: Event, organisation_name: str | None = None) -> EventResponse:
        """이벤트 모델을 응답 스키마로 변환합니다.

        Args:
            event: 이벤트 모델 (Event model instance)
            organisation_name: 조직 이름 (Owning organisation name, if known)

        Returns:
            EventResponse: 이벤트 응답 (Event response)
        """
        return EventResponse(
            id=str(event.id),
            organisation_id=str(event.organisation_id),
            organisation_name=organisation_name,
            name=event.name,
            description=event.description,
            address=event.address,
            category=event.category,
            image_url=event.image_url,
            is_online=event.is_online,
            price=event.price,
            min_age=event.min_age,
            max_age=event.max_age,
            is_one_time=event.is_one_time,
            reason_for_recurrence=event.reason_for_recurrence,
            starts_at=event.starts_at,
            ends_at=event.ends_at,
            created_at=event.created_at,
        )

    def _to_responses(self, events: Sequence[Event]) -> list[EventResponse]:
        """organisation이 eager-load된 이벤트 목록을 변환합니다."""
        return [self.to_response(e, e.organisation.name) for e in events]

    def _validate_event(self, values: dict[str, Any]) -> None:
        """이벤트 값의 범위를 검증합니다.

        Raises:
            BadRequestError: 시작/종료 순서, 연령 범위, 반복 사유 누락
        """
        if as_utc(values["starts_at"]) >= as_utc(values["ends_at"]):
            raise BadRequestError(INVALID_DATES_MESSAGE)
        min_age, max_age = values.get("min_age"), values.get("max_age")
        if min_age is not None and max_age is not None and min_age > max_age:
            raise BadRequestError(INVALID_AGE_RANGE_MESSAGE)
        if not values.get("is_one_time", True) and not (values.get("reason_for_recurrence") or "").strip():
            raise BadRequestError(MISSING_RECURRENCE_REASON_MESSAGE)

    # --- 공개 조회 (Public queries) ---

    async def get_three_upcoming_events(self, db: AsyncSession) -> list[EventResponse]:
        """가장 가까운 예정 이벤트 3개 (Next three upcoming public events)."""
        events: list[Event] = await event_repository.find_three_upcoming_events(db, utc_now())
        return self._to_responses(events)

    async def get_event_detail(self, db: AsyncSession, event_id: UUID) -> EventResponse:
        """공개 이벤트 상세를 조회합니다.

        Raises:
            NotFoundError: 이벤트가 없거나 조직이 잠김/미승인 상태일 때
        """
        event: Event | None = await event_repository.find_event_by_id_with_condition(db, event_id)
        if event is None:
            raise NotFoundError(EVENT_NOT_FOUND_MESSAGE)
        return self.to_response(event, event.organisation.name)

    async def _get_legal_organisation(self, db: AsyncSession, organisation_id: UUID) -> Organisation:
        organisation: Organisation | None = await organisation_repository.find_legal_by_id(db, organisation_id)
        if organisation is None:
            raise NotFoundError(ORGANISATION_NOT_FOUND_MESSAGE)
        return organisation

    async def get_one_time_events_by_organisation(
        self, db: AsyncSession, organisation_id: UUID
    ) -> list[EventResponse]:
        """조직의 공개 일회성 이벤트 목록."""
        await self._get_legal_organisation(db, organisation_id)
        events = await event_repository.find_all_one_time_events_by_organisation_id(db, organisation_id)
        return self._to_responses(events)

    async def get_recurrence_events_by_organisation(
        self, db: AsyncSession, organisation_id: UUID
    ) -> list[EventResponse]:
        """조직의 공개 반복 이벤트 목록."""
        await self._get_legal_organisation(db, organisation_id)
        events = await event_repository.find_all_recurrence_events_by_organisation_id(db, organisation_id)
        return self._to_responses(events)

    async def get_events_page(
        self,
        db: AsyncSession,
        is_one_time: bool,
        state: str = "active",
        page: int = 1,
        per_page: int = 20,
        sort: str | None = None,
    ) -> PaginatedResponse:
        """유형/상태별 공개 이벤트 페이지를 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            is_one_time: 일회성(True) 또는 반복(False) 이벤트
            state: "active" (만료 전, unexpired) 또는 "expired"
            page: 페이지 번호, 1부터 (1-based page number)
            per_page: 페이지당 항목 수 (Items per page)
            sort: 정렬 컬럼, "-" 접두사는 내림차순 (Sort column, "-" for descending)

        Returns:
            PaginatedResponse: 이벤트 페이지

        Raises:
            BadRequestError: 알 수 없는 상태 또는 정렬 컬럼
        """
        if state not in PUBLIC_STATES:
            raise BadRequestError(INVALID_STATE_MESSAGE)

        if is_one_time:
            finder = (
                event_repository.find_all_active_one_time_events
                if state == "active"
                else event_repository.find_all_expired_one_time_events
            )
        else:
            finder = (
                event_repository.find_all_active_recurrence_events
                if state == "active"
                else event_repository.find_all_expired_recurrence_events
            )

        try:
            events, total = await finder(db, utc_now(), page=page, per_page=per_page, sort=sort)
        except ValueError as exc:
            raise BadRequestError(str(exc))
        return PaginatedResponse.build(self._to_responses(events), total, page, per_page)

    # --- 조직 이벤트 (Organisation-owned events) ---

    async def _get_own_organisation(self, db: AsyncSession, user: User) -> Organisation:
        organisation: Organisation | None = await organisation_repository.get_by_user_id(db, user.id)
        if organisation is None:
            raise NotFoundError(ORGANISATION_NOT_FOUND_MESSAGE)
        return organisation

    async def list_own_events(
        self,
        db: AsyncSession,
        user: User,
        state: str | None = None,
    ) -> list[EventResponse]:
        """로그인한 조직의 이벤트 목록을 조회합니다 (상태 필터 선택).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 조직 계정 사용자 (Organisation account)
            state: None(전체), "active", "expired", "upcoming"

        Raises:
            BadRequestError: 알 수 없는 상태 (Unknown state)
        """
        if state is None:
            events = await event_repository.find_all_events_for_organisation_by_user_id(db, user.id)
            return self._to_responses(events)
        if state not in ORGANISATION_STATES:
            raise BadRequestError(INVALID_STATE_MESSAGE)

        organisation: Organisation = await self._get_own_organisation(db, user)
        now = utc_now()
        if state == "active":
            events = await event_repository.find_all_active_events(db, organisation.id, now)
        elif state == "expired":
            events = await event_repository.find_all_expired_events(db, organisation.id, now)
        else:
            events = await event_repository.find_all_upcoming_events(db, organisation.id, now)
        return [self.to_response(e, organisation.name) for e in events]

    async def _get_own_event(self, db: AsyncSession, user: User, event_id: UUID) -> Event:
        event: Event | None = await event_repository.find_event_by_id_and_user_id(db, user.id, event_id)
        if event is None:
            raise NotFoundError(EVENT_NOT_FOUND_MESSAGE)
        return event

    async def get_own_event(self, db: AsyncSession, user: User, event_id: UUID) -> EventResponse:
        """로그인한 조직의 이벤트 상세 (다른 조직 이벤트는 404)."""
        event: Event = await self._get_own_event(db, user, event_id)
        return self.to_response(event, event.organisation.name)

    async def create_event(self, db: AsyncSession, user: User, data: EventCreate) -> EventResponse:
        """이벤트를 생성합니다.

        Raises:
            NotFoundError: 조직 프로필이 없을 때
            BadRequestError: 범위 검증 실패
        """
        organisation: Organisation = await self._get_own_organisation(db, user)
        values: dict[str, Any] = data.model_dump()
        self._validate_event(values)
        values["starts_at"] = as_utc(values["starts_at"])
        values["ends_at"] = as_utc(values["ends_at"])
        if values["is_one_time"]:
            values["reason_for_recurrence"] = None
        values["organisation_id"] = organisation.id

        event: Event = await event_repository.create(db, values)
        return self.to_response(event, organisation.name)

    async def update_event(
        self,
        db: AsyncSession,
        user: User,
        event_id: UUID,
        data: EventUpdate,
    ) -> EventResponse:
        """이벤트를 부분 수정합니다 — 병합된 값으로 범위를 다시 검증합니다.

        Partially update an owned event; bounds are validated on the merged values.
        """
        event: Event = await self._get_own_event(db, user, event_id)
        organisation_name: str = event.organisation.name
        update_data: dict[str, Any] = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }

        merged: dict[str, Any] = {
            "starts_at": event.starts_at,
            "ends_at": event.ends_at,
            "min_age": event.min_age,
            "max_age": event.max_age,
            "is_one_time": event.is_one_time,
            "reason_for_recurrence": event.reason_for_recurrence,
        }
        merged.update({k: v for k, v in update_data.items() if k in merged})
        self._validate_event(merged)

        for field in ("starts_at", "ends_at"):
            if update_data.get(field) is not None:
                update_data[field] = as_utc(update_data[field])
        if merged["is_one_time"]:
            update_data["reason_for_recurrence"] = None

        for field, value in update_data.items():
            setattr(event, field, value)
        event = await event_repository.save(db, event)
        return self.to_response(event, organisation_name)

    async def delete_event(self, db: AsyncSession, user: User, event_id: UUID) -> None:
        """이벤트를 삭제합니다 (다른 조직 이벤트는 404)."""
        event: Event = await self._get_own_event(db, user, event_id)
        await db.delete(event)
        await db.flush()


# 싱글턴 인스턴스 — Singleton instance
event_service: EventService = EventService()
