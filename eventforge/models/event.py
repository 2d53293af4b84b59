"""이벤트 SQLAlchemy ORM 모델 정의.

Event SQLAlchemy ORM model definition.
Events are owned by an organisation and bounded by starts_at/ends_at.
An event is either one-time or recurring.

Tables:
    - events: 조직이 게시한 이벤트 (Events published by organisations)
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from sqlalchemy import String, Text, Boolean, DateTime, Integer, Numeric, ForeignKey, Index, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventforge.database import Base


class Event(Base):
    """이벤트 모델.

    Event model — A one-time or recurring event published by an organisation.
    Temporal state is derived from starts_at/ends_at against the current time:
        upcoming: starts_at > now
        active:   starts_at < now <= ends_at
        expired:  ends_at < now

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        organisation_id: 소유 조직 FK (Owner organisation)
        name: 이벤트 이름 (Event name)
        description: 설명 (Description)
        address: 장소 (Venue address, optional for online events)
        category: 분류 (Category label)
        image_url: 대표 이미지 URL (Picture URL, optional)
        is_online: 온라인 여부 (Held online)
        price: 참가비 (Entry price, 0 for free)
        min_age: 최소 연령 (Minimum age, optional)
        max_age: 최대 연령 (Maximum age, optional)
        is_one_time: 일회성 여부 (True for one-time, False for recurring)
        reason_for_recurrence: 반복 주기 설명 (Recurrence description for recurring events)
        starts_at: 시작 일시 (Start, required)
        ends_at: 종료 일시 (End, required)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "events"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organisation_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("organisations.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_online: Mapped[bool] = mapped_column(Boolean, default=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    min_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_one_time: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    reason_for_recurrence: Mapped[str | None] = mapped_column(String(255), nullable=True)
    starts_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        Index("ix_events_org_starts_at", "organisation_id", "starts_at"),
        Index("ix_events_ends_at", "ends_at"),
    )

    organisation = relationship("Organisation", back_populates="events", lazy="selectin")
