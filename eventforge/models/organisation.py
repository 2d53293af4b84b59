"""조직 SQLAlchemy ORM 모델 정의.

Organisation SQLAlchemy ORM model definition.
An organisation is the public profile of an organisation account and
owns the events it publishes.

Tables:
    - organisations: 조직 프로필 (Organisation profiles, one per organisation user)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventforge.database import Base


class Organisation(Base):
    """조직 모델 — 이벤트를 게시하는 계정 유형.

    Organisation model — Account type that owns and publishes events.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        user_id: 소유 사용자 FK (Owner user, unique)
        name: 조직 이름 (Organisation name, unique)
        bullstat: 사업자 등록 번호 (Company registry number, unique)
        address: 주소 (Address)
        website: 웹사이트 (Website URL, optional)
        facebook_link: 페이스북 링크 (Facebook page, optional)
        charity_option: 자선 활동 방식 (How the organisation helps, optional)
        organisation_purpose: 설립 목적 (Purpose statement)
        logo_url: 로고 이미지 URL (Logo image, optional)
        background_url: 배경 이미지 URL (Cover image, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        user: 소유 사용자 (Owner user account)
        events: 게시한 이벤트 목록 (Published events, cascade delete)
    """

    __tablename__ = "organisations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 소유 사용자 FK — 사용자 삭제 시 조직도 삭제 (CASCADE)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    bullstat: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str | None] = mapped_column(String(255), nullable=True)
    facebook_link: Mapped[str | None] = mapped_column(String(255), nullable=True)
    charity_option: Mapped[str | None] = mapped_column(String(255), nullable=True)
    organisation_purpose: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    background_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    user = relationship("User", back_populates="organisation")
    events = relationship("Event", back_populates="organisation", cascade="all, delete-orphan")
