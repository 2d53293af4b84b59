"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
A user is either an organisation account (publishes events) or an
administrator (approves, locks and unlocks accounts).

Tables:
    - users: 사용자 계정 (User accounts; email is the login name)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventforge.database import Base

# 역할 이름 — Account roles
ROLE_ORGANISATION: str = "ORGANISATION"
ROLE_ADMIN: str = "ADMIN"


class User(Base):
    """사용자 모델 — 시스템 사용자 계정 정보.

    User model — System user account information.
    The email doubles as the username and the JWT subject.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        email: 로그인 이메일 (Login email, globally unique)
        full_name: 담당자 실명 (Contact person full name)
        phone_number: 연락처 (Contact phone, optional)
        password_hash: bcrypt 해시된 비밀번호 (bcrypt-hashed password)
        role: 역할 (ORGANISATION or ADMIN)
        is_enabled: 이메일 인증 완료 여부 (Email confirmed)
        is_non_locked: 잠금 해제 상태 (Not locked by an administrator)
        is_approved_by_admin: 관리자 승인 여부 (Approved by an administrator)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        verification_token: 인증 토큰 (At most one verification token)
        organisation: 조직 프로필 (Organisation profile for organisation accounts)
        refresh_tokens: 리프레시 토큰 목록 (Active refresh tokens, cascade delete)
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    # 로그인 이메일 — 전역 고유 (Unique across the system)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # 비밀번호 해시 — bcrypt hashed password (평문 저장 금지, never store plaintext)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_ORGANISATION)
    # 계정 상태 플래그 — Account state flags
    is_enabled: Mapped[bool] = mapped_column(Boolean, default=False)
    is_non_locked: Mapped[bool] = mapped_column(Boolean, default=True)
    is_approved_by_admin: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    # 관계 — Relationships
    verification_token = relationship("VerificationToken", back_populates="user", uselist=False, cascade="all, delete-orphan")
    organisation = relationship("Organisation", back_populates="user", uselist=False, cascade="all, delete-orphan", lazy="selectin")
    refresh_tokens = relationship("RefreshToken", back_populates="user", cascade="all, delete-orphan")
