"""토큰 모델 — JWT 리프레시 토큰 및 이메일/비밀번호 인증 토큰.

Token models — Refresh tokens for session management and single-use
verification tokens for email confirmation and password reset.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from eventforge.database import Base

# 인증 토큰 유형 — Verification token types
TOKEN_TYPE_EMAIL: str = "email"
TOKEN_TYPE_PASSWORD: str = "password"


class RefreshToken(Base):
    """리프레시 토큰 테이블.

    Refresh token table for managing long-lived authentication sessions.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        user_id: 소유 사용자 ID (Owner user UUID)
        token: JWT 리프레시 토큰 문자열 (JWT refresh token string)
        expires_at: 만료 일시 (Expiration timestamp)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "refresh_tokens"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    token: Mapped[str] = mapped_column(String(512), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    user = relationship("User", back_populates="refresh_tokens")


class VerificationToken(Base):
    """인증 토큰 테이블 — 사용자당 최대 1개.

    Single-use verification token, at most one per user.
    Used for email confirmation (type "email") or password reset (type "password").

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        token: 토큰 문자열 (Random token string, unique)
        user_id: 소유 사용자 ID (Owner user UUID, unique)
        type: 토큰 유형 (TOKEN_TYPE_EMAIL or TOKEN_TYPE_PASSWORD)
        expires_at: 만료 일시 (Expiration timestamp)
        created_at: 생성 일시 (Creation timestamp)
    """

    __tablename__ = "verification_tokens"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4
    )
    token: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=TOKEN_TYPE_EMAIL)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    user = relationship("User", back_populates="verification_token", lazy="selectin")
