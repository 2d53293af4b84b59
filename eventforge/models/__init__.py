"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 (User accounts)
    token: 리프레시 토큰, 인증 토큰 (Refresh tokens, verification tokens)
    organisation: 조직 프로필 (Organisation profiles)
    event: 이벤트 (Events)
    image: 업로드 이미지 (Uploaded images)
"""

from eventforge.models.user import User
from eventforge.models.token import RefreshToken, VerificationToken
from eventforge.models.organisation import Organisation
from eventforge.models.event import Event
from eventforge.models.image import Image

__all__ = [
    "User",
    "RefreshToken", "VerificationToken",
    "Organisation",
    "Event",
    "Image",
]
