"""이미지 모델 — 파일 시스템에 저장된 업로드 이미지 메타데이터.

Image model — Metadata for uploaded images stored under IMAGES_DIR,
keyed by filename.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from eventforge.database import Base

# 이미지 유형 — Image usage types
IMAGE_TYPE_LOGO: str = "LOGO"
IMAGE_TYPE_COVER: str = "COVER"
IMAGE_TYPE_EVENT_PICTURE: str = "EVENT_PICTURE"
IMAGE_TYPES: tuple[str, ...] = (IMAGE_TYPE_LOGO, IMAGE_TYPE_COVER, IMAGE_TYPE_EVENT_PICTURE)


class Image(Base):
    """업로드 이미지 테이블.

    Attributes:
        id: 고유 식별자 (Primary key UUID)
        name: 파일명 (Filename, unique; also the file key on disk)
        url: 다운로드 URL (Public download URL)
        type: 이미지 유형 (LOGO, COVER or EVENT_PICTURE)
        content_type: MIME 타입 (image/jpeg or image/png)
        organisation_id: 소유 조직 (Owner organisation, optional)
        event_id: 연결된 이벤트 (Associated event, optional)
        uploaded_at: 업로드 일시 (Upload timestamp)
    """

    __tablename__ = "images"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    url: Mapped[str] = mapped_column(String(512), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default=IMAGE_TYPE_EVENT_PICTURE)
    content_type: Mapped[str] = mapped_column(String(50), nullable=False)
    organisation_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("organisations.id", ondelete="SET NULL"), nullable=True
    )
    event_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("events.id", ondelete="SET NULL"), nullable=True
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
