"""이미지 Pydantic 응답 스키마."""

from datetime import datetime
from pydantic import BaseModel


class ImageResponse(BaseModel):
    """업로드된 이미지 응답 스키마.

    Attributes:
        id: 이미지 UUID (Image identifier)
        name: 파일명 (Filename, unique)
        url: 다운로드 URL (Public download URL)
        type: 이미지 유형 (LOGO, COVER or EVENT_PICTURE)
        content_type: MIME 타입 (Media type)
        event_id: 연결된 이벤트 (Associated event, nullable)
        uploaded_at: 업로드 일시 (Upload timestamp)
    """

    id: str
    name: str
    url: str
    type: str
    content_type: str
    event_id: str | None = None
    uploaded_at: datetime
