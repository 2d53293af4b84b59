"""공개 이미지 라우터 — 업로드된 이미지 다운로드."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.database import get_db
from eventforge.services.image_service import image_service

router: APIRouter = APIRouter()


@router.get("/{name}")
async def download_image(
    name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Response:
    """이미지 파일을 저장된 MIME 타입으로 반환합니다."""
    data, media_type = await image_service.download_image_from_file_system(db, name)
    return Response(content=data, media_type=media_type)
