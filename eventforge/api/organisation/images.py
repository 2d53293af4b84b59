"""조직 이미지 라우터 — 로고/배경/이벤트 사진 업로드 및 삭제."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.api.deps import require_organisation
from eventforge.database import get_db
from eventforge.models.image import IMAGE_TYPE_EVENT_PICTURE
from eventforge.models.organisation import Organisation
from eventforge.models.user import User
from eventforge.schemas.image import ImageResponse
from eventforge.services.image_service import image_service
from eventforge.services.organisation_service import organisation_service

router: APIRouter = APIRouter()


@router.post("/", response_model=ImageResponse, status_code=201)
async def upload_image(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
    file: Annotated[UploadFile, File(description="jpg, jpeg 또는 png 파일")],
    type: Annotated[str, Form(description="LOGO, COVER, EVENT_PICTURE")] = IMAGE_TYPE_EVENT_PICTURE,
    event_id: Annotated[UUID | None, Form(description="연결할 이벤트 ID")] = None,
) -> ImageResponse:
    """이미지 업로드 — multipart/form-data."""
    organisation: Organisation = await organisation_service.get_own_organisation(db, current_user)
    image = await image_service.upload_image_to_file_system(db, file, type, organisation.id, event_id)
    try:
        await db.commit()
    except Exception:
        image_service.delete_image_file(image.name)
        raise
    return image_service.to_response(image)


@router.delete("/{name}", status_code=204)
async def delete_image(
    name: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_organisation)],
) -> None:
    """이미지 삭제 — 메타데이터 커밋 후 파일 제거."""
    organisation: Organisation = await organisation_service.get_own_organisation(db, current_user)
    await image_service.delete_image_from_file_system(db, name, organisation.id)
    await db.commit()
    image_service.delete_image_file(name)
