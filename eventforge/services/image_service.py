"""이미지 서비스 — 로컬 파일 시스템 이미지 업로드/다운로드/삭제.

Image Service — Stores uploaded images under settings.IMAGES_DIR using the
original filename, and keeps an Image metadata row per file.
Filenames are unique: a second upload with the same name is rejected.
"""

import logging
from pathlib import Path
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.config import settings
from eventforge.models.event import Event
from eventforge.models.image import (
    IMAGE_TYPE_COVER,
    IMAGE_TYPE_EVENT_PICTURE,
    IMAGE_TYPE_LOGO,
    IMAGE_TYPES,
    Image,
)
from eventforge.models.organisation import Organisation
from eventforge.repositories.event_repository import event_repository
from eventforge.repositories.image_repository import image_repository
from eventforge.repositories.organisation_repository import organisation_repository
from eventforge.schemas.image import ImageResponse
from eventforge.utils.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)

DUPLICATE_FILE_MESSAGE: str = "Файл с това име вече съществува."
SAVE_FAILED_MESSAGE: str = "Грешка със запазването на файла."
IMAGE_NOT_FOUND_MESSAGE: str = "Изображението не е намерено."
INVALID_FILENAME_MESSAGE: str = "Невалидно име на файла."
UNSUPPORTED_FORMAT_MESSAGE: str = "Неподдържан формат на изображението. Разрешени са jpg, jpeg и png."
INVALID_IMAGE_TYPE_MESSAGE: str = "Невалиден тип на изображението."
EVENT_NOT_FOUND_MESSAGE: str = "Събитието не е намерено."
FOREIGN_IMAGE_MESSAGE: str = "Нямате права върху това изображение."

# 허용 확장자 → MIME 타입 (Allowed extensions and their media types)
MEDIA_TYPES: dict[str, str] = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}
IMAGES_URL_PREFIX: str = "/api/v1/images"


class ImageService:
    """이미지 파일 저장소 서비스 (Image file storage service)."""

    @property
    def images_dir(self) -> Path:
        return Path(settings.IMAGES_DIR)

    def get_file_extension(self, name: str | None) -> str | None:
        """파일명의 마지막 "." 뒤 확장자를 반환합니다.

        Return the text after the last dot; None for empty names, names
        without a dot, or names ending in a dot.
        """
        if not name or "." not in name:
            return None
        extension: str = name.rsplit(".", 1)[1]
        return extension or None

    def determine_media_type(self, extension: str | None) -> str | None:
        """확장자로 MIME 타입을 결정합니다.

        Raises:
            ValueError: 지원하지 않는 확장자 (Unsupported extension)
        """
        if extension is None:
            return None
        media_type: str | None = MEDIA_TYPES.get(extension.lower())
        if media_type is None:
            raise ValueError(f"Unsupported image extension: {extension}")
        return media_type

    def _image_path(self, name: str) -> Path:
        return self.images_dir / name

    def _validate_filename(self, name: str | None) -> str:
        """디렉토리 구성 요소가 없는 순수 파일명인지 확인합니다."""
        if not name or Path(name).name != name or name in (".", ".."):
            raise BadRequestError(INVALID_FILENAME_MESSAGE)
        return name

    def to_response(self, image: Image) -> ImageResponse:
        return ImageResponse(
            id=str(image.id),
            name=image.name,
            url=image.url,
            type=image.type,
            content_type=image.content_type,
            event_id=str(image.event_id) if image.event_id else None,
            uploaded_at=image.uploaded_at,
        )

    async def _get_target_event(
        self,
        db: AsyncSession,
        organisation_id: UUID | None,
        event_id: UUID | None,
    ) -> Event | None:
        """사진을 연결할 이벤트를 조회합니다 (다른 조직 이벤트는 404)."""
        if event_id is None:
            return None
        event: Event | None = await event_repository.get_by_id(db, event_id)
        if event is None or event.organisation_id != organisation_id:
            raise NotFoundError(EVENT_NOT_FOUND_MESSAGE)
        return event

    async def _attach(
        self,
        db: AsyncSession,
        image_type: str,
        url: str,
        organisation_id: UUID | None,
        event: Event | None,
    ) -> None:
        """업로드된 이미지 URL을 조직 로고/배경 또는 이벤트 사진에 연결합니다."""
        if image_type == IMAGE_TYPE_EVENT_PICTURE:
            if event is not None:
                event.image_url = url
                await event_repository.save(db, event)
            return

        if organisation_id is None:
            return
        organisation: Organisation | None = await organisation_repository.get_by_id(db, organisation_id)
        if organisation is None:
            return
        if image_type == IMAGE_TYPE_LOGO:
            organisation.logo_url = url
        elif image_type == IMAGE_TYPE_COVER:
            organisation.background_url = url
        await organisation_repository.save(db, organisation)

    async def _detach(self, db: AsyncSession, image: Image) -> None:
        """삭제할 이미지를 가리키는 URL 필드를 비웁니다."""
        if image.event_id is not None:
            event: Event | None = await event_repository.get_by_id(db, image.event_id)
            if event is not None and event.image_url == image.url:
                event.image_url = None
                await event_repository.save(db, event)

        if image.organisation_id is None:
            return
        organisation: Organisation | None = await organisation_repository.get_by_id(db, image.organisation_id)
        if organisation is None:
            return
        if organisation.logo_url == image.url:
            organisation.logo_url = None
        if organisation.background_url == image.url:
            organisation.background_url = None
        await organisation_repository.save(db, organisation)

    async def upload_image_to_file_system(
        self,
        db: AsyncSession,
        file: UploadFile,
        image_type: str,
        organisation_id: UUID | None = None,
        event_id: UUID | None = None,
    ) -> Image:
        """이미지를 IMAGES_DIR에 저장하고 메타데이터 행을 생성합니다.

        Store the upload under IMAGES_DIR/<filename> and persist an Image row.
        LOGO/COVER uploads update the organisation profile; EVENT_PICTURE
        uploads with an event_id update that event's picture.
        The file is removed again when the row or the attachment fails.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            file: 업로드 파일 (Multipart upload)
            image_type: LOGO, COVER, EVENT_PICTURE
            organisation_id: 소유 조직 ID (Owning organisation)
            event_id: 연결할 이벤트 ID (Event to attach to, optional)

        Returns:
            Image: 생성된 이미지 메타데이터 (Created image row)

        Raises:
            BadRequestError: 잘못된 파일명, 지원하지 않는 형식, 잘못된 이미지 유형
            ConflictError: 같은 이름의 파일이 존재하거나 저장 실패
            NotFoundError: 다른 조직의 이벤트이거나 이벤트가 없을 때
        """
        name: str = self._validate_filename(file.filename)
        if image_type not in IMAGE_TYPES:
            raise BadRequestError(INVALID_IMAGE_TYPE_MESSAGE)
        try:
            media_type: str | None = self.determine_media_type(self.get_file_extension(name))
        except ValueError:
            raise BadRequestError(UNSUPPORTED_FORMAT_MESSAGE)
        if media_type is None:
            raise BadRequestError(UNSUPPORTED_FORMAT_MESSAGE)

        path: Path = self._image_path(name)
        if await image_repository.find_image_by_name(db, name) is not None or path.exists():
            raise ConflictError(DUPLICATE_FILE_MESSAGE)

        event: Event | None = None
        if image_type == IMAGE_TYPE_EVENT_PICTURE:
            event = await self._get_target_event(db, organisation_id, event_id)

        try:
            data: bytes = await file.read()
            path.parent.mkdir(parents=True, exist_ok=True)
            # 배타적 생성 (Exclusive create, never overwrites)
            with path.open("xb") as fh:
                fh.write(data)
        except FileExistsError:
            raise ConflictError(DUPLICATE_FILE_MESSAGE)
        except OSError:
            logger.exception("Could not store image %s", name)
            raise ConflictError(SAVE_FAILED_MESSAGE)

        url: str = f"{IMAGES_URL_PREFIX}/{name}"
        try:
            image: Image = await image_repository.create(
                db,
                {
                    "name": name,
                    "url": url,
                    "type": image_type,
                    "content_type": media_type,
                    "organisation_id": organisation_id,
                    "event_id": event.id if event is not None else None,
                },
            )
            await self._attach(db, image_type, url, organisation_id, event)
        except Exception:
            self.delete_image_file(name)
            raise
        return image

    async def download_image_from_file_system(self, db: AsyncSession, name: str) -> tuple[bytes, str]:
        """저장된 이미지 바이트와 MIME 타입을 반환합니다.

        Raises:
            NotFoundError: 메타데이터 또는 파일이 없을 때
        """
        image: Image | None = await image_repository.find_image_by_name(db, name)
        if image is None:
            raise NotFoundError(IMAGE_NOT_FOUND_MESSAGE)
        path: Path = self._image_path(image.name)
        if not path.is_file():
            raise NotFoundError(IMAGE_NOT_FOUND_MESSAGE)
        return path.read_bytes(), image.content_type

    async def delete_image_from_file_system(
        self,
        db: AsyncSession,
        name: str,
        organisation_id: UUID | None = None,
    ) -> None:
        """이미지 행을 삭제하고 이를 가리키는 로고/배경/이벤트 사진 URL을 비웁니다.

        Delete the Image row and clear profile or event URLs pointing at it.
        When organisation_id is given the image must belong to it. The file
        itself is removed by delete_image_file() after the caller commits.

        Raises:
            NotFoundError: 이미지가 없을 때
            ForbiddenError: 다른 조직의 이미지일 때
        """
        image: Image | None = await image_repository.find_image_by_name(db, name)
        if image is None:
            raise NotFoundError(IMAGE_NOT_FOUND_MESSAGE)
        if organisation_id is not None and image.organisation_id != organisation_id:
            raise ForbiddenError(FOREIGN_IMAGE_MESSAGE)
        await self._detach(db, image)
        await image_repository.delete_image(db, image)

    def delete_image_file(self, name: str) -> None:
        """파일만 삭제합니다 — 없으면 무시 (Remove the file if present)."""
        self._image_path(name).unlink(missing_ok=True)


# 싱글턴 인스턴스 — Singleton instance
image_service: ImageService = ImageService()
