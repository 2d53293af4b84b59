"""이미지 레포지토리 — 파일명 기준 이미지 메타데이터 조회.

Image Repository — Image metadata lookups keyed by filename.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.models.image import Image
from eventforge.repositories.base import BaseRepository


class ImageRepository(BaseRepository[Image]):
    """이미지 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Image)

    async def find_image_by_name(
        self,
        db: AsyncSession,
        name: str,
    ) -> Image | None:
        """파일명으로 이미지를 조회합니다 (Find an image by its filename)."""
        query: Select = select(Image).where(Image.name == name)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_image(self, db: AsyncSession, image: Image) -> None:
        await db.delete(image)
        await db.flush()


image_repository: ImageRepository = ImageRepository()
