"""조직 레포지토리 — 조직 프로필 조회 쿼리.

Organisation Repository — Profile lookups, including the public
queries restricted by the legal user condition.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.models.organisation import Organisation
from eventforge.models.user import User
from eventforge.repositories.base import BaseRepository


def legal_user_condition() -> tuple:
    """공개 조회 조건 — 소유 사용자가 잠금 해제 상태이고 관리자 승인됨.

    Legal user condition: the owning user is unlocked and approved by an
    administrator. Callers must join User on Organisation.user_id.
    """
    return (User.is_non_locked.is_(True), User.is_approved_by_admin.is_(True))


class OrganisationRepository(BaseRepository[Organisation]):
    """조직 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Organisation)

    async def get_by_user_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> Organisation | None:
        """사용자 ID로 조직 프로필을 조회합니다."""
        query: Select = select(Organisation).where(Organisation.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_legal_by_id(
        self,
        db: AsyncSession,
        organisation_id: UUID,
    ) -> Organisation | None:
        """공개 가능한 조직을 ID로 조회합니다.

        Retrieve an organisation only when its owner meets the legal user condition.
        """
        query: Select = (
            select(Organisation)
            .join(User, Organisation.user_id == User.id)
            .where(Organisation.id == organisation_id, *legal_user_condition())
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def find_all_legal(
        self,
        db: AsyncSession,
    ) -> list[Organisation]:
        """공개 가능한 조직 목록을 이름순으로 조회합니다."""
        query: Select = (
            select(Organisation)
            .join(User, Organisation.user_id == User.id)
            .where(*legal_user_condition())
            .order_by(Organisation.name)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


organisation_repository: OrganisationRepository = OrganisationRepository()
