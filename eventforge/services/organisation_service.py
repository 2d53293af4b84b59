"""조직 서비스 — 공개 조직 조회 및 조직 프로필 관리 비즈니스 로직.

Organisation Service — Public organisation listing (legal owners only)
and the organisation account's own profile read/update.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.models.organisation import Organisation
from eventforge.models.user import User
from eventforge.repositories.organisation_repository import organisation_repository
from eventforge.repositories.user_repository import user_repository
from eventforge.schemas.organisation import OrganisationResponse, OrganisationUpdate
from eventforge.utils.exceptions import ConflictError, NotFoundError

ORGANISATION_NOT_FOUND_MESSAGE: str = "Организацията не е намерена."
ORGANISATION_NAME_TAKEN_MESSAGE: str = "Организация с това име вече съществува."

# 사용자 테이블로 가는 필드 — Fields stored on the owning user
_USER_FIELDS: tuple[str, ...] = ("full_name", "phone_number")


class OrganisationService:
    """조직 관련 비즈니스 로직을 처리하는 서비스."""

    def to_response(self, organisation: Organisation) -> OrganisationResponse:
        return OrganisationResponse(
            id=str(organisation.id),
            name=organisation.name,
            bullstat=organisation.bullstat,
            address=organisation.address,
            website=organisation.website,
            facebook_link=organisation.facebook_link,
            charity_option=organisation.charity_option,
            organisation_purpose=organisation.organisation_purpose,
            logo_url=organisation.logo_url,
            background_url=organisation.background_url,
        )

    async def list_public(self, db: AsyncSession) -> list[OrganisationResponse]:
        """공개 가능한 조직 목록 (잠금 해제 + 승인된 소유자)."""
        organisations: list[Organisation] = await organisation_repository.find_all_legal(db)
        return [self.to_response(o) for o in organisations]

    async def get_public(self, db: AsyncSession, organisation_id: UUID) -> OrganisationResponse:
        """공개 조직 상세.

        Raises:
            NotFoundError: 조직이 없거나 소유자가 잠김/미승인 상태일 때
        """
        organisation: Organisation | None = await organisation_repository.find_legal_by_id(db, organisation_id)
        if organisation is None:
            raise NotFoundError(ORGANISATION_NOT_FOUND_MESSAGE)
        return self.to_response(organisation)

    async def get_own_organisation(self, db: AsyncSession, user: User) -> Organisation:
        """로그인한 조직 계정의 조직 모델을 반환합니다 (없으면 404)."""
        organisation: Organisation | None = await organisation_repository.get_by_user_id(db, user.id)
        if organisation is None:
            raise NotFoundError(ORGANISATION_NOT_FOUND_MESSAGE)
        return organisation

    async def get_profile(self, db: AsyncSession, user: User) -> OrganisationResponse:
        """조직 프로필 조회."""
        return self.to_response(await self.get_own_organisation(db, user))

    async def update_profile(
        self,
        db: AsyncSession,
        user: User,
        data: OrganisationUpdate,
    ) -> OrganisationResponse:
        """조직 프로필을 부분 수정합니다.

        Partially update the organisation profile. Contact fields
        (full_name, phone_number) are written to the owning user.

        Raises:
            NotFoundError: 조직 프로필이 없을 때
            ConflictError: 다른 조직이 같은 이름을 사용 중일 때
        """
        organisation: Organisation = await self.get_own_organisation(db, user)
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)

        new_name: str | None = update_data.get("name")
        if new_name is not None and new_name != organisation.name:
            if await organisation_repository.exists(db, {"name": new_name}):
                raise ConflictError(ORGANISATION_NAME_TAKEN_MESSAGE)

        user_changes: dict[str, Any] = {k: update_data.pop(k) for k in _USER_FIELDS if k in update_data}
        if user_changes.get("full_name", "") is None:
            user_changes.pop("full_name")
        if user_changes:
            for field, value in user_changes.items():
                setattr(user, field, value)
            await user_repository.save(db, user)

        for field, value in update_data.items():
            # 필수 컬럼은 null로 지울 수 없음 — Required columns cannot be cleared
            if value is None and field in ("name", "address", "organisation_purpose"):
                continue
            setattr(organisation, field, value)
        organisation = await organisation_repository.save(db, organisation)
        return self.to_response(organisation)


# 싱글턴 인스턴스 — Singleton instance
organisation_service: OrganisationService = OrganisationService()
