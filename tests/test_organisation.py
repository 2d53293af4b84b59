"""조직 API 테스트 — 공개 조직 조회 및 조직 프로필 관리.

Organisation API tests — Public organisation listing and the logged-in
organisation's profile read/update.
"""

import uuid

from httpx import AsyncClient

from eventforge.services.organisation_service import ORGANISATION_NAME_TAKEN_MESSAGE
from tests.conftest import auth_header, create_organisation_user

PUBLIC = "/api/v1/organisations"
PROFILE = "/api/v1/organisation/profile"


class TestPublicOrganisations:
    """공개 조직 조회 테스트."""

    async def test_list_only_legal_organisations(self, client: AsyncClient, db, organisation, pending_account):
        await create_organisation_user(db, "locked@test.com", "Locked Org", "333444555", non_locked=False)
        res = await client.get(f"{PUBLIC}/")
        assert res.status_code == 200
        assert [o["name"] for o in res.json()] == ["Test Org"]

    async def test_detail(self, client: AsyncClient, organisation):
        res = await client.get(f"{PUBLIC}/{organisation.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["bullstat"] == "123456789"
        assert data["organisation_purpose"] == "Помощ за деца в нужда"

    async def test_detail_of_unapproved_organisation(self, client: AsyncClient, pending_account):
        _, pending_org = pending_account
        res = await client.get(f"{PUBLIC}/{pending_org.id}")
        assert res.status_code == 404

    async def test_detail_not_found(self, client: AsyncClient):
        res = await client.get(f"{PUBLIC}/{uuid.uuid4()}")
        assert res.status_code == 404


class TestProfile:
    """조직 프로필 조회/수정 테스트."""

    async def test_get_profile(self, client: AsyncClient, org_token, organisation):
        res = await client.get(PROFILE, headers=auth_header(org_token))
        assert res.status_code == 200
        assert res.json()["id"] == str(organisation.id)

    async def test_update_profile(self, client: AsyncClient, org_token, org_user):
        res = await client.put(
            PROFILE,
            headers=auth_header(org_token),
            json={
                "website": "https://testorg.bg",
                "charity_option": "Доброволчество",
                "phone_number": "+359899000111",
            },
        )
        assert res.status_code == 200
        data = res.json()
        assert data["website"] == "https://testorg.bg"
        assert data["charity_option"] == "Доброволчество"
        assert data["name"] == "Test Org"
        assert org_user.phone_number == "+359899000111"

    async def test_required_fields_are_not_cleared(self, client: AsyncClient, org_token):
        res = await client.put(PROFILE, headers=auth_header(org_token), json={"address": None})
        assert res.status_code == 200
        assert res.json()["address"] == "София, бул. Витоша 1"

    async def test_rename_to_taken_name(self, client: AsyncClient, org_token, pending_account):
        res = await client.put(PROFILE, headers=auth_header(org_token), json={"name": "Pending Org"})
        assert res.status_code == 409
        assert res.json()["detail"] == ORGANISATION_NAME_TAKEN_MESSAGE

    async def test_admin_has_no_profile_access(self, client: AsyncClient, admin_token):
        res = await client.get(PROFILE, headers=auth_header(admin_token))
        assert res.status_code == 403
