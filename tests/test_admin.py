"""관리자 API 테스트 — 사용자 목록, 승인, 잠금/해제.

Admin API tests — User listing with filters, approval, lock and unlock.
"""

import uuid

from httpx import AsyncClient

from eventforge.services.auth_service import LOCKED_MESSAGE
from eventforge.services.user_service import (
    ACCOUNT_APPROVED_MESSAGE,
    ACCOUNT_LOCKED_MESSAGE,
    ACCOUNT_UNLOCKED_MESSAGE,
)
from tests.conftest import ORG_PASSWORD, auth_header

USERS = "/api/v1/admin/users"
AUTH = "/api/v1/auth"


class TestListUsers:
    """사용자 목록 테스트."""

    async def test_list_all(self, client: AsyncClient, admin_token, org_user, pending_account):
        res = await client.get(f"{USERS}/", headers=auth_header(admin_token))
        assert res.status_code == 200
        emails = {u["email"] for u in res.json()}
        assert emails == {"admin@test.com", "org@test.com", "pending@test.com"}

    async def test_filter_unapproved(self, client: AsyncClient, admin_token, org_user, pending_account):
        res = await client.get(
            f"{USERS}/", params={"is_approved_by_admin": "false"}, headers=auth_header(admin_token)
        )
        data = res.json()
        assert [u["email"] for u in data] == ["pending@test.com"]
        assert data[0]["organisation_name"] == "Pending Org"

    async def test_filter_by_role(self, client: AsyncClient, admin_token, org_user):
        res = await client.get(f"{USERS}/", params={"role": "ADMIN"}, headers=auth_header(admin_token))
        assert [u["email"] for u in res.json()] == ["admin@test.com"]

    async def test_organisation_cannot_list_users(self, client: AsyncClient, org_token):
        res = await client.get(f"{USERS}/", headers=auth_header(org_token))
        assert res.status_code == 403


class TestAccountState:
    """계정 승인/잠금/해제 테스트."""

    async def test_approve_allows_login(self, client: AsyncClient, admin_token, pending_account):
        user, _ = pending_account
        assert (await client.post(f"{AUTH}/login", json={"email": user.email, "password": ORG_PASSWORD})).status_code == 403

        res = await client.patch(f"{USERS}/{user.id}/approve", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["message"] == ACCOUNT_APPROVED_MESSAGE
        assert user.is_approved_by_admin is True

        res = await client.post(f"{AUTH}/login", json={"email": user.email, "password": ORG_PASSWORD})
        assert res.status_code == 200

    async def test_lock_and_unlock(self, client: AsyncClient, admin_token, org_user):
        tokens = (await client.post(
            f"{AUTH}/login", json={"email": org_user.email, "password": ORG_PASSWORD}
        )).json()

        res = await client.patch(f"{USERS}/{org_user.id}/lock", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["message"] == ACCOUNT_LOCKED_MESSAGE

        login = await client.post(f"{AUTH}/login", json={"email": org_user.email, "password": ORG_PASSWORD})
        assert login.status_code == 403
        assert login.json()["detail"] == LOCKED_MESSAGE
        refresh = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refresh.status_code == 401

        res = await client.patch(f"{USERS}/{org_user.id}/unlock", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["message"] == ACCOUNT_UNLOCKED_MESSAGE

        login = await client.post(f"{AUTH}/login", json={"email": org_user.email, "password": ORG_PASSWORD})
        assert login.status_code == 200

    async def test_unknown_user(self, client: AsyncClient, admin_token):
        res = await client.patch(f"{USERS}/{uuid.uuid4()}/lock", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_organisation_cannot_approve(self, client: AsyncClient, org_token, pending_account):
        user, _ = pending_account
        res = await client.patch(f"{USERS}/{user.id}/approve", headers=auth_header(org_token))
        assert res.status_code == 403
