"""인증 API 테스트 — 회원가입, 이메일 인증, 로그인, 토큰 갱신, 비밀번호 관리.

Auth API tests — Registration, email verification, login, token refresh,
logout, /me and password change/reset flows.
"""

from datetime import timedelta

from httpx import AsyncClient
from sqlalchemy import select

from eventforge.models.token import TOKEN_TYPE_EMAIL, VerificationToken
from eventforge.models.user import User
from eventforge.services.auth_service import (
    BULLSTAT_TAKEN_MESSAGE,
    EMAIL_TAKEN_MESSAGE,
    INVALID_CREDENTIALS_MESSAGE,
    LOCKED_MESSAGE,
    NOT_APPROVED_MESSAGE,
    NOT_ENABLED_MESSAGE,
    PASSWORDS_DO_NOT_MATCH_MESSAGE,
)
from eventforge.services.user_service import (
    EMAIL_CONFIRMED_MESSAGE,
    NEW_PASSWORD_MISMATCH_MESSAGE,
    OLD_PASSWORD_MISMATCH_MESSAGE,
    PASSWORD_CHANGED_MESSAGE,
)
from eventforge.utils.timeutils import utc_now
from tests.conftest import ADMIN_PASSWORD, ORG_PASSWORD, auth_header, create_organisation_user

AUTH = "/api/v1/auth"


def registration_payload(**overrides) -> dict:
    payload = {
        "email": "new@charity.bg",
        "password": "secret123",
        "confirm_password": "secret123",
        "full_name": "Иван Петров",
        "phone_number": "+359888123456",
        "name": "Нова Надежда",
        "bullstat": "111222333",
        "address": "Пловдив, ул. Главна 5",
        "organisation_purpose": "Подкрепа на възрастни хора",
    }
    payload.update(overrides)
    return payload


def token_from_mail(mail: dict[str, str]) -> str:
    """메일 본문 링크에서 토큰을 추출합니다."""
    return mail["text"].split("token=", 1)[1].split()[0]


def password_from_mail(mail: dict[str, str]) -> str:
    return mail["text"].rsplit(":", 1)[1].strip()


async def login(client: AsyncClient, email: str, password: str):
    return await client.post(f"{AUTH}/login", json={"email": email, "password": password})


# ===== Registration =====

class TestRegister:
    """조직 회원가입 테스트."""

    async def test_register_creates_disabled_unapproved_account(self, client: AsyncClient, db, mailbox):
        res = await client.post(f"{AUTH}/register", json=registration_payload())
        assert res.status_code == 201

        user = (await db.execute(select(User).where(User.email == "new@charity.bg"))).scalar_one()
        assert user.is_enabled is False
        assert user.is_approved_by_admin is False
        assert user.is_non_locked is True
        assert user.organisation.name == "Нова Надежда"

        assert len(mailbox) == 1
        assert mailbox[0]["to"] == "new@charity.bg"
        assert "/api/v1/auth/verify-email?token=" in mailbox[0]["text"]

    async def test_register_email_is_normalised(self, client: AsyncClient, db):
        res = await client.post(f"{AUTH}/register", json=registration_payload(email="New@Charity.BG"))
        assert res.status_code == 201
        user = (await db.execute(select(User).where(User.email == "new@charity.bg"))).scalar_one_or_none()
        assert user is not None

    async def test_register_password_mismatch(self, client: AsyncClient, mailbox):
        res = await client.post(
            f"{AUTH}/register", json=registration_payload(confirm_password="different1")
        )
        assert res.status_code == 400
        assert res.json()["detail"] == PASSWORDS_DO_NOT_MATCH_MESSAGE
        assert mailbox == []

    async def test_register_duplicate_email(self, client: AsyncClient, org_user):
        res = await client.post(f"{AUTH}/register", json=registration_payload(email=org_user.email))
        assert res.status_code == 409
        assert res.json()["detail"] == EMAIL_TAKEN_MESSAGE

    async def test_register_duplicate_bullstat(self, client: AsyncClient, organisation):
        res = await client.post(
            f"{AUTH}/register", json=registration_payload(bullstat=organisation.bullstat)
        )
        assert res.status_code == 409
        assert res.json()["detail"] == BULLSTAT_TAKEN_MESSAGE

    async def test_register_invalid_bullstat(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/register", json=registration_payload(bullstat="12AB"))
        assert res.status_code == 422

    async def test_register_short_password(self, client: AsyncClient):
        res = await client.post(
            f"{AUTH}/register",
            json=registration_payload(password="short", confirm_password="short"),
        )
        assert res.status_code == 422

    async def test_register_password_over_bcrypt_limit(self, client: AsyncClient, mailbox):
        # 40 Cyrillic characters are 80 UTF-8 bytes
        long_password = "ж" * 40
        res = await client.post(
            f"{AUTH}/register",
            json=registration_payload(password=long_password, confirm_password=long_password),
        )
        assert res.status_code == 422
        assert mailbox == []

    async def test_register_cyrillic_password_at_limit(self, client: AsyncClient, db):
        password = "ж" * 36
        res = await client.post(
            f"{AUTH}/register",
            json=registration_payload(password=password, confirm_password=password),
        )
        assert res.status_code == 201


# ===== Email verification =====

class TestVerifyEmail:
    """이메일 인증 링크 테스트."""

    async def test_verify_enables_account_and_consumes_token(self, client: AsyncClient, db, mailbox):
        await client.post(f"{AUTH}/register", json=registration_payload())
        token = token_from_mail(mailbox[0])

        res = await client.get(f"{AUTH}/verify-email", params={"token": token})
        assert res.status_code == 200
        assert res.json()["message"] == EMAIL_CONFIRMED_MESSAGE

        user = (await db.execute(select(User).where(User.email == "new@charity.bg"))).scalar_one()
        assert user.is_enabled is True

        again = await client.get(f"{AUTH}/verify-email", params={"token": token})
        assert again.status_code == 400

    async def test_verified_but_unapproved_cannot_login(self, client: AsyncClient, mailbox):
        await client.post(f"{AUTH}/register", json=registration_payload())
        await client.get(f"{AUTH}/verify-email", params={"token": token_from_mail(mailbox[0])})

        res = await login(client, "new@charity.bg", "secret123")
        assert res.status_code == 403
        assert res.json()["detail"] == NOT_APPROVED_MESSAGE

    async def test_unknown_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/verify-email", params={"token": "no-such-token"})
        assert res.status_code == 400

    async def test_expired_token(self, client: AsyncClient, db):
        user, _ = await create_organisation_user(db, "late@test.com", "Late Org", "555666777", enabled=False)
        db.add(VerificationToken(
            user_id=user.id,
            token="expired-token",
            type=TOKEN_TYPE_EMAIL,
            expires_at=utc_now() - timedelta(minutes=1),
        ))
        await db.flush()

        res = await client.get(f"{AUTH}/verify-email", params={"token": "expired-token"})
        assert res.status_code == 400
        assert user.is_enabled is False

    async def test_resend_replaces_token(self, client: AsyncClient, mailbox):
        await client.post(f"{AUTH}/register", json=registration_payload())
        first = token_from_mail(mailbox[0])

        res = await client.post(f"{AUTH}/resend-verification", json={"email": "new@charity.bg"})
        assert res.status_code == 200
        assert len(mailbox) == 2
        second = token_from_mail(mailbox[1])
        assert second != first

        stale = await client.get(f"{AUTH}/verify-email", params={"token": first})
        assert stale.status_code == 400
        fresh = await client.get(f"{AUTH}/verify-email", params={"token": second})
        assert fresh.status_code == 200

    async def test_resend_for_enabled_account_sends_nothing(self, client: AsyncClient, org_user, mailbox):
        res = await client.post(f"{AUTH}/resend-verification", json={"email": org_user.email})
        assert res.status_code == 200
        assert mailbox == []


# ===== Login =====

class TestLogin:
    """로그인 테스트."""

    async def test_organisation_login_success(self, client: AsyncClient, org_user):
        res = await login(client, org_user.email, ORG_PASSWORD)
        assert res.status_code == 200
        data = res.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["token_type"] == "bearer"

    async def test_admin_login_success(self, client: AsyncClient, admin_user):
        res = await login(client, admin_user.email, ADMIN_PASSWORD)
        assert res.status_code == 200

    async def test_login_is_case_insensitive(self, client: AsyncClient, org_user):
        res = await login(client, "ORG@test.com", ORG_PASSWORD)
        assert res.status_code == 200

    async def test_wrong_password(self, client: AsyncClient, org_user):
        res = await login(client, org_user.email, "wrong-password")
        assert res.status_code == 401
        assert res.json()["detail"] == INVALID_CREDENTIALS_MESSAGE

    async def test_overlong_password(self, client: AsyncClient, org_user):
        res = await login(client, org_user.email, "a" * 100)
        assert res.status_code == 401
        assert res.json()["detail"] == INVALID_CREDENTIALS_MESSAGE

    async def test_unknown_user(self, client: AsyncClient):
        res = await login(client, "ghost@test.com", "whatever1")
        assert res.status_code == 401

    async def test_not_enabled(self, client: AsyncClient, db):
        await create_organisation_user(db, "off@test.com", "Off Org", "222333444", enabled=False)
        res = await login(client, "off@test.com", ORG_PASSWORD)
        assert res.status_code == 403
        assert res.json()["detail"] == NOT_ENABLED_MESSAGE

    async def test_locked(self, client: AsyncClient, db):
        await create_organisation_user(db, "locked@test.com", "Locked Org", "333444555", non_locked=False)
        res = await login(client, "locked@test.com", ORG_PASSWORD)
        assert res.status_code == 403
        assert res.json()["detail"] == LOCKED_MESSAGE

    async def test_not_approved(self, client: AsyncClient, pending_account):
        user, _ = pending_account
        res = await login(client, user.email, ORG_PASSWORD)
        assert res.status_code == 403
        assert res.json()["detail"] == NOT_APPROVED_MESSAGE


# ===== Refresh / Logout / Me =====

class TestTokens:
    """토큰 갱신, 로그아웃, /me 테스트."""

    async def test_refresh_issues_new_pair(self, client: AsyncClient, org_user):
        tokens = (await login(client, org_user.email, ORG_PASSWORD)).json()
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 200
        assert "access_token" in res.json()

    async def test_refresh_with_garbage(self, client: AsyncClient):
        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": "not-a-jwt"})
        assert res.status_code == 401

    async def test_logout_revokes_refresh_token(self, client: AsyncClient, org_user):
        tokens = (await login(client, org_user.email, ORG_PASSWORD)).json()
        res = await client.post(f"{AUTH}/logout", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 204

        res = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert res.status_code == 401

    async def test_me(self, client: AsyncClient, org_token, organisation):
        res = await client.get(f"{AUTH}/me", headers=auth_header(org_token))
        assert res.status_code == 200
        data = res.json()
        assert data["email"] == "org@test.com"
        assert data["role"] == "ORGANISATION"
        assert data["organisation_id"] == str(organisation.id)
        assert data["organisation_name"] == organisation.name

    async def test_me_admin_has_no_organisation(self, client: AsyncClient, admin_token):
        res = await client.get(f"{AUTH}/me", headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["organisation_id"] is None

    async def test_me_without_token(self, client: AsyncClient):
        res = await client.get(f"{AUTH}/me")
        assert res.status_code in (401, 403)

    async def test_me_with_refresh_token_rejected(self, client: AsyncClient, org_user):
        tokens = (await login(client, org_user.email, ORG_PASSWORD)).json()
        res = await client.get(f"{AUTH}/me", headers=auth_header(tokens["refresh_token"]))
        assert res.status_code == 401

    async def test_me_locked_user_rejected(self, client: AsyncClient, org_user, org_token, db):
        org_user.is_non_locked = False
        await db.flush()
        res = await client.get(f"{AUTH}/me", headers=auth_header(org_token))
        assert res.status_code == 401


# ===== Password change =====

class TestChangePassword:
    """비밀번호 변경 테스트."""

    async def test_change_password_success(self, client: AsyncClient, org_user, org_token):
        tokens = (await login(client, org_user.email, ORG_PASSWORD)).json()
        res = await client.post(
            f"{AUTH}/change-password",
            headers=auth_header(org_token),
            json={
                "old_password": ORG_PASSWORD,
                "new_password": "brand-new-1",
                "confirm_new_password": "brand-new-1",
            },
        )
        assert res.status_code == 200
        assert res.json()["message"] == PASSWORD_CHANGED_MESSAGE

        assert (await login(client, org_user.email, ORG_PASSWORD)).status_code == 401
        refresh = await client.post(f"{AUTH}/refresh", json={"refresh_token": tokens["refresh_token"]})
        assert refresh.status_code == 401
        assert (await login(client, org_user.email, "brand-new-1")).status_code == 200

    async def test_wrong_old_password(self, client: AsyncClient, org_token):
        res = await client.post(
            f"{AUTH}/change-password",
            headers=auth_header(org_token),
            json={
                "old_password": "not-my-password",
                "new_password": "brand-new-1",
                "confirm_new_password": "brand-new-1",
            },
        )
        assert res.status_code == 400
        assert res.json()["detail"] == OLD_PASSWORD_MISMATCH_MESSAGE

    async def test_new_password_mismatch(self, client: AsyncClient, org_token):
        res = await client.post(
            f"{AUTH}/change-password",
            headers=auth_header(org_token),
            json={
                "old_password": ORG_PASSWORD,
                "new_password": "brand-new-1",
                "confirm_new_password": "brand-new-2",
            },
        )
        assert res.status_code == 400
        assert res.json()["detail"] == NEW_PASSWORD_MISMATCH_MESSAGE

    async def test_locked_account_cannot_change_password(self, client: AsyncClient, db, org_user, org_token):
        org_user.is_non_locked = False
        await db.flush()
        res = await client.post(
            f"{AUTH}/change-password",
            headers=auth_header(org_token),
            json={
                "old_password": ORG_PASSWORD,
                "new_password": "brand-new-1",
                "confirm_new_password": "brand-new-1",
            },
        )
        assert res.status_code == 401
        org_user.is_non_locked = True
        await db.flush()
        assert (await login(client, org_user.email, ORG_PASSWORD)).status_code == 200

    async def test_new_password_over_bcrypt_limit(self, client: AsyncClient, org_token):
        long_password = "ж" * 40
        res = await client.post(
            f"{AUTH}/change-password",
            headers=auth_header(org_token),
            json={
                "old_password": ORG_PASSWORD,
                "new_password": long_password,
                "confirm_new_password": long_password,
            },
        )
        assert res.status_code == 422


# ===== Password reset =====

class TestPasswordReset:
    """비밀번호 재설정 테스트."""

    async def test_reset_flow(self, client: AsyncClient, org_user, mailbox):
        res = await client.post(f"{AUTH}/forgotten-password", json={"email": org_user.email})
        assert res.status_code == 200
        assert len(mailbox) == 1
        assert "/api/v1/auth/reset-password?token=" in mailbox[0]["text"]
        token = token_from_mail(mailbox[0])

        res = await client.get(f"{AUTH}/reset-password", params={"token": token})
        assert res.status_code == 200
        assert len(mailbox) == 2
        new_password = password_from_mail(mailbox[1])

        assert (await login(client, org_user.email, ORG_PASSWORD)).status_code == 401
        assert (await login(client, org_user.email, new_password)).status_code == 200

        reused = await client.get(f"{AUTH}/reset-password", params={"token": token})
        assert reused.status_code == 400

    async def test_unknown_email_gets_same_answer(self, client: AsyncClient, org_user, mailbox):
        known = await client.post(f"{AUTH}/forgotten-password", json={"email": org_user.email})
        unknown = await client.post(f"{AUTH}/forgotten-password", json={"email": "ghost@test.com"})
        assert unknown.status_code == 200
        assert unknown.json() == known.json()
        assert len(mailbox) == 1

    async def test_email_token_cannot_reset_password(self, client: AsyncClient, mailbox):
        await client.post(f"{AUTH}/register", json=registration_payload())
        email_token = token_from_mail(mailbox[0])

        res = await client.get(f"{AUTH}/reset-password", params={"token": email_token})
        assert res.status_code == 400
