"""사용자 서비스 및 유틸리티 단위 테스트.

Unit tests for the user service token helpers, JWT/password utilities and
the account mail builders.
"""

from datetime import datetime, timedelta, timezone

import aiosmtplib
import pytest
from fastapi import HTTPException

from eventforge.models.token import TOKEN_TYPE_EMAIL, TOKEN_TYPE_PASSWORD
from eventforge.schemas.auth import ChangePasswordRequest
from eventforge.services import email_service as email_module
from eventforge.services.email_service import RegistrationCompleteEvent, email_service
from eventforge.services.user_service import user_service
from eventforge.utils.email import build_message
from eventforge.utils.jwt import (
    create_access_token,
    create_refresh_token,
    extract_token_value_from_header,
    extract_username_from_token,
)
from eventforge.utils.password import generate_random_password, hash_password, verify_password
from eventforge.utils.timeutils import as_utc, is_expired
from tests.conftest import make_token


class TestTokenHelpers:
    """JWT 헬퍼 테스트."""

    def test_extract_token_value_from_header(self):
        assert extract_token_value_from_header("Bearer abc.def") == "abc.def"
        assert extract_token_value_from_header("abc.def") == "abc.def"

    def test_username_from_access_token(self):
        token = create_access_token({"sub": "org@test.com"})
        assert extract_username_from_token(token) == "org@test.com"

    def test_refresh_token_has_no_username(self):
        token = create_refresh_token({"sub": "org@test.com"})
        assert extract_username_from_token(token) is None


class TestPasswords:
    """비밀번호 유틸리티 테스트."""

    def test_hash_and_verify(self):
        hashed = hash_password("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_verify_rejects_input_over_72_bytes(self):
        hashed = hash_password("a" * 72)
        assert verify_password("a" * 72, hashed)
        assert not verify_password("a" * 73, hashed)
        assert not verify_password("ж" * 40, hashed)

    def test_random_password_shape(self):
        password = generate_random_password()
        assert len(password) == 12
        assert any(c.isdigit() for c in password)
        assert any(c.isalpha() for c in password)
        assert generate_random_password() != password


class TestTimeutils:
    def test_naive_is_treated_as_utc(self):
        naive = datetime(2026, 1, 1, 12, 0)
        assert as_utc(naive) == datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_is_expired(self):
        now = datetime.now(timezone.utc)
        assert is_expired(now - timedelta(seconds=1))
        assert not is_expired(now + timedelta(minutes=1))


class TestLoggedUser:
    """세션 토큰으로 사용자 조회 테스트."""

    async def test_bearer_header_value_resolves_user(self, db, org_user):
        user = await user_service.get_logged_user_by_token(db, f"Bearer {make_token(org_user)}")
        assert user is org_user

    async def test_unknown_subject_returns_none(self, db):
        token = create_access_token({"sub": "ghost@test.com"})
        assert await user_service.get_logged_user_by_token(db, token) is None

    async def test_invalid_token_raises(self, db):
        with pytest.raises(HTTPException) as exc_info:
            await user_service.get_logged_user_by_token(db, "garbage")
        assert exc_info.value.status_code == 401

    async def test_change_password_for_missing_user_returns_none(self, db):
        token = create_access_token({"sub": "ghost.com"})
        data = ChangePasswordRequest(
            old_password="whatever1", new_password="brand-new-1", confirm_new_password="brand-new-1"
        )
        assert await user_service.change_account_password(db, token, data) is None


class TestVerificationTokens:
    """인증 토큰 저장/교체 테스트."""

    async def test_token_is_replaced_not_duplicated(self, db, org_user):
        first = await user_service.save_user_verification_token(db, org_user, "first", TOKEN_TYPE_EMAIL)
        second = await user_service.save_user_verification_token(db, org_user, "second", TOKEN_TYPE_PASSWORD)
        assert first.id == second.id
        assert second.token == "second"
        assert second.type == TOKEN_TYPE_PASSWORD

    async def test_wrong_type_is_rejected(self, db, org_user):
        await user_service.save_user_verification_token(db, org_user, "mail-token", TOKEN_TYPE_EMAIL)
        with pytest.raises(HTTPException) as exc_info:
            await user_service.get_valid_verification_token(db, "mail-token", TOKEN_TYPE_PASSWORD)
        assert exc_info.value.status_code == 400

    async def test_reset_token_requires_enabled_account(self, db, pending_account):
        user, _ = pending_account
        user.is_enabled = False
        assert await user_service.create_password_reset_token(db, user.email, "tok") is None


class TestMailListeners:
    """계정 메일 리스너 테스트."""

    def test_verification_url(self):
        url = email_service.build_verification_url("http://localhost:8000/", "abc")
        assert url == "http://localhost:8000/api/v1/auth/verify-email?token=abc"

    def test_password_reset_url(self):
        url = email_service.build_password_reset_url("http://localhost:8000", "abc")
        assert url == "http://localhost:8000/api/v1/auth/reset-password?token=abc"

    def test_build_message_has_plain_and_html_parts(self):
        message = build_message("org@test.com", "Тема", "<p>Здравейте</p>", "Здравейте")
        assert message["To"] == "org@test.com"
        parts = [part.get_content_type() for part in message.get_payload()]
        assert parts == ["text/plain", "text/html"]

    async def test_smtp_failure_is_logged(self, org_user, monkeypatch, caplog):
        async def _failing_send_email(*args, **kwargs):
            raise aiosmtplib.SMTPException("relay down")

        monkeypatch.setattr(email_module, "send_email", _failing_send_email)
        event = RegistrationCompleteEvent(
            user=org_user, email=org_user.email, application_url="http://test", token="t"
        )
        await email_service.on_registration_complete(event)
        assert "Failed to send" in caplog.text
