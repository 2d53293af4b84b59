"""이메일 서비스 — 회원가입 인증, 비밀번호 재설정 메일 발송.

Email Service — Builds and dispatches account mails.

Services return mail events; routers publish them as FastAPI background
tasks after the transaction commits, so a listener never sees a token
that was rolled back.
"""

import logging
from dataclasses import dataclass
from html import escape

import aiosmtplib

from eventforge.models.user import User
from eventforge.utils.email import send_email

logger = logging.getLogger(__name__)

API_PREFIX: str = "/api/v1"


@dataclass
class RegistrationCompleteEvent:
    """회원가입 완료 이벤트 — 인증 링크 메일 발송용.

    Attributes:
        user: 가입한 사용자 (Registered user)
        email: 수신 이메일 (Recipient email)
        application_url: 인증 링크 기준 URL (Base URL of the running API)
        token: 이메일 인증 토큰 (Email verification token)
    """

    user: User
    email: str
    application_url: str
    token: str


@dataclass
class PasswordResetRequestedEvent:
    """비밀번호 재설정 요청 이벤트 — 재설정 링크 메일 발송용."""

    user: User
    email: str
    application_url: str
    token: str


class EmailService:
    """계정 메일 리스너 모음 (Account mail listeners)."""

    def build_verification_url(self, application_url: str, token: str) -> str:
        return f"{application_url.rstrip('/')}{API_PREFIX}/auth/verify-email?token={token}"

    def build_password_reset_url(self, application_url: str, token: str) -> str:
        return f"{application_url.rstrip('/')}{API_PREFIX}/auth/reset-password?token={token}"

    async def _dispatch(self, to: str, subject: str, html: str, text: str) -> None:
        """메일을 발송하고, SMTP 실패는 로그로 남깁니다.

        Background tasks have no caller to report to, so SMTP failures are
        logged with the traceback.
        """
        try:
            await send_email(to, subject, html, text)
        except (aiosmtplib.SMTPException, OSError):
            logger.exception("Failed to send '%s' mail to %s", subject, to)
            return
        logger.info("Sent '%s' mail to %s", subject, to)

    async def on_registration_complete(self, event: RegistrationCompleteEvent) -> None:
        """인증 링크 메일을 발송합니다 (Send the email confirmation link)."""
        url: str = self.build_verification_url(event.application_url, event.token)
        name: str = escape(event.user.full_name)
        html: str = (
            f"<p>Здравейте, {name},</p>"
            f"<p>Благодарим ви за регистрацията. Моля, потвърдете профила си:</p>"
            f'<p><a href="{url}">Потвърдете профила</a></p>'
            f"<p>Линкът е валиден ограничено време.</p>"
        )
        text: str = f"Здравейте, {event.user.full_name},\nПотвърдете профила си: {url}\n"
        await self._dispatch(event.email, "Потвърждение на регистрация", html, text)

    async def on_password_reset_requested(self, event: PasswordResetRequestedEvent) -> None:
        """비밀번호 재설정 링크 메일을 발송합니다."""
        url: str = self.build_password_reset_url(event.application_url, event.token)
        name: str = escape(event.user.full_name)
        html: str = (
            f"<p>Здравейте, {name},</p>"
            f"<p>Получихме заявка за нова парола. Ако сте били вие, отворете линка:</p>"
            f'<p><a href="{url}">Генерирай нова парола</a></p>'
        )
        text: str = f"Здравейте, {event.user.full_name},\nНова парола: {url}\n"
        await self._dispatch(event.email, "Заявка за нова парола", html, text)

    async def send_new_password(self, email: str, full_name: str, password: str) -> None:
        """새로 생성된 임시 비밀번호를 발송합니다."""
        html: str = (
            f"<p>Здравейте, {escape(full_name)},</p>"
            f"<p>Вашата нова парола е: <b>{escape(password)}</b></p>"
            f"<p>Препоръчваме да я смените след вписване.</p>"
        )
        text: str = f"Здравейте, {full_name},\nВашата нова парола е: {password}\n"
        await self._dispatch(email, "Вашата нова парола", html, text)


# 싱글턴 인스턴스 — Singleton instance
email_service: EmailService = EmailService()
