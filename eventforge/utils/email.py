"""계정 메일 SMTP 전송 유틸리티 (aiosmtplib).

Account mail transport. build_message() assembles the multipart
plain/HTML message; send_email() delivers it through the SMTP relay
configured by the SMTP_* settings. Delivery is skipped when SMTP_USER
is empty (local development and tests).
"""

import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from eventforge.config import settings

logger = logging.getLogger(__name__)


def build_message(to: str, subject: str, html: str, text: str | None = None) -> MIMEMultipart:
    """plain + HTML 대안 본문 메일을 만듭니다 (plain part first when present)."""
    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = f"{settings.SMTP_FROM_NAME} <{settings.SMTP_FROM_EMAIL or settings.SMTP_USER}>"
    message["To"] = to
    if text:
        message.attach(MIMEText(text, "plain", "utf-8"))
    message.attach(MIMEText(html, "html", "utf-8"))
    return message


async def send_email(to: str, subject: str, html: str, text: str | None = None) -> None:
    """메일을 SMTP 릴레이로 전송합니다.

    Raises:
        aiosmtplib.SMTPException: 릴레이가 메일을 거부하거나 인증 실패
        OSError: 릴레이에 연결할 수 없을 때 (Relay unreachable)
    """
    if not settings.SMTP_USER:
        logger.info("SMTP is not configured, skipping mail to %s (%s)", to, subject)
        return

    await aiosmtplib.send(
        build_message(to, subject, html, text),
        hostname=settings.SMTP_HOST,
        port=settings.SMTP_PORT,
        username=settings.SMTP_USER,
        password=settings.SMTP_PASSWORD,
        start_tls=True,
    )
