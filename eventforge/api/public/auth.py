"""인증 라우터 — 조직 회원가입, 이메일 인증, 로그인, 토큰 갱신, 비밀번호 관리.

Auth Router — Organisation registration, email verification, login,
token refresh/logout, current user profile, and password change/reset.

Mail events returned by the services are published as background tasks
after the transaction commits.
"""

from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.api.deps import get_application_url, get_current_user, security
from eventforge.database import get_db
from eventforge.models.user import User
from eventforge.schemas.auth import (
    ChangePasswordRequest,
    EmailRequest,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserMeResponse,
)
from eventforge.schemas.common import MessageResponse
from eventforge.services.auth_service import auth_service
from eventforge.services.email_service import email_service
from eventforge.services.user_service import user_service
from eventforge.utils.exceptions import UnauthorizedError

router: APIRouter = APIRouter()

REGISTERED_MESSAGE: str = "Регистрацията е успешна. Проверете имейла си, за да потвърдите профила."
VERIFICATION_SENT_MESSAGE: str = "Ако профилът съществува и не е потвърден, ще получите нов линк за потвърждение."
RESET_LINK_SENT_MESSAGE: str = "Ако профилът съществува, ще получите имейл с линк за нова парола."
NEW_PASSWORD_SENT_MESSAGE: str = "Новата парола е изпратена на имейла ви."


@router.post("/register", response_model=MessageResponse, status_code=201)
async def register(
    data: RegisterRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    application_url: Annotated[str, Depends(get_application_url)],
) -> MessageResponse:
    """조직 회원가입 — 인증 링크 메일 발송.

    Register an organisation account and send the confirmation link.
    """
    event = await auth_service.register_organisation(db, data, application_url)
    await db.commit()
    background_tasks.add_task(email_service.on_registration_complete, event)
    return MessageResponse(message=REGISTERED_MESSAGE)


@router.get("/verify-email", response_model=MessageResponse)
async def verify_email(
    token: Annotated[str, Query(min_length=1, description="이메일 인증 토큰")],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """이메일 인증 링크 확인 — 계정 활성화."""
    message: str = await user_service.update_user_is_enabled_field_after_confirmed_email(db, token)
    await db.commit()
    return MessageResponse(message=message)


@router.post("/resend-verification", response_model=MessageResponse)
async def resend_verification(
    data: EmailRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    application_url: Annotated[str, Depends(get_application_url)],
) -> MessageResponse:
    """인증 메일 재발송 — 계정 존재 여부와 관계없이 같은 응답."""
    event = await auth_service.resend_verification_email(db, data.email, application_url)
    await db.commit()
    if event is not None:
        background_tasks.add_task(email_service.on_registration_complete, event)
    return MessageResponse(message=VERIFICATION_SENT_MESSAGE)


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """로그인 — 이메일/비밀번호로 토큰 쌍 발급.

    Login endpoint. Requires a confirmed, unlocked and approved account.
    """
    result: TokenResponse = await auth_service.login(db, data)
    await db.commit()
    return result


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급."""
    result: TokenResponse = await auth_service.refresh_tokens(db, data)
    await db.commit()
    return result


@router.post("/logout", status_code=204)
async def logout(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """로그아웃 — 리프레시 토큰 폐기."""
    await auth_service.logout(db, data.refresh_token)
    await db.commit()


@router.get("/me", response_model=UserMeResponse)
async def get_me(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> UserMeResponse:
    """현재 사용자 프로필 조회."""
    return await auth_service.get_me(db, current_user)


@router.post("/forgotten-password", response_model=MessageResponse)
async def forgotten_password(
    data: EmailRequest,
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
    application_url: Annotated[str, Depends(get_application_url)],
) -> MessageResponse:
    """비밀번호 찾기 — 재설정 링크 메일 발송 (계정 존재 여부와 관계없이 같은 응답)."""
    event = await auth_service.request_password_reset(db, data.email, application_url)
    await db.commit()
    if event is not None:
        background_tasks.add_task(email_service.on_password_reset_requested, event)
    return MessageResponse(message=RESET_LINK_SENT_MESSAGE)


@router.get("/reset-password", response_model=MessageResponse)
async def reset_password(
    token: Annotated[str, Query(min_length=1, description="비밀번호 재설정 토큰")],
    background_tasks: BackgroundTasks,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """재설정 링크 확인 — 임시 비밀번호 생성 후 메일 발송."""
    user, new_password = await user_service.reset_password_by_token(db, token)
    await db.commit()
    background_tasks.add_task(email_service.send_new_password, user.email, user.full_name, new_password)
    return MessageResponse(message=NEW_PASSWORD_SENT_MESSAGE)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    _current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> MessageResponse:
    """비밀번호 변경 — 잠기지 않은 세션 사용자만, 기존 비밀번호 재확인 후 변경."""
    message: str | None = await user_service.change_account_password(db, credentials.credentials, data)
    if message is None:
        raise UnauthorizedError("Потребителят не е намерен.")
    await db.commit()
    return MessageResponse(message=message)
