"""인증 서비스 — 로그인, 조직 회원가입, 토큰 갱신 비즈니스 로직.

Auth Service — Business logic for login, organisation registration,
and token refresh. Handles the JWT token lifecycle and the account
state checks (enabled, non-locked, approved) performed at login.
"""

import uuid
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.config import settings
from eventforge.models.organisation import Organisation
from eventforge.models.token import TOKEN_TYPE_EMAIL, RefreshToken
from eventforge.models.user import ROLE_ADMIN, ROLE_ORGANISATION, User
from eventforge.repositories.auth_repository import auth_repository
from eventforge.repositories.organisation_repository import organisation_repository
from eventforge.repositories.user_repository import user_repository
from eventforge.schemas.auth import (
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserMeResponse,
)
from eventforge.services.email_service import PasswordResetRequestedEvent, RegistrationCompleteEvent
from eventforge.services.user_service import user_service
from eventforge.utils.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    UnauthorizedError,
)
from eventforge.utils.jwt import create_access_token, create_refresh_token, decode_token
from eventforge.utils.password import hash_password, verify_password
from eventforge.utils.timeutils import is_expired

INVALID_CREDENTIALS_MESSAGE: str = "Невалиден имейл или парола."
NOT_ENABLED_MESSAGE: str = "Профилът не е потвърден. Моля, проверете имейла си."
LOCKED_MESSAGE: str = "Профилът е заключен."
NOT_APPROVED_MESSAGE: str = "Профилът все още не е одобрен от администратор."
EMAIL_TAKEN_MESSAGE: str = "Потребител с този имейл вече съществува."
ORGANISATION_NAME_TAKEN_MESSAGE: str = "Организация с това име вече съществува."
BULLSTAT_TAKEN_MESSAGE: str = "Организация с този булстат вече съществува."
PASSWORDS_DO_NOT_MATCH_MESSAGE: str = "Паролите не съвпадат."
INVALID_REFRESH_TOKEN_MESSAGE: str = "Невалиден токен за опресняване."


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    Manages registration, login, token refresh, logout and the
    verification/reset mail triggers.
    """

    def _build_jwt_payload(self, user: User) -> dict[str, str]:
        """JWT 토큰 페이로드를 생성합니다.

        Build the JWT token payload. The login email is the subject.
        """
        return {
            "sub": user.email,
            "uid": str(user.id),
            "role": user.role,
        }

    async def _generate_tokens(
        self,
        db: AsyncSession,
        user: User,
    ) -> TokenResponse:
        """액세스 토큰과 리프레시 토큰을 생성합니다.

        Generate access and refresh token pair for a user.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user: 사용자 모델 (User model instance)

        Returns:
            TokenResponse: 토큰 응답 (Token response with access and refresh tokens)
        """
        payload: dict[str, str] = self._build_jwt_payload(user)
        access_token: str = create_access_token(payload)
        refresh_token: str = create_refresh_token(payload)

        # 기존 리프레시 토큰 정리 — Clean up old refresh tokens to prevent accumulation
        await auth_repository.delete_user_refresh_tokens(db, user.id)

        # 리프레시 토큰을 DB에 저장 — Persist refresh token to database
        expires_at: datetime = datetime.now(timezone.utc) + timedelta(
            days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS
        )
        await auth_repository.create_refresh_token(
            db, user_id=user.id, token=refresh_token, expires_at=expires_at
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
        )

    def _check_account_state(self, user: User) -> None:
        """로그인 가능한 계정 상태인지 확인합니다.

        Raises:
            ForbiddenError: 이메일 미인증, 잠금, 관리자 미승인 계정
        """
        if not user.is_enabled:
            raise ForbiddenError(NOT_ENABLED_MESSAGE)
        if not user.is_non_locked:
            raise ForbiddenError(LOCKED_MESSAGE)
        # 관리자 계정은 승인 절차 없음 — Administrators need no approval
        if user.role != ROLE_ADMIN and not user.is_approved_by_admin:
            raise ForbiddenError(NOT_APPROVED_MESSAGE)

    async def register_organisation(
        self,
        db: AsyncSession,
        data: RegisterRequest,
        application_url: str,
    ) -> RegistrationCompleteEvent:
        """조직 회원가입을 처리합니다.

        Register an organisation account. The user starts disabled and
        unapproved; an email verification token is issued and returned in
        a RegistrationCompleteEvent for mail dispatch after commit.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 회원가입 요청 데이터 (Registration request data)
            application_url: 인증 링크 기준 URL (Base URL for the verification link)

        Returns:
            RegistrationCompleteEvent: 인증 메일 발송 이벤트

        Raises:
            BadRequestError: 비밀번호 확인 불일치 (Password confirmation mismatch)
            ConflictError: 이메일, 조직 이름 또는 BULSTAT 중복 (Duplicate account data)
        """
        if data.password != data.confirm_password:
            raise BadRequestError(PASSWORDS_DO_NOT_MATCH_MESSAGE)

        email: str = data.email.strip().lower()
        if await user_repository.get_by_email(db, email) is not None:
            raise ConflictError(EMAIL_TAKEN_MESSAGE)
        if await organisation_repository.exists(db, {"name": data.name}):
            raise ConflictError(ORGANISATION_NAME_TAKEN_MESSAGE)
        if await organisation_repository.exists(db, {"bullstat": data.bullstat}):
            raise ConflictError(BULLSTAT_TAKEN_MESSAGE)

        # 사용자 생성 — Create user (disabled, unapproved, unlocked)
        user: User = User(
            email=email,
            full_name=data.full_name,
            phone_number=data.phone_number,
            password_hash=hash_password(data.password),
            role=ROLE_ORGANISATION,
            is_enabled=False,
            is_non_locked=True,
            is_approved_by_admin=False,
        )
        user = await user_service.save_user_in_db(db, user)

        # 조직 프로필 생성 — Create the organisation profile through the relationship
        organisation: Organisation = Organisation(
            user=user,
            name=data.name,
            bullstat=data.bullstat,
            address=data.address,
            website=data.website,
            facebook_link=data.facebook_link,
            charity_option=data.charity_option,
            organisation_purpose=data.organisation_purpose,
        )
        await organisation_repository.save(db, organisation)

        token: str = str(uuid.uuid4())
        await user_service.save_user_verification_token(db, user, token, TOKEN_TYPE_EMAIL)
        return RegistrationCompleteEvent(
            user=user,
            email=user.email,
            application_url=application_url,
            token=token,
        )

    async def resend_verification_email(
        self,
        db: AsyncSession,
        email: str,
        application_url: str,
    ) -> RegistrationCompleteEvent | None:
        """인증 메일을 재발송합니다 — 기존 토큰은 새 토큰으로 교체.

        Re-issue the email token of an unconfirmed account.
        Unknown or already confirmed emails yield None.
        """
        user: User | None = await user_service.get_user_by_email(db, email)
        if user is None or user.is_enabled:
            return None

        token: str = str(uuid.uuid4())
        await user_service.save_user_verification_token(db, user, token, TOKEN_TYPE_EMAIL)
        return RegistrationCompleteEvent(
            user=user,
            email=user.email,
            application_url=application_url,
            token=token,
        )

    async def request_password_reset(
        self,
        db: AsyncSession,
        email: str,
        application_url: str,
    ) -> PasswordResetRequestedEvent | None:
        """비밀번호 재설정 링크 메일 이벤트를 생성합니다.

        Unknown or unconfirmed emails yield None.
        """
        token: str = str(uuid.uuid4())
        user: User | None = await user_service.create_password_reset_token(db, email, token)
        if user is None:
            return None
        return PasswordResetRequestedEvent(
            user=user,
            email=user.email,
            application_url=application_url,
            token=token,
        )

    async def login(
        self,
        db: AsyncSession,
        data: LoginRequest,
    ) -> TokenResponse:
        """로그인을 처리합니다.

        Process login with email and password.

        Returns:
            TokenResponse: 토큰 응답 (Token response)

        Raises:
            UnauthorizedError: 잘못된 인증 정보일 때 (Invalid credentials)
            ForbiddenError: 미인증, 잠금, 미승인 계정 (Account not usable yet)
        """
        user: User | None = await user_repository.get_by_email(db, data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS_MESSAGE)

        self._check_account_state(user)
        return await self._generate_tokens(db, user)

    async def refresh_tokens(
        self,
        db: AsyncSession,
        data: RefreshRequest,
    ) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Issue a new token pair using a refresh token.

        Raises:
            UnauthorizedError: 유효하지 않거나 만료된 리프레시 토큰일 때
                               (Invalid or expired refresh token)
            ForbiddenError: 그 사이 잠기거나 비활성화된 계정 (Account locked meanwhile)
        """
        # DB에서 리프레시 토큰 확인 — Verify refresh token in database
        db_token: RefreshToken | None = await auth_repository.get_refresh_token(db, data.refresh_token)
        if db_token is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN_MESSAGE)

        # 만료 확인 — Check expiration
        if is_expired(db_token.expires_at):
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN_MESSAGE)

        # JWT 디코딩으로 사용자 정보 추출 — Extract user info from JWT
        try:
            payload: dict = decode_token(data.refresh_token)
        except jwt.InvalidTokenError:
            await auth_repository.delete_refresh_token(db, data.refresh_token)
            raise UnauthorizedError(INVALID_REFRESH_TOKEN_MESSAGE)

        user_id: str | None = payload.get("uid")
        if user_id is None or payload.get("type") != "refresh":
            raise UnauthorizedError(INVALID_REFRESH_TOKEN_MESSAGE)

        result = await db.execute(select(User).where(User.id == UUID(user_id)))
        user: User | None = result.scalar_one_or_none()
        if user is None:
            raise UnauthorizedError(INVALID_REFRESH_TOKEN_MESSAGE)
        self._check_account_state(user)

        # 기존 리프레시 토큰 삭제 후 새 토큰 발급 — Delete old token and issue new pair
        await auth_repository.delete_refresh_token(db, data.refresh_token)
        return await self._generate_tokens(db, user)

    async def logout(
        self,
        db: AsyncSession,
        refresh_token: str,
    ) -> None:
        """로그아웃 처리 — 리프레시 토큰을 삭제합니다."""
        await auth_repository.delete_refresh_token(db, refresh_token)

    async def get_me(
        self,
        db: AsyncSession,
        user: User,
    ) -> UserMeResponse:
        """현재 로그인한 사용자 프로필을 반환합니다.

        Return the profile of the currently authenticated user.
        """
        organisation: Organisation | None = await organisation_repository.get_by_user_id(db, user.id)
        return UserMeResponse(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            role=user.role,
            is_enabled=user.is_enabled,
            is_approved_by_admin=user.is_approved_by_admin,
            organisation_id=str(organisation.id) if organisation else None,
            organisation_name=organisation.name if organisation else None,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
