"""사용자 서비스 — 계정 상태, 인증 토큰, 비밀번호 관리 비즈니스 로직.

User Service — Business logic for account state, verification tokens and
passwords. Every operation follows the same shape: look the record up,
check the relevant flag or token, mutate, save, and return a message.
"""

from datetime import timedelta
from uuid import UUID

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.config import settings
from eventforge.models.token import TOKEN_TYPE_EMAIL, TOKEN_TYPE_PASSWORD, VerificationToken
from eventforge.models.user import User
from eventforge.repositories.auth_repository import auth_repository
from eventforge.repositories.user_repository import user_repository
from eventforge.repositories.verification_token_repository import verification_token_repository
from eventforge.schemas.auth import ChangePasswordRequest
from eventforge.schemas.user import UserResponse
from eventforge.utils.exceptions import (
    InvalidEmailConfirmationLinkError,
    InvalidPasswordError,
    NotFoundError,
    UnauthorizedError,
)
from eventforge.utils.jwt import extract_token_value_from_header, extract_username_from_token
from eventforge.utils.password import generate_random_password, hash_password, verify_password
from eventforge.utils.timeutils import is_expired, utc_now

# 사용자 응답 메시지 — User-facing messages
EMAIL_CONFIRMED_MESSAGE: str = "Успешно потвърдихте профилът си , вече можете да се впишете."
PASSWORD_CHANGED_MESSAGE: str = "Успешно променихте паролата си."
OLD_PASSWORD_MISMATCH_MESSAGE: str = "Паролата не съответства на запазената в базата данни."
NEW_PASSWORD_MISMATCH_MESSAGE: str = (
    "Новите пароли не съвпадат. Новата парола трябва да съответства на потвърдената парола."
)
INVALID_TOKEN_MESSAGE: str = "Невалиден или изтекъл токен."
USER_NOT_FOUND_MESSAGE: str = "Потребителят не е намерен."
ACCOUNT_APPROVED_MESSAGE: str = "Профилът е одобрен успешно."
ACCOUNT_LOCKED_MESSAGE: str = "Профилът е заключен успешно."
ACCOUNT_UNLOCKED_MESSAGE: str = "Профилът е отключен успешно."


class UserService:
    """사용자 계정 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user account business logic: session owner lookup,
    email confirmation, password change/reset and admin account flags.
    """

    def to_response(self, user: User) -> UserResponse:
        """사용자 모델을 관리자용 응답 스키마로 변환합니다 (조직 프로필 로드 필요)."""
        return UserResponse(
            id=str(user.id),
            email=user.email,
            full_name=user.full_name,
            phone_number=user.phone_number,
            role=user.role,
            is_enabled=user.is_enabled,
            is_non_locked=user.is_non_locked,
            is_approved_by_admin=user.is_approved_by_admin,
            organisation_name=user.organisation.name if user.organisation else None,
            created_at=user.created_at,
        )

    async def save_user_in_db(self, db: AsyncSession, user: User) -> User:
        """사용자를 저장합니다 (Persist a new or modified user)."""
        return await user_repository.save(db, user)

    async def get_user_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자를 조회합니다. 없으면 None."""
        return await user_repository.get_by_email(db, email)

    async def get_logged_user_by_token(self, db: AsyncSession, token: str) -> User | None:
        """세션 토큰(또는 Authorization 헤더 값)으로 로그인 사용자를 조회합니다.

        Resolve the session owner: strip the "Bearer " prefix, read the
        username (email) from the access token, then look the user up.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            token: 액세스 토큰 또는 "Bearer <token>" 헤더 값

        Returns:
            User | None: 로그인 사용자, 해당 이메일의 사용자가 없으면 None

        Raises:
            UnauthorizedError: 토큰이 유효하지 않거나 만료됨, 또는 액세스 토큰이 아님
        """
        token_value: str = extract_token_value_from_header(token)
        try:
            username: str | None = extract_username_from_token(token_value)
        except jwt.InvalidTokenError:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
        if username is None:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
        return await self.get_user_by_email(db, username)

    async def get_valid_verification_token(
        self,
        db: AsyncSession,
        token: str,
        token_type: str,
    ) -> VerificationToken:
        """유효한 인증 토큰을 조회합니다 (소유 사용자 포함).

        Raises:
            InvalidEmailConfirmationLinkError: 토큰이 없거나, 유형이 다르거나, 만료됨
        """
        verification_token: VerificationToken | None = await verification_token_repository.get_by_token(db, token)
        if verification_token is None or verification_token.type != token_type:
            raise InvalidEmailConfirmationLinkError()
        if is_expired(verification_token.expires_at):
            raise InvalidEmailConfirmationLinkError()
        return verification_token

    async def update_user_is_enabled_field_after_confirmed_email(
        self,
        db: AsyncSession,
        token: str,
    ) -> str:
        """이메일 인증 링크 확인 후 계정을 활성화합니다.

        Enable the account that owns the email token and consume the token.

        Returns:
            str: 인증 완료 메시지 (Confirmation message)

        Raises:
            InvalidEmailConfirmationLinkError: 유효하지 않거나 만료된 링크
        """
        verification_token: VerificationToken = await self.get_valid_verification_token(
            db, token, TOKEN_TYPE_EMAIL
        )
        user: User = verification_token.user
        user.is_enabled = True
        await self.save_user_in_db(db, user)
        await verification_token_repository.delete_token(db, verification_token)
        return EMAIL_CONFIRMED_MESSAGE

    async def save_user_verification_token(
        self,
        db: AsyncSession,
        user: User,
        token: str,
        token_type: str,
    ) -> VerificationToken:
        """사용자 인증 토큰을 저장합니다 — 기존 토큰이 있으면 교체.

        Save the user's verification token. An existing token row is reused
        with a new value, type and expiry; otherwise a new row is created.
        """
        expires_at = utc_now() + timedelta(minutes=settings.VERIFICATION_TOKEN_EXPIRE_MINUTES)
        existing: VerificationToken | None = await verification_token_repository.get_by_user_id(db, user.id)
        if existing is not None:
            existing.token = token
            existing.type = token_type
            existing.expires_at = expires_at
            return await verification_token_repository.save(db, existing)

        return await verification_token_repository.create(
            db,
            {"user_id": user.id, "token": token, "type": token_type, "expires_at": expires_at},
        )

    async def change_account_password(
        self,
        db: AsyncSession,
        token: str,
        data: ChangePasswordRequest,
    ) -> str | None:
        """로그인 사용자의 비밀번호를 변경합니다.

        Change the password of the session owner after re-validating the
        stored password and the new/confirm pair. Refresh tokens are revoked.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            token: 액세스 토큰 또는 Authorization 헤더 값
            data: 비밀번호 변경 요청 (Change password request)

        Returns:
            str | None: 변경 완료 메시지, 사용자가 없으면 None

        Raises:
            InvalidPasswordError: 기존 비밀번호 불일치 또는 새 비밀번호 확인 불일치
        """
        user: User | None = await self.get_logged_user_by_token(db, token)
        if user is None:
            return None

        if not verify_password(data.old_password, user.password_hash):
            raise InvalidPasswordError(OLD_PASSWORD_MISMATCH_MESSAGE)
        if data.new_password != data.confirm_new_password:
            raise InvalidPasswordError(NEW_PASSWORD_MISMATCH_MESSAGE)

        user.password_hash = hash_password(data.new_password)
        await self.save_user_in_db(db, user)
        await auth_repository.delete_user_refresh_tokens(db, user.id)
        return PASSWORD_CHANGED_MESSAGE

    async def create_password_reset_token(
        self,
        db: AsyncSession,
        email: str,
        token: str,
    ) -> User | None:
        """비밀번호 재설정 토큰을 발급합니다.

        Issue a "password" verification token for an enabled account.
        Unknown or unconfirmed emails yield None so callers answer uniformly.
        """
        user: User | None = await self.get_user_by_email(db, email)
        if user is None or not user.is_enabled:
            return None
        await self.save_user_verification_token(db, user, token, TOKEN_TYPE_PASSWORD)
        return user

    async def generate_new_random_password_for_user_via_verification_token(
        self,
        db: AsyncSession,
        verification_token: VerificationToken,
        user: User,
    ) -> str:
        """임시 비밀번호를 생성하여 저장하고 재설정 토큰을 소비합니다.

        Generate a random password, store its hash, delete the reset token
        and revoke refresh tokens.

        Returns:
            str: 평문 임시 비밀번호 (Plain password, mailed to the user)
        """
        new_password: str = generate_random_password()
        user.password_hash = hash_password(new_password)
        await self.save_user_in_db(db, user)
        await verification_token_repository.delete_token(db, verification_token)
        await auth_repository.delete_user_refresh_tokens(db, user.id)
        return new_password

    async def reset_password_by_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> tuple[User, str]:
        """비밀번호 재설정 링크를 확인하고 새 비밀번호를 발급합니다.

        Returns:
            tuple[User, str]: (사용자, 평문 임시 비밀번호)

        Raises:
            InvalidEmailConfirmationLinkError: 유효하지 않거나 만료된 링크
        """
        verification_token: VerificationToken = await self.get_valid_verification_token(
            db, token, TOKEN_TYPE_PASSWORD
        )
        user: User = verification_token.user
        new_password: str = await self.generate_new_random_password_for_user_via_verification_token(
            db, verification_token, user
        )
        return user, new_password

    # --- 관리자 계정 관리 (Admin account management) ---

    async def _get_user_or_404(self, db: AsyncSession, user_id: UUID) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError(USER_NOT_FOUND_MESSAGE)
        return user

    async def set_approve_by_admin_to_true(self, db: AsyncSession, user_id: UUID) -> str:
        """관리자 승인 처리 (Approve an account)."""
        user: User = await self._get_user_or_404(db, user_id)
        user.is_approved_by_admin = True
        await self.save_user_in_db(db, user)
        return ACCOUNT_APPROVED_MESSAGE

    async def lock_account_by_id(self, db: AsyncSession, user_id: UUID) -> str:
        """계정 잠금 — 잠긴 계정의 리프레시 토큰은 모두 폐기합니다."""
        user: User = await self._get_user_or_404(db, user_id)
        user.is_non_locked = False
        await self.save_user_in_db(db, user)
        await auth_repository.delete_user_refresh_tokens(db, user.id)
        return ACCOUNT_LOCKED_MESSAGE

    async def unlock_account_by_id(self, db: AsyncSession, user_id: UUID) -> str:
        """계정 잠금 해제 (Unlock an account)."""
        user: User = await self._get_user_or_404(db, user_id)
        user.is_non_locked = True
        await self.save_user_in_db(db, user)
        return ACCOUNT_UNLOCKED_MESSAGE

    async def list_users(
        self,
        db: AsyncSession,
        filters: dict[str, str | bool | None] | None = None,
    ) -> list[UserResponse]:
        """관리자용 사용자 목록을 조회합니다.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 (role, is_enabled, is_non_locked, is_approved_by_admin)

        Returns:
            list[UserResponse]: 가입일 순 사용자 목록
        """
        users: list[User] = await user_repository.get_filtered(db, filters)
        return [self.to_response(u) for u in users]


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
