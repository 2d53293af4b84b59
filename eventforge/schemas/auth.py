"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers organisation registration, login, token issuance/refresh,
password change/reset, and current user info.
"""

from pydantic import BaseModel, Field, field_validator

from eventforge.utils.password import PASSWORD_MAX_BYTES

# 간단한 이메일 형식 검사 — Basic email shape check
EMAIL_PATTERN: str = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PASSWORD_TOO_LONG_MESSAGE: str = f"Паролата не може да бъде по-дълга от {PASSWORD_MAX_BYTES} байта."


def check_password_bytes(value: str) -> str:
    """bcrypt 입력 한도(72 bytes, UTF-8) 초과 비밀번호를 거부합니다."""
    if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(PASSWORD_TOO_LONG_MESSAGE)
    return value


class RegisterRequest(BaseModel):
    """조직 회원가입 요청 스키마.

    Organisation registration request schema.
    Creates an organisation user (not enabled, not approved) and its profile.

    Attributes:
        email: 로그인 이메일 (Login email, unique)
        password: 비밀번호 (Plain text, bcrypt-hashed on server)
        confirm_password: 비밀번호 확인 (Must equal password)
        full_name: 담당자 실명 (Contact person)
        phone_number: 연락처 (Optional phone)
        name: 조직 이름 (Organisation name, unique)
        bullstat: 사업자 등록 번호 (Company registry number, unique)
        address: 주소 (Address)
        organisation_purpose: 설립 목적 (Purpose statement)
    """

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=8, max_length=PASSWORD_MAX_BYTES)
    confirm_password: str
    full_name: str = Field(min_length=1, max_length=255)
    phone_number: str | None = None
    name: str = Field(min_length=1, max_length=255)
    bullstat: str = Field(pattern=r"^\d{9}(\d{4})?$")
    address: str = Field(min_length=1, max_length=255)
    website: str | None = None
    facebook_link: str | None = None
    charity_option: str | None = None
    organisation_purpose: str = Field(min_length=1)

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)


class LoginRequest(BaseModel):
    """로그인 요청 스키마.

    Attributes:
        email: 로그인 이메일 (Login email)
        password: 비밀번호 (Plain text, compared to bcrypt hash)
    """

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after successful login or token refresh.

    Attributes:
        access_token: JWT 액세스 토큰 (Short-lived access token)
        refresh_token: JWT 리프레시 토큰 (Long-lived refresh token)
        token_type: 토큰 유형 (Always "bearer" for Authorization header)
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """토큰 갱신/로그아웃 요청 스키마."""

    refresh_token: str


class EmailRequest(BaseModel):
    """이메일만 받는 요청 스키마 — 인증 메일 재발송, 비밀번호 찾기.

    Request carrying only an email: resend verification, forgotten password.
    """

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)


class ChangePasswordRequest(BaseModel):
    """비밀번호 변경 요청 스키마.

    Attributes:
        old_password: 현재 비밀번호 (Current password, re-validated)
        new_password: 새 비밀번호 (New password)
        confirm_new_password: 새 비밀번호 확인 (Must equal new_password)
    """

    old_password: str
    new_password: str = Field(min_length=8, max_length=PASSWORD_MAX_BYTES)
    confirm_new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password_bytes(cls, v: str) -> str:
        return check_password_bytes(v)


class UserMeResponse(BaseModel):
    """현재 사용자 정보 응답 스키마 (GET /me).

    Attributes:
        id: 사용자 UUID (User unique identifier)
        email: 로그인 이메일 (Login email)
        full_name: 실명 (Full display name)
        role: 역할 (ORGANISATION or ADMIN)
        is_enabled: 이메일 인증 여부 (Email confirmed)
        is_approved_by_admin: 관리자 승인 여부 (Approved)
        organisation_id: 조직 UUID (Organisation id, organisation accounts only)
        organisation_name: 조직 이름 (Organisation name, organisation accounts only)
    """

    id: str
    email: str
    full_name: str
    role: str
    is_enabled: bool
    is_approved_by_admin: bool
    organisation_id: str | None = None
    organisation_name: str | None = None
