"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
Provides functions for creating access/refresh tokens, decoding them,
and reading the session owner from an Authorization header.

JWT Payload Structure:
    {
        "sub": "org@example.com",   # 로그인 이메일 (Login email, the username)
        "uid": "user_uuid",         # 사용자 ID (User identifier)
        "role": "ORGANISATION",     # 역할 (Account role)
        "exp": 1234567890,          # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"|"refresh"  # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from eventforge.config import settings

BEARER_PREFIX: str = "Bearer "


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a JWT access token with the given payload data.
    Token expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Args:
        data: JWT 페이로드 데이터 (JWT payload data, typically {"sub": email, "uid": ..., "role": ...})

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_refresh_token(data: dict[str, Any]) -> str:
    """JWT 리프레시 토큰을 생성합니다.

    Generate a JWT refresh token with the given payload data.
    Token expires after JWT_REFRESH_TOKEN_EXPIRE_DAYS.
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def extract_token_value_from_header(header: str) -> str:
    """Authorization 헤더에서 토큰 값을 추출합니다.

    Strip the "Bearer " prefix from an Authorization header value.
    A bare token is returned unchanged.
    """
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip()
    return header.strip()


def extract_username_from_token(token: str) -> str | None:
    """액세스 토큰에서 사용자명(이메일)을 추출합니다.

    Return the "sub" claim of a valid access token.
    Refresh tokens yield None.

    Raises:
        jwt.InvalidTokenError: 서명 불일치 또는 만료 (Bad signature or expired)
    """
    payload: dict[str, Any] = decode_token(token)
    if payload.get("type") != "access":
        return None
    return payload.get("sub")
