"""비밀번호 해싱, 검증 및 임시 비밀번호 생성 유틸리티 모듈.

Password hashing, verification, and random password generation.
Uses bcrypt directly; passwords are never stored in plain text.
"""

import secrets
import string

import bcrypt

# 임시 비밀번호 문자 집합 — 혼동되기 쉬운 문자 제외 (Ambiguous characters removed)
_PASSWORD_ALPHABET: str = "".join(
    c for c in string.ascii_letters + string.digits if c not in "0O1lI"
)
RANDOM_PASSWORD_LENGTH: int = 12
# bcrypt 입력 한도 — bcrypt rejects inputs longer than 72 bytes
PASSWORD_MAX_BYTES: int = 72


def hash_password(password: str) -> str:
    """평문 비밀번호를 bcrypt 해시로 변환합니다.

    Hash a plain text password using bcrypt with a random salt.

    Args:
        password: 평문 비밀번호 (Plain text password to hash)

    Returns:
        str: bcrypt 해시 문자열 (Bcrypt hash string, ~60 chars)
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """평문 비밀번호와 bcrypt 해시를 비교 검증합니다.

    Verify a plain text password against a bcrypt hash.
    Passwords longer than PASSWORD_MAX_BYTES can never match.

    Returns:
        bool: 일치하면 True, 불일치하면 False (True if password matches hash)
    """
    if len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        return False
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def generate_random_password(length: int = RANDOM_PASSWORD_LENGTH) -> str:
    """비밀번호 재설정용 임시 비밀번호를 생성합니다.

    Generate a random password for the password-reset flow.
    At least one digit and one letter are always present.
    """
    while True:
        password = "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))
        if any(c.isdigit() for c in password) and any(c.isalpha() for c in password):
            return password
