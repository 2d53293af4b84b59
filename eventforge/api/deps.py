"""FastAPI 의존성 주입 모듈 — 인증 및 역할 검사.

FastAPI dependency injection module — Authentication and authorization.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출 (HTTPBearer extracts the token)
    3. user_service.get_logged_user_by_token()이 토큰의 "sub"(이메일)로 사용자를 조회
       (The session owner is looked up by the email in the "sub" claim)
    4. 사용자가 없거나 잠긴 계정이면 401
       (Missing or locked users are rejected with 401)

Authorization Flow (require_role):
    역할이 일치하지 않으면 403 Forbidden
    (Returns 403 when the user's role differs from the required role)
"""

from typing import Annotated, Awaitable, Callable

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from eventforge.database import get_db
from eventforge.models.user import ROLE_ADMIN, ROLE_ORGANISATION, User
from eventforge.services.user_service import user_service
from eventforge.utils.exceptions import ForbiddenError, UnauthorizedError

# HTTP Bearer 토큰 추출기 — Authorization 헤더에서 JWT 토큰 추출
security: HTTPBearer = HTTPBearer()


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Return the session owner for the bearer token.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 만료됨, 사용자 없음, 잠긴 계정
    """
    user: User | None = await user_service.get_logged_user_by_token(db, credentials.credentials)
    if user is None or not user.is_non_locked:
        raise UnauthorizedError("Потребителят не е намерен или е заключен.")
    return user


def require_role(role: str) -> Callable[..., Awaitable[User]]:
    """역할 기반 권한 검사 의존성 팩토리.

    Dependency factory enforcing an exact account role.
    """
    async def _check(
        current_user: Annotated[User, Depends(get_current_user)],
    ) -> User:
        if current_user.role != role:
            raise ForbiddenError("Нямате права за този ресурс.")
        return current_user
    return _check


# 편의 의존성 — Pre-configured role dependencies
require_admin = require_role(ROLE_ADMIN)
require_organisation = require_role(ROLE_ORGANISATION)


def get_application_url(request: Request) -> str:
    """요청 base URL에서 메일 링크용 애플리케이션 URL을 만듭니다 (No trailing slash)."""
    return str(request.base_url).rstrip("/")
