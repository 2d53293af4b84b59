"""인증 토큰 레포지토리 — 이메일 확인/비밀번호 재설정 토큰 쿼리.

Verification Token Repository — Queries for email confirmation and
password reset tokens (one per user).
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventforge.models.token import VerificationToken
from eventforge.repositories.base import BaseRepository


class VerificationTokenRepository(BaseRepository[VerificationToken]):
    """인증 토큰 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(VerificationToken)

    async def get_by_token(
        self,
        db: AsyncSession,
        token: str,
    ) -> VerificationToken | None:
        """토큰 문자열로 조회합니다 (소유 사용자 포함).

        Retrieve a verification token by its value with the owner user loaded.
        """
        query: Select = (
            select(VerificationToken)
            .options(selectinload(VerificationToken.user))
            .where(VerificationToken.token == token)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_user_id(
        self,
        db: AsyncSession,
        user_id: UUID,
    ) -> VerificationToken | None:
        """사용자 ID로 현재 토큰을 조회합니다."""
        query: Select = select(VerificationToken).where(VerificationToken.user_id == user_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def delete_token(
        self,
        db: AsyncSession,
        verification_token: VerificationToken,
    ) -> None:
        """사용된 토큰을 삭제합니다 (Delete a consumed token)."""
        await db.delete(verification_token)
        await db.flush()


verification_token_repository: VerificationTokenRepository = VerificationTokenRepository()
