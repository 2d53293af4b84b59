"""사용자 레포지토리 — 사용자 조회 및 관리자용 필터 쿼리.

User Repository — Lookup and admin filter queries for users.
Extends BaseRepository with User-specific database operations.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from eventforge.models.user import User
from eventforge.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(
        self,
        db: AsyncSession,
        email: str,
    ) -> User | None:
        """이메일로 사용자를 조회합니다.

        Retrieve a user by email (case-insensitive).

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            email: 로그인 이메일 (Login email)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = (
            select(User)
            .options(selectinload(User.organisation))
            .where(User.email == email.strip().lower())
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_filtered(
        self,
        db: AsyncSession,
        filters: dict[str, str | bool | None] | None = None,
    ) -> list[User]:
        """관리자용 사용자 목록을 필터 조건으로 조회합니다.

        Retrieve users for the admin panel with optional filters.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            filters: 필터 딕셔너리 (role, is_enabled, is_non_locked, is_approved_by_admin)

        Returns:
            list[User]: 가입일 순 사용자 목록 (Users ordered by registration date)
        """
        query: Select = select(User).options(selectinload(User.organisation))

        if filters:
            for column_name in ("role", "is_enabled", "is_non_locked", "is_approved_by_admin"):
                value = filters.get(column_name)
                if value is not None:
                    query = query.where(getattr(User, column_name) == value)

        query = query.order_by(User.created_at)
        result = await db.execute(query)
        return list(result.scalars().all())


user_repository: UserRepository = UserRepository()
