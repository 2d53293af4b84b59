"""초기 데이터 시드 스크립트 — 관리자 계정 생성.

Seed script — Creates the initial administrator account.
Run this script once to bootstrap the database.

Usage:
    python -m eventforge.seed [email] [password]

Creates:
    - 1개 관리자 계정 (1 ADMIN user, enabled and approved)
      기본값: admin@eventforge.local / admin12345
"""

import asyncio
import logging
import sys

from sqlalchemy import select

from eventforge.database import Base, async_session, engine
from eventforge.logging_config import setup_logging
from eventforge.models import User
from eventforge.models.user import ROLE_ADMIN
from eventforge.utils.password import hash_password

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL: str = "admin@eventforge.local"
DEFAULT_ADMIN_PASSWORD: str = "admin12345"


async def seed(email: str = DEFAULT_ADMIN_EMAIL, password: str = DEFAULT_ADMIN_PASSWORD) -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Creates tables if they don't exist, then inserts the administrator.

    Idempotent: 관리자 계정이 이미 있으면 건너뜁니다 (Skips if an admin exists).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        result = await db.execute(select(User).where(User.role == ROLE_ADMIN).limit(1))
        if result.scalar_one_or_none() is not None:
            logger.info("Administrator already exists. Skipping.")
            return

        admin: User = User(
            email=email.strip().lower(),
            full_name="System Admin",
            password_hash=hash_password(password),
            role=ROLE_ADMIN,
            is_enabled=True,
            is_non_locked=True,
            is_approved_by_admin=True,
        )
        db.add(admin)
        await db.commit()
        logger.info("Seeded administrator %s", admin.email)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed(*sys.argv[1:3]))
