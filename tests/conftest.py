"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite database, session, and httpx client
fixtures. The schema is created per test on a StaticPool connection, so
the test session and the application share one database.
Outgoing mail is captured in the `mailbox` fixture instead of being sent.
"""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from eventforge.config import settings
from eventforge.database import Base, get_db
from eventforge.main import app
from eventforge.models import *  # noqa: F401,F403 — register all models with metadata
from eventforge.models.event import Event
from eventforge.models.organisation import Organisation
from eventforge.models.user import ROLE_ADMIN, ROLE_ORGANISATION, User
from eventforge.utils.jwt import create_access_token
from eventforge.utils.password import hash_password

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_PASSWORD = "admin12345"
ORG_PASSWORD = "org12345!"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 새로 만듭니다."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mailbox(monkeypatch) -> list[dict[str, str]]:
    """발송된 메일을 기록합니다 (SMTP 대신 리스트에 저장)."""
    sent: list[dict[str, str]] = []

    async def _fake_send_email(to: str, subject: str, html: str, text: str | None = None) -> None:
        sent.append({"to": to, "subject": subject, "html": html, "text": text or ""})

    monkeypatch.setattr("eventforge.services.email_service.send_email", _fake_send_email)
    return sent


@pytest.fixture
def images_dir(tmp_path, monkeypatch):
    """이미지 저장 폴더를 임시 디렉토리로 교체합니다."""
    monkeypatch.setattr(settings, "IMAGES_DIR", str(tmp_path))
    return tmp_path


# ---------------------------------------------------------------------------
# 헬퍼: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def create_organisation_user(
    db: AsyncSession,
    email: str,
    name: str,
    bullstat: str,
    *,
    enabled: bool = True,
    approved: bool = True,
    non_locked: bool = True,
) -> tuple[User, Organisation]:
    """조직 계정과 조직 프로필을 생성합니다."""
    user = User(
        email=email,
        full_name=f"{name} Owner",
        password_hash=hash_password(ORG_PASSWORD),
        role=ROLE_ORGANISATION,
        is_enabled=enabled,
        is_non_locked=non_locked,
        is_approved_by_admin=approved,
    )
    organisation = Organisation(
        user=user,
        name=name,
        bullstat=bullstat,
        address="София, бул. Витоша 1",
        organisation_purpose="Помощ за деца в нужда",
    )
    db.add(user)
    db.add(organisation)
    await db.flush()
    await db.refresh(user)
    await db.refresh(organisation)
    return user, organisation


async def create_event(
    db: AsyncSession,
    organisation: Organisation,
    name: str,
    starts_at: datetime,
    ends_at: datetime,
    *,
    is_one_time: bool = True,
) -> Event:
    """조직 이벤트를 생성합니다."""
    event = Event(
        organisation_id=organisation.id,
        name=name,
        description=f"{name} description",
        address="София",
        category="charity",
        price=Decimal("0"),
        is_one_time=is_one_time,
        reason_for_recurrence=None if is_one_time else "Всяка събота",
        starts_at=starts_at,
        ends_at=ends_at,
    )
    db.add(event)
    await db.flush()
    await db.refresh(event)
    return event


# ---------------------------------------------------------------------------
# 헬퍼 픽스처
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def admin_user(db: AsyncSession) -> User:
    """관리자 사용자를 생성합니다."""
    user = User(
        email="admin@test.com",
        full_name="Test Admin",
        password_hash=hash_password(ADMIN_PASSWORD),
        role=ROLE_ADMIN,
        is_enabled=True,
        is_non_locked=True,
        is_approved_by_admin=True,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def org_account(db: AsyncSession) -> tuple[User, Organisation]:
    """인증/승인이 끝난 조직 계정을 생성합니다."""
    return await create_organisation_user(db, "org@test.com", "Test Org", "123456789")


@pytest_asyncio.fixture
async def org_user(org_account) -> User:
    return org_account[0]


@pytest_asyncio.fixture
async def organisation(org_account) -> Organisation:
    return org_account[1]


@pytest_asyncio.fixture
async def pending_account(db: AsyncSession) -> tuple[User, Organisation]:
    """이메일 인증은 끝났지만 관리자 승인 전인 조직 계정."""
    return await create_organisation_user(
        db, "pending@test.com", "Pending Org", "987654321", approved=False
    )


@pytest_asyncio.fixture
async def events(db: AsyncSession, organisation: Organisation) -> dict[str, Event]:
    """종료/진행 중/예정 이벤트를 생성합니다 (일회성 3개 + 반복 2개)."""
    now = datetime.now(timezone.utc)
    return {
        "expired": await create_event(
            db, organisation, "Expired Bazaar", now - timedelta(days=10), now - timedelta(days=9)
        ),
        "active": await create_event(
            db, organisation, "Active Concert", now - timedelta(hours=2), now + timedelta(hours=2)
        ),
        "upcoming": await create_event(
            db, organisation, "Upcoming Marathon", now + timedelta(days=5), now + timedelta(days=6)
        ),
        "recurring_active": await create_event(
            db, organisation, "Weekly Cleanup", now - timedelta(days=1), now + timedelta(days=30),
            is_one_time=False,
        ),
        "recurring_expired": await create_event(
            db, organisation, "Old Workshop", now - timedelta(days=60), now - timedelta(days=30),
            is_one_time=False,
        ),
    }


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": user.email,
        "uid": str(user.id),
        "role": user.role,
    })


@pytest.fixture
def admin_token(admin_user) -> str:
    return make_token(admin_user)


@pytest.fixture
def org_token(org_user) -> str:
    return make_token(org_user)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
