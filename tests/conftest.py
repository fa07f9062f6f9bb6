"""테스트 인프라 — 임시 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Throwaway SQLite DB, session, and httpx client fixtures.
Each test gets its own database file (aiosqlite) with the schema created from
the ORM metadata. Outgoing confirmation mail is captured instead of sent.
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rate_review.database import Base, get_db
from rate_review.main import app
from rate_review.models import *  # noqa: F401,F403 — register all models with metadata
from rate_review.models.account import AdminAccount, OwnerAccount, UserAccount
from rate_review.models.store import Store
from rate_review.utils.jwt import create_access_token
from rate_review.utils.password import hash_password

USER_PASSWORD = "UserPass1!"
OWNER_PASSWORD = "OwnerPass1!"
ADMIN_PASSWORD = "AdminPass1!"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 DB 파일과 스키마."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
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
def outbox(monkeypatch) -> list[dict[str, str]]:
    """발송 메일 캡처 — SMTP 대신 리스트에 쌓습니다."""
    sent: list[dict[str, str]] = []

    async def _fake_send_email(to: str, subject: str, html: str, text: str | None = None) -> None:
        sent.append({"to": to, "subject": subject, "html": html, "text": text or ""})

    monkeypatch.setattr("rate_review.services.registration_service.send_email", _fake_send_email)
    return sent


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _persist(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    await db.refresh(obj)
    return obj


@pytest_asyncio.fixture
async def user_account(db: AsyncSession) -> UserAccount:
    """일반 사용자 계정을 생성합니다."""
    return await _persist(db, UserAccount(
        email="user@example.com",
        name="Regular Test User Account",
        address="1 User Street",
        password_hash=hash_password(USER_PASSWORD),
    ))


@pytest_asyncio.fixture
async def owner_account(db: AsyncSession) -> OwnerAccount:
    """매장 소유자 계정을 생성합니다."""
    return await _persist(db, OwnerAccount(
        email="owner@example.com",
        name="Store Owner Test Account",
        address="2 Owner Avenue",
        password_hash=hash_password(OWNER_PASSWORD),
    ))


@pytest_asyncio.fixture
async def admin_account(db: AsyncSession) -> AdminAccount:
    """관리자 계정을 생성합니다."""
    return await _persist(db, AdminAccount(
        email="admin@example.com",
        name="Platform Admin Test Account",
        address="3 Admin Road",
        password_hash=hash_password(ADMIN_PASSWORD),
    ))


@pytest_asyncio.fixture
async def store(db: AsyncSession, owner_account) -> Store:
    """owner_account 소유의 테스트 매장을 생성합니다."""
    return await _persist(db, Store(
        name="Corner Coffee House Downtown",
        address="10 Market Street",
        email=owner_account.email,
        total_rating_count=0,
        total_rating_sum=0,
    ))


@pytest_asyncio.fixture
async def other_store(db: AsyncSession) -> Store:
    """다른 소유자의 테스트 매장을 생성합니다."""
    return await _persist(db, Store(
        name="Riverside Book Shop And Cafe",
        address="99 River Road",
        email="other-owner@example.com",
        total_rating_count=0,
        total_rating_sum=0,
    ))


def make_token(account, role: str) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(account.id),
        "email": account.email,
        "role": role,
    })


@pytest.fixture
def user_token(user_account) -> str:
    return make_token(user_account, "user")


@pytest.fixture
def owner_token(owner_account) -> str:
    return make_token(owner_account, "owner")


@pytest.fixture
def admin_token(admin_account) -> str:
    return make_token(admin_account, "admin")


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
