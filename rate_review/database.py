"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Holds the async SQLAlchemy engine, the session factory, the ORM base class
and the ``get_db`` request dependency.

운영은 PostgreSQL(asyncpg), 로컬 개발은 SQLite(aiosqlite) URL도 허용한다.
(PostgreSQL via asyncpg in production; a SQLite URL works for local runs.)
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from rate_review.config import settings


def engine_options(database_url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션.

    Connection pool sizing and the pooler workaround only apply to
    PostgreSQL; SQLite gets the dialect defaults.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {}
    return {
        # 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인 (Validates connections before use)
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
        # Supavisor(트랜잭션 모드 풀러)에서 prepared statement 비활성화
        # Disable prepared statement caches for transaction-mode pooling
        "connect_args": {"statement_cache_size": 0},
    }


# 비동기 데이터베이스 엔진 — Async database engine
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **engine_options(settings.DATABASE_URL),
)

# 비동기 세션 팩토리 — expire_on_commit=False: 커밋 후에도 속성 접근 가능
# (Attributes stay readable after commit, e.g. when building responses)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스 (Declarative base for all ORM models)."""

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 세션 — 커밋하지 않은 작업은 닫을 때 버려진다.

    FastAPI dependency yielding one session per request. Routers commit
    explicitly; a service that raises part-way leaves nothing behind.
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()
