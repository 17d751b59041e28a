"""
Async engine and request-scoped sessions (SQLAlchemy 2.0).

PostgreSQL (asyncpg) is the production backend; SQLite (aiosqlite) is
supported for development and tests.
"""

from typing import Any, AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from src.config import get_settings


def build_engine(database_url: str, *, echo: bool = False, **engine_kwargs: Any) -> AsyncEngine:
    """
    Create an async engine for `database_url`.

    SQLite connections get foreign keys, WAL and a busy timeout on connect;
    other backends get a pre-pinged connection pool. Extra keyword arguments
    override the defaults (tests pass their own poolclass).
    """
    settings = get_settings()

    if database_url.startswith("sqlite"):
        options: dict[str, Any] = {
            "connect_args": {"check_same_thread": False},
            "poolclass": NullPool,
        }
        options.update(engine_kwargs)
        engine = create_async_engine(database_url, echo=echo, **options)
        in_memory = ":memory:" in database_url

        @event.listens_for(engine.sync_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute(f"PRAGMA busy_timeout={int(settings.sqlite_busy_timeout_ms)}")
            cursor.close()

        return engine

    options = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }
    options.update(engine_kwargs)
    return create_async_engine(database_url, echo=echo, **options)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Sessions never autoflush and keep attributes loaded after commit."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(get_settings().database_url, echo=get_settings().debug)
async_session_maker = build_session_maker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield a request-scoped session.

    The request's work is committed once at the end and rolled back on any
    error, so multi-row operations such as the bootstrap grant either land
    together or not at all.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create any missing tables."""
    from src.kernel.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    await engine.dispose()
