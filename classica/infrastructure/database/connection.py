"""Database connection and session management."""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from classica.config import Settings, get_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine(settings: Settings | None = None) -> AsyncEngine:
    """Get or create the async database engine."""
    global _engine

    if _engine is None:
        if settings is None:
            settings = get_settings()

        _engine = create_async_engine(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            echo=settings.debug,
        )

    return _engine


def get_session_factory(settings: Settings | None = None) -> async_sessionmaker[AsyncSession]:
    """Get or create the async session factory."""
    global _session_factory

    if _session_factory is None:
        engine = get_engine(settings)
        _session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    return _session_factory


async def init_db(settings: Settings | None = None) -> None:
    """Initialize database connection (call on startup).

    Creates missing tables when ``db_create_tables`` is set. Existing tables
    are left untouched.
    """
    settings = settings or get_settings()
    engine = get_engine(settings)
    get_session_factory(settings)

    if settings.db_create_tables:
        from classica.infrastructure.database.models import Base

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections (call on shutdown)."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


async def ping_db() -> bool:
    """Run a trivial query to check connectivity."""
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))
    return True


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    """FastAPI dependency for database sessions.

    Commits when the request succeeds and rolls back on error. Work that must
    survive a later failure in the same request has to be committed
    explicitly before that failure can happen.
    """
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
