"""
Database engine and session management.

Owns the process-wide async engine and session factory. Services never
create sessions themselves; they receive an AsyncSession from the caller
(the get_db dependency in routers, or a test fixture).
"""

import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pagebuilder.config import get_settings
from pagebuilder.models.orm import Base

logger = logging.getLogger(__name__)

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_engine() -> AsyncEngine:
    """Get or create the async engine from settings."""
    global _engine
    if _engine is None:
        settings = get_settings()
        engine_kwargs: dict = {"echo": settings.database_echo}
        if settings.uses_connection_pool:
            engine_kwargs["pool_size"] = settings.database_pool_size
            engine_kwargs["max_overflow"] = settings.database_max_overflow
            engine_kwargs["pool_pre_ping"] = True
        _engine = create_async_engine(settings.database_url, **engine_kwargs)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the session factory bound to the shared engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _session_factory


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a session per request.

    Services commit through the transaction helpers; anything left
    uncommitted when the request ends is rolled back.
    """
    async with get_session_factory()() as session:
        try:
            yield session
        finally:
            await session.rollback()


async def init_db(create_tables: bool = False) -> None:
    """
    Initialize the engine and optionally create tables.

    Table creation is meant for development and tests; production schemas
    are managed by the Alembic migrations.
    """
    engine = get_engine()
    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Created database tables")
    logger.info("Database initialized")


async def close_db() -> None:
    """Dispose the engine and forget the session factory."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        logger.info("Database connections closed")
    _engine = None
    _session_factory = None


def reset_db_state() -> None:
    """Forget cached engine/session factory without disposing (tests)."""
    global _engine, _session_factory
    _engine = None
    _session_factory = None
