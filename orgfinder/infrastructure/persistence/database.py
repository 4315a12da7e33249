"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

The record store is owned by the ingestion pipeline; this service only reads
from it. Engine and session factory are created lazily on first use so import
does not trigger Settings validation.

Facet resolvers run concurrently and an AsyncSession cannot run concurrent
statements, so repositories take the session factory and open one session
per query.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from orgfinder.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: AsyncEngine | None = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    kwargs: dict[str, Any] = {}
    if settings.db_pool_size is not None:
        kwargs["pool_size"] = settings.db_pool_size
    if settings.db_max_overflow is not None:
        kwargs["max_overflow"] = settings.db_max_overflow
    engine = create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
        **kwargs,
    )
    AsyncSessionLocal = build_session_factory(engine)
    logger.info("Record store engine created (dialect=%s)", engine.dialect.name)


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for read-only use (no autoflush, no expiry on commit)."""
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    _ensure_engine()
    assert engine is not None
    return engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory, creating it on first use."""
    _ensure_engine()
    assert AsyncSessionLocal is not None
    return AsyncSessionLocal


async def dispose_engine() -> None:
    """Dispose the engine (shutdown). Next use recreates it."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
        logger.info("Record store engine disposed")
    engine = None
    AsyncSessionLocal = None
