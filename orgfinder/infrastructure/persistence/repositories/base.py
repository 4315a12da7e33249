"""Base read-only repository: one session per query, store errors mapped."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from orgfinder.domain.exceptions import StoreUnavailableException

logger = logging.getLogger(__name__)


class ReadRepository:
    """Base for repositories that only read from the record store.

    Holds a session factory rather than a session so independent queries can
    run concurrently. Any SQLAlchemyError inside _read() surfaces as
    StoreUnavailableException.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _read(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Open a session for one read operation; map driver errors."""
        try:
            async with self.session_factory() as session:
                yield session
        except SQLAlchemyError as e:
            logger.error("Record store read failed during %s: %s", operation, e)
            raise StoreUnavailableException(operation, str(e)) from e

    @staticmethod
    async def _ids(session: AsyncSession, stmt: Select[Any]) -> list[str]:
        """Execute a single-column SELECT and return its values in row order."""
        result = await session.execute(stmt)
        return list(result.scalars().all())
