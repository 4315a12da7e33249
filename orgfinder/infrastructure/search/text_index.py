"""Lazily built full-text index over records and their tag names.

One TextIndex lives for the whole process (created in the lifespan and held
on app.state). The first ensure_ready() loads every record from the store and
builds the index in a worker thread; callers arriving while the build runs
await the same build task instead of starting another. The index is not
refreshed when records change; call reset() to force a rebuild on next use.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from orgfinder.domain.enums import IndexState
from orgfinder.domain.exceptions import IndexUnavailableException
from orgfinder.infrastructure.search.inverted_index import InvertedIndex
from orgfinder.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from orgfinder.application.interfaces.repositories import ISearchableRecordSource

logger = logging.getLogger(__name__)


class TextIndex:
    """UNINITIALIZED -> INITIALIZING -> READY state machine around an InvertedIndex.

    Attributes:
        build_count: Number of completed builds (one per process unless reset()).
    """

    def __init__(
        self,
        source: ISearchableRecordSource,
        *,
        fuzzy: float = 0.2,
        prefix: bool = True,
    ) -> None:
        self._source = source
        self._fuzzy = fuzzy
        self._prefix = prefix
        self._state = IndexState.UNINITIALIZED
        self._index: InvertedIndex | None = None
        self._build_task: asyncio.Task[None] | None = None
        self.build_count = 0

    @property
    def state(self) -> IndexState:
        return self._state

    @property
    def document_count(self) -> int:
        return len(self._index) if self._index is not None else 0

    async def ensure_ready(self) -> None:
        """Build the index if needed; wait for an in-flight build otherwise.

        Raises:
            IndexUnavailableException: The build failed. The state goes back to
                UNINITIALIZED so a later call can retry.
        """
        if self._state is IndexState.READY:
            return
        # No await between the check and create_task, so concurrent callers
        # always share one build task.
        if self._build_task is None:
            self._state = IndexState.INITIALIZING
            self._build_task = asyncio.create_task(self._build())
            self._build_task.add_done_callback(self._on_build_done)
        # shield: a cancelled waiter must not cancel the shared build.
        await asyncio.shield(self._build_task)

    @traced("text_index.build")
    async def _build(self) -> None:
        started = time.perf_counter()
        logger.info("Building text index")
        try:
            records = await self._source.load_searchable_records()
            index = await asyncio.to_thread(InvertedIndex.build, records)
        except Exception as e:
            logger.error("Text index build failed: %s", e)
            raise IndexUnavailableException(str(e)) from e

        self._index = index
        self._state = IndexState.READY
        self.build_count += 1
        logger.info(
            "Text index ready with %d records (%.1f ms)",
            len(index),
            (time.perf_counter() - started) * 1000,
        )

    def _on_build_done(self, task: asyncio.Task[None]) -> None:
        # Runs before any waiter resumes, whether the build succeeded, failed
        # or was cancelled (even before it started).
        self._build_task = None
        if self._state is not IndexState.READY:
            self._state = IndexState.UNINITIALIZED
        if task.cancelled():
            logger.warning("Text index build was cancelled")
            return
        # Every waiter may be gone; retrieve the error so asyncio does not
        # report it as never retrieved. It is already logged in _build.
        task.exception()

    def search(self, query: str, limit: int = 100) -> list[str]:
        """Ranked record IDs matching query; [] on blank query or unready index."""
        if self._index is None or not query or not query.strip():
            return []
        return self._index.search(
            query, limit=max(1, limit), fuzzy=self._fuzzy, prefix=self._prefix
        )

    def reset(self) -> None:
        """Drop the built index; the next ensure_ready() rebuilds it."""
        if self._state is IndexState.INITIALIZING:
            return
        self._index = None
        self._state = IndexState.UNINITIALIZED
