"""Search use cases: structured facet search and combined text + facet search."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, cast

from orgfinder.application.dtos.search import ResultRow, StructuredSearchResult
from orgfinder.application.services.set_algebra import intersect
from orgfinder.domain.enums import Facet
from orgfinder.domain.exceptions import IndexUnavailableException
from orgfinder.domain.filters import SearchRequest
from orgfinder.shared.telemetry.tracing import add_span_attributes, traced
from orgfinder.shared.utils.concurrency import gather_fail_fast

if TYPE_CHECKING:
    from orgfinder.application.interfaces.repositories import IFacetRepository
    from orgfinder.application.interfaces.services import ITextIndex

logger = logging.getLogger(__name__)

_SIMPLE_FACETS = (Facet.COUNTRY, Facet.CATEGORY, Facet.NAME, Facet.DOMAIN)


class FacetSearchService:
    """Resolves every facet, intersects the results, and assembles rows."""

    def __init__(self, facet_repo: "IFacetRepository") -> None:
        self.facet_repo = facet_repo

    @traced("search.structured")
    async def run(self, request: SearchRequest) -> list[ResultRow]:
        """Rows matching every facet and threshold of request.

        With no facet and no threshold active, returns every record with its
        tag count without resolving anything. Facet resolvers run
        concurrently; if one fails the others are cancelled and the error
        propagates. An empty intersection returns [] without the final query.
        """
        if not request.has_structured_filters:
            return await self.facet_repo.fetch_all_rows()

        facet_sets = await gather_fail_fast(
            [
                self.facet_repo.resolve_tag_facet(
                    request.facet(Facet.TAGS), request.thresholds
                ),
                *(
                    self.facet_repo.resolve_simple_facet(facet, request.facet(facet))
                    for facet in _SIMPLE_FACETS
                ),
            ]
        )
        allowed = intersect(facet_sets)
        if not allowed:
            logger.debug("Facet intersection is empty; skipping row query")
            return []
        return await self.facet_repo.fetch_rows(allowed, request.thresholds)

    async def run_timed(self, request: SearchRequest) -> StructuredSearchResult:
        """run() plus elapsed milliseconds, for the HTTP response."""
        started = time.perf_counter()
        rows = await self.run(request)
        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info("Structured search returned %d rows in %d ms", len(rows), elapsed_ms)
        return StructuredSearchResult(rows=rows, execution_time_ms=elapsed_ms)


class CombinedSearchService:
    """Merges free-text index hits with structured facet results."""

    def __init__(
        self,
        facet_search: FacetSearchService,
        text_index: "ITextIndex",
        text_limit: int = 100,
    ) -> None:
        self.facet_search = facet_search
        self.text_index = text_index
        self.text_limit = text_limit

    async def text_search(self, query: str, limit: int | None = None) -> list[str]:
        """Text index hits; [] when the index cannot be built."""
        try:
            await self.text_index.ensure_ready()
        except IndexUnavailableException as e:
            logger.warning("Text search degraded to no results: %s", e.message)
            return []
        # Ranking is CPU-bound; keep it off the event loop.
        return await asyncio.to_thread(
            self.text_index.search, query, limit or self.text_limit
        )

    async def _structured_ids(self, request: SearchRequest) -> list[str]:
        rows = await self.facet_search.run(request)
        return [row.id for row in rows]

    @traced("search.combined")
    async def search(self, text_query: str | None, request: SearchRequest) -> list[str]:
        """Record IDs for a text query, a structured request, or both.

        - text only: index hits, ranked.
        - structured only: IDs of the structured rows.
        - both: structured IDs that are also text hits.
        - neither: [] without touching the store or the index.
        """
        has_text = bool(text_query and text_query.strip())
        has_structured = request.has_structured_filters
        add_span_attributes(has_text=has_text, has_structured=has_structured)

        if has_text and not has_structured:
            results = await self.text_search(text_query or "")
            logger.info("Text-only search found %d results", len(results))
            return results

        if has_structured and not has_text:
            results = await self._structured_ids(request)
            logger.info("Structured-only search found %d results", len(results))
            return results

        if has_text and has_structured:
            structured_ids, text_ids = await gather_fail_fast(
                [self._structured_ids(request), self.text_search(text_query or "")]
            )
            # Two concrete lists never intersect to UNRESTRICTED.
            combined = cast(list[str], intersect([structured_ids, text_ids]))
            logger.info(
                "Combined search: text=%d, structured=%d, intersection=%d",
                len(text_ids),
                len(structured_ids),
                len(combined),
            )
            return combined

        logger.info("No search criteria provided")
        return []
