"""FacetSearchService and CombinedSearchService unit tests with mocked collaborators."""

import asyncio
import threading
from unittest.mock import AsyncMock, MagicMock

import pytest

from orgfinder.application.dtos.search import ResultRow
from orgfinder.application.use_cases.search import (
    CombinedSearchService,
    FacetSearchService,
)
from orgfinder.domain.enums import Facet
from orgfinder.domain.exceptions import (
    IndexUnavailableException,
    StoreUnavailableException,
)
from orgfinder.domain.filters import (
    UNRESTRICTED,
    FacetFilterSpec,
    SearchRequest,
    ThresholdSpec,
)


def _row(record_id: str, tag_count: int = 0) -> ResultRow:
    return ResultRow(
        id=record_id, name=None, category=None, country=None, city=None, tag_count=tag_count
    )


US_ONLY = SearchRequest(
    facets={Facet.COUNTRY: FacetFilterSpec(or_values=frozenset({"US"}))}
)


@pytest.fixture
def facet_repo():
    """Repo where every facet is unrestricted unless a test says otherwise."""
    repo = AsyncMock()
    repo.resolve_tag_facet = AsyncMock(return_value=UNRESTRICTED)
    repo.resolve_simple_facet = AsyncMock(return_value=UNRESTRICTED)
    repo.fetch_rows = AsyncMock(return_value=[_row("a"), _row("b")])
    repo.fetch_all_rows = AsyncMock(return_value=[_row("a"), _row("b"), _row("c")])
    return repo


@pytest.fixture
def text_index():
    index = MagicMock()
    index.ensure_ready = AsyncMock()
    index.search = MagicMock(return_value=["b", "z"])
    return index


async def test_no_filters_skips_resolvers(facet_repo) -> None:
    rows = await FacetSearchService(facet_repo).run(SearchRequest())
    assert [r.id for r in rows] == ["a", "b", "c"]
    facet_repo.resolve_tag_facet.assert_not_called()
    facet_repo.resolve_simple_facet.assert_not_called()
    facet_repo.fetch_rows.assert_not_called()


async def test_all_facets_resolved_then_intersected(facet_repo) -> None:
    async def simple(facet, spec):
        return ["a", "b", "c"] if facet is Facet.COUNTRY else UNRESTRICTED

    facet_repo.resolve_simple_facet.side_effect = simple
    facet_repo.resolve_tag_facet.return_value = ["c", "b"]
    thresholds = ThresholdSpec(min_total_tags=1)
    request = SearchRequest(facets=US_ONLY.facets, thresholds=thresholds)

    await FacetSearchService(facet_repo).run(request)

    resolved = {call.args[0] for call in facet_repo.resolve_simple_facet.call_args_list}
    assert resolved == {Facet.COUNTRY, Facet.CATEGORY, Facet.NAME, Facet.DOMAIN}
    facet_repo.resolve_tag_facet.assert_awaited_once()
    facet_repo.fetch_rows.assert_awaited_once_with(["c", "b"], thresholds)


async def test_empty_intersection_skips_row_query(facet_repo) -> None:
    facet_repo.resolve_simple_facet.return_value = []
    assert await FacetSearchService(facet_repo).run(US_ONLY) == []
    facet_repo.fetch_rows.assert_not_called()


async def test_unrestricted_intersection_fetches_unrestricted(facet_repo) -> None:
    """Thresholds alone: every resolver unrestricted, thresholds applied at assembly."""
    request = SearchRequest(thresholds=ThresholdSpec(min_total_tags=2))
    await FacetSearchService(facet_repo).run(request)
    facet_repo.fetch_rows.assert_awaited_once_with(UNRESTRICTED, request.thresholds)


async def test_resolver_failure_cancels_siblings(facet_repo) -> None:
    cancelled = asyncio.Event()

    async def slow_tags(spec, thresholds):
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    async def failing_simple(facet, spec):
        raise StoreUnavailableException("resolve_simple_facet", "db down")

    facet_repo.resolve_tag_facet.side_effect = slow_tags
    facet_repo.resolve_simple_facet.side_effect = failing_simple

    with pytest.raises(StoreUnavailableException):
        await FacetSearchService(facet_repo).run(US_ONLY)
    assert cancelled.is_set()
    facet_repo.fetch_rows.assert_not_called()


async def test_run_timed_reports_total(facet_repo) -> None:
    result = await FacetSearchService(facet_repo).run_timed(SearchRequest())
    assert result.total_results == 3
    assert result.execution_time_ms >= 0


async def test_combined_neither_touches_nothing(facet_repo, text_index) -> None:
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.search(None, SearchRequest()) == []
    assert await service.search("   ", SearchRequest()) == []
    text_index.ensure_ready.assert_not_called()
    facet_repo.fetch_all_rows.assert_not_called()


async def test_combined_text_only(facet_repo, text_index) -> None:
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index, text_limit=7)
    assert await service.search("fin", SearchRequest()) == ["b", "z"]
    text_index.ensure_ready.assert_awaited_once()
    text_index.search.assert_called_once_with("fin", 7)
    facet_repo.fetch_rows.assert_not_called()


async def test_text_search_ranks_in_a_worker_thread(facet_repo, text_index) -> None:
    search_threads: list[threading.Thread] = []

    def search(query: str, limit: int) -> list[str]:
        search_threads.append(threading.current_thread())
        return ["b"]

    text_index.search.side_effect = search
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.text_search("fin") == ["b"]
    assert search_threads[0] is not threading.main_thread()


async def test_combined_structured_only(facet_repo, text_index) -> None:
    facet_repo.resolve_simple_facet.return_value = ["a", "b"]
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.search(None, US_ONLY) == ["a", "b"]
    text_index.ensure_ready.assert_not_called()


async def test_combined_both_intersects_in_structured_order(facet_repo, text_index) -> None:
    facet_repo.fetch_rows.return_value = [_row("c"), _row("b"), _row("a")]
    text_index.search.return_value = ["a", "b", "z"]
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.search("fin", US_ONLY) == ["b", "a"]


async def test_text_only_degrades_when_index_unavailable(facet_repo, text_index) -> None:
    text_index.ensure_ready.side_effect = IndexUnavailableException("boom")
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.search("fin", SearchRequest()) == []
    text_index.search.assert_not_called()


async def test_both_with_index_unavailable_is_empty(facet_repo, text_index) -> None:
    text_index.ensure_ready.side_effect = IndexUnavailableException("boom")
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await service.search("fin", US_ONLY) == []


async def test_store_failure_propagates_from_combined(facet_repo, text_index) -> None:
    facet_repo.resolve_simple_facet.side_effect = StoreUnavailableException("x")
    service = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    with pytest.raises(StoreUnavailableException):
        await service.search("fin", US_ONLY)
