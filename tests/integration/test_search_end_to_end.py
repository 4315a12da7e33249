"""Search services end to end over the seeded store and a real TextIndex."""

import pytest

from orgfinder.application.use_cases.search import (
    CombinedSearchService,
    FacetSearchService,
)
from orgfinder.domain.enums import CombineStrategy, Facet
from orgfinder.domain.filters import FacetFilterSpec, SearchRequest, ThresholdSpec

pytestmark = pytest.mark.requires_db


def _request(**facets: FacetFilterSpec) -> SearchRequest:
    return SearchRequest(facets={Facet(name): spec for name, spec in facets.items()})


async def test_no_filters_returns_every_record(facet_repo) -> None:
    rows = await FacetSearchService(facet_repo).run(SearchRequest())
    assert len(rows) == 6
    assert {r.id: r.tag_count for r in rows}["acme.io"] == 3


async def test_facets_intersect(facet_repo) -> None:
    """Tags React AND country UK share no record."""
    request = _request(
        tags=FacetFilterSpec(and_values=frozenset({"React"})),
        country=FacetFilterSpec(or_values=frozenset({"UK"})),
    )
    assert await FacetSearchService(facet_repo).run(request) == []


async def test_tags_and_country(facet_repo) -> None:
    request = _request(
        tags=FacetFilterSpec(or_values=frozenset({"Stripe"})),
        country=FacetFilterSpec(or_values=frozenset({"US"})),
    )
    rows = await FacetSearchService(facet_repo).run(request)
    assert [r.id for r in rows] == ["acme.io"]


async def test_individual_dedupe_then_category(facet_repo) -> None:
    request = _request(
        tags=FacetFilterSpec(
            and_values=frozenset({"React", "AWS"}),
            strategy=CombineStrategy.INDIVIDUAL,
            dedupe=True,
        ),
        category=FacetFilterSpec(or_values=frozenset({"Finance"})),
    )
    rows = await FacetSearchService(facet_repo).run(request)
    assert sorted(r.id for r in rows) == ["finlytics.com", "paybridge.co.uk"]


async def test_threshold_only(facet_repo) -> None:
    request = SearchRequest(thresholds=ThresholdSpec(min_total_tags=3))
    rows = await FacetSearchService(facet_repo).run(request)
    assert sorted(r.id for r in rows) == ["acme.io", "finlytics.com"]


async def test_text_and_structured_intersect(facet_repo, text_index) -> None:
    """"fin" hits finlytics.com and paybridge.co.uk (Finance); US keeps finlytics."""
    combined = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    request = _request(country=FacetFilterSpec(or_values=frozenset({"US"})))

    assert sorted(await combined.text_search("fin")) == ["finlytics.com", "paybridge.co.uk"]
    assert await combined.search("fin", request) == ["finlytics.com"]


async def test_text_only_ranks_name_match_first(facet_repo, text_index) -> None:
    combined = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    results = await combined.search("paybridge", SearchRequest())
    assert results[0] == "paybridge.co.uk"


async def test_text_search_finds_tag_names(facet_repo, text_index) -> None:
    combined = CombinedSearchService(FacetSearchService(facet_repo), text_index)
    assert await combined.search("django", SearchRequest()) == ["nullland.org"]


async def test_individual_tags_with_per_category_threshold(facet_repo) -> None:
    """Only row assembly enforces the threshold for an Individual tag facet."""
    request = SearchRequest(
        facets={
            Facet.TAGS: FacetFilterSpec(
                or_values=frozenset({"AWS"}), strategy=CombineStrategy.INDIVIDUAL
            )
        },
        thresholds=ThresholdSpec(min_tags_per_category=2),
    )
    rows = await FacetSearchService(facet_repo).run(request)
    assert [r.id for r in rows] == ["finlytics.com"]
