"""Search API: structured facet search, text search, and both combined."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from orgfinder.api.v1.dependencies import (
    get_combined_search_service,
    get_facet_search_service,
)
from orgfinder.application.use_cases.search import (
    CombinedSearchService,
    FacetSearchService,
)
from orgfinder.core.limiter import limit_search
from orgfinder.schemas.search import (
    CombinedSearchRequest,
    IdSearchResponse,
    ResultRowResponse,
    SearchFiltersRequest,
    SearchResponse,
)

router = APIRouter()


@router.post("", response_model=SearchResponse)
@limit_search
async def search(
    request: Request,
    body: SearchFiltersRequest,
    facet_search: Annotated[FacetSearchService, Depends(get_facet_search_service)],
) -> SearchResponse:
    """Records matching every facet filter and threshold, with tag counts.

    With no filters at all, every record is returned.
    """
    result = await facet_search.run_timed(body.to_domain())
    return SearchResponse(
        data=[ResultRowResponse.from_row(r) for r in result.rows],
        total_results=result.total_results,
        execution_time_ms=result.execution_time_ms,
    )


@router.post("/combined", response_model=IdSearchResponse)
@limit_search
async def combined_search(
    request: Request,
    body: CombinedSearchRequest,
    combined: Annotated[CombinedSearchService, Depends(get_combined_search_service)],
) -> IdSearchResponse:
    """Record IDs matching free text, structured filters, or both."""
    search_request = body.to_domain()
    ids = await combined.search(search_request.text_query, search_request)
    return IdSearchResponse(results=ids, total_results=len(ids))


@router.get("/text", response_model=IdSearchResponse)
@limit_search
async def text_search(
    request: Request,
    combined: Annotated[CombinedSearchService, Depends(get_combined_search_service)],
    q: str = Query(..., min_length=1, max_length=500),
    limit: int | None = Query(None, ge=1, le=1000),
) -> IdSearchResponse:
    """Ranked record IDs from the text index only."""
    ids = await combined.text_search(q, limit)
    return IdSearchResponse(results=ids, total_results=len(ids))
