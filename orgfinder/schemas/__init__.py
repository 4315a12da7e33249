"""Pydantic request/response schemas for the API."""

from orgfinder.schemas.health import (
    HealthResponse,
    IndexStatusResponse,
    StoreStatusResponse,
)
from orgfinder.schemas.lookup import LookupOption
from orgfinder.schemas.search import (
    CombinedSearchRequest,
    FacetFilterRequest,
    IdSearchResponse,
    NumberFilterRequest,
    ResultRowResponse,
    SearchFiltersRequest,
    SearchResponse,
)

__all__ = [
    "CombinedSearchRequest",
    "FacetFilterRequest",
    "HealthResponse",
    "IdSearchResponse",
    "IndexStatusResponse",
    "LookupOption",
    "NumberFilterRequest",
    "ResultRowResponse",
    "SearchFiltersRequest",
    "SearchResponse",
    "StoreStatusResponse",
]
