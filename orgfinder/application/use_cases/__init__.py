"""Application use cases: one entry point per workflow."""

from orgfinder.application.use_cases.search import (
    CombinedSearchService,
    FacetSearchService,
)

__all__ = [
    "CombinedSearchService",
    "FacetSearchService",
]
