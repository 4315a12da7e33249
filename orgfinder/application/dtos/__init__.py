"""Application DTOs (no ORM dependency)."""

from orgfinder.application.dtos.search import (
    ResultRow,
    SearchableRecord,
    StructuredSearchResult,
)

__all__ = [
    "ResultRow",
    "SearchableRecord",
    "StructuredSearchResult",
]
