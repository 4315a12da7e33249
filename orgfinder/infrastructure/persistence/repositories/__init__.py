"""Persistence repositories. Re-exports for dependency injection."""

from orgfinder.infrastructure.persistence.repositories.base import ReadRepository
from orgfinder.infrastructure.persistence.repositories.facet_repo import (
    SIMPLE_FACET_COLUMNS,
    FacetRepository,
)
from orgfinder.infrastructure.persistence.repositories.record_repo import (
    RecordRepository,
)
from orgfinder.infrastructure.persistence.repositories.thresholds import (
    apply_thresholds,
)

__all__ = [
    "FacetRepository",
    "ReadRepository",
    "RecordRepository",
    "SIMPLE_FACET_COLUMNS",
    "apply_thresholds",
]
