"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain value objects or application DTOs only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from orgfinder.application.dtos.search import ResultRow, SearchableRecord
    from orgfinder.domain.enums import Facet
    from orgfinder.domain.filters import FacetFilterSpec, IdSet, ThresholdSpec


class IFacetRepository(Protocol):
    """Read-only record store queries used by the filter engine."""

    async def resolve_simple_facet(
        self, facet: Facet, spec: FacetFilterSpec
    ) -> IdSet:
        """Return IDs matching a scalar-column facet, or UNRESTRICTED."""

    async def resolve_tag_facet(
        self, spec: FacetFilterSpec, thresholds: ThresholdSpec
    ) -> IdSet:
        """Return IDs matching the tag facet and thresholds, or UNRESTRICTED."""

    async def fetch_rows(
        self, allowed_ids: IdSet, thresholds: ThresholdSpec
    ) -> list[ResultRow]:
        """Return records (restricted to allowed_ids unless UNRESTRICTED) with tag counts, thresholds applied."""

    async def fetch_all_rows(self) -> list[ResultRow]:
        """Return every record with its tag count (no filters)."""


class ILookupRepository(Protocol):
    """Distinct values for lookup menus and store status."""

    async def distinct_values(self, facet: Facet) -> list[str]:
        """Return sorted distinct non-null values for the facet."""

    async def has_data(self) -> bool:
        """Return True if at least one record exists."""


class ISearchableRecordSource(Protocol):
    """Bulk loader of denormalized records for the text index."""

    async def load_searchable_records(self) -> list[SearchableRecord]:
        """Return every record with the names of its tags."""
