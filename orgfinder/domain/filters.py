"""Filter value objects: facet specs, thresholds, and the search request.

Immutable, built once per request from the validated transport payload.
The core never re-validates shape, only applies semantics.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Union

from orgfinder.domain.enums import CombineStrategy, Facet


class Unrestricted(Enum):
    """Sentinel for "this facet imposes no constraint".

    Distinct from an empty ID list, which means "nothing matches".
    """

    UNRESTRICTED = "unrestricted"

    def __repr__(self) -> str:
        return "UNRESTRICTED"


UNRESTRICTED = Unrestricted.UNRESTRICTED

# Ordered record IDs (possibly with repeats when dedupe is off) or no constraint.
IdSet = Union[list[str], Literal[Unrestricted.UNRESTRICTED]]


@dataclass(frozen=True)
class FacetFilterSpec:
    """Constraint on one facet.

    and_values / or_values / none_values hold the AND, OR and NONE lists.
    Overlap between none and and/or is allowed and not checked.
    """

    and_values: frozenset[str] = frozenset()
    or_values: frozenset[str] = frozenset()
    none_values: frozenset[str] = frozenset()
    strategy: CombineStrategy = CombineStrategy.TOGETHER
    dedupe: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.and_values or self.or_values or self.none_values)

    @property
    def included_values(self) -> list[str]:
        """and ∪ or, sorted so sub-query order is stable."""
        return sorted(self.and_values | self.or_values)


@dataclass(frozen=True)
class ThresholdSpec:
    """Numeric minimums on aggregated tag counts. Zero means no constraint."""

    min_total_tags: int = 0
    min_tags_per_category: int = 0

    @property
    def is_active(self) -> bool:
        return self.min_total_tags > 0 or self.min_tags_per_category > 0


EMPTY_FACET = FacetFilterSpec()


@dataclass(frozen=True)
class SearchRequest:
    """One FacetFilterSpec per facet, thresholds, and optional free text.

    Facets missing from ``facets`` are treated as fully empty.
    """

    facets: dict[Facet, FacetFilterSpec] = field(default_factory=dict)
    thresholds: ThresholdSpec = ThresholdSpec()
    text_query: str | None = None

    def facet(self, facet: Facet) -> FacetFilterSpec:
        return self.facets.get(facet, EMPTY_FACET)

    @property
    def has_structured_filters(self) -> bool:
        """True when any facet is non-empty or any threshold is active."""
        if self.thresholds.is_active:
            return True
        return any(not self.facet(f).is_empty for f in Facet)

    @property
    def has_text_query(self) -> bool:
        return bool(self.text_query and self.text_query.strip())
