"""Domain layer: filter value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from orgfinder.domain.enums import CombineStrategy, Facet, IndexState
from orgfinder.domain.exceptions import (
    IndexUnavailableException,
    OrgFinderException,
    StoreUnavailableException,
)
from orgfinder.domain.filters import (
    EMPTY_FACET,
    UNRESTRICTED,
    FacetFilterSpec,
    IdSet,
    SearchRequest,
    ThresholdSpec,
    Unrestricted,
)

__all__ = [
    "CombineStrategy",
    "Facet",
    "IndexState",
    "OrgFinderException",
    "StoreUnavailableException",
    "IndexUnavailableException",
    "EMPTY_FACET",
    "UNRESTRICTED",
    "FacetFilterSpec",
    "IdSet",
    "SearchRequest",
    "ThresholdSpec",
    "Unrestricted",
]
