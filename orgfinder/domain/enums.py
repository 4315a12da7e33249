"""Domain enumerations for orgfinder.

Enums represent fixed sets of domain values (facets, strategies, index states).
"""

from enum import Enum


class Facet(str, Enum):
    """Independent filterable dimension of a record."""

    TAGS = "tags"
    COUNTRY = "country"
    CATEGORY = "category"
    NAME = "name"
    DOMAIN = "domain"

    @classmethod
    def values(cls) -> list[str]:
        """Return all facet names as strings."""
        return [facet.value for facet in cls]


class CombineStrategy(str, Enum):
    """How a facet's values are combined.

    TOGETHER evaluates one compound condition per record; INDIVIDUAL runs one
    sub-query per value and merges (unions) the results.
    """

    TOGETHER = "together"
    INDIVIDUAL = "individual"


class IndexState(str, Enum):
    """Text index lifecycle."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
