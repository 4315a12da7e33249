"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from orgfinder.infrastructure.
"""

from orgfinder.application.interfaces.repositories import (
    IFacetRepository,
    ILookupRepository,
    ISearchableRecordSource,
)
from orgfinder.application.interfaces.services import ITextIndex

__all__ = [
    "IFacetRepository",
    "ILookupRepository",
    "ISearchableRecordSource",
    "ITextIndex",
]
