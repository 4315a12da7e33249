"""Application services: set algebra over facet results."""

from orgfinder.application.services.set_algebra import dedupe, intersect, merge_subsets

__all__ = [
    "dedupe",
    "intersect",
    "merge_subsets",
]
