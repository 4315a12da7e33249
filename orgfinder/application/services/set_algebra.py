"""Set algebra over facet results.

A facet result is either an ordered list of record IDs or UNRESTRICTED.
UNRESTRICTED never narrows anything; an empty list means "nothing matches".
"""

from collections.abc import Iterable, Sequence

from orgfinder.domain.filters import UNRESTRICTED, IdSet


def intersect(sets: Sequence[IdSet]) -> IdSet:
    """Intersect facet results left to right.

    UNRESTRICTED entries are dropped; if none remain the result is
    UNRESTRICTED. Otherwise the result keeps the first set's order, without
    repeats, restricted to IDs present in every other set.

    Examples:
        >>> intersect([UNRESTRICTED, ["1", "2", "3"]])
        ['1', '2', '3']
        >>> intersect([["1", "2"], ["2", "3"]])
        ['2']
        >>> intersect([UNRESTRICTED])
        UNRESTRICTED
    """
    restricted = [s for s in sets if s is not UNRESTRICTED]
    if not restricted:
        return UNRESTRICTED

    first, *rest = restricted
    result = dedupe(first)
    for other in rest:
        if not result:
            break
        members = set(other)
        result = [record_id for record_id in result if record_id in members]
    return result


def merge_subsets(subsets: Iterable[Sequence[str]], dedupe_ids: bool) -> list[str]:
    """Concatenate per-value subsets (a union); drop repeats when dedupe_ids."""
    merged = [record_id for subset in subsets for record_id in subset]
    return dedupe(merged) if dedupe_ids else merged


def dedupe(ids: Iterable[str]) -> list[str]:
    """Remove repeated IDs, keeping the order of first occurrence."""
    return list(dict.fromkeys(ids))
