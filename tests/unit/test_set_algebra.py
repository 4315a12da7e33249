"""Set algebra over facet results."""

from orgfinder.application.services import dedupe, intersect, merge_subsets
from orgfinder.domain.filters import UNRESTRICTED


def test_intersect_all_unrestricted() -> None:
    assert intersect([UNRESTRICTED, UNRESTRICTED]) is UNRESTRICTED


def test_intersect_no_sets_is_unrestricted() -> None:
    assert intersect([]) is UNRESTRICTED


def test_intersect_ignores_unrestricted() -> None:
    assert intersect([UNRESTRICTED, ["b", "a"], UNRESTRICTED]) == ["b", "a"]


def test_intersect_keeps_first_order_and_drops_repeats() -> None:
    assert intersect([["c", "a", "c", "b"], ["a", "b", "c", "z"]]) == ["c", "a", "b"]


def test_intersect_with_empty_is_empty_not_unrestricted() -> None:
    result = intersect([UNRESTRICTED, ["a"], []])
    assert result == []
    assert result is not UNRESTRICTED


def test_intersect_disjoint() -> None:
    assert intersect([["a", "b"], ["c"]]) == []


def test_intersect_three_way() -> None:
    assert intersect([["a", "b", "c"], ["b", "c"], ["c", "d"]]) == ["c"]


def test_merge_subsets_keeps_repeats_without_dedupe() -> None:
    assert merge_subsets([["a", "b"], ["b", "c"]], dedupe_ids=False) == ["a", "b", "b", "c"]


def test_merge_subsets_dedupe_keeps_first_occurrence() -> None:
    assert merge_subsets([["b", "a"], ["a", "c"]], dedupe_ids=True) == ["b", "a", "c"]


def test_merge_no_subsets() -> None:
    assert merge_subsets([], dedupe_ids=True) == []


def test_dedupe() -> None:
    assert dedupe(["x", "y", "x"]) == ["x", "y"]
