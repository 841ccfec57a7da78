"""
Property checks for sort outputs.

Public API (stable):
    is_nondecreasing(xs) -> bool
    first_descent_index(xs) -> int | None
    is_permutation(a, b) -> bool
    multiset_diff(a, b) -> dict[int, int]
    assert_no_mutation(before, after) -> None
    is_stable(before, after, tag) -> bool

Stability cannot be seen on bare ints, because equal values are
indistinguishable. `is_stable` therefore takes a `tag` callable that pulls an
origin label off each element (e.g. an int subclass carrying its input
position) and checks that, for every value, the labels come out in the same
order they went in.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Callable, Dict, List, Sequence

__all__ = [
    "is_nondecreasing",
    "first_descent_index",
    "is_permutation",
    "multiset_diff",
    "assert_no_mutation",
    "is_stable",
]


def first_descent_index(xs: Sequence[int]) -> int | None:
    """Return the first i with xs[i] > xs[i+1], or None if there is none."""
    for i in range(len(xs) - 1):
        if xs[i] > xs[i + 1]:
            return i
    return None


def is_nondecreasing(xs: Sequence[int]) -> bool:
    return first_descent_index(xs) is None


def multiset_diff(a: Sequence[int], b: Sequence[int]) -> Dict[int, int]:
    """
    Map value -> (count in a) - (count in b), omitting zero entries.

    An empty result means `a` and `b` hold the same multiset.
    """
    diff = Counter(a)
    diff.subtract(Counter(b))
    return {k: v for k, v in diff.items() if v != 0}


def is_permutation(a: Sequence[int], b: Sequence[int]) -> bool:
    return len(a) == len(b) and not multiset_diff(a, b)


def assert_no_mutation(before: Sequence[int], after: Sequence[int]) -> None:
    """
    Raise AssertionError if `after` differs from the snapshot `before`.

    The message names the first differing index, or the length change.
    """
    if len(before) != len(after):
        raise AssertionError(f"Input mutated: length {len(before)} -> {len(after)}")
    for i, (x, y) in enumerate(zip(before, after)):
        if x != y:
            raise AssertionError(f"Input mutated at index {i}: {x} -> {y}")


def is_stable(before: Sequence[Any], after: Sequence[Any], tag: Callable[[Any], Any]) -> bool:
    """True iff equal values appear in `after` with their `before` tag order."""
    def tags_by_value(xs: Sequence[Any]) -> Dict[int, List[Any]]:
        groups: Dict[int, List[Any]] = defaultdict(list)
        for x in xs:
            groups[int(x)].append(tag(x))
        return groups

    return tags_by_value(before) == tags_by_value(after)
