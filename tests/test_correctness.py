"""
Correctness tests for every sorting algorithm against the oracle (Python's built-in sorted).

What we check:
- Output exactly matches the oracle (strongest guarantee)
- Nondecreasing order and permutation preservation (diagnostic)
- No input mutation and no aliasing of the input (API contract)
- Idempotence and determinism
- Stability of merge_sort, using ints tagged with their input position
"""

from __future__ import annotations

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from mergetrace.algorithms import builtin_timsort, merge_sort
from mergetrace.validate import (
    assert_no_mutation,
    is_nondecreasing,
    is_permutation,
    is_stable,
    oracle_sort,
)

ALGORITHMS = [merge_sort, builtin_timsort]


class Tagged(int):
    """An int that remembers where it came from; compares as a plain int."""

    def __new__(cls, value: int, tag: int) -> "Tagged":
        obj = super().__new__(cls, value)
        obj.tag = tag
        return obj


def tag_positions(values: List[int]) -> List[Tagged]:
    return [Tagged(v, i) for i, v in enumerate(values)]


# ------------------------- helpers ------------------------- #

def _check_one(algo, a: List[int]) -> None:
    """Common assertion bundle for one input."""
    a_before = list(a)
    out = algo.sort(a)

    assert_no_mutation(a_before, a)
    assert out is not a, "Output must be a new list"

    assert out == oracle_sort(a), "Output must exactly match the oracle"
    assert is_nondecreasing(out), "Output is not nondecreasing"
    assert is_permutation(a, out), "Output is not a permutation of input"

    assert algo.sort(out) == out, "Sorting a sorted output must not change it"
    assert algo.sort(a) == out, "Algorithm must be deterministic"


# ------------------------- unit tests (deterministic) ------------------------- #

@pytest.mark.parametrize("algo", ALGORITHMS, ids=lambda m: m.ALGO_NAME)
@pytest.mark.parametrize(
    "a",
    [
        [],
        [5],
        [-7],
        [2, 1],
        [1, 2, 3, 4],
        [4, 3, 2, 1],
        [7, 7, 7, 7],
        [5, 3, 5, 1, 3],
        [-5, 3, -1, 0],
        [38, 27, 43, 3, 9, 82, 10],
        list(range(33)),
        list(range(33))[::-1],
    ],
)
def test_unit_cases(algo, a: List[int]) -> None:
    _check_one(algo, a)


@pytest.mark.parametrize(
    "a, expected",
    [
        ([], []),
        ([42], [42]),
        ([38, 27, 43, 3, 9, 82, 10], [3, 9, 10, 27, 38, 43, 82]),
        ([5, 3, 5, 1, 3], [1, 3, 3, 5, 5]),
        ([1, 2, 3, 4], [1, 2, 3, 4]),
        ([4, 3, 2, 1], [1, 2, 3, 4]),
        ([-5, 3, -1, 0], [-5, -1, 0, 3]),
    ],
)
def test_merge_sort_known_outputs(a: List[int], expected: List[int]) -> None:
    assert merge_sort.sort(a) == expected


def test_merge_sort_accepts_tuples_and_ranges() -> None:
    assert merge_sort.sort((3, 1, 2)) == [1, 2, 3]
    assert merge_sort.sort(range(5, 0, -1)) == [1, 2, 3, 4, 5]


def test_single_element_result_does_not_alias_input() -> None:
    a = [9]
    out = merge_sort.sort(a)
    out.append(10)
    assert a == [9]


def test_merge_sort_is_stable_on_ties() -> None:
    a = tag_positions([2, 1, 2, 1, 2, 0])
    out = merge_sort.sort(a)
    assert [int(x) for x in out] == [0, 1, 1, 2, 2, 2]
    assert [x.tag for x in out] == [5, 1, 3, 0, 2, 4]


def test_large_input_recursion_is_shallow() -> None:
    a = list(range(50_000, 0, -1))
    assert merge_sort.sort(a) == list(range(1, 50_001))


# ------------------------- property-based tests (randomized) ------------------------- #

small_ints = st.integers(min_value=-10_000, max_value=10_000)


@settings(deadline=None, max_examples=100)
@given(st.lists(small_ints, min_size=0, max_size=400))
def test_property_random_small_range(a: List[int]) -> None:
    _check_one(merge_sort, a)


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=-(2**63), max_value=2**63 - 1), min_size=0, max_size=200))
def test_property_random_full_range(a: List[int]) -> None:
    _check_one(merge_sort, a)


@settings(deadline=None, max_examples=60)
@given(st.lists(st.integers(min_value=0, max_value=15), min_size=0, max_size=300))
def test_property_stable_with_many_duplicates(a: List[int]) -> None:
    tagged = tag_positions(a)
    out = merge_sort.sort(tagged)
    assert is_nondecreasing(out)
    assert is_stable(tagged, out, tag=lambda x: x.tag)
