"""
Tests for the two-pointer merge in isolation.
"""

from __future__ import annotations

from typing import List

import pytest
from hypothesis import given, settings, strategies as st

from mergetrace import merge
from mergetrace.trace import CountingTracer
from mergetrace.validate import is_permutation


@pytest.mark.parametrize(
    "left, right, expected",
    [
        ([1, 3, 5], [2, 4, 6], [1, 2, 3, 4, 5, 6]),
        ([], [], []),
        ([], [1, 2], [1, 2]),
        ([1, 2], [], [1, 2]),
        ([1, 2, 3], [4, 5], [1, 2, 3, 4, 5]),
        ([4, 5], [1, 2, 3], [1, 2, 3, 4, 5]),
        ([-3, 0, 0], [-3, 0, 7], [-3, -3, 0, 0, 0, 7]),
    ],
)
def test_merge_known_outputs(left: List[int], right: List[int], expected: List[int]) -> None:
    assert merge(left, right) == expected


def test_merge_does_not_touch_inputs() -> None:
    left, right = [1, 4], [2, 3]
    out = merge(left, right)
    out.append(99)
    assert left == [1, 4]
    assert right == [2, 3]


def test_merge_unsorted_inputs_still_a_permutation() -> None:
    left, right = [5, 1, 4], [3, 9, 0]
    out = merge(left, right)
    assert is_permutation(left + right, out)


def test_merge_comparison_count_is_linear() -> None:
    counter = CountingTracer()
    merge([1, 3, 5, 7], [2, 4, 6, 8], tracer=counter)
    # every element but the last is decided by one comparison
    assert counter.comparisons == 7
    assert counter.tail_elements == 1
    assert counter.emits == {"left": 4, "right": 3}


@settings(deadline=None, max_examples=100)
@given(
    st.lists(st.integers(min_value=-1000, max_value=1000), max_size=100),
    st.lists(st.integers(min_value=-1000, max_value=1000), max_size=100),
)
def test_property_merge_of_sorted_halves(left: List[int], right: List[int]) -> None:
    left, right = sorted(left), sorted(right)
    counter = CountingTracer()
    out = merge(left, right, tracer=counter)

    assert out == sorted(left + right)
    assert len(out) == len(left) + len(right)
    assert counter.comparisons + counter.tail_elements == len(out)
    assert counter.comparisons <= max(len(out) - 1, 0)


@settings(deadline=None, max_examples=60)
@given(
    st.lists(st.integers(min_value=-50, max_value=50), max_size=60),
    st.lists(st.integers(min_value=-50, max_value=50), max_size=60),
)
def test_property_merge_total_on_unsorted_inputs(left: List[int], right: List[int]) -> None:
    out = merge(left, right)
    assert is_permutation(left + right, out)
