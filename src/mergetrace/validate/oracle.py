"""
Ground truth for sort outputs.

The oracle is Python's built-in `sorted()`: stable, deterministic, and never
mutating its input. `verify_output` combines it with the property checks to
produce readable problem reports, which the benchmark runner records when an
algorithm returns a wrong answer.

Public API (stable):
    ORACLE_NAME
    oracle_sort(a) -> list[int]
    equals_oracle(a, out) -> bool
    verify_output(a, out) -> list[str]
"""

from __future__ import annotations

from typing import List, Sequence

from .properties import first_descent_index, multiset_diff

ORACLE_NAME: str = "python_sorted_timsort"

__all__ = ["ORACLE_NAME", "oracle_sort", "equals_oracle", "verify_output"]


def oracle_sort(a: Sequence[int]) -> List[int]:
    return sorted(a)


def equals_oracle(a: Sequence[int], out: Sequence[int]) -> bool:
    return list(out) == oracle_sort(a)


def verify_output(a: Sequence[int], out: Sequence[int]) -> List[str]:
    """
    Check `out` as a sort of `a`.

    Returns
    -------
    list[str]
        One message per problem found; empty when `out` is correct.
    """
    problems: List[str] = []
    if len(out) != len(a):
        problems.append(f"length {len(out)} != input length {len(a)}")

    diff = multiset_diff(out, a)
    if diff:
        shown = dict(sorted(diff.items())[:5])
        problems.append(f"not a permutation of the input (count diff, first entries: {shown})")

    i = first_descent_index(out)
    if i is not None:
        problems.append(f"not nondecreasing at i={i}: {out[i]} > {out[i + 1]}")

    if not problems and not equals_oracle(a, out):
        problems.append(f"does not match {ORACLE_NAME}")
    return problems
