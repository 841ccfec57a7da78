"""
Top-down merge sort over integer sequences, with optional step tracing.

Public API (stable):
    sort(a: Sequence[int], *, config: dict | None = None, tracer: Tracer | None = None) -> list[int]
    merge(left: Sequence[int], right: Sequence[int], *, tracer: Tracer | None = None) -> list[int]
    count_operations(a: Sequence[int]) -> dict

Conventions:
- Inputs are never mutated; every call returns a new list.
- A frame of length n > 1 splits at mid = n // 2 into the half-open slices
  [0, mid) and [mid, n), sorts left then right, and merges.
- On ties the merge takes the left element first, so the sort is stable.
- Tracing only observes. The returned list is identical with or without it.

Config keys:
    "trace": "off" | "console" | "log"   # default "off"; ignored if `tracer` is passed
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from mergetrace.trace import NULL_TRACER, CountingTracer, Tracer, make_tracer

ALGO_NAME: str = "merge_sort"
CONFIG_KEYS = {"trace"}

__all__ = ["ALGO_NAME", "CONFIG_KEYS", "sort", "merge", "count_operations"]


def sort(
    a: Sequence[int],
    *,
    config: Optional[Dict[str, Any]] = None,
    tracer: Optional[Tracer] = None,
) -> List[int]:
    """
    Return a new list with the elements of `a` in stable ascending order.

    Parameters
    ----------
    a : sequence of int
        Input values. May be empty. Not mutated.
    config : dict, optional
        Algorithm configuration (see module docstring).
    tracer : Tracer, optional
        Observer for each step. Takes precedence over config["trace"].

    Raises
    ------
    ValueError
        If `config` is not a dict or holds unknown keys / tracer names.
    """
    cfg = _validate_config(config)
    if tracer is None:
        tracer = make_tracer(cfg.get("trace", "off"))
    return _sort(list(a), tracer, 0)


def merge(
    left: Sequence[int],
    right: Sequence[int],
    *,
    tracer: Optional[Tracer] = None,
) -> List[int]:
    """
    Merge two ascending sequences into one new ascending list.

    If either input is not sorted the result is still a permutation of
    left + right, just not necessarily ordered.
    """
    return _merge(left, right, tracer if tracer is not None else NULL_TRACER, 0)


def count_operations(a: Sequence[int]) -> Dict[str, Any]:
    """Sort `a` once under a CountingTracer and return its tallies."""
    counter = CountingTracer()
    sort(a, tracer=counter)
    return counter.as_dict()


# ------------------------- internals ------------------------- #

def _sort(items: List[int], tracer: Tracer, depth: int) -> List[int]:
    # `items` is always a private copy: list(a) at the top, a slice below.
    tracer.on_sort(items, depth)
    n = len(items)
    if n <= 1:
        return items

    mid = n // 2
    tracer.on_split(mid, depth)

    left = _sort(items[:mid], tracer, depth + 1)
    tracer.on_half_sorted("left", left, depth)
    right = _sort(items[mid:], tracer, depth + 1)
    tracer.on_half_sorted("right", right, depth)

    return _merge(left, right, tracer, depth)


def _merge(left: Sequence[int], right: Sequence[int], tracer: Tracer, depth: int) -> List[int]:
    tracer.on_merge_start(left, right, depth)

    n_left, n_right = len(left), len(right)
    result: List[int] = []
    i = j = 0
    while i < n_left and j < n_right:
        if left[i] <= right[j]:
            tracer.on_emit("left", i, left[i])
            result.append(left[i])
            i += 1
        else:
            tracer.on_emit("right", j, right[j])
            result.append(right[j])
            j += 1

    # At most one of the tails is non-empty.
    left_tail = left[i:]
    tracer.on_tail("left", left_tail)
    result.extend(left_tail)
    right_tail = right[j:]
    tracer.on_tail("right", right_tail)
    result.extend(right_tail)

    tracer.on_merged(result)
    return result


def _validate_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"{ALGO_NAME}: config must be a dict if provided; got {type(config).__name__}")
    unknown = set(config) - CONFIG_KEYS
    if unknown:
        raise ValueError(f"{ALGO_NAME}: unknown config keys {sorted(unknown)}. Supported: {sorted(CONFIG_KEYS)}")
    return config
