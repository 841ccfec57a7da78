"""
Integer input generators for tests and benchmarks.

Distributions (spec["dist"]):
- "random":        uniform over params["range"] = [lo, hi] (inclusive, required)
- "nearly_sorted": [0..n-1] degraded by ceil(swap_frac * n) random swaps
                   (params["swap_frac"] in [0, 1], default 0.05)
- "few_uniques":   at most k distinct values from params["range"]
                   (default [0, 4294967295]), repeated at random
- "sorted":        [0..n-1]
- "reversed":      [n-1..0]

Public API (stable):
    make_dataset(n: int, spec: dict, rng: numpy.random.Generator) -> list[int]
    SUPPORTED_DISTS

The caller owns and seeds the RNG. "sorted" and "reversed" do not touch it.
Output is always a plain Python list of ints.
"""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, List, Tuple

import numpy as np

__all__ = ["SUPPORTED_DISTS", "make_dataset"]

_Params = Dict[str, Any]


def _gen_random(n: int, params: _Params, rng: np.random.Generator) -> List[int]:
    if "range" not in params:
        raise ValueError("random.params.range must be provided as [min, max] (inclusive)")
    lo, hi = _parse_range(params["range"], "random")
    # Generator.integers is half-open; +1 makes hi reachable.
    return rng.integers(lo, hi + 1, size=n, dtype=np.int64).tolist()


def _gen_nearly_sorted(n: int, params: _Params, rng: np.random.Generator) -> List[int]:
    swap_frac = params.get("swap_frac", 0.05)
    if isinstance(swap_frac, bool) or not isinstance(swap_frac, (int, float)) or not 0.0 <= swap_frac <= 1.0:
        raise ValueError(f"nearly_sorted.params.swap_frac must be a number in [0, 1]; got {swap_frac!r}")
    arr = list(range(n))
    num_swaps = math.ceil(swap_frac * n)
    if n == 0 or num_swaps == 0:
        return arr
    pairs = rng.integers(0, n, size=(num_swaps, 2))
    for i, j in pairs.tolist():
        arr[i], arr[j] = arr[j], arr[i]
    return arr


def _gen_few_uniques(n: int, params: _Params, rng: np.random.Generator) -> List[int]:
    k = params.get("k")
    if isinstance(k, bool) or not isinstance(k, int) or k < 1:
        raise ValueError(f"few_uniques.params.k must be an integer >= 1; got {k!r}")
    lo, hi = _parse_range(params.get("range", (0, 4294967295)), "few_uniques")
    if n == 0:
        return []
    actual_k = min(k, n, hi - lo + 1)
    # Draw the distinct pool from `rng` (not `random`) so a seed fixes the data.
    pool: List[int] = []
    seen = set()
    while len(pool) < actual_k:
        for v in rng.integers(lo, hi + 1, size=2 * (actual_k - len(pool)), dtype=np.int64).tolist():
            if v not in seen:
                seen.add(v)
                pool.append(v)
                if len(pool) == actual_k:
                    break
    return [pool[t] for t in rng.integers(0, actual_k, size=n).tolist()]


def _gen_sorted(n: int, params: _Params, rng: np.random.Generator) -> List[int]:
    return list(range(n))


def _gen_reversed(n: int, params: _Params, rng: np.random.Generator) -> List[int]:
    return list(range(n - 1, -1, -1))


_GENERATORS: Dict[str, Callable[[int, _Params, np.random.Generator], List[int]]] = {
    "random": _gen_random,
    "nearly_sorted": _gen_nearly_sorted,
    "few_uniques": _gen_few_uniques,
    "sorted": _gen_sorted,
    "reversed": _gen_reversed,
}

SUPPORTED_DISTS = frozenset(_GENERATORS)


def make_dataset(n: int, spec: Dict[str, Any], rng: np.random.Generator) -> List[int]:
    """
    Generate `n` integers following `spec`.

    Parameters
    ----------
    n : int
        Length of the output, >= 0.
    spec : dict
        {"dist": <name>, "params": {...}}; see module docstring.
    rng : numpy.random.Generator
        Seeded upstream by the caller.

    Raises
    ------
    ValueError
        On a bad `n`, an unknown dist, or invalid params.
    """
    if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
        raise ValueError(f"n must be a nonnegative int; got {n!r}")
    if not isinstance(spec, dict):
        raise ValueError("spec must be a dict")

    dist = spec.get("dist")
    if dist not in _GENERATORS:
        raise ValueError(f"Unsupported dataset dist: {dist!r}. Supported: {sorted(SUPPORTED_DISTS)}")
    params = spec.get("params") or {}
    if not isinstance(params, dict):
        raise ValueError(f"{dist}.params must be a dict if provided")

    return _GENERATORS[dist](int(n), params, rng)


def _parse_range(spec: Any, dist: str) -> Tuple[int, int]:
    if not isinstance(spec, (list, tuple)) or len(spec) != 2:
        raise ValueError(f"{dist}.params.range must be a 2-element list [min, max]")
    lo, hi = spec
    if not all(isinstance(x, (int, np.integer)) and not isinstance(x, bool) for x in (lo, hi)):
        raise ValueError(f"{dist}.params.range values must be integers")
    if lo > hi:
        raise ValueError(f"{dist}.params.range invalid: min > max ({lo} > {hi})")
    return int(lo), int(hi)
