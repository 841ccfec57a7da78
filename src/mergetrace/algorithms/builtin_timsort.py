"""
Baseline: Python's built-in `sorted()` (Timsort).

Exists so benchmarks have a reference point next to merge_sort.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

ALGO_NAME: str = "builtin_timsort"

__all__ = ["ALGO_NAME", "sort"]


def sort(a: Sequence[int], *, config: Optional[Dict[str, Any]] = None) -> List[int]:
    if config:
        raise ValueError(f"{ALGO_NAME} takes no config; got keys {sorted(config)}")
    return sorted(a)
