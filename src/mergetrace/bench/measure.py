"""
Timing harness for sorting algorithms.

One sample is exactly one call to `algo_fn(arg, config=config)`, timed with
`time.perf_counter_ns`. Copying the input, warmup and garbage collection all
happen outside the timed block.

Public API (stable):
    TimingResult
    time_sort_call(...) -> TimingResult
"""

from __future__ import annotations

import contextlib
import gc
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

__all__ = ["TimingResult", "time_sort_call"]


@dataclass
class TimingResult:
    algo: str
    repeats: int
    samples_ns: List[int] = field(default_factory=list)
    status: str = "ok"                      # "ok" | "timeout" | "error"
    error: Optional[str] = None
    timed_out_on_repeat: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@contextlib.contextmanager
def _gc_paused(enabled: bool) -> Iterator[None]:
    """Collect then disable the GC for the block; restore only if we disabled it."""
    was_enabled = gc.isenabled()
    if enabled:
        gc.collect()
        gc.disable()
    try:
        yield
    finally:
        if enabled and was_enabled:
            gc.enable()


def time_sort_call(
    *,
    algo_name: str,
    algo_fn: Callable[..., List[int]],
    a: Sequence[int],
    config: Optional[Dict[str, Any]],
    repeats: int,
    warmup: bool,
    disable_gc: bool,
    timeout_seconds: float,
) -> TimingResult:
    """
    Time `repeats` calls of `algo_fn` on fresh copies of `a`.

    Parameters
    ----------
    algo_name : str
        Label stored on the result.
    algo_fn : callable
        `sort(a, *, config=None) -> list[int]`.
    a : sequence of int
        Input; each call receives its own list copy.
    config : dict | None
        Passed through to `algo_fn`.
    repeats : int
        Number of timed samples (>= 0).
    warmup : bool
        Run one untimed call first.
    disable_gc : bool
        Pause the garbage collector during the timed loop.
    timeout_seconds : float
        If one sample exceeds this, the sample is kept, status becomes
        "timeout", and sampling stops.

    Returns
    -------
    TimingResult
        status "error" carries the exception repr in `error`; algorithm
        exceptions are recorded, not raised.

    Raises
    ------
    ValueError
        For negative `repeats` or non-positive `timeout_seconds`.
    """
    if repeats < 0:
        raise ValueError("repeats must be nonnegative")
    if timeout_seconds <= 0:
        raise ValueError("timeout_seconds must be positive")

    result = TimingResult(algo=algo_name, repeats=repeats)

    if warmup and repeats > 0:
        try:
            algo_fn(list(a), config=config)
        except Exception as e:
            result.status = "error"
            result.error = f"warmup failed: {e!r}"
            return result

    threshold_ns = int(timeout_seconds * 1e9)
    with _gc_paused(disable_gc):
        for r in range(repeats):
            arg = list(a)
            try:
                t0 = time.perf_counter_ns()
                algo_fn(arg, config=config)
                t1 = time.perf_counter_ns()
            except Exception as e:
                result.status = "error"
                result.error = f"run failed at repeat {r}: {e!r}"
                break

            elapsed = t1 - t0
            result.samples_ns.append(elapsed)
            if elapsed > threshold_ns:
                result.status = "timeout"
                result.timed_out_on_repeat = r
                break

    return result
