"""
Step tracers for the merge sort.

A tracer observes the recursion and the merge loop without influencing
either. The algorithm calls one hook per step; every hook on the base class
is a no-op, so subclasses override only what they care about.

Hooks (call order for one non-trivial frame):
    on_sort(items, depth)            # frame entered
    on_split(mid, depth)             # n > 1 only
    on_half_sorted("left", ...)      # after the left recursion returns
    on_half_sorted("right", ...)     # after the right recursion returns
    on_merge_start(left, right, depth)
    on_emit(side, index, value)      # once per comparison
    on_tail("left", values)          # remaining left elements (may be empty)
    on_tail("right", values)
    on_merged(result)

Public API (stable):
    Tracer, NullTracer, NULL_TRACER
    ConsoleTracer, LoggingTracer, RecordingTracer, CountingTracer
    make_tracer(name: str) -> Tracer
    SUPPORTED_TRACERS

Conventions:
- Payload sequences are owned by the algorithm. Tracers that keep them
  must copy them.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.text import Text

__all__ = [
    "Tracer",
    "NullTracer",
    "NULL_TRACER",
    "ConsoleTracer",
    "LoggingTracer",
    "RecordingTracer",
    "CountingTracer",
    "SUPPORTED_TRACERS",
    "make_tracer",
]

logger = logging.getLogger(__name__)

SUPPORTED_TRACERS = {"off", "console", "log"}


class Tracer:
    """Base observer. All hooks do nothing."""

    def on_sort(self, items: Sequence[int], depth: int) -> None:
        pass

    def on_split(self, mid: int, depth: int) -> None:
        pass

    def on_half_sorted(self, side: str, result: Sequence[int], depth: int) -> None:
        pass

    def on_merge_start(self, left: Sequence[int], right: Sequence[int], depth: int) -> None:
        pass

    def on_emit(self, side: str, index: int, value: int) -> None:
        pass

    def on_tail(self, side: str, values: Sequence[int]) -> None:
        pass

    def on_merged(self, result: Sequence[int]) -> None:
        pass


class NullTracer(Tracer):
    """Explicit do-nothing tracer; the default for every sort call."""


NULL_TRACER = NullTracer()


def _fmt(values: Sequence[int]) -> str:
    return repr(list(values))


# ------------------------- human-readable tracers ------------------------- #

class _MessageTracer(Tracer):
    """
    Turns hooks into (depth, label, text) messages and hands them to `_write`.

    Merge-level hooks carry no depth of their own; they reuse the depth of
    the most recent `on_merge_start`.
    """

    def __init__(self) -> None:
        self._merge_depth = 0

    def _write(self, depth: int, label: str, text: str) -> None:
        raise NotImplementedError

    def on_sort(self, items: Sequence[int], depth: int) -> None:
        self._write(depth, "Sorting", _fmt(items))
        self._write(depth, "Length", str(len(items)))

    def on_split(self, mid: int, depth: int) -> None:
        self._write(depth, "Mid", str(mid))

    def on_half_sorted(self, side: str, result: Sequence[int], depth: int) -> None:
        self._write(depth, side.capitalize(), _fmt(result))

    def on_merge_start(self, left: Sequence[int], right: Sequence[int], depth: int) -> None:
        self._merge_depth = depth
        self._write(depth, "Merging", f"{_fmt(left)} and {_fmt(right)}")

    def on_emit(self, side: str, index: int, value: int) -> None:
        self._write(self._merge_depth, f"Adding {side}[{index}]", str(value))

    def on_tail(self, side: str, values: Sequence[int]) -> None:
        self._write(self._merge_depth, f"Appending remaining {side}", _fmt(values))

    def on_merged(self, result: Sequence[int]) -> None:
        self._write(self._merge_depth, "Merged result", _fmt(result))


class ConsoleTracer(_MessageTracer):
    """
    Print each step with rich, indented two spaces per recursion level.

    Parameters
    ----------
    console : rich.console.Console, optional
        Destination console. Defaults to a console on stderr so that stdout
        stays reserved for program output.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        super().__init__()
        self.console = console if console is not None else Console(stderr=True)

    def _write(self, depth: int, label: str, text: str) -> None:
        line = Text("  " * depth)
        line.append(f"{label}: ", style="bold cyan")
        line.append(text)
        self.console.print(line, highlight=False, soft_wrap=True)


class LoggingTracer(_MessageTracer):
    """Send each step to this module's logger, `mergetrace.trace.tracers`."""

    def __init__(self, log: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        super().__init__()
        self.log = log if log is not None else logger
        self.level = level

    def _write(self, depth: int, label: str, text: str) -> None:
        self.log.log(self.level, "%s%s: %s", "  " * depth, label, text)


# ------------------------- tracers for tests and benchmarks ------------------------- #

class RecordingTracer(Tracer):
    """Keep every hook call as an (event, payload) tuple, in call order."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, Dict[str, Any]]] = []

    def names(self) -> List[str]:
        return [name for name, _ in self.events]

    def on_sort(self, items, depth):
        self.events.append(("sort", {"items": list(items), "depth": depth}))

    def on_split(self, mid, depth):
        self.events.append(("split", {"mid": mid, "depth": depth}))

    def on_half_sorted(self, side, result, depth):
        self.events.append(("half_sorted", {"side": side, "result": list(result), "depth": depth}))

    def on_merge_start(self, left, right, depth):
        self.events.append(("merge_start", {"left": list(left), "right": list(right), "depth": depth}))

    def on_emit(self, side, index, value):
        self.events.append(("emit", {"side": side, "index": index, "value": value}))

    def on_tail(self, side, values):
        self.events.append(("tail", {"side": side, "values": list(values)}))

    def on_merged(self, result):
        self.events.append(("merged", {"result": list(result)}))


@dataclass
class CountingTracer(Tracer):
    """Tally of work done by one sort (or merge) call."""

    calls: int = 0
    splits: int = 0
    merges: int = 0
    comparisons: int = 0
    emits: Dict[str, int] = field(default_factory=lambda: {"left": 0, "right": 0})
    tail_elements: int = 0
    max_depth: int = 0

    def on_sort(self, items, depth):
        self.calls += 1
        self.max_depth = max(self.max_depth, depth)

    def on_split(self, mid, depth):
        self.splits += 1

    def on_merge_start(self, left, right, depth):
        self.merges += 1

    def on_emit(self, side, index, value):
        # one comparison decides each emitted element
        self.comparisons += 1
        self.emits[side] += 1

    def on_tail(self, side, values):
        self.tail_elements += len(values)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


def make_tracer(name: str) -> Tracer:
    """
    Build a tracer from its config name.

    Raises
    ------
    ValueError
        If `name` is not one of SUPPORTED_TRACERS.
    """
    if name == "off":
        return NULL_TRACER
    if name == "console":
        return ConsoleTracer()
    if name == "log":
        return LoggingTracer()
    raise ValueError(f"Unsupported tracer: {name!r}. Supported: {sorted(SUPPORTED_TRACERS)}")
