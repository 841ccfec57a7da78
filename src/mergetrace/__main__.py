"""
Demo: sort a fixed array with every step traced.

    python -m mergetrace

The trace goes to stderr; the sorted list is the only thing on stdout.
"""

from __future__ import annotations

from typing import List

from mergetrace.algorithms.merge_sort import sort
from mergetrace.trace import ConsoleTracer

DEMO_INPUT: List[int] = [38, 27, 43, 3, 9, 82, 10]


def main() -> None:
    sorted_arr = sort(DEMO_INPUT, tracer=ConsoleTracer())
    print(sorted_arr)


if __name__ == "__main__":
    main()
