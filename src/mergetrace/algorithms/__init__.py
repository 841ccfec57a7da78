"""
Sorting algorithms.

Every module here exposes `sort(a, *, config=None) -> list[int]` so the
benchmark runner can load it by name:
    importlib.import_module(f"mergetrace.algorithms.{name}")
"""
