"""
mergetrace: a traceable reference merge sort.

    from mergetrace import sort, merge
    sort([38, 27, 43, 3, 9, 82, 10])   # -> [3, 9, 10, 27, 38, 43, 82]
"""

from .algorithms.merge_sort import merge, sort

__version__ = "0.1.0"

__all__ = ["sort", "merge", "__version__"]
