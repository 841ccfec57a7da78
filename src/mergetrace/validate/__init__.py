"""
Validation utilities public API.

Re-exports:
    - Oracle:
        ORACLE_NAME
        oracle_sort
        equals_oracle
        verify_output

    - Property checks:
        is_nondecreasing
        first_descent_index
        is_permutation
        multiset_diff
        assert_no_mutation
        is_stable
"""

from .oracle import ORACLE_NAME, equals_oracle, oracle_sort, verify_output
from .properties import (
    assert_no_mutation,
    first_descent_index,
    is_nondecreasing,
    is_permutation,
    is_stable,
    multiset_diff,
)

__all__ = [
    "ORACLE_NAME",
    "oracle_sort",
    "equals_oracle",
    "verify_output",
    "is_nondecreasing",
    "first_descent_index",
    "is_permutation",
    "multiset_diff",
    "assert_no_mutation",
    "is_stable",
]
