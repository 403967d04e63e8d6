"""
Utility functions for rsakit.

Input validation helpers and JIT compilation switches.
"""

from .data import (
    to_numpy_array,
    as_item_matrix,
    as_square_matrix,
    check_nonnegative,
    check_positive,
)

from .jit import (
    conditional_njit,
    is_jit_enabled,
    jit_info,
)

__all__ = [
    # Data utilities
    "to_numpy_array",
    "as_item_matrix",
    "as_square_matrix",
    "check_nonnegative",
    "check_positive",
    # JIT utilities
    "conditional_njit",
    "is_jit_enabled",
    "jit_info",
]
