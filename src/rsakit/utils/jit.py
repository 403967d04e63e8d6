"""JIT compilation utilities for rsakit.

Provides conditional JIT compilation based on environment settings.
"""

import os

from numba import njit, prange

# Check if Numba should be disabled
RSAKIT_DISABLE_NUMBA = os.getenv("RSAKIT_DISABLE_NUMBA", "False").lower() in (
    "true",
    "1",
    "yes",
)

__all__ = ["conditional_njit", "is_jit_enabled", "jit_info", "prange"]


def conditional_njit(*args, **kwargs):
    """Conditionally apply numba JIT compilation based on environment settings.

    If the RSAKIT_DISABLE_NUMBA environment variable is set to 'true', '1'
    or 'yes', this returns the original function without JIT compilation.
    Otherwise, applies numba.njit with the given parameters.

    Parameters
    ----------
    *args
        Positional arguments passed to numba.njit. If a single function is
        passed, it will be decorated directly.
    **kwargs
        Keyword arguments passed to numba.njit (e.g., parallel=True, cache=True).

    Returns
    -------
    decorator or function
        If called with arguments: returns a decorator function.
        If called on a function directly: returns the (possibly JIT-compiled) function.

    Notes
    -----
    With JIT disabled the kernels run as plain Python loops, which is
    convenient for debugging but slow for large matrices. ``prange``
    behaves like ``range`` outside compiled code.

    Examples
    --------
    >>> @conditional_njit
    ... def fast_computation(x):
    ...     return x ** 2

    With numba parameters::

        @conditional_njit(parallel=True)
        def parallel_computation(x):
            return x ** 2
    """
    if RSAKIT_DISABLE_NUMBA:

        def decorator(func):
            return func

        if len(args) == 1 and callable(args[0]) and not kwargs:
            return args[0]
        return decorator

    return njit(*args, **kwargs)


def is_jit_enabled():
    """Check if JIT compilation is enabled.

    Returns
    -------
    bool
        False if the RSAKIT_DISABLE_NUMBA environment variable is set to
        'true', '1' or 'yes' (case insensitive), True otherwise.

    See Also
    --------
    ~rsakit.utils.jit.jit_info :
        Print detailed JIT status information.
    """
    return not RSAKIT_DISABLE_NUMBA


def jit_info():
    """Print information about JIT compilation status.

    Examples
    --------
    >>> jit_info()  # doctest: +SKIP
    JIT disabled by environment: False
    JIT enabled: True
    Numba version: 0.60.0
    """
    import numba

    print(f"JIT disabled by environment: {RSAKIT_DISABLE_NUMBA}")
    print(f"JIT enabled: {is_jit_enabled()}")
    print(f"Numba version: {numba.__version__}")
