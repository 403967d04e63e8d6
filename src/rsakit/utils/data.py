import numpy as np
import scipy.sparse as ssp

from ..errors import DimensionMismatchError


def to_numpy_array(data):
    """Convert array-like or sparse input to a float64 numpy array.

    Parameters
    ----------
    data : array-like or scipy.sparse matrix
        Input data.

    Returns
    -------
    np.ndarray
        Dense float64 array. A new array is returned when a conversion
        is needed; float64 ndarrays are copied so callers never share
        buffers with the library.
    """
    if ssp.issparse(data):
        return np.asarray(data.toarray(), dtype=np.float64)
    return np.array(data, dtype=np.float64, copy=True)


def as_item_matrix(patterns, min_items=2):
    """Validate and convert an item-by-feature matrix.

    Parameters
    ----------
    patterns : array-like of shape (n_items, n_features)
        Each row is an item, each column a feature.
    min_items : int, default 2
        Minimum number of rows required.

    Returns
    -------
    np.ndarray
        Float64 copy of the input, shape (n_items, n_features).

    Raises
    ------
    DimensionMismatchError
        If the input is not 2-D, has no features, or has fewer than
        ``min_items`` rows.
    ValueError
        If the input contains NaN or infinite values.
    """
    arr = to_numpy_array(patterns)
    if arr.ndim != 2:
        raise DimensionMismatchError(
            f"Pattern matrix must be 2-dimensional (n_items, n_features), got shape {arr.shape}"
        )
    n_items, n_features = arr.shape
    if n_features < 1:
        raise DimensionMismatchError("Pattern matrix must have at least one feature")
    if n_items < min_items:
        raise DimensionMismatchError(
            f"Pattern matrix must have at least {min_items} items, got {n_items}"
        )
    if not np.all(np.isfinite(arr)):
        raise ValueError("Pattern matrix contains NaN or infinite values")
    return arr


def as_square_matrix(matrix, name="matrix"):
    """Convert input to a float64 array and check it is square.

    Raises
    ------
    DimensionMismatchError
        If the input is not a 2-D square array.
    """
    arr = to_numpy_array(matrix)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise DimensionMismatchError(f"{name} must be a square 2-D array, got shape {arr.shape}")
    return arr


def check_nonnegative(**kwargs):
    """Check that all provided parameters are non-negative.

    Parameters
    ----------
    **kwargs : dict
        Parameter name to value mappings. All values should be numeric.

    Raises
    ------
    ValueError
        If any parameter value is negative, NaN, or infinite.
    TypeError
        If any parameter value is not numeric.

    Examples
    --------
    >>> check_nonnegative(noise_level=0.5)  # No error

    >>> check_nonnegative(noise_level=-0.5)
    Traceback (most recent call last):
    ...
    ValueError: noise_level must be non-negative, got -0.5
    """
    for name, value in kwargs.items():
        if value is None:
            continue
        val = _as_float(name, value)
        if val < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")


def check_positive(**kwargs):
    """Check that all provided parameters are positive (> 0).

    Raises
    ------
    ValueError
        If any parameter value is not positive, NaN, or infinite.
    TypeError
        If any parameter value is not numeric.

    Examples
    --------
    >>> check_positive(n_items=10, n_features=5)  # No error

    >>> check_positive(n_items=0)
    Traceback (most recent call last):
    ...
    ValueError: n_items must be positive, got 0
    """
    for name, value in kwargs.items():
        if value is None:
            continue
        val = _as_float(name, value)
        if val <= 0:
            raise ValueError(f"{name} must be positive, got {value}")


def _as_float(name, value):
    try:
        val = float(value)
    except (TypeError, ValueError):
        raise TypeError(f"{name} must be numeric, got {type(value).__name__}")
    if np.isnan(val):
        raise ValueError(f"{name} cannot be NaN")
    if np.isinf(val):
        raise ValueError(f"{name} cannot be infinite")
    return val
