"""
Correlation between the lower triangles of two similarity matrices.

Lower triangles are always read in row-major order over the strict lower
triangle, i.e. the order of ``numpy.tril_indices(n, k=-1)``:
(1, 0), (2, 0), (2, 1), (3, 0), (3, 1), (3, 2), ...
Two matrices compared with each other are therefore paired cell by cell.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

import numpy as np
from scipy import stats

from ..errors import DimensionMismatchError, InsufficientDataError, ZeroVarianceError
from ..utils.data import as_square_matrix

MIN_ITEMS = 3


class CorrelationMethod(str, Enum):
    """Methods for correlating two lower-triangle vectors."""

    PEARSON = "pearson"
    SPEARMAN = "spearman"

    @classmethod
    def coerce(cls, method: Union[str, "CorrelationMethod"]) -> "CorrelationMethod":
        """Return the member named by ``method``.

        Raises
        ------
        InsufficientDataError
            If ``method`` is not 'pearson' or 'spearman'.
        """
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).lower())
        except ValueError:
            valid = [m.value for m in cls]
            raise InsufficientDataError(
                f"Unknown correlation method '{method}'. Must be one of {valid}"
            ) from None


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson's r and Spearman's rho between two lower triangles."""

    pearson: float
    spearman: float

    def as_dict(self) -> Dict[str, float]:
        return {"pearson": self.pearson, "spearman": self.spearman}


def lower_triangle(matrix) -> np.ndarray:
    """
    Extract the strict lower triangle of a square matrix.

    Parameters
    ----------
    matrix : array-like of shape (n, n)
        Square matrix.

    Returns
    -------
    np.ndarray
        1-D array of length n * (n - 1) / 2 holding ``matrix[i, j]`` for
        ``i > j`` in row-major order.

    Raises
    ------
    DimensionMismatchError
        If the input is not a square 2-D array.

    Examples
    --------
    >>> m = np.array([[0, 1, 2], [3, 0, 4], [5, 6, 0]])
    >>> lower_triangle(m)
    array([3., 5., 6.])
    """
    matrix = as_square_matrix(matrix)
    return matrix[np.tril_indices(matrix.shape[0], k=-1)]


def _triangle_pair(a, b):
    a = as_square_matrix(a, name="first matrix")
    b = as_square_matrix(b, name="second matrix")
    if a.shape != b.shape:
        raise DimensionMismatchError(
            f"Matrices must have the same shape. Got {a.shape} and {b.shape}"
        )
    if a.shape[0] < MIN_ITEMS:
        raise InsufficientDataError(
            f"At least {MIN_ITEMS} items are needed to correlate lower triangles, "
            f"got {a.shape[0]}"
        )
    return lower_triangle(a), lower_triangle(b)


def _check_vectors(vec_a: np.ndarray, vec_b: np.ndarray) -> None:
    if not (np.all(np.isfinite(vec_a)) and np.all(np.isfinite(vec_b))):
        raise ValueError("Lower triangles contain NaN or infinite values")
    for name, vec in (("first", vec_a), ("second", vec_b)):
        if np.ptp(vec) == 0:
            raise ZeroVarianceError(
                f"The {name} lower triangle is constant; correlation is undefined"
            )


def _correlate_vectors(vec_a: np.ndarray, vec_b: np.ndarray, method: CorrelationMethod) -> float:
    if method is CorrelationMethod.SPEARMAN:
        # Average ranks for ties, then product-moment correlation on the ranks
        vec_a = stats.rankdata(vec_a, method="average")
        vec_b = stats.rankdata(vec_b, method="average")
    r, _ = stats.pearsonr(vec_a, vec_b)
    return float(np.clip(r, -1.0, 1.0))


def correlate_triangles(
    a,
    b,
    method: Union[str, CorrelationMethod] = "pearson",
    logger: Optional[logging.Logger] = None,
) -> float:
    """
    Correlate the strict lower triangles of two similarity matrices.

    Both matrices must index the same items in the same order; only the
    shapes are checked here.

    Parameters
    ----------
    a : array-like of shape (n_items, n_items)
        First similarity or dissimilarity matrix.
    b : array-like of shape (n_items, n_items)
        Second matrix, same shape as ``a``.
    method : str or CorrelationMethod, default 'pearson'
        'pearson' for product-moment correlation or 'spearman' for rank
        correlation (average ranks for ties).
    logger : logging.Logger, optional
        Logger for debug messages. Defaults to the module logger.

    Returns
    -------
    float
        Correlation in [-1, 1].

    Raises
    ------
    DimensionMismatchError
        If either input is not square or the shapes differ.
    InsufficientDataError
        If there are fewer than 3 items, or the method is unknown.
    ZeroVarianceError
        If either lower triangle is constant.
    ValueError
        If either lower triangle contains NaN or infinite values.

    Examples
    --------
    >>> rdm1 = np.array([[0, 1, 2], [1, 0, 3], [2, 3, 0]])
    >>> rdm2 = np.array([[0, 2, 4], [2, 0, 6], [4, 6, 0]])
    >>> round(correlate_triangles(rdm1, rdm2), 6)
    1.0

    See Also
    --------
    ~rsakit.rsa.triangle.correlate_triangles_all : Both methods at once
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    vec_a, vec_b = _triangle_pair(a, b)
    method = CorrelationMethod.coerce(method)
    _check_vectors(vec_a, vec_b)

    r = _correlate_vectors(vec_a, vec_b, method)
    logger.debug(f"{method.value} correlation over {vec_a.size} pairs: {r:.4f}")
    return r


def correlate_triangles_all(
    a, b, logger: Optional[logging.Logger] = None
) -> CorrelationResult:
    """
    Pearson and Spearman correlation between two lower triangles.

    Returns
    -------
    CorrelationResult
        Both coefficients; see :func:`correlate_triangles` for errors.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    vec_a, vec_b = _triangle_pair(a, b)
    _check_vectors(vec_a, vec_b)

    result = CorrelationResult(
        pearson=_correlate_vectors(vec_a, vec_b, CorrelationMethod.PEARSON),
        spearman=_correlate_vectors(vec_a, vec_b, CorrelationMethod.SPEARMAN),
    )
    logger.debug(f"Triangle correlations over {vec_a.size} pairs: {result}")
    return result
