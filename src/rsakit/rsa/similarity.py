"""
Pairwise similarity and dissimilarity matrices between items.

Each row of the input pattern matrix is an item and each column a
feature. Five metrics are supported:

- ``correlation``: Pearson correlation between item vectors
- ``correlation_distance``: ``(2 - (r + 1)) / 2``
- ``cosine``: normalized dot product, no centering
- ``cosine_distance``: ``(2 - (cos + 1)) / 2``
- ``euclidean``: root sum of squared differences on raw vectors

The two dissimilarities use the linear rescaling above rather than
``1 - r``; r = 1 maps to 0 and r = -1 maps to 1.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

import numpy as np
from scipy.spatial.distance import pdist, squareform

from ..errors import DegenerateVectorError
from ..utils.data import as_item_matrix
from ..utils.jit import is_jit_enabled
from .core_jit import (
    fast_correlation_similarity,
    fast_cosine_similarity,
    fast_euclidean_distance,
)


class MetricKind(str, Enum):
    """Supported pairwise metrics."""

    CORRELATION = "correlation"
    CORRELATION_DISTANCE = "correlation_distance"
    COSINE = "cosine"
    COSINE_DISTANCE = "cosine_distance"
    EUCLIDEAN = "euclidean"

    @classmethod
    def coerce(cls, metric: Union[str, "MetricKind"]) -> "MetricKind":
        """Return the member named by ``metric``.

        Raises
        ------
        ValueError
            If ``metric`` is not a supported metric name.
        """
        if isinstance(metric, cls):
            return metric
        try:
            return cls(str(metric).lower())
        except ValueError:
            valid = [m.value for m in cls]
            raise ValueError(f"Invalid metric '{metric}'. Must be one of {valid}") from None

    @property
    def is_similarity(self) -> bool:
        """True for metrics whose diagonal is 1 (larger means more alike)."""
        return self in (MetricKind.CORRELATION, MetricKind.COSINE)

    @property
    def needs_variance(self) -> bool:
        return self in (MetricKind.CORRELATION, MetricKind.CORRELATION_DISTANCE)

    @property
    def needs_magnitude(self) -> bool:
        return self in (MetricKind.COSINE, MetricKind.COSINE_DISTANCE)


def similarity_to_dissimilarity(similarity: np.ndarray) -> np.ndarray:
    """
    Rescale similarities in [-1, 1] to dissimilarities in [0, 1].

    Applies ``(2 - (s + 1)) / 2`` element-wise, so s = 1 maps to 0 and
    s = -1 maps to 1.

    Parameters
    ----------
    similarity : np.ndarray
        Similarity values, typically a correlation or cosine matrix.

    Returns
    -------
    np.ndarray
        Dissimilarity values of the same shape.

    Examples
    --------
    >>> similarity_to_dissimilarity(np.array([1.0, 0.0, -1.0]))
    array([0. , 0.5, 1. ])
    """
    similarity = np.asarray(similarity, dtype=np.float64)
    return (2.0 - (similarity + 1.0)) / 2.0


def _check_variance(patterns: np.ndarray) -> None:
    with np.errstate(over="ignore"):
        constant = np.flatnonzero(np.ptp(patterns, axis=1) == 0)
    if constant.size:
        raise DegenerateVectorError(
            f"Correlation is undefined for items with zero variance: rows {constant.tolist()}",
            indices=constant,
        )


def _check_magnitude(patterns: np.ndarray) -> None:
    zero = np.flatnonzero(~np.any(patterns != 0, axis=1))
    if zero.size:
        raise DegenerateVectorError(
            f"Cosine similarity is undefined for items with zero magnitude: rows {zero.tolist()}",
            indices=zero,
        )


def _row_scales(vectors: np.ndarray) -> np.ndarray:
    """Largest absolute entry of each row, checked to be finite and nonzero."""
    with np.errstate(invalid="ignore"):
        scales = np.max(np.abs(vectors), axis=1)
    bad = np.flatnonzero(~np.isfinite(scales) | (scales == 0))
    if bad.size:
        raise DegenerateVectorError(
            f"Cannot normalize items whose norm is zero or not finite: rows {bad.tolist()}",
            indices=bad,
        )
    return scales


def _unit_rows(vectors: np.ndarray) -> np.ndarray:
    # Dividing by the largest entry first keeps the sum of squares in [1, M]
    scaled = vectors / _row_scales(vectors)[:, None]
    return scaled / np.sqrt(np.sum(scaled**2, axis=1, keepdims=True))


def _centered(patterns: np.ndarray) -> np.ndarray:
    with np.errstate(over="ignore", invalid="ignore"):
        return patterns - patterns.mean(axis=1, keepdims=True)


def _correlation_numpy(patterns: np.ndarray) -> np.ndarray:
    units = _unit_rows(_centered(patterns))
    return 1.0 - squareform(pdist(units, "correlation"))


def _cosine_numpy(patterns: np.ndarray) -> np.ndarray:
    return 1.0 - squareform(pdist(_unit_rows(patterns), "cosine"))


def _euclidean_numpy(patterns: np.ndarray) -> np.ndarray:
    return squareform(pdist(patterns, "euclidean"))


def _finalize_similarity(sim: np.ndarray) -> np.ndarray:
    # Symmetrize from the lower triangle and pin the diagonal
    lower = np.tril(sim, k=-1)
    sim = lower + lower.T
    np.clip(sim, -1.0, 1.0, out=sim)
    np.fill_diagonal(sim, 1.0)
    return sim


def _finalize_distance(rdm: np.ndarray) -> np.ndarray:
    lower = np.tril(rdm, k=-1)
    rdm = lower + lower.T
    np.fill_diagonal(rdm, 0.0)
    return np.maximum(rdm, 0.0)


def correlation_similarity(patterns) -> np.ndarray:
    """
    Pearson correlation between all pairs of items (rows).

    Parameters
    ----------
    patterns : array-like of shape (n_items, n_features)
        Item-by-feature matrix.

    Returns
    -------
    np.ndarray
        Symmetric (n_items, n_items) matrix in [-1, 1] with unit diagonal.

    Raises
    ------
    DimensionMismatchError
        If there are fewer than 2 items or no features.
    DegenerateVectorError
        If any item has zero variance.
    """
    return compute_similarity_matrix(patterns, MetricKind.CORRELATION)


def correlation_dissimilarity(patterns) -> np.ndarray:
    """Correlation dissimilarity ``(2 - (r + 1)) / 2`` between all pairs of items."""
    return compute_similarity_matrix(patterns, MetricKind.CORRELATION_DISTANCE)


def cosine_similarity(patterns) -> np.ndarray:
    """
    Cosine similarity between all pairs of items (rows).

    Raises
    ------
    DegenerateVectorError
        If any item is the zero vector.
    """
    return compute_similarity_matrix(patterns, MetricKind.COSINE)


def cosine_dissimilarity(patterns) -> np.ndarray:
    """Cosine dissimilarity ``(2 - (cos + 1)) / 2`` between all pairs of items."""
    return compute_similarity_matrix(patterns, MetricKind.COSINE_DISTANCE)


def euclidean_distance(patterns) -> np.ndarray:
    """Euclidean distance between all pairs of items (rows), no centering or scaling."""
    return compute_similarity_matrix(patterns, MetricKind.EUCLIDEAN)


def compute_similarity_matrix(
    patterns,
    metric: Union[str, MetricKind] = "correlation",
    logger: Optional[logging.Logger] = None,
) -> np.ndarray:
    """
    Compute a pairwise similarity or dissimilarity matrix between items.

    Parameters
    ----------
    patterns : array-like of shape (n_items, n_features)
        Item-by-feature matrix. Each row is an item, each column a feature.
        Sparse matrices are densified.
    metric : str or MetricKind, default 'correlation'
        One of 'correlation', 'correlation_distance', 'cosine',
        'cosine_distance', 'euclidean'.
    logger : logging.Logger, optional
        Logger for debug messages. Defaults to the module logger.

    Returns
    -------
    np.ndarray
        Symmetric (n_items, n_items) matrix. Similarity metrics have a
        diagonal of exactly 1, dissimilarity and distance metrics a
        diagonal of exactly 0.

    Raises
    ------
    DimensionMismatchError
        If the input is not 2-D, has no features or fewer than 2 items.
    DegenerateVectorError
        If an item has zero variance (correlation metrics) or zero
        magnitude (cosine metrics), or its norm overflows float64.
    ValueError
        If the metric is unknown, the input contains NaN/inf, or a
        Euclidean distance overflows.

    Notes
    -----
    Degenerate rows are detected before any division, so the result never
    contains NaN or infinite values. Rows are scaled by their largest
    absolute entry before normalization, so items with tiny but nonzero
    spread are handled exactly like their rescaled counterparts. When JIT
    is enabled the numba kernels from :mod:`rsakit.rsa.core_jit` are used;
    otherwise scipy's ``pdist`` gives the same values up to floating point
    rounding.

    Examples
    --------
    >>> patterns = np.array([[1, 3, 2], [-3, -1, -2], [0, 1, 1]])
    >>> sim = compute_similarity_matrix(patterns, metric='correlation')
    >>> round(float(sim[1, 0]), 6)
    1.0
    >>> dist = compute_similarity_matrix(patterns, metric='correlation_distance')
    >>> round(float(dist[1, 0]), 6)
    0.0
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    metric = MetricKind.coerce(metric)
    patterns = as_item_matrix(patterns)

    if metric.needs_variance:
        _check_variance(patterns)
        _row_scales(_centered(patterns))
    elif metric.needs_magnitude:
        _check_magnitude(patterns)
        _row_scales(patterns)

    use_jit = is_jit_enabled()
    logger.debug(
        f"Computing {metric.value} matrix for {patterns.shape[0]} items x "
        f"{patterns.shape[1]} features (jit={use_jit})"
    )

    if metric is MetricKind.EUCLIDEAN:
        rdm = fast_euclidean_distance(patterns) if use_jit else _euclidean_numpy(patterns)
        if not np.all(np.isfinite(rdm)):
            raise ValueError("Euclidean distances between these items overflow float64")
        return _finalize_distance(rdm)

    if metric.needs_variance:
        sim = fast_correlation_similarity(patterns) if use_jit else _correlation_numpy(patterns)
    else:
        sim = fast_cosine_similarity(patterns) if use_jit else _cosine_numpy(patterns)
    sim = _finalize_similarity(sim)

    if metric.is_similarity:
        return sim
    return similarity_to_dissimilarity(sim)
