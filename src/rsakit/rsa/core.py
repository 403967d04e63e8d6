"""
High-level RSA pipeline: item matrices in, triangle correlation out.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np

from ..errors import DimensionMismatchError
from .matrix import SimilarityMatrix
from .similarity import MetricKind, compute_similarity_matrix
from .triangle import (
    CorrelationMethod,
    CorrelationResult,
    correlate_triangles,
    correlate_triangles_all,
)

__all__ = [
    "CorrelationResult",
    "compute_similarity",
    "rsa_compare",
    "rsa_compare_all",
]


def compute_similarity(
    data,
    metric: Union[str, MetricKind] = "correlation",
    labels: Optional[Sequence[str]] = None,
    logger: Optional[logging.Logger] = None,
) -> SimilarityMatrix:
    """
    Compute a labelled similarity matrix from an item-by-feature matrix.

    Parameters
    ----------
    data : array-like of shape (n_items, n_features)
        Item-by-feature matrix, one row per item.
    metric : str or MetricKind, default 'correlation'
        Pairwise metric, see :func:`~rsakit.rsa.similarity.compute_similarity_matrix`.
    labels : sequence of str, optional
        One label per item. Defaults to ``item_1 .. item_n``.
    logger : logging.Logger, optional
        Logger for debug messages.

    Returns
    -------
    SimilarityMatrix
        Matrix values with labels and metric attached.
    """
    metric = MetricKind.coerce(metric)
    values = compute_similarity_matrix(data, metric=metric, logger=logger)
    return SimilarityMatrix(values, labels=labels, metric=metric)


def _as_matrix(data, metric, logger) -> np.ndarray:
    if isinstance(data, SimilarityMatrix):
        logger.debug("Using precomputed similarity matrix")
        return data.values
    return compute_similarity_matrix(data, metric=metric, logger=logger)


def _build_pair(data1, data2, metric, metric2, logger):
    if metric2 is None:
        metric2 = metric

    m1 = _as_matrix(data1, metric, logger)
    m2 = _as_matrix(data2, metric2, logger)

    if m1.shape != m2.shape:
        raise DimensionMismatchError(
            f"Similarity matrices have incompatible shapes: {m1.shape} vs {m2.shape}. "
            "Ensure both datasets have the same number of items."
        )
    return m1, m2


def rsa_compare(
    data1,
    data2,
    metric: Union[str, MetricKind] = "correlation",
    method: Union[str, CorrelationMethod] = "spearman",
    metric2: Optional[Union[str, MetricKind]] = None,
    logger: Optional[logging.Logger] = None,
) -> float:
    """
    Compare the representational geometry of two datasets.

    Builds a similarity matrix for each dataset and correlates their
    lower triangles. The datasets may have different numbers of features
    but must describe the same items in the same order.

    Parameters
    ----------
    data1 : array-like or SimilarityMatrix
        First dataset, (n_items, n_features1), or a precomputed matrix.
    data2 : array-like or SimilarityMatrix
        Second dataset, (n_items, n_features2), or a precomputed matrix.
    metric : str or MetricKind, default 'correlation'
        Metric for ``data1`` (and ``data2`` unless ``metric2`` is given).
    method : str or CorrelationMethod, default 'spearman'
        Triangle correlation method, 'pearson' or 'spearman'.
    metric2 : str or MetricKind, optional
        Separate metric for ``data2``.
    logger : logging.Logger, optional
        Logger for debugging messages.

    Returns
    -------
    float
        Correlation between the two lower triangles, in [-1, 1].

    Raises
    ------
    DimensionMismatchError
        If the datasets describe different numbers of items.

    Notes
    -----
    Precomputed :class:`~rsakit.rsa.matrix.SimilarityMatrix` inputs are
    used as they are and ``metric``/``metric2`` are ignored for them.
    Errors from the similarity engine and the triangle correlator are
    propagated unchanged.

    Examples
    --------
    >>> from rsakit.rsa.synthetic import generate_rsa_dataset
    >>> stimuli, neural = generate_rsa_dataset(
    ...     n_items=8, n_features=5, n_units=200, noise_level=0.05, random_state=0
    ... )
    >>> rsa_compare(stimuli, neural, metric='euclidean') > 0.5
    True

    See Also
    --------
    ~rsakit.rsa.core.rsa_compare_all : Pearson and Spearman together
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    logger.debug("Computing similarity matrices for RSA comparison")
    m1, m2 = _build_pair(data1, data2, metric, metric2, logger)
    similarity = correlate_triangles(m1, m2, method=method, logger=logger)

    logger.debug(f"RSA comparison complete. Similarity: {similarity:.3f}")
    return similarity


def rsa_compare_all(
    data1,
    data2,
    metric: Union[str, MetricKind] = "correlation",
    metric2: Optional[Union[str, MetricKind]] = None,
    logger: Optional[logging.Logger] = None,
) -> CorrelationResult:
    """
    Like :func:`rsa_compare` but return both Pearson and Spearman results.

    Returns
    -------
    CorrelationResult
        ``pearson`` and ``spearman`` coefficients of the two lower triangles.
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    m1, m2 = _build_pair(data1, data2, metric, metric2, logger)
    return correlate_triangles_all(m1, m2, logger=logger)
