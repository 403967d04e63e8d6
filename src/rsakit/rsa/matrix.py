"""
Labelled similarity matrices and helpers for downstream consumers.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..errors import DimensionMismatchError
from ..utils.data import as_square_matrix
from .similarity import MetricKind
from .triangle import lower_triangle


def default_labels(n_items: int) -> Tuple[str, ...]:
    """Return ``('item_1', ..., 'item_n')``."""
    return tuple(f"item_{i + 1}" for i in range(n_items))


@dataclass(frozen=True, eq=False)
class SimilarityMatrix:
    """
    A square similarity matrix together with its item labels.

    The numeric values and the labels are stored separately; labels only
    name the rows/columns and never enter any computation.

    Parameters
    ----------
    values : array-like of shape (n_items, n_items)
        Square matrix. A read-only float64 copy is stored.
    labels : sequence of str, optional
        One label per item. Defaults to ``item_1 .. item_n``.
    metric : str or MetricKind, optional
        Metric the matrix was computed with, if known.
    """

    values: np.ndarray
    labels: Optional[Sequence[str]] = None
    metric: Optional[MetricKind] = None

    def __post_init__(self):
        values = as_square_matrix(self.values, name="values")
        values.setflags(write=False)
        object.__setattr__(self, "values", values)

        if self.labels is None:
            labels = default_labels(values.shape[0])
        else:
            labels = tuple(str(label) for label in self.labels)
        if len(labels) != values.shape[0]:
            raise DimensionMismatchError(
                f"Got {len(labels)} labels for a matrix with {values.shape[0]} items"
            )
        object.__setattr__(self, "labels", labels)

        if self.metric is not None:
            object.__setattr__(self, "metric", MetricKind.coerce(self.metric))

    @property
    def n_items(self) -> int:
        return self.values.shape[0]

    @property
    def is_similarity(self) -> Optional[bool]:
        """True for similarity metrics, False for distances, None if unknown."""
        if self.metric is None:
            return None
        return self.metric.is_similarity

    def lower_triangle(self) -> np.ndarray:
        return lower_triangle(self.values)

    def to_long_form(self, lower_only: bool = False) -> List[Tuple[str, str, float]]:
        return to_long_form(self.values, labels=self.labels, lower_only=lower_only)


def to_long_form(
    matrix,
    labels: Optional[Sequence[str]] = None,
    lower_only: bool = False,
) -> List[Tuple[str, str, float]]:
    """
    Flatten a square matrix into ``(label_a, label_b, value)`` triples.

    This is the tidy format heatmap renderers usually expect.

    Parameters
    ----------
    matrix : array-like of shape (n_items, n_items)
        Square matrix.
    labels : sequence of str, optional
        Item labels. Defaults to ``item_1 .. item_n``.
    lower_only : bool, default False
        If True, only the strict lower triangle is emitted, in the same
        row-major order as :func:`~rsakit.rsa.triangle.lower_triangle`.

    Returns
    -------
    list of tuple
        Triples in row-major order.

    Examples
    --------
    >>> to_long_form([[0, 1], [1, 0]], labels=['a', 'b'], lower_only=True)
    [('b', 'a', 1.0)]
    """
    matrix = as_square_matrix(matrix)
    n_items = matrix.shape[0]
    labels = default_labels(n_items) if labels is None else tuple(str(label) for label in labels)
    if len(labels) != n_items:
        raise DimensionMismatchError(f"Got {len(labels)} labels for a matrix with {n_items} items")

    if lower_only:
        rows, cols = np.tril_indices(n_items, k=-1)
    else:
        rows, cols = np.indices((n_items, n_items))
        rows, cols = rows.ravel(), cols.ravel()

    return [(labels[i], labels[j], float(matrix[i, j])) for i, j in zip(rows, cols)]


def normalize_by_max(matrix) -> np.ndarray:
    """
    Divide a distance matrix by its largest entry.

    The largest pairwise distance becomes 1, which makes distance
    matrices computed on different scales directly comparable.

    Parameters
    ----------
    matrix : array-like of shape (n_items, n_items)
        Non-negative distance matrix.

    Returns
    -------
    np.ndarray
        Rescaled matrix with values in [0, 1].

    Raises
    ------
    ValueError
        If the matrix has negative entries or every entry is zero.
    """
    matrix = as_square_matrix(matrix)
    if np.any(matrix < 0):
        raise ValueError("Max-normalization expects a non-negative distance matrix")
    max_value = matrix.max()
    if max_value == 0:
        raise ValueError("Cannot max-normalize a matrix whose entries are all zero")
    return matrix / max_value
