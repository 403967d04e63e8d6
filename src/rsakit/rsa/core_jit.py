"""JIT-compiled core functions for RSA.

These functions provide optimized implementations of the pairwise
similarity kernels. Inputs are float64 pattern matrices of shape
(n_items, n_features) that have already been validated; degenerate rows
are rejected by the caller before these kernels run.
"""

import numpy as np
from ..utils.jit import conditional_njit, prange


@conditional_njit
def fast_correlation_similarity(patterns):
    """
    Pearson correlation between all pairs of rows.

    Each centered row is divided by its largest absolute entry before the
    sum of squares is taken, so rows with tiny or huge spread neither
    underflow nor overflow. Rows must have nonzero spread.

    Parameters
    ----------
    patterns : np.ndarray
        Pattern matrix of shape (n_items, n_features)

    Returns
    -------
    sim : np.ndarray
        Correlation matrix (n_items, n_items) with unit diagonal
    """
    n_items, n_features = patterns.shape
    sim = np.zeros((n_items, n_items))

    # Center each row, then scale it to unit length
    units = np.zeros((n_items, n_features))
    for i in range(n_items):
        mean = 0.0
        for k in range(n_features):
            mean += patterns[i, k]
        mean /= n_features

        scale = 0.0
        for k in range(n_features):
            diff = patterns[i, k] - mean
            units[i, k] = diff
            if abs(diff) > scale:
                scale = abs(diff)

        ss = 0.0
        for k in range(n_features):
            units[i, k] /= scale
            ss += units[i, k] * units[i, k]
        norm = np.sqrt(ss)
        for k in range(n_features):
            units[i, k] /= norm

    for i in range(n_items):
        sim[i, i] = 1.0
        for j in range(i):
            r = 0.0
            for k in range(n_features):
                r += units[i, k] * units[j, k]

            # Clip to [-1, 1] to handle numerical errors
            if r > 1.0:
                r = 1.0
            elif r < -1.0:
                r = -1.0

            sim[i, j] = r
            sim[j, i] = r

    return sim


@conditional_njit
def fast_cosine_similarity(patterns):
    """
    Cosine similarity between all pairs of rows.

    Rows are scaled by their largest absolute entry before normalization,
    as in :func:`fast_correlation_similarity`. Rows must be nonzero.

    Parameters
    ----------
    patterns : np.ndarray
        Pattern matrix of shape (n_items, n_features)

    Returns
    -------
    sim : np.ndarray
        Cosine similarity matrix (n_items, n_items) with unit diagonal
    """
    n_items, n_features = patterns.shape
    sim = np.zeros((n_items, n_items))

    units = np.zeros((n_items, n_features))
    for i in range(n_items):
        scale = 0.0
        for k in range(n_features):
            if abs(patterns[i, k]) > scale:
                scale = abs(patterns[i, k])

        ss = 0.0
        for k in range(n_features):
            units[i, k] = patterns[i, k] / scale
            ss += units[i, k] * units[i, k]
        norm = np.sqrt(ss)
        for k in range(n_features):
            units[i, k] /= norm

    for i in range(n_items):
        sim[i, i] = 1.0
        for j in range(i):
            c = 0.0
            for k in range(n_features):
                c += units[i, k] * units[j, k]

            if c > 1.0:
                c = 1.0
            elif c < -1.0:
                c = -1.0

            sim[i, j] = c
            sim[j, i] = c

    return sim


@conditional_njit(parallel=True)
def fast_euclidean_distance(patterns):
    """
    Euclidean distance between all pairs of rows.

    Rows are processed in parallel; each (i, j) cell is written by
    exactly one iteration.

    Parameters
    ----------
    patterns : np.ndarray
        Pattern matrix of shape (n_items, n_features)

    Returns
    -------
    rdm : np.ndarray
        Euclidean distance matrix (n_items, n_items) with zero diagonal
    """
    n_items, n_features = patterns.shape
    rdm = np.zeros((n_items, n_items))

    for i in prange(n_items):
        for j in range(i):
            dist = 0.0
            for k in range(n_features):
                diff = patterns[i, k] - patterns[j, k]
                dist += diff * diff
            dist = np.sqrt(dist)
            rdm[i, j] = dist
            rdm[j, i] = dist

    return rdm
