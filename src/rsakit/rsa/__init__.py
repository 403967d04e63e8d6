"""
Representational Similarity Analysis (RSA) for rsakit.

This module provides tools for computing similarity and dissimilarity
matrices from item-by-feature data and correlating their lower triangles.
"""

from .similarity import (
    MetricKind,
    compute_similarity_matrix,
    correlation_similarity,
    correlation_dissimilarity,
    cosine_similarity,
    cosine_dissimilarity,
    euclidean_distance,
    similarity_to_dissimilarity,
)

from .triangle import (
    CorrelationMethod,
    CorrelationResult,
    lower_triangle,
    correlate_triangles,
    correlate_triangles_all,
)

from .matrix import (
    SimilarityMatrix,
    to_long_form,
    normalize_by_max,
)

from .core import (
    compute_similarity,
    rsa_compare,
    rsa_compare_all,
)

from .synthetic import (
    recycle,
    generate_stimulus_features,
    generate_neural_responses,
    generate_rsa_dataset,
)

__all__ = [
    # Similarity matrices
    "MetricKind",
    "compute_similarity_matrix",
    "correlation_similarity",
    "correlation_dissimilarity",
    "cosine_similarity",
    "cosine_dissimilarity",
    "euclidean_distance",
    "similarity_to_dissimilarity",
    # Triangle correlation
    "CorrelationMethod",
    "CorrelationResult",
    "lower_triangle",
    "correlate_triangles",
    "correlate_triangles_all",
    # Containers
    "SimilarityMatrix",
    "to_long_form",
    "normalize_by_max",
    # Pipeline
    "compute_similarity",
    "rsa_compare",
    "rsa_compare_all",
    # Synthetic data
    "recycle",
    "generate_stimulus_features",
    "generate_neural_responses",
    "generate_rsa_dataset",
]
