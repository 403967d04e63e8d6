"""
rsakit - Representational Similarity Analysis toolkit

Build pairwise similarity matrices from item-by-feature data and compare
two domains by correlating the lower triangles of their matrices.
"""

__version__ = "0.1.0"

# Core modules
from . import errors
from . import rsa
from . import utils

# Errors
from .errors import (
    RSAError,
    DimensionMismatchError,
    DegenerateVectorError,
    ZeroVarianceError,
    InsufficientDataError,
)

# Main RSA functions
from .rsa import (
    MetricKind,
    CorrelationMethod,
    CorrelationResult,
    SimilarityMatrix,
    compute_similarity_matrix,
    compute_similarity,
    lower_triangle,
    correlate_triangles,
    correlate_triangles_all,
    rsa_compare,
    rsa_compare_all,
)

__all__ = [
    # Version
    "__version__",
    # Modules
    "errors",
    "rsa",
    "utils",
    # Errors
    "RSAError",
    "DimensionMismatchError",
    "DegenerateVectorError",
    "ZeroVarianceError",
    "InsufficientDataError",
    # RSA
    "MetricKind",
    "CorrelationMethod",
    "CorrelationResult",
    "SimilarityMatrix",
    "compute_similarity_matrix",
    "compute_similarity",
    "lower_triangle",
    "correlate_triangles",
    "correlate_triangles_all",
    "rsa_compare",
    "rsa_compare_all",
]
