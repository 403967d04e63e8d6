"""Configuration for tests.

This module provides shared fixtures for the rsakit test suite. Data is
generated with the package's own synthetic generators where possible so
fixtures stay consistent with the library.
"""

import pytest
import numpy as np
from rsakit.rsa.synthetic import generate_rsa_dataset


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")


ALL_METRICS = [
    "correlation",
    "correlation_distance",
    "cosine",
    "cosine_distance",
    "euclidean",
]


@pytest.fixture(params=ALL_METRICS)
def metric(request):
    """Each supported pairwise metric in turn."""
    return request.param


@pytest.fixture
def random_patterns():
    """Random item-by-feature matrix, 12 items x 7 features."""
    rng = np.random.RandomState(42)
    return rng.randn(12, 7)


@pytest.fixture
def abc_items():
    """Three small items used to contrast correlation and Euclidean distance.

    A and B differ only by a constant offset and sign pattern that leaves
    their mean-centered vectors identical.
    """
    return np.array(
        [
            [1, 3, 2],  # A
            [-3, -1, -2],  # B
            [0, 1, 1],  # C
        ]
    )


@pytest.fixture
def rsa_dataset():
    """Stimulus and neural matrices with a clear shared geometry."""
    return generate_rsa_dataset(
        n_items=10, n_features=6, n_units=300, noise_level=0.05, random_state=0
    )


@pytest.fixture
def small_rdms():
    """Two 4x4 symmetric dissimilarity matrices with non-constant triangles."""
    rdm1 = np.array(
        [
            [0.0, 0.2, 0.5, 0.9],
            [0.2, 0.0, 0.4, 0.7],
            [0.5, 0.4, 0.0, 0.3],
            [0.9, 0.7, 0.3, 0.0],
        ]
    )
    rdm2 = np.array(
        [
            [0.0, 0.1, 0.6, 0.8],
            [0.1, 0.0, 0.5, 0.9],
            [0.6, 0.5, 0.0, 0.2],
            [0.8, 0.9, 0.2, 0.0],
        ]
    )
    return rdm1, rdm2
