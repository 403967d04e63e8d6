"""
Tests for pairwise similarity matrices.
"""

import pytest
import numpy as np
from scipy.spatial.distance import pdist, squareform
from rsakit.rsa import similarity
from rsakit.rsa.similarity import MetricKind, compute_similarity_matrix
from rsakit.errors import DegenerateVectorError, DimensionMismatchError


class TestMetricKind:
    """Test metric name handling."""

    def test_coerce_strings_and_members(self):
        assert MetricKind.coerce("cosine") is MetricKind.COSINE
        assert MetricKind.coerce("EUCLIDEAN") is MetricKind.EUCLIDEAN
        assert MetricKind.coerce(MetricKind.CORRELATION) is MetricKind.CORRELATION

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Invalid metric"):
            MetricKind.coerce("manhattan")

    def test_similarity_flags(self):
        assert MetricKind.CORRELATION.is_similarity
        assert MetricKind.COSINE.is_similarity
        assert not MetricKind.CORRELATION_DISTANCE.is_similarity
        assert not MetricKind.COSINE_DISTANCE.is_similarity
        assert not MetricKind.EUCLIDEAN.is_similarity


class TestMatrixProperties:
    """Properties that hold for every metric."""

    def test_shape_and_symmetry(self, random_patterns, metric):
        """Matrices are square over items and exactly symmetric."""
        mat = compute_similarity_matrix(random_patterns, metric=metric)

        assert mat.shape == (12, 12)
        assert np.array_equal(mat, mat.T)

    def test_diagonal(self, random_patterns, metric):
        """Similarities have unit diagonal, distances exactly zero."""
        mat = compute_similarity_matrix(random_patterns, metric=metric)

        if MetricKind.coerce(metric).is_similarity:
            assert np.allclose(np.diag(mat), 1.0)
        else:
            assert np.all(np.diag(mat) == 0.0)

    def test_range(self, random_patterns, metric):
        """Values stay within the range of their metric."""
        mat = compute_similarity_matrix(random_patterns, metric=metric)
        kind = MetricKind.coerce(metric)

        assert np.all(np.isfinite(mat))
        if kind.is_similarity:
            assert mat.min() >= -1.0 and mat.max() <= 1.0
        elif kind is MetricKind.EUCLIDEAN:
            assert mat.min() >= 0.0
        else:
            assert mat.min() >= 0.0 and mat.max() <= 1.0

    def test_input_not_modified(self, random_patterns, metric):
        original = random_patterns.copy()
        compute_similarity_matrix(random_patterns, metric=metric)
        assert np.array_equal(random_patterns, original)


class TestFormulas:
    """Check each metric against scipy's reference implementations."""

    def test_correlation_matches_scipy(self, random_patterns):
        expected = 1 - squareform(pdist(random_patterns, metric="correlation"))
        np.fill_diagonal(expected, 1.0)

        sim = similarity.correlation_similarity(random_patterns)
        assert np.allclose(sim, expected, atol=1e-10)

    def test_cosine_matches_scipy(self, random_patterns):
        expected = 1 - squareform(pdist(random_patterns, metric="cosine"))
        np.fill_diagonal(expected, 1.0)

        sim = similarity.cosine_similarity(random_patterns)
        assert np.allclose(sim, expected, atol=1e-10)

    def test_euclidean_matches_scipy(self, random_patterns):
        expected = squareform(pdist(random_patterns, metric="euclidean"))

        dist = similarity.euclidean_distance(random_patterns)
        assert np.allclose(dist, expected, atol=1e-10)

    def test_euclidean_known_distances(self):
        """Test Euclidean distance on the unit square."""
        patterns = np.array(
            [
                [0, 0],
                [1, 0],
                [0, 1],
                [1, 1],
            ]
        )

        rdm = similarity.euclidean_distance(patterns)

        assert np.isclose(rdm[0, 1], 1.0)  # (0,0) to (1,0)
        assert np.isclose(rdm[0, 3], np.sqrt(2))  # (0,0) to (1,1)
        assert np.isclose(rdm[1, 2], np.sqrt(2))

    def test_euclidean_uses_raw_vectors(self):
        """Euclidean distance is not invariant to scaling, unlike correlation."""
        x = np.array([[1.0, 2.0, 3.0], [2.0, 4.0, 6.0], [0.0, 1.0, 5.0]])

        assert np.isclose(similarity.euclidean_distance(x)[0, 1], np.sqrt(14))
        assert np.isclose(similarity.correlation_similarity(x)[0, 1], 1.0)

    @pytest.mark.parametrize(
        "sim_metric, dissim_metric",
        [("correlation", "correlation_distance"), ("cosine", "cosine_distance")],
    )
    def test_dissimilarity_rescaling_exact(self, random_patterns, sim_metric, dissim_metric):
        """Dissimilarity equals (2 - (s + 1)) / 2 cell by cell."""
        sim = compute_similarity_matrix(random_patterns, metric=sim_metric)
        dissim = compute_similarity_matrix(random_patterns, metric=dissim_metric)

        assert np.allclose(dissim, (2 - (sim + 1)) / 2, rtol=0, atol=1e-9)

    def test_dissimilarity_is_not_one_minus_r(self):
        """Anti-correlated items get dissimilarity 1, not 2."""
        patterns = np.array([[1.0, 2.0, 3.0], [3.0, 2.0, 1.0], [1.0, 3.0, 2.0]])

        dissim = similarity.correlation_dissimilarity(patterns)
        assert np.isclose(dissim[0, 1], 1.0)

    def test_similarity_to_dissimilarity(self):
        result = similarity.similarity_to_dissimilarity(np.array([1.0, 0.5, 0.0, -1.0]))
        assert np.allclose(result, [0.0, 0.25, 0.5, 1.0])


class TestWorkedExample:
    """Correlation distance and Euclidean distance can disagree sharply."""

    def test_abc_correlation_distance(self, abc_items):
        dissim = similarity.correlation_dissimilarity(abc_items)

        # A and B have identical mean-centered profiles
        assert np.isclose(dissim[0, 1], 0.0, atol=1e-12)
        assert dissim[0, 2] > 0
        assert dissim[1, 2] > 0

    def test_abc_euclidean_distance(self, abc_items):
        from rsakit.rsa.matrix import normalize_by_max

        dist = similarity.euclidean_distance(abc_items)
        normalized = normalize_by_max(dist)

        assert np.isclose(dist[0, 1], np.sqrt(48))
        assert normalized[0, 1] == 1.0
        assert normalized[0, 2] < 1.0
        assert normalized[1, 2] < 1.0


class TestScaleInvariance:
    """Cosine ignores positive scaling, correlation ignores scaling and shift."""

    @pytest.mark.parametrize("k", [0.01, 1.0, 3.5, 1000.0])
    def test_cosine_positive_scaling(self, k):
        x = np.array([0.3, -1.2, 2.5, 0.7])
        patterns = np.vstack([x, k * x, [1.0, 0.0, 0.0, 0.0]])

        sim = similarity.cosine_similarity(patterns)
        assert np.isclose(sim[0, 1], 1.0)

    @pytest.mark.parametrize("k, c", [(0.5, 0.0), (2.0, 5.0), (10.0, -3.0)])
    def test_correlation_affine(self, k, c):
        x = np.array([0.3, -1.2, 2.5, 0.7])
        patterns = np.vstack([x, k * x + c, [1.0, 0.0, 0.0, 2.0]])

        sim = similarity.correlation_similarity(patterns)
        assert np.isclose(sim[0, 1], 1.0)

    def test_cosine_negative_scaling(self):
        x = np.array([1.0, 2.0, 3.0])
        patterns = np.vstack([x, -2 * x])

        sim = similarity.cosine_similarity(patterns)
        assert np.isclose(sim[0, 1], -1.0)


class TestErrors:
    """Test failure conditions of the similarity engine."""

    @pytest.mark.parametrize("metric", ["correlation", "correlation_distance"])
    def test_zero_variance_item(self, metric):
        patterns = np.array(
            [
                [1.0, 2.0, 3.0],
                [2.0, 2.0, 2.0],  # constant
                [0.0, 1.0, 0.0],
            ]
        )

        with pytest.raises(DegenerateVectorError, match="zero variance") as excinfo:
            compute_similarity_matrix(patterns, metric=metric)
        assert excinfo.value.indices == (1,)

    @pytest.mark.parametrize("metric", ["cosine", "cosine_distance"])
    def test_zero_magnitude_item(self, metric):
        patterns = np.array(
            [
                [1.0, 2.0, 3.0],
                [0.0, 0.0, 0.0],
                [0.0, 1.0, 0.0],
                [0.0, 0.0, 0.0],
            ]
        )

        with pytest.raises(DegenerateVectorError, match="zero magnitude") as excinfo:
            compute_similarity_matrix(patterns, metric=metric)
        assert excinfo.value.indices == (1, 3)

    def test_constant_item_is_fine_for_cosine(self):
        """A constant but non-zero vector has a defined cosine."""
        patterns = np.array([[2.0, 2.0, 2.0], [1.0, 2.0, 3.0]])

        sim = similarity.cosine_similarity(patterns)
        assert np.all(np.isfinite(sim))

    def test_zero_vector_is_fine_for_euclidean(self):
        patterns = np.array([[0.0, 0.0], [3.0, 4.0]])

        dist = similarity.euclidean_distance(patterns)
        assert np.isclose(dist[0, 1], 5.0)

    def test_single_item(self, metric):
        with pytest.raises(DimensionMismatchError, match="at least 2 items"):
            compute_similarity_matrix(np.array([[1.0, 2.0, 3.0]]), metric=metric)

    def test_no_features(self, metric):
        with pytest.raises(DimensionMismatchError, match="at least one feature"):
            compute_similarity_matrix(np.zeros((4, 0)), metric=metric)

    def test_not_2d(self):
        with pytest.raises(DimensionMismatchError, match="2-dimensional"):
            compute_similarity_matrix(np.arange(5.0))

    def test_non_finite_values(self):
        patterns = np.array([[1.0, np.nan], [0.0, 1.0]])

        with pytest.raises(ValueError, match="NaN or infinite"):
            compute_similarity_matrix(patterns, metric="euclidean")

    def test_errors_are_value_errors(self):
        """The error taxonomy stays catchable as ValueError."""
        with pytest.raises(ValueError):
            compute_similarity_matrix(np.ones((3, 3)), metric="correlation")


class TestLogging:
    """Test debug logging."""

    def test_debug_message(self, random_patterns, caplog):
        import logging

        with caplog.at_level(logging.DEBUG, logger="rsakit.rsa.similarity"):
            compute_similarity_matrix(random_patterns, metric="cosine")

        assert "cosine matrix for 12 items x 7 features" in caplog.text

    def test_custom_logger(self, random_patterns, caplog):
        import logging

        logger = logging.getLogger("my_analysis")
        with caplog.at_level(logging.DEBUG, logger="my_analysis"):
            compute_similarity_matrix(random_patterns, metric="euclidean", logger=logger)

        assert any(record.name == "my_analysis" for record in caplog.records)


@pytest.fixture(params=[True, False], ids=["jit", "numpy"])
def backend(request, monkeypatch):
    """Run the engine through the numba kernels and through the scipy path."""
    monkeypatch.setattr(similarity, "is_jit_enabled", lambda: request.param)
    return request.param


class TestExtremeMagnitudes:
    """Rows with tiny or huge values never produce NaN or crash."""

    @pytest.mark.parametrize("metric", ["correlation", "correlation_distance"])
    def test_tiny_spread_correlation(self, backend, metric):
        patterns = np.array(
            [
                [1.0, 2.0, 4.0],
                [0.0, 1e-200, 0.0],  # sum of squares underflows without rescaling
                [0.0, 1.0, 0.0],
            ]
        )

        mat = compute_similarity_matrix(patterns, metric=metric)
        reference = compute_similarity_matrix(
            np.array([[1.0, 2.0, 4.0], [0.0, 1.0, 0.0], [0.0, 1.0, 0.0]]), metric=metric
        )

        assert np.all(np.isfinite(mat))
        assert np.allclose(mat, reference, atol=1e-12)

    @pytest.mark.parametrize("metric", ["cosine", "cosine_distance"])
    def test_tiny_magnitude_cosine(self, backend, metric):
        patterns = np.array([[1.0, 2.0, 4.0], [1e-200, 0.0, 0.0], [1.0, 0.0, 0.0]])

        mat = compute_similarity_matrix(patterns, metric=metric)

        assert np.all(np.isfinite(mat))
        sim = mat if metric == "cosine" else 1.0 - 2.0 * mat
        assert np.isclose(sim[1, 2], 1.0)
        assert np.isclose(sim[0, 1], 1 / np.sqrt(21))

    def test_huge_values_cosine(self, backend):
        patterns = np.array([[1e300, 1e300], [1e300, -1e300], [1.0, 1.0]])

        sim = compute_similarity_matrix(patterns, metric="cosine")

        assert np.isclose(sim[0, 1], 0.0)
        assert np.isclose(sim[0, 2], 1.0)

    def test_centering_overflow(self, backend):
        patterns = np.array(
            [
                [1.7e308, 1.7e308, -1e308],  # row mean overflows
                [1.0, 2.0, 3.0],
                [0.0, 1.0, 0.0],
            ]
        )

        with pytest.raises(DegenerateVectorError, match="not finite") as excinfo:
            compute_similarity_matrix(patterns, metric="correlation")
        assert excinfo.value.indices == (0,)

    def test_euclidean_overflow(self, backend):
        patterns = np.array([[1e308, 0.0], [-1e308, 0.0]])

        with pytest.raises(ValueError, match="overflow"):
            compute_similarity_matrix(patterns, metric="euclidean")

    def test_backends_agree(self, random_patterns, metric, monkeypatch):
        monkeypatch.setattr(similarity, "is_jit_enabled", lambda: True)
        from_kernels = compute_similarity_matrix(random_patterns, metric=metric)
        monkeypatch.setattr(similarity, "is_jit_enabled", lambda: False)
        from_scipy = compute_similarity_matrix(random_patterns, metric=metric)

        assert np.allclose(from_kernels, from_scipy, atol=1e-10)
