"""
Example of Representational Similarity Analysis (RSA) with rsakit.

This example demonstrates:
1. Similarity and dissimilarity matrices from item-by-feature data
2. How correlation distance and Euclidean distance can disagree
3. Comparing simulated stimulus and neural geometries
4. Exporting a matrix in long form for an external heatmap renderer
"""

import numpy as np
from rsakit import rsa


def example_1_metrics():
    """Example 1: the five metrics on three small items."""
    print("\n=== Example 1: Similarity metrics ===")

    items = np.array(
        [
            [1, 3, 2],  # A
            [-3, -1, -2],  # B
            [0, 1, 1],  # C
        ]
    )

    for metric in rsa.MetricKind:
        mat = rsa.compute_similarity_matrix(items, metric=metric)
        print(f"\n{metric.value}:")
        print(np.round(mat, 3))

    corr_dist = rsa.correlation_dissimilarity(items)
    eucl = rsa.normalize_by_max(rsa.euclidean_distance(items))
    print(f"\nA vs B correlation distance: {corr_dist[0, 1]:.3f}")
    print(f"A vs B max-normalized Euclidean distance: {eucl[0, 1]:.3f}")


def example_2_stimulus_vs_neural():
    """Example 2: RSA between simulated stimuli and neural responses."""
    print("\n=== Example 2: Stimulus vs neural geometry ===")

    for noise_level in (0.1, 1.0, 5.0):
        stimuli, neural = rsa.generate_rsa_dataset(
            n_items=12,
            n_features=6,
            n_units=100,
            noise_level=noise_level,
            random_state=42,
        )
        result = rsa.rsa_compare_all(stimuli, neural, metric="euclidean")
        print(
            f"noise={noise_level:>4}: pearson={result.pearson:.3f}, "
            f"spearman={result.spearman:.3f}"
        )


def example_3_long_form():
    """Example 3: labelled matrix and long-form export."""
    print("\n=== Example 3: Long-form export ===")

    labels = list(rsa.recycle(["face", "house"], 4))
    labels = [f"{label}_{i}" for i, label in enumerate(labels)]
    stimuli = rsa.generate_stimulus_features(4, 3, random_state=0)

    sm = rsa.compute_similarity(stimuli, metric="cosine", labels=labels)
    for label_a, label_b, value in sm.to_long_form(lower_only=True):
        print(f"{label_a:>8} {label_b:>8} {value:+.3f}")


if __name__ == "__main__":
    example_1_metrics()
    example_2_stimulus_vs_neural()
    example_3_long_form()
