"""
Profiling script for the matching strategies.

Measures timing for random point sets of increasing size, and the effect
of splitting the minimum distance problem into connected sub-graphs.
Run with: python benchmarks/bench_matching.py
"""
import math
import time
import statistics
import numpy as np

from matchscore import (
    extract_subgraphs,
    maximum_cardinality,
    minimum_distance,
    nearest_neighbour,
)


def distance(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])


def make_points(n: int, size: float, seed: int):
    rng = np.random.default_rng(seed)
    actual = [tuple(p) for p in rng.random((n, 2)) * size]
    # Predictions are jittered copies of the actual points plus noise points
    jitter = rng.normal(scale=0.3, size=(n, 2))
    predicted = [tuple(p) for p in (np.array(actual) + jitter)[: int(n * 0.9)]]
    predicted += [tuple(p) for p in rng.random((n // 10, 2)) * size]
    return actual, predicted


def minimum_distance_by_subgraph(actual, predicted, threshold):
    """Solve each connected sub-graph separately"""
    count = 0
    subgraphs = extract_subgraphs(
        len(actual), len(predicted),
        lambda i, j: distance(actual[i], predicted[j]) <= threshold,
    )
    for indices_a, indices_b in subgraphs:
        count += minimum_distance(
            [actual[i] for i in indices_a],
            [predicted[j] for j in indices_b],
            distance,
            threshold,
        )
    return count


def bench(label: str, func, n_runs: int = 5, warmup: int = 1):
    """Run a single benchmark configuration and report median timing."""
    times = []
    count = 0

    for i in range(warmup + n_runs):
        t0 = time.perf_counter()
        count = func()
        t1 = time.perf_counter()

        if i >= warmup:
            times.append(t1 - t0)

    median_ms = statistics.median(times) * 1000
    min_ms = min(times) * 1000
    max_ms = max(times) * 1000

    print(f"  {label}")
    print(f"    matches: {count}")
    print(f"    median: {median_ms:.2f} ms  (min: {min_ms:.2f}, max: {max_ms:.2f})")
    print()


def main():
    # Warm up Numba JIT
    print("Warming up Numba JIT...")
    minimum_distance([(0.0, 0.0)], [(0.1, 0.0)], distance, 1.0)
    print()

    threshold = 1.0
    for n in (50, 200, 500):
        actual, predicted = make_points(n, size=math.sqrt(n) * 5, seed=n)

        print("=" * 60)
        print(f"{n} actual / {len(predicted)} predicted points")
        print("=" * 60)

        bench(
            "nearest_neighbour",
            lambda: nearest_neighbour(actual, predicted, distance, threshold),
        )
        bench(
            "maximum_cardinality",
            lambda: maximum_cardinality(
                actual, predicted,
                lambda a, b: distance(a, b) <= threshold,
            ),
        )
        bench(
            "minimum_distance",
            lambda: minimum_distance(actual, predicted, distance, threshold),
        )
        bench(
            "minimum_distance per sub-graph",
            lambda: minimum_distance_by_subgraph(actual, predicted, threshold),
        )


if __name__ == "__main__":
    main()
