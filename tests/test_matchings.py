"""
Tests for the maximum cardinality, nearest neighbour and minimum distance
matching strategies.
"""
import itertools
import math

import numpy as np
import pytest

from matchscore import (
    BasePoint,
    maximum_cardinality,
    minimum_distance,
    nearest_neighbour,
)
from matchscore.core import matchings
from matchscore.core.matchings import MAX_COST, DISALLOWED_COST


def distance(a, b):
    return math.hypot(a[0] - b[0], a[1] - b[1])


class Collector:
    """Records the callbacks of a matching"""

    def __init__(self):
        self.matched = []
        self.unmatched_a = []
        self.unmatched_b = []

    def kwargs(self):
        return dict(
            matched=lambda a, b: self.matched.append((a, b)),
            unmatched_a=self.unmatched_a.append,
            unmatched_b=self.unmatched_b.append,
        )


def random_points(rng, n, size=10.0):
    return [tuple(p) for p in rng.random((n, 2)) * size]


MATCHERS = [nearest_neighbour, minimum_distance]


# ---------------------------------------------------------------------------
# Shared behaviour of the distance based matchers
# ---------------------------------------------------------------------------

class TestDistanceMatchers:
    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_two_close_pairs(self, matcher):
        a = [(0.0, 0.0), (10.0, 10.0)]
        b = [(0.5, 0.5), (10.5, 10.5)]
        c = Collector()
        assert matcher(a, b, distance, 1.0, **c.kwargs()) == 2
        assert sorted(c.matched) == [(a[0], b[0]), (a[1], b[1])]
        assert c.unmatched_a == []
        assert c.unmatched_b == []

    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_too_far(self, matcher):
        a = [(0.0, 0.0)]
        b = [(5.0, 5.0)]
        c = Collector()
        assert matcher(a, b, distance, 1.0, **c.kwargs()) == 0
        assert c.matched == []
        assert c.unmatched_a == a
        assert c.unmatched_b == b

    @pytest.mark.parametrize("matcher", MATCHERS)
    @pytest.mark.parametrize("a, b", [
        ([], []),
        ([(0.0, 0.0)], []),
        ([], [(0.0, 0.0), (1.0, 1.0)]),
    ])
    def test_empty_input(self, matcher, a, b):
        c = Collector()
        assert matcher(a, b, distance, 1.0, **c.kwargs()) == 0
        assert c.unmatched_a == a
        assert c.unmatched_b == b

    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_none_arguments(self, matcher):
        with pytest.raises(ValueError):
            matcher(None, [], distance, 1.0)
        with pytest.raises(ValueError):
            matcher([], None, distance, 1.0)
        with pytest.raises(ValueError):
            matcher([], [], None, 1.0)

    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_callbacks_optional(self, matcher):
        a = [(0.0, 0.0), (1.0, 0.0)]
        b = [(0.1, 0.0)]
        assert matcher(a, b, distance, 1.0) == 1

    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_nan_distance_never_matches(self, matcher):
        c = Collector()
        assert matcher([1], [2], lambda x, y: math.nan, 1.0, **c.kwargs()) == 0
        assert c.unmatched_a == [1]
        assert c.unmatched_b == [2]

    @pytest.mark.parametrize("matcher", MATCHERS)
    def test_random_properties(self, matcher):
        """Matched pairs stay within the threshold and reruns agree"""
        rng = np.random.default_rng(2024)
        for _ in range(25):
            a = random_points(rng, int(rng.integers(0, 15)))
            b = random_points(rng, int(rng.integers(0, 15)))
            threshold = float(rng.uniform(0.5, 3.0))

            c = Collector()
            count = matcher(a, b, distance, threshold, **c.kwargs())
            assert count == len(c.matched)
            assert count <= min(len(a), len(b))
            for p, q in c.matched:
                assert distance(p, q) <= threshold

            matched_a = [p for p, _ in c.matched]
            matched_b = [q for _, q in c.matched]
            assert sorted(matched_a + c.unmatched_a) == sorted(a)
            assert sorted(matched_b + c.unmatched_b) == sorted(b)

            again = Collector()
            assert matcher(a, b, distance, threshold, **again.kwargs()) == count
            assert again.matched == c.matched


# ---------------------------------------------------------------------------
# Nearest neighbour
# ---------------------------------------------------------------------------

class TestNearestNeighbour:
    def test_greedy_can_under_match(self):
        # The closest pair (a0, b0) takes the only partner of a1
        a = [(0.0, 0.0), (1.0, 0.0)]
        b = [(0.45, 0.0), (-0.9, 0.0)]
        c = Collector()
        assert nearest_neighbour(a, b, distance, 1.0, **c.kwargs()) == 1
        assert c.matched == [(a[0], b[0])]
        assert c.unmatched_a == [a[1]]
        assert c.unmatched_b == [b[1]]

    def test_closer_partner_wins(self):
        a = [(0.0, 0.0), (1.0, 0.0)]
        b = [(0.6, 0.0)]
        c = Collector()
        assert nearest_neighbour(a, b, distance, 1.0, **c.kwargs()) == 1
        assert c.matched == [(a[1], b[0])]
        assert c.unmatched_a == [a[0]]

    def test_closest_first_order(self):
        a = [(0.0, 0.0), (5.0, 0.0)]
        b = [(5.5, 0.0), (0.1, 0.0)]
        c = Collector()
        nearest_neighbour(a, b, distance, 1.0, **c.kwargs())
        assert c.matched == [(a[0], b[1]), (a[1], b[0])]

    def test_ties_keep_enumeration_order(self):
        a = ["a0", "a1"]
        b = ["b0", "b1"]
        c = Collector()
        assert nearest_neighbour(a, b, lambda x, y: 1.0, 1.0, **c.kwargs()) == 2
        assert c.matched == [("a0", "b0"), ("a1", "b1")]

    def test_threshold_is_inclusive(self):
        c = Collector()
        assert nearest_neighbour([0], [1], lambda x, y: 2.0, 2.0, **c.kwargs()) == 1


# ---------------------------------------------------------------------------
# Minimum distance
# ---------------------------------------------------------------------------

def brute_force_min_sum(a, b):
    k = min(len(a), len(b))
    if len(a) <= len(b):
        return min(
            sum(distance(a[i], b[j]) for i, j in enumerate(perm))
            for perm in itertools.permutations(range(len(b)), k)
        )
    return min(
        sum(distance(a[i], b[j]) for j, i in enumerate(perm))
        for perm in itertools.permutations(range(len(a)), k)
    )


class TestMinimumDistance:
    def test_cost_constants(self):
        assert MAX_COST == 65536
        assert DISALLOWED_COST == 2 * MAX_COST + 1

    @pytest.mark.parametrize("threshold", [math.inf, -math.inf, math.nan])
    def test_non_finite_threshold(self, threshold):
        with pytest.raises(ValueError, match="finite"):
            minimum_distance([(0.0, 0.0)], [(0.0, 0.0)], distance, threshold)

    @pytest.mark.parametrize("a, b", [
        ([], [(0.0, 0.0)]),
        ([(0.0, 0.0)], []),
    ])
    def test_empty_input_ignores_threshold(self, a, b):
        c = Collector()
        assert minimum_distance(a, b, distance, math.nan, **c.kwargs()) == 0
        assert c.unmatched_a == a
        assert c.unmatched_b == b

    def test_cost_matrix_too_large(self, monkeypatch):
        monkeypatch.setattr(matchings, "MAX_MATRIX_SIZE", 3)
        a = [(0.0, 0.0), (0.5, 0.0)]
        b = [(0.1, 0.0), (0.4, 0.0)]
        with pytest.raises(OverflowError, match="2x2"):
            minimum_distance(a, b, distance, 1.0)

    def test_beats_greedy(self):
        # Nearest neighbour only finds one pair here
        a = [(0.0, 0.0), (1.0, 0.0)]
        b = [(0.45, 0.0), (-0.9, 0.0)]
        c = Collector()
        assert minimum_distance(a, b, distance, 1.0, **c.kwargs()) == 2
        assert c.matched == [(a[0], b[1]), (a[1], b[0])]

    def test_prefers_smaller_total(self):
        a = [(0.0, 0.0), (2.0, 0.0)]
        b = [(1.0, 0.0), (3.5, 0.0)]
        c = Collector()
        minimum_distance(a, b, distance, 2.0, **c.kwargs())
        # a0 can only reach b0
        assert c.matched == [(a[0], b[0]), (a[1], b[1])]

    def test_equal_distances(self):
        a = [(0.0, 0.0), (2.0, 0.0)]
        b = [(1.0, 0.0), (3.0, 0.0)]
        assert minimum_distance(a, b, distance, 1.0) == 2

    def test_vertices_without_neighbours_reported(self):
        a = [(0.0, 0.0), (100.0, 100.0)]
        b = [(50.0, 50.0), (0.2, 0.0)]
        c = Collector()
        assert minimum_distance(a, b, distance, 1.0, **c.kwargs()) == 1
        assert c.matched == [(a[0], b[1])]
        assert c.unmatched_a == [a[1]]
        assert c.unmatched_b == [b[0]]

    def test_optimal_when_all_pairs_allowed(self):
        """Total distance within the rounding error of the brute force optimum"""
        rng = np.random.default_rng(99)
        for _ in range(20):
            a = random_points(rng, int(rng.integers(1, 6)))
            b = random_points(rng, int(rng.integers(1, 6)))
            threshold = 100.0

            c = Collector()
            count = minimum_distance(a, b, distance, threshold, **c.kwargs())
            assert count == min(len(a), len(b))

            total = sum(distance(p, q) for p, q in c.matched)
            distances = [distance(p, q) for p in a for q in b]
            tolerance = count * (max(distances) - min(distances)) / MAX_COST + 1e-9
            assert total <= brute_force_min_sum(a, b) + tolerance

    def test_matched_in_index_order_of_a(self):
        a = [BasePoint(0, 0), BasePoint(5, 0), BasePoint(10, 0)]
        b = [BasePoint(10.1, 0), BasePoint(0.1, 0), BasePoint(5.1, 0)]
        c = Collector()
        minimum_distance(a, b, lambda p, q: p.distance_xy(q), 0.5, **c.kwargs())
        assert [p for p, _ in c.matched] == a


# ---------------------------------------------------------------------------
# Maximum cardinality
# ---------------------------------------------------------------------------

class TestMaximumCardinality:
    def test_beats_greedy(self):
        a = [(0.0, 0.0), (1.0, 0.0)]
        b = [(0.45, 0.0), (-0.9, 0.0)]
        within = lambda p, q: distance(p, q) <= 1.0
        c = Collector()
        assert maximum_cardinality(a, b, within, **c.kwargs()) == 2
        assert sorted(c.matched) == sorted([(a[0], b[1]), (a[1], b[0])])

    def test_no_consumers(self):
        assert maximum_cardinality([1, 2, 3], [1, 2], lambda x, y: True) == 2

    def test_unmatched_reported_in_order(self):
        c = Collector()
        count = maximum_cardinality(
            [0, 1, 2, 3], [10, 11], lambda x, y: x == 2, **c.kwargs(),
        )
        assert count == 1
        assert c.matched == [(2, 10)] or c.matched == [(2, 11)]
        assert c.unmatched_a == [0, 1, 3]
        assert len(c.unmatched_b) == 1

    def test_empty(self):
        c = Collector()
        assert maximum_cardinality([], [1], lambda x, y: True, **c.kwargs()) == 0
        assert c.unmatched_b == [1]

    def test_none_arguments(self):
        with pytest.raises(ValueError):
            maximum_cardinality(None, [], lambda x, y: True)
        with pytest.raises(ValueError):
            maximum_cardinality([], [], None)

    def test_at_least_nearest_neighbour(self):
        rng = np.random.default_rng(11)
        for _ in range(20):
            a = random_points(rng, 8, size=5.0)
            b = random_points(rng, 8, size=5.0)
            greedy = nearest_neighbour(a, b, distance, 1.0)
            best = maximum_cardinality(a, b, lambda p, q: distance(p, q) <= 1.0)
            optimal = minimum_distance(a, b, distance, 1.0)
            assert best >= greedy
            assert best >= optimal
