"""
Tests for matching actual and predicted points into classification results.
"""
import math

import pytest

import matchscore
from matchscore import (
    BasePoint,
    MatchConfig,
    PointPair,
    Pulse,
    analyse_pulses,
    analyse_results,
    analyse_results_2d,
    analyse_results_3d,
    intersection,
    match_points,
)
from matchscore.scoring.calculator import NO_PULSE_MATCH, pulse_edge_function


# ---------------------------------------------------------------------------
# 2D / 3D points
# ---------------------------------------------------------------------------

class TestAnalyseResults2D:
    def setup_method(self):
        self.actual = [BasePoint(0, 0), BasePoint(10, 10)]
        self.predicted = [BasePoint(0.5, 0.5), BasePoint(10.5, 10.5)]

    def test_two_matches(self):
        result = analyse_results_2d(self.actual, self.predicted, 1.0)
        assert (result.tp, result.fp, result.fn) == (2, 0, 0)
        assert result.rmsd == pytest.approx(math.sqrt(0.5))
        assert result.precision == 1.0
        assert result.recall == 1.0
        assert result.jaccard == 1.0

    def test_no_match(self):
        result = analyse_results_2d([BasePoint(0, 0)], [BasePoint(5, 5)], 1.0)
        assert (result.tp, result.fp, result.fn) == (0, 1, 1)
        assert result.precision == 0.0
        assert result.recall == 0.0
        assert result.jaccard == 0.0
        assert result.rmsd == 0.0

    def test_output_lists(self):
        actual = self.actual + [BasePoint(50, 50)]
        predicted = self.predicted + [BasePoint(-20, 3)]
        tp, fp, fn, matches = [], [], [], ["stale"]
        result = analyse_results_2d(
            actual, predicted, 1.0,
            true_positives=tp,
            false_positives=fp,
            false_negatives=fn,
            matches=matches,
        )
        assert (result.tp, result.fp, result.fn) == (2, 1, 1)
        assert sorted(tp, key=lambda p: p.x) == self.predicted
        assert fp == [BasePoint(-20, 3)]
        assert fn == [BasePoint(50, 50)]
        assert len(matches) == 2
        assert all(isinstance(m, PointPair) for m in matches)
        assert {m.point1 for m in matches} == set(self.actual)
        assert all(m.distance_xy() < 1.0 for m in matches)

    def test_empty_inputs(self):
        fp, fn = [], []
        result = analyse_results_2d(
            [], self.predicted, 1.0, false_positives=fp, false_negatives=fn,
        )
        assert (result.tp, result.fp, result.fn) == (0, 2, 0)
        assert fp == self.predicted

        result = analyse_results_2d(
            self.actual, [], 1.0, false_positives=fp, false_negatives=fn,
        )
        assert (result.tp, result.fp, result.fn) == (0, 0, 2)
        assert fp == []
        assert fn == self.actual

    def test_ignores_z(self):
        actual = [BasePoint(0, 0, 0)]
        predicted = [BasePoint(0.5, 0, 100)]
        assert analyse_results_2d(actual, predicted, 1.0).tp == 1
        assert analyse_results_3d(actual, predicted, 1.0).tp == 0

    def test_conservation(self):
        actual = [BasePoint(i, i) for i in range(10)]
        predicted = [BasePoint(i + 0.3, i) for i in range(0, 20, 2)]
        result = analyse_results_2d(actual, predicted, 0.5)
        assert result.number_predicted == len(predicted)
        assert result.number_actual == len(actual)


class TestAnalyseResults3D:
    def test_three_dimensional_distance(self):
        actual = [BasePoint(0, 0, 0), BasePoint(5, 5, 5)]
        predicted = [BasePoint(0, 0, 0.6), BasePoint(5, 5, 7)]
        matches = []
        result = analyse_results_3d(actual, predicted, 1.0, matches=matches)
        assert (result.tp, result.fp, result.fn) == (1, 1, 1)
        assert result.rmsd == pytest.approx(0.6)
        assert matches == [PointPair(actual[0], predicted[0])]


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

class TestAnalyseResultsStrategies:
    def setup_method(self):
        # Nearest neighbour pairs a0 with p0 and leaves a1 unmatched
        self.actual = [BasePoint(0, 0), BasePoint(1, 0)]
        self.predicted = [BasePoint(0.45, 0), BasePoint(-0.9, 0)]

    def test_default_is_nearest_neighbour(self):
        result = analyse_results(self.actual, self.predicted, 1.0)
        assert result == analyse_results_2d(self.actual, self.predicted, 1.0)
        assert result.tp == 1

    @pytest.mark.parametrize("strategy", ["minimum_distance", "maximum_cardinality"])
    def test_optimal_strategies(self, strategy):
        tp, fp, fn, matches = [], [], [], []
        result = analyse_results(
            self.actual, self.predicted, 1.0,
            config=MatchConfig(strategy=strategy),
            true_positives=tp,
            false_positives=fp,
            false_negatives=fn,
            matches=matches,
        )
        assert (result.tp, result.fp, result.fn) == (2, 0, 0)
        assert result.rmsd == pytest.approx(math.sqrt((0.9**2 + 0.55**2) / 2))
        assert len(tp) == 2
        assert fp == []
        assert fn == []
        assert len(matches) == 2

    def test_three_dimensions(self):
        config = MatchConfig(strategy="minimum_distance", dimensions=3)
        result = analyse_results(
            [BasePoint(0, 0, 0)], [BasePoint(0, 0, 2)], 1.0, config=config,
        )
        assert result.tp == 0


class TestMatchPoints:
    def test_default(self):
        result = match_points(
            actual=[BasePoint(0, 0), BasePoint(10, 10)],
            predicted=[BasePoint(0.5, 0.5), BasePoint(10.5, 10.5)],
            distance_threshold=1.0,
        )
        assert result.tp == 2

    def test_default_config_per_call(self, monkeypatch):
        seen = []

        def record(actual, predicted, distance_threshold, config=None, **kwargs):
            seen.append(config)

        monkeypatch.setattr(matchscore, "analyse_results", record)
        match_points([], [], 1.0)
        match_points([], [], 1.0)
        assert seen[0] == MatchConfig()
        assert seen[0] is not seen[1]

    def test_with_config_and_lists(self):
        fn = []
        result = match_points(
            [BasePoint(0, 0), BasePoint(3, 3)],
            [BasePoint(0, 0.2)],
            1.0,
            config=MatchConfig(strategy="maximum_cardinality"),
            false_negatives=fn,
        )
        assert result.tp == 1
        assert fn == [BasePoint(3, 3)]

    def test_invalid_config(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            MatchConfig(strategy="hungarian")
        with pytest.raises(ValueError, match="dimensions"):
            MatchConfig(dimensions=4)


# ---------------------------------------------------------------------------
# Pulses
# ---------------------------------------------------------------------------

class TestPulses:
    def test_edge_function(self):
        edges = pulse_edge_function(1.0)

        p1 = Pulse(0, 0, start=0, end=0)
        assert edges(p1, p1) == -1

        # Twice as long
        p2 = Pulse(0, 0, start=0, end=1)
        assert edges(p1, p2) == -1
        assert edges(p2, p2) == -2

        # Outside the distance threshold
        p3 = Pulse(10, 10, start=0, end=0)
        assert edges(p1, p3) == NO_PULSE_MATCH

        # No overlap in time
        p4 = Pulse(0, 0, start=10, end=10)
        assert edges(p1, p4) == NO_PULSE_MATCH

    def test_analyse_pulses(self):
        actual = [
            Pulse(0, 0, start=0, end=0),
            Pulse(1, 1, start=0, end=0),
            Pulse(1.1, 1.1, start=0, end=0),
            Pulse(60, 60, start=0, end=0),
        ]
        predicted = [
            Pulse(0, 0, start=0, end=0),
            Pulse(0.4, 0.4, start=0, end=0),
            Pulse(5, 5, start=0, end=0),
        ]
        tp, fp, fn, matches = [], [], [], []
        result = analyse_pulses(
            actual, predicted, 1.0,
            true_positives=tp,
            false_positives=fp,
            false_negatives=fn,
            matches=matches,
        )

        dt = 0.5 ** 2
        expected = (
            actual[0].score(predicted[0], 0.0, dt)
            + actual[1].score(predicted[1], 0.72, dt)
        ) / 4
        assert (result.tp, result.fp, result.fn) == (2, 1, 2)
        assert result.rmsd == pytest.approx(expected)
        assert len(tp) == 2
        assert fp == [predicted[2]]
        assert len(fn) == 2
        assert len(matches) == 2

    def test_zero_threshold_never_matches(self):
        pulses = [Pulse(2, 3, start=0, end=4)]
        assert pulse_edge_function(0.0)(pulses[0], pulses[0]) == NO_PULSE_MATCH
        result = analyse_pulses(pulses, list(pulses), 0.0)
        assert (result.tp, result.fp, result.fn) == (0, 1, 1)
        assert result.rmsd == 0.0

    def test_empty(self):
        result = analyse_pulses([], [Pulse(0, 0, start=0, end=3)], 1.0)
        assert (result.tp, result.fp, result.fn) == (0, 1, 0)
        assert result.rmsd == 0.0


# ---------------------------------------------------------------------------
# Intersection
# ---------------------------------------------------------------------------

class TestIntersection:
    def test_sizes(self):
        result = intersection([1, 2, 3], [2, 3, 4, 5])
        assert result.intersection == 2
        assert result.size_a_only == 1
        assert result.size_b_only == 2
        assert result.size_a == 3
        assert result.size_b == 4

    def test_duplicates_ignored(self):
        result = intersection([1, 1, 2], [2, 2])
        assert (result.intersection, result.size_a_only, result.size_b_only) == (1, 1, 0)
