"""
Classification of predicted points against actual points.

Predicted and actual points are paired with nearest_neighbour() (closest
pairs first) within a distance threshold. Matched predictions are true
positives, unmatched predictions false positives and unmatched actual
points false negatives.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Hashable, Iterable, Optional, Sequence

from .results import IntersectionResult, MatchResult
from ..config import MatchConfig, MAXIMUM_CARDINALITY, MINIMUM_DISTANCE
from ..core.matchings import (
    maximum_cardinality,
    minimum_distance,
    nearest_neighbour,
)
from ..utils.points import (
    Coordinate,
    PointPair,
    Pulse,
    distance_xy_squared,
    distance_xyz_squared,
)

logger = logging.getLogger(__name__)

# Edge value of a pulse pair that cannot be matched
NO_PULSE_MATCH = 1.0


def _clear(*lists: Optional[list]) -> None:
    for lst in lists:
        if lst is not None:
            lst.clear()


def _pair_up(
    actual: Sequence[Coordinate],
    predicted: Sequence[Coordinate],
    edges: Callable[[int, int], float],
    threshold: float,
    true_positives: Optional[list],
    false_positives: Optional[list],
    false_negatives: Optional[list],
    matches: Optional[list],
) -> tuple[int, float]:
    """
    Match actual to predicted points by index and fill the output lists.

    Returns:
        (number of matches, sum of the matched edge values)
    """
    total = 0.0

    def on_match(i: int, j: int) -> None:
        nonlocal total
        total += edges(i, j)
        if true_positives is not None:
            true_positives.append(predicted[j])
        if matches is not None:
            matches.append(PointPair(actual[i], predicted[j]))

    unmatched_a = None
    if false_negatives is not None:
        unmatched_a = lambda i: false_negatives.append(actual[i])
    unmatched_b = None
    if false_positives is not None:
        unmatched_b = lambda j: false_positives.append(predicted[j])

    count = nearest_neighbour(
        range(len(actual)),
        range(len(predicted)),
        edges,
        threshold,
        matched=on_match,
        unmatched_a=unmatched_a,
        unmatched_b=unmatched_b,
    )
    return count, total


def _analyse(
    actual: Sequence[Coordinate],
    predicted: Sequence[Coordinate],
    distance_threshold: float,
    distance2: Callable[[Coordinate, Coordinate], float],
    true_positives: Optional[list],
    false_positives: Optional[list],
    false_negatives: Optional[list],
    matches: Optional[list],
) -> MatchResult:
    _clear(true_positives, false_positives, false_negatives, matches)

    def edges(i: int, j: int) -> float:
        return distance2(actual[i], predicted[j])

    tp, sum_d2 = _pair_up(
        actual, predicted, edges, distance_threshold * distance_threshold,
        true_positives, false_positives, false_negatives, matches,
    )
    rmsd = math.sqrt(sum_d2 / tp) if tp > 0 else 0.0
    return MatchResult(
        tp=tp,
        fp=len(predicted) - tp,
        fn=len(actual) - tp,
        rmsd=rmsd,
    )


def analyse_results_2d(
    actual: Sequence[Coordinate],
    predicted: Sequence[Coordinate],
    distance_threshold: float,
    true_positives: Optional[list] = None,
    false_positives: Optional[list] = None,
    false_negatives: Optional[list] = None,
    matches: Optional[list] = None,
) -> MatchResult:
    """
    Match predicted to actual points using the XY distance.

    The output lists, when given, are cleared and then filled.

    Args:
        actual: Actual points
        predicted: Predicted points
        distance_threshold: Maximum XY distance of a match
        true_positives: Receives the matched predicted points
        false_positives: Receives the unmatched predicted points
        false_negatives: Receives the unmatched actual points
        matches: Receives a PointPair(actual, predicted) per match

    Returns:
        MatchResult with the RMSD of the matched XY distances

    Example:
        >>> from matchscore import BasePoint
        >>> actual = [BasePoint(0, 0), BasePoint(10, 10)]
        >>> predicted = [BasePoint(0.5, 0.5), BasePoint(10.5, 10.5)]
        >>> result = analyse_results_2d(actual, predicted, 1.0)
        >>> result.tp, result.fp, result.fn
        (2, 0, 0)
    """
    return _analyse(
        actual, predicted, distance_threshold, distance_xy_squared,
        true_positives, false_positives, false_negatives, matches,
    )


def analyse_results_3d(
    actual: Sequence[Coordinate],
    predicted: Sequence[Coordinate],
    distance_threshold: float,
    true_positives: Optional[list] = None,
    false_positives: Optional[list] = None,
    false_negatives: Optional[list] = None,
    matches: Optional[list] = None,
) -> MatchResult:
    """
    Match predicted to actual points using the XYZ distance.

    See analyse_results_2d() for the arguments.
    """
    return _analyse(
        actual, predicted, distance_threshold, distance_xyz_squared,
        true_positives, false_positives, false_negatives, matches,
    )


def pulse_edge_function(distance_threshold: float) -> Callable[[Pulse, Pulse], float]:
    """
    Create the edge function used to match pulses.

    Pairs that overlap in time, lie within the XY distance threshold and
    have a positive score get the negated score, so better matches sort
    first. Other pairs get NO_PULSE_MATCH. A zero threshold matches
    nothing.

    Args:
        distance_threshold: Maximum XY distance of a match. The score
            weight halves at half this distance.

    Returns:
        Function edge(a, b) -> float
    """
    threshold2 = distance_threshold * distance_threshold
    dt = (distance_threshold * 0.5) ** 2

    def edge(a: Pulse, b: Pulse) -> float:
        if a.overlap(b) == 0:
            return NO_PULSE_MATCH
        d2 = distance_xy_squared(a, b)
        if d2 > threshold2:
            return NO_PULSE_MATCH
        score = a.score(b, d2, dt)
        if not score > 0:
            return NO_PULSE_MATCH
        return -score

    return edge


def _count_time_points(pulses: Iterable[Pulse]) -> int:
    return sum(p.time_points for p in pulses)


def analyse_pulses(
    actual: Sequence[Pulse],
    predicted: Sequence[Pulse],
    distance_threshold: float,
    true_positives: Optional[list] = None,
    false_positives: Optional[list] = None,
    false_negatives: Optional[list] = None,
    matches: Optional[list] = None,
) -> MatchResult:
    """
    Match predicted to actual pulses using temporal overlap and XY distance.

    The match score is the sum over matched pairs of the overlap weighted
    by distance, divided by the larger total number of time points of the
    two sets. It is returned in the rmsd field of the result.

    See analyse_results_2d() for the arguments.

    Returns:
        MatchResult with the match score in place of the RMSD
    """
    _clear(true_positives, false_positives, false_negatives, matches)
    edge = pulse_edge_function(distance_threshold)

    def edges(i: int, j: int) -> float:
        return edge(actual[i], predicted[j])

    tp, total = _pair_up(
        actual, predicted, edges, 0.0,
        true_positives, false_positives, false_negatives, matches,
    )
    time_points = max(_count_time_points(actual), _count_time_points(predicted))
    score = -total / time_points if time_points > 0 else 0.0
    logger.debug("Matched %d pulses over %d time points", tp, time_points)
    return MatchResult(
        tp=tp,
        fp=len(predicted) - tp,
        fn=len(actual) - tp,
        rmsd=score,
    )


def intersection(
    a: Iterable[Hashable],
    b: Iterable[Hashable],
) -> IntersectionResult:
    """
    Compute the overlap of two collections of hashable items.

    Duplicates are ignored.

    Example:
        >>> intersection([1, 2, 3], [2, 3, 4, 5])
        IntersectionResult(intersection=2, size_a_only=1, size_b_only=2)
    """
    set_a = set(a)
    set_b = set(b)
    common = len(set_a & set_b)
    return IntersectionResult(
        intersection=common,
        size_a_only=len(set_a) - common,
        size_b_only=len(set_b) - common,
    )


def analyse_results(
    actual: Sequence[Coordinate],
    predicted: Sequence[Coordinate],
    distance_threshold: float,
    config: Optional[MatchConfig] = None,
    true_positives: Optional[list] = None,
    false_positives: Optional[list] = None,
    false_negatives: Optional[list] = None,
    matches: Optional[list] = None,
) -> MatchResult:
    """
    Match predicted to actual points with a configurable strategy.

    The nearest neighbour strategy gives the same result as
    analyse_results_2d() / analyse_results_3d().

    Args:
        actual: Actual points
        predicted: Predicted points
        distance_threshold: Maximum distance of a match
        config: Matching strategy and dimensions. Default: MatchConfig()
        true_positives: Receives the matched predicted points
        false_positives: Receives the unmatched predicted points
        false_negatives: Receives the unmatched actual points
        matches: Receives a PointPair(actual, predicted) per match

    Returns:
        MatchResult with the RMSD of the matched distances
    """
    if config is None:
        config = MatchConfig()
    distance2 = distance_xyz_squared if config.dimensions == 3 else distance_xy_squared

    if config.strategy not in (MINIMUM_DISTANCE, MAXIMUM_CARDINALITY):
        return _analyse(
            actual, predicted, distance_threshold, distance2,
            true_positives, false_positives, false_negatives, matches,
        )

    _clear(true_positives, false_positives, false_negatives, matches)
    threshold2 = distance_threshold * distance_threshold
    sum_d2 = 0.0

    def on_match(a: Coordinate, p: Coordinate) -> None:
        nonlocal sum_d2
        sum_d2 += distance2(a, p)
        if true_positives is not None:
            true_positives.append(p)
        if matches is not None:
            matches.append(PointPair(a, p))

    callbacks = dict(
        matched=on_match,
        unmatched_a=None if false_negatives is None else false_negatives.append,
        unmatched_b=None if false_positives is None else false_positives.append,
    )
    if config.strategy == MINIMUM_DISTANCE:
        # Minimise the sum of distances, not squared distances
        tp = minimum_distance(
            actual, predicted,
            lambda a, p: math.sqrt(distance2(a, p)),
            distance_threshold,
            **callbacks,
        )
    else:
        tp = maximum_cardinality(
            actual, predicted,
            lambda a, p: distance2(a, p) <= threshold2,
            **callbacks,
        )

    rmsd = math.sqrt(sum_d2 / tp) if tp > 0 else 0.0
    return MatchResult(
        tp=tp,
        fp=len(predicted) - tp,
        fn=len(actual) - tp,
        rmsd=rmsd,
    )
