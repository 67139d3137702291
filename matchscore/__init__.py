"""
matchscore: A Python package for matching and scoring point detections.

This package pairs predicted points with actual points using bipartite
matching (Hopcroft-Karp maximum cardinality, greedy nearest neighbour,
Kuhn-Munkres minimum distance), and scores the result with classification
statistics, ranked precision-recall curves and the (adjusted) Rand index.
"""
import logging

__version__ = "0.1.0"

# Main API
from .config import MatchConfig
from .scoring.calculator import (
    analyse_results,
    analyse_results_2d,
    analyse_results_3d,
    analyse_pulses,
    intersection,
)
from .scoring.ranked import RankedScoreCalculator
from .scoring.rand_index import (
    RandIndex,
    rand_index,
    adjusted_rand_index,
)
from .scoring.rmsmd import rmsmd

# Results objects
from .scoring.results import (
    ClassificationResult,
    FractionClassificationResult,
    MatchResult,
    IntersectionResult,
    PrecisionRecallCurve,
)

# Matching algorithms
from .core.assignment import (
    Assignment,
    MutableAssignment,
    FractionalAssignment,
    MutableFractionalAssignment,
    sort_assignments,
)
from .core.graphs import extract_subgraphs
from .core.hopcroft_karp import HopcroftKarpMatching
from .core.kuhn_munkres import kuhn_munkres_assignment
from .core.matchings import (
    maximum_cardinality,
    nearest_neighbour,
    minimum_distance,
)

# Point types
from .utils.points import Coordinate, BasePoint, Pulse, PointPair

logging.getLogger(__name__).addHandler(logging.NullHandler())

def match_points(
    actual,
    predicted,
    distance_threshold: float,
    config: MatchConfig | None = None,
    **kwargs
) -> MatchResult:
    """
    Convenience function for matching two point sets right away.

    Calling this function is equivalent to calling analyse_results() with
    the given config, or the default MatchConfig() (nearest neighbour on
    the XY distance) if none is given.

    Args:
        actual: Actual points (any objects with x, y, z attributes)
        predicted: Predicted points
        distance_threshold: Maximum distance of a match
        config: Matching strategy and dimensions
            Default: None (nearest neighbour, 2D)
        **kwargs: Output lists passed to analyse_results()
            (true_positives, false_positives, false_negatives, matches)

    Returns:
        MatchResult with tp, fp, fn and the RMSD of the matches

    Example:
        >>> from matchscore import match_points, BasePoint
        >>>
        >>> result = match_points(
        >>>     actual=[BasePoint(0, 0), BasePoint(10, 10)],
        >>>     predicted=[BasePoint(0.5, 0.5), BasePoint(10.5, 10.5)],
        >>>     distance_threshold=1.0,
        >>> )

        >>> # Smallest total distance in 3D
        >>> result = match_points(
        >>>     actual, predicted, 1.0,
        >>>     config=MatchConfig(strategy='minimum_distance', dimensions=3),
        >>> )
    """
    config = config or MatchConfig()

    return analyse_results(
        actual,
        predicted,
        distance_threshold,
        config=config,
        **kwargs
    )


__all__ = [
    # Primary API
    "match_points",
    "MatchConfig",
    "analyse_results",
    "analyse_results_2d",
    "analyse_results_3d",
    "analyse_pulses",
    "intersection",
    "RankedScoreCalculator",
    "RandIndex",
    "rand_index",
    "adjusted_rand_index",
    "rmsmd",

    # Results
    "ClassificationResult",
    "FractionClassificationResult",
    "MatchResult",
    "IntersectionResult",
    "PrecisionRecallCurve",

    # Matching
    "Assignment",
    "MutableAssignment",
    "FractionalAssignment",
    "MutableFractionalAssignment",
    "sort_assignments",
    "extract_subgraphs",
    "HopcroftKarpMatching",
    "kuhn_munkres_assignment",
    "maximum_cardinality",
    "nearest_neighbour",
    "minimum_distance",

    # Point types
    "Coordinate",
    "BasePoint",
    "Pulse",
    "PointPair",
]
