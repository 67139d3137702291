"""
Scoring of matched point sets, ranked predictions and clusterings
"""

from matchscore.scoring.results import (
    ClassificationResult,
    FractionClassificationResult,
    MatchResult,
    IntersectionResult,
    PrecisionRecallCurve,
)
from matchscore.scoring.calculator import (
    analyse_results_2d,
    analyse_results_3d,
    analyse_results,
    analyse_pulses,
    pulse_edge_function,
    intersection,
)
from matchscore.scoring.ranked import RankedScoreCalculator
from matchscore.scoring.rand_index import (
    RandIndex,
    rand_index,
    adjusted_rand_index,
    simple_rand_index,
    compact,
)
from matchscore.scoring.rmsmd import rmsmd

__all__ = [
    "ClassificationResult",
    "FractionClassificationResult",
    "MatchResult",
    "IntersectionResult",
    "PrecisionRecallCurve",
    "analyse_results_2d",
    "analyse_results_3d",
    "analyse_results",
    "analyse_pulses",
    "pulse_edge_function",
    "intersection",
    "RankedScoreCalculator",
    "RandIndex",
    "rand_index",
    "adjusted_rand_index",
    "simple_rand_index",
    "compact",
    "rmsmd",
]
