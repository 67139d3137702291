"""
This module has the result classes produced by the scoring calculators:
- ClassificationResult / FractionClassificationResult: confusion matrix
  counts with derived precision, recall, Jaccard, F-score, etc.
- MatchResult: counts from matching two point sets, plus RMSD
- IntersectionResult: overlap of two sets
- PrecisionRecallCurve: cumulative scores over ranked predictions
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

import numpy as np

from ..utils.numeric import divide

if TYPE_CHECKING:
    import pandas as pd


class _ConfusionMetrics:
    """
    Metrics derived from the tp, fp, tn and fn attributes.

    Any ratio with a zero denominator is reported as 0.
    """
    __slots__ = ()

    @property
    def precision(self) -> float:
        """tp / (tp + fp)"""
        return divide(self.tp, self.tp + self.fp)

    @property
    def recall(self) -> float:
        """tp / (tp + fn)"""
        return divide(self.tp, self.tp + self.fn)

    @property
    def jaccard(self) -> float:
        """tp / (tp + fp + fn)"""
        return divide(self.tp, self.tp + self.fp + self.fn)

    # Aliases
    @property
    def tpr(self) -> float:
        return self.recall

    @property
    def ppv(self) -> float:
        return self.precision

    @property
    def tnr(self) -> float:
        """Specificity: tn / (fp + tn)"""
        return divide(self.tn, self.fp + self.tn)

    @property
    def npv(self) -> float:
        """Negative predictive value: tn / (tn + fn)"""
        return divide(self.tn, self.tn + self.fn)

    @property
    def fpr(self) -> float:
        """Fall-out: fp / (fp + tn)"""
        return divide(self.fp, self.fp + self.tn)

    @property
    def fnr(self) -> float:
        """Miss rate: fn / (tp + fn)"""
        return divide(self.fn, self.tp + self.fn)

    @property
    def fdr(self) -> float:
        """False discovery rate: fp / (tp + fp)"""
        return divide(self.fp, self.tp + self.fp)

    @property
    def accuracy(self) -> float:
        """(tp + tn) / total"""
        return divide(self.tp + self.tn, self.tp + self.fp + self.tn + self.fn)

    @property
    def mcc(self) -> float:
        """Matthews correlation coefficient, clipped to [-1, 1]"""
        tp, fp, tn, fn = self.tp, self.fp, self.tn, self.fn
        d = (tp + fp) * (tp + fn) * (tn + fp) * (tn + fn)
        if d == 0:
            return 0.0
        mcc = (tp * tn - fp * fn) / math.sqrt(d)
        return max(-1.0, min(1.0, mcc))

    @property
    def informedness(self) -> float:
        """TPR + TNR - 1"""
        return self.tpr + self.tnr - 1

    @property
    def markedness(self) -> float:
        """PPV + NPV - 1"""
        return self.ppv + self.npv - 1

    def f_score(self, beta: float) -> float:
        """
        Compute the F-beta score.

        F = ((1 + beta^2) * P * R) / (beta^2 * P + R)

        Args:
            beta: Weight of recall relative to precision

        Returns:
            The F-score, or 0 when precision and recall are both 0
        """
        p = self.precision
        r = self.recall
        b2 = beta * beta
        denominator = b2 * p + r
        if denominator == 0:
            return 0.0
        f = ((1 + b2) * p * r) / denominator
        return 0.0 if math.isnan(f) else f

    @property
    def f1(self) -> float:
        return self.f_score(1.0)


@dataclass(frozen=True, slots=True)
class ClassificationResult(_ConfusionMetrics):
    """
    Counts from a binary classification.

    Attributes:
        tp: True positives
        fp: False positives
        tn: True negatives
        fn: False negatives
    """
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def positives(self) -> int:
        return self.tp + self.fn

    @property
    def negatives(self) -> int:
        return self.fp + self.tn

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.tn + self.fn


@dataclass(frozen=True, slots=True)
class FractionClassificationResult(_ConfusionMetrics):
    """
    Classification counts where a sample may be partially correct.

    Attributes:
        tp: Fractional true positives
        fp: Fractional false positives
        tn: Fractional true negatives
        fn: Fractional false negatives
        n_positives: Number of positive samples, if known
        n_negatives: Number of negative samples, if known
    """
    tp: float
    fp: float
    tn: float
    fn: float
    n_positives: Optional[int] = None
    n_negatives: Optional[int] = None

    @property
    def positives(self) -> float:
        """Sample count if given, else tp + fn"""
        if self.n_positives is not None:
            return self.n_positives
        return self.tp + self.fn

    @property
    def negatives(self) -> float:
        """Sample count if given, else fp + tn"""
        if self.n_negatives is not None:
            return self.n_negatives
        return self.fp + self.tn


@dataclass(frozen=True, slots=True)
class MatchResult(_ConfusionMetrics):
    """
    Result of matching a set of predicted points against actual points.

    Matching has no true negatives, so tn is always 0.

    Attributes:
        tp: Matched predictions
        fp: Unmatched predictions
        fn: Unmatched actual points
        rmsd: Root mean squared distance of the matches (or, for pulses,
            the overlap-weighted match score)

    Example:
        >>> result = MatchResult(tp=2, fp=1, fn=0, rmsd=0.5)
        >>> result.precision
        0.6666666666666666
        >>> result.number_predicted
        3
    """
    tp: int
    fp: int
    fn: int
    rmsd: float = 0.0

    @property
    def tn(self) -> int:
        return 0

    @property
    def number_predicted(self) -> int:
        return self.tp + self.fp

    @property
    def number_actual(self) -> int:
        return self.tp + self.fn

    def __repr__(self) -> str:
        return (
            f"MatchResult(tp={self.tp}, fp={self.fp}, fn={self.fn}, "
            f"jaccard={self.jaccard:.4f}, rmsd={self.rmsd:.4f})"
        )


@dataclass(frozen=True, slots=True)
class IntersectionResult:
    """
    Overlap between two sets A and B.

    Attributes:
        intersection: Size of A & B
        size_a_only: Size of A - B
        size_b_only: Size of B - A
    """
    intersection: int
    size_a_only: int
    size_b_only: int

    @property
    def size_a(self) -> int:
        return self.intersection + self.size_a_only

    @property
    def size_b(self) -> int:
        return self.intersection + self.size_b_only


@dataclass
class PrecisionRecallCurve:
    """
    Scores over the first N ranked predictions, for N = 0..n_predictions.

    Index 0 corresponds to no predictions, where precision is 1 by
    convention and recall and Jaccard are 0.

    Attributes:
        precision: Precision after each prediction
        recall: Recall after each prediction
        jaccard: Jaccard after each prediction
    """
    precision: np.ndarray
    recall: np.ndarray
    jaccard: np.ndarray

    def __len__(self) -> int:
        return len(self.precision)

    def max_jaccard_index(self) -> int:
        """Number of predictions at which Jaccard peaks (first if tied)"""
        return int(np.argmax(self.jaccard))

    def to_dataframe(self) -> 'pd.DataFrame':
        """
        Convert the curve to a pandas DataFrame, if pandas is installed.

        Returns:
            pandas.DataFrame with columns n_predictions, precision, recall
            and jaccard

        Raises:
            ImportError: If pandas is not installed
        """
        try:
            import pandas as pd
        except ImportError:
            raise ImportError(
                "pandas is required for to_dataframe(). "
                "Install with: pip install pandas"
            )

        return pd.DataFrame({
            'n_predictions': np.arange(len(self.precision)),
            'precision': self.precision,
            'recall': self.recall,
            'jaccard': self.jaccard,
        })
