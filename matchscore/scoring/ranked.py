"""
Scoring of ranked predictions that match actual items with a fractional
score.

Predicted ids double as ranks: the first N predictions are those with
predicted_id < N. Assignments are consumed in order of distance.
"""
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from .results import (
    ClassificationResult,
    FractionClassificationResult,
    PrecisionRecallCurve,
)
from ..core.assignment import FractionalAssignmentLike, sort_assignments
from ..utils.numeric import divide


class RankedScoreCalculator:
    """
    Computes classification scores using the first N ranked predictions.

    The assignment list is sorted in place by distance on construction.

    Attributes:
        max_a: Largest actual id
        max_p: Largest predicted id
        total_a: Number of distinct actual ids in the assignments
        total_p: Number of distinct predicted ids in the assignments
        scored_assignments: Assignments accepted by the last call to
            score() with save=True, otherwise None

    Example:
        >>> from matchscore import FractionalAssignment
        >>> calc = RankedScoreCalculator([
        ...     FractionalAssignment(0, 0, 0.0, 0.5),
        ...     FractionalAssignment(1, 1, 0.5, 1.0),
        ... ])
        >>> calc.score(2).tolist()
        [1.5, 0.5, 2.0, 0.0]
    """

    def __init__(
        self,
        assignments: list[FractionalAssignmentLike],
        max_a: Optional[int] = None,
        max_p: Optional[int] = None,
    ):
        """
        Args:
            assignments: Fractional assignments; sorted in place
            max_a: Largest actual id, computed from the assignments if None
            max_p: Largest predicted id, computed from the assignments if None

        Raises:
            ValueError: If an id is negative or above the given maximum
        """
        self._assignments = sort_assignments(assignments)

        target_ids = [a.target_id for a in assignments]
        predicted_ids = [a.predicted_id for a in assignments]
        observed_a = max(target_ids, default=0)
        observed_p = max(predicted_ids, default=0)
        if min(target_ids, default=0) < 0 or min(predicted_ids, default=0) < 0:
            raise ValueError("Assignment ids must be non-negative")

        self.max_a = observed_a if max_a is None else max_a
        self.max_p = observed_p if max_p is None else max_p
        if observed_a > self.max_a or observed_p > self.max_p:
            raise ValueError(
                f"Assignment ids ({observed_a}, {observed_p}) exceed the "
                f"maximum ids ({self.max_a}, {self.max_p})"
            )

        self.total_a = len(set(target_ids))
        self.total_p = len(set(predicted_ids))
        self.scored_assignments: Optional[list[FractionalAssignmentLike]] = None

    def get_assignments(
        self,
        n_predictions: Optional[int] = None,
    ) -> list[FractionalAssignmentLike]:
        """
        Get a copy of the sorted assignments.

        Args:
            n_predictions: Only include assignments with a predicted id
                below this value. None includes all.
        """
        if n_predictions is None or self.max_p < n_predictions:
            return list(self._assignments)
        return [a for a in self._assignments if a.predicted_id < n_predictions]

    def score(
        self,
        n_predictions: int,
        multiple_matches: bool = False,
        save: bool = False,
    ) -> np.ndarray:
        """
        Score the first N predictions.

        In single match mode each actual and each predicted id is used at
        most once. With multiple matches a predicted id may be paired with
        several actual ids and sum their scores, but each prediction
        removes at most 1 from the false positives.

        Args:
            n_predictions: Number of ranked predictions to use
            multiple_matches: Allow a prediction to match several actual ids
            save: Keep the accepted assignments in scored_assignments

        Returns:
            Array of [tp, fp, itp, ifp]: the fractional true and false
            positive scores and the integer count of matched and unmatched
            predictions
        """
        assignments = self.get_assignments(n_predictions)
        scored: Optional[list[FractionalAssignmentLike]] = [] if save else None
        used_a = np.zeros(self.max_a + 1, dtype=bool)

        if multiple_matches:
            predicted_score = np.zeros(self.max_p + 1, dtype=np.float64)
            tp = 0.0
            remaining_a = self.total_a
            for a in assignments:
                if used_a[a.target_id]:
                    continue
                used_a[a.target_id] = True
                tp += a.score
                predicted_score[a.predicted_id] += a.score
                if scored is not None:
                    scored.append(a)
                remaining_a -= 1
                if remaining_a == 0:
                    break

            matched = predicted_score[predicted_score != 0]
            fp = float(n_predictions) - float(np.minimum(matched, 1.0).sum())
            itp = len(matched)
            self.scored_assignments = scored
            return np.array([tp, fp, itp, n_predictions - itp], dtype=np.float64)

        used_p = np.zeros(self.max_p + 1, dtype=bool)
        tp = 0.0
        remaining_p = self.total_p
        remaining_a = self.total_a
        for a in assignments:
            if used_a[a.target_id] or used_p[a.predicted_id]:
                continue
            used_a[a.target_id] = True
            used_p[a.predicted_id] = True
            tp += a.score
            if scored is not None:
                scored.append(a)
            remaining_p -= 1
            if remaining_p == 0:
                break
            remaining_a -= 1
            if remaining_a == 0:
                break

        itp = self.total_p - remaining_p
        self.scored_assignments = scored
        return np.array(
            [tp, n_predictions - tp, itp, n_predictions - itp],
            dtype=np.float64,
        )

    @staticmethod
    def to_fraction_classification_result(
        score: Sequence[float],
        n_actual: int,
    ) -> FractionClassificationResult:
        """Convert [tp, fp, itp, ifp] to a result using the fractional scores"""
        tp = score[0]
        return FractionClassificationResult(
            tp=tp, fp=score[1], tn=0.0, fn=n_actual - tp,
        )

    @staticmethod
    def to_classification_result(
        score: Sequence[float],
        n_actual: int,
    ) -> ClassificationResult:
        """Convert [tp, fp, itp, ifp] to a result using the integer counts"""
        tp = int(score[2])
        return ClassificationResult(
            tp=tp, fp=int(score[3]), tn=0, fn=n_actual - tp,
        )

    @staticmethod
    def get_match_score(
        assignments: Sequence[FractionalAssignmentLike],
        n_predictions: int,
    ) -> np.ndarray:
        """
        Sum the assignment scores for each predicted id.

        The sum may be above 1 for predictions matched multiple times.

        Raises:
            ValueError: If a predicted id is not below n_predictions
        """
        match_score = np.zeros(n_predictions, dtype=np.float64)
        for a in assignments:
            if a.predicted_id >= n_predictions:
                raise ValueError(
                    f"Predicted id {a.predicted_id} is not below "
                    f"n_predictions={n_predictions}"
                )
            match_score[a.predicted_id] += a.score
        return match_score

    @staticmethod
    def get_precision_recall_curve(
        assignments: Sequence[FractionalAssignmentLike],
        n_actual: int,
        n_predictions: int,
    ) -> PrecisionRecallCurve:
        """
        Compute precision, recall and Jaccard after each ranked prediction.

        A prediction with no score is a whole false positive. A prediction
        scoring above 1 (multiple matches) adds only to the true positives.
        Otherwise the score is split between true and false positives.

        Args:
            assignments: Accepted assignments, e.g. scored_assignments
            n_actual: Number of actual items
            n_predictions: Number of ranked predictions

        Returns:
            PrecisionRecallCurve with arrays of length n_predictions + 1
        """
        match_score = RankedScoreCalculator.get_match_score(
            assignments, n_predictions,
        )
        precision = np.zeros(n_predictions + 1, dtype=np.float64)
        recall = np.zeros(n_predictions + 1, dtype=np.float64)
        jaccard = np.zeros(n_predictions + 1, dtype=np.float64)
        precision[0] = 1.0

        tp = 0.0
        fp = 0.0
        for i, s in enumerate(match_score.tolist(), start=1):
            if s == 0:
                fp += 1.0
            elif s > 1.0:
                tp += s
            else:
                tp += s
                fp += 1.0 - s
            recall[i] = divide(tp, n_actual)
            precision[i] = divide(tp, tp + fp)
            # tp + fp + fn == fp + n_actual
            jaccard[i] = divide(tp, fp + n_actual)

        return PrecisionRecallCurve(
            precision=precision, recall=recall, jaccard=jaccard,
        )
