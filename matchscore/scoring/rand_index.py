"""
Rand index and adjusted Rand index between two clusterings of the same
elements

The index counts element pairs on which the two clusterings agree
(together in both, or apart in both). It is computed from the contingency
table of cluster sizes.

This measure was adapted from:
[Rand, 1971](https://doi.org/10.1080/01621459.1971.10482356)
[Hubert & Arabie, 1985](https://doi.org/10.1007/BF01908075)
"""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ..utils.resequencer import Resequencer

logger = logging.getLogger(__name__)

MAX_PAIRS = 2**63 - 1


def binomial2(n: int) -> int:
    """Number of unordered pairs from n items: n choose 2"""
    return n * (n - 1) // 2


def _sum_pairs(counts: np.ndarray) -> int:
    """
    Sum n choose 2 over the counts.

    Raises:
        OverflowError: If the sum exceeds the signed 64-bit range
    """
    total = 0
    for c in counts.tolist():
        total += binomial2(c)
    if total > MAX_PAIRS:
        raise OverflowError(f"Pair count {total} exceeds the 64-bit range")
    return total


def compact(labels: Sequence[int] | np.ndarray) -> tuple[np.ndarray, int]:
    """
    Renumber cluster labels to 0..k-1 in order of first appearance.

    Returns:
        (compacted labels, number of clusters k)
    """
    resequencer = Resequencer()
    out = resequencer.renumber(labels)
    return out, resequencer.number_of_ids


def _prepare(labels: np.ndarray, n: int) -> tuple[np.ndarray, int]:
    """Labels as indices into the contingency table, and its size"""
    lo = int(labels.min())
    hi = int(labels.max())
    if lo < 0 or hi >= n:
        logger.debug("Compacting labels in range [%d, %d] for %d elements", lo, hi, n)
        return compact(labels)
    return labels, hi + 1


class RandIndex:
    """
    Computes the Rand index between two clusterings.

    Each call to compute() replaces the previous result.

    Example:
        >>> ri = RandIndex().compute([0, 0, 1, 1], [1, 1, 0, 0])
        >>> ri.rand_index
        1.0
    """

    def __init__(self):
        self._n = -1
        self._tp = 0
        self._tp_fp = 0
        self._tp_fn = 0

    def compute(
        self,
        set1: Sequence[int] | np.ndarray,
        set2: Sequence[int] | np.ndarray,
    ) -> RandIndex:
        """
        Compute the pair counts for two clusterings.

        Labels may be any integers; negative or sparse labels are
        renumbered before the contingency table is built.

        Args:
            set1: Cluster label of each element in the first clustering
            set2: Cluster label of each element in the second clustering

        Returns:
            self, for chaining

        Raises:
            ValueError: If the label arrays differ in length
            OverflowError: If a pair count exceeds the 64-bit range
        """
        labels1 = np.asarray(set1, dtype=np.int64)
        labels2 = np.asarray(set2, dtype=np.int64)
        if labels1.shape != labels2.shape or labels1.ndim != 1:
            raise ValueError(
                f"Label arrays must be 1D and the same length: "
                f"{labels1.shape} != {labels2.shape}"
            )

        n = labels1.shape[0]
        self._n = n
        if n < 2:
            self._tp = self._tp_fp = self._tp_fn = 0
            return self

        labels1, n1 = _prepare(labels1, n)
        labels2, n2 = _prepare(labels2, n)

        table = np.zeros((n1, n2), dtype=np.int64)
        np.add.at(table, (labels1, labels2), 1)

        self._tp = _sum_pairs(table[table > 1])
        self._tp_fp = _sum_pairs(table.sum(axis=1))
        self._tp_fn = _sum_pairs(table.sum(axis=0))
        return self

    def _check_computed(self) -> None:
        if self._n < 0:
            raise RuntimeError("No Rand index has been computed")

    @property
    def n(self) -> int:
        """Number of elements in the last computation"""
        self._check_computed()
        return self._n

    @property
    def true_positives(self) -> int:
        """Pairs in the same cluster in both clusterings"""
        self._check_computed()
        return self._tp

    @property
    def false_positives(self) -> int:
        """Pairs together in the first clustering only"""
        self._check_computed()
        return self._tp_fp - self._tp

    @property
    def false_negatives(self) -> int:
        """Pairs together in the second clustering only"""
        self._check_computed()
        return self._tp_fn - self._tp

    @property
    def true_negatives(self) -> int:
        """Pairs in different clusters in both clusterings"""
        self._check_computed()
        return binomial2(self._n) - self._tp_fp - self._tp_fn + self._tp

    def _identical(self) -> bool:
        return self._tp == self._tp_fp == self._tp_fn

    @property
    def rand_index(self) -> float:
        """
        Fraction of element pairs on which the clusterings agree, in [0, 1].

        Defined as 0 for no elements and 1 for a single element.

        Raises:
            RuntimeError: If compute() has not been called
        """
        self._check_computed()
        if self._n < 2:
            return 1.0 if self._n == 1 else 0.0
        if self._identical():
            return 1.0
        return (self._tp + self.true_negatives) / binomial2(self._n)

    @property
    def adjusted_rand_index(self) -> float:
        """
        Rand index corrected for chance: 1 for identical clusterings and
        around 0 for random ones (can be negative).

        Defined as 0 for no elements and 1 for a single element.

        Raises:
            RuntimeError: If compute() has not been called
        """
        self._check_computed()
        if self._n < 2:
            return 1.0 if self._n == 1 else 0.0
        if self._identical():
            return 1.0
        expected = self._tp_fp * self._tp_fn / binomial2(self._n)
        maximum = 0.5 * (self._tp_fp + self._tp_fn)
        return (self._tp - expected) / (maximum - expected)


def rand_index(
    set1: Sequence[int] | np.ndarray,
    set2: Sequence[int] | np.ndarray,
) -> float:
    """Compute the Rand index between two clusterings"""
    return RandIndex().compute(set1, set2).rand_index


def adjusted_rand_index(
    set1: Sequence[int] | np.ndarray,
    set2: Sequence[int] | np.ndarray,
) -> float:
    """Compute the adjusted Rand index between two clusterings"""
    return RandIndex().compute(set1, set2).adjusted_rand_index


def simple_rand_index(
    set1: Sequence[int] | np.ndarray,
    set2: Sequence[int] | np.ndarray,
) -> float:
    """
    Compute the Rand index by checking every element pair.

    This is O(n^2) and intended as a reference for rand_index().

    Raises:
        ValueError: If the label arrays differ in length
    """
    labels1 = np.asarray(set1)
    labels2 = np.asarray(set2)
    if labels1.shape != labels2.shape:
        raise ValueError(
            f"Label arrays must be the same length: "
            f"{labels1.shape} != {labels2.shape}"
        )
    n = labels1.shape[0]
    if n < 2:
        return 1.0 if n == 1 else 0.0

    agree = 0
    for i in range(n - 1):
        same1 = labels1[i + 1:] == labels1[i]
        same2 = labels2[i + 1:] == labels2[i]
        agree += int(np.count_nonzero(same1 == same2))
    return agree / binomial2(n)
