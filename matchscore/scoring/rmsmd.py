"""
Root mean square minimum distance (RMSMD) between two point sets.

For every point the squared distance to the closest point of the other
set is taken; RMSMD is the root of the mean over both sets. It measures
how well two sets overlay without requiring a matching.
"""
from __future__ import annotations

import math
from typing import Callable, Optional

import numpy as np

# Rows of A compared per block in the vectorised search
_BLOCK_SIZE = 1024


def _sum_min_squared(points1: np.ndarray, points2: np.ndarray) -> float:
    total = 0.0
    for start in range(0, len(points1), _BLOCK_SIZE):
        block = points1[start:start + _BLOCK_SIZE]
        diff = block[:, None, :] - points2[None, :, :]
        d2 = np.einsum('ijk,ijk->ij', diff, diff)
        total += float(d2.min(axis=1).sum())
    return total


def _sum_min_distance(
    points1: np.ndarray,
    points2: np.ndarray,
    distance: Callable[[np.ndarray, np.ndarray], float],
) -> float:
    total = 0.0
    for p1 in points1:
        total += min(distance(p1, p2) for p2 in points2)
    return total


def rmsmd(
    a: np.ndarray,
    b: np.ndarray,
    distance: Optional[Callable[[np.ndarray, np.ndarray], float]] = None,
) -> float:
    """
    Compute the root mean square minimum distance between two point sets.

    Args:
        a: Points of shape (n, d)
        b: Points of shape (m, d)
        distance: Squared distance function between two points.
            Default: squared Euclidean distance

    Returns:
        sqrt((sum of min d2 from A to B + sum of min d2 from B to A) / (n + m))

    Raises:
        ValueError: If either set is empty or the dimensions differ

    Example:
        >>> rmsmd(np.array([[0.0, 0.0]]), np.array([[3.0, 4.0]]))
        5.0
    """
    a = np.atleast_2d(np.asarray(a, dtype=np.float64))
    b = np.atleast_2d(np.asarray(b, dtype=np.float64))
    if a.size == 0 or b.size == 0:
        raise ValueError(
            f"Point sets must not be empty: sizes {len(a)} and {len(b)}"
        )
    if a.shape[1] != b.shape[1]:
        raise ValueError(
            f"Point dimensions differ: {a.shape[1]} != {b.shape[1]}"
        )

    if distance is None:
        sum_a = _sum_min_squared(a, b)
        sum_b = _sum_min_squared(b, a)
    else:
        sum_a = _sum_min_distance(a, b, distance)
        sum_b = _sum_min_distance(b, a, distance)

    return math.sqrt((sum_a + sum_b) / (len(a) + len(b)))
