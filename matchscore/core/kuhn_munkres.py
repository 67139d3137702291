"""
Python entry point for the Kuhn-Munkres assignment solver
"""
from __future__ import annotations

import numpy as np

from .algorithms import _solve_assignment, INT32_MAX


def kuhn_munkres_assignment(cost: np.ndarray) -> np.ndarray:
    """
    Compute the minimum cost assignment of rows to columns.

    The matrix may be rectangular. When there are more columns than rows
    every row is assigned; when there are more rows than columns every
    column is used and the surplus rows are unassigned.

    Args:
        cost: 2D array of non-negative integer costs. Values must fit in
            a signed 32-bit integer. The input is not modified.

    Returns:
        1D int64 array with the assigned column for each row, or -1

    Raises:
        ValueError: If the matrix is not 2D, is empty, is not integer
            typed or holds negative values
        OverflowError: If solving drives a cost beyond the 32-bit range

    Example:
        >>> kuhn_munkres_assignment(np.array([[4, 1, 3], [2, 0, 5], [3, 2, 2]]))
        array([1, 0, 2])
    """
    cost = np.asarray(cost)
    if cost.ndim != 2:
        raise ValueError(f"Cost matrix must be 2D, got {cost.ndim}D")
    if cost.size == 0:
        raise ValueError(f"Cost matrix is empty: shape {cost.shape}")
    if not np.issubdtype(cost.dtype, np.integer):
        raise ValueError(f"Cost matrix must be integer typed, got {cost.dtype}")
    if cost.min() < 0:
        raise ValueError("Cost matrix holds negative values")
    if cost.max() > INT32_MAX:
        raise OverflowError(
            f"Cost matrix value {cost.max()} exceeds the 32-bit range"
        )

    return _solve_assignment(np.array(cost, dtype=np.int64, copy=True))
