"""
Assignment problem solver using the Kuhn-Munkres (Hungarian) algorithm,
extended to rectangular cost matrices

This algorithm was adapted from:
[Munkres, 1957](https://doi.org/10.1137/0105003)
[Bourgeois & Lassalle, 1971](https://doi.org/10.1145/362919.362945)
"""
import numpy as np
from numba import njit

STAR = 1
PRIME = 2

INT32_MAX = 2_147_483_647


@njit(cache=True)
def _reduce(cost: np.ndarray) -> None:
    """
    Subtract row and/or column minima so every line holds a zero.

    A wide (or square) matrix is reduced by rows; a tall matrix by columns.
    A square matrix is then additionally reduced by columns.
    """
    rows, cols = cost.shape
    if rows > cols:
        for j in range(cols):
            lo = cost[0, j]
            for i in range(1, rows):
                if cost[i, j] < lo:
                    lo = cost[i, j]
            for i in range(rows):
                cost[i, j] -= lo
        return

    for i in range(rows):
        lo = cost[i, 0]
        for j in range(1, cols):
            if cost[i, j] < lo:
                lo = cost[i, j]
        for j in range(cols):
            cost[i, j] -= lo

    if rows == cols:
        for j in range(cols):
            lo = cost[0, j]
            for i in range(1, rows):
                if cost[i, j] < lo:
                    lo = cost[i, j]
            for i in range(rows):
                cost[i, j] -= lo


@njit(cache=True, inline='always')
def _find_in_row(mask: np.ndarray, row: int, flag: int) -> int:
    for j in range(mask.shape[1]):
        if mask[row, j] == flag:
            return j
    return -1


@njit(cache=True, inline='always')
def _find_in_col(mask: np.ndarray, col: int, flag: int) -> int:
    for i in range(mask.shape[0]):
        if mask[i, col] == flag:
            return i
    return -1


@njit(cache=True)
def _solve_assignment(cost: np.ndarray) -> np.ndarray:
    """
    Solve the assignment problem for an integer cost matrix.

    The cost matrix is modified in place.

    Args:
        cost: 2D int64 array of shape (rows, cols), non-negative values

    Returns:
        1D int64 array of length rows holding the assigned column for
        each row, or -1 if the row is unassigned (only when rows > cols)
    """
    rows, cols = cost.shape
    k = min(rows, cols)

    mask = np.zeros((rows, cols), dtype=np.int8)
    row_cover = np.zeros(rows, dtype=np.bool_)
    col_cover = np.zeros(cols, dtype=np.bool_)
    path = np.empty((rows + cols + 1, 2), dtype=np.int64)

    _reduce(cost)

    # Star the first zero in each row with no star in its column
    for i in range(rows):
        for j in range(cols):
            if cost[i, j] == 0 and not col_cover[j]:
                mask[i, j] = STAR
                col_cover[j] = True
                break
    col_cover[:] = False

    while True:
        # Cover every column holding a starred zero
        covered = 0
        for j in range(cols):
            if _find_in_col(mask, j, STAR) >= 0:
                col_cover[j] = True
                covered += 1
        if covered >= k:
            break

        # Prime uncovered zeros until one has no star in its row
        while True:
            zr = -1
            zc = -1
            for i in range(rows):
                if row_cover[i]:
                    continue
                for j in range(cols):
                    if cost[i, j] == 0 and not col_cover[j]:
                        zr = i
                        zc = j
                        break
                if zr >= 0:
                    break

            if zr < 0:
                # No uncovered zero: adjust by the smallest uncovered value
                h = -1
                for i in range(rows):
                    if row_cover[i]:
                        continue
                    for j in range(cols):
                        if not col_cover[j] and (h < 0 or cost[i, j] < h):
                            h = cost[i, j]
                for i in range(rows):
                    if row_cover[i]:
                        for j in range(cols):
                            if cost[i, j] > INT32_MAX - h:
                                raise OverflowError("Overflow in cost matrix")
                            cost[i, j] += h
                for j in range(cols):
                    if not col_cover[j]:
                        for i in range(rows):
                            cost[i, j] -= h
                continue

            mask[zr, zc] = PRIME
            star_col = _find_in_row(mask, zr, STAR)
            if star_col >= 0:
                row_cover[zr] = True
                col_cover[star_col] = False
                continue

            # Augment along the alternating prime/star path from (zr, zc)
            n = 0
            path[n, 0] = zr
            path[n, 1] = zc
            while True:
                star_row = _find_in_col(mask, path[n, 1], STAR)
                if star_row < 0:
                    break
                n += 1
                path[n, 0] = star_row
                path[n, 1] = path[n - 1, 1]
                n += 1
                path[n, 0] = star_row
                path[n, 1] = _find_in_row(mask, star_row, PRIME)
            for p in range(n + 1):
                r = path[p, 0]
                c = path[p, 1]
                if mask[r, c] == STAR:
                    mask[r, c] = 0
                else:
                    mask[r, c] = STAR

            for i in range(rows):
                for j in range(cols):
                    if mask[i, j] == PRIME:
                        mask[i, j] = 0
            row_cover[:] = False
            col_cover[:] = False
            break

    result = np.full(rows, -1, dtype=np.int64)
    for i in range(rows):
        result[i] = _find_in_row(mask, i, STAR)
    return result
