"""
Matching of two sets of vertices joined by an edge predicate or a
distance function.

Three strategies are provided:
- maximum_cardinality: the largest possible number of pairs (Hopcroft-Karp)
- nearest_neighbour: greedy pairing of the closest candidates first
- minimum_distance: the matching with the smallest total distance among
  pairs within the threshold (Kuhn-Munkres)

Results are reported through optional callbacks: matched(a, b) for each
pair, then unmatched_a(a) and unmatched_b(b) for the rest, each in index
order.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence, TypeVar

import numpy as np

from .hopcroft_karp import HopcroftKarpMatching
from .kuhn_munkres import kuhn_munkres_assignment
from ..utils.numeric import limits, round_half_up

logger = logging.getLogger(__name__)

A = TypeVar("A")
B = TypeVar("B")

# Largest cost of a pair within the threshold
MAX_COST = 1 << 16
# Cost of a pair outside the threshold; exceeds any two allowed pairs
DISALLOWED_COST = 2 * MAX_COST + 1
NO_ASSIGNMENT = -1
MAX_MATRIX_SIZE = 2**31 - 1


def _check_inputs(vertices_a, vertices_b, edges) -> None:
    if vertices_a is None:
        raise ValueError("Vertices A must not be None")
    if vertices_b is None:
        raise ValueError("Vertices B must not be None")
    if edges is None:
        raise ValueError("Edge function must not be None")


def _report(
    vertices_a: Sequence[A],
    vertices_b: Sequence[B],
    pairs: list[tuple[int, int]],
    matched: Optional[Callable[[A, B], None]],
    unmatched_a: Optional[Callable[[A], None]],
    unmatched_b: Optional[Callable[[B], None]],
) -> None:
    """Dispatch matched index pairs and the leftover vertices to callbacks"""
    if matched is not None:
        for i, j in pairs:
            matched(vertices_a[i], vertices_b[j])

    if unmatched_a is not None:
        used = np.zeros(len(vertices_a), dtype=bool)
        for i, _ in pairs:
            used[i] = True
        for i in np.flatnonzero(~used):
            unmatched_a(vertices_a[i])

    if unmatched_b is not None:
        used = np.zeros(len(vertices_b), dtype=bool)
        for _, j in pairs:
            used[j] = True
        for j in np.flatnonzero(~used):
            unmatched_b(vertices_b[j])


def _has_consumer(*consumers) -> bool:
    return any(c is not None for c in consumers)


def maximum_cardinality(
    vertices_a: Sequence[A],
    vertices_b: Sequence[B],
    edges: Callable[[A, B], bool],
    matched: Optional[Callable[[A, B], None]] = None,
    unmatched_a: Optional[Callable[[A], None]] = None,
    unmatched_b: Optional[Callable[[B], None]] = None,
) -> int:
    """
    Compute a maximum cardinality matching between A and B.

    Args:
        vertices_a: Vertices of set A
        vertices_b: Vertices of set B
        edges: Predicate that is True when a and b may be paired
        matched: Called once with (a, b) for every matched pair
        unmatched_a: Called once for every unmatched vertex of A
        unmatched_b: Called once for every unmatched vertex of B

    Returns:
        The number of matched pairs

    Raises:
        ValueError: If the vertex lists or the edge predicate are None
    """
    _check_inputs(vertices_a, vertices_b, edges)

    hk = HopcroftKarpMatching()
    for i, a in enumerate(vertices_a):
        for j, b in enumerate(vertices_b):
            if edges(a, b):
                hk.add_edge(i, j)

    if not _has_consumer(matched, unmatched_a, unmatched_b):
        return hk.compute()

    pairs: list[tuple[int, int]] = []
    count = hk.compute(lambda u, v: pairs.append((u, v)))
    _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
    return count


def nearest_neighbour(
    vertices_a: Sequence[A],
    vertices_b: Sequence[B],
    edges: Callable[[A, B], float],
    threshold: float,
    matched: Optional[Callable[[A, B], None]] = None,
    unmatched_a: Optional[Callable[[A], None]] = None,
    unmatched_b: Optional[Callable[[B], None]] = None,
) -> int:
    """
    Greedily match the closest pairs within the distance threshold.

    All pairs with edges(a, b) <= threshold are sorted by distance (a
    stable sort, so ties keep the A-major enumeration order) and committed
    in turn when neither vertex is already matched. The result is not
    guaranteed to be of maximum cardinality nor of minimum total distance.

    Args:
        vertices_a: Vertices of set A
        vertices_b: Vertices of set B
        edges: Distance between a and b. NaN distances never match.
        threshold: Maximum distance of a matched pair
        matched: Called once with (a, b) for every matched pair, in
            order of increasing distance
        unmatched_a: Called once for every unmatched vertex of A
        unmatched_b: Called once for every unmatched vertex of B

    Returns:
        The number of matched pairs

    Raises:
        ValueError: If the vertex lists or the edge function are None
    """
    _check_inputs(vertices_a, vertices_b, edges)

    size_a = len(vertices_a)
    size_b = len(vertices_b)
    pairs: list[tuple[int, int]] = []
    if size_a == 0 or size_b == 0:
        _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
        return 0

    candidates: list[tuple[float, int, int]] = []
    for i, a in enumerate(vertices_a):
        for j, b in enumerate(vertices_b):
            d = edges(a, b)
            if d <= threshold:
                candidates.append((d, i, j))
    candidates.sort(key=lambda c: c[0])
    logger.debug("Nearest neighbour: %d candidate pairs", len(candidates))

    used_a = np.zeros(size_a, dtype=bool)
    used_b = np.zeros(size_b, dtype=bool)
    limit = min(size_a, size_b)
    for _, i, j in candidates:
        if used_a[i] or used_b[j]:
            continue
        used_a[i] = True
        used_b[j] = True
        pairs.append((i, j))
        if len(pairs) == limit:
            break

    _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
    return len(pairs)


def minimum_distance(
    vertices_a: Sequence[A],
    vertices_b: Sequence[B],
    edges: Callable[[A, B], float],
    threshold: float,
    matched: Optional[Callable[[A, B], None]] = None,
    unmatched_a: Optional[Callable[[A], None]] = None,
    unmatched_b: Optional[Callable[[B], None]] = None,
) -> int:
    """
    Match pairs within the threshold so that the total distance is minimal.

    Only vertices with at least one neighbour within the threshold enter
    the assignment problem. Distances are rescaled linearly to integer
    costs in [0, MAX_COST]; pairs outside the threshold cost
    DISALLOWED_COST, which is more than any two allowed pairs. The solved
    pairs are re-checked against the real distance before they are
    accepted. Large problems should be split first with
    extract_subgraphs().

    Args:
        vertices_a: Vertices of set A
        vertices_b: Vertices of set B
        edges: Distance between a and b. NaN distances never match.
        threshold: Maximum distance of a matched pair (must be finite)
        matched: Called once with (a, b) for every matched pair, in
            index order of A
        unmatched_a: Called once for every unmatched vertex of A
        unmatched_b: Called once for every unmatched vertex of B

    Returns:
        The number of matched pairs

    Raises:
        ValueError: If the inputs are None or, for non-empty inputs, the
            threshold is not finite
        OverflowError: If the cost matrix is too large to solve
    """
    _check_inputs(vertices_a, vertices_b, edges)
    pairs: list[tuple[int, int]] = []
    if len(vertices_a) == 0 or len(vertices_b) == 0:
        _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
        return 0

    if not math.isfinite(threshold):
        raise ValueError(f"Threshold must be finite: {threshold}")

    neighbours: dict[int, list[tuple[int, float]]] = {}
    hit_b: set[int] = set()
    for i, a in enumerate(vertices_a):
        row = []
        for j, b in enumerate(vertices_b):
            d = edges(a, b)
            if d <= threshold:
                row.append((j, d))
                hit_b.add(j)
        if row:
            neighbours[i] = row

    if not neighbours:
        _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
        return 0

    map_a = sorted(neighbours)
    map_b = sorted(hit_b)
    rows = len(map_a)
    cols = len(map_b)
    if rows * cols > MAX_MATRIX_SIZE:
        raise OverflowError(
            f"Cost matrix of {rows}x{cols} exceeds {MAX_MATRIX_SIZE} elements"
        )
    logger.debug("Minimum distance: solving %dx%d cost matrix", rows, cols)

    column = {j: c for c, j in enumerate(map_b)}
    lo, hi = limits(d for row in neighbours.values() for _, d in row)
    span = hi - lo

    cost = np.full((rows, cols), DISALLOWED_COST, dtype=np.int64)
    for r, i in enumerate(map_a):
        for j, d in neighbours[i]:
            if span == 0:
                cost[r, column[j]] = 0
            else:
                cost[r, column[j]] = round_half_up(MAX_COST * (d - lo) / span)

    assignment = kuhn_munkres_assignment(cost)
    for r, c in enumerate(assignment.tolist()):
        if c == NO_ASSIGNMENT:
            continue
        i = map_a[r]
        j = map_b[c]
        if edges(vertices_a[i], vertices_b[j]) <= threshold:
            pairs.append((i, j))

    _report(vertices_a, vertices_b, pairs, matched, unmatched_a, unmatched_b)
    return len(pairs)
