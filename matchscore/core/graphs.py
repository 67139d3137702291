"""
Decomposition of a bipartite graph into connected sub-graphs.

Splitting a large matching problem into its connected components keeps
the cost matrices handed to the assignment solver small.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)


def extract_subgraphs(
    size_a: int,
    size_b: int,
    edges: Callable[[int, int], bool],
) -> list[tuple[np.ndarray, np.ndarray]]:
    """
    Find the connected components of a bipartite graph.

    Vertices of A are visited in index order. Each unassigned vertex seeds a
    new component that is grown breadth-first: every unassigned vertex of B
    joined to a queued A vertex is claimed, then the A vertices after the
    seed are scanned for edges to the newly claimed B vertex.

    Args:
        size_a: Number of vertices in A
        size_b: Number of vertices in B
        edges: Predicate edges(i, j) that is True when A[i] joins B[j]

    Returns:
        One (indices_a, indices_b) pair of sorted int arrays per component
        that holds at least one B vertex. A vertices with no edge are not
        reported.

    Raises:
        ValueError: If a size is negative or edges is None

    Example:
        >>> extract_subgraphs(3, 2, lambda i, j: i == j)
        [(array([0]), array([0])), (array([1]), array([1]))]
    """
    if size_a < 0 or size_b < 0:
        raise ValueError(f"Graph sizes must be non-negative: ({size_a}, {size_b})")
    if edges is None:
        raise ValueError("Edge predicate is required")
    if size_a == 0 or size_b == 0:
        return []

    comp_a = np.zeros(size_a, dtype=np.int64)
    comp_b = np.zeros(size_b, dtype=np.int64)
    remaining = size_b
    component = 0

    queue: deque[int] = deque()
    a = 0
    while a < size_a and remaining != 0:
        if comp_a[a] != 0:
            a += 1
            continue

        component += 1
        comp_a[a] = component
        queue.append(a)
        while queue and remaining != 0:
            i = queue.popleft()
            for j in range(size_b):
                if comp_b[j] != 0 or not edges(i, j):
                    continue
                comp_b[j] = component
                remaining -= 1
                for ii in range(a + 1, size_a):
                    if comp_a[ii] == 0 and edges(ii, j):
                        comp_a[ii] = component
                        queue.append(ii)
                if remaining == 0:
                    break
        queue.clear()
        a += 1

    subgraphs = []
    for c in range(1, component + 1):
        indices_b = np.flatnonzero(comp_b == c)
        if indices_b.size == 0:
            continue
        subgraphs.append((np.flatnonzero(comp_a == c), indices_b))

    logger.debug(
        "Extracted %d sub-graphs from a %dx%d bipartite graph",
        len(subgraphs), size_a, size_b,
    )
    return subgraphs
