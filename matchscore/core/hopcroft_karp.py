"""
Maximum cardinality matching of a bipartite graph using the
Hopcroft-Karp algorithm

This algorithm was adapted from:
[Hopcroft & Karp, 1973](https://doi.org/10.1137/0202019)
"""
from __future__ import annotations

import sys
from collections import deque
from typing import Callable, Iterator, Optional

# Vertices are stored 1-indexed so that 0 can act as the NIL vertex
NIL = 0
INF = sys.maxsize


class HopcroftKarpMatching:
    """
    Sparse bipartite graph with a maximum cardinality matching solver.

    Vertices on each side are identified by 0-based integers; the size of
    each side is one more than the largest index passed to add_edge().

    Example:
        >>> hk = HopcroftKarpMatching()
        >>> hk.add_edge(0, 0)
        >>> hk.add_edge(0, 1)
        >>> hk.add_edge(1, 0)
        >>> hk.compute()
        2
    """

    def __init__(self):
        self._adj: list[list[int]] = [[]]
        self._num_v = 0
        self._num_edges = 0

    @property
    def num_u(self) -> int:
        """Number of vertices in U"""
        return len(self._adj) - 1

    @property
    def num_v(self) -> int:
        """Number of vertices in V"""
        return self._num_v

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def add_edge(self, u: int, v: int) -> None:
        """
        Add an edge between vertex u of U and vertex v of V.

        Raises:
            ValueError: If either index is negative
        """
        if u < 0 or v < 0:
            raise ValueError(f"Vertex index must be non-negative: ({u}, {v})")
        while len(self._adj) <= u + 1:
            self._adj.append([])
        self._adj[u + 1].append(v + 1)
        if v >= self._num_v:
            self._num_v = v + 1
        self._num_edges += 1

    def edges(self) -> Iterator[tuple[int, int]]:
        """Iterate over the (u, v) edges in insertion order per vertex"""
        for u in range(1, len(self._adj)):
            for v in self._adj[u]:
                yield u - 1, v - 1

    def clear(self) -> None:
        """Remove all edges"""
        self._adj = [[]]
        self._num_v = 0
        self._num_edges = 0

    def compute(
        self,
        consumer: Optional[Callable[[int, int], None]] = None,
    ) -> int:
        """
        Compute a maximum cardinality matching.

        Args:
            consumer: Optional callback invoked once with (u, v) for
                every matched pair, in ascending order of u

        Returns:
            Size of the matching
        """
        num_u = self.num_u
        num_v = self._num_v
        if self._num_edges == 0:
            return 0

        pair_u = [NIL] * (num_u + 1)
        pair_v = [NIL] * (num_v + 1)
        dist = [INF] * (num_u + 1)
        active = [u for u in range(1, num_u + 1) if self._adj[u]]
        limit = min(len(active), num_v)

        matching = 0
        while matching < limit and self._bfs(active, pair_u, pair_v, dist):
            for u in active:
                if pair_u[u] == NIL and self._dfs(u, pair_u, pair_v, dist):
                    matching += 1
                    if matching == limit:
                        break

        if consumer is not None:
            for u in active:
                if pair_u[u] != NIL:
                    consumer(u - 1, pair_u[u] - 1)
        return matching

    def _bfs(self, active, pair_u, pair_v, dist) -> bool:
        """Layer the free U vertices; True if an augmenting path exists"""
        queue = deque()
        for u in active:
            if pair_u[u] == NIL:
                dist[u] = 0
                queue.append(u)
            else:
                dist[u] = INF
        dist[NIL] = INF

        while queue:
            u = queue.popleft()
            if dist[u] < dist[NIL]:
                for v in self._adj[u]:
                    w = pair_v[v]
                    if dist[w] == INF:
                        dist[w] = dist[u] + 1
                        queue.append(w)
        return dist[NIL] != INF

    def _dfs(self, root, pair_u, pair_v, dist) -> bool:
        """
        Find an augmenting path from a free vertex along the BFS layers
        and flip it. Iterative so long paths do not hit the recursion limit.
        """
        adj = self._adj
        stack_u = [root]
        stack_i = [len(adj[root])]
        stack_v: list[int] = []

        while stack_u:
            u = stack_u[-1]
            i = stack_i[-1]
            advanced = False
            while i > 0:
                i -= 1
                v = adj[u][i]
                w = pair_v[v]
                if dist[w] != dist[u] + 1:
                    continue
                if w == NIL:
                    stack_v.append(v)
                    for uu, vv in zip(stack_u, stack_v):
                        pair_u[uu] = vv
                        pair_v[vv] = uu
                    return True
                stack_i[-1] = i
                stack_u.append(w)
                stack_i.append(len(adj[w]))
                stack_v.append(v)
                advanced = True
                break

            if not advanced:
                # Dead end: remove u from the layered graph
                dist[u] = INF
                stack_u.pop()
                stack_i.pop()
                if stack_v:
                    stack_v.pop()
        return False
