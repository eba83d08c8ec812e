"""Dijkstra single-source shortest paths with a binary heap."""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple

from .exceptions import InvalidVertex
from .graph import Vertex, Weight
from .logger import Logger, NoopLogger
from .path import reconstruct_path

UNREACHABLE = math.inf


@dataclass(frozen=True)
class ShortestPaths:
    """Distance and predecessor tables produced by one query.

    ``distances[v]`` is :data:`UNREACHABLE` and ``predecessors[v]`` is
    ``None`` for every vertex with no path from the source.
    """

    source: Vertex
    distances: List[Weight]
    predecessors: List[Optional[Vertex]]

    def reachable(self, v: Vertex) -> bool:
        """Return ``True`` if ``v`` has a finite distance."""
        return self.distances[v] != UNREACHABLE

    def path(self, target: Vertex) -> List[Vertex]:
        """Return the shortest path to ``target`` or ``[]`` if unreachable."""
        return reconstruct_path(self.predecessors, self.source, target)


@dataclass(frozen=True)
class EngineMetrics:
    """Performance metrics collected from an engine run."""

    n: int
    m: int
    counters: Dict[str, int]
    wall_ms: float
    peak_mib: float | None = None


class DijkstraEngine:
    """Single-source Dijkstra over a read-only graph.

    The graph must offer ``len(graph)``, ``v in graph`` and
    ``graph.neighbors(v)``; both :class:`~spbench.graph.Graph` and
    :class:`~spbench.graph_numpy.NumpyGraph` qualify. Heap entries are
    ``(distance, vertex)`` tuples, so equal distances are extracted in
    ascending vertex order and results are reproducible.
    """

    def __init__(self, graph, source: Vertex, logger: Logger | None = None) -> None:
        """Initialize the engine.

        Args:
            graph: Input graph with non-negative edge weights.
            source: Source vertex identifier.
            logger: Optional structured logger.

        Raises:
            InvalidVertex: If ``source`` is not in ``graph``.
        """
        if source not in graph:
            raise InvalidVertex(f"source {source!r} is not in the graph")
        self.G = graph
        self.source = source
        self.logger = logger or NoopLogger()
        self.counters: Dict[str, int] = {}
        self._result: Optional[ShortestPaths] = None

    def _reset_counters(self) -> None:
        self.counters = {
            "pops": 0,
            "stale_pops": 0,
            "pushes": 1,
            "edges_relaxed": 0,
            "improvements": 0,
            "max_frontier_size": 1,
        }

    def _run(self, target: Optional[Vertex] = None) -> ShortestPaths:
        """Run Dijkstra, stopping early once ``target`` is finalized."""
        self._reset_counters()
        c = self.counters
        n = len(self.G)
        dist: List[Weight] = [UNREACHABLE] * n
        pred: List[Optional[Vertex]] = [None] * n
        visited = [False] * n
        dist[self.source] = 0
        pq: List[Tuple[Weight, Vertex]] = [(0, self.source)]

        while pq:
            c["max_frontier_size"] = max(c["max_frontier_size"], len(pq))
            d_u, u = heapq.heappop(pq)
            c["pops"] += 1
            if visited[u] or d_u != dist[u]:
                c["stale_pops"] += 1
                continue
            visited[u] = True
            if u == target:
                break
            for v, w in self.G.neighbors(u):
                c["edges_relaxed"] += 1
                if visited[v]:
                    continue
                nd = d_u + w
                if nd < dist[v]:
                    dist[v] = nd
                    pred[v] = u
                    c["improvements"] += 1
                    c["pushes"] += 1
                    heapq.heappush(pq, (nd, v))

        return ShortestPaths(source=self.source, distances=dist, predecessors=pred)

    def solve(self) -> ShortestPaths:
        """Compute distances and predecessors for every vertex."""
        res = self._run()
        self._result = res
        self.logger.debug("dijkstra.solve", source=self.source, n=len(self.G), **self.counters)
        return res

    def path(self, target: Vertex) -> List[Vertex]:
        """Return the shortest path from the source to ``target``.

        Runs :meth:`solve` first if it has not been called yet.

        Raises:
            InvalidVertex: If ``target`` is not in the graph.
        """
        if target not in self.G:
            raise InvalidVertex(f"target {target!r} is not in the graph")
        if self._result is None:
            return self.solve().path(target)
        return self._result.path(target)

    def summary(self) -> Dict[str, int]:
        """Return a copy of the counters from the last run."""
        return dict(self.counters)

    def metrics(self, wall_ms: float, peak_mib: float | None = None) -> EngineMetrics:
        """Bundle counters from the last run with externally measured timings."""
        m = sum(len(self.G.neighbors(u)) for u in range(len(self.G)))
        return EngineMetrics(
            n=len(self.G),
            m=m,
            counters=self.summary(),
            wall_ms=wall_ms,
            peak_mib=peak_mib,
        )


def shortest_paths(graph, source: Vertex) -> ShortestPaths:
    """Run Dijkstra from ``source`` and return both tables.

    Raises:
        InvalidVertex: If ``source`` is not in ``graph``.

    Examples:
        ```python
        >>> from spbench.graph import Graph
        >>> g = Graph.from_edges(3, [(0, 1, 1), (1, 2, 2), (0, 2, 10)])
        >>> res = shortest_paths(g, 0)
        >>> res.distances, res.predecessors
        ([0, 1, 3], [None, 0, 1])
        ```
    """
    return DijkstraEngine(graph, source).solve()


class ShortestPathAlgorithm(Protocol):
    """Point-to-point shortest path query."""

    def find_shortest_path(self, graph, start: Vertex, end: Vertex) -> Optional[List[Vertex]]:
        """Return the vertices from ``start`` to ``end`` or ``None``."""
        ...


class Dijkstra:
    """:class:`ShortestPathAlgorithm` backed by :class:`DijkstraEngine`."""

    def find_shortest_path(self, graph, start: Vertex, end: Vertex) -> Optional[List[Vertex]]:
        if end not in graph:
            raise InvalidVertex(f"target {end!r} is not in the graph")
        res = DijkstraEngine(graph, start)._run(target=end)
        path = res.path(end)
        return path or None


def find_shortest_path(graph, start: Vertex, end: Vertex) -> Optional[List[Vertex]]:
    """Return the shortest path from ``start`` to ``end``, or ``None``.

    The search stops as soon as ``end`` is finalized.
    """
    return Dijkstra().find_shortest_path(graph, start, end)


__all__ = [
    "UNREACHABLE",
    "ShortestPaths",
    "EngineMetrics",
    "DijkstraEngine",
    "shortest_paths",
    "ShortestPathAlgorithm",
    "Dijkstra",
    "find_shortest_path",
]
