"""NumPy-backed graph store with the same contract as :class:`Graph`."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np
import numpy.typing as npt

from .exceptions import InvalidVertex
from .graph import Edge, Graph, Vertex, Weight, check_weight


class NumpyGraph:
    """Directed graph storing each adjacency list as an ``(k, 2)`` array.

    Column ``0`` holds head vertices and column ``1`` holds weights, both as
    ``float64``. Weights therefore come back as floats from
    :meth:`neighbors` even when integers were inserted.
    """

    def __init__(self, n: int = 0) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidVertex("vertex count must be a non-negative integer.")
        self.adj: List[npt.NDArray[np.float64]] = [self._empty() for _ in range(n)]

    @staticmethod
    def _empty() -> npt.NDArray[np.float64]:
        return np.zeros((0, 2), dtype=np.float64)

    @property
    def n(self) -> int:
        """Number of vertices."""
        return len(self.adj)

    def __len__(self) -> int:
        return len(self.adj)

    def __contains__(self, v: object) -> bool:
        """Return whether ``v`` is a vertex id of this graph."""
        return (
            isinstance(v, (int, np.integer))
            and not isinstance(v, bool)
            and 0 <= v < len(self.adj)
        )

    def _require(self, v: Vertex) -> None:
        if v not in self:
            raise InvalidVertex(f"vertex {v!r} is not in the graph")

    def add_vertex(self) -> Vertex:
        """Allocate and return a new vertex id."""
        self.adj.append(self._empty())
        return len(self.adj) - 1

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Raises:
            InvalidVertex: If ``u`` or ``v`` is not in the graph.
            InvalidWeight: If ``w`` is negative or not a number.
        """
        self._require(u)
        self._require(v)
        w = check_weight(u, v, w)
        row = np.array([[v, float(w)]], dtype=np.float64)
        self.adj[u] = np.vstack([self.adj[u], row])

    def neighbors(self, v: Vertex) -> List[Tuple[Vertex, float]]:
        """Return the outgoing edges of ``v`` in insertion order."""
        self._require(v)
        return [(int(h), float(w)) for h, w in self.adj[v]]

    def vertices(self) -> range:
        """Return all vertex ids in ascending order."""
        return range(len(self.adj))

    def out_degree(self, v: Vertex) -> int:
        """Return the number of outgoing edges of ``v``.

        Raises:
            InvalidVertex: If ``v`` is not in the graph.
        """
        self._require(v)
        return int(self.adj[v].shape[0])

    def edge_count(self) -> int:
        """Return the total number of stored edges, parallel edges included."""
        return int(sum(arr.shape[0] for arr in self.adj))

    def weights(self) -> npt.NDArray[np.float64]:
        """Return every edge weight as one flat array."""
        if not self.adj:
            return np.zeros(0, dtype=np.float64)
        return np.concatenate([arr[:, 1] for arr in self.adj])

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "NumpyGraph":
        """Construct a graph from an iterable of ``(u, v, w)`` edges."""
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    @classmethod
    def from_graph(cls, graph: Graph) -> "NumpyGraph":
        """Return a NumPy-backed copy of ``graph``."""
        return cls.from_edges(graph.n, graph.edges())

    def to_graph(self) -> Graph:
        """Return a standard :class:`~spbench.graph.Graph` copy of this graph."""
        g = Graph(self.n)
        for u in range(self.n):
            for v, w in self.neighbors(u):
                g.add_edge(u, v, w)
        return g


__all__ = ["NumpyGraph"]
