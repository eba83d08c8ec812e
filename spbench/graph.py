"""Directed weighted graph store consumed by the shortest-path engine."""

from __future__ import annotations

import math
from typing import Iterable, Iterator, List, Tuple, Union

from .exceptions import InvalidVertex, InvalidWeight

Vertex = int
Weight = Union[int, float]
Edge = Tuple[Vertex, Vertex, Weight]


def check_weight(u: Vertex, v: Vertex, w: object) -> Weight:
    """Return ``w`` if it is a usable edge weight.

    Raises:
        InvalidWeight: If ``w`` is not a real number, is NaN or is negative.
    """
    if isinstance(w, bool) or not isinstance(w, (int, float)):
        raise InvalidWeight(f"non-numeric weight {w!r} on edge ({u}, {v})")
    if math.isnan(w):
        raise InvalidWeight(f"NaN weight on edge ({u}, {v})")
    if w < 0:
        raise InvalidWeight(f"negative weight {w} on edge ({u}, {v})")
    return w


class Graph:
    """Directed graph with non-negative edge weights.

    Vertices are allocated by the store as consecutive integers starting at
    ``0``. Parallel edges and self-loops are kept as inserted; the engine's
    relaxation step makes them harmless.

    Attributes:
        adj: Outgoing adjacency lists of ``(head, weight)`` pairs, indexed by
            vertex id.
    """

    def __init__(self, n: int = 0) -> None:
        """Create a graph with ``n`` pre-allocated vertices."""
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidVertex("vertex count must be a non-negative integer.")
        self.adj: List[List[Tuple[Vertex, Weight]]] = [[] for _ in range(n)]

    @property
    def n(self) -> int:
        """Number of vertices."""
        return len(self.adj)

    def __len__(self) -> int:
        return len(self.adj)

    def __contains__(self, v: object) -> bool:
        return (
            isinstance(v, int)
            and not isinstance(v, bool)
            and 0 <= v < len(self.adj)
        )

    def _require(self, v: Vertex) -> None:
        if v not in self:
            raise InvalidVertex(f"vertex {v!r} is not in the graph")

    def add_vertex(self) -> Vertex:
        """Allocate and return a new vertex id.

        Examples:
            ```python
            >>> g = Graph()
            >>> g.add_vertex(), g.add_vertex()
            (0, 1)
            ```
        """
        self.adj.append([])
        return len(self.adj) - 1

    def add_edge(self, u: Vertex, v: Vertex, w: Weight) -> None:
        """Add a directed edge from ``u`` to ``v``.

        Both checks run before anything is stored, so a rejected edge leaves
        the graph untouched.

        Args:
            u: Tail vertex.
            v: Head vertex.
            w: Non-negative edge weight.

        Raises:
            InvalidVertex: If ``u`` or ``v`` is not in the graph.
            InvalidWeight: If ``w`` is negative or not a number.

        Examples:
            ```python
            >>> g = Graph(2)
            >>> g.add_edge(0, 1, 1.5)
            >>> g.neighbors(0)
            [(1, 1.5)]
            ```
        """
        self._require(u)
        self._require(v)
        w = check_weight(u, v, w)
        self.adj[u].append((v, w))

    def neighbors(self, v: Vertex) -> List[Tuple[Vertex, Weight]]:
        """Return the outgoing edges of ``v`` in insertion order.

        Raises:
            InvalidVertex: If ``v`` is not in the graph.
        """
        self._require(v)
        return list(self.adj[v])

    def vertices(self) -> range:
        """Return all vertex ids."""
        return range(len(self.adj))

    def out_degree(self, v: Vertex) -> int:
        """Return the number of outgoing edges of ``v``."""
        self._require(v)
        return len(self.adj[v])

    def edge_count(self) -> int:
        """Return the total number of edges, parallel edges included."""
        return sum(len(lst) for lst in self.adj)

    def edges(self) -> Iterator[Edge]:
        """Yield every edge as ``(u, v, w)``."""
        for u, lst in enumerate(self.adj):
            for v, w in lst:
                yield u, v, w

    @classmethod
    def from_edges(cls, n: int, edges: Iterable[Edge]) -> "Graph":
        """Create a graph with ``n`` vertices from ``(u, v, w)`` tuples."""
        g = cls(n)
        for u, v, w in edges:
            g.add_edge(u, v, w)
        return g

    def __str__(self) -> str:
        lines = [f"Node: {v}" for v in self.vertices()]
        lines.extend(f"Edge: {u} -> {v}, weight: {w}" for u, v, w in self.edges())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Graph(n={self.n}, m={self.edge_count()})"


__all__ = ["Graph", "Vertex", "Weight", "Edge", "check_weight"]
