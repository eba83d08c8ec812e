"""Utilities for turning predecessor tables into concrete paths."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

from .exceptions import InvalidVertex

Vertex = int


def reconstruct_path(
    predecessors: Sequence[Optional[Vertex]],
    source: Vertex,
    target: Vertex,
) -> List[Vertex]:
    """Return the path from ``source`` to ``target`` using a predecessor table.

    Args:
        predecessors: Predecessor of each vertex, ``None`` for the source and
            for unreached vertices.
        source: Source vertex identifier.
        target: Target vertex identifier.

    Returns:
        Vertices from source to target (inclusive), or an empty list if
        ``target`` is not reachable from ``source``.

    Raises:
        InvalidVertex: If ``source`` or ``target`` is out of range.
    """
    n = len(predecessors)
    for v in (source, target):
        if not (0 <= v < n):
            raise InvalidVertex(f"vertex {v!r} is not in the graph")
    if source == target:
        return [source]

    chain: List[Vertex] = []
    cur: Optional[Vertex] = target
    # a well-formed table has at most n links between target and source
    for _ in range(n):
        if cur is None:
            break
        chain.append(cur)
        if cur == source:
            chain.reverse()
            return chain
        cur = predecessors[cur]
    return []


def path_weight(graph, path: Sequence[Vertex]) -> float:
    """Return the total weight of ``path`` in ``graph``.

    Parallel edges are resolved to the cheapest one. A pair without an edge
    makes the path weight infinite.
    """
    total = 0.0
    for u, v in zip(path, path[1:]):
        best = min((w for x, w in graph.neighbors(u) if x == v), default=math.inf)
        total += best
    return total


__all__ = ["reconstruct_path", "path_weight"]
