"""Export utilities for shortest-path trees."""

from __future__ import annotations

import json
import math
from typing import List, Optional, Sequence, Tuple

from .dijkstra import ShortestPaths


def shortest_path_tree(predecessors: Sequence[Optional[int]]) -> List[Tuple[int, int]]:
    """Return the tree edges ``(pred[v], v)`` for every vertex with a predecessor."""
    return [(u, v) for v, u in enumerate(predecessors) if u is not None]


def _distance(d: float) -> float | int | None:
    return d if math.isfinite(d) else None


def export_tree_json(result: ShortestPaths) -> str:
    """Return a JSON document with per-vertex distances and tree edges.

    Unreachable vertices carry ``"distance": null``.
    """
    data = {
        "source": result.source,
        "nodes": [
            {"id": v, "distance": _distance(d)} for v, d in enumerate(result.distances)
        ],
        "edges": [
            {"source": u, "target": v} for u, v in shortest_path_tree(result.predecessors)
        ],
    }
    return json.dumps(data)


def export_tree_graphml(result: ShortestPaths) -> str:
    """Return a GraphML document for the shortest-path tree.

    Distances are stored in a ``d`` node attribute, left out for unreachable
    vertices.
    """
    lines: List[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append('<graphml xmlns="http://graphml.graphdrawing.org/xmlns">')
    lines.append('  <key id="d" for="node" attr.name="distance" attr.type="double"/>')
    lines.append('  <graph id="T" edgedefault="directed">')
    for v, d in enumerate(result.distances):
        if math.isfinite(d):
            lines.append(f'    <node id="n{v}"><data key="d">{d}</data></node>')
        else:
            lines.append(f'    <node id="n{v}"/>')
    for u, v in shortest_path_tree(result.predecessors):
        lines.append(f'    <edge source="n{u}" target="n{v}"/>')
    lines.append("  </graph>")
    lines.append("</graphml>")
    return "\n".join(lines)


__all__ = ["shortest_path_tree", "export_tree_json", "export_tree_graphml"]
