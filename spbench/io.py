"""Graph input/output helpers.

Four text formats are understood:

``sections``
    ``# Nodes`` / ``# Edges`` / ``# ShortestPath`` blocks. Node ids are
    arbitrary non-negative integers, edges are ``u v w`` lines and the
    shortest-path block holds the expected path whose first vertex is the
    query source. Edges are undirected unless the caller says otherwise.
``edgelist``
    A ``n m source`` header followed by ``u v w`` lines.
``csv``
    ``u,v,w`` rows (tabs accepted), ``#`` comments.
``jsonl``
    One ``{"u": .., "v": .., "w": ..}`` object per line.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .exceptions import GraphFormatError, InvalidVertex
from .graph import Graph, Vertex, Weight

EdgeList = List[Tuple[int, int, Weight]]

_SECTIONS = {
    "# Nodes": "nodes",
    "# Edges": "edges",
    "# ShortestPath": "shortest_path",
}


@dataclass
class GraphFile:
    """A graph loaded from disk.

    Attributes:
        graph: The constructed graph store.
        labels: File-level id of each store vertex (``labels[v]``).
        source: Store vertex to query from, if the file names one.
        expected_path: Expected shortest path as store vertices, if present.
    """

    graph: Graph
    labels: List[int]
    source: Optional[Vertex] = None
    expected_path: List[Vertex] = field(default_factory=list)

    def vertex(self, label: int) -> Vertex:
        """Return the store vertex for file id ``label``."""
        try:
            return self.labels.index(label)
        except ValueError:
            raise InvalidVertex(f"node {label} is not in the graph") from None

    def label_path(self, path: List[Vertex]) -> List[int]:
        """Translate a path of store vertices to file ids."""
        return [self.labels[v] for v in path]


def _parse_weight(text: str, lineno: int) -> Weight:
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise GraphFormatError(f"line {lineno}: invalid weight {text!r}") from None


def _parse_id(text: str, lineno: int, what: str = "node id") -> int:
    try:
        value = int(text)
    except ValueError:
        raise GraphFormatError(f"line {lineno}: invalid {what} {text!r}") from None
    if value < 0:
        raise GraphFormatError(f"line {lineno}: invalid {what} {text!r}")
    return value


def _add(graph: Graph, u: Vertex, v: Vertex, w: Weight, undirected: bool) -> None:
    graph.add_edge(u, v, w)
    if undirected and u != v:
        graph.add_edge(v, u, w)


def _read_sections(path: Path, undirected: bool) -> GraphFile:
    """Read the ``# Nodes`` / ``# Edges`` / ``# ShortestPath`` format.

    Raises:
        GraphFormatError: On an unknown section header, a line outside any
            section, a duplicate node or malformed numbers.
        InvalidVertex: If an edge names a node that was not listed.
    """
    graph = Graph()
    labels: List[int] = []
    index: Dict[int, Vertex] = {}
    edges: List[Tuple[int, int, Weight, int]] = []
    expected: List[int] = []
    section: Optional[str] = None

    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            line = raw.strip()
            if not line:
                continue
            if line.startswith("#"):
                if line not in _SECTIONS:
                    raise GraphFormatError(f"line {lineno}: invalid section {line!r}")
                section = _SECTIONS[line]
                continue
            if section is None:
                raise GraphFormatError(f"line {lineno}: data outside of a section")
            if section == "nodes":
                label = _parse_id(line, lineno)
                if label in index:
                    raise GraphFormatError(f"line {lineno}: duplicate node {label}")
                index[label] = graph.add_vertex()
                labels.append(label)
            elif section == "edges":
                parts = line.split()
                if len(parts) != 3:
                    raise GraphFormatError(f"line {lineno}: invalid edge data {line!r}")
                u = _parse_id(parts[0], lineno)
                v = _parse_id(parts[1], lineno)
                edges.append((u, v, _parse_weight(parts[2], lineno), lineno))
            else:
                expected = [_parse_id(p, lineno) for p in line.split()]

    # edges may precede the nodes block, so resolve ids once everything is read
    for u, v, w, lineno in edges:
        for label in (u, v):
            if label not in index:
                raise InvalidVertex(f"line {lineno}: node {label} is not listed")
        _add(graph, index[u], index[v], w, undirected)
    for label in expected:
        if label not in index:
            raise InvalidVertex(f"shortest path names unknown node {label}")

    expected_path = [index[label] for label in expected]
    source = expected_path[0] if expected_path else None
    return GraphFile(graph=graph, labels=labels, source=source, expected_path=expected_path)


def _from_edge_list(n: int, edges: EdgeList, undirected: bool, source=None) -> GraphFile:
    graph = Graph(n)
    for u, v, w in edges:
        _add(graph, u, v, w, undirected)
    return GraphFile(graph=graph, labels=list(range(n)), source=source)


def _read_edgelist(path: Path, undirected: bool) -> GraphFile:
    """Read a ``n m source`` header followed by ``u v w`` lines."""
    edges: EdgeList = []
    with path.open("r", encoding="utf-8") as fh:
        header = fh.readline().split()
        if len(header) != 3:
            raise GraphFormatError("line 1: expected header 'n m source'")
        n = _parse_id(header[0], 1, "vertex count")
        m = _parse_id(header[1], 1, "edge count")
        source = _parse_id(header[2], 1, "source")
        for lineno, raw in enumerate(fh, start=2):
            parts = raw.split()
            if not parts:
                continue
            if len(parts) != 3:
                raise GraphFormatError(f"line {lineno}: invalid edge data {raw.strip()!r}")
            edges.append(
                (_parse_id(parts[0], lineno), _parse_id(parts[1], lineno), _parse_weight(parts[2], lineno))
            )
    if len(edges) != m:
        raise GraphFormatError(f"header announces {m} edges, found {len(edges)}")
    if n > 0 and source >= n:
        raise InvalidVertex(f"source {source} is not in the graph")
    return _from_edge_list(n, edges, undirected, source=source)


def _read_csv(path: Path, undirected: bool) -> GraphFile:
    """Read ``u,v,w`` rows; the vertex count is the largest id plus one."""
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row or row.startswith("#"):
                continue
            parts = [p.strip() for p in row.replace("\t", ",").split(",")]
            if len(parts) < 3:
                raise GraphFormatError(f"line {lineno}: expected u,v,w")
            u = _parse_id(parts[0], lineno)
            v = _parse_id(parts[1], lineno)
            edges.append((u, v, _parse_weight(parts[2], lineno)))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return _from_edge_list(max_id + 1, edges, undirected)


def _read_jsonl(path: Path, undirected: bool) -> GraphFile:
    """Read one JSON edge object per line."""
    edges: EdgeList = []
    max_id = -1
    with path.open("r", encoding="utf-8") as fh:
        for lineno, raw in enumerate(fh, start=1):
            row = raw.strip()
            if not row:
                continue
            try:
                obj = json.loads(row)
                u, v, w = obj["u"], obj["v"], obj["w"]
            except (json.JSONDecodeError, KeyError, TypeError) as exc:
                raise GraphFormatError(f"line {lineno}: {exc}") from exc
            u = _parse_id(str(u), lineno)
            v = _parse_id(str(v), lineno)
            edges.append((u, v, w))
            max_id = max(max_id, u, v)
    if max_id < 0:
        raise GraphFormatError("no edges parsed from file")
    return _from_edge_list(max_id + 1, edges, undirected)


def _write_edgelist(path: Path, G: Graph, source: Vertex) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write(f"{G.n} {G.edge_count()} {source}\n")
        for u, v, w in G.edges():
            fh.write(f"{u} {v} {w}\n")


def _write_csv(path: Path, G: Graph, source: Vertex) -> None:
    with path.open("w", encoding="utf-8") as fh:
        fh.write("# u,v,w\n")
        for u, v, w in G.edges():
            fh.write(f"{u},{v},{w}\n")


def _write_jsonl(path: Path, G: Graph, source: Vertex) -> None:
    with path.open("w", encoding="utf-8") as fh:
        for u, v, w in G.edges():
            fh.write(json.dumps({"u": u, "v": v, "w": w}) + "\n")


_FMT_READERS = {
    "sections": _read_sections,
    "edgelist": _read_edgelist,
    "csv": _read_csv,
    "jsonl": _read_jsonl,
}

_FMT_WRITERS = {
    "edgelist": _write_edgelist,
    "csv": _write_csv,
    "jsonl": _write_jsonl,
}

FORMATS = sorted(_FMT_READERS)


def detect_format(path: Path) -> Optional[str]:
    """Return the format implied by the file extension, or ``None``."""
    ext = path.suffix.lower()
    if ext == ".txt":
        return "sections"
    if ext == ".el":
        return "edgelist"
    if ext in {".csv", ".tsv"}:
        return "csv"
    if ext in {".jsonl", ".json"}:
        return "jsonl"
    return None


# directed unless the format's own convention says otherwise
_UNDIRECTED_BY_DEFAULT = {"sections"}


def read_graph(path: str | Path, fmt: Optional[str] = None, undirected: Optional[bool] = None) -> GraphFile:
    """Read a graph from ``path``.

    Args:
        path: The path to the graph file.
        fmt: One of :data:`FORMATS`. Auto-detected from the extension when
            ``None``.
        undirected: Insert every edge in both directions. ``None`` uses the
            format's convention: ``sections`` files describe undirected
            graphs, every other format is directed.

    Returns:
        The loaded :class:`GraphFile`.

    Raises:
        GraphFormatError: If the format is unknown or the file is malformed
            or not valid UTF-8.
        InvalidVertex: If an edge refers to a vertex the file does not define.
        InvalidWeight: If an edge has a negative weight.
    """
    p = Path(path)
    fmt = fmt or detect_format(p)
    if fmt is None or fmt not in _FMT_READERS:
        raise GraphFormatError(f"unknown graph format for {p.name}")
    if undirected is None:
        undirected = fmt in _UNDIRECTED_BY_DEFAULT
    try:
        return _FMT_READERS[fmt](p, undirected)
    except UnicodeDecodeError as exc:
        raise GraphFormatError(f"{p.name} is not valid UTF-8 text: {exc.reason}") from exc


def write_graph(G: Graph, path: str | Path, fmt: Optional[str] = None, source: Vertex = 0) -> None:
    """Write ``G`` to ``path`` in ``edgelist``, ``csv`` or ``jsonl`` format.

    Raises:
        GraphFormatError: If the format is unknown or not writable.
    """
    p = Path(path)
    fmt = fmt or detect_format(p)
    if fmt is None or fmt not in _FMT_WRITERS:
        raise GraphFormatError(f"cannot write graph format {fmt!r}")
    _FMT_WRITERS[fmt](p, G, source)


def endpoints(expected_path: List[Vertex]) -> Tuple[Vertex, Vertex]:
    """Return the first and last vertex of ``expected_path``.

    Raises:
        GraphFormatError: If the path is empty.
    """
    if not expected_path:
        raise GraphFormatError("no start or end node provided")
    return expected_path[0], expected_path[-1]


__all__ = ["FORMATS", "GraphFile", "detect_format", "read_graph", "write_graph", "endpoints"]
