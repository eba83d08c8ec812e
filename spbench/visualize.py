"""Render a graph and its shortest-path tree with NetworkX and Matplotlib.

Example usage:

```
python -m spbench.visualize graph.txt --out tree.png
python -m spbench.visualize graph.el --max-edges 200 --layout kamada_kawai --show-weights
```
"""

from __future__ import annotations

import argparse
import random
import sys
from typing import Iterable, List, Optional, Sequence, Tuple

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import networkx as nx  # noqa: E402

from .dijkstra import ShortestPaths, shortest_paths  # noqa: E402
from .exceptions import SPBenchError  # noqa: E402
from .graph import Edge, Graph  # noqa: E402
from .io import FORMATS, read_graph  # noqa: E402

LAYOUTS = ("spring", "kamada_kawai", "shell")


def downsample_edges(edges: Iterable[Edge], max_edges: int, seed: int = 0) -> List[Edge]:
    """Randomly sample edges if the graph is too large to visualize."""
    edges = list(edges)
    if len(edges) <= max_edges:
        return edges
    rng = random.Random(seed)
    return rng.sample(edges, max_edges)


def to_networkx(graph: Graph, edges: Optional[Iterable[Edge]] = None) -> nx.MultiDiGraph:
    """Return ``graph`` (or the given subset of its edges) as a NetworkX graph."""
    G = nx.MultiDiGraph()
    G.add_nodes_from(graph.vertices())
    for u, v, w in graph.edges() if edges is None else edges:
        G.add_edge(u, v, weight=w)
    return G


def draw_shortest_paths(
    graph: Graph,
    result: ShortestPaths,
    *,
    path: Optional[Sequence[int]] = None,
    out: Optional[str] = None,
    layout: str = "spring",
    max_edges: int = 300,
    show_weights: bool = False,
    node_size: int = 300,
):
    """Draw ``graph`` with the source, tree edges and ``path`` highlighted.

    Returns:
        The Matplotlib figure. It is saved to ``out`` when given.

    Raises:
        ValueError: If ``layout`` is unknown.
    """
    if layout not in LAYOUTS:
        raise ValueError(f"Unknown layout: {layout}")

    G = to_networkx(graph, downsample_edges(graph.edges(), max_edges))
    simple = nx.DiGraph(G)
    if layout == "spring":
        pos = nx.spring_layout(simple, seed=42)
    elif layout == "kamada_kawai":
        pos = nx.kamada_kawai_layout(simple)
    else:
        pos = nx.shell_layout(simple)

    tree = {(u, v) for v, u in enumerate(result.predecessors) if u is not None}
    on_path = set(zip(path, path[1:])) if path else set()

    fig, ax = plt.subplots(figsize=(12, 10))
    node_colors = [
        "tab:red" if v == result.source
        else "tab:blue" if result.reachable(v)
        else "tab:gray"
        for v in simple.nodes
    ]
    nx.draw_networkx_nodes(simple, pos, ax=ax, node_color=node_colors, node_size=node_size, alpha=0.9)

    plain = [e for e in simple.edges if e not in tree]
    nx.draw_networkx_edges(simple, pos, ax=ax, edgelist=plain, arrowstyle="->",
                           arrowsize=12, width=1.0, alpha=0.3)
    tree_edges = [e for e in simple.edges if e in tree and e not in on_path]
    nx.draw_networkx_edges(simple, pos, ax=ax, edgelist=tree_edges, arrowstyle="->",
                           arrowsize=12, width=1.8, edge_color="tab:blue")
    path_edges = [e for e in simple.edges if e in on_path]
    nx.draw_networkx_edges(simple, pos, ax=ax, edgelist=path_edges, arrowstyle="->",
                           arrowsize=14, width=2.8, edge_color="tab:red")
    nx.draw_networkx_labels(simple, pos, ax=ax, font_size=8, font_color="black")

    if show_weights:
        edge_labels = {(u, v): d["weight"] for u, v, d in simple.edges(data=True)}
        nx.draw_networkx_edge_labels(simple, pos, ax=ax, edge_labels=edge_labels, font_size=7)

    ax.set_title(f"Shortest-path tree from vertex {result.source}", fontsize=14)
    ax.axis("off")
    fig.tight_layout()
    if out:
        fig.savefig(out)
    return fig


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``spbench-draw``.

    ``--source`` and ``--target`` are node ids as written in the file.
    Returns ``0`` once the figure is written and ``64`` when the graph cannot
    be loaded or a node id is unknown.
    """
    parser = argparse.ArgumentParser(description="Draw a graph and its shortest-path tree")
    parser.add_argument("path", help="Path to a graph file")
    parser.add_argument("--format", choices=FORMATS, default=None)
    direction = parser.add_mutually_exclusive_group()
    direction.add_argument("--undirected", dest="undirected", action="store_const", const=True, default=None)
    direction.add_argument("--directed", dest="undirected", action="store_const", const=False)
    parser.add_argument("--source", type=int, default=None)
    parser.add_argument("--target", type=int, default=None)
    parser.add_argument("--out", default="shortest_paths.png")
    parser.add_argument("--max-edges", type=int, default=300,
                        help="Maximum edges to display (sampling if larger)")
    parser.add_argument("--layout", choices=LAYOUTS, default="spring")
    parser.add_argument("--show-weights", action="store_true",
                        help="Render edge weights (recommended only for very small graphs)")
    parser.add_argument("--node-size", type=int, default=300)
    args = parser.parse_args(argv)

    try:
        gf = read_graph(args.path, args.format, undirected=args.undirected)
        source = gf.vertex(args.source) if args.source is not None else (gf.source or 0)
        result = shortest_paths(gf.graph, source)
        path: Tuple[int, ...] = tuple(result.path(gf.vertex(args.target))) if args.target is not None else ()
    except (SPBenchError, OSError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 64
    fig = draw_shortest_paths(
        gf.graph,
        result,
        path=path,
        out=args.out,
        layout=args.layout,
        max_edges=args.max_edges,
        show_weights=args.show_weights,
        node_size=args.node_size,
    )
    plt.close(fig)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
