"""Command-line interface for running the shortest-path engine."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
import tracemalloc
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .dijkstra import DijkstraEngine, ShortestPaths
from .exceptions import ConfigError, InputError, SPBenchError
from .export import export_tree_graphml, export_tree_json
from .generator import GRAPH_TYPES, generate_graph
from .io import FORMATS, GraphFile, read_graph
from .logger import StdLogger
from .profiling import ProfileSession

EXIT_OK = 0
EXIT_CHECK_FAILED = 1
EXIT_USAGE = 64
EXIT_INTERNAL = 70

EXAMPLE_GRAPH = """# Nodes
1
2
3
4
# Edges
1 2 1
2 3 2
1 3 10
3 4 1
# ShortestPath
1 2 3 4
"""


def _load(args: argparse.Namespace) -> GraphFile:
    if args.random:
        gen = generate_graph(n=args.n, m=args.m, graph_type=args.graph_type, seed=args.seed)
        return GraphFile(graph=gen.graph, labels=list(range(gen.graph.n)), source=gen.source)
    return read_graph(args.graph, args.format, undirected=args.undirected)


def _solve(engine: DijkstraEngine, args: argparse.Namespace) -> ShortestPaths:
    if not args.profile:
        return engine.solve()
    with ProfileSession(dump_path=args.profile_out) as prof:
        res = engine.solve()
    sys.stderr.write(prof.report(lines=40))
    return res


def _jsonable_distances(res: ShortestPaths) -> List[Any]:
    return [d if res.reachable(v) else None for v, d in enumerate(res.distances)]


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``spbench`` command-line tool."""
    examples = (
        "Examples:\n"
        "  spbench --graph graph.txt --check\n"
        "  spbench --graph graph.csv --source 0 --target 3\n"
        "  spbench --random --n 100 --m 500 --metrics-out run.json\n"
        "  spbench --graph graph.txt --export-json tree.json\n"
    )
    p = argparse.ArgumentParser(
        prog="spbench",
        description="Single-source shortest paths with Dijkstra",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--graph", type=str, help="Path to a graph file")
    src.add_argument("--random", action="store_true", help="Use a random graph")
    src.add_argument(
        "--example",
        action="store_true",
        help="Print a sample graph file to stdout and exit",
    )

    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Graph file format (auto-detected from extension)",
    )
    direction = p.add_mutually_exclusive_group()
    direction.add_argument(
        "--undirected",
        dest="undirected",
        action="store_const",
        const=True,
        default=None,
        help="Insert every file edge in both directions (default for sections files)",
    )
    direction.add_argument(
        "--directed",
        dest="undirected",
        action="store_const",
        const=False,
        help="Keep file edges one-way (default for edgelist, csv and jsonl files)",
    )

    p.add_argument("--n", type=int, default=10, help="Vertices (random mode)")
    p.add_argument("--m", type=int, default=20, help="Edges (random mode)")
    p.add_argument("--seed", type=int, default=0, help="Seed controlling random graph generation")
    p.add_argument("--graph-type", choices=GRAPH_TYPES, default="erdos_renyi", help="Random graph family")

    p.add_argument("--source", type=int, default=None, help="Source node id as written in the file (default: from file, else 0)")
    p.add_argument("--target", type=int, default=None, help="Target node id for path output")
    p.add_argument("--print-graph", action="store_true", help="Print the loaded graph to stderr")
    p.add_argument(
        "--check",
        action="store_true",
        help="Compare the computed path with the file's expected shortest path",
    )

    p.add_argument("--profile", action="store_true", help="Enable cProfile")
    p.add_argument("--profile-out", type=str, default=None, help="Dump .prof file to this path")
    p.add_argument("--export-json", type=str, default=None, help="Write shortest-path tree as JSON")
    p.add_argument("--export-graphml", type=str, default=None, help="Write shortest-path tree as GraphML")
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_GRAPH)
        return EXIT_OK

    stream = sys.stdout if args.log_json else sys.stderr
    level = "info" if args.log_json and args.log_level == "warning" else args.log_level
    logger = StdLogger(level=level, json_fmt=args.log_json, stream=stream)

    try:
        gf = _load(args)
        G = gf.graph
        if args.print_graph:
            sys.stderr.write(f"{G}\n")

        target = gf.vertex(args.target) if args.target is not None else None
        if args.check:
            if not gf.expected_path:
                raise InputError("--check needs a graph file with a # ShortestPath section")
            if target is None:
                target = gf.expected_path[-1]
        if args.source is not None:
            source = gf.vertex(args.source)
        elif gf.source is not None:
            source = gf.source
        else:
            source = 0

        if args.verbose and not args.log_json:
            sys.stderr.write(f"config: n={G.n} m={G.edge_count()} source={source} target={target}\n")

        engine = DijkstraEngine(G, source, logger=logger)
        if args.metrics_out:
            tracemalloc.start()
        try:
            t0 = time.perf_counter()
            res = _solve(engine, args)
            wall_ms = (time.perf_counter() - t0) * 1000.0
            peak_mib = None
            if args.metrics_out:
                _, peak = tracemalloc.get_traced_memory()
                peak_mib = peak / (1024 * 1024)
        finally:
            if args.metrics_out:
                tracemalloc.stop()

        out: Dict[str, Any] = {
            "source": gf.labels[source],
            "distances": _jsonable_distances(res),
            "predecessors": res.predecessors,
        }
        if gf.labels != list(range(G.n)):
            out["labels"] = gf.labels
        if target is not None:
            out["target"] = gf.labels[target]
            out["path"] = gf.label_path(engine.path(target))

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_tree_json(res))
        if args.export_graphml:
            with open(args.export_graphml, "w", encoding="utf-8") as fh:
                fh.write(export_tree_graphml(res))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(engine.metrics(wall_ms=wall_ms, peak_mib=peak_mib)), fh)

        status = EXIT_OK
        if args.check:
            out["expected_path"] = gf.label_path(gf.expected_path)
            ok = out["path"] == out["expected_path"]
            out["check"] = "ok" if ok else "mismatch"
            if not ok:
                status = EXIT_CHECK_FAILED

        logger.info(
            "run",
            n=G.n,
            m=G.edge_count(),
            source=out["source"],
            wall_ms=round(wall_ms, 3),
            **engine.summary(),
        )
        if not args.log_json:
            print(json.dumps(out))
        return status

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except SPBenchError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except OSError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except Exception as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
