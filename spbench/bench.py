"""Micro-benchmark runner for the Dijkstra engine.

Run this module as a script to time the engine across random graphs.

Example:
```bash
python -m spbench.bench --trials 5 --sizes 1000,5000 2000,10000 --out-csv out.csv
```

Use ``--mem`` to record peak memory usage during engine runs and
``--preset`` to run one of the named suites from :data:`spbench.generator.PRESETS`.
"""

from __future__ import annotations

import argparse
import csv
import statistics
import sys
import time
import tracemalloc
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .dijkstra import DijkstraEngine, EngineMetrics
from .exceptions import ConfigError, SPBenchError
from .generator import GRAPH_TYPES, PRESETS, WEIGHT_DISTS, generate_graph
from .logger import Logger, NoopLogger, StdLogger

CSV_HEADER = [
    "n",
    "m",
    "graph_type",
    "weight_dist",
    "trial",
    "seed",
    "wall_ms",
    "edges_relaxed",
    "pops",
    "stale_pops",
    "max_frontier_size",
    "reachable",
]


@dataclass(frozen=True)
class BenchConfig:
    """Benchmark settings.

    Attributes:
        sizes: ``(n, m)`` pairs to benchmark. ``m=None`` lets the generator
            pick the edge count for the family.
        trials: Runs per size, each with seed ``seed_base + trial``.
        graph_type: Generator family name.
        weight_dist: Generator weight distribution name.
        w_min: Smallest edge weight.
        w_max: Largest edge weight.
        seed_base: First seed.
        track_mem: Record peak memory with :mod:`tracemalloc`.
    """

    sizes: Tuple[Tuple[int, Optional[int]], ...] = ((10, 20), (20, 40))
    trials: int = 1
    graph_type: str = "erdos_renyi"
    weight_dist: str = "uniform"
    w_min: int = 1
    w_max: int = 100
    seed_base: int = 0
    track_mem: bool = False

    def __post_init__(self) -> None:
        if self.trials <= 0:
            raise ConfigError("trials must be positive.")
        if not self.sizes:
            raise ConfigError("at least one size is required.")
        for n, m in self.sizes:
            if n <= 0 or (m is not None and m < 0):
                raise ConfigError(f"invalid size n={n} m={m}")
        if self.graph_type not in GRAPH_TYPES:
            raise ConfigError(f"unknown graph_type: {self.graph_type}")
        if self.weight_dist not in WEIGHT_DISTS:
            raise ConfigError(f"unknown weight distribution: {self.weight_dist}")
        if self.w_min < 0 or self.w_max < self.w_min:
            raise ConfigError("weights must satisfy 0 <= w_min <= w_max.")


@dataclass
class BenchResult:
    """Result of a single benchmarking run."""

    metrics: EngineMetrics
    graph_type: str
    weight_dist: str
    trial: int
    seed: int
    reachable: int


def run_once(
    n: int,
    m: Optional[int],
    *,
    graph_type: str = "erdos_renyi",
    weight_dist: str = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: int = 0,
    trial: int = 0,
    track_mem: bool = False,
    logger: Logger | None = None,
) -> BenchResult:
    """Generate one graph and time a full engine solve on it.

    Graph generation is excluded from the measured time.
    """
    gen = generate_graph(
        n=n,
        m=m,
        graph_type=graph_type,
        weight_dist=weight_dist,
        w_min=w_min,
        w_max=w_max,
        seed=seed,
    )
    engine = DijkstraEngine(gen.graph, gen.source, logger=logger)

    peak: Optional[int] = None
    if track_mem:
        tracemalloc.start()
    try:
        t0 = time.perf_counter()
        res = engine.solve()
        wall_ms = (time.perf_counter() - t0) * 1000.0
        if track_mem:
            _, peak = tracemalloc.get_traced_memory()
    finally:
        if track_mem:
            tracemalloc.stop()

    peak_mib = (peak / (1024 * 1024)) if peak is not None else None
    reachable = sum(1 for v in range(len(res.distances)) if res.reachable(v))
    return BenchResult(
        metrics=engine.metrics(wall_ms=wall_ms, peak_mib=peak_mib),
        graph_type=graph_type,
        weight_dist=weight_dist,
        trial=trial,
        seed=seed,
        reachable=reachable,
    )


def _p95(values: Sequence[float]) -> float:
    if len(values) < 2:
        return values[0]
    return statistics.quantiles(values, n=100, method="inclusive")[94]


def run_benchmark(config: BenchConfig, logger: Logger | None = None) -> Tuple[List[BenchResult], List[Dict[str, Any]]]:
    """Run every configured trial.

    Returns:
        The per-trial results and one aggregate row per size with median and
        p95 wall time, median edge relaxations and, with memory tracking,
        median peak MiB.
    """
    logger = logger or NoopLogger()
    results: List[BenchResult] = []
    aggregates: List[Dict[str, Any]] = []
    for n, m in config.sizes:
        batch: List[BenchResult] = []
        for trial in range(config.trials):
            res = run_once(
                n,
                m,
                graph_type=config.graph_type,
                weight_dist=config.weight_dist,
                w_min=config.w_min,
                w_max=config.w_max,
                seed=config.seed_base + trial,
                trial=trial,
                track_mem=config.track_mem,
            )
            logger.debug("bench.trial", n=n, m=m, trial=trial, wall_ms=round(res.metrics.wall_ms, 3))
            batch.append(res)
        times = [r.metrics.wall_ms for r in batch]
        row: Dict[str, Any] = {
            "n": n,
            "m": batch[0].metrics.m,
            "trials": len(batch),
            "wall_med": statistics.median(times),
            "wall_p95": _p95(times),
            "edges_med": statistics.median(r.metrics.counters["edges_relaxed"] for r in batch),
        }
        if config.track_mem:
            row["mem_med"] = statistics.median(r.metrics.peak_mib or 0.0 for r in batch)
        logger.info("bench.size", **row)
        aggregates.append(row)
        results.extend(batch)
    return results, aggregates


def write_csv(path: Path, results: Sequence[BenchResult], track_mem: bool = False) -> None:
    """Write one CSV row per trial."""
    header = CSV_HEADER + (["peak_mib"] if track_mem else [])
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(header)
        for r in results:
            mtx = r.metrics
            row: List[object] = [
                mtx.n,
                mtx.m,
                r.graph_type,
                r.weight_dist,
                r.trial,
                r.seed,
                f"{mtx.wall_ms:.6f}",
                mtx.counters["edges_relaxed"],
                mtx.counters["pops"],
                mtx.counters["stale_pops"],
                mtx.counters["max_frontier_size"],
                r.reachable,
            ]
            if track_mem:
                row.append(f"{(mtx.peak_mib or 0.0):.6f}")
            writer.writerow(row)


def format_table(aggregates: Sequence[Dict[str, Any]], track_mem: bool = False) -> str:
    """Render aggregate rows as a fixed-width text table."""
    header = f"{'n':>8} {'m':>9} {'trials':>6} {'edges':>10} {'wall_med':>10} {'wall_p95':>10}"
    if track_mem:
        header += f" {'mem_med':>8}"
    lines = [header]
    for row in aggregates:
        line = (
            f"{row['n']:8d} {row['m']:9d} {row['trials']:6d} {int(row['edges_med']):10d}"
            f" {row['wall_med']:10.2f} {row['wall_p95']:10.2f}"
        )
        if track_mem:
            line += f" {row.get('mem_med', 0.0):8.2f}"
        lines.append(line)
    return "\n".join(lines)


def _parse_sizes(specs: Sequence[str]) -> Tuple[Tuple[int, int], ...]:
    sizes: List[Tuple[int, int]] = []
    for spec in specs:
        try:
            n_str, m_str = spec.split(",")
            sizes.append((int(n_str), int(m_str)))
        except ValueError:
            raise ConfigError(f"invalid size specification '{spec}'") from None
    return tuple(sizes)


def _preset_config(name: str, args: argparse.Namespace) -> BenchConfig:
    cases = PRESETS[name]
    first = cases[0]
    seeds = sorted({c["seed"] for c in cases})
    sizes = tuple(dict.fromkeys((c["n"], c.get("m")) for c in cases))
    return BenchConfig(
        sizes=sizes,
        trials=len(seeds),
        graph_type=first["graph_type"],
        weight_dist=first["weight_dist"],
        w_min=first["w_min"],
        w_max=first["w_max"],
        seed_base=seeds[0],
        track_mem=args.mem,
    )


def main(argv: List[str] | None = None) -> int:
    """Run benchmarking trials and optionally record results.

    Args:
        argv: Optional argument list for testing.
    """
    parser = argparse.ArgumentParser(prog="spbench-bench", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--trials", type=int, default=1, help="Number of trials per size")
    parser.add_argument(
        "--sizes",
        nargs="+",
        default=["10,20", "20,40"],
        help="Size pairs as n,m (e.g. 1000,5000). Defaults to a small demo.",
    )
    parser.add_argument("--preset", choices=sorted(PRESETS), default=None, help="Run a named suite")
    parser.add_argument("--graph-type", choices=GRAPH_TYPES, default="erdos_renyi")
    parser.add_argument("--weight-dist", choices=WEIGHT_DISTS, default="uniform")
    parser.add_argument("--w-min", type=int, default=1)
    parser.add_argument("--w-max", type=int, default=100)
    parser.add_argument("--seed-base", type=int, default=0, help="Base seed for random graphs")
    parser.add_argument("--out-csv", type=Path, help="Optional path to write per-trial CSV data")
    parser.add_argument("--mem", action="store_true", help="Profile peak memory usage (MiB) using tracemalloc")
    parser.add_argument("--log-level", choices=sorted(StdLogger.LEVELS), default="warning")
    args = parser.parse_args(argv)

    logger = StdLogger(level=args.log_level)
    try:
        if args.preset:
            config = _preset_config(args.preset, args)
        else:
            config = BenchConfig(
                sizes=_parse_sizes(args.sizes),
                trials=args.trials,
                graph_type=args.graph_type,
                weight_dist=args.weight_dist,
                w_min=args.w_min,
                w_max=args.w_max,
                seed_base=args.seed_base,
                track_mem=args.mem,
            )
        results, aggregates = run_benchmark(config, logger=logger)
    except SPBenchError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 64

    if args.out_csv:
        write_csv(args.out_csv, results, track_mem=config.track_mem)
    print(format_table(aggregates, track_mem=config.track_mem))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
