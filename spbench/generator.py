"""Directed weighted graph generator for benchmarking.

SUPPORTED GRAPH TYPES
---------------------
1. erdos_renyi
   Random directed graphs with uniformly sampled edges.
   Use for baseline performance and scaling with n and m.

2. dag
   Directed acyclic graphs (edges only from lower- to higher-index vertices).
   Use for shortest paths of limited depth.

3. grid
   2D grid graphs with edges between neighboring vertices (both directions).
   Use for many equal-length shortest paths and wide frontiers.

WEIGHT DISTRIBUTIONS
--------------------
- uniform: evenly distributed integer weights
- small_int: many equal or similar weights (stresses heap tie handling)
- log_uniform / exp: heavy-tailed distributions

All generated weights are non-negative integers.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Set, Tuple

from .exceptions import ConfigError
from .graph import Graph

WeightDist = Literal["uniform", "small_int", "log_uniform", "exp"]
GraphType = Literal["erdos_renyi", "dag", "grid"]

GRAPH_TYPES: Tuple[str, ...] = ("erdos_renyi", "dag", "grid")
WEIGHT_DISTS: Tuple[str, ...] = ("uniform", "small_int", "log_uniform", "exp")


@dataclass(frozen=True)
class GeneratedGraph:
    """A generated graph with its query source.

    ``metadata`` records the generator arguments so a run can be reproduced.
    """

    graph: Graph
    source: int
    metadata: Dict[str, Any] = field(default_factory=dict)


def _sample_weight(
    rng: random.Random,
    dist: str,
    w_min: int,
    w_max: int,
) -> int:
    if dist == "uniform":
        return rng.randint(w_min, w_max)

    if dist == "small_int":
        hi = min(w_max, w_min + 10)
        return rng.randint(w_min, hi)

    if dist == "log_uniform":
        # sample in log-space shifted by one to avoid log(0)
        a = max(1, w_min + 1)
        b = max(a, w_max + 1)
        x = math.exp(rng.uniform(math.log(a), math.log(b)))
        return max(w_min, min(w_max, int(round(x - 1))))

    if dist == "exp":
        if w_max == w_min:
            return w_min
        lam = 1.0 / max(1.0, (w_max - w_min) / 4.0)
        x = rng.expovariate(lam)
        return int(w_min + min(w_max - w_min, round(x)))

    raise ConfigError(f"unknown weight distribution: {dist}")


def generate_graph(
    *,
    n: int,
    m: Optional[int] = None,
    graph_type: str = "erdos_renyi",
    weight_dist: str = "uniform",
    w_min: int = 1,
    w_max: int = 100,
    seed: Optional[int] = 0,
    source: int = 0,
    allow_self_loops: bool = False,
    ensure_weakly_connected: bool = True,
) -> GeneratedGraph:
    """Generate a directed weighted graph.

    Notes:
        - With ``ensure_weakly_connected`` a backbone chain ``i -> i+1`` is
          added first, so every vertex is reachable from vertex ``0``.
        - Duplicate ``(u, v)`` pairs are never generated.
        - ``m`` is capped by the number of distinct pairs the family allows.

    Raises:
        ConfigError: On invalid sizes, weight bounds or unknown names.
    """
    if n <= 0:
        raise ConfigError("n must be > 0.")
    if not (0 <= source < n):
        raise ConfigError("source must be in [0, n).")
    if w_min < 0:
        raise ConfigError("w_min must be >= 0 for Dijkstra-safe graphs.")
    if w_max < w_min:
        raise ConfigError("w_max must be >= w_min.")
    if graph_type not in GRAPH_TYPES:
        raise ConfigError(f"unknown graph_type: {graph_type}")
    if weight_dist not in WEIGHT_DISTS:
        raise ConfigError(f"unknown weight distribution: {weight_dist}")
    if m is None and graph_type != "grid":
        m = min(n * 4, n * (n - 1))
    if m is not None and m < 0:
        raise ConfigError("m must be >= 0.")

    rng = random.Random(seed)
    g = Graph(n)
    seen: Set[Tuple[int, int]] = set()

    def add_edge(u: int, v: int) -> None:
        if not allow_self_loops and u == v:
            return
        if (u, v) in seen:
            return
        seen.add((u, v))
        g.add_edge(u, v, _sample_weight(rng, weight_dist, w_min, w_max))

    if ensure_weakly_connected and graph_type != "grid":
        for i in range(n - 1):
            add_edge(i, i + 1)

    pairs = n * n if allow_self_loops else n * (n - 1)
    if graph_type == "erdos_renyi":
        target_m = min(m, pairs)
        while len(seen) < target_m:
            add_edge(rng.randrange(n), rng.randrange(n))

    elif graph_type == "dag":
        target_m = min(m, n * (n - 1) // 2)
        while len(seen) < target_m:
            u = rng.randrange(n)
            v = rng.randrange(n)
            if u == v:
                continue
            if u > v:
                u, v = v, u
            add_edge(u, v)

    else:
        rows = max(1, math.isqrt(n))
        cols = (n + rows - 1) // rows
        for u in range(n):
            r, c = divmod(u, cols)
            right = u + 1
            down = (r + 1) * cols + c
            if c + 1 < cols and right < n:
                add_edge(u, right)
                add_edge(right, u)
            if down < n:
                add_edge(u, down)
                add_edge(down, u)
        # extra random edges only when m is given explicitly
        if m is not None:
            target_m = min(m, pairs)
            while len(seen) < target_m:
                add_edge(rng.randrange(n), rng.randrange(n))

    return GeneratedGraph(
        graph=g,
        source=source,
        metadata={
            "graph_type": graph_type,
            "weight_dist": weight_dist,
            "w_min": w_min,
            "w_max": w_max,
            "seed": seed,
            "ensure_weakly_connected": ensure_weakly_connected,
            "allow_self_loops": allow_self_loops,
        },
    )


COMMON: Dict[str, Any] = dict(source=0, ensure_weakly_connected=True, allow_self_loops=False)

# Named benchmark suites, each a list of keyword sets for generate_graph
PRESETS: Dict[str, List[Dict[str, Any]]] = {
    "baseline_scaling": [
        dict(n=n, m=4 * n, graph_type="erdos_renyi", weight_dist="uniform",
             w_min=1, w_max=1_000, seed=seed, **COMMON)
        for n in (1_000, 10_000, 100_000)
        for seed in (0, 1, 2)
    ],
    "tie_stress": [
        dict(n=10_000, m=40_000, graph_type="erdos_renyi", weight_dist="small_int",
             w_min=1, w_max=1_000, seed=seed, **COMMON)
        for seed in (0, 1, 2)
    ],
    "dag_propagation": [
        dict(n=10_000, m=40_000, graph_type="dag", weight_dist="uniform",
             w_min=1, w_max=1_000, seed=seed, **COMMON)
        for seed in (0, 1, 2)
    ],
    "grid_frontier": [
        dict(n=10_000, graph_type="grid", weight_dist="small_int",
             w_min=1, w_max=1_000, seed=seed, **COMMON)
        for seed in (0, 1, 2)
    ],
}


__all__ = ["GeneratedGraph", "generate_graph", "GRAPH_TYPES", "WEIGHT_DISTS", "PRESETS"]
