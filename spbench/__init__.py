"""Public package exports for :mod:`spbench`."""

from __future__ import annotations

from .dijkstra import (
    UNREACHABLE,
    Dijkstra,
    DijkstraEngine,
    EngineMetrics,
    ShortestPathAlgorithm,
    ShortestPaths,
    find_shortest_path,
    shortest_paths,
)
from .exceptions import (
    ConfigError,
    GraphFormatError,
    InputError,
    InvalidVertex,
    InvalidWeight,
    SPBenchError,
)
from .graph import Graph
from .graph_numpy import NumpyGraph
from .io import GraphFile, read_graph, write_graph
from .logger import Logger, NoopLogger, StdLogger
from .path import path_weight, reconstruct_path

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "NumpyGraph",
    "UNREACHABLE",
    "ShortestPaths",
    "EngineMetrics",
    "DijkstraEngine",
    "Dijkstra",
    "ShortestPathAlgorithm",
    "shortest_paths",
    "find_shortest_path",
    "reconstruct_path",
    "path_weight",
    "GraphFile",
    "read_graph",
    "write_graph",
    "Logger",
    "NoopLogger",
    "StdLogger",
    "SPBenchError",
    "InputError",
    "InvalidVertex",
    "InvalidWeight",
    "GraphFormatError",
    "ConfigError",
]
