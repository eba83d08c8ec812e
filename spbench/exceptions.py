"""Custom exception types used across :mod:`spbench`."""

from __future__ import annotations


class SPBenchError(Exception):
    """Base class for all package-specific errors."""


class InputError(SPBenchError, ValueError):
    """Raised for invalid user input such as malformed edges."""


class InvalidVertex(InputError):
    """Raised when a referenced vertex does not exist in the graph."""


class InvalidWeight(InputError):
    """Raised when an edge weight is negative or not a number."""


class GraphFormatError(InputError):
    """Raised when parsing a graph file fails."""


class ConfigError(SPBenchError, ValueError):
    """Raised for invalid configuration options."""


__all__ = [
    "SPBenchError",
    "InputError",
    "InvalidVertex",
    "InvalidWeight",
    "GraphFormatError",
    "ConfigError",
]
