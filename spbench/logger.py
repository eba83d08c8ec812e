"""Structured event logging for the engine, benchmark runner and CLI.

Events are a name plus keyword fields. :class:`StdLogger` renders them either
as ``level event k=v ...`` text lines or as one JSON object per line.
"""

from __future__ import annotations

import json
import math
import sys
from typing import Any, Dict, Protocol, TextIO


class Logger(Protocol):
    """Protocol for minimal logger implementations."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


def _jsonable(value: Any) -> Any:
    # JSON has no infinity; unreachable distances become null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


class StdLogger:
    """Minimal logger with optional JSON output."""

    LEVELS: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        if level not in self.LEVELS:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` are emitted."""
        return self.LEVELS[level] >= self.LEVELS[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update(_jsonable(fields))
            self.stream.write(json.dumps(obj) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)


__all__ = ["Logger", "NoopLogger", "StdLogger"]
