"""cProfile wrapper used by the CLI ``--profile`` option."""

from __future__ import annotations

import cProfile
import pstats
from io import StringIO
from types import TracebackType
from typing import Optional


class ProfileSession:
    """Context manager that profiles the enclosed block.

    Args:
        dump_path: Optional path where raw stats are written on exit, for
            later inspection with :mod:`pstats` or snakeviz.
        sort: :mod:`pstats` sort key used by :meth:`report`.
    """

    def __init__(self, dump_path: Optional[str] = None, sort: str = "cumulative") -> None:
        self.dump_path = dump_path
        self.sort = sort
        self._prof = cProfile.Profile()
        self.finished = False

    def __enter__(self) -> "ProfileSession":
        self._prof.enable()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self._prof.disable()
        self.finished = True
        if self.dump_path:
            self._prof.dump_stats(self.dump_path)

    def report(self, lines: int = 20) -> str:
        """Return the top ``lines`` rows of the statistics table.

        Raises:
            RuntimeError: If the session is still running.
        """
        if not self.finished:
            raise RuntimeError("profiling session not finished")
        buffer = StringIO()
        stats = pstats.Stats(self._prof, stream=buffer)
        stats.strip_dirs().sort_stats(self.sort).print_stats(lines)
        return buffer.getvalue()


__all__ = ["ProfileSession"]
