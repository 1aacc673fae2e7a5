"""Import run finalization.

This module releases the store connection and summarizes a finished
run, whether it reached end of input or stopped on a fatal error.
"""

from __future__ import annotations

from typing import Any, Protocol

from core.types import ImportStats


class Disconnectable(Protocol):
    """Connection capability released at the end of a run."""

    def disconnect(self) -> None:
        """Release the connection."""


class CompletionReporter:
    """Releases the run's connection once and reports final counts."""

    def __init__(self, connection: Disconnectable | None, logger: Any) -> None:
        self._connection = connection
        self._logger = logger
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def report(self, stats: ImportStats, fatal_error: Exception | None = None) -> str:
        """Release the connection, log a summary, and re-raise a fatal error.

        Args:
            stats: Final or partial run counters.
            fatal_error: Error that terminated the run, if any.

        Returns:
            Human-readable summary when the run completed.

        Raises:
            Exception: ``fatal_error`` itself, after cleanup has completed.
        """
        try:
            summary = render_summary(stats)
            if fatal_error is None:
                self._logger.info("import_completed", **stats.as_dict())
            else:
                self._logger.error("import_failed", error=str(fatal_error), **stats.as_dict())
        finally:
            self._release()
        if fatal_error is not None:
            raise fatal_error
        return summary

    def _release(self) -> None:
        if self._released:
            return
        self._released = True
        if self._connection is not None:
            self._connection.disconnect()


def render_summary(stats: ImportStats) -> str:
    """Render run counters as a two-line summary."""
    return (
        f"{stats.lines_seen} rows imported.\n"
        f"listings_created={stats.listings_created} "
        f"owners_created={stats.owners_created} "
        f"owners_reused={stats.owners_reused} "
        f"failed={stats.failed}"
    )
