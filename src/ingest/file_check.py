"""Parse-only validation of listing files.

This module runs the line source and parser without a store so that
an input file can be checked before it is imported.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from core.constants import DEFAULT_INPUT_ENCODING
from core.errors import RentloadParseError
from ingest.line_source import LineSource
from ingest.record_parser import parse_listing_line


@dataclass(frozen=True)
class FileCheckReport:
    """Result of checking one listings file.

    Attributes:
        path: Checked file path.
        lines_seen: Lines delivered by the line source.
        failures: Parse errors in line order.
    """

    path: Path
    lines_seen: int
    failures: tuple[RentloadParseError, ...]

    @property
    def valid_count(self) -> int:
        return self.lines_seen - len(self.failures)


def check_listing_file(path: Path | str, encoding: str = DEFAULT_INPUT_ENCODING) -> FileCheckReport:
    """Parse every line of a listings file and collect failures.

    Args:
        path: Input file path.
        encoding: Text encoding of the file.

    Returns:
        Check report with counts and parse errors.

    Raises:
        RentloadInputError: If the file cannot be opened or read.
    """
    failures: list[RentloadParseError] = []
    with LineSource.open(path, encoding) as source:
        for delivery in source.lines():
            try:
                parse_listing_line(delivery.text, delivery.line_index)
            except RentloadParseError as error:
                failures.append(error)
            delivery.ack()
        return FileCheckReport(
            path=source.path,
            lines_seen=source.delivered_count,
            failures=tuple(failures),
        )
