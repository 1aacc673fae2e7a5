"""Rentload exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Fatal errors end a run; per-record errors are isolated by the importer.
"""

from __future__ import annotations


class RentloadError(Exception):
    """Base exception for all Rentload failures."""


class RentloadConfigError(RentloadError):
    """Raised for invalid runtime configuration."""


class RentloadConnectionError(RentloadError):
    """Raised when the listing store cannot be reached."""


class RentloadInputError(RentloadError):
    """Raised when the input file cannot be opened or read."""


class InputNotFoundError(RentloadInputError):
    """Raised when the input path does not exist."""


class InputUnreadableError(RentloadInputError):
    """Raised when the input path exists but cannot be read."""


class LineSourceProtocolError(RentloadInputError):
    """Raised when a line is requested before the previous one was acknowledged."""


class RentloadStoreError(RentloadError):
    """Raised when one owner or listing write fails."""


class RentloadParseError(RentloadError):
    """Raised when one input line does not match the listing schema.

    Attributes:
        line_index: One-based line number in the input file.
        field_index: Zero-based column index, or ``None`` for a column count mismatch.
        expected: Description of the expected value.
        actual: The offending raw value.
    """

    def __init__(
        self,
        line_index: int,
        field_index: int | None,
        expected: str,
        actual: str,
    ) -> None:
        self.line_index = line_index
        self.field_index = field_index
        self.expected = expected
        self.actual = actual
        location = f"line {line_index}"
        if field_index is not None:
            location = f"{location}, column {field_index}"
        super().__init__(
            f"Failed to parse listing at {location}: expected {expected}, got {actual!r}."
        )
