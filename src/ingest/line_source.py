"""Backpressure-gated line source for listing files.

This module reads an input file one line at a time. Each delivered line
carries an acknowledgment handle, and the next line is not read until the
previous one has been acknowledged.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import IO, Iterator

from core.constants import DEFAULT_INPUT_ENCODING
from core.errors import (
    InputNotFoundError,
    InputUnreadableError,
    LineSourceProtocolError,
    RentloadInputError,
)
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


class LineAck:
    """Acknowledgment handle for one delivered line."""

    def __init__(self, line_index: int) -> None:
        self._line_index = line_index
        self._acknowledged = False

    @property
    def line_index(self) -> int:
        return self._line_index

    @property
    def acknowledged(self) -> bool:
        return self._acknowledged

    def __call__(self) -> None:
        """Mark the line as settled so the source may read the next one."""
        self._acknowledged = True


@dataclass(frozen=True)
class LineDelivery:
    """One raw line handed to the consumer.

    Attributes:
        line_index: One-based line number in the file.
        text: Line content without its line terminator.
        ack: Handle to call once the line's work has settled.
    """

    line_index: int
    text: str
    ack: LineAck


class LineSource:
    """Sequential reader over one open input file.

    Use :meth:`open` to create a source, then iterate :meth:`lines` once.
    """

    def __init__(self, path: Path, handle: IO[str]) -> None:
        self._path = path
        self._handle = handle
        self._delivered_count = 0
        self._started = False

    @classmethod
    def open(cls, path: Path | str, encoding: str = DEFAULT_INPUT_ENCODING) -> "LineSource":
        """Open an input file for sequential reading.

        Args:
            path: Input file path.
            encoding: Text encoding of the file.

        Returns:
            A fresh line source positioned at the first line.

        Raises:
            InputNotFoundError: If the path does not exist or is not a file.
            InputUnreadableError: If the file cannot be opened.
        """
        source_path = Path(path).expanduser()
        if not source_path.is_file():
            raise InputNotFoundError(
                f"Failed to open input at {source_path}: file does not exist. "
                "Provide an existing listings file."
            )
        try:
            handle = source_path.open("r", encoding=encoding, newline="")
        except (OSError, LookupError) as error:
            raise InputUnreadableError(
                f"Failed to open input at {source_path}: {error}. "
                "Check file permissions and encoding."
            ) from error
        return cls(source_path, handle)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def delivered_count(self) -> int:
        """Number of lines delivered so far, or in total once exhausted."""
        return self._delivered_count

    def lines(self) -> Iterator[LineDelivery]:
        """Yield input lines in file order, gated by acknowledgment.

        Yields:
            One :class:`LineDelivery` per non-blank line.

        Raises:
            RentloadInputError: If iterated more than once.
            LineSourceProtocolError: If the next line is requested before
                the previous delivery was acknowledged.
            InputUnreadableError: If reading fails mid-stream.
        """
        if self._started:
            raise RentloadInputError(
                f"Line source for {self._path} was already consumed. "
                "Open the file again to start a new pass."
            )
        self._started = True
        return self._iterate()

    def close(self) -> None:
        """Close the underlying file handle."""
        self._handle.close()

    def __enter__(self) -> "LineSource":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _iterate(self) -> Iterator[LineDelivery]:
        pending: LineAck | None = None
        physical_line = 0
        while True:
            if pending is not None and not pending.acknowledged:
                raise LineSourceProtocolError(
                    f"Line {pending.line_index} of {self._path} was not acknowledged "
                    "before the next line was requested."
                )
            raw_line = self._read_line(physical_line + 1)
            if not raw_line:
                break
            physical_line += 1
            text = raw_line.rstrip("\r\n")
            if not text.strip():
                _LOGGER.debug("blank_line_skipped", path=str(self._path), line_index=physical_line)
                continue
            pending = LineAck(physical_line)
            self._delivered_count += 1
            yield LineDelivery(line_index=physical_line, text=text, ack=pending)
        _LOGGER.debug(
            "line_source_exhausted",
            path=str(self._path),
            delivered_count=self._delivered_count,
        )

    def _read_line(self, line_index: int) -> str:
        try:
            return self._handle.readline()
        except (OSError, UnicodeDecodeError, ValueError) as error:
            raise InputUnreadableError(
                f"Failed to read input at {self._path}:{line_index}: {error}. "
                "Check the file encoding and storage device."
            ) from error
