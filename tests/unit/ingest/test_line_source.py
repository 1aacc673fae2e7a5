"""Unit tests for the gated line source."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.errors import (
    InputNotFoundError,
    InputUnreadableError,
    LineSourceProtocolError,
    RentloadInputError,
)
from ingest.line_source import LineSource
from tests.fixture_paths import FailingReadHandle, listing_fixture


def test_lines_are_delivered_in_file_order() -> None:
    """Source should deliver every line with one-based indices."""
    indices: list[int] = []
    with LineSource.open(listing_fixture("valid.tsv")) as source:
        for delivery in source.lines():
            indices.append(delivery.line_index)
            delivery.ack()

    assert indices == [1, 2, 3] and source.delivered_count == 3


def test_next_line_requires_acknowledgment(tmp_path: Path) -> None:
    """Source should refuse to read ahead of an unacknowledged line."""
    input_path = tmp_path / "two.tsv"
    input_path.write_text("first\nsecond\n", encoding="utf-8")
    with LineSource.open(input_path) as source:
        lines = source.lines()
        first = next(lines)

        with pytest.raises(LineSourceProtocolError):
            next(lines)

    assert first.ack.acknowledged is False and source.delivered_count == 1


def test_open_raises_for_missing_path(tmp_path: Path) -> None:
    """Opening a missing file should fail with a not-found error."""
    with pytest.raises(InputNotFoundError):
        LineSource.open(tmp_path / "missing.tsv")

    assert not (tmp_path / "missing.tsv").exists()


def test_open_raises_for_directory(tmp_path: Path) -> None:
    """A directory is not a readable listings file."""
    with pytest.raises(InputNotFoundError):
        LineSource.open(tmp_path)

    assert tmp_path.is_dir()


def test_open_raises_for_unknown_encoding(tmp_path: Path) -> None:
    """An unknown encoding should be reported as unreadable input."""
    input_path = tmp_path / "data.tsv"
    input_path.write_text("row\n", encoding="utf-8")

    with pytest.raises(InputUnreadableError):
        LineSource.open(input_path, encoding="no-such-codec")

    assert input_path.exists()


def test_lines_cannot_be_consumed_twice(tmp_path: Path) -> None:
    """A source is single-pass; reopening starts a fresh sequence."""
    input_path = tmp_path / "one.tsv"
    input_path.write_text("only\n", encoding="utf-8")
    with LineSource.open(input_path) as source:
        source.lines()
        with pytest.raises(RentloadInputError):
            source.lines()
    with LineSource.open(input_path) as reopened:
        texts: list[str] = []
        for delivery in reopened.lines():
            texts.append(delivery.text)
            delivery.ack()

    assert texts == ["only"]


def test_unacknowledged_last_line_fails_at_end_of_input(tmp_path: Path) -> None:
    """Asking past the last line without acking it is a protocol error."""
    input_path = tmp_path / "one.tsv"
    input_path.write_text("only\n", encoding="utf-8")
    with LineSource.open(input_path) as source:
        lines = source.lines()
        last = next(lines)

        with pytest.raises(LineSourceProtocolError):
            next(lines)

    assert last.line_index == 1 and source.delivered_count == 1



def test_line_terminators_and_blank_lines(tmp_path: Path) -> None:
    """CRLF endings are stripped, blank lines skipped, last line kept."""
    input_path = tmp_path / "mixed-endings.tsv"
    input_path.write_bytes(b"alpha\r\n\r\n   \nbeta\ngamma")
    delivered: list[tuple[int, str]] = []
    with LineSource.open(input_path) as source:
        for delivery in source.lines():
            delivered.append((delivery.line_index, delivery.text))
            delivery.ack()

    assert delivered == [(1, "alpha"), (4, "beta"), (5, "gamma")]


def test_read_failure_mid_stream_stops_delivery(tmp_path: Path) -> None:
    """An I/O error after two lines should surface once, with no more lines."""
    handle = FailingReadHandle("one\ntwo\nthree\n", fail_after=2)
    source = LineSource(tmp_path / "flaky.tsv", handle)
    texts: list[str] = []

    with pytest.raises(InputUnreadableError):
        for delivery in source.lines():
            texts.append(delivery.text)
            delivery.ack()

    assert texts == ["one", "two"] and source.delivered_count == 2


def test_invalid_bytes_are_reported_as_unreadable(tmp_path: Path) -> None:
    """Undecodable input should be a fatal input error."""
    input_path = tmp_path / "latin1.tsv"
    input_path.write_bytes(b"caf\xe9\n")

    with pytest.raises(InputUnreadableError):
        with LineSource.open(input_path) as source:
            for delivery in source.lines():
                delivery.ack()

    assert input_path.exists()
