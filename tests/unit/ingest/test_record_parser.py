"""Unit tests for listing line parsing."""

from __future__ import annotations

import pytest

from core.errors import RentloadParseError
from core.types import Coordinates
from ingest.record_parser import parse_listing_line
from tests.fixture_paths import build_listing_line, listing_fixture


def test_parse_listing_line_reads_all_fields() -> None:
    """A fixture line should map onto every typed field."""
    line = listing_fixture("valid.tsv").read_text(encoding="utf-8").splitlines()[0]

    record = parse_listing_line(line, 1)

    assert record.name == "Cozy studio near the canal"
    assert record.city == "Amsterdam"
    assert len(record.photos) == 6
    assert record.is_premium is True
    assert record.listing_type == "apartment"
    assert (record.rooms_count, record.guests_count, record.price) == (2, 4, 1200)
    assert record.features == ("Breakfast", "Washer")
    assert record.coordinates == Coordinates(latitude=52.370216, longitude=4.895168)
    assert record.owner.email == "anna@example.com"
    assert record.owner.owner_type == "pro"


def test_wrong_column_count_reports_expected_and_actual() -> None:
    """Column count mismatch should name both counts."""
    with pytest.raises(RentloadParseError) as error_info:
        parse_listing_line("Broken row\tonly three\tcolumns", 7)

    error = error_info.value
    assert (error.line_index, error.field_index) == (7, None)
    assert (error.expected, error.actual) == ("16 columns", "3 columns")


@pytest.mark.parametrize(("token", "expected"), [("true", True), ("false", False)])
def test_boolean_tokens(token: str, expected: bool) -> None:
    """Only the two literal tokens map onto booleans."""
    record = parse_listing_line(build_listing_line(is_premium=token), 1)

    assert record.is_premium is expected


@pytest.mark.parametrize("token", ["TRUE", "False", "yes", "1", "0", ""])
def test_other_boolean_tokens_are_rejected(token: str) -> None:
    """Any other premium token should be a parse error, not a default."""
    with pytest.raises(RentloadParseError) as error_info:
        parse_listing_line(build_listing_line(is_premium=token), 3)

    assert error_info.value.field_index == 5


@pytest.mark.parametrize(
    ("column", "value", "field_index"),
    [
        ("name", "  ", 0),
        ("photos", "a.jpg;b.jpg", 4),
        ("photos", "a.jpg;;c.jpg;d.jpg;e.jpg;f.jpg", 4),
        ("listing_type", "castle", 6),
        ("rooms_count", "two", 7),
        ("rooms_count", "9", 7),
        ("guests_count", "0", 8),
        ("price", "99", 9),
        ("price", "12.5", 9),
        ("price", "1_800", 9),
        ("price", "\u0661\u0668\u0660\u0660", 9),
        ("features", "Breakfast;Sauna", 10),
        ("coordinates", "52.1", 11),
        ("coordinates", "north,east", 11),
        ("coordinates", "91.0,4.0", 11),
        ("coordinates", "5_1.2,6.7", 11),
        ("owner_email", "not-an-email", 13),
        ("owner_type", "admin", 15),
    ],
)
def test_invalid_fields_report_their_column(column: str, value: str, field_index: int) -> None:
    """Each coercion failure should carry the failing column index."""
    with pytest.raises(RentloadParseError) as error_info:
        parse_listing_line(build_listing_line(**{column: value}), 2)

    assert error_info.value.field_index == field_index and error_info.value.actual == value


def test_leftmost_invalid_column_is_reported() -> None:
    """With several bad fields the first failing column wins."""
    line = build_listing_line(owner_email="nobody", rooms_count="many", owner_type="admin")

    with pytest.raises(RentloadParseError) as error_info:
        parse_listing_line(line, 4)

    assert error_info.value.field_index == 7


def test_parse_is_deterministic() -> None:
    """The same line should always produce an equal record."""
    line = build_listing_line()

    assert parse_listing_line(line, 4) == parse_listing_line(line, 4)


def test_parse_failure_is_deterministic() -> None:
    """The same bad line should always produce the same failure."""
    line = build_listing_line(owner_type="admin")
    messages = []
    for _ in range(2):
        with pytest.raises(RentloadParseError) as error_info:
            parse_listing_line(line, 4)
        messages.append(str(error_info.value))

    assert messages[0] == messages[1]
