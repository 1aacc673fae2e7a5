"""Listing line parser.

This module turns one tab-separated line into a typed listing record.
Parsing is pure: the same line always yields the same record or error.
"""

from __future__ import annotations

import re
from typing import Sequence, cast

from core.constants import (
    COLUMN_DELIMITER,
    COORDINATE_DELIMITER,
    FALSE_TOKEN,
    LIST_DELIMITER,
    LISTING_FEATURES,
    LISTING_TYPES,
    MAX_GUESTS_COUNT,
    MAX_PRICE,
    MAX_ROOMS_COUNT,
    MIN_GUESTS_COUNT,
    MIN_PRICE,
    MIN_ROOMS_COUNT,
    OWNER_TYPES,
    PHOTO_COUNT,
    SCHEMA_COLUMN_COUNT,
    SCHEMA_COLUMNS,
    TRUE_TOKEN,
)
from core.errors import RentloadParseError
from core.types import Coordinates, ListingType, OwnerProfile, OwnerType, ParsedListingRecord

_COLUMN_INDEX = {name: index for index, name in enumerate(SCHEMA_COLUMNS)}
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?")


def parse_listing_line(text: str, line_index: int) -> ParsedListingRecord:
    """Parse one input line into a listing record.

    Args:
        text: Raw line without its terminator.
        line_index: One-based line number for error reporting.

    Returns:
        Parsed listing record.

    Raises:
        RentloadParseError: If the column count or any field is invalid.
    """
    columns = text.split(COLUMN_DELIMITER)
    if len(columns) != SCHEMA_COLUMN_COUNT:
        raise RentloadParseError(
            line_index,
            None,
            f"{SCHEMA_COLUMN_COUNT} columns",
            f"{len(columns)} columns",
        )
    fields = _ColumnReader(columns, line_index)
    return ParsedListingRecord(
        line_index=line_index,
        name=fields.text("name"),
        description=fields.text("description"),
        city=fields.text("city"),
        preview_photo=fields.text("preview_photo"),
        photos=fields.token_list("photos", exact_count=PHOTO_COUNT),
        is_premium=fields.boolean("is_premium"),
        listing_type=cast(ListingType, fields.choice("listing_type", LISTING_TYPES)),
        rooms_count=fields.integer("rooms_count", MIN_ROOMS_COUNT, MAX_ROOMS_COUNT),
        guests_count=fields.integer("guests_count", MIN_GUESTS_COUNT, MAX_GUESTS_COUNT),
        price=fields.integer("price", MIN_PRICE, MAX_PRICE),
        features=fields.token_list("features", allowed=LISTING_FEATURES),
        coordinates=fields.coordinates("coordinates"),
        owner=OwnerProfile(
            name=fields.text("owner_name"),
            email=fields.email("owner_email"),
            avatar=fields.text("owner_avatar"),
            owner_type=cast(OwnerType, fields.choice("owner_type", OWNER_TYPES)),
        ),
    )


class _ColumnReader:
    """Typed accessors over the columns of one line."""

    def __init__(self, columns: Sequence[str], line_index: int) -> None:
        self._columns = columns
        self._line_index = line_index

    def text(self, column: str) -> str:
        index, raw_value = self._raw(column)
        value = raw_value.strip()
        if not value:
            raise self._error(index, "non-empty text", raw_value)
        return value

    def email(self, column: str) -> str:
        index, raw_value = self._raw(column)
        value = raw_value.strip()
        local_part, _, domain = value.partition("@")
        if not local_part or not domain:
            raise self._error(index, "email address", raw_value)
        return value

    def integer(self, column: str, minimum: int, maximum: int) -> int:
        index, raw_value = self._raw(column)
        token = raw_value.strip()
        if not _INTEGER_PATTERN.fullmatch(token):
            raise self._error(index, "integer", raw_value)
        value = int(token)
        if not minimum <= value <= maximum:
            raise self._error(index, f"integer in {minimum}..{maximum}", raw_value)
        return value

    def boolean(self, column: str) -> bool:
        index, raw_value = self._raw(column)
        token = raw_value.strip()
        if token == TRUE_TOKEN:
            return True
        if token == FALSE_TOKEN:
            return False
        raise self._error(index, f"'{TRUE_TOKEN}' or '{FALSE_TOKEN}'", raw_value)

    def choice(self, column: str, allowed: Sequence[str]) -> str:
        index, raw_value = self._raw(column)
        token = raw_value.strip()
        if token not in allowed:
            raise self._error(index, f"one of {', '.join(allowed)}", raw_value)
        return token

    def token_list(
        self,
        column: str,
        exact_count: int | None = None,
        allowed: Sequence[str] | None = None,
    ) -> tuple[str, ...]:
        index, raw_value = self._raw(column)
        tokens = tuple(token.strip() for token in raw_value.split(LIST_DELIMITER))
        if any(not token for token in tokens):
            raise self._error(index, f"'{LIST_DELIMITER}'-separated values", raw_value)
        if exact_count is not None and len(tokens) != exact_count:
            raise self._error(index, f"{exact_count} values", raw_value)
        if allowed is not None:
            for token in tokens:
                if token not in allowed:
                    raise self._error(index, f"values from {', '.join(allowed)}", raw_value)
        return tokens

    def coordinates(self, column: str) -> Coordinates:
        index, raw_value = self._raw(column)
        parts = raw_value.split(COORDINATE_DELIMITER)
        if len(parts) != 2:
            raise self._error(index, "'latitude,longitude'", raw_value)
        tokens = [part.strip() for part in parts]
        if not all(_DECIMAL_PATTERN.fullmatch(token) for token in tokens):
            raise self._error(index, "'latitude,longitude'", raw_value)
        latitude, longitude = float(tokens[0]), float(tokens[1])
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            raise self._error(index, "latitude in -90..90 and longitude in -180..180", raw_value)
        return Coordinates(latitude=latitude, longitude=longitude)

    def _raw(self, column: str) -> tuple[int, str]:
        index = _COLUMN_INDEX[column]
        return index, self._columns[index]

    def _error(self, index: int, expected: str, actual: str) -> RentloadParseError:
        return RentloadParseError(self._line_index, index, expected, actual)
