"""Core constants used across Rentload modules.

This module centralizes the pinned input schema and runtime defaults.
Keeping values here avoids magic literals in parsing and store logic.
"""

from __future__ import annotations

SCHEMA_VERSION = 1
COLUMN_DELIMITER = "\t"
LIST_DELIMITER = ";"
COORDINATE_DELIMITER = ","
SCHEMA_COLUMNS = (
    "name",
    "description",
    "city",
    "preview_photo",
    "photos",
    "is_premium",
    "listing_type",
    "rooms_count",
    "guests_count",
    "price",
    "features",
    "coordinates",
    "owner_name",
    "owner_email",
    "owner_avatar",
    "owner_type",
)
SCHEMA_COLUMN_COUNT = len(SCHEMA_COLUMNS)
TRUE_TOKEN = "true"
FALSE_TOKEN = "false"
PHOTO_COUNT = 6
LISTING_TYPES = ("apartment", "house", "room", "hotel")
OWNER_TYPES = ("regular", "pro")
LISTING_FEATURES = (
    "Breakfast",
    "Air conditioning",
    "Laptop friendly workspace",
    "Baby seat",
    "Washer",
    "Towels",
    "Fridge",
)
MIN_ROOMS_COUNT = 1
MAX_ROOMS_COUNT = 8
MIN_GUESTS_COUNT = 1
MAX_GUESTS_COUNT = 10
MIN_PRICE = 100
MAX_PRICE = 100_000
DEFAULT_DB_DRIVER = "postgresql+psycopg"
DEFAULT_DB_PORT = 5432
DEFAULT_INPUT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PLACEHOLDER_PASSWORD = "123456"
OWNERS_TABLE_NAME = "owners"
LISTINGS_TABLE_NAME = "listings"
