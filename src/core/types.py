"""Shared typed models.

This module defines the records that flow through the import pipeline
and the run-level configuration, counters, and results around them.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Literal

from core.constants import DEFAULT_INPUT_ENCODING

ListingType = Literal["apartment", "house", "room", "hotel"]
OwnerType = Literal["regular", "pro"]
RunStatus = Literal["completed", "fatal_failed"]


@dataclass(frozen=True)
class Coordinates:
    """Geographic position of a listing.

    Attributes:
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
    """

    latitude: float
    longitude: float


@dataclass(frozen=True)
class OwnerProfile:
    """Owner profile embedded in each listing line.

    Attributes:
        name: Display name.
        email: Natural key, matched exactly and case-sensitively.
        avatar: Avatar image reference.
        owner_type: Account tier.
    """

    name: str
    email: str
    avatar: str
    owner_type: OwnerType


@dataclass(frozen=True)
class ParsedListingRecord:
    """Structured listing parsed from one input line.

    Attributes:
        line_index: One-based line number the record came from.
        name: Listing title.
        description: Free-text description.
        city: City name.
        preview_photo: Preview image reference.
        photos: Fixed-arity photo references.
        is_premium: Premium placement flag.
        listing_type: Kind of accommodation.
        rooms_count: Number of rooms.
        guests_count: Maximum number of guests.
        price: Nightly price.
        features: Amenity tokens.
        coordinates: Listing location.
        owner: Embedded owner profile.
    """

    line_index: int
    name: str
    description: str
    city: str
    preview_photo: str
    photos: tuple[str, ...]
    is_premium: bool
    listing_type: ListingType
    rooms_count: int
    guests_count: int
    price: int
    features: tuple[str, ...]
    coordinates: Coordinates
    owner: OwnerProfile


@dataclass(frozen=True)
class OwnerIdentity:
    """Persisted owner identity."""

    owner_id: int
    email: str


@dataclass(frozen=True)
class ListingIdentity:
    """Persisted listing identity."""

    listing_id: int
    owner_id: int


@dataclass
class ImportStats:
    """Mutable counters for one import run.

    Attributes:
        lines_seen: Lines delivered by the line source.
        listings_created: Listings persisted.
        owners_created: Owners inserted during this run.
        owners_reused: Owners found by email and reused.
        failed: Lines that failed parsing or persistence.
    """

    lines_seen: int = 0
    listings_created: int = 0
    owners_created: int = 0
    owners_reused: int = 0
    failed: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return counters as a plain mapping for logging."""
        return asdict(self)


@dataclass(frozen=True)
class ImportRunConfig:
    """Options for one import run.

    Attributes:
        input_path: Tab-separated listings file.
        store_uri: SQLAlchemy database URL for the listing store.
        salt: Key used to hash the placeholder owner password.
        placeholder_password: Password assigned to owners created by the import.
        encoding: Text encoding of the input file.
    """

    input_path: Path
    store_uri: str
    salt: str
    placeholder_password: str
    encoding: str = DEFAULT_INPUT_ENCODING


@dataclass(frozen=True)
class RunResult:
    """Terminal outcome of an import run.

    Attributes:
        status: ``completed`` or ``fatal_failed``.
        stats: Final (or partial) run counters.
        summary: Human-readable summary text.
        fatal_error: Error that terminated the run, if any.
    """

    status: RunStatus
    stats: ImportStats
    summary: str
    fatal_error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the run reached end of input."""
        return self.status == "completed"
