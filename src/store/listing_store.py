"""Listing store and connection.

This module persists owners and listings through SQLAlchemy.
Each write commits on its own, so an import is never all-or-nothing.
"""

from __future__ import annotations

from sqlalchemy import create_engine, func, select, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from core.constants import DEFAULT_DB_DRIVER
from core.errors import RentloadConnectionError, RentloadStoreError
from core.logging_config import get_logger
from core.types import (
    ListingIdentity,
    OwnerIdentity,
    OwnerProfile,
    ParsedListingRecord,
)
from store.models import Base, ListingRow, OwnerRow

_LOGGER = get_logger(__name__)


def build_store_uri(
    login: str,
    password: str,
    host: str,
    port: int,
    dbname: str,
    driver: str = DEFAULT_DB_DRIVER,
) -> str:
    """Build a database URL from CLI connection parts.

    Args:
        login: Database user name.
        password: Database password.
        host: Database host name or address.
        port: Database port.
        dbname: Database name.
        driver: SQLAlchemy ``dialect+driver`` name.

    Returns:
        Rendered URL string including the password.
    """
    url = URL.create(
        drivername=driver,
        username=login,
        password=password,
        host=host,
        port=port,
        database=dbname,
    )
    return url.render_as_string(hide_password=False)


class ListingStore:
    """Factory for listing store connections."""

    def connect(self, uri: str) -> "StoreConnection":
        """Open a store connection and ensure tables exist.

        Args:
            uri: SQLAlchemy database URL.

        Returns:
            Live store connection.

        Raises:
            RentloadConnectionError: If the URL is invalid or the store is unreachable.
        """
        target = _describe_uri(uri)
        try:
            engine = create_engine(make_url(uri))
        except (ArgumentError, ValueError, ImportError) as error:
            raise RentloadConnectionError(
                f"Failed to connect to store at {target}: {error}. "
                "Check the database URL and installed driver."
            ) from error
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            Base.metadata.create_all(engine)
        except SQLAlchemyError as error:
            engine.dispose()
            raise RentloadConnectionError(
                f"Failed to connect to store at {target}: {error}. "
                "Check that the database is running and credentials are valid."
            ) from error
        _LOGGER.info("store_connected", target=target)
        return StoreConnection(engine, target)


class StoreConnection:
    """Open connection to the listing store.

    All record operations share this connection for the whole run.
    """

    def __init__(self, engine: Engine, target: str) -> None:
        self._engine: Engine | None = engine
        self._target = target
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @property
    def is_open(self) -> bool:
        """Return whether the connection has not been released."""
        return self._engine is not None

    def find_or_create_owner(
        self,
        profile: OwnerProfile,
        password_hash: str,
    ) -> tuple[OwnerIdentity, bool]:
        """Return the owner with this email, inserting it when absent.

        Existing owners are returned unchanged; the profile only applies
        to newly created owners.

        Args:
            profile: Owner profile from the input line.
            password_hash: Placeholder credential for new owners.

        Returns:
            Owner identity and whether it was created by this call.

        Raises:
            RentloadStoreError: If lookup or insert fails.
        """
        with self._session() as session:
            try:
                existing = session.execute(
                    select(OwnerRow).where(OwnerRow.email == profile.email)
                ).scalar_one_or_none()
                if existing is not None:
                    return OwnerIdentity(owner_id=existing.id, email=existing.email), False
                row = OwnerRow(
                    email=profile.email,
                    name=profile.name,
                    avatar=profile.avatar,
                    owner_type=profile.owner_type,
                    password_hash=password_hash,
                )
                session.add(row)
                session.commit()
            except SQLAlchemyError as error:
                session.rollback()
                raise RentloadStoreError(
                    f"Failed to resolve owner {profile.email}: {error}."
                ) from error
            return OwnerIdentity(owner_id=row.id, email=row.email), True

    def create_listing(self, record: ParsedListingRecord, owner_id: int) -> ListingIdentity:
        """Insert one listing for an owner.

        Args:
            record: Parsed listing fields.
            owner_id: Identity of the resolved owner.

        Returns:
            Identity of the new listing.

        Raises:
            RentloadStoreError: If the insert fails.
        """
        row = ListingRow(
            owner_id=owner_id,
            name=record.name,
            description=record.description,
            city=record.city,
            preview_photo=record.preview_photo,
            photos=list(record.photos),
            is_premium=record.is_premium,
            listing_type=record.listing_type,
            rooms_count=record.rooms_count,
            guests_count=record.guests_count,
            price=record.price,
            features=list(record.features),
            latitude=record.coordinates.latitude,
            longitude=record.coordinates.longitude,
        )
        with self._session() as session:
            try:
                session.add(row)
                session.commit()
            except SQLAlchemyError as error:
                session.rollback()
                raise RentloadStoreError(
                    f"Failed to create listing from line {record.line_index}: {error}."
                ) from error
        return ListingIdentity(listing_id=row.id, owner_id=owner_id)

    def find_owner_by_email(self, email: str) -> OwnerIdentity | None:
        """Look up one owner by exact email."""
        with self._session() as session:
            try:
                row = session.execute(
                    select(OwnerRow).where(OwnerRow.email == email)
                ).scalar_one_or_none()
            except SQLAlchemyError as error:
                raise RentloadStoreError(f"Failed to look up owner {email}: {error}.") from error
        if row is None:
            return None
        return OwnerIdentity(owner_id=row.id, email=row.email)

    def count_owners(self) -> int:
        """Return the number of stored owners."""
        return self._count(OwnerRow)

    def count_listings(self) -> int:
        """Return the number of stored listings."""
        return self._count(ListingRow)

    def disconnect(self) -> None:
        """Release the engine and its pooled connections."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        _LOGGER.info("store_disconnected", target=self._target)

    def _count(self, model: type[Base]) -> int:
        with self._session() as session:
            try:
                return int(session.execute(select(func.count()).select_from(model)).scalar_one())
            except SQLAlchemyError as error:
                raise RentloadStoreError(
                    f"Failed to count {model.__tablename__}: {error}."
                ) from error

    def _session(self) -> Session:
        if self._engine is None:
            raise RentloadStoreError(
                f"Store connection to {self._target} is closed. Reconnect before writing."
            )
        return self._session_factory()


def _describe_uri(uri: str) -> str:
    """Render a URL for logs without its password."""
    try:
        return make_url(uri).render_as_string(hide_password=True)
    except (ArgumentError, ValueError):
        return "<invalid url>"
