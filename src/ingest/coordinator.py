"""Import orchestration for listing files.

This module drives one import run: connect to the store, stream lines,
parse each one, resolve its owner, create its listing, and finalize.
Exactly one record is in flight at a time, so owner de-duplication
needs no locking and processing order equals file order.
"""

from __future__ import annotations

from typing import Any, Callable, Literal, Protocol

from core.constants import SCHEMA_VERSION
from core.errors import (
    RentloadConnectionError,
    RentloadError,
    RentloadInputError,
    RentloadParseError,
    RentloadStoreError,
)
from core.logging_config import get_logger
from core.types import (
    ImportRunConfig,
    ImportStats,
    ListingIdentity,
    OwnerIdentity,
    OwnerProfile,
    ParsedListingRecord,
    RunResult,
)
from ingest.completion_reporter import CompletionReporter, render_summary
from ingest.line_source import LineDelivery, LineSource
from ingest.owner_resolver import OwnerResolution, OwnerResolver, OwnerStore
from ingest.record_parser import parse_listing_line

CoordinatorState = Literal["idle", "connecting", "streaming", "completed", "fatal_failed"]

_LOGGER = get_logger(__name__)


class ImportConnection(Protocol):
    """Store connection capabilities used during a run."""

    def find_or_create_owner(
        self,
        profile: OwnerProfile,
        password_hash: str,
    ) -> tuple[OwnerIdentity, bool]:
        """Return the owner for the profile email, creating it when absent."""

    def create_listing(self, record: ParsedListingRecord, owner_id: int) -> ListingIdentity:
        """Insert one listing for an owner."""

    def disconnect(self) -> None:
        """Release the connection."""


class ImportStore(Protocol):
    """Store factory capability used to open the run's connection."""

    def connect(self, uri: str) -> ImportConnection:
        """Open a connection to the store."""


ResolverFactory = Callable[[OwnerStore, Any], OwnerResolver]


class ImportCoordinator:
    """Stateful coordinator for one listing import run at a time."""

    def __init__(
        self,
        store: ImportStore,
        logger: Any = None,
        resolver_factory: ResolverFactory = OwnerResolver,
    ) -> None:
        self._store = store
        self._logger = logger if logger is not None else _LOGGER
        self._resolver_factory = resolver_factory
        self._state: CoordinatorState = "idle"

    @property
    def state(self) -> CoordinatorState:
        return self._state

    def execute(self, config: ImportRunConfig) -> RunResult:
        """Run an import and return its terminal outcome.

        Fatal connection and input errors are captured in the result.
        Per-record parse and store errors are counted and never escape.

        Args:
            config: Run options.

        Returns:
            Terminal status, counters, summary, and fatal error if any.
        """
        stats = ImportStats()
        self._state = "connecting"
        try:
            connection = self._store.connect(config.store_uri)
        except RentloadConnectionError as error:
            return self._finish(CompletionReporter(None, self._logger), stats, error)
        reporter = CompletionReporter(connection, self._logger)
        resolver = self._resolver_factory(connection, self._logger)
        self._state = "streaming"
        try:
            self._stream(config, connection, resolver, stats)
        except RentloadInputError as error:
            return self._finish(reporter, stats, error)
        except Exception as error:
            self._state = "fatal_failed"
            reporter.report(stats, error)
            raise
        return self._finish(reporter, stats, None)

    def _stream(
        self,
        config: ImportRunConfig,
        connection: ImportConnection,
        resolver: OwnerResolver,
        stats: ImportStats,
    ) -> None:
        with LineSource.open(config.input_path, config.encoding) as source:
            self._logger.info(
                "import_started", path=str(source.path), schema_version=SCHEMA_VERSION
            )
            for delivery in source.lines():
                stats.lines_seen += 1
                self._import_line(delivery, config, connection, resolver, stats)
                delivery.ack()
            self._logger.info(
                "input_exhausted",
                path=str(source.path),
                delivered_count=source.delivered_count,
            )

    def _import_line(
        self,
        delivery: LineDelivery,
        config: ImportRunConfig,
        connection: ImportConnection,
        resolver: OwnerResolver,
        stats: ImportStats,
    ) -> None:
        try:
            record = parse_listing_line(delivery.text, delivery.line_index)
        except RentloadParseError as error:
            stats.failed += 1
            self._logger.error(
                "record_parse_failed",
                line_index=error.line_index,
                field_index=error.field_index,
                expected=error.expected,
                actual=error.actual,
            )
            return
        try:
            resolution = resolver.resolve_owner(
                record.owner, config.salt, config.placeholder_password
            )
        except RentloadStoreError as error:
            self._record_store_failure(stats, delivery.line_index, error)
            return
        _count_owner(stats, resolution)
        try:
            listing = connection.create_listing(record, resolution.identity.owner_id)
        except RentloadStoreError as error:
            self._record_store_failure(stats, delivery.line_index, error)
            return
        stats.listings_created += 1
        self._logger.debug(
            "listing_created",
            line_index=delivery.line_index,
            listing_id=listing.listing_id,
            owner_id=listing.owner_id,
        )

    def _record_store_failure(
        self,
        stats: ImportStats,
        line_index: int,
        error: RentloadStoreError,
    ) -> None:
        stats.failed += 1
        self._logger.error("record_store_failed", line_index=line_index, error=str(error))

    def _finish(
        self,
        reporter: CompletionReporter,
        stats: ImportStats,
        fatal_error: RentloadError | None,
    ) -> RunResult:
        self._state = "completed" if fatal_error is None else "fatal_failed"
        try:
            summary = reporter.report(stats, fatal_error)
        except RentloadError as error:
            return RunResult(
                status="fatal_failed",
                stats=stats,
                summary=render_summary(stats),
                fatal_error=error,
            )
        return RunResult(status="completed", stats=stats, summary=summary)


def execute_import(
    config: ImportRunConfig,
    store: ImportStore,
    logger: Any = None,
) -> RunResult:
    """Import a listings file into the store.

    Args:
        config: Run options.
        store: Store factory used to open the run's connection.
        logger: Optional structured logger.

    Returns:
        Terminal run result.
    """
    coordinator = ImportCoordinator(store, logger=logger)
    return coordinator.execute(config)


def _count_owner(stats: ImportStats, resolution: OwnerResolution) -> None:
    if resolution.created:
        stats.owners_created += 1
    else:
        stats.owners_reused += 1
