"""Public SDK surface for Rentload.

This module provides a stable import path for programmatic imports.
It re-exports the import entry point and its typed models.
"""

from __future__ import annotations

from core.config import RentloadConfig
from core.types import ImportRunConfig, ImportStats, RunResult
from ingest.coordinator import ImportCoordinator, execute_import
from ingest.file_check import FileCheckReport, check_listing_file
from store.listing_store import ListingStore, build_store_uri

__all__ = [
    "FileCheckReport",
    "ImportCoordinator",
    "ImportRunConfig",
    "ImportStats",
    "ListingStore",
    "RentloadConfig",
    "RunResult",
    "build_store_uri",
    "check_listing_file",
    "execute_import",
]
