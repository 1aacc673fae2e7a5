"""Import command wiring for Rentload CLI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from core.config import RentloadConfig
from core.errors import RentloadError
from core.types import ImportRunConfig
from ingest.coordinator import execute_import
from store.listing_store import ListingStore, build_store_uri


def add_import_command(subparsers: Any) -> None:
    """Register import subcommand."""
    parser = subparsers.add_parser("import", help="Import a tab-separated listings file")
    parser.add_argument("filepath", help="Listings file to import")
    parser.add_argument("login", help="Database user name")
    parser.add_argument("password", help="Database password")
    parser.add_argument("host", help="Database host")
    parser.add_argument("dbname", help="Database name")
    parser.add_argument("salt", help="Salt for hashing the placeholder owner password")
    parser.add_argument("--port", type=int, help="Override RENTLOAD_DB_PORT for this command")
    parser.add_argument(
        "--store-uri",
        help="Full database URL; overrides login/password/host/dbname",
    )


def run_import_command(config: RentloadConfig, args: argparse.Namespace) -> int:
    """Execute an import and print its summary.

    Fatal Rentload errors are reported and the command still exits normally.
    """
    filepath = args.filepath.strip()
    run_config = ImportRunConfig(
        input_path=Path(filepath),
        store_uri=_resolve_store_uri(config, args),
        salt=args.salt,
        placeholder_password=config.placeholder_password,
        encoding=config.input_encoding,
    )
    result = execute_import(run_config, ListingStore())
    print(result.summary)
    if isinstance(result.fatal_error, RentloadError):
        print(f"Can't import data from file: {filepath}", file=sys.stderr)
        print(str(result.fatal_error), file=sys.stderr)
    return 0


def _resolve_store_uri(config: RentloadConfig, args: argparse.Namespace) -> str:
    if args.store_uri:
        return str(args.store_uri)
    return build_store_uri(
        login=args.login,
        password=args.password,
        host=args.host,
        port=args.port or config.db_port,
        dbname=args.dbname,
        driver=config.db_driver,
    )
