"""Check command wiring for Rentload CLI."""

from __future__ import annotations

import argparse
from typing import Any

from core.config import RentloadConfig
from core.errors import RentloadInputError
from ingest.file_check import check_listing_file


def add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser(
        "check",
        help="Parse a listings file without importing it",
    )
    parser.add_argument("filepath", help="Listings file to check")


def run_check_command(config: RentloadConfig, args: argparse.Namespace) -> int:
    """Parse every line and print one row per failure."""
    try:
        report = check_listing_file(args.filepath.strip(), config.input_encoding)
    except RentloadInputError as error:
        print(f"check_error={error}")
        return 1
    for failure in report.failures:
        print(f"line={failure.line_index}\t{failure}")
    print(f"lines_seen={report.lines_seen}")
    print(f"valid={report.valid_count}")
    print(f"invalid={len(report.failures)}")
    return 0 if not report.failures else 1
