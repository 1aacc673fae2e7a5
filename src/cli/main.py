"""Rentload CLI entry points.
This module exposes commands for importing and checking listing files.
It maps argparse commands onto the ingest pipeline.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from cli.check_command import add_check_command, run_check_command
from cli.import_command import add_import_command, run_import_command
from core.config import RentloadConfig
from core.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="rentload", description="Rental listing importer")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="Override RENTLOAD_LOG_LEVEL for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    add_import_command(subparsers)
    add_check_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Rentload CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = RentloadConfig.from_env()
    configure_logging(args.log_level or config.log_level)
    if args.command == "import":
        return run_import_command(config, args)
    if args.command == "check":
        return run_check_command(config, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2
