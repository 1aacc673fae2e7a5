"""Runtime configuration model for Rentload.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from core.constants import (
    DEFAULT_DB_DRIVER,
    DEFAULT_DB_PORT,
    DEFAULT_INPUT_ENCODING,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PLACEHOLDER_PASSWORD,
)
from core.errors import RentloadConfigError


@dataclass(frozen=True)
class RentloadConfig:
    """Validated runtime configuration.

    Attributes:
        db_driver: SQLAlchemy driver name used to build store URLs.
        db_port: Default database port.
        placeholder_password: Password assigned to owners created by imports.
        input_encoding: Text encoding used to read input files.
        log_level: Minimum level name for structured logs.
    """

    db_driver: str
    db_port: int
    placeholder_password: str
    input_encoding: str
    log_level: str

    @classmethod
    def from_env(cls) -> "RentloadConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            RentloadConfigError: If environment values are invalid.
        """
        db_port_value = os.getenv("RENTLOAD_DB_PORT", str(DEFAULT_DB_PORT))
        log_level_value = os.getenv("RENTLOAD_LOG_LEVEL", DEFAULT_LOG_LEVEL)
        placeholder_password = os.getenv(
            "RENTLOAD_PLACEHOLDER_PASSWORD", DEFAULT_PLACEHOLDER_PASSWORD
        )
        if not placeholder_password:
            raise RentloadConfigError(
                "Invalid RENTLOAD_PLACEHOLDER_PASSWORD value: expected a non-empty string. "
                "Unset it to use the default placeholder password."
            )
        return cls(
            db_driver=os.getenv("RENTLOAD_DB_DRIVER", DEFAULT_DB_DRIVER),
            db_port=_parse_db_port(db_port_value),
            placeholder_password=placeholder_password,
            input_encoding=os.getenv("RENTLOAD_INPUT_ENCODING", DEFAULT_INPUT_ENCODING),
            log_level=_parse_log_level(log_level_value),
        )


def _parse_db_port(raw_value: str) -> int:
    """Parse the database port environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Parsed port number.

    Raises:
        RentloadConfigError: If value is not an integer in the TCP port range.
    """
    try:
        port = int(raw_value)
    except ValueError as error:
        raise RentloadConfigError(
            "Invalid RENTLOAD_DB_PORT value: "
            f"expected integer, got '{raw_value}'. "
            "Set RENTLOAD_DB_PORT to a numeric value."
        ) from error
    if not 0 < port < 65536:
        raise RentloadConfigError(
            f"Invalid RENTLOAD_DB_PORT value: {port} is outside 1-65535."
        )
    return port


def _parse_log_level(raw_value: str) -> str:
    """Normalize and validate a log level name."""
    level_name = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise RentloadConfigError(
            f"Invalid RENTLOAD_LOG_LEVEL value: '{raw_value}'. "
            "Use one of DEBUG, INFO, WARNING, ERROR, CRITICAL."
        )
    return level_name
