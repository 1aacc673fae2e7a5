"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import RentloadConfig
from core.credentials import build_password_hash
from core.errors import RentloadConfigError


def test_from_env_uses_defaults(run_env: None) -> None:
    """Config should fall back to documented defaults."""
    config = RentloadConfig.from_env()

    assert (config.db_driver, config.db_port, config.log_level) == (
        "postgresql+psycopg",
        5432,
        "INFO",
    )


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read driver, port, and log level from environment."""
    monkeypatch.setenv("RENTLOAD_DB_DRIVER", "sqlite")
    monkeypatch.setenv("RENTLOAD_DB_PORT", "6543")
    monkeypatch.setenv("RENTLOAD_LOG_LEVEL", "debug")

    config = RentloadConfig.from_env()

    assert (config.db_driver, config.db_port, config.log_level) == ("sqlite", 6543, "DEBUG")


@pytest.mark.parametrize("port", ["not-a-number", "0", "70000"])
def test_from_env_raises_for_invalid_port(monkeypatch: pytest.MonkeyPatch, port: str) -> None:
    """Config should fail for non-numeric or out-of-range ports."""
    monkeypatch.setenv("RENTLOAD_DB_PORT", port)

    with pytest.raises(RentloadConfigError):
        RentloadConfig.from_env()

    assert os.getenv("RENTLOAD_DB_PORT") == port


def test_from_env_raises_for_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should reject log levels logging does not know."""
    monkeypatch.setenv("RENTLOAD_LOG_LEVEL", "chatty")

    with pytest.raises(RentloadConfigError):
        RentloadConfig.from_env()

    assert os.getenv("RENTLOAD_LOG_LEVEL") == "chatty"


def test_from_env_raises_for_empty_placeholder_password(monkeypatch: pytest.MonkeyPatch) -> None:
    """An empty placeholder password is rejected."""
    monkeypatch.setenv("RENTLOAD_PLACEHOLDER_PASSWORD", "")

    with pytest.raises(RentloadConfigError):
        RentloadConfig.from_env()

    assert os.getenv("RENTLOAD_PLACEHOLDER_PASSWORD") == ""


def test_password_hash_depends_on_salt() -> None:
    """Placeholder hashes are stable per salt and differ across salts."""
    first = build_password_hash("123456", "salt-a")

    assert first == build_password_hash("123456", "salt-a")
    assert first != build_password_hash("123456", "salt-b")
    assert len(first) == 64
