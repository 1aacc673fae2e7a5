"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def store_uri(tmp_path: Path) -> str:
    """SQLite store URL in a per-test directory."""
    return f"sqlite:///{tmp_path / 'listings.db'}"


@pytest.fixture
def run_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin Rentload environment variables to their defaults."""
    for name in (
        "RENTLOAD_DB_DRIVER",
        "RENTLOAD_DB_PORT",
        "RENTLOAD_PLACEHOLDER_PASSWORD",
        "RENTLOAD_INPUT_ENCODING",
        "RENTLOAD_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
