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


@pytest.fixture(autouse=True)
def _clear_ingest_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from ambient AWS and ingest environment variables."""
    for name in (
        "TABLE_NAME",
        "AWS_REGION",
        "AWS_PROFILE",
        "API_KEY",
        "SNAPSHOT_STORE_TIMEOUT_SECONDS",
        "SNAPSHOT_STORE_MAX_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_process_handler():
    """Drop any handler cached by the Lambda runtime module."""
    from ingest.runtime import set_handler

    set_handler(None)
    yield
    set_handler(None)
