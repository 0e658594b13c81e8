"""Unit tests for core config parsing."""

from __future__ import annotations

import pytest

from core.config import IngestConfig
from core.errors import SnapshotConfigError


def test_from_env_applies_defaults() -> None:
    """Config should fall back to defaults when variables are unset."""
    config = IngestConfig.from_env()

    assert (
        config.table_name,
        config.aws_region,
        config.api_key,
        config.store_timeout_seconds,
        config.store_max_attempts,
    ) == (None, "us-west-2", "", 3.0, 2)


def test_from_env_reads_table_and_key(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should read table, region, and API key from environment."""
    monkeypatch.setenv("TABLE_NAME", "portfolio-snapshots")
    monkeypatch.setenv("AWS_REGION", "eu-central-1")
    monkeypatch.setenv("API_KEY", "secret")

    config = IngestConfig.from_env()

    assert config.require_table_name() == "portfolio-snapshots"
    assert config.aws_region == "eu-central-1" and config.api_key == "secret"


@pytest.mark.parametrize("raw_value", ["soon", "0", "-1", "nan"])
def test_from_env_raises_for_invalid_timeout(
    monkeypatch: pytest.MonkeyPatch, raw_value: str
) -> None:
    """Config should fail for non-positive or non-numeric timeouts."""
    monkeypatch.setenv("SNAPSHOT_STORE_TIMEOUT_SECONDS", raw_value)

    with pytest.raises(SnapshotConfigError):
        IngestConfig.from_env()


@pytest.mark.parametrize("raw_value", ["many", "0"])
def test_from_env_raises_for_invalid_max_attempts(
    monkeypatch: pytest.MonkeyPatch, raw_value: str
) -> None:
    """Config should fail for retry counts below one."""
    monkeypatch.setenv("SNAPSHOT_STORE_MAX_ATTEMPTS", raw_value)

    with pytest.raises(SnapshotConfigError):
        IngestConfig.from_env()


def test_require_table_name_raises_when_unset() -> None:
    """Table lookup should fail with guidance when TABLE_NAME is missing."""
    config = IngestConfig.from_env()

    with pytest.raises(SnapshotConfigError, match="TABLE_NAME"):
        config.require_table_name()
