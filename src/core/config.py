"""Runtime configuration model for snapshot ingest.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
import os

from core.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_STORE_MAX_ATTEMPTS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
)
from core.errors import SnapshotConfigError


@dataclass(frozen=True)
class IngestConfig:
    """Validated runtime configuration.

    Attributes:
        table_name: DynamoDB table holding snapshot records.
        aws_region: AWS region for the boto3 session.
        aws_profile: Optional AWS profile for local boto3 sessions.
        api_key: Shared request key; empty disables the check.
        store_timeout_seconds: Connect and read timeout for store calls.
        store_max_attempts: Total botocore attempts per store call.
    """

    table_name: str | None
    aws_region: str
    aws_profile: str | None
    api_key: str
    store_timeout_seconds: float
    store_max_attempts: int

    @classmethod
    def from_env(cls) -> "IngestConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SnapshotConfigError: If environment values are invalid.
        """
        timeout_value = os.getenv(
            "SNAPSHOT_STORE_TIMEOUT_SECONDS", str(DEFAULT_STORE_TIMEOUT_SECONDS)
        )
        attempts_value = os.getenv(
            "SNAPSHOT_STORE_MAX_ATTEMPTS", str(DEFAULT_STORE_MAX_ATTEMPTS)
        )
        return cls(
            table_name=os.getenv("TABLE_NAME") or None,
            aws_region=os.getenv("AWS_REGION") or DEFAULT_AWS_REGION,
            aws_profile=os.getenv("AWS_PROFILE") or None,
            api_key=os.getenv("API_KEY", ""),
            store_timeout_seconds=_parse_timeout(timeout_value),
            store_max_attempts=_parse_max_attempts(attempts_value),
        )

    def require_table_name(self) -> str:
        """Return the configured table name.

        Returns:
            DynamoDB table name.

        Raises:
            SnapshotConfigError: If TABLE_NAME is unset.
        """
        if not self.table_name:
            raise SnapshotConfigError(
                "Missing TABLE_NAME: the DynamoDB snapshot store needs a table. "
                "Set TABLE_NAME to the snapshot table name."
            )
        return self.table_name


def _parse_timeout(raw_value: str) -> float:
    """Parse the store timeout environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Positive timeout in seconds.

    Raises:
        SnapshotConfigError: If value is not a positive finite number.
    """
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise SnapshotConfigError(
            "Invalid SNAPSHOT_STORE_TIMEOUT_SECONDS value: "
            f"expected number, got '{raw_value}'. "
            "Set SNAPSHOT_STORE_TIMEOUT_SECONDS to a positive number of seconds."
        ) from error
    if not math.isfinite(timeout) or timeout <= 0:
        raise SnapshotConfigError(
            "Invalid SNAPSHOT_STORE_TIMEOUT_SECONDS value: "
            f"expected positive number, got '{raw_value}'."
        )
    return timeout


def _parse_max_attempts(raw_value: str) -> int:
    """Parse the store retry attempts environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Attempt count of at least one.

    Raises:
        SnapshotConfigError: If value is not an integer >= 1.
    """
    try:
        attempts = int(raw_value)
    except ValueError as error:
        raise SnapshotConfigError(
            "Invalid SNAPSHOT_STORE_MAX_ATTEMPTS value: "
            f"expected integer, got '{raw_value}'. "
            "Set SNAPSHOT_STORE_MAX_ATTEMPTS to a numeric value."
        ) from error
    if attempts < 1:
        raise SnapshotConfigError(
            "Invalid SNAPSHOT_STORE_MAX_ATTEMPTS value: "
            f"expected at least 1, got {attempts}."
        )
    return attempts
