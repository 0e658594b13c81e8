"""DynamoDB snapshot store.

This module upserts snapshot records keyed by timestamp.
It owns boto3 session creation and maps store failures to domain errors.
"""

from __future__ import annotations

from decimal import Decimal, DecimalException
from typing import Any, Mapping, Protocol

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from core.config import IngestConfig
from core.constants import (
    TIMESTAMP_FIELD,
    TOTAL_INVESTED_FIELD,
    TOTAL_VALUE_FIELD,
    UPSERT_EXPRESSION,
)
from core.errors import PersistenceError
from core.logging_config import get_logger
from core.types import SnapshotRecord

_LOGGER = get_logger(__name__)


class SnapshotStore(Protocol):
    """Keyed upsert target for snapshot records."""

    def upsert(self, record: SnapshotRecord) -> SnapshotRecord:
        """Write a record, replacing any record with the same timestamp."""
        ...


class DynamoSnapshotStore:
    """Snapshot store backed by a DynamoDB table resource.

    The table is created once per process and reused across
    invocations; this class never mutates it.
    """

    def __init__(self, table: Any) -> None:
        """Initialize the store.

        Args:
            table: boto3 ``dynamodb.Table`` resource or compatible object.
        """
        self._table = table

    def upsert(self, record: SnapshotRecord) -> SnapshotRecord:
        """Set both totals for the record's timestamp.

        Args:
            record: Normalized snapshot record.

        Returns:
            Record as stored after the write.

        Raises:
            PersistenceError: If DynamoDB rejects or cannot serve the write,
                or boto3 cannot serialize the record as DynamoDB numbers.
        """
        try:
            response = self._table.update_item(
                Key={TIMESTAMP_FIELD: record.timestamp},
                UpdateExpression=UPSERT_EXPRESSION,
                ExpressionAttributeValues={
                    ":ti": record.total_invested,
                    ":tv": record.total_value,
                },
                ReturnValues="ALL_NEW",
            )
        except (BotoCoreError, ClientError, DecimalException) as error:
            _LOGGER.error(
                "snapshot_persist_failed",
                timestamp=record.timestamp,
                error_type=type(error).__name__,
                error=str(error),
            )
            raise PersistenceError(
                f"Failed to upsert snapshot {record.timestamp}: {error}. "
                "Check table name, permissions, and DynamoDB availability."
            ) from error
        saved = _record_from_attributes(response.get("Attributes") or {})
        _LOGGER.info("snapshot_persisted", timestamp=saved.timestamp)
        return saved


def create_dynamodb_table(config: IngestConfig) -> Any:
    """Create the boto3 table resource for snapshot writes.

    Args:
        config: Runtime config with table, region, and timeouts.

    Returns:
        Boto3 DynamoDB table resource.

    Raises:
        SnapshotConfigError: If TABLE_NAME is unset.
    """
    table_name = config.require_table_name()
    session = boto3.session.Session(**_build_boto3_session_kwargs(config))
    client_config = BotoConfig(
        connect_timeout=config.store_timeout_seconds,
        read_timeout=config.store_timeout_seconds,
        retries={"max_attempts": config.store_max_attempts, "mode": "standard"},
    )
    table = session.resource("dynamodb", config=client_config).Table(table_name)
    _LOGGER.info(
        "snapshot_store_created",
        table_name=table_name,
        region=config.aws_region,
    )
    return table


def _build_boto3_session_kwargs(config: IngestConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {"region_name": config.aws_region}
    if config.aws_profile:
        kwargs["profile_name"] = config.aws_profile
    return kwargs


def _record_from_attributes(attributes: Mapping[str, Any]) -> SnapshotRecord:
    """Convert returned DynamoDB attributes into a record.

    Args:
        attributes: ``Attributes`` from an ``ALL_NEW`` update response.

    Returns:
        Stored snapshot record.

    Raises:
        PersistenceError: If the response lacks snapshot attributes.
    """
    try:
        return SnapshotRecord(
            timestamp=int(attributes[TIMESTAMP_FIELD]),
            total_invested=Decimal(attributes[TOTAL_INVESTED_FIELD]),
            total_value=Decimal(attributes[TOTAL_VALUE_FIELD]),
        )
    except KeyError as error:
        raise PersistenceError(
            f"DynamoDB update response is missing attribute {error}. "
            "Ensure the update requests ReturnValues=ALL_NEW."
        ) from error
