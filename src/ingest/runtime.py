"""Process-wide handler lifecycle.

This module builds the ingest handler once per process and reuses it,
keeping the DynamoDB connection warm across Lambda invocations.
"""

from __future__ import annotations

from typing import Any, Mapping

from core.config import IngestConfig
from ingest.handler import SnapshotIngestHandler
from store.snapshot_store import DynamoSnapshotStore, create_dynamodb_table

_HANDLER: SnapshotIngestHandler | None = None


def build_default_handler(config: IngestConfig | None = None) -> SnapshotIngestHandler:
    """Build a handler wired to the configured DynamoDB table.

    Args:
        config: Optional config; read from the environment when omitted.

    Returns:
        Handler backed by DynamoDB.

    Raises:
        SnapshotConfigError: If configuration is invalid.
    """
    resolved_config = config or IngestConfig.from_env()
    table = create_dynamodb_table(resolved_config)
    return SnapshotIngestHandler(DynamoSnapshotStore(table), resolved_config)


def get_handler() -> SnapshotIngestHandler:
    """Return the process handler, building it on first use."""
    global _HANDLER
    if _HANDLER is None:
        _HANDLER = build_default_handler()
    return _HANDLER


def set_handler(handler: SnapshotIngestHandler | None) -> None:
    """Install a prebuilt handler, or clear it with None."""
    global _HANDLER
    _HANDLER = handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda entry point for API Gateway proxy events.

    Args:
        event: Proxy integration event.
        context: Lambda context object (unused).

    Returns:
        Proxy integration response.
    """
    return get_handler().handle_event(event).to_proxy()
