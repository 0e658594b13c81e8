"""Public surface for snapshot ingest.

This module is the Lambda handler path (``snapshot_ingest.lambda_handler``).
It re-exports the handler, stores, and typed models.
"""

from __future__ import annotations

from core.config import IngestConfig
from core.types import HandlerResponse, IngestRequest, SnapshotRecord
from ingest.handler import SnapshotIngestHandler
from ingest.runtime import build_default_handler, get_handler, lambda_handler, set_handler
from store.memory_store import InMemorySnapshotStore
from store.snapshot_store import DynamoSnapshotStore, create_dynamodb_table

__all__ = [
    "DynamoSnapshotStore",
    "HandlerResponse",
    "InMemorySnapshotStore",
    "IngestConfig",
    "IngestRequest",
    "SnapshotIngestHandler",
    "SnapshotRecord",
    "build_default_handler",
    "create_dynamodb_table",
    "get_handler",
    "lambda_handler",
    "set_handler",
]
