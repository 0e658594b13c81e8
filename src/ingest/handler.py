"""Snapshot ingest request handler.

This module runs the full request pipeline: authorize, parse, validate,
upsert, respond. Every domain failure becomes a structured response.
"""

from __future__ import annotations

import time
from typing import Any, Mapping

from core.config import IngestConfig
from core.constants import (
    DATABASE_ERROR_CODE,
    DATABASE_ERROR_DETAILS,
    HTTP_OK,
    SUCCESS_MESSAGE,
)
from core.errors import ClientInputError, PersistenceError, UnauthorizedError
from core.logging_config import get_logger
from core.types import HandlerResponse, IngestRequest, SnapshotRecord
from ingest.auth import authorize_request
from ingest.events import request_from_event
from ingest.payload import Clock, parse_body, validate_payload
from store.snapshot_store import SnapshotStore

_LOGGER = get_logger(__name__)


class SnapshotIngestHandler:
    """Validate one snapshot request and persist it with one upsert.

    The store is injected so the validation steps run without a live
    DynamoDB table.
    """

    def __init__(
        self,
        store: SnapshotStore,
        config: IngestConfig,
        clock: Clock = time.time,
    ) -> None:
        """Initialize the handler.

        Args:
            store: Upsert target for validated records.
            config: Runtime configuration.
            clock: Returns current wall-clock epoch seconds.
        """
        self._store = store
        self._config = config
        self._clock = clock

    def handle_event(self, event: Mapping[str, Any]) -> HandlerResponse:
        """Handle an API Gateway proxy event.

        Args:
            event: Lambda proxy integration event.

        Returns:
            Handler response.
        """
        try:
            request = request_from_event(event)
        except ClientInputError as error:
            return _reject(error)
        return self.handle(request)

    def handle(self, request: IngestRequest) -> HandlerResponse:
        """Run the ingest pipeline for one request.

        Args:
            request: Inbound request.

        Returns:
            200 with the stored record, 400/401 for rejected input,
            or 500 when the store write fails.
        """
        _LOGGER.info("snapshot_request_received", has_body=request.body is not None)
        try:
            record = self.validate(request)
        except (ClientInputError, UnauthorizedError) as error:
            return _reject(error)
        try:
            saved = self._store.upsert(record)
        except PersistenceError:
            return HandlerResponse(
                status_code=PersistenceError.status_code,
                body={"error": DATABASE_ERROR_CODE, "details": DATABASE_ERROR_DETAILS},
            )
        return HandlerResponse(
            status_code=HTTP_OK,
            body={"message": SUCCESS_MESSAGE, "item": saved.to_item()},
        )

    def validate(self, request: IngestRequest) -> SnapshotRecord:
        """Authorize and validate a request without writing.

        Args:
            request: Inbound request.

        Returns:
            Normalized snapshot record.

        Raises:
            UnauthorizedError: If the API key check fails.
            ClientInputError: If any validation step fails.
        """
        authorize_request(request.headers, self._config.api_key)
        payload = parse_body(request.body)
        return validate_payload(payload, self._clock)


def _reject(error: ClientInputError | UnauthorizedError) -> HandlerResponse:
    """Build a client error response and log the rejection."""
    _LOGGER.info(
        "snapshot_request_rejected",
        status_code=error.status_code,
        reason=error.message,
    )
    return HandlerResponse(status_code=error.status_code, body={"error": error.message})
