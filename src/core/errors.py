"""Snapshot ingest exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Client-facing errors carry the exact message and status they map to.
"""

from __future__ import annotations

from core.constants import (
    HTTP_BAD_REQUEST,
    HTTP_INTERNAL_SERVER_ERROR,
    HTTP_UNAUTHORIZED,
    INVALID_JSON_MESSAGE,
    MISSING_BODY_MESSAGE,
    UNAUTHORIZED_MESSAGE,
)


class SnapshotIngestError(Exception):
    """Base exception for all snapshot ingest failures."""


class SnapshotConfigError(SnapshotIngestError):
    """Raised for invalid runtime configuration."""


class ClientInputError(SnapshotIngestError):
    """Raised when a request payload fails validation.

    Attributes:
        status_code: HTTP status returned to the caller.
        message: Client-safe error message.
    """

    status_code = HTTP_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingBodyError(ClientInputError):
    """Raised when the request carries no body."""

    def __init__(self) -> None:
        super().__init__(MISSING_BODY_MESSAGE)


class MalformedJsonError(ClientInputError):
    """Raised when the body is not a JSON object."""

    def __init__(self) -> None:
        super().__init__(INVALID_JSON_MESSAGE)


class MissingFieldError(ClientInputError):
    """Raised when a required payload field is absent or null."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"missing required field: {field_name}")
        self.field_name = field_name


class InvalidNumberError(ClientInputError):
    """Raised when a numeric payload field cannot be coerced."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"{field_name} must be a valid number")
        self.field_name = field_name


class UnauthorizedError(SnapshotIngestError):
    """Raised when the configured API key does not match the request."""

    status_code = HTTP_UNAUTHORIZED

    def __init__(self) -> None:
        super().__init__(UNAUTHORIZED_MESSAGE)
        self.message = UNAUTHORIZED_MESSAGE


class PersistenceError(SnapshotIngestError):
    """Raised when the snapshot store rejects or cannot accept a write."""

    status_code = HTTP_INTERNAL_SERVER_ERROR
