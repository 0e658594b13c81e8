"""Shared typed models.

This module defines immutable data models used by the ingest pipeline,
store adapters, runtime entry point, and CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
import json
from typing import Any, Mapping

from core.constants import (
    JSON_CONTENT_TYPE,
    TIMESTAMP_FIELD,
    TOTAL_INVESTED_FIELD,
    TOTAL_VALUE_FIELD,
)


@dataclass(frozen=True)
class SnapshotRecord:
    """Persisted portfolio snapshot.

    Attributes:
        timestamp: Unix seconds; unique record key.
        total_invested: Amount invested, rounded to cents.
        total_value: Current portfolio value, rounded to cents.
    """

    timestamp: int
    total_invested: Decimal
    total_value: Decimal

    def to_item(self) -> dict[str, Any]:
        """Render the record as a JSON-ready mapping."""
        return {
            TIMESTAMP_FIELD: self.timestamp,
            TOTAL_INVESTED_FIELD: decimal_to_json_number(self.total_invested),
            TOTAL_VALUE_FIELD: decimal_to_json_number(self.total_value),
        }


@dataclass(frozen=True)
class IngestRequest:
    """Inbound request handed over by the gateway.

    Attributes:
        body: Raw JSON text, bytes, or an already parsed mapping.
        headers: Request headers as received.
    """

    body: str | bytes | Mapping[str, Any] | None
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class HandlerResponse:
    """HTTP-style handler result.

    Attributes:
        status_code: HTTP status code.
        body: JSON-serializable response body.
    """

    status_code: int
    body: Mapping[str, Any]

    def to_proxy(self) -> dict[str, Any]:
        """Render an API Gateway proxy integration response."""
        return {
            "statusCode": self.status_code,
            "headers": {"Content-Type": JSON_CONTENT_TYPE},
            "body": json.dumps(self.body),
        }


class NumberStatus(Enum):
    """Outcome of permissive numeric coercion."""

    VALID = "valid"
    INVALID = "invalid"
    ABSENT = "absent"


@dataclass(frozen=True)
class ParsedNumber:
    """Tri-state numeric coercion result.

    Attributes:
        status: Whether the input was a number, not a number, or absent.
        value: Parsed decimal when status is VALID, else None.
    """

    status: NumberStatus
    value: Decimal | None = None


def decimal_to_json_number(value: Decimal) -> int | float:
    """Convert a decimal into the narrowest JSON number type.

    Args:
        value: Decimal value.

    Returns:
        ``int`` for integral values, otherwise ``float``.
    """
    if value == value.to_integral_value():
        return int(value)
    return float(value)
