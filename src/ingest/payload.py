"""Request body parsing and snapshot payload validation.

This module runs the ordered validation steps of the ingest pipeline.
The first failing step raises a client input error; nothing is written.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
import json
from typing import Any, Callable, Mapping

from core.constants import (
    REQUIRED_NUMERIC_FIELDS,
    TIMESTAMP_FIELD,
    TOTAL_INVESTED_FIELD,
    TOTAL_VALUE_FIELD,
)
from core.errors import InvalidNumberError, MalformedJsonError, MissingBodyError, MissingFieldError
from core.logging_config import get_logger
from core.numbers import (
    coerce_number,
    fits_store_number,
    floor_to_seconds,
    round_to_cents,
    survives_json_float,
)
from core.types import NumberStatus, SnapshotRecord

_LOGGER = get_logger(__name__)

Clock = Callable[[], float]


def parse_body(body: str | bytes | Mapping[str, Any] | None) -> dict[str, Any]:
    """Parse a request body into a JSON object.

    Args:
        body: Raw JSON text or bytes, or an already parsed mapping.

    Returns:
        Parsed payload mapping.

    Raises:
        MissingBodyError: If the body is absent or empty.
        MalformedJsonError: If the body is not a JSON object.
    """
    if body is None or body == "" or body == b"":
        raise MissingBodyError()
    if isinstance(body, Mapping):
        return dict(body)
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as error:
            raise MalformedJsonError() from error
    if not isinstance(body, str):
        raise MalformedJsonError()
    try:
        payload = json.loads(body, parse_float=Decimal, parse_constant=_reject_constant)
    except ValueError as error:
        raise MalformedJsonError() from error
    if not isinstance(payload, dict):
        raise MalformedJsonError()
    return payload


def validate_payload(payload: Mapping[str, Any], clock: Clock) -> SnapshotRecord:
    """Validate and normalize a parsed payload into a snapshot record.

    Args:
        payload: Parsed request payload.
        clock: Returns current wall-clock epoch seconds.

    Returns:
        Normalized record ready for persistence.

    Raises:
        MissingFieldError: If a required field is absent or null.
        InvalidNumberError: If a required field is not a usable number.
    """
    for field_name in REQUIRED_NUMERIC_FIELDS:
        if payload.get(field_name) is None:
            raise MissingFieldError(field_name)
    total_invested = _require_cents(payload, TOTAL_INVESTED_FIELD)
    total_value = _require_cents(payload, TOTAL_VALUE_FIELD)
    timestamp = resolve_timestamp(payload.get(TIMESTAMP_FIELD), clock)
    return SnapshotRecord(
        timestamp=timestamp,
        total_invested=total_invested,
        total_value=total_value,
    )


def resolve_timestamp(raw_value: object, clock: Clock) -> int:
    """Resolve the record key from an optional payload timestamp.

    Unusable timestamps, including ones too large for a DynamoDB key,
    fall back to the current time instead of rejecting the request.

    Args:
        raw_value: Payload ``timestamp`` value, possibly None.
        clock: Returns current wall-clock epoch seconds.

    Returns:
        Unix seconds.
    """
    parsed = coerce_number(raw_value)
    if parsed.status is NumberStatus.VALID and parsed.value is not None:
        seconds = floor_to_seconds(parsed.value)
        if fits_store_number(Decimal(seconds)):
            return seconds
    now = int(clock())
    if parsed.status is not NumberStatus.ABSENT:
        _LOGGER.warning(
            "snapshot_timestamp_fallback",
            provided_type=type(raw_value).__name__,
            timestamp=now,
        )
    return now


def _require_cents(payload: Mapping[str, Any], field_name: str) -> Decimal:
    """Coerce a required field and round it to cents.

    Args:
        payload: Parsed request payload.
        field_name: Field to read.

    Returns:
        Rounded decimal value.

    Raises:
        InvalidNumberError: If coercion or rounding fails, or the rounded
            amount cannot be returned exactly as a JSON number.
    """
    parsed = coerce_number(payload.get(field_name))
    if parsed.status is not NumberStatus.VALID or parsed.value is None:
        raise InvalidNumberError(field_name)
    try:
        rounded = round_to_cents(parsed.value)
    except InvalidOperation as error:
        raise InvalidNumberError(field_name) from error
    if not survives_json_float(rounded):
        raise InvalidNumberError(field_name)
    return rounded


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Unsupported JSON constant {name}")
