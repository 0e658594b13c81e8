"""API Gateway proxy event adaptation."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Mapping

from core.errors import MalformedJsonError
from core.types import IngestRequest


def request_from_event(event: Mapping[str, Any]) -> IngestRequest:
    """Build an ingest request from an API Gateway proxy event.

    Args:
        event: Lambda proxy integration event.

    Returns:
        Ingest request with body and headers.

    Raises:
        MalformedJsonError: If a base64 body cannot be decoded.
    """
    body = event.get("body")
    if event.get("isBase64Encoded") and isinstance(body, str) and body:
        body = _decode_base64_body(body)
    headers = event.get("headers") or {}
    return IngestRequest(body=body, headers=dict(headers))


def _decode_base64_body(body: str) -> bytes:
    try:
        return base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as error:
        raise MalformedJsonError() from error
