"""Shared API key check for ingest requests.

This module extracts a caller key from request headers and compares it
with the configured key. An empty configured key disables the check.
"""

from __future__ import annotations

import hmac
from typing import Mapping

from core.constants import API_KEY_HEADER, AUTHORIZATION_HEADER, BEARER_PREFIX
from core.errors import UnauthorizedError


def extract_api_key(headers: Mapping[str, str] | None) -> str:
    """Read the caller key from ``x-api-key`` or a bearer token.

    Args:
        headers: Request headers; names are matched case-insensitively.

    Returns:
        Provided key, or an empty string.
    """
    lowered = {str(name).lower(): value for name, value in (headers or {}).items()}
    api_key = lowered.get(API_KEY_HEADER)
    if api_key:
        return str(api_key)
    authorization = str(lowered.get(AUTHORIZATION_HEADER) or "")
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX) :]
    return ""


def authorize_request(headers: Mapping[str, str] | None, expected_key: str) -> None:
    """Reject a request whose key does not match the configured key.

    Args:
        headers: Request headers.
        expected_key: Configured API key; empty disables the check.

    Raises:
        UnauthorizedError: If a key is configured and not matched.
    """
    if not expected_key:
        return
    provided = extract_api_key(headers)
    if not hmac.compare_digest(provided.encode("utf-8"), expected_key.encode("utf-8")):
        raise UnauthorizedError()
