"""Core constants used across snapshot ingest modules.

This module centralizes field names, messages, and runtime defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from decimal import Decimal

TIMESTAMP_FIELD = "timestamp"
TOTAL_INVESTED_FIELD = "total_invested"
TOTAL_VALUE_FIELD = "total_value"
REQUIRED_NUMERIC_FIELDS = (TOTAL_INVESTED_FIELD, TOTAL_VALUE_FIELD)
CENTS_QUANTUM = Decimal("0.01")

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_UNAUTHORIZED = 401
HTTP_INTERNAL_SERVER_ERROR = 500
JSON_CONTENT_TYPE = "application/json"

SUCCESS_MESSAGE = "success"
MISSING_BODY_MESSAGE = "missing body"
INVALID_JSON_MESSAGE = "invalid JSON body"
UNAUTHORIZED_MESSAGE = "Unauthorized"
DATABASE_ERROR_CODE = "database_error"
DATABASE_ERROR_DETAILS = "failed to persist snapshot"

API_KEY_HEADER = "x-api-key"
AUTHORIZATION_HEADER = "authorization"
BEARER_PREFIX = "Bearer "

DEFAULT_AWS_REGION = "us-west-2"
DEFAULT_STORE_TIMEOUT_SECONDS = 3.0
DEFAULT_STORE_MAX_ATTEMPTS = 2
UPSERT_EXPRESSION = "SET total_invested = :ti, total_value = :tv"
# DynamoDB numbers carry at most 38 significant digits below 1E+126.
STORE_MAX_DIGITS = 38
STORE_MAX_MAGNITUDE = Decimal("1E+126")
