"""Permissive numeric coercion and cents rounding.

This module converts loosely typed JSON values into decimals.
Rounding works on decimal text so float inputs round reproducibly.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, InvalidOperation
import math
import re

from core.constants import CENTS_QUANTUM, STORE_MAX_DIGITS, STORE_MAX_MAGNITUDE
from core.types import NumberStatus, ParsedNumber

_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_CENTS_CONTEXT = Context(prec=STORE_MAX_DIGITS, rounding=ROUND_HALF_UP, traps=[InvalidOperation])
_WIDE_CONTEXT = Context(prec=1000)


def coerce_number(raw_value: object) -> ParsedNumber:
    """Coerce a payload value into a decimal.

    Accepts ints, floats, and decimal strings with optional surrounding
    whitespace. Rejects booleans, empty or non-numeric strings, NaN,
    infinities, values that overflow a double, and every other type.

    Args:
        raw_value: Value taken from the parsed payload.

    Returns:
        ABSENT for None, VALID with a decimal, or INVALID.
    """
    if raw_value is None:
        return ParsedNumber(NumberStatus.ABSENT)
    if isinstance(raw_value, bool):
        return ParsedNumber(NumberStatus.INVALID)
    if isinstance(raw_value, (int, float, Decimal)):
        candidate = _decimal_from_number(raw_value)
    elif isinstance(raw_value, str):
        candidate = _decimal_from_text(raw_value)
    else:
        candidate = None
    if candidate is None or not math.isfinite(float(candidate)):
        return ParsedNumber(NumberStatus.INVALID)
    return ParsedNumber(NumberStatus.VALID, candidate)


def round_to_cents(value: Decimal) -> Decimal:
    """Round half away from zero to two decimal places.

    ``100.005`` becomes ``100.01`` and ``-100.005`` becomes ``-100.01``.

    Args:
        value: Finite decimal.

    Returns:
        Decimal quantized to cents.

    Raises:
        decimal.InvalidOperation: If the value has too many digits.
    """
    return value.quantize(CENTS_QUANTUM, context=_CENTS_CONTEXT)


def floor_to_seconds(value: Decimal) -> int:
    """Floor a decimal epoch value to whole seconds."""
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def fits_store_number(value: Decimal) -> bool:
    """Return whether DynamoDB can hold the value without rounding."""
    if value.is_zero():
        return True
    digits = len(value.normalize(_WIDE_CONTEXT).as_tuple().digits)
    return digits <= STORE_MAX_DIGITS and abs(value) < STORE_MAX_MAGNITUDE


def survives_json_float(value: Decimal) -> bool:
    """Return whether a JSON double renders the value exactly.

    Response items are JSON numbers, so amounts past double precision
    would come back different from what was stored.
    """
    return Decimal(repr(float(value))) == value


def _decimal_from_number(raw_value: int | float | Decimal) -> Decimal | None:
    if isinstance(raw_value, float):
        if not math.isfinite(raw_value):
            return None
        return Decimal(repr(raw_value))
    if isinstance(raw_value, Decimal) and not raw_value.is_finite():
        return None
    return Decimal(raw_value)


def _decimal_from_text(raw_value: str) -> Decimal | None:
    text = raw_value.strip()
    if not _NUMERIC_TEXT.fullmatch(text):
        return None
    return Decimal(text)
