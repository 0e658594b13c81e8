"""Unit tests for numeric coercion and cents rounding."""

from __future__ import annotations

from decimal import Decimal

import pytest

from core.numbers import (
    coerce_number,
    fits_store_number,
    floor_to_seconds,
    round_to_cents,
    survives_json_float,
)
from core.types import NumberStatus


@pytest.mark.parametrize(
    ("raw_value", "expected"),
    [
        (100, Decimal("100")),
        (100.5, Decimal("100.5")),
        ("100.50", Decimal("100.50")),
        ("  42 ", Decimal("42")),
        ("-7.25", Decimal("-7.25")),
        ("1e3", Decimal("1000")),
        (Decimal("3.14"), Decimal("3.14")),
    ],
)
def test_coerce_number_accepts_numbers_and_numeric_text(
    raw_value: object, expected: Decimal
) -> None:
    """Coercion should accept true numbers and numeric-looking strings."""
    parsed = coerce_number(raw_value)

    assert parsed.status is NumberStatus.VALID and parsed.value == expected


@pytest.mark.parametrize(
    "raw_value",
    [
        "", "   ", "abc", "12abc", "Infinity", "NaN", "1e400",
        True, False, float("nan"), float("inf"), float("-inf"), [1], {"amount": 1},
    ],
)
def test_coerce_number_rejects_non_numbers(raw_value: object) -> None:
    """Coercion should reject text, booleans, NaN, infinities, and containers."""
    parsed = coerce_number(raw_value)

    assert parsed.status is NumberStatus.INVALID and parsed.value is None


def test_coerce_number_treats_none_as_absent() -> None:
    """Coercion should report None as absent rather than invalid."""
    assert coerce_number(None).status is NumberStatus.ABSENT


def test_coerce_number_keeps_float_decimal_text() -> None:
    """Float inputs should convert through their shortest decimal text."""
    parsed = coerce_number(100.005)

    assert parsed.value == Decimal("100.005")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("100.005"), Decimal("100.01")),
        (Decimal("-100.005"), Decimal("-100.01")),
        (Decimal("100.004"), Decimal("100.00")),
        (Decimal("1000.5"), Decimal("1000.50")),
        (Decimal("0.125"), Decimal("0.13")),
    ],
)
def test_round_to_cents_rounds_half_away_from_zero(
    value: Decimal, expected: Decimal
) -> None:
    """Rounding should break cent ties away from zero."""
    assert round_to_cents(value) == expected


def test_round_to_cents_is_stable_for_float_inputs() -> None:
    """Repeated rounding of a float-derived value should not drift."""
    results = {round_to_cents(coerce_number(100.005).value) for _ in range(5)}

    assert results == {Decimal("100.01")}


def test_floor_to_seconds_floors_fractional_epochs() -> None:
    """Epoch floors should drop fractions toward negative infinity."""
    assert floor_to_seconds(Decimal("1700000000.9")) == 1700000000
    assert floor_to_seconds(Decimal("-1.5")) == -2


def test_coerce_number_rejects_non_ascii_digits() -> None:
    """Digits outside ASCII should not count as numeric text."""
    parsed = coerce_number("١٠٠")

    assert parsed.status is NumberStatus.INVALID


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (Decimal("1700000000"), True),
        (Decimal("0"), True),
        (Decimal("9" * 38), True),
        (Decimal(1234567890123456789012345678901234567891), False),
        (Decimal("1E+200"), False),
        (Decimal("1E+126"), False),
    ],
)
def test_fits_store_number_enforces_dynamodb_limits(value: Decimal, expected: bool) -> None:
    """Only values within 38 digits and below 1E+126 should fit a store number."""
    assert fits_store_number(value) is expected


def test_survives_json_float_flags_amounts_past_double_precision() -> None:
    """Amounts a double cannot render exactly should be flagged."""
    assert survives_json_float(Decimal("9999999999999.99")) is True
    assert survives_json_float(Decimal("12345678901234567.89")) is False
