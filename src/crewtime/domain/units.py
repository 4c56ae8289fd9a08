"""Conversions between stored integers and user-facing strings."""
from __future__ import annotations
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation

_CENT = Decimal("0.01")


def seconds_to_hours(seconds: int) -> Decimal:
    return Decimal(seconds) / 3600


def seconds_to_hour_string(seconds: int) -> str:
    return str(seconds_to_hours(seconds).quantize(_CENT, rounding=ROUND_HALF_UP))


def hour_string_to_seconds(hours: str) -> int:
    """Parse an hours string; blank means zero and partial seconds are dropped."""
    hours = hours.strip()
    if not hours:
        return 0
    try:
        value = Decimal(hours)
    except InvalidOperation as exc:
        raise ValueError(f"not a number of hours: {hours!r}") from exc
    return int((value * 3600).to_integral_value(rounding=ROUND_FLOOR))


def cents_to_dollars(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(_CENT)


def cents_to_dollar_string(cents: int) -> str:
    return str(cents_to_dollars(cents))


def dollar_string_to_cents(dollars: str) -> int:
    try:
        value = Decimal(dollars.strip().lstrip("$").replace(",", ""))
    except InvalidOperation as exc:
        raise ValueError(f"not a dollar amount: {dollars!r}") from exc
    return int((value * 100).to_integral_value(rounding=ROUND_HALF_UP))
