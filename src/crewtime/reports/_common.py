from __future__ import annotations
from decimal import Decimal


def hours(seconds: int) -> float:
    return seconds / 3600


def day_hours(seconds_by_day: list[int]) -> list[float | None]:
    """Per-day hours with empty days left blank."""
    return [s / 3600 if s else None for s in seconds_by_day]


def dollars(cents: int | Decimal) -> float:
    return float(Decimal(cents) / 100)
