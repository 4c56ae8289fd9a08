"""Timesheet week arithmetic.

A timesheet is identified by the ISO date of the Saturday that closes its
Sunday..Saturday week.
"""
from __future__ import annotations
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo
from crewtime.domain.payroll import DAYS_PER_WEEK

DAY_KEYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def _days_since_sunday(d: date) -> int:
    # date.weekday(): Monday=0 .. Sunday=6
    return (d.weekday() + 1) % DAYS_PER_WEEK


def parse_timesheet_id(timesheet_id: str) -> date:
    try:
        return date.fromisoformat(timesheet_id)
    except ValueError as exc:
        raise ValueError(f"timesheet id must be YYYY-MM-DD, got {timesheet_id!r}") from exc


def end_of_week(d: date) -> date:
    return d + timedelta(days=DAYS_PER_WEEK - 1 - _days_since_sunday(d))


def current_timesheet_id(now: datetime | None = None, tz: str = "Pacific/Honolulu") -> str:
    zone = ZoneInfo(tz)
    local = now.astimezone(zone) if now is not None else datetime.now(zone)
    return end_of_week(local.date()).isoformat()


def week_start(timesheet_id: str) -> date:
    d = parse_timesheet_id(timesheet_id)
    return d - timedelta(days=_days_since_sunday(d))


def day_dates(timesheet_id: str) -> list[date]:
    start = week_start(timesheet_id)
    return [start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def day_key(day_id: int) -> str:
    return DAY_KEYS[day_id]


def short_date(d: date) -> str:
    """``M/d`` without zero padding, e.g. ``1/7``."""
    return f"{d.month}/{d.day}"


def batch_id(timesheet_id: str) -> int:
    """Payroll-provider batch number: the timesheet date as ``Mddyy``."""
    d = parse_timesheet_id(timesheet_id)
    return int(f"{d.month}{d.day:02d}{d.year % 100:02d}")
