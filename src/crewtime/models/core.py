"""Timesheet tables. Every row is scoped to one timesheet week."""
from __future__ import annotations
from datetime import datetime, timezone
from sqlmodel import Field, SQLModel
from crewtime.domain.payroll import JobType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Timesheet(SQLModel, table=True):
    timesheet_id: str = Field(primary_key=True)
    created_at: datetime = Field(default_factory=_utcnow)


class Employee(SQLModel, table=True):
    timesheet_id: str = Field(foreign_key="timesheet.timesheet_id", primary_key=True)
    employee_id: str = Field(primary_key=True)
    is_active: bool = True
    display_id: str
    name: str
    phone_number: str = ""
    fringe_code: str = ""
    rate_private_cents_per_hour: int = 0
    rate_davis_bacon_cents_per_hour: int = 0
    rate_davis_bacon_overtime_cents_per_hour: int = 0


class Job(SQLModel, table=True):
    timesheet_id: str = Field(foreign_key="timesheet.timesheet_id", primary_key=True)
    job_id: str = Field(primary_key=True)
    old_job_id: int = 0
    is_active: bool = True
    name: str
    job_type: JobType
    budget_original_cents: int | None = None
    budget_current_cents: int | None = None
    original_labor_seconds: int | None = None
    current_labor_seconds: int | None = None


class Entry(SQLModel, table=True):
    # Rows are read back in insertion order; ``seq`` preserves it.
    seq: int | None = Field(default=None, primary_key=True)
    entry_id: str = Field(index=True)
    timesheet_id: str = Field(foreign_key="timesheet.timesheet_id", index=True)
    job_id: str
    day_id: int
    employee_id: str = Field(index=True)
    is_approved: bool = False
    time_in_seconds: int = 0
    time_out_seconds: int = 0
    lunch_seconds: int = 0
