"""Timesheet and import DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator
from crewtime.domain.calendar import end_of_week
from crewtime.domain.payroll import JobType


class TimesheetCreate(BaseModel):
    # Omitted: the Saturday closing the current week in the company time zone.
    timesheet_id: str | None = None

    @field_validator("timesheet_id")
    @classmethod
    def iso_date(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            d = date.fromisoformat(v)
        except ValueError as exc:
            raise ValueError("timesheet_id must be an ISO date (YYYY-MM-DD)") from exc
        if end_of_week(d) != d:
            raise ValueError("timesheet_id must be a Saturday, the last day of its week")
        return v


class TimesheetRead(BaseModel):
    model_config = {"from_attributes": True}

    timesheet_id: str
    created_at: datetime | None = None


class TimesheetList(BaseModel):
    items: list[TimesheetRead]
    total: int


class EmployeeImport(BaseModel):
    employee_id: str
    display_id: str
    name: str
    is_active: bool = True
    phone_number: str = ""
    fringe_code: str = ""
    rate_private_cents_per_hour: int = Field(default=0, ge=0)
    rate_davis_bacon_cents_per_hour: int = Field(default=0, ge=0)
    rate_davis_bacon_overtime_cents_per_hour: int = Field(default=0, ge=0)

    @field_validator("employee_id", "name")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class JobImport(BaseModel):
    job_id: str
    name: str
    job_type: JobType
    old_job_id: int = 0
    is_active: bool = True
    budget_original_cents: int | None = None
    budget_current_cents: int | None = None
    original_labor_seconds: int | None = None
    current_labor_seconds: int | None = None

    @field_validator("job_id")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v


class EntryImport(BaseModel):
    entry_id: str
    employee_id: str
    job_id: str
    day_id: int = Field(ge=0, le=6)
    time_in_seconds: int = Field(default=0, ge=0, le=86400)
    time_out_seconds: int = Field(default=0, ge=0, le=86400)
    lunch_seconds: int = Field(default=0, ge=0)
    is_approved: bool = False


class TimesheetImport(BaseModel):
    employees: list[EmployeeImport] = []
    jobs: list[JobImport] = []
    entries: list[EntryImport] = []


class ImportResponse(BaseModel):
    timesheet_id: str
    employees: int
    jobs: int
    entries: int
