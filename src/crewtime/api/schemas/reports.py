"""Report DTOs: pure Pydantic, zero ORM imports.

Hours and dollar amounts are floats for display; all arithmetic behind them
is done in integer seconds and cents.
"""
from __future__ import annotations
from pydantic import BaseModel
from crewtime.domain.payroll import JobType


class ByJobRow(BaseModel):
    display_id: str
    employee_name: str
    is_overtime: bool = False
    rate: float
    day_hours: list[float | None]
    hours: float
    paid_out: float


class ByJobSection(BaseModel):
    job_id: str
    job_name: str
    job_type: JobType
    is_active: bool
    completed_day_id: int | None = None
    day_dates: list[str]
    day_keys: list[str]
    rows: list[ByJobRow]
    total_hours: float
    total_paid_out: float
    budget_original: float | None = None
    budget_remaining: float | None = None
    labor_hours_original: float | None = None
    labor_hours_remaining: float | None = None


class ByJobReport(BaseModel):
    timesheet_id: str
    jobs: list[ByJobSection]


class ByEmployeeRow(BaseModel):
    job_id: str
    job_name: str
    job_type: JobType
    display_id: str
    employee_name: str
    rate: float
    day_hours: list[float | None]
    hours: float
    paid_out: float


class ByEmployeeSection(BaseModel):
    employee_id: str
    display_id: str
    employee_name: str
    rows: list[ByEmployeeRow]
    total_hours: float
    total_paid_out: float


class ByEmployeeReport(BaseModel):
    timesheet_id: str
    employees: list[ByEmployeeSection]


class EpiRow(BaseModel):
    co_code: str
    batch_id: int
    file_number: int | None
    temp_cost_number: str
    temp_rate: float
    reg_hours: float | None = None
    ot_hours: float | None = None


class EpiExport(BaseModel):
    timesheet_id: str
    rows: list[EpiRow]
