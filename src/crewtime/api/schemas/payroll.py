"""Payroll record DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from pydantic import BaseModel
from crewtime.domain.payroll import JobType


class PayrollRecordRead(BaseModel):
    employee_id: str
    employee_name: str
    job_id: str
    job_name: str
    job_type: JobType
    day_seconds: list[int]
    day_overtime_seconds: list[int]
    regular_seconds: int
    overtime_seconds: int
    regular_cents: int
    overtime_cents: int


class PayrollRecordList(BaseModel):
    timesheet_id: str
    items: list[PayrollRecordRead]
    total: int
