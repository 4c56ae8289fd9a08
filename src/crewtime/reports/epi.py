"""Payroll-provider import file: one line per job, day and pay kind."""
from __future__ import annotations
import re
from decimal import Decimal
from crewtime.api.schemas.reports import EpiExport, EpiRow
from crewtime.domain.calendar import batch_id
from crewtime.domain.pay import (
    DAVIS_BACON_OVERTIME_DIVISOR, epi_overtime_base_rate_cents, regular_rate_cents,
)
from crewtime.domain.payroll import EmployeeIn, JobType, PayrollRecord
from crewtime.reports._common import dollars, hours


def temp_cost_number(record: PayrollRecord, day_id: int) -> str:
    """``<old job id>-0<day>-RFR-<N | Y-fringe>``; prevailing-wage jobs carry the fringe code."""
    if record.job.job_type is JobType.PRIVATE:
        suffix = "N"
    else:
        suffix = f"Y-{record.employee.fringe_code}"
    return f"{record.job.old_job_id}-0{day_id}-RFR-{suffix}"


_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def file_number(display_id: str) -> int | None:
    """Leading integer of the display id (``"12A"`` is 12); None when it has none."""
    m = _LEADING_INT.match(display_id)
    return int(m.group(1)) if m else None


def build_epi_export(
    timesheet_id: str,
    employees: list[EmployeeIn],
    records: list[PayrollRecord],
    company_code: str = "1SI",
    davis_bacon_divisor: Decimal = DAVIS_BACON_OVERTIME_DIVISOR,
) -> EpiExport:
    batch = batch_id(timesheet_id)
    rows: list[EpiRow] = []

    for employee in sorted(employees, key=lambda e: e.employee.name.casefold()):
        if not employee.entries:
            continue
        for record in records:
            if record.employee.employee_id != employee.employee_id:
                continue
            common = {
                "co_code": company_code,
                "batch_id": batch,
                "file_number": file_number(record.employee.display_id),
            }
            regular_rate = regular_rate_cents(record.employee, record.job.job_type)
            for day_id, seconds in enumerate(record.day_seconds):
                if seconds == 0:
                    continue
                rows.append(EpiRow(
                    **common,
                    temp_cost_number=temp_cost_number(record, day_id),
                    temp_rate=dollars(regular_rate),
                    reg_hours=hours(seconds),
                ))

            overtime_rate = epi_overtime_base_rate_cents(
                record.employee, record.job.job_type, davis_bacon_divisor,
            )
            for day_id, seconds in enumerate(record.day_overtime_seconds):
                if seconds == 0:
                    continue
                rows.append(EpiRow(
                    **common,
                    temp_cost_number=temp_cost_number(record, day_id),
                    temp_rate=dollars(overtime_rate),
                    ot_hours=hours(seconds),
                ))

    return EpiExport(timesheet_id=timesheet_id, rows=rows)
