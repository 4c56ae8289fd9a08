"""Per-employee hours report: one row per job worked, plus an employee total."""
from __future__ import annotations
from crewtime.api.schemas.reports import ByEmployeeReport, ByEmployeeRow, ByEmployeeSection
from crewtime.domain.pay import regular_rate_cents, seconds_to_cents
from crewtime.domain.payroll import EmployeeIn, PayrollRecord
from crewtime.reports._common import day_hours, dollars, hours


def _row(record: PayrollRecord) -> tuple[ByEmployeeRow, int]:
    rate = regular_rate_cents(record.employee, record.job.job_type)
    per_day = [
        regular + overtime
        for regular, overtime in zip(record.day_seconds, record.day_overtime_seconds)
    ]
    cents = seconds_to_cents(record.total_seconds, rate)
    row = ByEmployeeRow(
        job_id=record.job.job_id,
        job_name=record.job.name,
        job_type=record.job.job_type,
        display_id=record.employee.display_id,
        employee_name=record.employee.name,
        rate=dollars(rate),
        day_hours=day_hours(per_day),
        hours=hours(record.total_seconds),
        paid_out=dollars(cents),
    )
    return row, cents


def build_by_employee_report(
    timesheet_id: str, employees: list[EmployeeIn], records: list[PayrollRecord],
) -> ByEmployeeReport:
    """Worked hours at the straight-time rate; the overtime split lives in by-job."""
    by_employee: dict[str, list[PayrollRecord]] = {}
    for record in records:
        by_employee.setdefault(record.employee.employee_id, []).append(record)

    sections: list[ByEmployeeSection] = []
    for employee in employees:
        employee_records = by_employee.get(employee.employee_id)
        if not employee_records:
            continue
        rows: list[ByEmployeeRow] = []
        total_cents = 0
        for record in employee_records:
            row, cents = _row(record)
            rows.append(row)
            total_cents += cents
        sections.append(ByEmployeeSection(
            employee_id=employee.employee_id,
            display_id=employee.employee.display_id,
            employee_name=employee.employee.name,
            rows=rows,
            total_hours=hours(sum(r.total_seconds for r in employee_records)),
            total_paid_out=dollars(total_cents),
        ))

    return ByEmployeeReport(timesheet_id=timesheet_id, employees=sections)
