"""Per-job weekly cost report: one section per job, one row per employee."""
from __future__ import annotations
from decimal import Decimal
from crewtime.api.schemas.reports import ByJobReport, ByJobRow, ByJobSection
from crewtime.domain.calendar import DAY_KEYS, day_dates, short_date
from crewtime.domain.pay import (
    PRIVATE_OVERTIME_MULTIPLIER, record_overtime_total, record_regular_total,
)
from crewtime.domain.payroll import EmployeeIn, JobRef, PayrollRecord
from crewtime.reports._common import day_hours, dollars, hours


def _jobs_by_name(employees: list[EmployeeIn]) -> list[JobRef]:
    """Every job any entry points at, approved or not, ordered by name."""
    seen: dict[str, JobRef] = {}
    for employee in employees:
        for entry in employee.entries:
            seen.setdefault(entry.job_id, entry.job)
    return sorted(seen.values(), key=lambda j: j.name.casefold())


def _completed_day_id(records: list[PayrollRecord]) -> int | None:
    """Last day of the week the job saw any time."""
    days = [
        day_id
        for r in records
        for day_id in range(7)
        if r.day_seconds[day_id] > 0 or r.day_overtime_seconds[day_id] > 0
    ]
    return max(days, default=None)


def _section(
    job: JobRef,
    records: list[PayrollRecord],
    dates: list[str],
    private_multiplier: Decimal,
) -> ByJobSection:
    rows: list[ByJobRow] = []
    total_seconds = 0
    total_cents = 0

    for record in sorted(records, key=lambda r: r.employee.name.casefold()):
        regular = record_regular_total(record)
        rows.append(ByJobRow(
            display_id=record.employee.display_id,
            employee_name=record.employee.name,
            rate=dollars(regular.cents_per_hour),
            day_hours=day_hours(record.day_seconds),
            hours=hours(regular.seconds),
            paid_out=dollars(regular.cents),
        ))
        total_seconds += regular.seconds
        total_cents += regular.cents

        overtime = record_overtime_total(record, private_multiplier)
        if overtime.seconds > 0:
            rows.append(ByJobRow(
                display_id=record.employee.display_id,
                employee_name=f"{record.employee.name}/OT",
                is_overtime=True,
                rate=dollars(overtime.cents_per_hour),
                day_hours=day_hours(record.day_overtime_seconds),
                hours=hours(overtime.seconds),
                paid_out=dollars(overtime.cents),
            ))
            total_seconds += overtime.seconds
            total_cents += overtime.cents

    return ByJobSection(
        job_id=job.job_id,
        job_name=job.name,
        job_type=job.job_type,
        is_active=job.is_active,
        completed_day_id=None if job.is_active else _completed_day_id(records),
        day_dates=dates,
        day_keys=list(DAY_KEYS),
        rows=rows,
        total_hours=hours(total_seconds),
        total_paid_out=dollars(total_cents),
        budget_original=(
            None if job.budget_original_cents is None else dollars(job.budget_original_cents)
        ),
        budget_remaining=(
            None if job.budget_current_cents is None
            else dollars(job.budget_current_cents - total_cents)
        ),
        labor_hours_original=(
            None if job.original_labor_seconds is None else hours(job.original_labor_seconds)
        ),
        labor_hours_remaining=(
            None if job.current_labor_seconds is None
            else hours(job.current_labor_seconds - total_seconds)
        ),
    )


def build_by_job_report(
    timesheet_id: str,
    employees: list[EmployeeIn],
    records: list[PayrollRecord],
    private_multiplier: Decimal = PRIVATE_OVERTIME_MULTIPLIER,
) -> ByJobReport:
    dates = [short_date(d) for d in day_dates(timesheet_id)]
    by_job: dict[str, list[PayrollRecord]] = {}
    for record in records:
        by_job.setdefault(record.job.job_id, []).append(record)

    return ByJobReport(
        timesheet_id=timesheet_id,
        jobs=[
            _section(job, by_job.get(job.job_id, []), dates, private_multiplier)
            for job in _jobs_by_name(employees)
        ],
    )
