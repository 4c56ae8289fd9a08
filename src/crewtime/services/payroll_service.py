"""Payroll use-case service: allocation, reports and exports for one timesheet."""
from __future__ import annotations
import logging
from enum import Enum
from crewtime.config import settings
from crewtime.domain.exceptions import NotFoundError
from crewtime.domain.pay import record_overtime_total, record_regular_total
from crewtime.domain.payroll import (
    EmployeeIn, EmployeeRef, EntryIn, JobRef, OvertimePolicy, PayrollRecord,
    compute_payroll_records,
)
from crewtime.infra.db.repositories.roster_repository import RosterRepository
from crewtime.infra.db.uow import UnitOfWork
from crewtime.api.schemas.payroll import PayrollRecordList, PayrollRecordRead
from crewtime.api.schemas.reports import ByEmployeeReport, ByJobReport, EpiExport
from crewtime.reports import (
    build_by_employee_report, build_by_job_report, build_epi_export, report_to_csv,
)

logger = logging.getLogger(__name__)


class ReportKind(str, Enum):
    BY_JOB = "by-job"
    BY_EMPLOYEE = "by-employee"
    EPI = "epi"


def overtime_policy() -> OvertimePolicy:
    return OvertimePolicy(
        daily_threshold_seconds=settings.DAILY_OVERTIME_THRESHOLD_SECONDS,
        weekly_threshold_seconds=settings.WEEKLY_OVERTIME_THRESHOLD_SECONDS,
    )


def load_employees(roster: RosterRepository, timesheet_id: str) -> list[EmployeeIn]:
    """Assemble the employee -> entry -> job graph the allocator consumes."""
    jobs = {j.job_id: JobRef.model_validate(j) for j in roster.list_jobs(timesheet_id)}
    entries_by_employee: dict[str, list[EntryIn]] = {}
    for row in roster.list_entries(timesheet_id):
        job = jobs.get(row.job_id)
        if job is None:
            logger.warning(
                "Entry %s references unknown job %s in timesheet %s; skipped",
                row.entry_id, row.job_id, timesheet_id,
            )
            continue
        entries_by_employee.setdefault(row.employee_id, []).append(EntryIn(
            entry_id=row.entry_id,
            employee_id=row.employee_id,
            job=job,
            day_id=row.day_id,
            time_in_seconds=row.time_in_seconds,
            time_out_seconds=row.time_out_seconds,
            lunch_seconds=row.lunch_seconds,
            is_approved=row.is_approved,
        ))

    return [
        EmployeeIn(
            employee=EmployeeRef.model_validate(e),
            entries=entries_by_employee.get(e.employee_id, []),
        )
        for e in roster.list_employees(timesheet_id)
    ]


def _record_read(record: PayrollRecord) -> PayrollRecordRead:
    regular = record_regular_total(record)
    overtime = record_overtime_total(record, settings.PRIVATE_OVERTIME_MULTIPLIER)
    return PayrollRecordRead(
        employee_id=record.employee.employee_id,
        employee_name=record.employee.name,
        job_id=record.job.job_id,
        job_name=record.job.name,
        job_type=record.job.job_type,
        day_seconds=list(record.day_seconds),
        day_overtime_seconds=list(record.day_overtime_seconds),
        regular_seconds=regular.seconds,
        overtime_seconds=overtime.seconds,
        regular_cents=regular.cents,
        overtime_cents=overtime.cents,
    )


class PayrollService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def _load(self, timesheet_id: str) -> tuple[list[EmployeeIn], list[PayrollRecord]]:
        if self._uow.timesheets.get_by_id(timesheet_id) is None:
            raise NotFoundError(f"Timesheet {timesheet_id} not found")
        employees = load_employees(self._uow.roster, timesheet_id)
        records = compute_payroll_records(employees, overtime_policy())
        return employees, records

    def get_records(self, timesheet_id: str) -> PayrollRecordList:
        _, records = self._load(timesheet_id)
        return PayrollRecordList(
            timesheet_id=timesheet_id,
            items=[_record_read(r) for r in records],
            total=len(records),
        )

    def by_job(self, timesheet_id: str) -> ByJobReport:
        employees, records = self._load(timesheet_id)
        return build_by_job_report(
            timesheet_id, employees, records, settings.PRIVATE_OVERTIME_MULTIPLIER,
        )

    def by_employee(self, timesheet_id: str) -> ByEmployeeReport:
        employees, records = self._load(timesheet_id)
        return build_by_employee_report(timesheet_id, employees, records)

    def epi(self, timesheet_id: str) -> EpiExport:
        employees, records = self._load(timesheet_id)
        return build_epi_export(
            timesheet_id, employees, records,
            settings.EPI_COMPANY_CODE, settings.DAVIS_BACON_OVERTIME_DIVISOR,
        )

    def report(self, timesheet_id: str, kind: ReportKind) -> ByJobReport | ByEmployeeReport | EpiExport:
        match kind:
            case ReportKind.BY_JOB:
                return self.by_job(timesheet_id)
            case ReportKind.BY_EMPLOYEE:
                return self.by_employee(timesheet_id)
            case ReportKind.EPI:
                return self.epi(timesheet_id)

    def export_csv(self, timesheet_id: str, kind: ReportKind) -> str:
        return report_to_csv(self.report(timesheet_id, kind))
