"""Timesheet use-case service. Owns ORM→DTO mapping; routers never see ORM objects."""
from __future__ import annotations
import logging
from crewtime.config import settings
from crewtime.domain.calendar import current_timesheet_id
from crewtime.domain.exceptions import ConflictError, InvalidEntryError, NotFoundError
from crewtime.domain.payroll import EmployeeIn, EmployeeRef, EntryIn, JobRef
from crewtime.domain.validation import ensure_valid
from crewtime.infra.db.uow import UnitOfWork
from crewtime.models.core import Employee, Entry, Job
from crewtime.api.schemas.timesheets import (
    ImportResponse, TimesheetCreate, TimesheetImport, TimesheetList, TimesheetRead,
)
from crewtime.services.payroll_service import load_employees

logger = logging.getLogger(__name__)


class TimesheetService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def _ensure_timesheet(self, timesheet_id: str) -> None:
        if self._uow.timesheets.get_by_id(timesheet_id) is None:
            raise NotFoundError(f"Timesheet {timesheet_id} not found")

    def create_timesheet(self, payload: TimesheetCreate) -> TimesheetRead:
        repo = self._uow.timesheets
        timesheet_id = payload.timesheet_id or current_timesheet_id(tz=settings.TIMEZONE)
        if repo.get_by_id(timesheet_id) is not None:
            raise ConflictError(f"Timesheet {timesheet_id} already exists")
        timesheet = repo.create(timesheet_id)
        self._uow.commit()
        logger.info("Created timesheet %s", timesheet_id)
        return TimesheetRead.model_validate(timesheet)

    def list_timesheets(self, limit: int = 100, offset: int = 0) -> TimesheetList:
        repo = self._uow.timesheets
        items = repo.list_all(limit=limit, offset=offset)
        return TimesheetList(
            items=[TimesheetRead.model_validate(t) for t in items],
            total=repo.count(),
        )

    def get_timesheet(self, timesheet_id: str) -> TimesheetRead:
        timesheet = self._uow.timesheets.get_by_id(timesheet_id)
        if timesheet is None:
            raise NotFoundError(f"Timesheet {timesheet_id} not found")
        return TimesheetRead.model_validate(timesheet)

    def _merged_graph(self, timesheet_id: str, payload: TimesheetImport) -> list[EmployeeIn]:
        """Stored data overlaid with the incoming batch, for validation."""
        stored = load_employees(self._uow.roster, timesheet_id)
        employees = {e.employee_id: e.employee for e in stored}
        jobs = {j.job_id: JobRef.model_validate(j) for j in self._uow.roster.list_jobs(timesheet_id)}
        for e in payload.employees:
            employees[e.employee_id] = EmployeeRef.model_validate(e, from_attributes=True)
        for j in payload.jobs:
            jobs[j.job_id] = JobRef.model_validate(j, from_attributes=True)

        replaced: set[str] = set()
        duplicates: list[str] = []
        for e in payload.entries:
            if e.entry_id in replaced:
                duplicates.append(f"entry {e.entry_id}: duplicate entry_id in batch")
            replaced.add(e.entry_id)
        if duplicates:
            raise InvalidEntryError(f"{len(duplicates)} duplicate entries in batch", duplicates)

        entries: dict[str, list[EntryIn]] = {}
        for employee in stored:
            entries[employee.employee_id] = [
                e for e in employee.entries if e.entry_id not in replaced
            ]

        unknown: list[str] = []
        for e in payload.entries:
            if e.employee_id not in employees:
                unknown.append(f"entry {e.entry_id}: unknown employee {e.employee_id}")
                continue
            if e.job_id not in jobs:
                unknown.append(f"entry {e.entry_id}: unknown job {e.job_id}")
                continue
            entries.setdefault(e.employee_id, []).append(EntryIn(
                entry_id=e.entry_id,
                employee_id=e.employee_id,
                job=jobs[e.job_id],
                day_id=e.day_id,
                time_in_seconds=e.time_in_seconds,
                time_out_seconds=e.time_out_seconds,
                lunch_seconds=e.lunch_seconds,
                is_approved=e.is_approved,
            ))
        if unknown:
            raise InvalidEntryError(f"{len(unknown)} entries reference unknown records", unknown)

        return [
            EmployeeIn(employee=ref, entries=entries.get(employee_id, []))
            for employee_id, ref in employees.items()
        ]

    def import_batch(self, timesheet_id: str, payload: TimesheetImport) -> ImportResponse:
        self._ensure_timesheet(timesheet_id)
        ensure_valid(self._merged_graph(timesheet_id, payload))

        roster = self._uow.roster
        for e in payload.employees:
            roster.upsert_employee(Employee(timesheet_id=timesheet_id, **e.model_dump()))
        for j in payload.jobs:
            roster.upsert_job(Job(timesheet_id=timesheet_id, **j.model_dump()))
        roster.replace_entries(
            timesheet_id,
            [Entry(timesheet_id=timesheet_id, **e.model_dump()) for e in payload.entries],
        )
        self._uow.commit()
        logger.info(
            "Imported %d employee(s), %d job(s), %d entr(ies) into timesheet %s",
            len(payload.employees), len(payload.jobs), len(payload.entries), timesheet_id,
        )
        return ImportResponse(
            timesheet_id=timesheet_id,
            employees=len(payload.employees),
            jobs=len(payload.jobs),
            entries=len(payload.entries),
        )
