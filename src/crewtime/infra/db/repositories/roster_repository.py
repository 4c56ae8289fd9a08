"""Repository for the employees, jobs and time entries of a timesheet."""
from __future__ import annotations
from sqlmodel import Session, col, select
from crewtime.models.core import Employee, Entry, Job


class RosterRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    # --- Employee ---

    def list_employees(self, timesheet_id: str) -> list[Employee]:
        return list(self._s.exec(
            select(Employee)
            .where(Employee.timesheet_id == timesheet_id)
            .order_by(col(Employee.name), col(Employee.employee_id))
        ).all())

    def upsert_employee(self, employee: Employee) -> Employee:
        return self._s.merge(employee)

    # --- Job ---

    def list_jobs(self, timesheet_id: str) -> list[Job]:
        return list(self._s.exec(
            select(Job).where(Job.timesheet_id == timesheet_id)
        ).all())

    def get_job(self, timesheet_id: str, job_id: str) -> Job | None:
        return self._s.get(Job, (timesheet_id, job_id))

    def upsert_job(self, job: Job) -> Job:
        return self._s.merge(job)

    def save_job(self, job: Job) -> None:
        self._s.add(job)

    # --- Entry ---

    def list_entries(self, timesheet_id: str) -> list[Entry]:
        """Entries in insertion order."""
        return list(self._s.exec(
            select(Entry).where(Entry.timesheet_id == timesheet_id).order_by(col(Entry.seq))
        ).all())

    def replace_entries(self, timesheet_id: str, entries: list[Entry]) -> int:
        """Insert entries, dropping stored rows that share an ``entry_id``."""
        ids = [e.entry_id for e in entries]
        if ids:
            stale = self._s.exec(
                select(Entry).where(
                    Entry.timesheet_id == timesheet_id, col(Entry.entry_id).in_(ids),
                )
            ).all()
            for row in stale:
                self._s.delete(row)
            self._s.flush()
        self._s.add_all(entries)
        self._s.flush()
        return len(entries)
