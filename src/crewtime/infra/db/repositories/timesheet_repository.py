"""Repository for Timesheet records. No business logic; caller owns the transaction."""
from __future__ import annotations
from sqlalchemy import func
from sqlmodel import Session, col, select
from crewtime.models.core import Timesheet


class TimesheetRepository:
    def __init__(self, session: Session) -> None:
        self._s = session

    def get_by_id(self, timesheet_id: str) -> Timesheet | None:
        return self._s.get(Timesheet, timesheet_id)

    def list_all(self, limit: int = 100, offset: int = 0) -> list[Timesheet]:
        stmt = (
            select(Timesheet)
            .order_by(col(Timesheet.timesheet_id).desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self._s.exec(stmt).all())

    def latest(self, n: int) -> list[Timesheet]:
        """Most recent ``n`` timesheets, newest first (ids are ISO dates)."""
        return self.list_all(limit=n)

    def count(self) -> int:
        return self._s.exec(select(func.count()).select_from(Timesheet)).one()

    def create(self, timesheet_id: str) -> Timesheet:
        timesheet = Timesheet(timesheet_id=timesheet_id)
        self._s.add(timesheet)
        self._s.flush()
        return timesheet
