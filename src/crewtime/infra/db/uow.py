"""Unit of Work: one session per logical operation, with repositories bound to it."""
from __future__ import annotations
import logging
from sqlmodel import Session
from crewtime.infra.db.engine import engine
from crewtime.infra.db.repositories.roster_repository import RosterRepository
from crewtime.infra.db.repositories.timesheet_repository import TimesheetRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Context manager wrapping a single DB session.

    Commits on clean exit, rolls back on exception, always closes.
    """

    def __init__(self) -> None:
        self._session: Session | None = None

    def __enter__(self) -> "UnitOfWork":
        self._session = Session(engine)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._session.commit()
            else:
                logger.debug("Rolling back unit of work after %s", exc_type.__name__)
                self._session.rollback()
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use it as a context manager.")
        return self._session

    @property
    def timesheets(self) -> TimesheetRepository:
        return TimesheetRepository(self.session)

    @property
    def roster(self) -> RosterRepository:
        return RosterRepository(self.session)

    def commit(self) -> None:
        """Explicit mid-operation commit."""
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()
