"""SQLite connection setup for the shared crewtime engine.

Every connection runs with WAL journaling and foreign-key enforcement, so an
entry can never point at a timesheet that does not exist.
"""
from sqlalchemy import event
from sqlalchemy.engine import Engine
from crewtime.db import engine
import crewtime.models  # noqa: F401  Timesheet/Employee/Job/Entry mappers

SQLITE_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
    "foreign_keys=ON",
)


def _apply_pragmas(dbapi_conn, _):
    cur = dbapi_conn.cursor()
    for pragma in SQLITE_PRAGMAS:
        cur.execute(f"PRAGMA {pragma}")
    cur.close()


def configure_sqlite(target: Engine) -> Engine:
    """Register the crewtime pragmas on ``target``; returns it for chaining."""
    event.listen(target, "connect", _apply_pragmas)
    return target


configure_sqlite(engine)

__all__ = ["engine", "configure_sqlite"]
