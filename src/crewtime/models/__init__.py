"""ORM table models. Importing this package registers every mapper."""
from crewtime.models.core import Employee, Entry, Job, Timesheet

__all__ = ["Employee", "Entry", "Job", "Timesheet"]
