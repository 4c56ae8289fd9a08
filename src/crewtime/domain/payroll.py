"""Overtime allocation for one timesheet week.

Pure domain code: no ORM, no HTTP, no clock reads. Inputs are Pydantic models
(validated at the edges); the per-(employee, job) accumulators are plain
dataclasses mutated in place across the three allocation passes.

Passes, run per employee in this order:

1. Base pass: every approved entry lands in its (employee, job) record.
   Weekend work on STATE or FEDERAL jobs goes straight to overtime.
2. Daily pass: on weekdays, regular seconds above the daily threshold
   (summed over all of the employee's jobs) move to overtime, taken from
   STATE-job entries only, latest clock-out first.
3. Weekly pass: regular seconds above the weekly threshold move to overtime,
   taken from PRIVATE and FEDERAL weekday entries, latest clock-out first.

Passes only move seconds between the buckets of existing records, so the
employee's total seconds per day are conserved.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
WEEKDAY_IDS = (1, 2, 3, 4, 5)
WEEKEND_IDS = (0, 6)


class JobType(str, Enum):
    PRIVATE = "PRIVATE"
    STATE = "STATE"
    FEDERAL = "FEDERAL"


def is_weekend(day_id: int) -> bool:
    return day_id in WEEKEND_IDS


def is_state_or_federal(job_type: JobType) -> bool:
    return job_type in (JobType.STATE, JobType.FEDERAL)


def is_private_or_federal(job_type: JobType) -> bool:
    return job_type in (JobType.PRIVATE, JobType.FEDERAL)


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class JobRef(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    job_id: str
    job_type: JobType
    name: str = ""
    old_job_id: int = 0
    is_active: bool = True
    budget_original_cents: int | None = None
    budget_current_cents: int | None = None
    original_labor_seconds: int | None = None
    current_labor_seconds: int | None = None


class EmployeeRef(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)

    employee_id: str
    display_id: str = ""
    name: str = ""
    fringe_code: str = ""
    rate_private_cents_per_hour: int = 0
    rate_davis_bacon_cents_per_hour: int = 0
    rate_davis_bacon_overtime_cents_per_hour: int = 0


class EntryIn(BaseModel):
    """One clock-in/clock-out record, already joined with its job."""

    model_config = ConfigDict(frozen=True)

    entry_id: str = ""
    employee_id: str
    job: JobRef
    day_id: int
    time_in_seconds: int = 0
    time_out_seconds: int = 0
    lunch_seconds: int = 0
    is_approved: bool = False

    @property
    def job_id(self) -> str:
        return self.job.job_id

    @property
    def worked_seconds(self) -> int:
        return self.time_out_seconds - self.time_in_seconds - self.lunch_seconds


class EmployeeIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee: EmployeeRef
    entries: list[EntryIn] = []

    @property
    def employee_id(self) -> str:
        return self.employee.employee_id


@dataclass(frozen=True, slots=True)
class OvertimePolicy:
    daily_threshold_seconds: int = 28800
    weekly_threshold_seconds: int = 144000


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


def _empty_week() -> list[int]:
    return [0] * DAYS_PER_WEEK


@dataclass(slots=True)
class PayrollRecord:
    employee: EmployeeRef
    job: JobRef
    day_seconds: list[int] = field(default_factory=_empty_week)
    day_overtime_seconds: list[int] = field(default_factory=_empty_week)

    @property
    def regular_seconds(self) -> int:
        return sum(self.day_seconds)

    @property
    def overtime_seconds(self) -> int:
        return sum(self.day_overtime_seconds)

    @property
    def total_seconds(self) -> int:
        return self.regular_seconds + self.overtime_seconds

    def move_to_overtime(self, day_id: int, seconds: int) -> None:
        self.day_seconds[day_id] -= seconds
        self.day_overtime_seconds[day_id] += seconds


class _EmployeeLedger:
    """Records for one employee: a list in first-seen order plus a job_id index."""

    def __init__(self, employee: EmployeeRef) -> None:
        self._employee = employee
        self.records: list[PayrollRecord] = []
        self._index: dict[str, int] = {}

    def record_for(self, job: JobRef) -> PayrollRecord:
        i = self._index.get(job.job_id)
        if i is None:
            i = len(self.records)
            self._index[job.job_id] = i
            self.records.append(PayrollRecord(employee=self._employee, job=job))
        return self.records[i]

    def get(self, job_id: str) -> PayrollRecord | None:
        i = self._index.get(job_id)
        return None if i is None else self.records[i]

    def regular_seconds_on(self, day_id: int) -> int:
        return sum(r.day_seconds[day_id] for r in self.records)

    def regular_seconds(self) -> int:
        return sum(r.regular_seconds for r in self.records)


# ---------------------------------------------------------------------------
# Allocation
# ---------------------------------------------------------------------------


def latest_first(entries: list[EntryIn]) -> list[EntryIn]:
    """Order entries by clock-out descending, then day descending."""
    return sorted(entries, key=lambda e: (-e.time_out_seconds, -e.day_id))


def _base_pass(ledger: _EmployeeLedger, approved: list[EntryIn]) -> None:
    for entry in approved:
        record = ledger.record_for(entry.job)
        # TODO: federal holidays should be classified like weekends.
        if is_weekend(entry.day_id) and is_state_or_federal(entry.job.job_type):
            record.day_overtime_seconds[entry.day_id] += entry.worked_seconds
        else:
            record.day_seconds[entry.day_id] += entry.worked_seconds


def _consume(
    ledger: _EmployeeLedger, candidates: list[EntryIn], seconds: int, threshold: int,
) -> int:
    """Greedily move regular seconds above ``threshold`` to overtime.

    Returns the regular total left after the walk.
    """
    for entry in candidates:
        if seconds <= threshold:
            break
        record = ledger.get(entry.job_id)
        if record is None:
            continue
        moved = min(seconds - threshold, record.day_seconds[entry.day_id])
        record.move_to_overtime(entry.day_id, moved)
        seconds -= moved
    return seconds


def _daily_pass(
    ledger: _EmployeeLedger, ordered: list[EntryIn], policy: OvertimePolicy,
) -> None:
    for day_id in WEEKDAY_IDS:
        candidates = [
            e for e in ordered if e.day_id == day_id and e.job.job_type is JobType.STATE
        ]
        _consume(
            ledger, candidates, ledger.regular_seconds_on(day_id),
            policy.daily_threshold_seconds,
        )


def _weekly_pass(
    ledger: _EmployeeLedger, ordered: list[EntryIn], policy: OvertimePolicy,
) -> None:
    candidates = [
        e for e in ordered
        if not is_weekend(e.day_id) and is_private_or_federal(e.job.job_type)
    ]
    _consume(
        ledger, candidates, ledger.regular_seconds(), policy.weekly_threshold_seconds,
    )


def allocate_employee(
    employee: EmployeeIn, policy: OvertimePolicy = OvertimePolicy(),
) -> list[PayrollRecord]:
    """Run the three passes for a single employee."""
    ledger = _EmployeeLedger(employee.employee)
    approved = [e for e in employee.entries if e.is_approved]

    _base_pass(ledger, approved)
    ordered = latest_first(approved)
    _daily_pass(ledger, ordered, policy)
    _weekly_pass(ledger, ordered, policy)

    return ledger.records


def compute_payroll_records(
    employees: list[EmployeeIn], policy: OvertimePolicy = OvertimePolicy(),
) -> list[PayrollRecord]:
    """Allocate every employee's approved time into regular/overtime buckets.

    Returns one record per (employee, job) pair with at least one approved
    entry, employees in input order and jobs in first-seen order.
    """
    out: list[PayrollRecord] = []
    for employee in employees:
        out.extend(allocate_employee(employee, policy))
    logger.debug(
        "Allocated %d record(s) for %d employee(s)", len(out), len(employees),
    )
    return out
