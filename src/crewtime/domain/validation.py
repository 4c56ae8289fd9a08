"""Well-formedness checks for time entries.

The allocator trusts its input. Edges (import API, CLI) call
``ensure_valid`` before any entry reaches persistence or allocation.
"""
from __future__ import annotations
from collections import defaultdict
from dataclasses import dataclass
from crewtime.domain.exceptions import InvalidEntryError
from crewtime.domain.payroll import DAYS_PER_WEEK, EmployeeIn, EntryIn


@dataclass(frozen=True, slots=True)
class EntryViolation:
    employee_id: str
    entry_id: str
    reason: str

    def __str__(self) -> str:
        return f"{self.employee_id}/{self.entry_id or '?'}: {self.reason}"


def _is_unclocked(entry: EntryIn) -> bool:
    return entry.time_in_seconds == 0 and entry.time_out_seconds == 0


def _check_entry(entry: EntryIn) -> list[str]:
    reasons: list[str] = []
    if not 0 <= entry.day_id < DAYS_PER_WEEK:
        reasons.append(f"day_id {entry.day_id} is outside 0..6")
    if entry.lunch_seconds < 0:
        reasons.append("lunch_seconds is negative")
    if entry.worked_seconds < 0:
        reasons.append(
            f"worked seconds are negative (in={entry.time_in_seconds}, "
            f"out={entry.time_out_seconds}, lunch={entry.lunch_seconds})"
        )
    return reasons


def _overlaps(employee_id: str, entries: list[EntryIn]) -> list[EntryViolation]:
    by_slot: dict[tuple[int, str], list[EntryIn]] = defaultdict(list)
    for e in entries:
        if not _is_unclocked(e):
            by_slot[(e.day_id, e.job_id)].append(e)

    found: list[EntryViolation] = []
    for (day_id, job_id), day_entries in sorted(by_slot.items()):
        day_entries.sort(key=lambda e: (e.time_in_seconds, e.time_out_seconds))
        for prev, cur in zip(day_entries, day_entries[1:]):
            if cur.time_in_seconds < prev.time_out_seconds:
                found.append(EntryViolation(
                    employee_id, cur.entry_id,
                    f"overlaps entry {prev.entry_id or '?'} on job {job_id} day {day_id}",
                ))
    return found


def validate_entries(employees: list[EmployeeIn]) -> list[EntryViolation]:
    violations: list[EntryViolation] = []
    for employee in employees:
        for entry in employee.entries:
            if entry.employee_id != employee.employee_id:
                violations.append(EntryViolation(
                    employee.employee_id, entry.entry_id,
                    f"entry belongs to employee {entry.employee_id}",
                ))
            for reason in _check_entry(entry):
                violations.append(EntryViolation(employee.employee_id, entry.entry_id, reason))
        violations.extend(_overlaps(employee.employee_id, employee.entries))
    return violations


def ensure_valid(employees: list[EmployeeIn]) -> None:
    violations = validate_entries(employees)
    if violations:
        raise InvalidEntryError(
            f"{len(violations)} invalid time entr{'y' if len(violations) == 1 else 'ies'}",
            [str(v) for v in violations],
        )
