"""Carry job budgets and labor-hour counters forward between timesheets."""
from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from crewtime.domain.pay import PRIVATE_OVERTIME_MULTIPLIER, ZERO, PayTotal, record_total
from crewtime.domain.payroll import JobRef, PayrollRecord


@dataclass(frozen=True, slots=True)
class BudgetUpdate:
    job_id: str
    budget_current_cents: int | None
    current_labor_seconds: int | None


def job_totals(
    records: list[PayrollRecord], private_multiplier: Decimal = PRIVATE_OVERTIME_MULTIPLIER,
) -> dict[str, PayTotal]:
    """Regular plus overtime seconds and cents per job, over all employees."""
    totals: dict[str, PayTotal] = {}
    for record in records:
        job_id = record.job.job_id
        totals[job_id] = totals.get(job_id, ZERO) + record_total(record, private_multiplier)
    return totals


def reconcile_budget(previous: JobRef, total: PayTotal) -> BudgetUpdate:
    """Subtract one week's spend from the previous week's counters.

    Untracked counters (``None``) stay untracked.
    """
    return BudgetUpdate(
        job_id=previous.job_id,
        budget_current_cents=(
            None if previous.budget_current_cents is None
            else previous.budget_current_cents - total.cents
        ),
        current_labor_seconds=(
            None if previous.current_labor_seconds is None
            else previous.current_labor_seconds - total.seconds
        ),
    )
