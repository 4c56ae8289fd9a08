"""Budget reconciliation use-case service.

Subtracts the previous week's allocated labor (hours and cents) from each
job's running counters and stores the result on the current week's job.
"""
from __future__ import annotations
import logging
import secrets
from crewtime.config import settings
from crewtime.domain.budget import job_totals, reconcile_budget
from crewtime.domain.exceptions import ConflictError, ForbiddenError, NotFoundError
from crewtime.domain.payroll import JobRef, compute_payroll_records
from crewtime.infra.db.uow import UnitOfWork
from crewtime.api.schemas.budgets import BudgetUpdateResponse, JobBudgetRead
from crewtime.services.payroll_service import load_employees, overtime_policy

logger = logging.getLogger(__name__)


def check_api_key(presented: str | None) -> None:
    expected = settings.API_KEY.get_secret_value() if settings.API_KEY else ""
    if not expected or presented is None:
        raise ForbiddenError("Forbidden")
    if not secrets.compare_digest(presented.encode(), expected.encode()):
        raise ForbiddenError("Forbidden")


class BudgetService:
    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def update_budgets(self) -> BudgetUpdateResponse:
        latest = self._uow.timesheets.latest(2)
        if len(latest) < 2:
            raise ConflictError("Budget update needs a current and a previous timesheet")
        current, previous = latest

        roster = self._uow.roster
        records = compute_payroll_records(
            load_employees(roster, previous.timesheet_id), overtime_policy(),
        )
        totals = job_totals(records, settings.PRIVATE_OVERTIME_MULTIPLIER)

        results: list[JobBudgetRead] = []
        for job_id, total in totals.items():
            previous_job = roster.get_job(previous.timesheet_id, job_id)
            current_job = roster.get_job(current.timesheet_id, job_id)
            if previous_job is None or current_job is None:
                raise NotFoundError(
                    f"Job {job_id} missing from timesheet "
                    f"{previous.timesheet_id if previous_job is None else current.timesheet_id}"
                )
            update = reconcile_budget(JobRef.model_validate(previous_job), total)
            # Untracked counters are left as they are on the current job.
            if update.budget_current_cents is not None:
                current_job.budget_current_cents = update.budget_current_cents
            if update.current_labor_seconds is not None:
                current_job.current_labor_seconds = update.current_labor_seconds
            roster.save_job(current_job)
            results.append(JobBudgetRead(
                job_id=job_id,
                spent_cents=total.cents,
                spent_seconds=total.seconds,
                budget_current_cents=current_job.budget_current_cents,
                current_labor_seconds=current_job.current_labor_seconds,
            ))

        self._uow.commit()
        logger.info(
            "Reconciled %d job budget(s) from %s into %s",
            len(results), previous.timesheet_id, current.timesheet_id,
        )
        return BudgetUpdateResponse(
            previous_timesheet_id=previous.timesheet_id,
            current_timesheet_id=current.timesheet_id,
            jobs=results,
        )
