"""Budget reconciliation DTOs: pure Pydantic, zero ORM imports."""
from __future__ import annotations
from pydantic import BaseModel


class JobBudgetRead(BaseModel):
    job_id: str
    spent_cents: int
    spent_seconds: int
    budget_current_cents: int | None = None
    current_labor_seconds: int | None = None


class BudgetUpdateResponse(BaseModel):
    previous_timesheet_id: str
    current_timesheet_id: str
    jobs: list[JobBudgetRead]
