"""Budget reconciliation endpoint, called by the weekly scheduler."""
from fastapi import APIRouter, Depends
from crewtime.api.deps import get_uow, require_api_key
from crewtime.api.schemas.budgets import BudgetUpdateResponse
from crewtime.infra.db.uow import UnitOfWork
from crewtime.services.budget_service import BudgetService

router = APIRouter(prefix="/budgets", tags=["budgets"])


@router.post(
    "/update",
    response_model=BudgetUpdateResponse,
    dependencies=[Depends(require_api_key)],
)
def update_budgets(uow: UnitOfWork = Depends(get_uow)) -> BudgetUpdateResponse:
    return BudgetService(uow).update_budgets()
