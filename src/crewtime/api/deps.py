"""FastAPI dependencies."""
from __future__ import annotations
from typing import Generator
from fastapi import Header
from crewtime.infra.db.uow import UnitOfWork
from crewtime.services.budget_service import check_api_key


def get_uow() -> Generator[UnitOfWork, None, None]:
    """Yield one UnitOfWork per request; commit/rollback in __exit__."""
    with UnitOfWork() as uow:
        yield uow


def require_api_key(x_api_key: str | None = Header(default=None)) -> None:
    check_api_key(x_api_key)
