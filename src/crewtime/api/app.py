"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel
from crewtime import __version__
from crewtime.domain.exceptions import (
    ConflictError, ForbiddenError, InvalidEntryError, NotFoundError,
)
from crewtime.logging import logger


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from crewtime.infra.db.engine import engine  # triggers pragmas + mapper registration
        SQLModel.metadata.create_all(engine)
        logger.info("crewtime API ready")
        yield

    app = FastAPI(
        title="Crewtime Payroll API",
        version=__version__,
        lifespan=lifespan,
    )

    # Import routers inside create_app() to avoid circular imports at module load time
    from crewtime.api.routers.timesheets import router as timesheets_router
    from crewtime.api.routers.payroll import router as payroll_router
    from crewtime.api.routers.budgets import router as budgets_router

    app.include_router(timesheets_router)
    app.include_router(payroll_router)
    app.include_router(budgets_router)

    @app.exception_handler(NotFoundError)
    def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(ConflictError)
    def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=409, content={"detail": exc.message})

    @app.exception_handler(ForbiddenError)
    def _forbidden(request: Request, exc: ForbiddenError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": exc.message})

    @app.exception_handler(InvalidEntryError)
    def _invalid_entries(request: Request, exc: InvalidEntryError) -> JSONResponse:
        return JSONResponse(
            status_code=422, content={"detail": exc.message, "violations": exc.violations},
        )

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
