"""Timesheets router."""
from fastapi import APIRouter, Depends
from crewtime.api.deps import get_uow
from crewtime.api.schemas.timesheets import (
    ImportResponse, TimesheetCreate, TimesheetImport, TimesheetList, TimesheetRead,
)
from crewtime.infra.db.uow import UnitOfWork
from crewtime.services.timesheet_service import TimesheetService

router = APIRouter(prefix="/timesheets", tags=["timesheets"])


@router.post("", response_model=TimesheetRead, status_code=201)
def create_timesheet(payload: TimesheetCreate, uow: UnitOfWork = Depends(get_uow)) -> TimesheetRead:
    return TimesheetService(uow).create_timesheet(payload)


@router.get("", response_model=TimesheetList)
def list_timesheets(
    limit: int = 100,
    offset: int = 0,
    uow: UnitOfWork = Depends(get_uow),
) -> TimesheetList:
    return TimesheetService(uow).list_timesheets(limit=limit, offset=offset)


@router.get("/{timesheet_id}", response_model=TimesheetRead)
def get_timesheet(timesheet_id: str, uow: UnitOfWork = Depends(get_uow)) -> TimesheetRead:
    return TimesheetService(uow).get_timesheet(timesheet_id)


@router.post("/{timesheet_id}/import", response_model=ImportResponse)
def import_batch(
    timesheet_id: str, payload: TimesheetImport, uow: UnitOfWork = Depends(get_uow),
) -> ImportResponse:
    return TimesheetService(uow).import_batch(timesheet_id, payload)
