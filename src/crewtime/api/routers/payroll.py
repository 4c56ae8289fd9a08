"""Payroll records and report endpoints."""
from typing import Literal
from fastapi import APIRouter, Depends
from fastapi.responses import Response
from crewtime.api.deps import get_uow
from crewtime.api.schemas.payroll import PayrollRecordList
from crewtime.api.schemas.reports import ByEmployeeReport, ByJobReport, EpiExport
from crewtime.infra.db.uow import UnitOfWork
from crewtime.services.payroll_service import PayrollService, ReportKind

router = APIRouter(prefix="/timesheets/{timesheet_id}", tags=["payroll"])

ReportFormat = Literal["json", "csv"]


def _csv(timesheet_id: str, kind: ReportKind, uow: UnitOfWork) -> Response:
    body = PayrollService(uow).export_csv(timesheet_id, kind)
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{kind.value}-{timesheet_id}.csv"'},
    )


@router.get("/payroll-records", response_model=PayrollRecordList)
def get_payroll_records(
    timesheet_id: str, uow: UnitOfWork = Depends(get_uow),
) -> PayrollRecordList:
    return PayrollService(uow).get_records(timesheet_id)


@router.get("/reports/by-job", response_model=ByJobReport)
def get_by_job_report(
    timesheet_id: str, format: ReportFormat = "json", uow: UnitOfWork = Depends(get_uow),
):
    if format == "csv":
        return _csv(timesheet_id, ReportKind.BY_JOB, uow)
    return PayrollService(uow).by_job(timesheet_id)


@router.get("/reports/by-employee", response_model=ByEmployeeReport)
def get_by_employee_report(
    timesheet_id: str, format: ReportFormat = "json", uow: UnitOfWork = Depends(get_uow),
):
    if format == "csv":
        return _csv(timesheet_id, ReportKind.BY_EMPLOYEE, uow)
    return PayrollService(uow).by_employee(timesheet_id)


@router.get("/reports/epi", response_model=EpiExport)
def get_epi_export(
    timesheet_id: str, format: ReportFormat = "json", uow: UnitOfWork = Depends(get_uow),
):
    if format == "csv":
        return _csv(timesheet_id, ReportKind.EPI, uow)
    return PayrollService(uow).epi(timesheet_id)
