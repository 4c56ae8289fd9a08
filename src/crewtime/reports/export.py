"""Flatten report DTOs into DataFrames for CSV download."""
from __future__ import annotations
import pandas as pd
from crewtime.api.schemas.reports import ByEmployeeReport, ByJobReport, EpiExport
from crewtime.domain.calendar import DAY_KEYS

Report = ByJobReport | ByEmployeeReport | EpiExport


def _by_job_frame(report: ByJobReport) -> pd.DataFrame:
    records: list[dict] = []
    for job in report.jobs:
        for row in job.rows:
            records.append({
                "Job": job.job_name,
                "ID": row.display_id,
                "Employee Name": row.employee_name,
                "Rate": row.rate,
                **dict(zip(DAY_KEYS, row.day_hours)),
                "Hours": row.hours,
                "Paid Out": row.paid_out,
            })
        records.append({
            "Job": job.job_name,
            "Employee Name": "Total",
            "Hours": job.total_hours,
            "Paid Out": job.total_paid_out,
            "Original Budget": job.budget_original,
            "Remaining Budget": job.budget_remaining,
            "Original Man Hours": job.labor_hours_original,
            "Remaining Man Hours": job.labor_hours_remaining,
        })
    columns = [
        "Job", "ID", "Employee Name", "Rate", *DAY_KEYS, "Hours", "Paid Out",
        "Original Budget", "Remaining Budget", "Original Man Hours", "Remaining Man Hours",
    ]
    return pd.DataFrame.from_records(records, columns=columns)


def _by_employee_frame(report: ByEmployeeReport) -> pd.DataFrame:
    records: list[dict] = []
    for employee in report.employees:
        for row in employee.rows:
            records.append({
                "Job": row.job_name,
                "ID": row.display_id,
                "Employee Name": row.employee_name,
                "Rate": row.rate,
                **dict(zip(DAY_KEYS, row.day_hours)),
                "Hours": row.hours,
                "Paid Out": row.paid_out,
            })
        records.append({
            "Job": "Total",
            "ID": employee.display_id,
            "Employee Name": employee.employee_name,
            "Hours": employee.total_hours,
            "Paid Out": employee.total_paid_out,
        })
    columns = ["Job", "ID", "Employee Name", "Rate", *DAY_KEYS, "Hours", "Paid Out"]
    return pd.DataFrame.from_records(records, columns=columns)


def _epi_frame(report: EpiExport) -> pd.DataFrame:
    records = [
        {
            "Co Code": row.co_code,
            "Batch ID": row.batch_id,
            "File #": row.file_number,
            "Temp Cost Number": row.temp_cost_number,
            "Temp Rate": row.temp_rate,
            "Reg Hours": row.reg_hours,
            "O/T Hours": row.ot_hours,
        }
        for row in report.rows
    ]
    columns = [
        "Co Code", "Batch ID", "File #", "Temp Cost Number", "Temp Rate", "Reg Hours", "O/T Hours",
    ]
    frame = pd.DataFrame.from_records(records, columns=columns)
    return frame.astype({"File #": "Int64"})


def report_to_frame(report: Report) -> pd.DataFrame:
    if isinstance(report, ByJobReport):
        return _by_job_frame(report)
    if isinstance(report, ByEmployeeReport):
        return _by_employee_frame(report)
    if isinstance(report, EpiExport):
        return _epi_frame(report)
    raise TypeError(f"Unsupported report type: {type(report).__name__}")


def report_to_csv(report: Report) -> str:
    return report_to_frame(report).to_csv(index=False)
