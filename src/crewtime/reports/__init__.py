"""Tabular payroll reports built on top of the overtime allocator."""
from crewtime.reports.by_employee import build_by_employee_report
from crewtime.reports.by_job import build_by_job_report
from crewtime.reports.epi import build_epi_export
from crewtime.reports.export import report_to_csv, report_to_frame

__all__ = [
    "build_by_employee_report",
    "build_by_job_report",
    "build_epi_export",
    "report_to_csv",
    "report_to_frame",
]
