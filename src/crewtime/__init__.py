"""Timesheet payroll: overtime allocation, pay, budgets and payroll exports."""

__version__ = "0.3.0"
