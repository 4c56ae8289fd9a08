import json
import os
import sys
from pathlib import Path
import typer
from pydantic import TypeAdapter, ValidationError
from crewtime.config import settings
from crewtime.domain.exceptions import CrewtimeError, InvalidEntryError
from crewtime.domain.payroll import EmployeeIn, compute_payroll_records
from crewtime.domain.units import seconds_to_hour_string
from crewtime.domain.validation import ensure_valid
from crewtime.logging import logger, get_run_id

app = typer.Typer(no_args_is_help=True)

_EMPLOYEES = TypeAdapter(list[EmployeeIn])


@app.callback()
def main():
    """
    Crewtime payroll CLI.
    """
    pass


@app.command(name="doctor")
def doctor():
    """
    Check configuration and environment health.
    """
    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🩺 Crewtime Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python: {sys.version.split()[0]}")
    print(f"  Run ID: {get_run_id()}")
    passed += 1

    # ── Check 2: Overtime policy and time zone ──────────────────────────────
    print("\n[Payroll policy]")
    print(f"  TIMEZONE:                           {settings.TIMEZONE}")
    print(f"  DAILY_OVERTIME_THRESHOLD_SECONDS:   {settings.DAILY_OVERTIME_THRESHOLD_SECONDS}")
    print(f"  WEEKLY_OVERTIME_THRESHOLD_SECONDS:  {settings.WEEKLY_OVERTIME_THRESHOLD_SECONDS}")
    print(f"  PRIVATE_OVERTIME_MULTIPLIER:        {settings.PRIVATE_OVERTIME_MULTIPLIER}")
    try:
        from zoneinfo import ZoneInfo
        ZoneInfo(settings.TIMEZONE)
        passed += 1
    except (KeyError, ValueError):
        failures.append(f"TIMEZONE {settings.TIMEZONE!r} is not a known IANA zone")

    # ── Check 3: API key for budget reconciliation ──────────────────────────
    if settings.API_KEY and settings.API_KEY.get_secret_value():
        print("  API_KEY:                            ✅ Set")
        passed += 1
    else:
        print("  API_KEY:                            ❌ Missing")
        failures.append("API_KEY is not set; POST /budgets/update will refuse every call")

    # ── Check 4: Data directory writability ─────────────────────────────────
    print("\n[Database]")
    data_dir = settings.data_dir
    if data_dir.exists() and os.access(data_dir, os.W_OK):
        print(f"  {settings.db_path}  ✅ Directory writable")
        passed += 1
    else:
        print(f"  {settings.db_path}  ❌ {data_dir.absolute()} missing or not writable")
        failures.append(f"{data_dir.absolute()} must exist and be writable")

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    print(f"Result: {passed}/{total} checks passed, all good ✅")
    print()


@app.command("allocate")
def allocate(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of employees with entries"),
    as_json: bool = typer.Option(False, "--json", help="Print records as JSON"),
):
    """Split a batch of time entries into regular and overtime hours."""
    from crewtime.services.payroll_service import overtime_policy

    try:
        employees = _EMPLOYEES.validate_json(path.read_bytes())
    except ValidationError as e:
        print(f"❌ Invalid input: {e.error_count()} error(s)")
        print(e)
        raise typer.Exit(code=1)

    try:
        ensure_valid(employees)
    except InvalidEntryError as e:
        print(f"❌ {e.message}")
        for v in e.violations:
            print(f"  - {v}")
        raise typer.Exit(code=1)

    records = compute_payroll_records(employees, overtime_policy())

    if as_json:
        print(json.dumps([
            {
                "employee_id": r.employee.employee_id,
                "job_id": r.job.job_id,
                "day_seconds": r.day_seconds,
                "day_overtime_seconds": r.day_overtime_seconds,
            }
            for r in records
        ], indent=2))
        return

    if not records:
        print("No approved time.")
        return
    for r in records:
        label = f"{r.employee.name or r.employee.employee_id} @ {r.job.name or r.job.job_id}"
        print(f"{label} ({r.job.job_type.value})")
        print("  REG " + " ".join(f"{seconds_to_hour_string(s):>6}" for s in r.day_seconds)
              + f"  = {seconds_to_hour_string(r.regular_seconds)}")
        print("  OT  " + " ".join(f"{seconds_to_hour_string(s):>6}" for s in r.day_overtime_seconds)
              + f"  = {seconds_to_hour_string(r.overtime_seconds)}")


@app.command("export")
def export(
    timesheet_id: str,
    report: str = typer.Option("by-job", help="by-job, by-employee or epi"),
    out: Path | None = typer.Option(None, help="Write CSV here instead of stdout"),
):
    """Export a timesheet report as CSV."""
    from crewtime.infra.db.uow import UnitOfWork
    from crewtime.services.payroll_service import PayrollService, ReportKind

    try:
        kind = ReportKind(report)
    except ValueError:
        print(f"❌ Unknown report {report!r}; choose by-job, by-employee or epi")
        raise typer.Exit(code=1)

    try:
        with UnitOfWork() as uow:
            body = PayrollService(uow).export_csv(timesheet_id, kind)
    except CrewtimeError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)

    if out is None:
        print(body, end="")
    else:
        out.write_text(body, encoding="utf-8")
        print(f"✅ Wrote {kind.value} report to {out}")


db_app = typer.Typer(help="Database management commands.")
app.add_typer(db_app, name="db")


@db_app.command("init")
def init():
    """Initialize the database tables."""
    from crewtime.db import init_db
    try:
        init_db()
        logger.info("Database initialized successfully.")
        print("✅ Database initialized.")
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        print(f"❌ Failed: {e}")
        raise typer.Exit(code=1)


budgets_app = typer.Typer(help="Job budget reconciliation.")
app.add_typer(budgets_app, name="budgets")


@budgets_app.command("update")
def budgets_update():
    """Subtract last week's labor from every job's budget counters."""
    from crewtime.infra.db.uow import UnitOfWork
    from crewtime.services.budget_service import BudgetService

    try:
        with UnitOfWork() as uow:
            result = BudgetService(uow).update_budgets()
    except CrewtimeError as e:
        print(f"❌ {e.message}")
        raise typer.Exit(code=1)

    print(
        f"✅ Reconciled {len(result.jobs)} job(s): "
        f"{result.previous_timesheet_id} → {result.current_timesheet_id}"
    )


if __name__ == "__main__":
    app()
