"""CLI commands driven through typer's CliRunner."""
import json

import pytest
from typer.testing import CliRunner

from crewtime.cli import app

runner = CliRunner()
HOUR = 3600


def _batch_file(tmp_path, entries):
    payload = [{
        "employee": {"employee_id": "E1", "name": "Alice Kahale"},
        "entries": entries,
    }]
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _entry(entry_id, day_id, start, end, job_type="STATE", approved=True):
    return {
        "entry_id": entry_id,
        "employee_id": "E1",
        "job": {"job_id": "J1", "job_type": job_type, "name": "Harbor"},
        "day_id": day_id,
        "time_in_seconds": start * HOUR,
        "time_out_seconds": end * HOUR,
        "is_approved": approved,
    }


def test_allocate_json(tmp_path):
    path = _batch_file(tmp_path, [_entry("a", 1, 7, 16), _entry("b", 2, 7, 15)])

    result = runner.invoke(app, ["allocate", str(path), "--json"])

    assert result.exit_code == 0, result.output
    [record] = json.loads(result.output)
    assert record["employee_id"] == "E1"
    assert record["day_seconds"] == [0, 8 * HOUR, 8 * HOUR, 0, 0, 0, 0]
    assert record["day_overtime_seconds"] == [0, HOUR, 0, 0, 0, 0, 0]


def test_allocate_table(tmp_path):
    path = _batch_file(tmp_path, [_entry("a", 1, 7, 16)])

    result = runner.invoke(app, ["allocate", str(path)])

    assert result.exit_code == 0, result.output
    assert "Alice Kahale @ Harbor (STATE)" in result.output
    assert "= 8.00" in result.output
    assert "= 1.00" in result.output


def test_allocate_nothing_approved(tmp_path):
    path = _batch_file(tmp_path, [_entry("a", 1, 7, 16, approved=False)])
    result = runner.invoke(app, ["allocate", str(path)])
    assert result.exit_code == 0
    assert "No approved time." in result.output


def test_allocate_rejects_invalid_entries(tmp_path):
    path = _batch_file(tmp_path, [_entry("a", 1, 7, 12), _entry("b", 1, 11, 16)])

    result = runner.invoke(app, ["allocate", str(path)])

    assert result.exit_code == 1
    assert "1 invalid time entry" in result.output
    assert "overlaps entry a" in result.output


def test_allocate_rejects_malformed_json(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text('[{"employee": {}}]', encoding="utf-8")
    result = runner.invoke(app, ["allocate", str(path)])
    assert result.exit_code == 1
    assert "Invalid input" in result.output


def test_doctor_passes_with_key_and_data_dir(tmp_path, monkeypatch, api_key):
    from crewtime.config import settings

    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 0, result.output
    assert "all good" in result.output


def test_doctor_fails_without_api_key(tmp_path, monkeypatch):
    from crewtime.config import settings

    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    monkeypatch.setattr(settings, "API_KEY", None)
    result = runner.invoke(app, ["doctor"])
    assert result.exit_code == 1
    assert "API_KEY is not set" in result.output


@pytest.fixture
def stored_week(use_test_engine):
    from crewtime.domain.payroll import JobType
    from crewtime.infra.db.uow import UnitOfWork
    from crewtime.models.core import Employee, Entry, Job

    with UnitOfWork() as uow:
        uow.timesheets.create("2024-01-13")
        uow.roster.upsert_employee(Employee(
            timesheet_id="2024-01-13", employee_id="E1", display_id="101", name="Alice Kahale",
            rate_private_cents_per_hour=2000,
        ))
        uow.roster.upsert_job(Job(
            timesheet_id="2024-01-13", job_id="J1", name="Attic", job_type=JobType.PRIVATE, old_job_id=7,
        ))
        uow.roster.replace_entries("2024-01-13", [Entry(
            timesheet_id="2024-01-13", entry_id="a", employee_id="E1", job_id="J1", day_id=1,
            time_in_seconds=7 * HOUR, time_out_seconds=15 * HOUR, is_approved=True,
        )])
    return "2024-01-13"


def test_export_to_stdout(stored_week):
    result = runner.invoke(app, ["export", stored_week, "--report", "by-employee"])
    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    assert lines[0].startswith("Job,ID,Employee Name,Rate")
    assert lines[1].startswith("Attic,101,Alice Kahale,20.0")


def test_export_to_file(stored_week, tmp_path):
    out = tmp_path / "epi.csv"
    result = runner.invoke(app, ["export", stored_week, "--report", "epi", "--out", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8").splitlines()[1] == "1SI,11324,101,7-01-RFR-N,20.0,8.0,"


def test_export_unknown_report(stored_week):
    result = runner.invoke(app, ["export", stored_week, "--report", "weekly"])
    assert result.exit_code == 1


def test_export_unknown_timesheet(use_test_engine):
    result = runner.invoke(app, ["export", "1999-01-02"])
    assert result.exit_code == 1
    assert "not found" in result.output


def test_budgets_update_needs_two_timesheets(stored_week):
    result = runner.invoke(app, ["budgets", "update"])
    assert result.exit_code == 1
    assert "previous timesheet" in result.output
