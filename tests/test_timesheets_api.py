"""Integration tests for the /timesheets endpoints."""
from datetime import date

import pytest

TIMESHEET_ID = "2024-01-13"


def _batch(**overrides):
    batch = {
        "employees": [{
            "employee_id": "E1", "display_id": "101", "name": "Alice Kahale",
            "rate_private_cents_per_hour": 2000,
            "rate_davis_bacon_cents_per_hour": 3000,
            "rate_davis_bacon_overtime_cents_per_hour": 4500,
        }],
        "jobs": [{"job_id": "J1", "name": "Harbor", "job_type": "STATE", "old_job_id": 12}],
        "entries": [{
            "entry_id": "t1", "employee_id": "E1", "job_id": "J1", "day_id": 1,
            "time_in_seconds": 25200, "time_out_seconds": 61200, "is_approved": True,
        }],
    }
    batch.update(overrides)
    return batch


@pytest.fixture
def timesheet(client):
    resp = client.post("/timesheets", json={"timesheet_id": TIMESHEET_ID})
    assert resp.status_code == 201
    return resp.json()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_create_timesheet_returns_201(timesheet):
    assert timesheet["timesheet_id"] == TIMESHEET_ID
    assert timesheet["created_at"] is not None


def test_create_duplicate_timesheet_returns_409(client, timesheet):
    resp = client.post("/timesheets", json={"timesheet_id": TIMESHEET_ID})
    assert resp.status_code == 409


def test_create_timesheet_bad_id_returns_422(client):
    resp = client.post("/timesheets", json={"timesheet_id": "next friday"})
    assert resp.status_code == 422


def test_create_timesheet_rejects_mid_week_date(client):
    resp = client.post("/timesheets", json={"timesheet_id": "2024-01-10"})
    assert resp.status_code == 422
    assert client.get("/timesheets").json()["total"] == 0


def test_create_timesheet_defaults_to_current_week(client):
    from crewtime.config import settings
    from crewtime.domain.calendar import current_timesheet_id

    resp = client.post("/timesheets", json={})
    assert resp.status_code == 201
    created = resp.json()["timesheet_id"]
    # A Saturday, and the one closing this week unless the clock just rolled over.
    assert date.fromisoformat(created).weekday() == 5
    assert created in {current_timesheet_id(tz=settings.TIMEZONE), current_timesheet_id(tz="UTC")}


def test_get_timesheet(client, timesheet):
    resp = client.get(f"/timesheets/{TIMESHEET_ID}")
    assert resp.status_code == 200
    assert resp.json()["timesheet_id"] == TIMESHEET_ID


def test_get_timesheet_not_found_returns_404(client):
    resp = client.get("/timesheets/1999-01-02")
    assert resp.status_code == 404


def test_list_timesheets_newest_first(client):
    for ts in ("2024-01-06", "2024-01-20", "2024-01-13"):
        client.post("/timesheets", json={"timesheet_id": ts})
    resp = client.get("/timesheets")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 3
    assert [t["timesheet_id"] for t in body["items"]] == ["2024-01-20", "2024-01-13", "2024-01-06"]


def test_import_batch(client, timesheet):
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch())
    assert resp.status_code == 200
    assert resp.json() == {"timesheet_id": TIMESHEET_ID, "employees": 1, "jobs": 1, "entries": 1}


def test_import_into_missing_timesheet_returns_404(client):
    resp = client.post("/timesheets/1999-01-02/import", json=_batch())
    assert resp.status_code == 404


def test_reimport_replaces_entry_by_id(client, timesheet):
    client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch())
    shorter = _batch(employees=[], jobs=[], entries=[{
        "entry_id": "t1", "employee_id": "E1", "job_id": "J1", "day_id": 1,
        "time_in_seconds": 25200, "time_out_seconds": 39600, "is_approved": True,
    }])
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=shorter)
    assert resp.status_code == 200

    records = client.get(f"/timesheets/{TIMESHEET_ID}/payroll-records").json()
    assert records["total"] == 1
    assert records["items"][0]["day_seconds"][1] == 14400


def test_import_overlapping_entries_returns_422_with_violations(client, timesheet):
    entries = [
        {"entry_id": "a", "employee_id": "E1", "job_id": "J1", "day_id": 2,
         "time_in_seconds": 25200, "time_out_seconds": 43200, "is_approved": True},
        {"entry_id": "b", "employee_id": "E1", "job_id": "J1", "day_id": 2,
         "time_in_seconds": 39600, "time_out_seconds": 57600, "is_approved": True},
    ]
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(entries=entries))
    assert resp.status_code == 422
    body = resp.json()
    assert len(body["violations"]) == 1
    assert "overlaps" in body["violations"][0]

    # Nothing was written.
    records = client.get(f"/timesheets/{TIMESHEET_ID}/payroll-records").json()
    assert records["total"] == 0


def test_import_duplicate_entry_ids_returns_422(client, timesheet):
    entries = [
        {"entry_id": "x", "employee_id": "E1", "job_id": "J1", "day_id": 1,
         "time_in_seconds": 0, "time_out_seconds": 3600, "is_approved": True},
        {"entry_id": "x", "employee_id": "E1", "job_id": "J1", "day_id": 2,
         "time_in_seconds": 0, "time_out_seconds": 3600, "is_approved": True},
    ]
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(entries=entries))
    assert resp.status_code == 422
    assert resp.json()["violations"] == ["entry x: duplicate entry_id in batch"]

    records = client.get(f"/timesheets/{TIMESHEET_ID}/payroll-records").json()
    assert records["total"] == 0


def test_import_overlap_with_stored_entry_is_rejected(client, timesheet):
    client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch())
    late = _batch(employees=[], jobs=[], entries=[{
        "entry_id": "t2", "employee_id": "E1", "job_id": "J1", "day_id": 1,
        "time_in_seconds": 57600, "time_out_seconds": 64800, "is_approved": True,
    }])
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=late)
    assert resp.status_code == 422


def test_import_unknown_job_returns_422(client, timesheet):
    entries = [{"entry_id": "x", "employee_id": "E1", "job_id": "NOPE", "day_id": 1}]
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(entries=entries))
    assert resp.status_code == 422
    assert "unknown job NOPE" in resp.json()["violations"][0]


def test_import_negative_worked_time_returns_422(client, timesheet):
    entries = [{
        "entry_id": "x", "employee_id": "E1", "job_id": "J1", "day_id": 1,
        "time_in_seconds": 36000, "time_out_seconds": 39600, "lunch_seconds": 7200,
    }]
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(entries=entries))
    assert resp.status_code == 422


@pytest.mark.parametrize("field, value", [
    ("day_id", 7),
    ("time_in_seconds", -1),
    ("time_out_seconds", 86401),
])
def test_import_schema_bounds_return_422(client, timesheet, field, value):
    entry = {"entry_id": "x", "employee_id": "E1", "job_id": "J1", "day_id": 1, field: value}
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(entries=[entry]))
    assert resp.status_code == 422


def test_import_bad_job_type_returns_422(client, timesheet):
    jobs = [{"job_id": "J1", "name": "Harbor", "job_type": "MUNICIPAL"}]
    resp = client.post(f"/timesheets/{TIMESHEET_ID}/import", json=_batch(jobs=jobs))
    assert resp.status_code == 422
