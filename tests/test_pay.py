"""Rate lookup and cents conversion."""
from decimal import Decimal

import pytest

from crewtime.domain.pay import (
    PayTotal,
    ZERO,
    epi_overtime_base_rate_cents,
    overtime_rate_cents,
    record_overtime_total,
    record_regular_total,
    record_total,
    regular_rate_cents,
    seconds_to_cents,
)
from crewtime.domain.payroll import EmployeeRef, JobRef, JobType, PayrollRecord

WORKER = EmployeeRef(
    employee_id="E1",
    name="Kai",
    rate_private_cents_per_hour=2500,
    rate_davis_bacon_cents_per_hour=4000,
    rate_davis_bacon_overtime_cents_per_hour=5501,
)


@pytest.mark.parametrize("job_type, expected", [
    (JobType.PRIVATE, Decimal(2500)),
    (JobType.STATE, Decimal(4000)),
    (JobType.FEDERAL, Decimal(4000)),
])
def test_regular_rate_by_job_type(job_type, expected):
    assert regular_rate_cents(WORKER, job_type) == expected


@pytest.mark.parametrize("job_type, expected", [
    (JobType.PRIVATE, Decimal(3750)),
    (JobType.STATE, Decimal(5501)),
    (JobType.FEDERAL, Decimal(5501)),
])
def test_overtime_rate_by_job_type(job_type, expected):
    assert overtime_rate_cents(WORKER, job_type) == expected


def test_private_overtime_multiplier_is_configurable():
    assert overtime_rate_cents(WORKER, JobType.PRIVATE, Decimal("2")) == Decimal(5000)


def test_epi_overtime_base_rate_divides_davis_bacon_rate_back_down():
    assert epi_overtime_base_rate_cents(WORKER, JobType.PRIVATE) == 2500
    # 5501 / 1.5 = 3667.33.. rounds up
    assert epi_overtime_base_rate_cents(WORKER, JobType.STATE) == 3668
    assert epi_overtime_base_rate_cents(WORKER, JobType.FEDERAL) == 3668


@pytest.mark.parametrize("seconds, rate, expected", [
    (3600, 2500, 2500),
    (0, 2500, 0),
    (1, 2500, 1),
    (1800, 2501, 1251),
    (900, Decimal("3750"), 938),
    (5400, Decimal("3750"), 5625),
])
def test_seconds_to_cents_rounds_up(seconds, rate, expected):
    assert seconds_to_cents(seconds, rate) == expected


def test_record_totals_split_regular_and_overtime():
    job = JobRef(job_id="J1", job_type=JobType.PRIVATE)
    record = PayrollRecord(employee=WORKER, job=job)
    record.day_seconds[1] = 8 * 3600
    record.day_overtime_seconds[1] = 1800

    regular = record_regular_total(record)
    overtime = record_overtime_total(record)

    assert regular == PayTotal(8 * 3600, 20000, Decimal(2500))
    assert overtime == PayTotal(1800, 1875, Decimal(3750))
    assert record_total(record) == PayTotal(8 * 3600 + 1800, 21875)


def test_pay_totals_add():
    total = ZERO + PayTotal(60, 10) + PayTotal(120, 5)
    assert (total.seconds, total.cents) == (180, 15)
