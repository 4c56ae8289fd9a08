"""Rate lookup and seconds-to-cents conversion.

Amounts are integer cents. Conversions use exact Decimal arithmetic and
always round up (``ceil(seconds / 3600 * cents_per_hour)``).
"""
from __future__ import annotations
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal
from typing import assert_never
from crewtime.domain.payroll import EmployeeRef, JobType, PayrollRecord

SECONDS_PER_HOUR = 3600
PRIVATE_OVERTIME_MULTIPLIER = Decimal("1.5")
DAVIS_BACON_OVERTIME_DIVISOR = Decimal("1.5")


@dataclass(frozen=True, slots=True)
class PayTotal:
    seconds: int
    cents: int
    cents_per_hour: Decimal = Decimal("0")

    def __add__(self, other: PayTotal) -> PayTotal:
        return PayTotal(self.seconds + other.seconds, self.cents + other.cents)


ZERO = PayTotal(0, 0)


def _ceil(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_CEILING))


def regular_rate_cents(employee: EmployeeRef, job_type: JobType) -> Decimal:
    match job_type:
        case JobType.PRIVATE:
            return Decimal(employee.rate_private_cents_per_hour)
        case JobType.STATE | JobType.FEDERAL:
            return Decimal(employee.rate_davis_bacon_cents_per_hour)
        case _:
            assert_never(job_type)


def overtime_rate_cents(
    employee: EmployeeRef,
    job_type: JobType,
    private_multiplier: Decimal = PRIVATE_OVERTIME_MULTIPLIER,
) -> Decimal:
    """Overtime rate; PRIVATE work is time-and-a-half of the private rate."""
    match job_type:
        case JobType.PRIVATE:
            return Decimal(employee.rate_private_cents_per_hour) * private_multiplier
        case JobType.STATE | JobType.FEDERAL:
            return Decimal(employee.rate_davis_bacon_overtime_cents_per_hour)
        case _:
            assert_never(job_type)


def epi_overtime_base_rate_cents(
    employee: EmployeeRef,
    job_type: JobType,
    davis_bacon_divisor: Decimal = DAVIS_BACON_OVERTIME_DIVISOR,
) -> int:
    """Base rate reported on overtime lines of the payroll-provider export.

    The provider applies the 1.5 overtime factor itself, so the Davis-Bacon
    overtime rate is divided back down (rounded up to the cent).
    """
    match job_type:
        case JobType.PRIVATE:
            return employee.rate_private_cents_per_hour
        case JobType.STATE | JobType.FEDERAL:
            return _ceil(
                Decimal(employee.rate_davis_bacon_overtime_cents_per_hour) / davis_bacon_divisor
            )
        case _:
            assert_never(job_type)


def seconds_to_cents(seconds: int, cents_per_hour: Decimal | int) -> int:
    return _ceil(Decimal(seconds) * Decimal(cents_per_hour) / SECONDS_PER_HOUR)


def record_regular_total(record: PayrollRecord) -> PayTotal:
    rate = regular_rate_cents(record.employee, record.job.job_type)
    seconds = record.regular_seconds
    return PayTotal(seconds, seconds_to_cents(seconds, rate), rate)


def record_overtime_total(
    record: PayrollRecord, private_multiplier: Decimal = PRIVATE_OVERTIME_MULTIPLIER,
) -> PayTotal:
    rate = overtime_rate_cents(record.employee, record.job.job_type, private_multiplier)
    seconds = record.overtime_seconds
    return PayTotal(seconds, seconds_to_cents(seconds, rate), rate)


def record_total(
    record: PayrollRecord, private_multiplier: Decimal = PRIVATE_OVERTIME_MULTIPLIER,
) -> PayTotal:
    return record_regular_total(record) + record_overtime_total(record, private_multiplier)
