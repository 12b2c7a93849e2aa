from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import SalaryCategory, SalarySubCategory
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.calculator.base import WageInputs
from src.hr_payroll.hr_payroll.payroll.calculator.factory import WageCalculatorFactory
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import (
    SpecializedWageCalculator,
    StandardWageCalculator,
)
from src.hr_payroll.hr_payroll.payroll.calculator.statutory_calculator import StatutoryRateWageCalculator
from src.hr_payroll.hr_payroll.rate_schedules.model import RateSchedule
from tests.fakes import current_job, employee


class RecordingLookup:
    def __init__(self, rate=None):
        self.rate = rate
        self.calls = []

    def __call__(self, category, sub_category, on):
        self.calls.append((category, sub_category, on))
        return self.rate


def _inputs(emp, salary="30000", basic_duty="30", year=2025, month=6):
    return WageInputs(
        employee=emp,
        employment=current_job(emp.employee_id, salary),
        basic_duty=Decimal(basic_duty),
        year=year,
        month=month,
    )


def _rate(amount):
    return RateSchedule(
        rate_schedule_id=1,
        category=SalaryCategory.CENTRAL,
        sub_category=SalarySubCategory.SKILLED,
        rate_per_day=Decimal(amount),
        effective_from=datetime(2024, 4, 1),
    )


def test_standard_divides_by_basic_duty():
    assert StandardWageCalculator().wages_per_day(_inputs(employee("e-1"), "26000", "26")) == Decimal("1000")


def test_specialized_divides_by_calendar_days():
    emp = employee("e-1", salary_category=SalaryCategory.SPECIALIZED)

    assert SpecializedWageCalculator().wages_per_day(_inputs(emp, "30000", month=6)) == Decimal("1000")
    assert SpecializedWageCalculator().wages_per_day(_inputs(emp, "29000", year=2024, month=2)) == Decimal("1000")


def test_specialized_requires_positive_salary():
    emp = employee("e-1", salary_category=SalaryCategory.SPECIALIZED)

    with pytest.raises(ValidationError):
        SpecializedWageCalculator().wages_per_day(_inputs(emp, "0"))


def test_statutory_prefers_employee_rate():
    lookup = RecordingLookup(_rate("850"))
    emp = employee(
        "e-1",
        salary_category=SalaryCategory.CENTRAL,
        salary_sub_category=SalarySubCategory.SKILLED,
        salary_per_day=Decimal("900"),
    )

    assert StatutoryRateWageCalculator(lookup).wages_per_day(_inputs(emp)) == Decimal("900")
    assert lookup.calls == []


def test_statutory_looks_up_rate_mid_month():
    lookup = RecordingLookup(_rate("850"))
    emp = employee("e-1", salary_category=SalaryCategory.CENTRAL, salary_sub_category=SalarySubCategory.SKILLED)

    assert StatutoryRateWageCalculator(lookup).wages_per_day(_inputs(emp)) == Decimal("850")
    assert lookup.calls == [(SalaryCategory.CENTRAL, SalarySubCategory.SKILLED, datetime(2025, 6, 15))]


def test_statutory_without_sub_category_fails():
    emp = employee("e-1", salary_category=SalaryCategory.STATE)

    with pytest.raises(ValidationError) as exc:
        StatutoryRateWageCalculator(RecordingLookup()).wages_per_day(_inputs(emp))

    assert str(exc.value) == "Employee e-1 (STATE) missing salaryPerDay and salarySubCategory"


def test_statutory_without_rate_fails():
    emp = employee("e-1", salary_category=SalaryCategory.CENTRAL, salary_sub_category=SalarySubCategory.SKILLED)

    with pytest.raises(ValidationError) as exc:
        StatutoryRateWageCalculator(RecordingLookup()).wages_per_day(_inputs(emp))

    assert "no active rate schedule found for 2025-06" in str(exc.value)


@pytest.mark.parametrize(
    "category, expected",
    [
        (None, StandardWageCalculator),
        (SalaryCategory.CENTRAL, StatutoryRateWageCalculator),
        (SalaryCategory.STATE, StatutoryRateWageCalculator),
        (SalaryCategory.SPECIALIZED, SpecializedWageCalculator),
    ],
)
def test_factory_picks_calculator_by_category(category, expected):
    factory = WageCalculatorFactory(rate_lookup=RecordingLookup())

    assert isinstance(factory.for_employee(employee("e-1", salary_category=category)), expected)
