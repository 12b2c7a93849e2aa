from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from ...core.constants import RATE_LOOKUP_DAY
from ...core.enums import SalaryCategory, SalarySubCategory
from ...core.exceptions import ValidationError
from ...rate_schedules.model import RateSchedule
from .base import WageCalculator, WageInputs

RateLookup = Callable[[SalaryCategory, SalarySubCategory, datetime], Optional[RateSchedule]]


class StatutoryRateWageCalculator(WageCalculator):
    """CENTRAL/STATE staff: the employee's own per-day rate, else the scheduled rate mid-month."""

    def __init__(self, rate_lookup: RateLookup):
        self._rate_lookup = rate_lookup

    def wages_per_day(self, inputs: WageInputs) -> Decimal:
        employee = inputs.employee
        if employee.salary_per_day is not None and employee.salary_per_day > 0:
            return employee.salary_per_day

        category = employee.salary_category
        if employee.salary_sub_category is None:
            raise ValidationError(
                f"Employee {employee.employee_id} ({category.value}) missing salaryPerDay and salarySubCategory"
            )

        on = datetime(inputs.year, inputs.month, RATE_LOOKUP_DAY)
        rate = self._rate_lookup(category, employee.salary_sub_category, on)
        if rate is None:
            raise ValidationError(
                f"Employee {employee.employee_id} ({category.value} {employee.salary_sub_category.value}) "
                f"missing salaryPerDay and no active rate schedule found for {inputs.year:04d}-{inputs.month:02d}"
            )
        return rate.rate_per_day
