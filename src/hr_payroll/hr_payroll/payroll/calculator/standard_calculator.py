from __future__ import annotations

from decimal import Decimal

from ...common.datetime_utils import days_in_month
from ...core.exceptions import ValidationError
from .base import WageCalculator, WageInputs


class StandardWageCalculator(WageCalculator):
    """Standard rule: monthly salary spread over the template's basic duty."""

    def wages_per_day(self, inputs: WageInputs) -> Decimal:
        return inputs.monthly_salary / inputs.basic_duty


class SpecializedWageCalculator(WageCalculator):
    """Specialized staff: monthly salary spread over the calendar days of the month."""

    def wages_per_day(self, inputs: WageInputs) -> Decimal:
        if inputs.monthly_salary <= 0:
            raise ValidationError(f"Employee {inputs.employee.employee_id} (SPECIALIZED) missing or invalid monthlySalary")
        return inputs.monthly_salary / Decimal(days_in_month(inputs.year, inputs.month))
