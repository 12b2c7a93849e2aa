from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import SalaryCategory
from ...employees.model import Employee
from .base import WageCalculator
from .standard_calculator import SpecializedWageCalculator, StandardWageCalculator
from .statutory_calculator import RateLookup, StatutoryRateWageCalculator


@dataclass
class WageCalculatorFactory:
    """Factory Pattern: choose the wage rule from the employee's salary category."""

    rate_lookup: RateLookup

    def for_employee(self, employee: Employee) -> WageCalculator:
        category = employee.salary_category
        if category in (SalaryCategory.CENTRAL, SalaryCategory.STATE):
            return StatutoryRateWageCalculator(self.rate_lookup)
        if category is SalaryCategory.SPECIALIZED:
            return SpecializedWageCalculator()
        return StandardWageCalculator()
