from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal

from ...employees.model import Employee, EmploymentHistory


@dataclass(frozen=True)
class WageInputs:
    employee: Employee
    employment: EmploymentHistory
    basic_duty: Decimal
    year: int
    month: int

    @property
    def monthly_salary(self) -> Decimal:
        return self.employment.salary or Decimal("0")


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for per-day wages)."""

    @abstractmethod
    def wages_per_day(self, inputs: WageInputs) -> Decimal:
        raise NotImplementedError
