from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import SalaryCategory, SalarySubCategory


@dataclass(frozen=True)
class Employee:
    """Domain entity: a deployed guard/employee.

    Salary classification is optional; unclassified employees are paid from
    their employment salary snapshot.
    """

    employee_id: str
    first_name: str
    last_name: str = ""
    father_name: Optional[str] = None
    uan_number: Optional[str] = None
    salary_category: Optional[SalaryCategory] = None
    salary_sub_category: Optional[SalarySubCategory] = None
    salary_per_day: Optional[Decimal] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class EmploymentHistory:
    """One stint of an employee at a company; ``leaving_date`` None means current."""

    employee_id: str
    company_id: str
    salary: Decimal
    joining_date: date
    leaving_date: Optional[date] = None
    company_name: Optional[str] = None
    designation_id: Optional[str] = None
    designation_name: Optional[str] = None
    department_id: Optional[str] = None
    employment_id: Optional[int] = None

    def is_current_for(self, company_id: str) -> bool:
        return self.company_id == company_id and self.leaving_date is None
