from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee, EmploymentHistory


class EmployeeRepository(Protocol):
    def find_employees_by_company(self, company_id: str) -> Sequence[Employee]:
        """Employees currently associated with the company, in a stable order."""

        raise NotImplementedError

    def get_employment_history(self, employee_id: str) -> Sequence[EmploymentHistory]:
        raise NotImplementedError
