from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import SalaryRecord

# Report fields a caller may sort by.
SORTABLE_FIELDS = ("month", "createdAt", "updatedAt", "employeeId", "companyName")


class PayrollRepository(Protocol):
    def save_salary_record(
        self,
        *,
        employee_id: str,
        company_id: str,
        company_name: str,
        month: str,
        salary_data: Mapping[str, Any],
    ) -> None:
        """Upsert keyed by (employee, company, month); the last write wins."""

        raise NotImplementedError

    def find_records(
        self,
        *,
        company_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
        sort_column: str = "month",
        descending: bool = True,
        skip: int = 0,
        take: int = 10,
    ) -> tuple[Sequence[SalaryRecord], int]:
        raise NotImplementedError

    def get_company_payroll_by_month(self, company_id: str, month: str) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def get_employee_records(
        self,
        employee_id: str,
        *,
        company_id: Optional[str] = None,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        """Newest month first."""

        raise NotImplementedError

    def get_company_records(
        self,
        company_id: str,
        *,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def list_months(self, company_id: str, *, skip: int = 0, take: int = 10) -> tuple[Sequence[str], int]:
        """Distinct finalized months for a company, newest first, plus how many there are."""

        raise NotImplementedError
