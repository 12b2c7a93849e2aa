from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from ..common.datetime_utils import to_iso
from ..common.money import D


@dataclass(frozen=True)
class SalaryRecord:
    """Finalized payroll row: one per (employee, company, month)."""

    employee_id: str
    company_id: str
    company_name: str
    month: str
    salary_data: dict[str, Any] = field(default_factory=dict)
    salary_record_id: Optional[int] = None
    employee_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def amount(self, key: str) -> Decimal:
        """Numeric salary value; missing or non-numeric entries count as 0."""
        value = self.salary_data.get(key) if isinstance(self.salary_data, dict) else None
        try:
            return D(value)
        except ValueError:
            return Decimal("0")

    def to_dict(self) -> dict:
        out = {
            "id": self.salary_record_id,
            "employeeId": self.employee_id,
            "companyId": self.company_id,
            "companyName": self.company_name,
            "month": self.month,
            "salaryData": self.salary_data,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }
        if self.employee_name is not None:
            out["employeeName"] = self.employee_name
        return out
