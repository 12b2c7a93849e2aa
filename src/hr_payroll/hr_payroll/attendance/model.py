from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MonthlyAttendance:
    """Read-model: days present for one employee at one company in one month."""

    employee_id: str
    company_id: str
    month: str
    present_count: Decimal
