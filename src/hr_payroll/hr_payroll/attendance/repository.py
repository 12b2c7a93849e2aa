from __future__ import annotations

from typing import Protocol, Sequence

from .model import MonthlyAttendance


class AttendanceRepository(Protocol):
    def get_attendance_by_month(
        self, employee_ids: Sequence[str], company_id: str, month: str
    ) -> Sequence[MonthlyAttendance]:
        """Batch load for a whole payroll run; employees without a row are simply absent."""

        raise NotImplementedError
