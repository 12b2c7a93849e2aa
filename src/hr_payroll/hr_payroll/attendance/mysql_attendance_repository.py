from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import MonthlyAttendance
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_attendance_by_month(
        self, employee_ids: Sequence[str], company_id: str, month: str
    ) -> Sequence[MonthlyAttendance]:
        if not employee_ids:
            return []

        placeholders = ",".join(["%s"] * len(employee_ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT employee_id, company_id, month, present_count
                FROM attendances
                WHERE employee_id IN ({placeholders}) AND company_id=%s AND month=%s
                """,
                tuple(str(e) for e in employee_ids) + (str(company_id), month),
            )
            return [
                MonthlyAttendance(
                    employee_id=str(r["employee_id"]),
                    company_id=str(r["company_id"]),
                    month=r["month"],
                    present_count=Decimal(str(r["present_count"] or 0)),
                )
                for r in fetchall(cur)
            ]
