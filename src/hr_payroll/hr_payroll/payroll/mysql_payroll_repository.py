from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import SalaryRecord
from .repository import PayrollRepository

_SELECT = """
    SELECT sr.salary_record_id, sr.employee_id, sr.company_id, sr.company_name, sr.month,
           sr.salary_data, sr.created_at, sr.updated_at,
           TRIM(CONCAT(COALESCE(e.first_name, ''), ' ', COALESCE(e.last_name, ''))) AS employee_name
    FROM salary_records sr
    LEFT JOIN employees e ON e.employee_id = sr.employee_id
"""

# ORDER BY column per sortable report field.
SORT_COLUMNS = {
    "month": "sr.month",
    "createdAt": "sr.created_at",
    "updatedAt": "sr.updated_at",
    "employeeId": "sr.employee_id",
    "companyName": "sr.company_name",
}


def _to_record(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_record_id=int(r["salary_record_id"]),
        employee_id=str(r["employee_id"]),
        company_id=str(r["company_id"]),
        company_name=r["company_name"],
        month=r["month"],
        salary_data=load_json(r["salary_data"]) or {},
        employee_name=r.get("employee_name") or None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _month_range(clauses: list[str], params: list[object], start_month: Optional[str], end_month: Optional[str]) -> None:
    if start_month:
        clauses.append("sr.month >= %s")
        params.append(start_month)
    if end_month:
        clauses.append("sr.month <= %s")
        params.append(end_month)


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def save_salary_record(
        self,
        *,
        employee_id: str,
        company_id: str,
        company_name: str,
        month: str,
        salary_data: Mapping[str, Any],
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salary_records(employee_id, company_id, company_name, month, salary_data)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE salary_data=VALUES(salary_data)
                """,
                (str(employee_id), str(company_id), company_name, month, dump_json(dict(salary_data))),
            )

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
        order_by = SORT_COLUMNS[sort_column]
        direction = "DESC" if descending else "ASC"

        clauses = ["1=1"]
        params: list[object] = []
        if company_id:
            clauses.append("sr.company_id=%s")
            params.append(str(company_id))
        if employee_id:
            clauses.append("sr.employee_id=%s")
            params.append(str(employee_id))
        _month_range(clauses, params, start_month, end_month)
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM salary_records sr WHERE {where}", tuple(params))
            r = fetchone(cur)
            total = int(r["total"]) if r else 0

            cur.execute(
                f"""
                {_SELECT}
                WHERE {where}
                ORDER BY {order_by} {direction}, sr.salary_record_id {direction}
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(take), int(skip)),
            )
            return [_to_record(x) for x in fetchall(cur)], total

    def get_company_payroll_by_month(self, company_id: str, month: str) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE sr.company_id=%s AND sr.month=%s
                ORDER BY e.first_name ASC, sr.employee_id ASC
                """,
                (str(company_id), month),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_employee_records(
        self,
        employee_id: str,
        *,
        company_id: Optional[str] = None,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        clauses = ["sr.employee_id=%s"]
        params: list[object] = [str(employee_id)]
        if company_id:
            clauses.append("sr.company_id=%s")
            params.append(str(company_id))
        _month_range(clauses, params, start_month, end_month)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {" AND ".join(clauses)}
                ORDER BY sr.month DESC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_company_records(
        self,
        company_id: str,
        *,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> Sequence[SalaryRecord]:
        clauses = ["sr.company_id=%s"]
        params: list[object] = [str(company_id)]
        _month_range(clauses, params, start_month, end_month)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE {" AND ".join(clauses)}
                ORDER BY sr.month DESC, sr.employee_id ASC
                """,
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_months(self, company_id: str, *, skip: int = 0, take: int = 10) -> tuple[Sequence[str], int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(DISTINCT month) AS total FROM salary_records WHERE company_id=%s",
                (str(company_id),),
            )
            r = fetchone(cur)
            total = int(r["total"]) if r else 0

            cur.execute(
                """
                SELECT DISTINCT month
                FROM salary_records
                WHERE company_id=%s
                ORDER BY month DESC
                LIMIT %s OFFSET %s
                """,
                (str(company_id), int(take), int(skip)),
            )
            return [row["month"] for row in fetchall(cur)], total
