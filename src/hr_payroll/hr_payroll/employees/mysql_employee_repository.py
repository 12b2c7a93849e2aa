from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from ..core.enums import SalaryCategory, SalarySubCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Employee, EmploymentHistory
from .repository import EmployeeRepository


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_employees_by_company(self, company_id: str) -> Sequence[Employee]:
        """Employees with an open employment row at the company.

        The join already implies a current job here, so the payroll run only
        skips someone as not employed or without history when the row changes
        between this read and ``get_employment_history``.
        """
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT DISTINCT
                    e.employee_id, e.first_name, e.last_name, e.father_name, e.uan_number,
                    e.salary_category, e.salary_sub_category, e.salary_per_day
                FROM employees e
                JOIN employment_histories eh ON eh.employee_id = e.employee_id
                WHERE eh.company_id=%s AND eh.leaving_date IS NULL
                ORDER BY e.employee_id ASC
                """,
                (str(company_id),),
            )
            rows = fetchall(cur)
            return [
                Employee(
                    employee_id=str(r["employee_id"]),
                    first_name=r["first_name"],
                    last_name=r.get("last_name") or "",
                    father_name=r.get("father_name"),
                    uan_number=r.get("uan_number"),
                    salary_category=SalaryCategory(r["salary_category"]) if r.get("salary_category") else None,
                    salary_sub_category=(
                        SalarySubCategory(r["salary_sub_category"]) if r.get("salary_sub_category") else None
                    ),
                    salary_per_day=Decimal(str(r["salary_per_day"])) if r.get("salary_per_day") is not None else None,
                )
                for r in rows
            ]

    def get_employment_history(self, employee_id: str) -> Sequence[EmploymentHistory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employment_id, employee_id, company_id, company_name,
                       designation_id, designation_name, department_id,
                       salary, joining_date, leaving_date
                FROM employment_histories
                WHERE employee_id=%s
                ORDER BY joining_date DESC
                """,
                (str(employee_id),),
            )
            rows = fetchall(cur)
            return [
                EmploymentHistory(
                    employment_id=int(r["employment_id"]),
                    employee_id=str(r["employee_id"]),
                    company_id=str(r["company_id"]),
                    company_name=r.get("company_name"),
                    designation_id=r.get("designation_id"),
                    designation_name=r.get("designation_name"),
                    department_id=r.get("department_id"),
                    salary=Decimal(str(r["salary"] or 0)),
                    joining_date=r["joining_date"],
                    leaving_date=r.get("leaving_date"),
                )
                for r in rows
            ]
