from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Company
from .repository import CompanyRepository


def _to_company(r: dict) -> Company:
    return Company(
        company_id=str(r["company_id"]),
        name=r["name"],
        status=r.get("status") or "ACTIVE",
        address=r.get("address"),
    )


class MySQLCompanyRepository(CompanyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_id(self, company_id: str) -> Optional[Company]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT company_id, name, status, address FROM companies WHERE company_id=%s",
                (str(company_id),),
            )
            r = fetchone(cur)
            return _to_company(r) if r else None

    def find_all(
        self,
        *,
        name: Optional[str] = None,
        status: Optional[str] = None,
        skip: int = 0,
        take: int = 10,
    ) -> tuple[Sequence[Company], int]:
        clauses = ["1=1"]
        params: list[object] = []
        if name:
            clauses.append("name LIKE %s")
            params.append(f"%{name}%")
        if status:
            clauses.append("status=%s")
            params.append(status)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM companies WHERE {where}", tuple(params))
            total = int(fetchone(cur)["total"])
            cur.execute(
                f"""
                SELECT company_id, name, status, address
                FROM companies
                WHERE {where}
                ORDER BY name ASC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(take), int(skip)),
            )
            return [_to_company(r) for r in fetchall(cur)], total
