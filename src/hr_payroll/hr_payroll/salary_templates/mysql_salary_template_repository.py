from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SalaryTemplate
from .repository import SalaryTemplateRepository


class MySQLSalaryTemplateRepository(SalaryTemplateRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest_for_company(self, company_id: str) -> Optional[SalaryTemplate]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT template_id, company_id, mandatory_fields, optional_fields, custom_fields, created_at
                FROM salary_templates
                WHERE company_id=%s
                ORDER BY created_at DESC, template_id DESC
                LIMIT 1
                """,
                (str(company_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            # JSON columns are decoded by the parser, which accepts str or lists.
            return SalaryTemplate(
                template_id=int(r["template_id"]),
                company_id=str(r["company_id"]),
                mandatory_fields=r["mandatory_fields"],
                optional_fields=r["optional_fields"],
                custom_fields=r["custom_fields"],
                created_at=r.get("created_at"),
            )
