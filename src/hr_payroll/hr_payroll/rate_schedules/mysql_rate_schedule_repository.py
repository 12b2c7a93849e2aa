from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import SalaryCategory, SalarySubCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .intervals import overlap_conflict, overlapping_active, plan_auto_close
from .model import RateSchedule, RateScheduleDraft
from .repository import RateScheduleRepository

_COLUMNS = """
    rate_schedule_id, category, sub_category, rate_per_day,
    effective_from, effective_to, is_active, created_at, updated_at
"""


def _to_rate(r: dict) -> RateSchedule:
    return RateSchedule(
        rate_schedule_id=int(r["rate_schedule_id"]),
        category=SalaryCategory(r["category"]),
        sub_category=SalarySubCategory(r["sub_category"]),
        rate_per_day=Decimal(str(r["rate_per_day"])),
        effective_from=r["effective_from"],
        effective_to=r.get("effective_to"),
        is_active=bool(r["is_active"]),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _filters(
    category: Optional[SalaryCategory],
    sub_category: Optional[SalarySubCategory],
    is_active: Optional[bool],
) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []
    if category is not None:
        clauses.append("category=%s")
        params.append(category.value)
    if sub_category is not None:
        clauses.append("sub_category=%s")
        params.append(sub_category.value)
    if is_active is not None:
        clauses.append("is_active=%s")
        params.append(1 if is_active else 0)
    return " AND ".join(clauses), params


class MySQLRateScheduleRepository(RateScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _lock_active_pair(self, cur, category: SalaryCategory, sub_category: SalarySubCategory) -> list[RateSchedule]:
        # Row locks keep concurrent writers for the same pair serialized until commit.
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM salary_rate_schedules
            WHERE category=%s AND sub_category=%s AND is_active=1
            ORDER BY effective_from ASC
            FOR UPDATE
            """,
            (category.value, sub_category.value),
        )
        return [_to_rate(r) for r in fetchall(cur)]

    def create_with_auto_close(self, draft: RateScheduleDraft) -> RateSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            active = self._lock_active_pair(cur, draft.category, draft.sub_category)
            plan = plan_auto_close(draft, active)

            if plan.close is not None:
                cur.execute(
                    "UPDATE salary_rate_schedules SET effective_to=%s WHERE rate_schedule_id=%s",
                    (plan.close_to, plan.close.rate_schedule_id),
                )

            cur.execute(
                """
                INSERT INTO salary_rate_schedules(category, sub_category, rate_per_day, effective_from, effective_to, is_active)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    draft.category.value,
                    draft.sub_category.value,
                    draft.rate_per_day,
                    draft.effective_from,
                    draft.effective_to,
                    1 if draft.is_active else 0,
                ),
            )
            new_id = int(cur.lastrowid)

            cur.execute(f"SELECT {_COLUMNS} FROM salary_rate_schedules WHERE rate_schedule_id=%s", (new_id,))
            r = fetchone(cur)
            if r:
                return _to_rate(r)
            return RateSchedule(
                rate_schedule_id=new_id,
                category=draft.category,
                sub_category=draft.sub_category,
                rate_per_day=draft.rate_per_day,
                effective_from=draft.effective_from,
                effective_to=draft.effective_to,
                is_active=draft.is_active,
            )

    def get_by_id(self, rate_schedule_id: int) -> Optional[RateSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_rate_schedules WHERE rate_schedule_id=%s",
                (int(rate_schedule_id),),
            )
            r = fetchone(cur)
            return _to_rate(r) if r else None

    def find_all(
        self,
        *,
        category: Optional[SalaryCategory] = None,
        sub_category: Optional[SalarySubCategory] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        take: int = 10,
    ) -> Sequence[RateSchedule]:
        where, params = _filters(category, sub_category, is_active)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_rate_schedules
                WHERE {where}
                ORDER BY effective_from DESC
                LIMIT %s OFFSET %s
                """,
                tuple(params) + (int(take), int(skip)),
            )
            return [_to_rate(r) for r in fetchall(cur)]

    def count(
        self,
        *,
        category: Optional[SalaryCategory] = None,
        sub_category: Optional[SalarySubCategory] = None,
        is_active: Optional[bool] = None,
    ) -> int:
        where, params = _filters(category, sub_category, is_active)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM salary_rate_schedules WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def update_checked(self, updated: RateSchedule, *, check_overlap: bool) -> RateSchedule:
        with db_cursor(self._conn_factory) as (_, cur):
            if check_overlap and updated.is_active:
                others = self._lock_active_pair(cur, updated.category, updated.sub_category)
                if overlapping_active(
                    others,
                    updated.effective_from,
                    updated.effective_to,
                    exclude_id=updated.rate_schedule_id,
                ):
                    raise overlap_conflict(updated.category, updated.sub_category)

            cur.execute(
                """
                UPDATE salary_rate_schedules
                SET rate_per_day=%s, effective_from=%s, effective_to=%s, is_active=%s
                WHERE rate_schedule_id=%s
                """,
                (
                    updated.rate_per_day,
                    updated.effective_from,
                    updated.effective_to,
                    1 if updated.is_active else 0,
                    updated.rate_schedule_id,
                ),
            )

            cur.execute(
                f"SELECT {_COLUMNS} FROM salary_rate_schedules WHERE rate_schedule_id=%s",
                (updated.rate_schedule_id,),
            )
            r = fetchone(cur)
            return _to_rate(r) if r else updated

    def delete(self, rate_schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM salary_rate_schedules WHERE rate_schedule_id=%s", (int(rate_schedule_id),))
            return cur.rowcount > 0

    def find_effective_rate(
        self,
        category: SalaryCategory,
        sub_category: SalarySubCategory,
        on_date: datetime,
        *,
        active_only: bool,
    ) -> Optional[RateSchedule]:
        clauses = [
            "category=%s",
            "sub_category=%s",
            "effective_from <= %s",
            "(effective_to IS NULL OR effective_to >= %s)",
        ]
        params: list[object] = [category.value, sub_category.value, on_date, on_date]
        if active_only:
            clauses.append("is_active=1")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_rate_schedules
                WHERE {" AND ".join(clauses)}
                ORDER BY effective_from DESC
                LIMIT 1
                """,
                tuple(params),
            )
            r = fetchone(cur)
            return _to_rate(r) if r else None

    def list_active_by_category(
        self, category: SalaryCategory, sub_category: SalarySubCategory
    ) -> Sequence[RateSchedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM salary_rate_schedules
                WHERE category=%s AND sub_category=%s AND is_active=1
                ORDER BY effective_from DESC
                """,
                (category.value, sub_category.value),
            )
            return [_to_rate(r) for r in fetchall(cur)]
