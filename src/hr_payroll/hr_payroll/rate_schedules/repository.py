from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryCategory, SalarySubCategory
from .model import RateSchedule, RateScheduleDraft


class RateScheduleRepository(Protocol):
    def create_with_auto_close(self, draft: RateScheduleDraft) -> RateSchedule:
        """Insert ``draft``, closing a single ongoing predecessor in the same transaction.

        Raises ConflictError (and writes nothing) when the overlap cannot be resolved.
        """

        raise NotImplementedError

    def get_by_id(self, rate_schedule_id: int) -> Optional[RateSchedule]:
        raise NotImplementedError

    def find_all(
        self,
        *,
        category: Optional[SalaryCategory] = None,
        sub_category: Optional[SalarySubCategory] = None,
        is_active: Optional[bool] = None,
        skip: int = 0,
        take: int = 10,
    ) -> Sequence[RateSchedule]:
        raise NotImplementedError

    def count(
        self,
        *,
        category: Optional[SalaryCategory] = None,
        sub_category: Optional[SalarySubCategory] = None,
        is_active: Optional[bool] = None,
    ) -> int:
        raise NotImplementedError

    def update_checked(self, updated: RateSchedule, *, check_overlap: bool) -> RateSchedule:
        """Persist ``updated``; when asked, re-check overlap against other active rows first.

        Check and write share one transaction.
        """

        raise NotImplementedError

    def delete(self, rate_schedule_id: int) -> bool:
        raise NotImplementedError

    def find_effective_rate(
        self,
        category: SalaryCategory,
        sub_category: SalarySubCategory,
        on_date: datetime,
        *,
        active_only: bool,
    ) -> Optional[RateSchedule]:
        raise NotImplementedError

    def list_active_by_category(
        self, category: SalaryCategory, sub_category: SalarySubCategory
    ) -> Sequence[RateSchedule]:
        raise NotImplementedError
