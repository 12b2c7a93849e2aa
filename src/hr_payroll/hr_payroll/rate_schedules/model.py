from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import SalaryCategory, SalarySubCategory


@dataclass(frozen=True)
class RateSchedule:
    """Domain entity: a per-day pay rate valid over [effective_from, effective_to].

    ``effective_to`` None means the rate is ongoing.
    """

    rate_schedule_id: int
    category: SalaryCategory
    sub_category: SalarySubCategory
    rate_per_day: Decimal
    effective_from: datetime
    effective_to: Optional[datetime] = None
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def covers(self, on: datetime) -> bool:
        return self.effective_from <= on and (self.effective_to is None or self.effective_to >= on)

    def to_dict(self) -> dict:
        return {
            "id": self.rate_schedule_id,
            "category": self.category.value,
            "subCategory": self.sub_category.value,
            "ratePerDay": float(self.rate_per_day),
            "effectiveFrom": to_iso(self.effective_from),
            "effectiveTo": to_iso(self.effective_to),
            "isActive": self.is_active,
            "createdAt": to_iso(self.created_at),
            "updatedAt": to_iso(self.updated_at),
        }


@dataclass(frozen=True)
class RateScheduleDraft:
    """Validated input for a new rate schedule (no id yet)."""

    category: SalaryCategory
    sub_category: SalarySubCategory
    rate_per_day: Decimal
    effective_from: datetime
    effective_to: Optional[datetime] = None
    is_active: bool = True
