from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc, parse_iso_datetime
from ..common.logging_config import get_logger
from ..common.validators import parse_bool, parse_page, require_positive_amount
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import SalaryCategory, SalarySubCategory, parse_enum
from ..core.exceptions import DomainError, InternalError, NotFoundError, ValidationError
from .model import RateSchedule, RateScheduleDraft
from .repository import RateScheduleRepository

logger = get_logger("rate_schedules")

_UPDATABLE = {"ratePerDay", "effectiveFrom", "effectiveTo", "isActive"}


def _check_order(effective_from: datetime, effective_to: Optional[datetime]) -> None:
    if effective_to is not None and effective_to <= effective_from:
        raise ValidationError("effectiveTo must be after effectiveFrom")


class RateScheduleService:
    """Use cases for date-ranged statutory pay rates."""

    def __init__(self, rates: RateScheduleRepository, *, page_size: int = DEFAULT_PAGE_SIZE):
        self._rates = rates
        self._page_size = page_size

    def create(
        self,
        *,
        category: object,
        sub_category: object,
        rate_per_day: object,
        effective_from: object,
        effective_to: object = None,
        is_active: object = True,
    ) -> RateSchedule:
        draft = RateScheduleDraft(
            category=parse_enum(SalaryCategory, category, "category"),
            sub_category=parse_enum(SalarySubCategory, sub_category, "subCategory"),
            rate_per_day=require_positive_amount(rate_per_day, "ratePerDay"),
            effective_from=parse_iso_datetime(effective_from, "effectiveFrom"),
            effective_to=parse_iso_datetime(effective_to, "effectiveTo") if effective_to else None,
            is_active=parse_bool(is_active, "isActive") is not False,
        )
        _check_order(draft.effective_from, draft.effective_to)

        try:
            created = self._rates.create_with_auto_close(draft)
        except DomainError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to create salary rate schedule",
                extra={
                    "operation": "rate_schedule.create",
                    "category": draft.category.value,
                    "sub_category": draft.sub_category.value,
                    "effective_from": draft.effective_from,
                    "effective_to": draft.effective_to,
                },
            )
            raise InternalError("Failed to create salary rate schedule") from e

        logger.info(
            "Created salary rate schedule %s",
            created.rate_schedule_id,
            extra={"category": draft.category.value, "sub_category": draft.sub_category.value},
        )
        return created

    def get_by_id(self, rate_schedule_id: int) -> RateSchedule:
        rate = self._rates.get_by_id(int(rate_schedule_id))
        if not rate:
            raise NotFoundError(f"Salary rate schedule with ID {rate_schedule_id} not found")
        return rate

    def list(
        self,
        *,
        category: object = None,
        sub_category: object = None,
        is_active: object = None,
        page: object = None,
        limit: object = None,
    ) -> dict:
        page_i, limit_i = parse_page(page, limit, default_limit=self._page_size)
        filters = dict(
            category=parse_enum(SalaryCategory, category, "category") if category else None,
            sub_category=parse_enum(SalarySubCategory, sub_category, "subCategory") if sub_category else None,
            is_active=parse_bool(is_active, "isActive"),
        )

        data = self._rates.find_all(**filters, skip=(page_i - 1) * limit_i, take=limit_i)
        total = self._rates.count(**filters)

        return {
            "data": [r.to_dict() for r in data],
            "total": total,
            "page": page_i,
            "limit": limit_i,
            "hasNextPage": page_i * limit_i < total,
            "hasPrevPage": page_i > 1,
        }

    def update(self, rate_schedule_id: int, changes: Mapping[str, Any]) -> RateSchedule:
        unknown = set(changes) - _UPDATABLE
        if unknown:
            raise ValidationError(f"Unsupported fields: {', '.join(sorted(unknown))}")

        existing = self.get_by_id(rate_schedule_id)
        updated = existing

        if changes.get("ratePerDay") is not None:
            updated = replace(updated, rate_per_day=require_positive_amount(changes["ratePerDay"], "ratePerDay"))
        if changes.get("effectiveFrom"):
            updated = replace(updated, effective_from=parse_iso_datetime(changes["effectiveFrom"], "effectiveFrom"))
        if "effectiveTo" in changes:
            raw_to = changes["effectiveTo"]
            updated = replace(updated, effective_to=parse_iso_datetime(raw_to, "effectiveTo") if raw_to else None)
        is_active = parse_bool(changes.get("isActive"), "isActive")
        if is_active is not None:
            updated = replace(updated, is_active=is_active)

        _check_order(updated.effective_from, updated.effective_to)

        check_overlap = bool(changes.get("effectiveFrom")) or "effectiveTo" in changes or is_active is True

        try:
            return self._rates.update_checked(updated, check_overlap=check_overlap)
        except DomainError:
            raise
        except Exception as e:
            logger.exception(
                "Failed to update salary rate schedule",
                extra={"operation": "rate_schedule.update", "rate_schedule_id": existing.rate_schedule_id},
            )
            raise InternalError("Failed to update salary rate schedule") from e

    def delete(self, rate_schedule_id: int) -> RateSchedule:
        existing = self.get_by_id(rate_schedule_id)
        if not self._rates.delete(existing.rate_schedule_id):
            raise NotFoundError(f"Salary rate schedule with ID {rate_schedule_id} not found")
        return existing

    def get_active_rate(
        self, category: object, sub_category: object, on_date: Optional[datetime] = None
    ) -> Optional[RateSchedule]:
        """Active rate in force on ``on_date`` (default: now)."""
        return self._rates.find_effective_rate(
            parse_enum(SalaryCategory, category, "category"),
            parse_enum(SalarySubCategory, sub_category, "subCategory"),
            on_date or now_utc(),
            active_only=True,
        )

    def get_rate_for_date(self, category: object, sub_category: object, on_date: object) -> Optional[RateSchedule]:
        """Historical lookup: the rate that was effective on ``on_date`` regardless of isActive."""
        return self._rates.find_effective_rate(
            parse_enum(SalaryCategory, category, "category"),
            parse_enum(SalarySubCategory, sub_category, "subCategory"),
            parse_iso_datetime(on_date, "date"),
            active_only=False,
        )

    def get_active_rates_by_category(self, category: object, sub_category: object) -> Sequence[RateSchedule]:
        return self._rates.list_active_by_category(
            parse_enum(SalaryCategory, category, "category"),
            parse_enum(SalarySubCategory, sub_category, "subCategory"),
        )
