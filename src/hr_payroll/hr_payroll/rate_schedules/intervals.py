"""Interval rules for rate schedules.

Pure functions shared by every repository implementation so the non-overlap
and auto-close rules are decided in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import end_of_previous_day
from ..core.enums import SalaryCategory, SalarySubCategory
from ..core.exceptions import ConflictError
from .model import RateSchedule, RateScheduleDraft


def intervals_overlap(
    a_from: datetime,
    a_to: Optional[datetime],
    b_from: datetime,
    b_to: Optional[datetime],
) -> bool:
    """Closed intervals overlap iff a_from <= b_to and b_from <= a_to (None = +inf)."""
    starts_before_b_ends = b_to is None or a_from <= b_to
    b_starts_before_a_ends = a_to is None or b_from <= a_to
    return starts_before_b_ends and b_starts_before_a_ends


def overlapping_active(
    candidates: Iterable[RateSchedule],
    effective_from: datetime,
    effective_to: Optional[datetime],
    *,
    exclude_id: Optional[int] = None,
) -> list[RateSchedule]:
    return [
        r
        for r in candidates
        if r.is_active
        and r.rate_schedule_id != exclude_id
        and intervals_overlap(r.effective_from, r.effective_to, effective_from, effective_to)
    ]


def overlap_conflict(category: SalaryCategory, sub_category: SalarySubCategory) -> ConflictError:
    return ConflictError(
        f"An active rate schedule already exists for {category.value} - {sub_category.value} "
        "that overlaps with the specified date range"
    )


@dataclass(frozen=True)
class AutoClosePlan:
    """Predecessor to close (if any) before the draft is inserted."""

    close: Optional[RateSchedule] = None
    close_to: Optional[datetime] = None


def plan_auto_close(draft: RateScheduleDraft, active_same_pair: Sequence[RateSchedule]) -> AutoClosePlan:
    """Decide how a new rate can be inserted without breaking non-overlap.

    Only a single ongoing predecessor that starts strictly earlier is closed
    (at the end of the day before the new rate starts). Any other overlap is a
    conflict.
    """
    if not draft.is_active:
        return AutoClosePlan()

    overlapping = overlapping_active(active_same_pair, draft.effective_from, draft.effective_to)
    if not overlapping:
        return AutoClosePlan()

    if len(overlapping) == 1:
        prev = overlapping[0]
        if prev.effective_to is None and prev.effective_from < draft.effective_from:
            close_to = end_of_previous_day(draft.effective_from)
            if close_to > prev.effective_from:
                return AutoClosePlan(close=prev, close_to=close_to)

    raise overlap_conflict(draft.category, draft.sub_category)

