from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import SalaryCategory, SalarySubCategory
from src.hr_payroll.hr_payroll.core.exceptions import ConflictError
from src.hr_payroll.hr_payroll.rate_schedules.intervals import (
    intervals_overlap,
    overlapping_active,
    plan_auto_close,
)
from src.hr_payroll.hr_payroll.rate_schedules.model import RateSchedule, RateScheduleDraft

CENTRAL = SalaryCategory.CENTRAL
SKILLED = SalarySubCategory.SKILLED


def _rate(rate_id, start, end=None, *, active=True, amount="800"):
    return RateSchedule(
        rate_schedule_id=rate_id,
        category=CENTRAL,
        sub_category=SKILLED,
        rate_per_day=Decimal(amount),
        effective_from=start,
        effective_to=end,
        is_active=active,
    )


def _draft(start, end=None, *, active=True):
    return RateScheduleDraft(
        category=CENTRAL,
        sub_category=SKILLED,
        rate_per_day=Decimal("850"),
        effective_from=start,
        effective_to=end,
        is_active=active,
    )


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ((datetime(2024, 1, 1), datetime(2024, 3, 31)), (datetime(2024, 4, 1), None), False),
        ((datetime(2024, 1, 1), datetime(2024, 4, 1)), (datetime(2024, 4, 1), None), True),
        ((datetime(2024, 1, 1), None), (datetime(2025, 1, 1), datetime(2025, 2, 1)), True),
        ((datetime(2024, 1, 1), None), (datetime(2023, 1, 1), None), True),
        ((datetime(2024, 6, 1), datetime(2024, 6, 30)), (datetime(2024, 1, 1), datetime(2024, 5, 31)), False),
    ],
)
def test_overlap_is_symmetric(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


def test_interval_overlaps_itself():
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)
    assert intervals_overlap(start, end, start, end)
    assert intervals_overlap(start, None, start, None)


def test_overlapping_active_ignores_inactive_and_excluded_rows():
    rows = [
        _rate(1, datetime(2024, 1, 1)),
        _rate(2, datetime(2024, 1, 1), active=False),
    ]
    assert [r.rate_schedule_id for r in overlapping_active(rows, datetime(2024, 5, 1), None)] == [1]
    assert overlapping_active(rows, datetime(2024, 5, 1), None, exclude_id=1) == []


def test_plan_closes_ongoing_predecessor_at_end_of_previous_day():
    prev = _rate(1, datetime(2024, 1, 1))

    plan = plan_auto_close(_draft(datetime(2024, 4, 1)), [prev])

    assert plan.close == prev
    assert plan.close_to == datetime(2024, 3, 31, 23, 59, 59, 999000)


def test_plan_without_overlap_closes_nothing():
    prev = _rate(1, datetime(2024, 1, 1), datetime(2024, 3, 31))

    plan = plan_auto_close(_draft(datetime(2024, 4, 1)), [prev])

    assert plan.close is None
    assert plan.close_to is None


def test_plan_rejects_overlap_with_bounded_rate():
    prev = _rate(1, datetime(2024, 1, 1), datetime(2024, 6, 30))

    with pytest.raises(ConflictError) as exc:
        plan_auto_close(_draft(datetime(2024, 4, 1)), [prev])

    assert "CENTRAL - SKILLED" in str(exc.value)


def test_plan_rejects_new_rate_starting_before_ongoing_one():
    prev = _rate(1, datetime(2024, 4, 1))

    with pytest.raises(ConflictError):
        plan_auto_close(_draft(datetime(2024, 1, 1), datetime(2024, 12, 31)), [prev])


def test_plan_rejects_same_start_as_ongoing_rate():
    prev = _rate(1, datetime(2024, 4, 1))

    with pytest.raises(ConflictError):
        plan_auto_close(_draft(datetime(2024, 4, 1)), [prev])


def test_plan_rejects_when_close_boundary_would_precede_predecessor_start():
    prev = _rate(1, datetime(2024, 4, 1, 12, 0))

    with pytest.raises(ConflictError):
        plan_auto_close(_draft(datetime(2024, 4, 1, 18, 0)), [prev])


def test_plan_rejects_multiple_overlaps():
    rows = [
        _rate(1, datetime(2024, 1, 1), datetime(2024, 5, 31)),
        _rate(2, datetime(2024, 6, 1)),
    ]

    with pytest.raises(ConflictError):
        plan_auto_close(_draft(datetime(2024, 4, 1)), rows)


def test_inactive_draft_never_conflicts():
    prev = _rate(1, datetime(2024, 1, 1))

    plan = plan_auto_close(_draft(datetime(2024, 4, 1), active=False), [prev])

    assert plan.close is None
