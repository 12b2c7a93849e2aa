from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from ..core.exceptions import ValidationError
from .money import D


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_positive_amount(value: Any, field_name: str) -> Decimal:
    try:
        amount = D(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be a number") from None
    if amount <= 0:
        raise ValidationError(f"{field_name} must be greater than 0")
    return amount


def parse_bool(value: Any, field_name: str) -> Optional[bool]:
    """Accept JSON booleans and the usual query-string spellings."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "1", "yes"}:
        return True
    if text in {"false", "0", "no"}:
        return False
    raise ValidationError(f"{field_name} must be a boolean")


def parse_page(page: Any, limit: Any, *, default_limit: int = DEFAULT_PAGE_SIZE) -> tuple[int, int]:
    try:
        page_i = int(page) if page not in (None, "") else 1
        limit_i = int(limit) if limit not in (None, "") else default_limit
    except (TypeError, ValueError):
        raise ValidationError("page and limit must be integers") from None
    if page_i < 1:
        raise ValidationError("page must be at least 1")
    if not 1 <= limit_i <= MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    return page_i, limit_i
