from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time, timedelta, timezone

from ..core.exceptions import ValidationError

MONTH_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")

END_OF_DAY = time(23, 59, 59, 999000)


def parse_iso_datetime(value: object, field_name: str = "date") -> datetime:
    """Parse an ISO-8601 date or datetime into a naive UTC datetime.

    Accepts a trailing ``Z``; aware values are converted to UTC first.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ValidationError(
                f"Invalid {field_name}. Use ISO 8601 format (e.g., 2024-04-15)"
            ) from None
    else:
        raise ValidationError(f"{field_name} is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso(value: datetime | None) -> str | None:
    """Serialize a naive UTC datetime with millisecond precision and ``Z``."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"


def end_of_previous_day(value: datetime) -> datetime:
    """``value`` minus one day, at 23:59:59.999."""
    return datetime.combine((value - timedelta(days=1)).date(), END_OF_DAY)


def parse_month(value: object, field_name: str = "payrollMonth") -> tuple[int, int]:
    """Validate a ``YYYY-MM`` month string and return (year, month)."""
    m = MONTH_RE.match(value) if isinstance(value, str) else None
    if not m:
        raise ValidationError(f"Invalid {field_name} format. Expected YYYY-MM, got: {value}")
    return int(m.group(1)), int(m.group(2))


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def now_utc() -> datetime:
    """Current naive UTC time.

    Note: Wrapped so tests can patch it.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)
