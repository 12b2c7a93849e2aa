from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")


def D(val: Any) -> Decimal:
    """Coerce ``val`` to Decimal; raises ValueError for non-numeric input."""
    if isinstance(val, Decimal):
        return val
    if isinstance(val, bool) or val is None:
        raise ValueError(f"Not a number: {val!r}")
    try:
        out = Decimal(str(val).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {val!r}") from None
    if not out.is_finite():
        raise ValueError(f"Not a number: {val!r}")
    return out


def q2(val: Decimal) -> Decimal:
    """Round to the cent, halves away from zero."""
    return D(val).quantize(CENT, rounding=ROUND_HALF_UP)


def as_amount(val: Decimal) -> float:
    """Rounded money value in the JSON-friendly form stored in salary data."""
    return float(q2(val))
