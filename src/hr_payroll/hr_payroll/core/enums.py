from __future__ import annotations

from enum import Enum
from typing import Type, TypeVar

from .exceptions import ValidationError

E = TypeVar("E", bound=Enum)


class SalaryCategory(str, Enum):
    """Government wage classification used to look up a statutory rate."""

    CENTRAL = "CENTRAL"
    STATE = "STATE"
    SPECIALIZED = "SPECIALIZED"


class SalarySubCategory(str, Enum):
    SKILLED = "SKILLED"
    UNSKILLED = "UNSKILLED"
    HIGHSKILLED = "HIGHSKILLED"
    SEMISKILLED = "SEMISKILLED"


class SalaryFieldType(str, Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"


class SalaryFieldPurpose(str, Enum):
    """How a template field takes part in the salary totals."""

    INFORMATION = "INFORMATION"
    CALCULATION = "CALCULATION"
    ALLOWANCE = "ALLOWANCE"
    DEDUCTION = "DEDUCTION"


class CalculationType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class BasedOn(str, Enum):
    BASIC_PAY = "basicPay"
    MONTHLY_SALARY = "monthlySalary"
    GROSS_SALARY = "grossSalary"


class PayrollOutcome(str, Enum):
    """Terminal state of one employee in a payroll calculation."""

    COMPUTED = "COMPUTED"
    SKIPPED_NO_HISTORY = "SKIPPED_NO_HISTORY"
    SKIPPED_NOT_EMPLOYED = "SKIPPED_NOT_EMPLOYED"
    ERROR = "ERROR"


def parse_enum(enum_cls: Type[E], value: object, field_name: str) -> E:
    """Parse a raw value into ``enum_cls`` or raise ValidationError listing allowed values."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name}. Allowed values: {allowed}") from None
