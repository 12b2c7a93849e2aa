"""Field evaluation rules.

Each template field resolves to exactly one rule variant, and ``apply_rule``
is the only place that knows how a variant turns into an amount.

Priority (first match wins):
    1. admin-supplied value (only for fields that require admin input)
    2. ``rules.defaultValue``
    3. ``rules.calculationType == "percentage"``
    4. ``rules.calculationType == "fixed"``
    5. legacy formula by key (pf, esic, lwf; anything else is 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from ..common.money import D, q2
from ..core.constants import ESIC_RATE, LWF_AMOUNT, PF_RATE
from ..core.enums import BasedOn, CalculationType, SalaryFieldType
from ..core.exceptions import ValidationError
from ..salary_templates.model import SalaryField

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class AdminSupplied:
    value: Any


@dataclass(frozen=True)
class DefaultValue:
    value: Any


@dataclass(frozen=True)
class Percentage:
    based_on: Optional[str]
    percentage: Decimal


@dataclass(frozen=True)
class Fixed:
    amount: Decimal


@dataclass(frozen=True)
class LegacyFormula:
    key: str


Rule = Union[AdminSupplied, DefaultValue, Percentage, Fixed, LegacyFormula]

_BASES = {b.value for b in BasedOn}


def rule_for(field: SalaryField, admin_input: Optional[Mapping[str, Any]] = None) -> Rule:
    admin_input = admin_input or {}
    if field.requires_admin_input and admin_input.get(field.key) is not None:
        return AdminSupplied(admin_input[field.key])

    rules = field.rules
    if rules is not None:
        if rules.has_default:
            return DefaultValue(rules.default_value)
        if rules.calculation_type is CalculationType.PERCENTAGE:
            return Percentage(rules.based_on, rules.percentage or ZERO)
        if rules.calculation_type is CalculationType.FIXED:
            return Fixed(rules.amount or ZERO)

    return LegacyFormula(field.key)


def _number(value: Any, what: str) -> Decimal:
    if isinstance(value, str) and not value.strip():
        return ZERO
    try:
        return D(value)
    except ValueError:
        raise ValidationError(f"Invalid numeric value for {what}: {value!r}") from None


def apply_rule(rule: Rule, context: Mapping[str, Decimal]) -> Decimal:
    """Unrounded amount for ``rule`` given the running salary context."""
    if isinstance(rule, AdminSupplied):
        return _number(rule.value, "admin input")
    if isinstance(rule, DefaultValue):
        return _number(rule.value, "default value")
    if isinstance(rule, Percentage):
        if rule.based_on not in _BASES:
            return ZERO
        return D(context.get(rule.based_on, ZERO)) * rule.percentage / HUNDRED
    if isinstance(rule, Fixed):
        return rule.amount
    if isinstance(rule, LegacyFormula):
        if rule.key == "pf":
            return D(context.get(BasedOn.BASIC_PAY.value, ZERO)) * PF_RATE
        if rule.key == "esic":
            return D(context.get(BasedOn.GROSS_SALARY.value, ZERO)) * ESIC_RATE
        if rule.key == "lwf":
            return LWF_AMOUNT
        return ZERO
    raise TypeError(f"Unknown rule variant: {type(rule).__name__}")


def evaluate_field(
    field: SalaryField,
    context: Mapping[str, Decimal],
    admin_input: Optional[Mapping[str, Any]] = None,
) -> Union[Decimal, str]:
    """Value of one field: a cent-rounded Decimal, or a string for TEXT fields."""
    rule = rule_for(field, admin_input)

    if field.type is SalaryFieldType.TEXT:
        if isinstance(rule, (AdminSupplied, DefaultValue)):
            return str(rule.value)
        return ""

    try:
        return q2(apply_rule(rule, context))
    except ValidationError as e:
        raise ValidationError(f"{e} (field {field.key})") from None
