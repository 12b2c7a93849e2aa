"""Turns stored salary templates into ordered, typed field descriptors."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping, Sequence

from ..common.logging_config import get_logger
from ..common.money import D
from ..common.validators import parse_bool
from ..core.constants import BASIC_DUTY_FIELD_KEY, DEFAULT_BASIC_DUTY
from ..core.enums import CalculationType, SalaryFieldPurpose, SalaryFieldType
from ..core.exceptions import ValidationError
from .model import ParsedTemplate, SalaryField, SalaryRules, SalaryTemplate

logger = get_logger("salary_templates")

INVALID_TEMPLATE = "Invalid salary template configuration"


class _Malformed(Exception):
    pass


def _field_list(raw: Any) -> Sequence[Mapping[str, Any]]:
    if raw is None:
        return []
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            raise _Malformed(f"bad JSON: {e}") from e
    if not isinstance(raw, (list, tuple)):
        raise _Malformed("field list must be an array")
    return raw


def _optional_decimal(value: Any):
    if value is None or value == "":
        return None
    try:
        return D(value)
    except ValueError as e:
        raise _Malformed(str(e)) from e


def _parse_rules(raw: Any) -> SalaryRules | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping):
        raise _Malformed("rules must be an object")

    calc = raw.get("calculationType")
    try:
        calculation_type = CalculationType(calc) if calc else None
    except ValueError:
        # Unknown calculation types fall through to the legacy formulas.
        calculation_type = None

    return SalaryRules(
        default_value=raw.get("defaultValue"),
        calculation_type=calculation_type,
        percentage=_optional_decimal(raw.get("percentage")),
        based_on=raw.get("basedOn"),
        amount=_optional_decimal(raw.get("amount")),
    )


def _parse_field(raw: Any) -> SalaryField:
    if not isinstance(raw, Mapping):
        raise _Malformed("field must be an object")
    for required in ("key", "type", "purpose"):
        if not raw.get(required):
            raise _Malformed(f"field is missing {required}")
    try:
        purpose = SalaryFieldPurpose(raw["purpose"])
    except ValueError as e:
        raise _Malformed(str(e)) from e
    try:
        field_type = SalaryFieldType(raw["type"])
    except ValueError:
        # SELECT, DATE and other display types carry their value as text.
        field_type = SalaryFieldType.TEXT
    try:
        requires_admin_input = parse_bool(raw.get("requiresAdminInput"), "requiresAdminInput") or False
    except ValidationError as e:
        raise _Malformed(str(e)) from e

    return SalaryField(
        key=str(raw["key"]),
        label=str(raw.get("label") or raw["key"]),
        type=field_type,
        purpose=purpose,
        category=raw.get("category"),
        enabled=raw.get("enabled") is not False,
        rules=_parse_rules(raw.get("rules")),
        requires_admin_input=requires_admin_input,
    )


def parse_template(template: SalaryTemplate) -> ParsedTemplate:
    """Flatten mandatory, optional and custom fields (in that order) and drop disabled ones."""
    try:
        mandatory = [_parse_field(f) for f in _field_list(template.mandatory_fields)]
        optional = [_parse_field(f) for f in _field_list(template.optional_fields)]
        custom = [_parse_field(f) for f in _field_list(template.custom_fields)]
    except _Malformed as e:
        logger.error(
            "Error parsing salary template: %s",
            e,
            extra={"template_id": template.template_id, "company_id": template.company_id},
        )
        raise ValidationError(INVALID_TEMPLATE) from e

    fields = tuple(f for f in mandatory + optional + custom if f.enabled)

    def by_purpose(purpose: SalaryFieldPurpose) -> tuple[SalaryField, ...]:
        return tuple(f for f in fields if f.purpose is purpose)

    return ParsedTemplate(
        fields=fields,
        custom_fields=tuple(f for f in custom if f.enabled),
        allowance_fields=by_purpose(SalaryFieldPurpose.ALLOWANCE),
        deduction_fields=by_purpose(SalaryFieldPurpose.DEDUCTION),
        information_fields=by_purpose(SalaryFieldPurpose.INFORMATION),
        calculation_fields=by_purpose(SalaryFieldPurpose.CALCULATION),
    )


def resolve_basic_duty(parsed: ParsedTemplate) -> Decimal:
    """Divisor for per-day wages: the ``basicDuty`` calculation field's default, else 30."""
    field = parsed.find_calculation_field(BASIC_DUTY_FIELD_KEY)
    if field is None:
        logger.warning("Basic duty field not found in salary template, using default value of %s", DEFAULT_BASIC_DUTY)
        return Decimal(DEFAULT_BASIC_DUTY)

    raw = field.rules.default_value if field.rules else None
    try:
        value = D(raw) if raw not in (None, "") else None
    except ValueError:
        value = None
    if value is None or value <= 0:
        logger.warning("Basic duty has no usable default, using default value of %s", DEFAULT_BASIC_DUTY)
        return Decimal(DEFAULT_BASIC_DUTY)
    return value
