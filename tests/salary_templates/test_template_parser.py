from __future__ import annotations

import json
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import CalculationType, SalaryFieldPurpose, SalaryFieldType
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.salary_templates.model import SalaryTemplate
from src.hr_payroll.hr_payroll.salary_templates.parser import INVALID_TEMPLATE, parse_template, resolve_basic_duty
from tests.fakes import BASIC_DUTY_30, number_field, template


def test_fields_keep_mandatory_optional_custom_order():
    tpl = template(
        mandatory=[BASIC_DUTY_30, number_field("pf", "DEDUCTION")],
        optional=[number_field("hra", "ALLOWANCE", {"calculationType": "percentage", "percentage": 10, "basedOn": "basicPay"})],
        custom=[number_field("advanceTaken", "DEDUCTION", requiresAdminInput=True)],
    )

    parsed = parse_template(tpl)

    assert [f.key for f in parsed.fields] == ["basicDuty", "pf", "hra", "advanceTaken"]
    assert [f.key for f in parsed.allowance_fields] == ["hra"]
    assert [f.key for f in parsed.deduction_fields] == ["pf", "advanceTaken"]
    assert [f.key for f in parsed.admin_input_fields] == ["advanceTaken"]
    hra = parsed.allowance_fields[0]
    assert hra.type is SalaryFieldType.NUMBER
    assert hra.purpose is SalaryFieldPurpose.ALLOWANCE
    assert hra.rules.calculation_type is CalculationType.PERCENTAGE
    assert hra.rules.percentage == Decimal("10")


def test_disabled_fields_are_dropped():
    tpl = template(
        mandatory=[BASIC_DUTY_30],
        optional=[number_field("lwf", "DEDUCTION", enabled=False), number_field("bonus", "ALLOWANCE")],
    )

    parsed = parse_template(tpl)

    assert [f.key for f in parsed.fields] == ["basicDuty", "bonus"]


def test_json_text_columns_are_decoded():
    tpl = SalaryTemplate(
        template_id=1,
        company_id="c-1",
        mandatory_fields=json.dumps([BASIC_DUTY_30]),
        optional_fields=b"[]",
        custom_fields=None,
    )

    parsed = parse_template(tpl)

    assert [f.key for f in parsed.fields] == ["basicDuty"]


def test_unknown_calculation_type_is_ignored():
    tpl = template(mandatory=[number_field("pf", "DEDUCTION", {"calculationType": "slab"})])

    field = parse_template(tpl).fields[0]

    assert field.rules.calculation_type is None


def test_display_only_types_are_read_as_text():
    status = {"key": "salaryPaidStatus", "label": "Paid?", "type": "SELECT", "purpose": "INFORMATION"}
    tpl = template(mandatory=[BASIC_DUTY_30], optional=[status])

    parsed = parse_template(tpl)

    assert [f.key for f in parsed.fields] == ["basicDuty", "salaryPaidStatus"]
    assert parsed.fields[1].type is SalaryFieldType.TEXT


@pytest.mark.parametrize(
    "flag, expected",
    [("false", False), ("0", False), (False, False), ("true", True), (True, True), (None, False)],
)
def test_requires_admin_input_string_flags(flag, expected):
    tpl = template(custom=[number_field("advanceTaken", "DEDUCTION", requiresAdminInput=flag)])

    parsed = parse_template(tpl)

    assert parsed.fields[0].requires_admin_input is expected
    assert len(parsed.admin_input_fields) == int(expected)


@pytest.mark.parametrize(
    "bad_fields",
    [
        "{not json",
        {"key": "pf"},
        [{"label": "no key", "type": "NUMBER", "purpose": "DEDUCTION"}],
        [{"key": "pf", "type": "NUMBER", "purpose": "DEDUCTION", "requiresAdminInput": "sometimes"}],
        [{"key": "pf", "type": "NUMBER", "purpose": "BONUS"}],
        [{"key": "pf", "type": "NUMBER", "purpose": "DEDUCTION", "rules": {"percentage": "ten"}}],
        ["pf"],
    ],
)
def test_malformed_template_is_rejected(bad_fields):
    tpl = SalaryTemplate(template_id=1, company_id="c-1", mandatory_fields=bad_fields, optional_fields=[], custom_fields=[])

    with pytest.raises(ValidationError) as exc:
        parse_template(tpl)

    assert str(exc.value) == INVALID_TEMPLATE


def test_basic_duty_from_template_default():
    tpl = template(mandatory=[number_field("basicDuty", "CALCULATION", {"defaultValue": "26"})])

    assert resolve_basic_duty(parse_template(tpl)) == Decimal("26")


@pytest.mark.parametrize(
    "fields",
    [
        [],
        [number_field("basicDuty", "CALCULATION")],
        [number_field("basicDuty", "CALCULATION", {"defaultValue": 0})],
        [number_field("basicDuty", "CALCULATION", {"defaultValue": "n/a"})],
        [number_field("basicDuty", "INFORMATION", {"defaultValue": 26})],
    ],
)
def test_basic_duty_falls_back_to_thirty(fields):
    assert resolve_basic_duty(parse_template(template(mandatory=fields))) == Decimal("30")
