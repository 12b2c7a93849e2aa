from __future__ import annotations

from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import CalculationType, SalaryFieldPurpose, SalaryFieldType
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.rules import (
    AdminSupplied,
    DefaultValue,
    Fixed,
    LegacyFormula,
    Percentage,
    apply_rule,
    evaluate_field,
    rule_for,
)
from src.hr_payroll.hr_payroll.salary_templates.model import SalaryField, SalaryRules


def _field(key="x", purpose=SalaryFieldPurpose.DEDUCTION, *, type=SalaryFieldType.NUMBER, rules=None, admin=False):
    return SalaryField(key=key, label=key, type=type, purpose=purpose, rules=rules, requires_admin_input=admin)


def _ctx(basic="0", gross=None, monthly="0"):
    return {
        "basicPay": Decimal(basic),
        "grossSalary": Decimal(gross if gross is not None else basic),
        "monthlySalary": Decimal(monthly),
    }


def test_pf_is_twelve_percent_of_basic_pay():
    assert evaluate_field(_field("pf"), _ctx("9000")) == Decimal("1080.00")


def test_esic_uses_gross_salary():
    assert evaluate_field(_field("esic"), _ctx("10000", gross="12000")) == Decimal("90.00")


def test_lwf_is_flat_and_unknown_legacy_key_is_zero():
    assert evaluate_field(_field("lwf"), _ctx()) == Decimal("10.00")
    assert evaluate_field(_field("uniformCharge"), _ctx("9000")) == Decimal("0.00")


def test_rounding_is_half_up_to_the_cent():
    field = _field("hra", rules=SalaryRules(calculation_type=CalculationType.PERCENTAGE, percentage=Decimal("12.5"), based_on="basicPay"))

    assert evaluate_field(field, _ctx("100.02")) == Decimal("12.50")
    assert evaluate_field(field, _ctx("100.04")) == Decimal("12.51")


def test_evaluation_is_repeatable():
    field = _field("pf")
    ctx = _ctx("7333.33")

    assert evaluate_field(field, ctx) == evaluate_field(field, ctx)


def test_admin_value_beats_default_only_when_admin_input_required():
    rules = SalaryRules(default_value=100)

    assert rule_for(_field("adv", rules=rules, admin=True), {"adv": 250}) == AdminSupplied(250)
    assert rule_for(_field("adv", rules=rules, admin=False), {"adv": 250}) == DefaultValue(100)
    assert rule_for(_field("adv", rules=rules, admin=True), {"adv": None}) == DefaultValue(100)


def test_default_beats_percentage_and_fixed():
    rules = SalaryRules(
        default_value=0,
        calculation_type=CalculationType.PERCENTAGE,
        percentage=Decimal("50"),
        based_on="basicPay",
    )

    assert rule_for(_field(rules=rules)) == DefaultValue(0)


def test_calculation_type_variants():
    pct = SalaryRules(calculation_type=CalculationType.PERCENTAGE, percentage=Decimal("10"), based_on="monthlySalary")
    fixed = SalaryRules(calculation_type=CalculationType.FIXED, amount=Decimal("500"))

    assert rule_for(_field(rules=pct)) == Percentage("monthlySalary", Decimal("10"))
    assert rule_for(_field(rules=fixed)) == Fixed(Decimal("500"))
    assert rule_for(_field("pf", rules=SalaryRules())) == LegacyFormula("pf")


def test_percentage_of_unknown_base_is_zero():
    assert apply_rule(Percentage("overtimePay", Decimal("10")), _ctx("9000")) == Decimal("0")
    assert apply_rule(Percentage(None, Decimal("10")), _ctx("9000")) == Decimal("0")


def test_percentage_of_monthly_salary():
    assert apply_rule(Percentage("monthlySalary", Decimal("5")), _ctx(monthly="20000")) == Decimal("1000")


def test_non_numeric_admin_value_is_rejected():
    with pytest.raises(ValidationError) as exc:
        evaluate_field(_field("adv", admin=True), _ctx(), {"adv": "lots"})

    assert "adv" in str(exc.value)


def test_text_fields_yield_strings():
    remark = _field("remark", SalaryFieldPurpose.INFORMATION, type=SalaryFieldType.TEXT, admin=True)
    site = _field("site", SalaryFieldPurpose.INFORMATION, type=SalaryFieldType.TEXT, rules=SalaryRules(default_value="Gate 2"))
    blank = _field("note", SalaryFieldPurpose.INFORMATION, type=SalaryFieldType.TEXT)

    assert evaluate_field(remark, _ctx(), {"remark": "night shift"}) == "night shift"
    assert evaluate_field(site, _ctx()) == "Gate 2"
    assert evaluate_field(blank, _ctx("9000")) == ""


@pytest.mark.parametrize("blank", ["", "  "])
def test_blank_numeric_values_count_as_zero(blank):
    bonus = _field("bonus", SalaryFieldPurpose.ALLOWANCE, rules=SalaryRules(default_value=blank))
    adv = _field("adv", admin=True)

    assert evaluate_field(bonus, _ctx("9000")) == Decimal("0.00")
    assert evaluate_field(adv, _ctx("9000"), {"adv": blank}) == Decimal("0.00")
