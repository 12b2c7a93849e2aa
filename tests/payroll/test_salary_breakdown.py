from __future__ import annotations

from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.exceptions import ValidationError
from src.hr_payroll.hr_payroll.payroll.breakdown import calculate_employee_salary
from src.hr_payroll.hr_payroll.payroll.calculator.standard_calculator import StandardWageCalculator
from src.hr_payroll.hr_payroll.salary_templates.parser import parse_template
from tests.fakes import BASIC_DUTY_30, current_job, employee, number_field, template


def _fixed(amount):
    return {"calculationType": "fixed", "amount": amount}


def _pct(percentage, based_on):
    return {"calculationType": "percentage", "percentage": percentage, "basedOn": based_on}


def _calc(key):
    return number_field(key, "CALCULATION")


def _salary(tpl, *, monthly="30000", days="30", admin_input=None, emp=None, job=None):
    emp = emp or employee("e-1", "Ravi", "Kumar")
    return calculate_employee_salary(
        employee=emp,
        employment=job or current_job(emp.employee_id, monthly),
        template=parse_template(tpl),
        basic_duty=Decimal("30"),
        present_days=Decimal(days),
        year=2025,
        month=6,
        wage_calculator=StandardWageCalculator(),
        admin_input=admin_input,
    )


def test_totals_and_net_salary():
    tpl = template(
        mandatory=[BASIC_DUTY_30, number_field("pf", "DEDUCTION")],
        optional=[number_field("hra", "ALLOWANCE", _pct(10, "basicPay")), number_field("lwf", "DEDUCTION")],
    )

    salary = _salary(tpl, days="15")

    assert salary["wagesPerDay"] == 1000.0
    assert salary["basicPay"] == 15000.0
    assert salary["hra"] == 1500.0
    assert salary["pf"] == 1800.0
    assert salary["lwf"] == 10.0
    assert salary["totalAllowances"] == 1500.0
    assert salary["grossSalary"] == 16500.0
    assert salary["totalDeductions"] == 1810.0
    assert salary["netSalary"] == 14690.0
    assert salary["employeeName"] == "Ravi Kumar"
    assert salary["monthlyPay"] == 30000.0


def test_net_equals_gross_minus_deductions_with_awkward_rates():
    tpl = template(
        mandatory=[number_field("pf", "DEDUCTION"), number_field("esic", "DEDUCTION")],
        optional=[
            number_field("conveyance", "ALLOWANCE", _pct("3.33", "basicPay")),
            number_field("washing", "ALLOWANCE", _fixed("123.455")),
        ],
    )

    salary = _salary(tpl, monthly="17777", days="23.5")

    allowance_sum = Decimal(str(salary["conveyance"])) + Decimal(str(salary["washing"]))
    deduction_sum = Decimal(str(salary["pf"])) + Decimal(str(salary["esic"]))
    assert Decimal(str(salary["totalAllowances"])) == allowance_sum
    assert Decimal(str(salary["totalDeductions"])) == deduction_sum
    assert Decimal(str(salary["netSalary"])) == Decimal(str(salary["grossSalary"])) - deduction_sum
    gross_drift = Decimal(str(salary["grossSalary"])) - Decimal(str(salary["basicPay"])) - allowance_sum
    assert abs(gross_drift) <= Decimal("0.01")


def test_zero_attendance_gives_zero_percentage_and_legacy_amounts():
    tpl = template(
        mandatory=[number_field("pf", "DEDUCTION"), number_field("esic", "DEDUCTION")],
        optional=[number_field("hra", "ALLOWANCE", _pct(10, "basicPay"))],
    )

    salary = _salary(tpl, days="0")

    assert salary["basicPay"] == 0.0
    assert salary["hra"] == 0.0
    assert salary["pf"] == 0.0
    assert salary["esic"] == 0.0
    assert salary["netSalary"] == 0.0


def test_gross_salary_base_only_sees_earlier_allowances():
    tpl = template(
        optional=[
            number_field("bonus", "ALLOWANCE", _fixed(1000)),
            number_field("welfare", "DEDUCTION", _pct(10, "grossSalary")),
            number_field("special", "ALLOWANCE", _fixed(500)),
            number_field("levy", "DEDUCTION", _pct(10, "grossSalary")),
        ],
    )

    salary = _salary(tpl, monthly="10000")

    assert salary["welfare"] == 1100.0
    assert salary["levy"] == 1150.0
    assert salary["grossSalary"] == 11500.0
    assert salary["netSalary"] == 9250.0


def test_information_and_text_fields_do_not_count_towards_totals():
    tpl = template(
        optional=[number_field("attendanceBonusDays", "INFORMATION", {"defaultValue": 2})],
        custom=[
            {"key": "remark", "label": "Remark", "type": "TEXT", "purpose": "INFORMATION", "requiresAdminInput": True},
            number_field("advanceTaken", "DEDUCTION", requiresAdminInput=True),
        ],
    )

    salary = _salary(tpl, admin_input={"remark": "night shift", "advanceTaken": "500"})

    assert salary["attendanceBonusDays"] == 2.0
    assert salary["remark"] == "night shift"
    assert salary["advanceTaken"] == 500.0
    assert salary["totalAllowances"] == 0.0
    assert salary["totalDeductions"] == 500.0
    assert salary["netSalary"] == 29500.0


def test_negative_attendance_is_rejected():
    with pytest.raises(ValidationError):
        _salary(template(), days="-1")


def test_computed_values_survive_template_fields_with_the_same_key():
    tpl = template(
        mandatory=[
            BASIC_DUTY_30,
            _calc("monthlyPay"),
            _calc("wagesPerDay"),
            _calc("monthlySalary"),
            _calc("basicPay"),
            _calc("grossSalary"),
            _calc("netSalary"),
            _calc("totalDeduction"),
            number_field("pf", "DEDUCTION"),
        ],
    )

    salary = _salary(tpl, days="30")

    assert salary["wagesPerDay"] == 1000.0
    assert salary["monthlySalary"] == 30000.0
    assert salary["basicPay"] == 30000.0
    assert salary["basicDuty"] == 30.0
    assert salary["monthlyPay"] == 30000.0
    assert salary["grossSalary"] == 30000.0
    assert salary["totalDeduction"] == 3600.0
    assert salary["totalDeductions"] == 3600.0
    assert salary["netSalary"] == 26400.0


def test_select_field_is_reported_but_not_summed():
    status = {
        "key": "salaryPaidStatus",
        "label": "Salary paid",
        "type": "SELECT",
        "purpose": "ALLOWANCE",
        "rules": {"defaultValue": "Unpaid"},
    }
    tpl = template(mandatory=[BASIC_DUTY_30], optional=[status])

    salary = _salary(tpl)

    assert salary["salaryPaidStatus"] == "Unpaid"
    assert salary["totalAllowances"] == 0.0
    assert salary["netSalary"] == 30000.0
