from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.money import as_amount, q2
from ..core.enums import BasedOn, SalaryFieldPurpose
from ..core.exceptions import ValidationError
from ..employees.model import Employee, EmploymentHistory
from ..salary_templates.model import ParsedTemplate
from .calculator.base import WageCalculator, WageInputs
from .rules import ZERO, evaluate_field

# Older templates list the deductions total under this singular key.
TOTAL_DEDUCTION_ALIAS = "totalDeduction"


def calculate_employee_salary(
    *,
    employee: Employee,
    employment: EmploymentHistory,
    template: ParsedTemplate,
    basic_duty: Decimal,
    present_days: Decimal,
    year: int,
    month: int,
    wage_calculator: WageCalculator,
    admin_input: Optional[Mapping[str, Any]] = None,
) -> dict[str, Any]:
    """Salary sheet row for one employee.

    Fields are evaluated in template order. ``grossSalary`` in the evaluation
    context is basic pay plus the allowances evaluated so far, so a
    percentage-of-grossSalary field only sees allowances listed before it.
    """
    if present_days < 0:
        raise ValidationError(f"Present days cannot be negative for employee {employee.employee_id}")

    inputs = WageInputs(employee=employee, employment=employment, basic_duty=basic_duty, year=year, month=month)
    monthly_salary = inputs.monthly_salary
    wages_per_day = wage_calculator.wages_per_day(inputs)
    basic_pay = wages_per_day * present_days

    derived: dict[str, Any] = {
        "monthlySalary": as_amount(monthly_salary),
        "wagesPerDay": as_amount(wages_per_day),
        "basicDuty": float(basic_duty),
        "dutyDone": float(present_days),
        "basicPay": as_amount(basic_pay),
    }
    salary: dict[str, Any] = dict(derived)

    total_allowances = ZERO
    total_deductions = ZERO

    for field in template.fields:
        context = {
            BasedOn.BASIC_PAY.value: basic_pay,
            BasedOn.MONTHLY_SALARY.value: monthly_salary,
            BasedOn.GROSS_SALARY.value: basic_pay + total_allowances,
            "presentDays": present_days,
            "basicDuty": basic_duty,
        }
        value = evaluate_field(field, context, admin_input)

        if isinstance(value, str):
            salary[field.key] = value
            continue

        if field.purpose is SalaryFieldPurpose.ALLOWANCE:
            total_allowances += value
        elif field.purpose is SalaryFieldPurpose.DEDUCTION:
            total_deductions += value
        salary[field.key] = float(value)

    # Computed values win over template fields with the same key.
    salary.update(derived)

    gross_salary = basic_pay + total_allowances
    salary["totalAllowances"] = as_amount(total_allowances)
    salary["grossSalary"] = as_amount(gross_salary)
    salary["totalDeductions"] = as_amount(total_deductions)
    if TOTAL_DEDUCTION_ALIAS in salary:
        salary[TOTAL_DEDUCTION_ALIAS] = salary["totalDeductions"]
    salary["netSalary"] = as_amount(q2(gross_salary) - total_deductions)

    if employment.company_name:
        salary["companyName"] = employment.company_name
    if employee.full_name:
        salary["employeeName"] = employee.full_name
    if employment.designation_name:
        salary["designation"] = employment.designation_name
    if employment.salary:
        salary["monthlyPay"] = as_amount(employment.salary)
    if employee.father_name:
        salary["fatherName"] = employee.father_name
    if employee.uan_number:
        salary["uanNumber"] = employee.uan_number

    return salary
