from __future__ import annotations

import math
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Mapping, Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_month
from ..common.logging_config import get_logger
from ..common.money import as_amount
from ..common.validators import parse_page, require_non_empty
from ..companies.model import Company
from ..companies.repository import CompanyRepository
from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.enums import PayrollOutcome
from ..core.exceptions import DomainError, InternalError, NotFoundError, ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..salary_templates.model import ParsedTemplate
from ..salary_templates.parser import parse_template, resolve_basic_duty
from ..salary_templates.repository import SalaryTemplateRepository
from .breakdown import calculate_employee_salary
from .calculator.factory import WageCalculatorFactory
from .model import SalaryRecord
from .repository import SORTABLE_FIELDS, PayrollRepository

logger = get_logger("payroll")

NO_HISTORY = "No employment history found"
NOT_EMPLOYED = "Employee is not currently employed by this company"
CALCULATION_FAILED = "Failed to calculate salary"


@contextmanager
def _unexpected_errors(message: str, operation: str, **context: Any):
    """Re-raise domain errors as they are; log anything else and hide it behind ``message``."""
    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        logger.exception(message, extra={"operation": operation, **context})
        raise InternalError(f"{message} due to an unexpected error") from e


def _optional_month(value: Optional[str], field_name: str) -> Optional[str]:
    if not value:
        return None
    parse_month(value, field_name)
    return value


def _paged(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "hasNextPage": page * limit < total,
        "hasPrevPage": page > 1,
    }


class PayrollService:
    """Payroll engine (preview), finalize into the ledger, and ledger reports."""

    def __init__(
        self,
        companies: CompanyRepository,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        templates: SalaryTemplateRepository,
        payroll: PayrollRepository,
        *,
        wage_calculators: WageCalculatorFactory,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._companies = companies
        self._employees = employees
        self._attendance = attendance
        self._templates = templates
        self._payroll = payroll
        self._wage_calculators = wage_calculators
        self._page_size = page_size

    def _require_company(self, company_id: object) -> Company:
        company_id = require_non_empty(company_id, "companyId")
        company = self._companies.find_by_id(company_id)
        if not company:
            raise NotFoundError(f"Company with ID {company_id} not found")
        return company

    # ----------------------------------------------------------------- engine

    def calculate_payroll(
        self,
        company_id: object,
        payroll_month: object,
        admin_inputs: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> dict:
        year, month = parse_month(payroll_month)
        if admin_inputs is not None and not isinstance(admin_inputs, Mapping):
            raise ValidationError("adminInputs must be an object keyed by employee ID")
        admin_inputs = admin_inputs or {}
        if not all(isinstance(v, Mapping) for v in admin_inputs.values() if v is not None):
            raise ValidationError("adminInputs values must be objects keyed by field")

        with _unexpected_errors("Failed to calculate payroll", "payroll.calculate", company_id=company_id, month=payroll_month):
            company = self._require_company(company_id)

            template = self._templates.get_latest_for_company(company.company_id)
            if not template:
                raise NotFoundError(f"Salary template for company ID {company.company_id} not found")

            employees = list(self._employees.find_employees_by_company(company.company_id))
            if not employees:
                raise NotFoundError(f"No employees found for company ID {company.company_id}")

            parsed = parse_template(template)
            basic_duty = resolve_basic_duty(parsed)

            self._validate_admin_inputs(employees, parsed, admin_inputs)

            attendance = self._attendance.get_attendance_by_month(
                [e.employee_id for e in employees], company.company_id, payroll_month
            )
            present_by_employee = {a.employee_id: a.present_count for a in attendance}

            results = [
                self._calculate_one(
                    serial,
                    employee,
                    company_id=company.company_id,
                    parsed=parsed,
                    basic_duty=basic_duty,
                    present_days=present_by_employee.get(employee.employee_id, Decimal("0")),
                    year=year,
                    month=month,
                    admin_input=admin_inputs.get(employee.employee_id) or {},
                )
                for serial, employee in enumerate(employees, start=1)
            ]

        logger.info(
            "Calculated payroll for %s employees",
            len(results),
            extra={"company_id": company.company_id, "month": payroll_month},
        )
        return {
            "companyName": company.name,
            "payrollMonth": payroll_month,
            "totalEmployees": len(employees),
            "payrollResults": results,
        }

    def _validate_admin_inputs(
        self,
        employees: Sequence[Employee],
        parsed: ParsedTemplate,
        admin_inputs: Mapping[str, Mapping[str, Any]],
    ) -> None:
        required = parsed.admin_input_fields
        if not required:
            return

        missing: list[str] = []
        for employee in employees:
            given = admin_inputs.get(employee.employee_id) or {}
            for field in required:
                if given.get(field.key) is None:
                    missing.append(f"Employee {employee.employee_id} ({employee.full_name}): {field.label}")

        if missing:
            raise ValidationError("Missing admin input for required custom fields:\n" + "\n".join(missing))

    def _calculate_one(
        self,
        serial: int,
        employee: Employee,
        *,
        company_id: str,
        parsed: ParsedTemplate,
        basic_duty: Decimal,
        present_days: Decimal,
        year: int,
        month: int,
        admin_input: Mapping[str, Any],
    ) -> dict:
        entry: dict[str, Any] = {
            "serialNumber": serial,
            "employeeId": employee.employee_id,
            "employeeName": employee.full_name,
        }

        def failed(outcome: PayrollOutcome, message: str) -> dict:
            return {**entry, "status": outcome.value, "error": message}

        try:
            history = self._employees.get_employment_history(employee.employee_id)
            if not history:
                logger.warning("Skipping employee without employment history", extra={"employee_id": employee.employee_id})
                return failed(PayrollOutcome.SKIPPED_NO_HISTORY, NO_HISTORY)

            current = next((h for h in history if h.is_current_for(company_id)), None)
            if current is None:
                logger.warning(
                    "Skipping employee not currently employed by company",
                    extra={"employee_id": employee.employee_id, "company_id": company_id},
                )
                return failed(PayrollOutcome.SKIPPED_NOT_EMPLOYED, NOT_EMPLOYED)

            salary = calculate_employee_salary(
                employee=employee,
                employment=current,
                template=parsed,
                basic_duty=basic_duty,
                present_days=present_days,
                year=year,
                month=month,
                wage_calculator=self._wage_calculators.for_employee(employee),
                admin_input=admin_input,
            )
        except DomainError as e:
            logger.warning(
                "Error calculating salary for employee %s: %s", employee.employee_id, e,
                extra={"company_id": company_id},
            )
            return failed(PayrollOutcome.ERROR, str(e))
        except Exception:
            logger.exception(
                "Error calculating salary for employee %s", employee.employee_id,
                extra={"company_id": company_id},
            )
            return failed(PayrollOutcome.ERROR, CALCULATION_FAILED)

        salary["serialNumber"] = serial
        return {
            **entry,
            "status": PayrollOutcome.COMPUTED.value,
            "presentDays": float(present_days),
            "salary": salary,
        }

    # --------------------------------------------------------------- finalize

    def finalize_payroll(self, company_id: object, payroll_month: object, payroll_records: object) -> dict:
        parse_month(payroll_month)

        with _unexpected_errors("Failed to finalize payroll", "payroll.finalize", company_id=company_id, month=payroll_month):
            company = self._require_company(company_id)

            if not isinstance(payroll_records, (list, tuple)) or not payroll_records:
                raise ValidationError("No payroll records provided")

            # Every record is checked before the first write.
            for record in payroll_records:
                if (
                    not isinstance(record, Mapping)
                    or not record.get("employeeId")
                    or not isinstance(record.get("salary"), Mapping)
                    or not record.get("salary")
                ):
                    raise ValidationError("Each record must have employeeId and salary")

            for record in payroll_records:
                self._payroll.save_salary_record(
                    employee_id=str(record["employeeId"]),
                    company_id=company.company_id,
                    company_name=company.name,
                    month=payroll_month,
                    salary_data=record["salary"],
                )

        logger.info(
            "Finalized payroll with %s records",
            len(payroll_records),
            extra={"company_id": company.company_id, "month": payroll_month},
        )
        return {
            "companyId": company.company_id,
            "payrollMonth": payroll_month,
            "totalRecords": len(payroll_records),
        }

    # ---------------------------------------------------------------- reports

    def get_payroll_report(
        self,
        *,
        company_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
        page: object = None,
        limit: object = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> dict:
        page_i, limit_i = parse_page(page, limit, default_limit=self._page_size)
        sort_by = sort_by or "month"
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(f"Invalid sortBy. Allowed values: {', '.join(SORTABLE_FIELDS)}")
        sort_order = (sort_order or "desc").lower()
        if sort_order not in ("asc", "desc"):
            raise ValidationError("Invalid sortOrder. Allowed values: asc, desc")

        records, total = self._payroll.find_records(
            company_id=company_id or None,
            employee_id=employee_id or None,
            start_month=_optional_month(start_month, "startMonth"),
            end_month=_optional_month(end_month, "endMonth"),
            sort_column=sort_by,
            descending=sort_order == "desc",
            skip=(page_i - 1) * limit_i,
            take=limit_i,
        )
        return {"records": [r.to_dict() for r in records], "total": total, **_paged(page_i, limit_i, total)}

    def get_payroll_by_month(self, company_id: str, payroll_month: str) -> dict:
        parse_month(payroll_month)
        company = self._require_company(company_id)
        records = self._payroll.get_company_payroll_by_month(company.company_id, payroll_month)

        summary = {
            "totalEmployees": len(records),
            "totalGrossSalary": as_amount(sum((r.amount("grossSalary") for r in records), Decimal("0"))),
            "totalDeductions": as_amount(sum((r.amount("totalDeductions") for r in records), Decimal("0"))),
            "totalNetSalary": as_amount(sum((r.amount("netSalary") for r in records), Decimal("0"))),
        }
        return {
            "companyName": company.name,
            "payrollMonth": payroll_month,
            "summary": summary,
            "records": [r.to_dict() for r in records],
        }

    def get_payroll_stats(
        self,
        company_id: Optional[str],
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> dict:
        company = self._require_company(company_id)
        records = self._payroll.get_company_records(
            company.company_id,
            start_month=_optional_month(start_month, "startMonth"),
            end_month=_optional_month(end_month, "endMonth"),
        )

        total_net = sum((r.amount("netSalary") for r in records), Decimal("0"))
        statistics = {
            "totalRecords": len(records),
            "totalEmployees": len({r.employee_id for r in records}),
            "monthsWithData": len({r.month for r in records}),
            "avgMonthlySalary": as_amount(total_net / len(records)) if records else 0.0,
        }
        return {
            "companyName": company.name,
            "period": {"startMonth": start_month, "endMonth": end_month},
            "statistics": statistics,
        }

    def get_employee_payroll_report(
        self,
        employee_id: str,
        company_id: Optional[str] = None,
        start_month: Optional[str] = None,
        end_month: Optional[str] = None,
    ) -> dict:
        employee_id = require_non_empty(employee_id, "employeeId")
        records = self._payroll.get_employee_records(
            employee_id,
            company_id=company_id or None,
            start_month=_optional_month(start_month, "startMonth"),
            end_month=_optional_month(end_month, "endMonth"),
        )
        return {
            "employeeId": employee_id,
            "companyId": company_id,
            "startMonth": start_month,
            "endMonth": end_month,
            "records": [r.to_dict() for r in records],
        }

    def get_past_payrolls(self, company_id: str, page: object = None, limit: object = None) -> dict:
        page_i, limit_i = parse_page(page, limit, default_limit=self._page_size)
        company = self._require_company(company_id)

        months, total_months = self._payroll.list_months(
            company.company_id, skip=(page_i - 1) * limit_i, take=limit_i
        )
        groups = []
        for month in months:
            records: Sequence[SalaryRecord] = self._payroll.get_company_payroll_by_month(company.company_id, month)
            groups.append(
                {
                    "month": month,
                    "employeeCount": len(records),
                    "totalNetSalary": as_amount(sum((r.amount("netSalary") for r in records), Decimal("0"))),
                    "records": [r.to_dict() for r in records],
                }
            )

        return {
            "companyName": company.name,
            "records": groups,
            "totalPages": math.ceil(total_months / limit_i),
            "currentPage": page_i,
        }
