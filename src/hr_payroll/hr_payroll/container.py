from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_PAGE_SIZE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .payroll.calculator.factory import WageCalculatorFactory
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.service import PayrollService
from .rate_schedules.mysql_rate_schedule_repository import MySQLRateScheduleRepository
from .rate_schedules.service import RateScheduleService
from .salary_templates.mysql_salary_template_repository import MySQLSalaryTemplateRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    companies_repo: MySQLCompanyRepository
    employees_repo: MySQLEmployeeRepository
    attendance_repo: MySQLAttendanceRepository
    templates_repo: MySQLSalaryTemplateRepository
    rate_schedules_repo: MySQLRateScheduleRepository
    payroll_repo: MySQLPayrollRepository

    company_service: CompanyService
    rate_schedule_service: RateScheduleService
    payroll_service: PayrollService


def build_container(*, db_config: dict, page_size: int = DEFAULT_PAGE_SIZE) -> Container:
    conn = DatabaseConnection.for_config(DBConfig.from_settings(db_config))

    companies_repo = MySQLCompanyRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    templates_repo = MySQLSalaryTemplateRepository(conn)
    rate_schedules_repo = MySQLRateScheduleRepository(conn)
    payroll_repo = MySQLPayrollRepository(conn)

    company_service = CompanyService(companies_repo, page_size=page_size)
    rate_schedule_service = RateScheduleService(rate_schedules_repo, page_size=page_size)
    payroll_service = PayrollService(
        companies_repo,
        employees_repo,
        attendance_repo,
        templates_repo,
        payroll_repo,
        wage_calculators=WageCalculatorFactory(rate_lookup=rate_schedule_service.get_active_rate),
        page_size=page_size,
    )

    return Container(
        conn=conn,
        companies_repo=companies_repo,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        templates_repo=templates_repo,
        rate_schedules_repo=rate_schedules_repo,
        payroll_repo=payroll_repo,
        company_service=company_service,
        rate_schedule_service=rate_schedule_service,
        payroll_service=payroll_service,
    )
