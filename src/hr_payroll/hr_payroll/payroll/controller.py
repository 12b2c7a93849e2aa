from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, envelope, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.payroll_service

    @app.route("/payroll/calculate-payroll", methods=["POST"], endpoint="payroll_calculate")
    @api_errors
    def payroll_calculate():
        body = json_body()
        result = service.calculate_payroll(body.get("companyId"), body.get("payrollMonth"), body.get("adminInputs"))
        return envelope(200, "Payroll calculated successfully", result)

    @app.route("/payroll/finalize", methods=["POST"], endpoint="payroll_finalize")
    @api_errors
    def payroll_finalize():
        body = json_body()
        result = service.finalize_payroll(body.get("companyId"), body.get("payrollMonth"), body.get("payrollRecords"))
        return envelope(201, "Payroll finalized and saved successfully", result)

    @app.route("/payroll/report", methods=["GET"], endpoint="payroll_report")
    @api_errors
    def payroll_report():
        args = request.args
        result = service.get_payroll_report(
            company_id=args.get("companyId"),
            employee_id=args.get("employeeId"),
            start_month=args.get("startMonth"),
            end_month=args.get("endMonth"),
            page=args.get("page"),
            limit=args.get("limit"),
            sort_by=args.get("sortBy"),
            sort_order=args.get("sortOrder"),
        )
        return envelope(200, "Payroll report retrieved successfully", result)

    @app.route("/payroll/by-month/<company_id>/<payroll_month>", methods=["GET"], endpoint="payroll_by_month")
    @api_errors
    def payroll_by_month(company_id: str, payroll_month: str):
        result = service.get_payroll_by_month(company_id, payroll_month)
        return envelope(200, "Payroll records retrieved successfully", result)

    @app.route("/payroll/stats", methods=["GET"], endpoint="payroll_stats")
    @api_errors
    def payroll_stats():
        result = service.get_payroll_stats(
            request.args.get("companyId"),
            request.args.get("startMonth"),
            request.args.get("endMonth"),
        )
        return envelope(200, "Payroll statistics retrieved successfully", result)

    @app.route("/payroll/employee-report/<employee_id>", methods=["GET"], endpoint="payroll_employee_report")
    @api_errors
    def payroll_employee_report(employee_id: str):
        result = service.get_employee_payroll_report(
            employee_id,
            request.args.get("companyId"),
            request.args.get("startMonth"),
            request.args.get("endMonth"),
        )
        return envelope(200, "Employee payroll records retrieved successfully", result)

    @app.route("/payroll/past/<company_id>", methods=["GET"], endpoint="payroll_past")
    @api_errors
    def payroll_past(company_id: str):
        result = service.get_past_payrolls(company_id, request.args.get("page"), request.args.get("limit"))
        return envelope(200, "Past payrolls retrieved successfully", result)
