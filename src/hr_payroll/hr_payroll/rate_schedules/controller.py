from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, envelope, json_body
from ..container import Container
from ..core.exceptions import ValidationError

PREFIX = "/salary-rate-schedule"


def register(app: Flask, container: Container) -> None:
    service = container.rate_schedule_service

    @app.route(PREFIX, methods=["POST"], endpoint="rate_schedule_create")
    @api_errors
    def rate_schedule_create():
        body = json_body()
        rate = service.create(
            category=body.get("category"),
            sub_category=body.get("subCategory"),
            rate_per_day=body.get("ratePerDay"),
            effective_from=body.get("effectiveFrom"),
            effective_to=body.get("effectiveTo"),
            is_active=body.get("isActive", True),
        )
        return envelope(201, "Salary rate schedule created successfully", rate.to_dict())

    @app.route(PREFIX, methods=["GET"], endpoint="rate_schedule_list")
    @api_errors
    def rate_schedule_list():
        result = service.list(
            category=request.args.get("category"),
            sub_category=request.args.get("subCategory"),
            is_active=request.args.get("isActive"),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return envelope(200, "Salary rate schedules retrieved successfully", result)

    @app.route(f"{PREFIX}/<int:rate_schedule_id>", methods=["GET"], endpoint="rate_schedule_get")
    @api_errors
    def rate_schedule_get(rate_schedule_id: int):
        rate = service.get_by_id(rate_schedule_id)
        return envelope(200, "Salary rate schedule retrieved successfully", rate.to_dict())

    @app.route(f"{PREFIX}/<int:rate_schedule_id>", methods=["PUT"], endpoint="rate_schedule_update")
    @api_errors
    def rate_schedule_update(rate_schedule_id: int):
        rate = service.update(rate_schedule_id, json_body())
        return envelope(200, "Salary rate schedule updated successfully", rate.to_dict())

    @app.route(f"{PREFIX}/<int:rate_schedule_id>", methods=["DELETE"], endpoint="rate_schedule_delete")
    @api_errors
    def rate_schedule_delete(rate_schedule_id: int):
        rate = service.delete(rate_schedule_id)
        return envelope(200, "Salary rate schedule deleted successfully", rate.to_dict())

    @app.route(f"{PREFIX}/active/<category>/<sub_category>", methods=["GET"], endpoint="rate_schedule_active")
    @api_errors
    def rate_schedule_active(category: str, sub_category: str):
        rates = service.get_active_rates_by_category(category, sub_category)
        return envelope(200, "Active salary rate schedules retrieved successfully", [r.to_dict() for r in rates])

    @app.route(f"{PREFIX}/rate-for-date/<category>/<sub_category>", methods=["GET"], endpoint="rate_schedule_for_date")
    @api_errors
    def rate_schedule_for_date(category: str, sub_category: str):
        date_s = request.args.get("date")
        if not date_s:
            raise ValidationError("Date parameter is required")

        rate = service.get_rate_for_date(category, sub_category, date_s)
        if not rate:
            return envelope(404, f"No rate schedule found for {category} - {sub_category} on {date_s}")
        return envelope(200, "Rate schedule retrieved successfully", rate.to_dict())
