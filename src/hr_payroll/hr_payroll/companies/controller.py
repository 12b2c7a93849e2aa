from __future__ import annotations

from flask import Flask, request

from ..common.http import api_errors, envelope
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/companies", methods=["GET"], endpoint="companies_list")
    @api_errors
    def companies_list():
        result = container.company_service.list(
            name=request.args.get("name"),
            status=request.args.get("status"),
            page=request.args.get("page"),
            limit=request.args.get("limit"),
        )
        return envelope(200, "Companies retrieved successfully", result)
