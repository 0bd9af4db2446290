from __future__ import annotations

from decimal import Decimal

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_employee_id, current_role, json_body, json_errors, login_required, ok
from ..common.validators import clamp_working_days, parse_amount, parse_int, require_month, require_year
from ..core.enums import PaymentStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .model import SalaryDraft

ZERO = Decimal("0.00")

_MIMETYPES = {"text": "text/plain", "html": "text/html"}


def _parse_payment_status(value) -> PaymentStatus:
    try:
        return PaymentStatus(str(value or PaymentStatus.UNPAID.value).strip().lower())
    except ValueError:
        raise ValidationError("Payment status must be paid or unpaid")


def _draft_from(data: dict, container: Container) -> SalaryDraft:
    return SalaryDraft(
        employee_id=parse_int(data.get("employee_id"), "Employee"),
        year=require_year(data.get("year")),
        month=require_month(data.get("month")),
        basic_salary=parse_amount(data.get("basic_salary"), "Basic salary"),
        hra=parse_amount(data.get("hra"), "HRA", default=ZERO),
        allowance=parse_amount(data.get("allowance"), "Allowance", default=ZERO),
        total_working_days=clamp_working_days(data.get("total_working_days"), default=container.default_working_days),
        present_days=parse_int(data.get("present_days"), "Present days", default=0),
        half_days=parse_int(data.get("half_days"), "Half days", default=0),
        deduction=parse_amount(data.get("deduction"), "Deduction", default=ZERO),
        pf_percentage=parse_amount(data.get("pf_percentage"), "PF percentage", default=container.default_pf_percentage),
        payment_status=_parse_payment_status(data["payment_status"]) if data.get("payment_status") else None,
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salaries", methods=["GET"], endpoint="list_salaries")
    @admin_required
    @json_errors
    def list_salaries():
        employee_id = parse_int(request.args["employee_id"], "Employee") if request.args.get("employee_id") else None
        records = container.salary_service.list_salaries(employee_id=employee_id)
        return ok([r.as_dict() for r in records])

    @app.route("/api/salaries", methods=["POST"], endpoint="create_salary")
    @admin_required
    @json_errors
    def create_salary():
        draft = _draft_from(json_body(), container)
        salary_id = container.salary_service.create_salary(
            current_role=current_role(), draft=draft, today=now_local().date()
        )
        return ok(container.salary_service.get_salary(salary_id).as_dict(), 201)

    @app.route("/api/salaries/preview", methods=["POST"], endpoint="preview_salary")
    @admin_required
    @json_errors
    def preview_salary():
        data = json_body()
        preview = container.salary_service.preview(
            current_role=current_role(),
            employee_id=parse_int(data.get("employee_id"), "Employee"),
            year=require_year(data.get("year")),
            month=require_month(data.get("month")),
            total_working_days=clamp_working_days(
                data.get("total_working_days"), default=container.default_working_days
            ),
            deduction=parse_amount(data.get("deduction"), "Deduction", default=ZERO),
            pf_percentage=parse_amount(data.get("pf_percentage"), "PF percentage", default=container.default_pf_percentage),
        )
        return ok(preview)

    @app.route("/api/salaries/me", methods=["GET"], endpoint="my_salaries")
    @login_required
    @json_errors
    def my_salaries():
        records = container.salary_service.list_salaries(employee_id=current_employee_id())
        return ok([r.as_dict() for r in records])

    @app.route("/api/salaries/<int:salary_id>", methods=["GET"], endpoint="get_salary")
    @admin_required
    @json_errors
    def get_salary(salary_id: int):
        return ok(container.salary_service.get_salary(salary_id).as_dict())

    @app.route("/api/salaries/<int:salary_id>", methods=["PUT"], endpoint="update_salary")
    @admin_required
    @json_errors
    def update_salary(salary_id: int):
        record = container.salary_service.update_salary(
            current_role=current_role(),
            salary_id=salary_id,
            draft=_draft_from(json_body(), container),
            today=now_local().date(),
        )
        return ok(record.as_dict())

    @app.route("/api/salaries/<int:salary_id>", methods=["DELETE"], endpoint="delete_salary")
    @admin_required
    @json_errors
    def delete_salary(salary_id: int):
        container.salary_service.delete_salary(current_role=current_role(), salary_id=salary_id)
        return ok()

    @app.route("/api/salaries/<int:salary_id>/payment", methods=["PATCH"], endpoint="set_payment_status")
    @admin_required
    @json_errors
    def set_payment_status(salary_id: int):
        data = json_body()
        record = container.salary_service.set_payment_status(
            current_role=current_role(),
            salary_id=salary_id,
            status=_parse_payment_status(data.get("payment_status")),
            today=now_local().date(),
        )
        return ok(record.as_dict())

    @app.route("/api/salaries/<int:salary_id>/slip", methods=["GET"], endpoint="salary_slip")
    @login_required
    @json_errors
    def salary_slip(salary_id: int):
        fmt = (request.args.get("format") or "text").lower()
        body = container.salary_service.render_slip(
            current_role=current_role(),
            current_employee_id=current_employee_id(),
            salary_id=salary_id,
            fmt=fmt,
        )
        return app.response_class(body, mimetype=_MIMETYPES.get(fmt, "text/plain"))
