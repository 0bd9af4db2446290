from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from flask import Flask, request, session

from ..common.http import admin_required, current_employee_id, current_role, json_body, json_errors, login_required, ok
from ..common.validators import parse_amount, parse_date, parse_int
from ..core.constants import DEFAULT_SESSION_DAYS
from ..container import Container
from .model import EmployeeFields

ZERO = Decimal("0.00")


def _fields_from(data: dict) -> EmployeeFields:
    department = data.get("department")
    return EmployeeFields(
        first_name=data.get("first_name", ""),
        last_name=data.get("last_name", ""),
        email=data.get("email", ""),
        contact_no=(data.get("contact_no") or None),
        department_id=parse_int(department, "Department") if department not in (None, "") else None,
        designation=data.get("designation") or None,
        date_of_joining=parse_date(data["date_of_joining"], "Date of joining") if data.get("date_of_joining") else None,
        is_active=str(data.get("is_active", True)).lower() not in ("false", "0"),
        address=data.get("address") or None,
        bank_name=data.get("bank_name") or None,
        bank_account_number=data.get("bank_account_number") or None,
        ifsc_code=data.get("ifsc_code") or None,
        basic_salary=parse_amount(data.get("basic_salary"), "Basic salary", default=ZERO),
        hra=parse_amount(data.get("hra"), "HRA", default=ZERO),
        allowance=parse_amount(data.get("allowance"), "Allowance", default=ZERO),
    )


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = json_body()
        s_user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.permanent = bool(data.get("remember_me"))
        app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

        session["employee_id"] = s_user.employee_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return ok(s_user.as_dict())

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok()

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @login_required
    @json_errors
    def me():
        data = container.employee_service.get_profile(current_employee_id())
        data["department_name"] = container.department_service.name_for(data["department"])
        return ok(data)

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @admin_required
    @json_errors
    def list_employees():
        active_only = request.args.get("active") in ("1", "true")
        employees = container.employee_service.list_employees(active_only=active_only)
        return ok([e.public_dict() for e in employees])

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @admin_required
    @json_errors
    def create_employee():
        data = json_body()
        employee_id = container.employee_service.create_employee(
            current_role=current_role(),
            username=data.get("username", ""),
            password=data.get("password", ""),
            fields=_fields_from(data),
        )
        return ok(container.employee_service.get_employee(employee_id).public_dict(), 201)

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @admin_required
    @json_errors
    def get_employee(employee_id: int):
        return ok(container.employee_service.get_employee(employee_id).public_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    @json_errors
    def update_employee(employee_id: int):
        data = json_body()
        container.employee_service.update_employee(
            current_role=current_role(),
            employee_id=employee_id,
            fields=_fields_from(data),
            password=data.get("password") or None,
        )
        return ok(container.employee_service.get_employee(employee_id).public_dict())

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="deactivate_employee")
    @admin_required
    @json_errors
    def deactivate_employee(employee_id: int):
        container.employee_service.deactivate_employee(current_role=current_role(), employee_id=employee_id)
        return ok()
