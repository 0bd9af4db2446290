from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_employee_id, current_role, json_body, json_errors, login_required, ok
from ..common.validators import parse_date
from ..core.enums import LeaveStatus
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_status(value) -> LeaveStatus:
    try:
        return LeaveStatus(str(value or "").strip().upper())
    except ValueError:
        raise ValidationError("Status must be one of PENDING, APPROVED, REJECTED")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @admin_required
    @json_errors
    def list_leaves():
        status = _parse_status(request.args["status"]) if request.args.get("status") else None
        return ok(container.leave_service.list_all(status=status))

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_leave")
    @login_required
    @json_errors
    def apply_leave():
        data = json_body()
        leave_id = container.leave_service.apply(
            employee_id=current_employee_id(),
            from_date=parse_date(data.get("from_date"), "From date"),
            to_date=parse_date(data.get("to_date"), "To date"),
            reason=data.get("reason", ""),
        )
        return ok({"id": leave_id}, 201, message="Leave request submitted")

    @app.route("/api/leaves/me", methods=["GET"], endpoint="my_leaves")
    @login_required
    @json_errors
    def my_leaves():
        return ok(container.leave_service.list_for_employee(current_employee_id()))

    @app.route("/api/leaves/<int:leave_id>", methods=["PATCH"], endpoint="set_leave_status")
    @admin_required
    @json_errors
    def set_leave_status(leave_id: int):
        data = json_body()
        container.leave_service.set_status(
            current_role=current_role(), leave_id=leave_id, status=_parse_status(data.get("status"))
        )
        return ok(message="Leave status updated")
