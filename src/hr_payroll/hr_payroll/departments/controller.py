from __future__ import annotations

from flask import Flask, request

from ..common.http import admin_required, current_role, json_body, json_errors, login_required, ok
from ..container import Container


def _is_active(data: dict) -> bool:
    # The form sends a status select ("active" / "inactive"); API callers may send a bool.
    if "status" in data:
        return str(data["status"]).lower() == "active"
    return bool(data.get("is_active", True))


def register(app: Flask, container: Container) -> None:
    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @login_required
    @json_errors
    def list_departments():
        active_only = request.args.get("active") in ("1", "true")
        return ok([d.as_dict() for d in container.department_service.list_all(active_only=active_only)])

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    @admin_required
    @json_errors
    def create_department():
        data = json_body()
        dept_id = container.department_service.create(
            current_role=current_role(), name=data.get("name", ""), is_active=_is_active(data)
        )
        return ok(container.department_service.get(dept_id).as_dict(), 201)

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="update_department")
    @admin_required
    @json_errors
    def update_department(department_id: int):
        data = json_body()
        container.department_service.update(
            current_role=current_role(),
            department_id=department_id,
            name=data.get("name", ""),
            is_active=_is_active(data),
        )
        return ok(container.department_service.get(department_id).as_dict())

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="delete_department")
    @admin_required
    @json_errors
    def delete_department(department_id: int):
        container.department_service.delete(current_role=current_role(), department_id=department_id)
        return ok()
