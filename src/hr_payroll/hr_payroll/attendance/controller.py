from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_employee_id, current_role, json_body, json_errors, login_required, ok
from ..common.validators import clamp_working_days, parse_date, parse_int, require_month, require_year
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import Role
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="checkin")
    @login_required
    @json_errors
    def checkin():
        attendance_id = container.attendance_service.check_in(current_employee_id(), now=now_local())
        return ok({"id": attendance_id}, 201, message="Checked in successfully")

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="checkout")
    @login_required
    @json_errors
    def checkout():
        record = container.attendance_service.check_out(current_employee_id(), now=now_local())
        return ok(container.attendance_service.to_row(record), message="Checked out successfully")

    @app.route("/api/attendance/me", methods=["GET"], endpoint="my_attendance")
    @login_required
    @json_errors
    def my_attendance():
        limit = parse_int(request.args.get("limit"), "Limit", default=DEFAULT_HISTORY_LIMIT)
        employee_id = current_employee_id()
        today = container.attendance_service.get_today_record(employee_id, now_local().date())
        return ok(
            {
                "today": container.attendance_service.to_row(today) if today else None,
                "history": container.attendance_service.history(employee_id, limit=limit),
            }
        )

    @app.route("/api/attendance/daily", methods=["GET"], endpoint="daily_attendance")
    @admin_required
    @json_errors
    def daily_attendance():
        work_date = parse_date(request.args.get("date"), "Date", default=now_local().date())
        return ok(container.attendance_service.daily_overview(work_date))

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="mark_attendance")
    @admin_required
    @json_errors
    def mark_attendance():
        data = json_body()
        attendance_id = container.attendance_service.mark_attendance(
            current_role=current_role(),
            employee_id=parse_int(data.get("employee_id"), "Employee"),
            work_date=parse_date(data.get("date"), "Date"),
            check_in=data.get("check_in") or None,
            check_out=data.get("check_out") or None,
        )
        return ok({"id": attendance_id}, message="Attendance marked successfully")

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    @json_errors
    def attendance_summary():
        """Monthly counts; admins may ask for any employee, others get their own."""

        today = now_local().date()
        employee_id = current_employee_id()
        if request.args.get("employee_id") and current_role() == Role.ADMIN:
            employee_id = parse_int(request.args.get("employee_id"), "Employee")

        year = require_year(request.args.get("year"), default=today.year)
        month = require_month(request.args.get("month") or today.month)
        days = clamp_working_days(request.args.get("total_working_days"), default=container.default_working_days)

        summary = container.attendance_service.monthly_summary(
            employee_id, year=year, month=month, total_working_days=days
        )
        return ok({"employee_id": employee_id, "year": year, "month": month, **summary.as_dict()})
