from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import now_local
from ..common.http import admin_required, current_role, json_errors, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    @admin_required
    @json_errors
    def dashboard_stats():
        stats = container.dashboard_service.stats(current_role=current_role(), today=now_local().date())
        return ok(stats)
