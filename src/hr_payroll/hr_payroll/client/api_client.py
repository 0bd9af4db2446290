from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from ..core.exceptions import ApiError
from .session import SessionContext, envelope_data, error_message

logger = logging.getLogger(__name__)


class AuthenticatedClient:
    """Single authenticated-request path for the HR API.

    Retry policy: a 401 triggers one session refresh and one replay of the
    request. Any other failure is raised as ``ApiError`` immediately.
    """

    def __init__(self, context: SessionContext):
        self._ctx = context

    @property
    def context(self) -> SessionContext:
        return self._ctx

    def _send(self, method: str, path: str, **kwargs):
        try:
            return self._ctx.http.request(method, self._ctx.url(path), timeout=self._ctx.timeout, **kwargs)
        except requests.RequestException as e:
            raise ApiError(f"{method} {path} failed: {e}") from e

    def request(self, method: str, path: str, **kwargs) -> Any:
        if not self._ctx.is_authenticated:
            self._ctx.refresh()

        resp = self._send(method, path, **kwargs)
        if resp.status_code == 401:
            logger.info("%s %s returned 401, refreshing session", method, path)
            self._ctx.refresh()
            resp = self._send(method, path, **kwargs)

        if not 200 <= resp.status_code < 300:
            raise ApiError(error_message(resp), status_code=resp.status_code)

        if resp.headers.get("Content-Type", "").startswith("application/json"):
            return envelope_data(resp)
        return resp.text

    def get(self, path: str, *, params: Optional[dict] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Optional[dict] = None) -> Any:
        return self.request("POST", path, json=payload or {})

    def put(self, path: str, payload: dict) -> Any:
        return self.request("PUT", path, json=payload)

    def patch(self, path: str, payload: dict) -> Any:
        return self.request("PATCH", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    # Convenience wrappers for the payroll screens
    def attendance_summary(self, *, employee_id: int, year: int, month: int, total_working_days: int) -> dict:
        return self.get(
            "/api/attendance/summary",
            params={
                "employee_id": employee_id,
                "year": year,
                "month": month,
                "total_working_days": total_working_days,
            },
        )

    def salary_preview(self, payload: dict) -> dict:
        return self.post("/api/salaries/preview", payload)

    def salary_slip(self, salary_id: int, *, fmt: str = "text") -> str:
        return self.get(f"/api/salaries/{int(salary_id)}/slip", params={"format": fmt})
