from __future__ import annotations

import pytest
import requests
from requests.cookies import RequestsCookieJar

from src.hr_payroll.hr_payroll.client.api_client import AuthenticatedClient
from src.hr_payroll.hr_payroll.client.session import SessionContext
from src.hr_payroll.hr_payroll.core.exceptions import ApiError


class FakeResponse:
    def __init__(self, status_code: int, body=None, *, text: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text
        self.headers = {"Content-Type": "application/json"} if body is not None else {"Content-Type": "text/plain"}

    def json(self):
        if self._body is None:
            raise ValueError("no json")
        return self._body


class FakeHttp:
    """Stands in for requests.Session; replays queued responses in order."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []
        self.cookies = RequestsCookieJar()

    def post(self, url, **kwargs):
        return self.request("POST", url, **kwargs)

    def request(self, method, url, **kwargs):
        self.calls.append((method, url))
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


LOGIN_OK = FakeResponse(200, {"success": True, "data": {"id": 1, "username": "admin", "role": "admin"}})


def _client(*responses):
    http = FakeHttp(responses)
    ctx = SessionContext(base_url="http://hr.local/", username="admin", password="admin123", http=http)
    return AuthenticatedClient(ctx), http


def test_first_request_logs_in():
    client, http = _client(LOGIN_OK, FakeResponse(200, {"success": True, "data": [1, 2]}))

    assert client.get("/api/employees") == [1, 2]
    assert http.calls == [("POST", "http://hr.local/api/auth/login"), ("GET", "http://hr.local/api/employees")]
    assert client.context.user["username"] == "admin"


def test_401_refreshes_once_and_replays():
    client, http = _client(
        LOGIN_OK,
        FakeResponse(401, {"success": False, "message": "Please log in to continue"}),
        LOGIN_OK,
        FakeResponse(200, {"success": True, "data": {"ok": True}}),
    )

    assert client.post("/api/attendance/check-in") == {"ok": True}
    assert [c[0] for c in http.calls] == ["POST", "POST", "POST", "POST"]
    assert http.calls[2][1].endswith("/api/auth/login")


def test_second_401_is_raised():
    client, _ = _client(
        LOGIN_OK,
        FakeResponse(401, {"success": False, "message": "Please log in to continue"}),
        LOGIN_OK,
        FakeResponse(401, {"success": False, "message": "Please log in to continue"}),
    )
    with pytest.raises(ApiError) as exc:
        client.get("/api/auth/me")
    assert exc.value.status_code == 401


def test_error_message_is_surfaced():
    client, _ = _client(LOGIN_OK, FakeResponse(409, {"success": False, "message": "Salary record already exists"}))
    with pytest.raises(ApiError, match="already exists") as exc:
        client.post("/api/salaries", {"employee_id": 2})
    assert exc.value.status_code == 409


def test_failed_login_raises():
    client, _ = _client(FakeResponse(401, {"success": False, "message": "Invalid username or password"}))
    with pytest.raises(ApiError, match="Invalid username or password"):
        client.get("/api/auth/me")
    assert not client.context.is_authenticated


def test_network_error_becomes_api_error():
    client, _ = _client(LOGIN_OK, requests.ConnectionError("boom"))
    with pytest.raises(ApiError, match="failed"):
        client.get("/api/auth/me")


def test_slip_returns_text_body():
    client, http = _client(LOGIN_OK, FakeResponse(200, text="SALARY SLIP"))
    assert client.salary_slip(5) == "SALARY SLIP"
    assert http.calls[-1] == ("GET", "http://hr.local/api/salaries/5/slip")


def test_non_object_json_bodies_raise_api_error():
    client, _ = _client(LOGIN_OK, FakeResponse(500, ["boom"]))
    with pytest.raises(ApiError) as err:
        client.get("/api/salaries")
    assert err.value.status_code == 500
    assert str(err.value) == "HTTP 500"

    client, _ = _client(LOGIN_OK, FakeResponse(200, "plain string"))
    with pytest.raises(ApiError, match="Unexpected response body"):
        client.get("/api/salaries")


def test_login_with_list_body_raises_api_error():
    client, _ = _client(FakeResponse(200, [1, 2]))
    with pytest.raises(ApiError):
        client.get("/api/employees")
