from __future__ import annotations

from datetime import datetime

import pytest

from src.hr_payroll.hr_payroll.main import create_app


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/api/auth/login", json={"username": username, "password": password})


@pytest.fixture
def admin(client):
    assert login(client, "admin", "admin123").status_code == 200
    return client


@pytest.fixture
def employee(client):
    assert login(client, "john", "john1234").status_code == 200
    return client


def _salary_payload(**overrides):
    payload = {
        "employee_id": 2,
        "year": 2026,
        "month": 10,
        "basic_salary": "20000",
        "hra": "8000",
        "allowance": "3000",
        "total_working_days": 26,
        "present_days": 24,
        "half_days": 1,
    }
    payload.update(overrides)
    return payload


def test_login_and_me(client):
    resp = login(client, "john", "john1234")
    assert resp.status_code == 200
    assert resp.get_json() == {
        "success": True,
        "data": {"id": 2, "username": "john", "full_name": "John Doe", "role": "employee"},
    }

    me = client.get("/api/auth/me").get_json()["data"]
    assert me["emp_code"] == "EMPJOH0001"
    assert me["department_name"] == "Engineering"
    assert "password_hash" not in me


def test_bad_login_is_401(client):
    resp = login(client, "john", "nope")
    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Invalid username or password"}


def test_anonymous_is_401_and_employee_is_403(client):
    assert client.get("/api/employees").status_code == 401
    login(client, "john", "john1234")
    assert client.get("/api/employees").status_code == 403


def test_logout_clears_session(employee):
    assert employee.post("/api/auth/logout").status_code == 200
    assert employee.get("/api/auth/me").status_code == 401


def test_non_json_body_is_400(client):
    resp = client.post("/api/auth/login", data="username=john", content_type="application/x-www-form-urlencoded")
    assert resp.status_code == 400


def test_employee_crud(admin):
    resp = admin.post(
        "/api/employees",
        json={
            "username": "priya",
            "password": "secret12",
            "first_name": "Priya",
            "last_name": "Nair",
            "email": "priya@example.com",
            "contact_no": "9000000001",
            "department": "2",
            "date_of_joining": "2026-02-01",
            "basic_salary": "25000",
        },
    )
    assert resp.status_code == 201
    created = resp.get_json()["data"]
    assert created["emp_code"].startswith("EMPPRI")
    assert created["basic_salary"] == "25000.00"

    emp_id = created["id"]
    resp = admin.put(
        f"/api/employees/{emp_id}",
        json={"first_name": "Priya", "last_name": "Menon", "email": "priya@example.com", "department": 2},
    )
    assert resp.get_json()["data"]["last_name"] == "Menon"

    assert admin.delete(f"/api/employees/{emp_id}").status_code == 200
    assert admin.get(f"/api/employees/{emp_id}").get_json()["data"]["is_active"] is False
    assert admin.get("/api/employees/999").status_code == 404


def test_employee_validation_error_is_400(admin):
    resp = admin.post("/api/employees", json={"username": "x", "password": "secret12", "first_name": "X", "email": "bad"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_departments(admin):
    resp = admin.post("/api/departments", json={"name": "Legal", "status": "inactive"})
    assert resp.status_code == 201
    assert resp.get_json()["data"]["status"] == "inactive"

    names = [d["name"] for d in admin.get("/api/departments?active=1").get_json()["data"]]
    assert "Legal" not in names

    dept_id = resp.get_json()["data"]["id"]
    assert admin.put(f"/api/departments/{dept_id}", json={"name": "Legal", "status": "active"}).status_code == 200
    assert admin.delete(f"/api/departments/{dept_id}").status_code == 200
    assert admin.delete(f"/api/departments/{dept_id}").status_code == 404


def test_check_in_and_out(employee, monkeypatch):
    from src.hr_payroll.hr_payroll.attendance import controller

    monkeypatch.setattr(controller, "now_local", lambda: datetime(2026, 10, 19, 9, 0, 0))
    assert employee.post("/api/attendance/check-in").status_code == 201
    assert employee.post("/api/attendance/check-in").status_code == 400

    monkeypatch.setattr(controller, "now_local", lambda: datetime(2026, 10, 19, 13, 30, 0))
    row = employee.post("/api/attendance/check-out").get_json()["data"]
    assert row["status"] == "Half Day"
    assert row["total_hours"] == "4h 30m 0s"

    mine = employee.get("/api/attendance/me").get_json()["data"]
    assert mine["today"]["status"] == "Half Day"
    assert len(mine["history"]) == 1


def test_mark_and_summary(admin):
    resp = admin.post(
        "/api/attendance/mark",
        json={"employee_id": 2, "date": "2026-10-05", "check_in": "09:00", "check_out": "17:00"},
    )
    assert resp.status_code == 200

    summary = admin.get("/api/attendance/summary?employee_id=2&year=2026&month=10&total_working_days=40")
    assert summary.get_json()["data"] == {
        "employee_id": 2,
        "year": 2026,
        "month": 10,
        "total_working_days": 31,
        "present_days": 1,
        "half_days": 0,
        "absent_days": 30,
    }

    daily = admin.get("/api/attendance/daily?date=2026-10-05").get_json()["data"]
    assert daily["present_count"] == 1


def test_summary_bad_month_is_400(admin):
    assert admin.get("/api/attendance/summary?year=2026&month=13").status_code == 400


def test_leave_flow(client):
    login(client, "john", "john1234")
    resp = client.post("/api/leaves", json={"from_date": "2026-11-02", "to_date": "2026-11-03", "reason": "Trip"})
    assert resp.status_code == 201
    leave_id = resp.get_json()["data"]["id"]
    assert client.patch(f"/api/leaves/{leave_id}", json={"status": "APPROVED"}).status_code == 403

    client.post("/api/auth/logout")
    login(client, "admin", "admin123")
    assert client.patch(f"/api/leaves/{leave_id}", json={"status": "approved"}).status_code == 200
    assert client.patch(f"/api/leaves/{leave_id}", json={"status": "maybe"}).status_code == 400
    rows = client.get("/api/leaves?status=APPROVED").get_json()["data"]
    assert [r["id"] for r in rows] == [leave_id]

    client.post("/api/auth/logout")
    login(client, "john", "john1234")
    assert client.get("/api/leaves/me").get_json()["data"][0]["status"] == "APPROVED"


def test_salary_lifecycle(client, monkeypatch):
    from src.hr_payroll.hr_payroll.payroll import controller

    monkeypatch.setattr(controller, "now_local", lambda: datetime(2026, 10, 31, 18, 0, 0))
    login(client, "admin", "admin123")

    resp = client.post("/api/salaries", json=_salary_payload(net_salary="99999"))
    assert resp.status_code == 201
    record = resp.get_json()["data"]
    assert record["net_salary"] == "26811.54"
    assert record["pf_percentage"] == "12.00"
    assert record["absent_days"] == 1

    assert client.post("/api/salaries", json=_salary_payload()).status_code == 409

    salary_id = record["id"]
    paid = client.patch(f"/api/salaries/{salary_id}/payment", json={"payment_status": "paid"}).get_json()["data"]
    assert paid["payment_status"] == "paid"
    assert paid["payment_date"] == "2026-10-31"

    updated = client.put(f"/api/salaries/{salary_id}", json=_salary_payload(deduction="500.50", payment_status="paid"))
    assert updated.get_json()["data"]["net_salary"] == "26311.04"
    assert updated.get_json()["data"]["payment_date"] == "2026-10-31"

    kept = client.put(f"/api/salaries/{salary_id}", json=_salary_payload(deduction="500.50")).get_json()["data"]
    assert kept["payment_status"] == "paid"
    assert kept["payment_date"] == "2026-10-31"

    client.post("/api/auth/logout")
    login(client, "john", "john1234")
    assert [s["id"] for s in client.get("/api/salaries/me").get_json()["data"]] == [salary_id]

    slip = client.get(f"/api/salaries/{salary_id}/slip")
    assert slip.status_code == 200
    assert slip.mimetype == "text/plain"
    assert "₹ 26311.04" in slip.get_data(as_text=True)

    html = client.get(f"/api/salaries/{salary_id}/slip?format=html")
    assert html.mimetype == "text/html"
    assert client.get(f"/api/salaries/{salary_id}/slip?format=pdf").status_code == 400
    assert client.get(f"/api/salaries/{salary_id}").status_code == 403


def test_salary_preview(admin):
    admin.post("/api/attendance/mark", json={"employee_id": 2, "date": "2026-10-05", "check_in": "09:00", "check_out": "17:00"})
    resp = admin.post("/api/salaries/preview", json={"employee_id": 2, "year": 2026, "month": 10})
    data = resp.get_json()["data"]
    assert data["total_working_days"] == 26
    assert data["present_days"] == 1
    assert data["pf_amount"] == "2400.00"


def test_unexpected_error_is_500(admin, container, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.salary_service, "list_salaries", boom)
    resp = admin.get("/api/salaries")
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal server error"}


@pytest.mark.parametrize("year", ["0", "10000", "abc"])
def test_out_of_range_year_is_400(admin, year):
    resp = admin.get(f"/api/attendance/summary?employee_id=2&year={year}&month=1")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False

    assert admin.post("/api/salaries", json=_salary_payload(year=int(year) if year.isdigit() else year)).status_code == 400
    preview = admin.post("/api/salaries/preview", json={"employee_id": 2, "year": year, "month": 10})
    assert preview.status_code == 400


def test_dashboard_stats(client, monkeypatch):
    from src.hr_payroll.hr_payroll.dashboard import controller

    monkeypatch.setattr(controller, "now_local", lambda: datetime(2026, 10, 19, 12, 0, 0))
    login(client, "john", "john1234")
    assert client.get("/api/dashboard/stats").status_code == 403
    client.post("/api/leaves", json={"from_date": "2026-10-20", "to_date": "2026-10-21", "reason": "Family"})

    client.post("/api/auth/logout")
    login(client, "admin", "admin123")
    client.post("/api/attendance/mark", json={"employee_id": 2, "date": "2026-10-19", "check_in": "09:00", "check_out": "17:00"})
    client.post("/api/salaries", json=_salary_payload())

    resp = client.get("/api/dashboard/stats")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "total_employees": 1,
        "total_departments": 2,
        "present_today": 1,
        "pending_leaves": 1,
        "total_paid_salaries": 0,
        "total_unpaid_salaries": 1,
    }
