from __future__ import annotations

from dataclasses import asdict, replace
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.hr_payroll.hr_payroll.attendance.model import AttendanceRecord
from src.hr_payroll.hr_payroll.container import wire_container
from src.hr_payroll.hr_payroll.core.enums import AttendanceStatus, LeaveStatus, PaymentStatus, Role
from src.hr_payroll.hr_payroll.departments.model import Department
from src.hr_payroll.hr_payroll.employees.model import Employee, EmployeeFields
from src.hr_payroll.hr_payroll.leaves.model import LeaveRequest
from src.hr_payroll.hr_payroll.payroll.model import SalaryRecord

FAST_HASH = "pbkdf2:sha256:1000"


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}
        self._id = 0

    def add(self, **kwargs) -> Employee:
        self._id += 1
        password = kwargs.pop("password", "secret123")
        emp = Employee(
            employee_id=self._id,
            emp_code=kwargs.pop("emp_code", f"EMPTST{self._id:04d}"),
            password_hash=generate_password_hash(password, method=FAST_HASH),
            **kwargs,
        )
        self.by_id[emp.employee_id] = emp
        return emp

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.by_id.get(employee_id)

    def get_by_username(self, username: str) -> Optional[Employee]:
        return next((e for e in self.by_id.values() if e.username == username), None)

    def create_employee(self, *, emp_code, username, password_hash, role, fields: EmployeeFields) -> int:
        self._id += 1
        self.by_id[self._id] = Employee(
            employee_id=self._id,
            emp_code=emp_code,
            username=username,
            password_hash=password_hash,
            role=role,
            **asdict(fields),
        )
        return self._id

    def update_employee(self, employee_id: int, *, fields: EmployeeFields, password_hash=None) -> bool:
        emp = self.by_id.get(employee_id)
        if not emp:
            return False
        changes = asdict(fields)
        if password_hash:
            changes["password_hash"] = password_hash
        self.by_id[employee_id] = replace(emp, **changes)
        return True

    def set_active(self, employee_id: int, *, is_active: bool) -> bool:
        emp = self.by_id.get(employee_id)
        if not emp:
            return False
        self.by_id[employee_id] = replace(emp, is_active=is_active)
        return True

    def list_all(self, *, active_only: bool = False):
        items = sorted(self.by_id.values(), key=lambda e: e.employee_id, reverse=True)
        return [e for e in items if e.is_active or not active_only]


class InMemoryDepartments:
    def __init__(self):
        self.by_id: dict[int, Department] = {}
        self._id = 0

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda d: d.name)

    def get_by_id(self, department_id: int) -> Optional[Department]:
        return self.by_id.get(department_id)

    def create(self, *, name: str, is_active: bool) -> int:
        self._id += 1
        self.by_id[self._id] = Department(self._id, name, is_active)
        return self._id

    def update(self, department_id: int, *, name: str, is_active: bool) -> bool:
        if department_id not in self.by_id:
            return False
        self.by_id[department_id] = Department(department_id, name, is_active)
        return True

    def delete(self, department_id: int) -> bool:
        return self.by_id.pop(department_id, None) is not None


class InMemoryAttendance:
    def __init__(self):
        self.by_day: dict[tuple[int, date], AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id: int, work_date: date, check_in: Optional[time], check_out: Optional[time] = None,
            total_hours: Optional[timedelta] = None, status=AttendanceStatus.ABSENT) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(self._id, employee_id, work_date, check_in, check_out, total_hours, status)
        self.by_day[(employee_id, work_date)] = rec
        return rec

    def get_recent_for_employee(self, employee_id: int, limit: int):
        items = [r for r in self.by_day.values() if r.employee_id == employee_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        return self.by_day.get((employee_id, work_date))

    def list_for_employee_between(self, employee_id: int, *, start_date: date, end_date: date):
        return sorted(
            (r for r in self.by_day.values() if r.employee_id == employee_id and start_date <= r.work_date <= end_date),
            key=lambda r: r.work_date,
        )

    def list_for_date(self, work_date: date):
        return [r for r in self.by_day.values() if r.work_date == work_date]

    def create_checkin(self, *, employee_id, work_date, check_in, status) -> int:
        return self.add(employee_id, work_date, check_in, status=status).attendance_id

    def update_checkout(self, *, attendance_id, check_out, total_hours, status) -> bool:
        for key, rec in self.by_day.items():
            if rec.attendance_id == attendance_id:
                self.by_day[key] = replace(rec, check_out=check_out, total_hours=total_hours, status=status)
                return True
        return False

    def upsert_for_day(self, *, employee_id, work_date, check_in, check_out, total_hours, status) -> int:
        existing = self.by_day.get((employee_id, work_date))
        if existing:
            self.by_day[(employee_id, work_date)] = replace(
                existing, check_in=check_in, check_out=check_out, total_hours=total_hours, status=status
            )
            return existing.attendance_id
        return self.add(employee_id, work_date, check_in, check_out, total_hours, status).attendance_id


class InMemoryLeaves:
    def __init__(self):
        self.by_id: dict[int, LeaveRequest] = {}
        self._id = 0

    def create(self, *, employee_id, from_date, to_date, reason) -> int:
        self._id += 1
        self.by_id[self._id] = LeaveRequest(
            self._id, employee_id, from_date, to_date, reason, LeaveStatus.PENDING, datetime(2026, 10, 1, 9, 0)
        )
        return self._id

    def get_by_id(self, leave_id: int):
        return self.by_id.get(leave_id)

    def set_status(self, leave_id: int, *, status: LeaveStatus) -> bool:
        if leave_id not in self.by_id:
            return False
        self.by_id[leave_id] = replace(self.by_id[leave_id], status=status)
        return True

    def list_requests(self, *, employee_id=None, status=None, limit=200):
        items = [
            lr for lr in sorted(self.by_id.values(), key=lambda lr: lr.leave_id, reverse=True)
            if (employee_id is None or lr.employee_id == employee_id) and (status is None or lr.status == status)
        ]
        return items[:limit]


class InMemorySalaries:
    def __init__(self):
        self.by_id: dict[int, SalaryRecord] = {}
        self._id = 0

    def get_by_id(self, salary_id: int):
        return self.by_id.get(salary_id)

    def find_for_period(self, *, employee_id, year, month):
        return next(
            (r for r in self.by_id.values() if (r.employee_id, r.year, r.month) == (employee_id, year, month)),
            None,
        )

    def list_all(self, *, employee_id=None):
        return [r for r in self.by_id.values() if employee_id is None or r.employee_id == employee_id]

    def save(self, record: SalaryRecord) -> int:
        if not record.salary_id:
            self._id += 1
            record = replace(record, salary_id=self._id)
        self.by_id[record.salary_id] = record
        return record.salary_id

    def set_payment_status(self, salary_id, *, status: PaymentStatus, payment_date) -> bool:
        if salary_id not in self.by_id:
            return False
        self.by_id[salary_id] = replace(self.by_id[salary_id], payment_status=status, payment_date=payment_date)
        return True

    def delete(self, salary_id: int) -> bool:
        return self.by_id.pop(salary_id, None) is not None


@pytest.fixture
def departments_repo():
    repo = InMemoryDepartments()
    repo.create(name="Engineering", is_active=True)
    repo.create(name="Finance", is_active=True)
    return repo


@pytest.fixture
def employees_repo():
    repo = InMemoryEmployees()
    repo.add(username="admin", password="admin123", email="admin@example.com", first_name="Admin",
             last_name="User", role=Role.ADMIN, emp_code="EMPADM0001")
    repo.add(
        username="john",
        password="john1234",
        email="john@example.com",
        first_name="John",
        last_name="Doe",
        emp_code="EMPJOH0001",
        contact_no="9876543210",
        department_id=1,
        designation="Software Engineer",
        basic_salary=Decimal("20000.00"),
        hra=Decimal("8000.00"),
        allowance=Decimal("3000.00"),
    )
    return repo


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo():
    return InMemoryLeaves()


@pytest.fixture
def salaries_repo():
    return InMemorySalaries()


@pytest.fixture
def container(employees_repo, departments_repo, attendance_repo, leaves_repo, salaries_repo):
    return wire_container(
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
    )
