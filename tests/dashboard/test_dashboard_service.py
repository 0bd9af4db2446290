from datetime import date, time
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import LeaveStatus, PaymentStatus, Role
from src.hr_payroll.hr_payroll.core.exceptions import AuthorizationError
from src.hr_payroll.hr_payroll.payroll.model import SalaryDraft

JOHN = 2
TODAY = date(2026, 10, 19)


def _draft(month):
    return SalaryDraft(
        employee_id=JOHN,
        year=2026,
        month=month,
        basic_salary=Decimal("20000"),
        hra=Decimal("8000"),
        allowance=Decimal("3000"),
        total_working_days=26,
        present_days=24,
        half_days=1,
        deduction=Decimal("0"),
        pf_percentage=Decimal("12.00"),
    )


def test_stats_count_each_area(container, employees_repo, attendance_repo):
    employees_repo.add(username="gone", email="gone@example.com", first_name="Gone", last_name="Away", is_active=False)
    attendance_repo.add(JOHN, TODAY, time(9, 0), time(17, 0))

    container.leave_service.apply(employee_id=JOHN, from_date=TODAY, to_date=TODAY, reason="Family")
    approved = container.leave_service.apply(employee_id=JOHN, from_date=TODAY, to_date=TODAY, reason="Trip")
    container.leave_service.set_status(current_role=Role.ADMIN, leave_id=approved, status=LeaveStatus.APPROVED)

    salaries = container.salary_service
    for month in (8, 9, 10):
        salaries.create_salary(current_role=Role.ADMIN, draft=_draft(month))
    paid_id = salaries.list_salaries()[0].salary_id
    salaries.set_payment_status(current_role=Role.ADMIN, salary_id=paid_id, status=PaymentStatus.PAID, today=TODAY)

    assert container.dashboard_service.stats(current_role=Role.ADMIN, today=TODAY) == {
        "total_employees": 1,
        "total_departments": 2,
        "present_today": 1,
        "pending_leaves": 1,
        "total_paid_salaries": 1,
        "total_unpaid_salaries": 2,
    }


def test_stats_are_admin_only(container):
    with pytest.raises(AuthorizationError):
        container.dashboard_service.stats(current_role=Role.EMPLOYEE, today=TODAY)
