from datetime import date
from decimal import Decimal

import pytest

from src.hr_payroll.hr_payroll.core.enums import PaymentStatus
from src.hr_payroll.hr_payroll.departments.model import Department
from src.hr_payroll.hr_payroll.employees.model import Employee
from src.hr_payroll.hr_payroll.payroll.model import SalaryRecord
from src.hr_payroll.hr_payroll.payroll.slip import SalarySlipFormatter


@pytest.fixture
def employee():
    return Employee(
        employee_id=2,
        emp_code="EMPJOH0001",
        username="john",
        email="john@example.com",
        password_hash="x",
        first_name="John",
        last_name="Doe",
        contact_no="9876543210",
        department_id=1,
        designation="Software Engineer",
    )


@pytest.fixture
def salary():
    return SalaryRecord(
        salary_id=5,
        employee_id=2,
        year=2026,
        month=10,
        basic_salary=Decimal("20000.00"),
        hra=Decimal("8000.00"),
        allowance=Decimal("3000.00"),
        total_working_days=26,
        present_days=24,
        half_days=1,
        absent_days=1,
        deduction=Decimal("0.00"),
        pf_percentage=Decimal("12.00"),
        pf_amount=Decimal("2400.00"),
        net_salary=Decimal("26811.54"),
        payment_status=PaymentStatus.PAID,
        payment_date=date(2026, 10, 31),
    )


def test_text_slip_layout(salary, employee):
    text = SalarySlipFormatter().render(salary, employee, Department(1, "Engineering"))

    assert "SALARY SLIP" in text
    assert "For the month of October 2026" in text
    assert "EMPJOH0001" in text
    assert "Engineering" in text
    assert "Payment Status: PAID" in text
    assert "31 Oct 2026" in text
    assert "₹ 31000.00" in text
    assert "PF (12.00%)" in text
    assert "₹ 2400.00" in text
    assert "₹ 26811.54" in text
    assert "This is a computer-generated salary slip." in text
    assert "hr@example.com" in text


def test_missing_or_dangling_department_shows_na(salary, employee):
    fmt = SalarySlipFormatter()
    assert fmt.build_context(salary, employee, None).department == "N/A"
    assert fmt.build_context(salary, employee, Department(9, "Finance")).department == "N/A"


def test_unpaid_slip_has_no_payment_date(salary, employee):
    from dataclasses import replace

    unpaid = replace(salary, payment_status=PaymentStatus.UNPAID, payment_date=None)
    text = SalarySlipFormatter().render(unpaid, employee)
    assert "Payment Status: UNPAID" in text
    assert "Payment Date" not in text


def test_html_slip_escapes_values(salary, employee):
    from dataclasses import replace

    html = SalarySlipFormatter(currency_symbol="Rs.").render(
        salary, replace(employee, first_name="<b>John</b>"), fmt="html"
    )
    assert "&lt;b&gt;John&lt;/b&gt;" in html
    assert "Rs. 26811.54" in html


def test_unknown_format_is_rejected(salary, employee):
    with pytest.raises(ValueError):
        SalarySlipFormatter().render(salary, employee, fmt="pdf")
