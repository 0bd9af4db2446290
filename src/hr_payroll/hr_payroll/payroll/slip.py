"""Salary slip rendering.

Pure presentation of a saved SalaryRecord; nothing is recomputed except the
gross and total-deduction sums of the stored snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from ..common.datetime_utils import format_long_date, month_name
from ..core.constants import CURRENCY_SYMBOL, HR_CONTACT_EMAIL, NOT_AVAILABLE
from ..departments.model import Department
from ..employees.model import Employee
from .calculator.base import to_currency
from .model import SalaryRecord

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

TEMPLATES = {
    "text": "salary_slip.txt.j2",
    "html": "salary_slip.html.j2",
}

DISCLAIMER = (
    "This is a computer-generated salary slip.",
    "For queries, contact HR department.",
)


@dataclass(frozen=True)
class SlipContext:
    period: str
    employee_name: str
    employee_code: str
    mobile: str
    email: str
    designation: str
    department: str
    payment_status: str
    payment_date: Optional[str]
    earnings: list
    gross: str
    deductions: list
    total_deduction: str
    attendance: list
    net_salary: str
    disclaimer: tuple


class SalarySlipFormatter:
    def __init__(self, *, currency_symbol: str = CURRENCY_SYMBOL, hr_contact_email: str = HR_CONTACT_EMAIL):
        self._currency = currency_symbol
        self._hr_email = hr_contact_email
        self._env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def money(self, value: Decimal) -> str:
        return f"{self._currency} {to_currency(Decimal(value)):.2f}"

    def build_context(
        self,
        salary: SalaryRecord,
        employee: Employee,
        department: Optional[Department] = None,
    ) -> SlipContext:
        # A department deleted after the fact leaves a dangling id: show N/A.
        dept_name = department.name if department and department.department_id == employee.department_id else NOT_AVAILABLE

        return SlipContext(
            period=f"{month_name(salary.month)} {salary.year}",
            employee_name=employee.full_name,
            employee_code=employee.emp_code or employee.username or NOT_AVAILABLE,
            mobile=employee.contact_no or NOT_AVAILABLE,
            email=employee.email or "",
            designation=employee.designation or NOT_AVAILABLE,
            department=dept_name,
            payment_status=salary.payment_status.value.upper(),
            payment_date=format_long_date(salary.payment_date) if salary.payment_date else None,
            earnings=[
                ("Basic Salary", self.money(salary.basic_salary)),
                ("HRA", self.money(salary.hra)),
                ("Allowance", self.money(salary.allowance)),
            ],
            gross=self.money(salary.gross_salary),
            deductions=[
                (f"PF ({salary.pf_percentage:.2f}%)", self.money(salary.pf_amount)),
                ("Deduction", self.money(salary.deduction)),
            ],
            total_deduction=self.money(salary.total_deduction),
            attendance=[
                ("Working Days", salary.total_working_days, "Present Days", salary.present_days),
                ("Half Days", salary.half_days, "Absent Days", salary.absent_days),
            ],
            net_salary=self.money(salary.net_salary),
            disclaimer=DISCLAIMER + (self._hr_email,),
        )

    def render(
        self,
        salary: SalaryRecord,
        employee: Employee,
        department: Optional[Department] = None,
        *,
        fmt: str = "text",
    ) -> str:
        template_name = TEMPLATES.get(fmt)
        if not template_name:
            raise ValueError(f"Unknown slip format: {fmt!r}")
        ctx = self.build_context(salary, employee, department)
        return self._env.get_template(template_name).render(slip=ctx)
