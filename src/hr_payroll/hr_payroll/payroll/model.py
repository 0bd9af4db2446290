from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import PaymentStatus


@dataclass(frozen=True)
class SalaryRecord:
    """Domain entity: one employee's pay for one (year, month).

    Pay components are a snapshot taken when the record was saved, so later
    edits to the employee do not change printed slips.
    """

    salary_id: int
    employee_id: int
    year: int
    month: int
    basic_salary: Decimal
    hra: Decimal
    allowance: Decimal
    total_working_days: int
    present_days: int
    half_days: int
    absent_days: int
    deduction: Decimal
    pf_percentage: Decimal
    pf_amount: Decimal
    net_salary: Decimal
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    payment_date: Optional[date] = None

    @property
    def gross_salary(self) -> Decimal:
        return self.basic_salary + self.hra + self.allowance

    @property
    def total_deduction(self) -> Decimal:
        return self.pf_amount + self.deduction

    def as_dict(self) -> dict:
        return {
            "id": self.salary_id,
            "employee_id": self.employee_id,
            "year": self.year,
            "month": self.month,
            "basic_salary": f"{self.basic_salary:.2f}",
            "hra": f"{self.hra:.2f}",
            "allowance": f"{self.allowance:.2f}",
            "total_working_days": self.total_working_days,
            "present_days": self.present_days,
            "half_days": self.half_days,
            "absent_days": self.absent_days,
            "deduction": f"{self.deduction:.2f}",
            "pf_percentage": f"{self.pf_percentage:.2f}",
            "pf_amount": f"{self.pf_amount:.2f}",
            "net_salary": f"{self.net_salary:.2f}",
            "payment_status": self.payment_status.value,
            "payment_date": self.payment_date.isoformat() if self.payment_date else None,
        }


@dataclass(frozen=True)
class SalaryDraft:
    """Admin input for a pay period before derived values are computed."""

    employee_id: int
    year: int
    month: int
    basic_salary: Decimal
    hra: Decimal
    allowance: Decimal
    total_working_days: int
    present_days: int
    half_days: int
    deduction: Decimal
    pf_percentage: Decimal
    # None: keep the stored status on update, unpaid on create.
    payment_status: Optional[PaymentStatus] = None
