from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee account.

    Note: pure data object, no DB access. ``department_id`` is a weak
    reference; the department may have been deleted since.
    """

    employee_id: int
    emp_code: str
    username: str
    email: str
    password_hash: str
    first_name: str
    last_name: str
    role: Role = Role.EMPLOYEE
    contact_no: Optional[str] = None
    department_id: Optional[int] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None
    is_active: bool = True
    address: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    basic_salary: Decimal = Decimal("0.00")
    hra: Decimal = Decimal("0.00")
    allowance: Decimal = Decimal("0.00")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def public_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "emp_code": self.emp_code,
            "username": self.username,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "full_name": self.full_name,
            "role": self.role.value,
            "contact_no": self.contact_no,
            "department": self.department_id,
            "designation": self.designation,
            "date_of_joining": self.date_of_joining.isoformat() if self.date_of_joining else None,
            "is_active": self.is_active,
            "address": self.address,
            "bank_name": self.bank_name,
            "bank_account_number": self.bank_account_number,
            "ifsc_code": self.ifsc_code,
            "basic_salary": f"{self.basic_salary:.2f}",
            "hra": f"{self.hra:.2f}",
            "allowance": f"{self.allowance:.2f}",
        }


@dataclass
class EmployeeFields:
    """Editable profile fields, shared by create and update."""

    first_name: str
    last_name: str = ""
    email: str = ""
    contact_no: Optional[str] = None
    department_id: Optional[int] = None
    designation: Optional[str] = None
    date_of_joining: Optional[date] = None
    is_active: bool = True
    address: Optional[str] = None
    bank_name: Optional[str] = None
    bank_account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    basic_salary: Decimal = Decimal("0.00")
    hra: Decimal = Decimal("0.00")
    allowance: Decimal = Decimal("0.00")
