from __future__ import annotations

import logging
import random
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Employee, EmployeeFields
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\d{10}$")


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    employee_id: int
    username: str
    full_name: str
    role: Role

    def as_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "username": self.username,
            "full_name": self.full_name,
            "role": self.role.value,
        }


class AuthService:
    """Use case: authenticate an employee or admin (login)."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, username: str, password: str) -> SessionUser:
        employee = self._employees.get_by_username((username or "").strip())
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        logger.info("Employee %s logged in", employee.username)
        return SessionUser(
            employee_id=employee.employee_id,
            username=employee.username,
            full_name=employee.full_name,
            role=employee.role,
        )


def generate_emp_code(first_name: str, *, suffix: Optional[Callable[[], str]] = None) -> str:
    """EMP + first three letters of the first name + 4 digits, e.g. ``EMPRAH4821``."""

    prefix = re.sub(r"[^A-Za-z]", "", first_name)[:3].upper()
    digits = suffix() if suffix else f"{random.randint(0, 9999):04d}"
    return f"EMP{prefix}{digits}"


class EmployeeService:
    """Use case: manage employee records (admin) and self-service profile."""

    def __init__(self, employees: EmployeeRepository, *, code_suffix: Optional[Callable[[], str]] = None):
        self._employees = employees
        self._code_suffix = code_suffix

    @staticmethod
    def _validate_fields(fields: EmployeeFields) -> EmployeeFields:
        fields.first_name = require_non_empty(fields.first_name, "First name")
        fields.last_name = (fields.last_name or "").strip()
        fields.email = require_non_empty(fields.email, "Email")
        if not _EMAIL_RE.match(fields.email):
            raise ValidationError("Email is not valid")
        if fields.contact_no and not _PHONE_RE.match(fields.contact_no):
            raise ValidationError("Contact number must be 10 digits")
        if fields.ifsc_code:
            fields.ifsc_code = fields.ifsc_code.strip().upper()
        for name in ("basic_salary", "hra", "allowance"):
            if getattr(fields, name) < 0:
                raise ValidationError(f"{name.replace('_', ' ').capitalize()} cannot be negative")
        return fields

    def create_employee(
        self,
        *,
        current_role: Role,
        username: str,
        password: str,
        fields: EmployeeFields,
        role: Role = Role.EMPLOYEE,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", 6)
        fields = self._validate_fields(fields)

        if self._employees.get_by_username(username):
            raise ValidationError("Username already exists")

        emp_code = generate_emp_code(fields.first_name, suffix=self._code_suffix)
        employee_id = self._employees.create_employee(
            emp_code=emp_code,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            fields=fields,
        )
        logger.info("Created employee %s (%s)", employee_id, emp_code)
        return employee_id

    def update_employee(
        self,
        *,
        current_role: Role,
        employee_id: int,
        fields: EmployeeFields,
        password: Optional[str] = None,
    ) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        self.get_employee(employee_id)
        fields = self._validate_fields(fields)

        password_hash = None
        if password:
            require_min_length(password, "Password", 6)
            password_hash = generate_password_hash(password)

        self._employees.update_employee(int(employee_id), fields=fields, password_hash=password_hash)
        logger.info("Updated employee %s", employee_id)

    def deactivate_employee(self, *, current_role: Role, employee_id: int) -> None:
        """Soft delete: employees are never removed, only marked inactive."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        employee = self.get_employee(employee_id)
        if employee.role == Role.ADMIN:
            raise ValidationError("The admin account cannot be deactivated")

        self._employees.set_active(int(employee_id), is_active=False)
        logger.info("Deactivated employee %s", employee_id)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def list_employees(self, *, active_only: bool = False) -> Sequence[Employee]:
        return [e for e in self._employees.list_all(active_only=active_only) if e.role != Role.ADMIN]

    def get_profile(self, employee_id: int) -> dict:
        """Self-service view of the logged-in account (no password hash)."""

        employee = self.get_employee(employee_id)
        if not employee.is_active:
            raise AuthenticationError("Account is inactive")
        return employee.public_dict()
