from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_non_empty
from ..core.constants import NOT_AVAILABLE
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository, departments: DepartmentRepository):
        self._leaves = leaves
        self._employees = employees
        self._departments = departments

    def apply(self, *, employee_id: int, from_date: date, to_date: date, reason: str) -> int:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise ValidationError("Employee does not exist")

        if to_date < from_date:
            raise ValidationError("To date must be on or after from date")

        reason = require_non_empty(reason, "Reason")
        leave_id = self._leaves.create(employee_id=int(employee_id), from_date=from_date, to_date=to_date, reason=reason)
        logger.info("Employee %s applied for leave %s (%s..%s)", employee_id, leave_id, from_date, to_date)
        return leave_id

    def set_status(self, *, current_role: Role, leave_id: int, status: LeaveStatus) -> None:
        """Admins may move a request between any two states, including back to PENDING."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")

        self._leaves.set_status(int(leave_id), status=status)
        logger.info("Leave %s: %s -> %s", leave_id, leave.status.value, status.value)

    def list_for_employee(self, employee_id: int) -> list[dict]:
        return [leave.as_dict() for leave in self._leaves.list_requests(employee_id=int(employee_id))]

    def list_all(self, *, status: Optional[LeaveStatus] = None) -> list[dict]:
        """Admin view joined with employee and department names."""

        employees = {e.employee_id: e for e in self._employees.list_all()}
        departments = {d.department_id: d.name for d in self._departments.list_all()}

        rows = []
        for leave in self._leaves.list_requests(status=status, limit=500):
            emp = employees.get(leave.employee_id)
            row = leave.as_dict()
            row["employee_name"] = emp.full_name if emp else NOT_AVAILABLE
            row["emp_code"] = emp.emp_code if emp else NOT_AVAILABLE
            row["department"] = departments.get(emp.department_id, NOT_AVAILABLE) if emp else NOT_AVAILABLE
            rows.append(row)
        return rows
