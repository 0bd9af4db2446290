from __future__ import annotations

from datetime import date

from ..attendance.service import AttendanceService
from ..core.enums import LeaveStatus, PaymentStatus, Role
from ..core.exceptions import AuthorizationError
from ..departments.service import DepartmentService
from ..employees.service import EmployeeService
from ..leaves.service import LeaveService
from ..payroll.service import SalaryService


class DashboardService:
    """Headline counts for the admin console, read through the other services."""

    def __init__(
        self,
        employees: EmployeeService,
        departments: DepartmentService,
        attendance: AttendanceService,
        leaves: LeaveService,
        salaries: SalaryService,
    ):
        self._employees = employees
        self._departments = departments
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries

    def stats(self, *, current_role: Role, today: date) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        salaries = self._salaries.list_salaries()
        paid = sum(1 for s in salaries if s.payment_status == PaymentStatus.PAID)
        return {
            "total_employees": len(self._employees.list_employees(active_only=True)),
            "total_departments": len(self._departments.list_all()),
            "present_today": self._attendance.daily_overview(today)["present_count"],
            "pending_leaves": len(self._leaves.list_all(status=LeaveStatus.PENDING)),
            "total_paid_salaries": paid,
            "total_unpaid_salaries": len(salaries) - paid,
        }
