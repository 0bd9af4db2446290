from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .attendance.classifier import AttendanceClassifier, ClassificationThresholds
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core import constants
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.repository import DepartmentRepository
from .departments.service import DepartmentService
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import AuthService, EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryService
from .payroll.slip import SalarySlipFormatter


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    departments_repo: DepartmentRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    salaries_repo: SalaryRepository

    auth_service: AuthService
    employee_service: EmployeeService
    department_service: DepartmentService
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryService
    dashboard_service: DashboardService

    default_working_days: int = constants.DEFAULT_TOTAL_WORKING_DAYS
    default_pf_percentage: Decimal = constants.DEFAULT_PF_PERCENTAGE
    conn: Optional[DatabaseConnection] = None


def wire_container(
    *,
    employees_repo: EmployeeRepository,
    departments_repo: DepartmentRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    salaries_repo: SalaryRepository,
    settings: Any = None,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of the given repositories.

    ``settings`` is any object exposing the optional tuning attributes of the
    config modules; missing attributes fall back to ``core.constants``.
    """

    def setting(name: str):
        return getattr(settings, name, getattr(constants, name))

    classifier = AttendanceClassifier(
        ClassificationThresholds(
            present_hours=float(setting("PRESENT_HOURS_THRESHOLD")),
            half_day_hours=float(setting("HALF_DAY_HOURS_THRESHOLD")),
        )
    )
    formatter = SalarySlipFormatter(
        currency_symbol=str(setting("CURRENCY_SYMBOL")),
        hr_contact_email=str(setting("HR_CONTACT_EMAIL")),
    )
    default_working_days = int(setting("DEFAULT_TOTAL_WORKING_DAYS"))
    default_pf_percentage = Decimal(str(setting("DEFAULT_PF_PERCENTAGE")))

    attendance_service = AttendanceService(attendance_repo, employees_repo, classifier=classifier)
    employee_service = EmployeeService(employees_repo)
    department_service = DepartmentService(departments_repo)
    leave_service = LeaveService(leaves_repo, employees_repo, departments_repo)
    salary_service = SalaryService(
        salaries_repo,
        employees_repo,
        departments_repo,
        attendance_service,
        formatter=formatter,
        default_pf_percentage=default_pf_percentage,
        default_working_days=default_working_days,
    )

    return Container(
        employees_repo=employees_repo,
        departments_repo=departments_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
        auth_service=AuthService(employees_repo),
        employee_service=employee_service,
        department_service=department_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        salary_service=salary_service,
        dashboard_service=DashboardService(
            employee_service, department_service, attendance_service, leave_service, salary_service
        ),
        default_working_days=default_working_days,
        default_pf_percentage=default_pf_percentage,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(db_config))
    return wire_container(
        employees_repo=MySQLEmployeeRepository(conn),
        departments_repo=MySQLDepartmentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        settings=settings,
        conn=conn,
    )
