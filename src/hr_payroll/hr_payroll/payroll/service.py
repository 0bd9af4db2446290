from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..core.constants import DEFAULT_PF_PERCENTAGE, DEFAULT_TOTAL_WORKING_DAYS
from ..core.enums import PaymentStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from .calculator.base import PayrollCalculator, PayrollInputs, PayrollResult
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalaryDraft, SalaryRecord
from .repository import SalaryRepository
from .slip import SalarySlipFormatter

logger = logging.getLogger(__name__)


class SalaryService:
    """Use cases around monthly salary records.

    Derived amounts (pf_amount, net_salary, absent_days) are always
    recomputed from the submitted inputs; values sent by a client are ignored.
    """

    def __init__(
        self,
        salaries: SalaryRepository,
        employees: EmployeeRepository,
        departments: DepartmentRepository,
        attendance: AttendanceService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        formatter: Optional[SalarySlipFormatter] = None,
        default_pf_percentage: Decimal = DEFAULT_PF_PERCENTAGE,
        default_working_days: int = DEFAULT_TOTAL_WORKING_DAYS,
    ):
        self._salaries = salaries
        self._employees = employees
        self._departments = departments
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()
        self._formatter = formatter or SalarySlipFormatter()
        self.default_pf_percentage = Decimal(default_pf_percentage)
        self.default_working_days = int(default_working_days)

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

    def _require_employee(self, employee_id: int):
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise ValidationError("Employee does not exist")
        return employee

    def calculate(self, draft: SalaryDraft) -> PayrollResult:
        return self._calculator.calculate(
            PayrollInputs(
                basic=draft.basic_salary,
                hra=draft.hra,
                allowance=draft.allowance,
                total_working_days=draft.total_working_days,
                present_days=draft.present_days,
                half_days=draft.half_days,
                deduction=draft.deduction,
                pf_percentage=draft.pf_percentage,
            )
        )

    def preview(
        self,
        *,
        current_role: Role,
        employee_id: int,
        year: int,
        month: int,
        total_working_days: Optional[int] = None,
        deduction: Decimal = Decimal("0"),
        pf_percentage: Optional[Decimal] = None,
    ) -> dict:
        """Attendance-driven preview for the salary form; nothing is stored.

        Pay components default to the employee's current basic/HRA/allowance.
        """

        self._require_admin(current_role)
        employee = self._require_employee(employee_id)
        working_days = total_working_days or self.default_working_days

        summary = self._attendance.monthly_summary(
            employee.employee_id, year=year, month=month, total_working_days=working_days
        )
        draft = SalaryDraft(
            employee_id=employee.employee_id,
            year=year,
            month=month,
            basic_salary=employee.basic_salary,
            hra=employee.hra,
            allowance=employee.allowance,
            total_working_days=summary.total_working_days,
            present_days=summary.present_days,
            half_days=summary.half_days,
            deduction=deduction,
            pf_percentage=self.default_pf_percentage if pf_percentage is None else pf_percentage,
        )
        result = self.calculate(draft)
        return {
            "employee_id": employee.employee_id,
            "year": year,
            "month": month,
            "basic_salary": f"{draft.basic_salary:.2f}",
            "hra": f"{draft.hra:.2f}",
            "allowance": f"{draft.allowance:.2f}",
            "pf_percentage": f"{draft.pf_percentage:.2f}",
            **summary.as_dict(),
            **result.as_dict(),
        }

    def _build_record(self, draft: SalaryDraft, *, salary_id: int = 0, payment_date: Optional[date] = None) -> SalaryRecord:
        if not 1 <= draft.month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        if draft.present_days < 0 or draft.half_days < 0:
            raise ValidationError("Attendance day counts cannot be negative")

        result = self.calculate(draft)
        return SalaryRecord(
            salary_id=salary_id,
            employee_id=draft.employee_id,
            year=draft.year,
            month=draft.month,
            basic_salary=draft.basic_salary,
            hra=draft.hra,
            allowance=draft.allowance,
            total_working_days=draft.total_working_days,
            present_days=draft.present_days,
            half_days=draft.half_days,
            absent_days=draft.total_working_days - draft.present_days - draft.half_days,
            deduction=result.deduction,
            pf_percentage=draft.pf_percentage,
            pf_amount=result.pf_amount,
            net_salary=result.net_salary,
            payment_status=draft.payment_status,
            payment_date=payment_date if draft.payment_status == PaymentStatus.PAID else None,
        )

    def create_salary(self, *, current_role: Role, draft: SalaryDraft, today: Optional[date] = None) -> int:
        self._require_admin(current_role)
        self._require_employee(draft.employee_id)

        # Pre-check for a friendly message; the UNIQUE key still guards races.
        if self._salaries.find_for_period(employee_id=draft.employee_id, year=draft.year, month=draft.month):
            raise ConflictError("Salary record already exists for this employee and period")

        if draft.payment_status is None:
            draft = replace(draft, payment_status=PaymentStatus.UNPAID)
        payment_date = (today or date.today()) if draft.payment_status == PaymentStatus.PAID else None
        record = self._build_record(draft, payment_date=payment_date)
        salary_id = self._salaries.save(record)
        logger.info(
            "Created salary %s for employee %s (%04d-%02d) net=%s",
            salary_id, draft.employee_id, draft.year, draft.month, record.net_salary,
        )
        return salary_id

    def update_salary(self, *, current_role: Role, salary_id: int, draft: SalaryDraft, today: Optional[date] = None) -> SalaryRecord:
        self._require_admin(current_role)
        existing = self.get_salary(salary_id)
        self._require_employee(draft.employee_id)

        clash = self._salaries.find_for_period(employee_id=draft.employee_id, year=draft.year, month=draft.month)
        if clash and clash.salary_id != existing.salary_id:
            raise ConflictError("Salary record already exists for this employee and period")

        if draft.payment_status is None:
            draft = replace(draft, payment_status=existing.payment_status)
        payment_date = existing.payment_date
        if draft.payment_status == PaymentStatus.PAID and payment_date is None:
            payment_date = today or date.today()

        record = self._build_record(draft, salary_id=existing.salary_id, payment_date=payment_date)
        self._salaries.save(record)
        logger.info("Updated salary %s net=%s", salary_id, record.net_salary)
        return record

    def delete_salary(self, *, current_role: Role, salary_id: int) -> None:
        self._require_admin(current_role)
        if not self._salaries.delete(int(salary_id)):
            raise NotFoundError("Salary record not found")
        logger.info("Deleted salary %s", salary_id)

    def get_salary(self, salary_id: int) -> SalaryRecord:
        record = self._salaries.get_by_id(int(salary_id))
        if not record:
            raise NotFoundError("Salary record not found")
        return record

    def list_salaries(self, *, employee_id: Optional[int] = None) -> Sequence[SalaryRecord]:
        records = self._salaries.list_all(employee_id=employee_id)
        return sorted(records, key=lambda r: (r.year, r.month, r.salary_id), reverse=True)

    def set_payment_status(
        self,
        *,
        current_role: Role,
        salary_id: int,
        status: PaymentStatus,
        today: Optional[date] = None,
    ) -> SalaryRecord:
        """Toggle paid/unpaid in either direction; paid stamps the payment date."""

        self._require_admin(current_role)
        record = self.get_salary(salary_id)
        payment_date = (today or date.today()) if status == PaymentStatus.PAID else None
        self._salaries.set_payment_status(record.salary_id, status=status, payment_date=payment_date)
        logger.info("Salary %s marked %s", salary_id, status.value)
        return replace(record, payment_status=status, payment_date=payment_date)

    def render_slip(
        self,
        *,
        current_role: Role,
        current_employee_id: int,
        salary_id: int,
        fmt: str = "text",
    ) -> str:
        record = self.get_salary(salary_id)
        if current_role != Role.ADMIN and record.employee_id != int(current_employee_id):
            raise AuthorizationError("You can only view your own salary slips")

        employee = self._employees.get_by_id(record.employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        department = self._departments.get_by_id(employee.department_id) if employee.department_id else None
        try:
            return self._formatter.render(record, employee, department, fmt=fmt)
        except ValueError as e:
            raise ValidationError(str(e))
