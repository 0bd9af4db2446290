from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import month_bounds
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_TOTAL_WORKING_DAYS, NOT_AVAILABLE
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..employees.repository import EmployeeRepository
from .aggregator import AttendanceAggregator
from .classifier import AttendanceClassifier, worked_duration
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository
from .time_arithmetic import ClockValue, elapsed, parse_clock

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        classifier: Optional[AttendanceClassifier] = None,
        aggregator: Optional[AttendanceAggregator] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._classifier = classifier or AttendanceClassifier()
        self._aggregator = aggregator or AttendanceAggregator(self._classifier)

    def _require_active_employee(self, employee_id: int):
        employee = self._employees.get_by_id(int(employee_id))
        if not employee or not employee.is_active:
            raise ValidationError("Employee does not exist")
        return employee

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> int:
        now = now or datetime.now()
        today = now.date()

        self._require_active_employee(employee_id)

        existing = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if existing:
            raise ValidationError("You have already checked in today")

        attendance_id = self._attendance.create_checkin(
            employee_id=int(employee_id),
            work_date=today,
            check_in=now.time().replace(microsecond=0),
            status=AttendanceStatus.CHECKED_IN,
        )
        logger.info("Employee %s checked in at %s", employee_id, now.strftime("%H:%M:%S"))
        return attendance_id

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(int(employee_id), today)
        if not record or record.check_in is None:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("You have already checked out today")

        check_out = now.time().replace(microsecond=0)
        duration = elapsed(record.check_in, check_out)
        status = self._classifier.classify(duration.decimal_hours, has_check_in=True, has_check_out=True)

        ok = self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out=check_out,
            total_hours=duration.as_timedelta(),
            status=status,
        )
        if not ok:
            raise ValidationError("Check-out failed")

        logger.info("Employee %s checked out after %s (%s)", employee_id, duration.as_hms(), status.value)
        return self._attendance.get_for_employee_and_date(int(employee_id), today)

    def mark_attendance(
        self,
        *,
        current_role: Role,
        employee_id: int,
        work_date: date,
        check_in: Optional[ClockValue],
        check_out: Optional[ClockValue] = None,
    ) -> int:
        """Admin override for a day; rewrites the existing row or creates one."""

        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        self._require_active_employee(employee_id)

        in_t: Optional[time] = parse_clock(check_in) if check_in else None
        out_t: Optional[time] = parse_clock(check_out) if check_out else None
        if out_t is not None and in_t is None:
            raise ValidationError("Check-in time is required when check-out is given")

        total = elapsed(in_t, out_t).as_timedelta() if in_t is not None and out_t is not None else None
        status = self._classifier.classify_times(in_t, out_t, total)

        attendance_id = self._attendance.upsert_for_day(
            employee_id=int(employee_id),
            work_date=work_date,
            check_in=in_t,
            check_out=out_t,
            total_hours=total,
            status=status,
        )
        logger.info("Attendance for employee %s on %s marked %s", employee_id, work_date, status.value)
        return attendance_id

    def history(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> list[dict]:
        rows = self._attendance.get_recent_for_employee(int(employee_id), limit)
        return [self.to_row(r) for r in rows]

    def get_today_record(self, employee_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_employee_and_date(int(employee_id), today)

    def daily_overview(self, work_date: date) -> dict:
        """Every active employee with that day's record (if any) and auto status."""

        by_employee = {r.employee_id: r for r in self._attendance.list_for_date(work_date)}
        rows = []
        present = 0
        for emp in self._employees.list_all(active_only=True):
            if emp.role == Role.ADMIN:
                continue
            record = by_employee.get(emp.employee_id)
            row = {"employee_id": emp.employee_id, "emp_code": emp.emp_code, "name": emp.full_name}
            if record:
                row.update(self.to_row(record))
            else:
                row.update(
                    {
                        "date": work_date.isoformat(),
                        "check_in": None,
                        "check_out": None,
                        "total_hours": NOT_AVAILABLE,
                        "hours": 0.0,
                        "status": AttendanceStatus.ABSENT.label,
                        "status_code": AttendanceStatus.ABSENT.value,
                    }
                )
            if record and self._classifier.classify_record(record) == AttendanceStatus.PRESENT:
                present += 1
            rows.append(row)

        return {"date": work_date.isoformat(), "present_count": present, "rows": rows}

    def monthly_summary(
        self,
        employee_id: int,
        *,
        year: int,
        month: int,
        total_working_days: int = DEFAULT_TOTAL_WORKING_DAYS,
    ) -> AttendanceSummary:
        first, last = month_bounds(year, month)
        records = self._attendance.list_for_employee_between(int(employee_id), start_date=first, end_date=last)
        return self._aggregator.aggregate(records, year=year, month=month, total_working_days=total_working_days)

    def to_row(self, r: AttendanceRecord) -> dict:
        duration = worked_duration(r.check_in, r.check_out, r.total_hours)
        status = self._classifier.classify_record(r)
        return {
            "id": r.attendance_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in.strftime("%H:%M:%S") if r.check_in else None,
            "check_out": r.check_out.strftime("%H:%M:%S") if r.check_out else None,
            "total_hours": duration.as_verbose() if duration else NOT_AVAILABLE,
            "hours": round(duration.decimal_hours, 2) if duration else 0.0,
            "status": status.label,
            "status_code": status.value,
        }
