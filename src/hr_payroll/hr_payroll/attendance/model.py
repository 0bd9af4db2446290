from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[time]
    check_out: Optional[time]
    total_hours: Optional[timedelta]
    status: AttendanceStatus


@dataclass(frozen=True)
class AttendanceSummary:
    """Month aggregate; absent_days is derived, not counted."""

    total_working_days: int
    present_days: int
    half_days: int
    absent_days: int

    def as_dict(self) -> dict:
        return {
            "total_working_days": self.total_working_days,
            "present_days": self.present_days,
            "half_days": self.half_days,
            "absent_days": self.absent_days,
        }
