from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class AttendanceStatus(str, Enum):
    """Day classification stored with each attendance record."""

    PRESENT = "PRESENT"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    CHECKED_IN = "CHECKED_IN"

    @property
    def label(self) -> str:
        return {
            AttendanceStatus.PRESENT: "Present",
            AttendanceStatus.HALF_DAY: "Half Day",
            AttendanceStatus.ABSENT: "Absent",
            AttendanceStatus.CHECKED_IN: "Checked In",
        }[self]


class LeaveStatus(str, Enum):
    """Leave approval state; admins may move between any two states."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
