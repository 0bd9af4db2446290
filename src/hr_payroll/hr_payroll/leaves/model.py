from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    employee_id: int
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1

    def as_dict(self) -> dict:
        return {
            "id": self.leave_id,
            "employee_id": self.employee_id,
            "from_date": self.from_date.isoformat(),
            "to_date": self.to_date.isoformat(),
            "days": self.days,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
