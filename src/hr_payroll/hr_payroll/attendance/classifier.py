from __future__ import annotations

from dataclasses import dataclass
from datetime import time, timedelta
from typing import Optional

from ..core.constants import HALF_DAY_HOURS_THRESHOLD, PRESENT_HOURS_THRESHOLD
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .time_arithmetic import Duration, elapsed, parse_duration


@dataclass(frozen=True)
class ClassificationThresholds:
    present_hours: float = PRESENT_HOURS_THRESHOLD
    half_day_hours: float = HALF_DAY_HOURS_THRESHOLD


class AttendanceClassifier:
    """Map hours worked in a day to an attendance status.

    Rules are evaluated in this order:

    ========================================  ===========
    hours >= present threshold                PRESENT
    half-day threshold <= hours < present     HALF_DAY
    checked in, not yet checked out           CHECKED_IN
    anything else (short day, no check-in)    ABSENT
    ========================================  ===========
    """

    def __init__(self, thresholds: Optional[ClassificationThresholds] = None):
        self._thresholds = thresholds or ClassificationThresholds()

    @property
    def thresholds(self) -> ClassificationThresholds:
        return self._thresholds

    def classify(self, hours: float, *, has_check_in: bool = True, has_check_out: bool = True) -> AttendanceStatus:
        t = self._thresholds
        if hours >= t.present_hours:
            return AttendanceStatus.PRESENT
        if t.half_day_hours <= hours < t.present_hours:
            return AttendanceStatus.HALF_DAY
        if has_check_in and not has_check_out:
            return AttendanceStatus.CHECKED_IN
        return AttendanceStatus.ABSENT

    def classify_times(
        self,
        check_in: Optional[time],
        check_out: Optional[time],
        total_hours: Optional[timedelta | str] = None,
    ) -> AttendanceStatus:
        duration = worked_duration(check_in, check_out, total_hours)
        hours = duration.decimal_hours if duration else 0.0
        return self.classify(hours, has_check_in=check_in is not None, has_check_out=check_out is not None)

    def classify_record(self, record: AttendanceRecord) -> AttendanceStatus:
        return self.classify_times(record.check_in, record.check_out, record.total_hours)


def worked_duration(
    check_in: Optional[time],
    check_out: Optional[time],
    total_hours: Optional[timedelta | str] = None,
) -> Optional[Duration]:
    """Stored total_hours wins; otherwise fall back to check-out minus check-in."""

    if total_hours is not None:
        return parse_duration(total_hours)
    if check_in is not None and check_out is not None:
        return elapsed(check_in, check_out)
    return None
