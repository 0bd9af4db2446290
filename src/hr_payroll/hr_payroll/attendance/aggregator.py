from __future__ import annotations

from typing import Iterable, Optional

from ..common.datetime_utils import month_bounds
from ..core.constants import DEFAULT_TOTAL_WORKING_DAYS, MAX_WORKING_DAYS, MIN_WORKING_DAYS
from ..core.enums import AttendanceStatus
from .classifier import AttendanceClassifier
from .model import AttendanceRecord, AttendanceSummary


class AttendanceAggregator:
    """Count present/half days for one employee-month.

    absent_days is total_working_days minus the other two counts and is not
    clamped, so it goes negative when an employee attends more days than the
    configured working days.
    """

    def __init__(self, classifier: Optional[AttendanceClassifier] = None):
        self._classifier = classifier or AttendanceClassifier()

    def aggregate(
        self,
        records: Iterable[AttendanceRecord],
        *,
        year: int,
        month: int,
        total_working_days: int = DEFAULT_TOTAL_WORKING_DAYS,
    ) -> AttendanceSummary:
        total_working_days = max(MIN_WORKING_DAYS, min(MAX_WORKING_DAYS, int(total_working_days)))
        first, last = month_bounds(year, month)

        present = 0
        half = 0
        for r in records:
            if not first <= r.work_date <= last:
                continue
            status = self._classifier.classify_record(r)
            if status == AttendanceStatus.PRESENT:
                present += 1
            elif status == AttendanceStatus.HALF_DAY:
                half += 1

        return AttendanceSummary(
            total_working_days=total_working_days,
            present_days=present,
            half_days=half,
            absent_days=total_working_days - present - half,
        )
