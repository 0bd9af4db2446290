"""Clock-time arithmetic for check-in/check-out pairs.

Both clock times are placed on the same synthetic reference date, so a
check-out that precedes the check-in (an over-midnight shift) yields a negative
duration. That duration is not corrected here; it classifies as Absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

from ..core.exceptions import ValidationError

REFERENCE_DATE = date(1970, 1, 1)

ClockValue = Union[str, time, datetime]


@dataclass(frozen=True)
class Duration:
    total_seconds: int

    @property
    def is_negative(self) -> bool:
        return self.total_seconds < 0

    @property
    def hours(self) -> int:
        return abs(self.total_seconds) // 3600

    @property
    def minutes(self) -> int:
        return (abs(self.total_seconds) % 3600) // 60

    @property
    def seconds(self) -> int:
        return abs(self.total_seconds) % 60

    @property
    def decimal_hours(self) -> float:
        return self.total_seconds / 3600

    def as_hms(self) -> str:
        sign = "-" if self.is_negative else ""
        return f"{sign}{self.hours:02d}:{self.minutes:02d}:{self.seconds:02d}"

    def as_verbose(self) -> str:
        sign = "-" if self.is_negative else ""
        return f"{sign}{self.hours}h {self.minutes}m {self.seconds}s"

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.total_seconds)


def parse_clock(value: ClockValue) -> time:
    """Accept ``HH:MM:SS``/``HH:MM`` strings, ``time`` or ``datetime``."""

    if isinstance(value, datetime):
        return value.time().replace(microsecond=0)
    if isinstance(value, time):
        return value.replace(microsecond=0)
    if isinstance(value, str):
        v = value.strip()
        for fmt in ("%H:%M:%S", "%H:%M"):
            try:
                return datetime.strptime(v, fmt).time()
            except ValueError:
                continue
    raise ValidationError(f"Invalid time (HH:MM:SS): {value!r}")


def elapsed(check_in: ClockValue, check_out: ClockValue) -> Duration:
    start = datetime.combine(REFERENCE_DATE, parse_clock(check_in))
    end = datetime.combine(REFERENCE_DATE, parse_clock(check_out))
    return Duration(total_seconds=int((end - start).total_seconds()))


def parse_duration(value: Union[str, timedelta, Duration]) -> Duration:
    """Parse a stored ``total_hours`` value.

    mysql-connector returns TIME columns as ``timedelta``; the API exchanges
    them as ``HH:MM:SS`` strings.
    """

    if isinstance(value, Duration):
        return value
    if isinstance(value, timedelta):
        return Duration(total_seconds=int(value.total_seconds()))
    if isinstance(value, str):
        v = value.strip()
        sign = -1 if v.startswith("-") else 1
        parts = v.lstrip("-").split(":")
        if len(parts) not in (2, 3):
            raise ValidationError(f"Invalid duration (HH:MM:SS): {value!r}")
        try:
            hours, minutes = int(parts[0]), int(parts[1])
            seconds = int(parts[2]) if len(parts) == 3 and parts[2] else 0
        except ValueError:
            raise ValidationError(f"Invalid duration (HH:MM:SS): {value!r}")
        return Duration(total_seconds=sign * (hours * 3600 + minutes * 60 + seconds))
    raise TypeError(f"Unsupported duration value type: {type(value)!r}")
