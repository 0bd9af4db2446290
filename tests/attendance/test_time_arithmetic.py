from datetime import datetime, time, timedelta

import pytest

from src.hr_payroll.hr_payroll.attendance.time_arithmetic import Duration, elapsed, parse_clock, parse_duration
from src.hr_payroll.hr_payroll.core.exceptions import ValidationError


def test_elapsed_same_day():
    d = elapsed("09:00:00", "16:30:00")
    assert d.total_seconds == 7 * 3600 + 30 * 60
    assert d.as_hms() == "07:30:00"
    assert d.as_verbose() == "7h 30m 0s"
    assert d.decimal_hours == 7.5


def test_elapsed_accepts_time_and_datetime():
    d = elapsed(time(8, 15), datetime(2026, 10, 19, 12, 15, 30))
    assert d.as_hms() == "04:00:30"


def test_elapsed_over_midnight_is_negative():
    d = elapsed("22:00", "06:00")
    assert d.is_negative
    assert d.total_seconds == -16 * 3600
    assert d.as_hms() == "-16:00:00"


def test_zero_duration():
    d = elapsed("09:00:00", "09:00:00")
    assert d.total_seconds == 0
    assert d.as_hms() == "00:00:00"


def test_parse_clock_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_clock("9am")


def test_parse_duration_variants():
    assert parse_duration("07:00:00") == Duration(7 * 3600)
    assert parse_duration("-01:30") == Duration(-5400)
    assert parse_duration(timedelta(hours=3, minutes=59, seconds=59)).as_hms() == "03:59:59"


def test_as_timedelta_round_trips_through_parse_duration():
    d = elapsed("08:00:00", "12:45:10")
    assert parse_duration(d.as_timedelta()) == d
