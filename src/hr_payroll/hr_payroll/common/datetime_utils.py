from __future__ import annotations

import calendar
from datetime import date, datetime

MONTH_NAMES = list(calendar.month_name)[1:]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def month_name(month: int) -> str:
    return MONTH_NAMES[month - 1]


def format_long_date(value: date) -> str:
    """19 Oct 2026"""
    return f"{value.day} {value.strftime('%b %Y')}"
