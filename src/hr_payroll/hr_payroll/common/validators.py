from __future__ import annotations

from datetime import MAXYEAR, MINYEAR, date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ..core.constants import MAX_WORKING_DAYS, MIN_WORKING_DAYS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def parse_amount(value: Any, field_name: str, *, default: Optional[Decimal] = None) -> Decimal:
    """Parse a currency/percentage input into Decimal.

    Empty input falls back to ``default`` when one is given.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValidationError(f"{field_name} is required")
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field_name} must be a number")
    if amount < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return amount


def parse_int(value: Any, field_name: str, *, default: Optional[int] = None) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValidationError(f"{field_name} is required")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")


def clamp_working_days(value: Any, *, default: int) -> int:
    """Clamp a total-working-days input to [1, 31]."""
    days = parse_int(value, "Total working days", default=default)
    return max(MIN_WORKING_DAYS, min(MAX_WORKING_DAYS, days))


def require_year(value: Any, *, default: Optional[int] = None) -> int:
    year = parse_int(value, "Year", default=default)
    if not MINYEAR <= year <= MAXYEAR:
        raise ValidationError(f"Year must be between {MINYEAR} and {MAXYEAR}")
    return year


def require_month(value: Any) -> int:
    month = parse_int(value, "Month")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be between 1 and 12")
    return month


def parse_date(value: Any, field_name: str, *, default: Optional[date] = None) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is not None:
            return default
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be a date (YYYY-MM-DD)")
