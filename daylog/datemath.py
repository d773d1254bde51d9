"""Calendar arithmetic on local ``YYYY-MM-DD`` strings.

Dates are handled as plain calendar days. Nothing here goes through an aware
``datetime`` or a UTC timestamp, so a day never shifts across midnight.
Month indices are 0-based in every signature and 1-based only inside the
ISO string.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daylog.constants import MONTH_DAYS

logger = logging.getLogger(__name__)


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month0: int) -> int:
    if not 0 <= month0 <= 11:
        raise ValueError(f"Month index out of range: {month0}")
    if month0 == 1 and is_leap_year(year):
        return 29
    return MONTH_DAYS[month0]


def parse_local_date(value: str) -> tuple[int, int, int]:
    parts = str(value).strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"Invalid date string: {value!r}")
    year, month, day = (int(part) for part in parts)
    month0 = month - 1
    if not 0 <= month0 <= 11 or not 1 <= day <= days_in_month(year, month0):
        raise ValueError(f"Invalid date string: {value!r}")
    return year, month0, day


def format_local_date(year: int, month0: int, day: int) -> str:
    return f"{year:04d}-{month0 + 1:02d}-{day:02d}"


def is_valid_iso(value) -> bool:
    """True only for canonical zero-padded ``YYYY-MM-DD`` strings."""
    if not isinstance(value, str):
        return False
    try:
        parsed = parse_local_date(value)
    except ValueError:
        return False
    return format_local_date(*parsed) == value


def _to_date(value: str) -> date:
    year, month0, day = parse_local_date(value)
    return date(year, month0 + 1, day)


def _from_date(value: date) -> str:
    return format_local_date(value.year, value.month - 1, value.day)


def today_local_string(tz_name: str | None = None) -> str:
    """Today's wall-clock date, in ``tz_name`` when one is configured."""
    if tz_name:
        try:
            return _from_date(datetime.now(ZoneInfo(tz_name)).date())
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r, using the process local date.", tz_name)
    return _from_date(date.today())


def add_days(value: str, n: int) -> str:
    return _from_date(_to_date(value) + timedelta(days=n))


def days_between(start: str, end: str) -> int:
    """Number of days in ``[start, end)``."""
    return (_to_date(end) - _to_date(start)).days


def weekday_of(year: int, month0: int, day: int) -> int:
    # date.weekday() is Monday=0; shift so Sunday=0.
    return (date(year, month0 + 1, day).weekday() + 1) % 7


def weekday_of_iso(value: str) -> int:
    return weekday_of(*parse_local_date(value))


def shift_month(year: int, month0: int, delta: int) -> tuple[int, int]:
    total = year * 12 + month0 + delta
    return total // 12, total % 12


def first_of_month(year: int, month0: int) -> str:
    return format_local_date(year, month0, 1)


def is_future(value: str, today: str) -> bool:
    return value > today
