"""Date manipulation utilities"""

import math
from datetime import date, datetime, time, timezone
from typing import List, Tuple

SECONDS_PER_DAY = 86_400


def _as_utc_datetime(value: date) -> datetime:
    """Promote a date to UTC midnight; datetimes pass through (naive ones assumed UTC)"""
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc) if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def calendar_date(value: date) -> date:
    """UTC calendar day of a date or datetime"""
    if isinstance(value, datetime):
        return _as_utc_datetime(value).date()
    return value


def elapsed_days(start: date, as_of: date, round_up: bool = False) -> int:
    """
    Whole days between start (taken as UTC midnight) and as_of, clamped to >= 0.

    Partial days are floored by default; round_up=True takes the ceiling, so
    any time past midnight counts as a started day.
    """
    seconds = (_as_utc_datetime(as_of) - _as_utc_datetime(start)).total_seconds()
    days = seconds / SECONDS_PER_DAY
    whole = math.ceil(days) if round_up else math.floor(days)
    return max(whole, 0)


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """Half-open [first day of month, first day of next month)"""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    """Move (year, month) by offset calendar months"""
    index = year * 12 + (month - 1) + offset
    return index // 12, index % 12 + 1


def trailing_months(today: date, count: int) -> List[Tuple[int, int]]:
    """The last `count` calendar months ending with today's, oldest first"""
    return [shift_month(today.year, today.month, -offset) for offset in range(count - 1, -1, -1)]

