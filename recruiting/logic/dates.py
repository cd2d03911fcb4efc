"""
Date helpers shared by scoring and rules.

All comparisons are made on timezone-aware UTC datetimes; naive values
(as returned by SQLite) are treated as UTC.
"""

import calendar
from datetime import date, datetime, timezone
from typing import Optional

# Month the school year rolls over to the next grade
SCHOOL_YEAR_START_MONTH = 8


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed from `earlier` to `later` (floored)."""
    delta = ensure_utc(later) - ensure_utc(earlier)
    return delta.days


def subtract_months(value: datetime, months: int) -> datetime:
    """Calendar-month subtraction, clamping the day to the target month's length."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def current_grade_from_graduation_year(graduation_year: int, now: Optional[datetime] = None) -> int:
    """
    High school grade (9-12) for an athlete graduating in `graduation_year`.
    Grades advance in August.
    """
    now = ensure_utc(now) or datetime.now(timezone.utc)
    senior_year_end = now.year + 1 if now.month >= SCHOOL_YEAR_START_MONTH else now.year
    grade = 12 - (graduation_year - senior_year_end)
    return max(9, min(12, grade))
