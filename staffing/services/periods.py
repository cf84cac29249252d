import calendar
from datetime import date, timedelta
from typing import Optional

from django.utils import timezone


def current_week(today: Optional[date] = None) -> tuple[date, date]:
    """Monday..Sunday of the week containing ``today``."""
    today = today or timezone.localdate()
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def current_month(today: Optional[date] = None) -> tuple[date, date]:
    today = today or timezone.localdate()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return today.replace(day=1), today.replace(day=last_day)


def overlap_days(start: date, end: date, range_start: date, range_end: date) -> int:
    """Number of days ``[start, end]`` shares with ``[range_start, range_end]``."""
    lo = max(start, range_start)
    hi = min(end, range_end)
    return (hi - lo).days + 1 if lo <= hi else 0
