"""Date manipulation utilities"""

import calendar
from datetime import date
from typing import Iterator, Tuple


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month, leap years included"""
    return calendar.monthrange(year, month)[1]


def iter_months(start: date, end: date) -> Iterator[Tuple[int, int]]:
    """Yield every (year, month) pair touched by [start, end], in order"""
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        if month == 12:
            year, month = year + 1, 1
        else:
            month += 1


def day_in_month(year: int, month: int, day: int) -> date | None:
    """date(year, month, day), or None when the month is too short (no clamping)"""
    if day > last_day_of_month(year, month):
        return None
    return date(year, month, day)
