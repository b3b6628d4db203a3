# src/habit_tracker/core/dates.py

"""
Calendar helpers shared by statistics, filters and week progress.

Conventions:
- weeks start on Sunday (Sunday..Saturday),
- ranges are inclusive on both ends; "end" is the last representable instant
  of the day (23:59:59.999999),
- "day" arguments accept either a date or a datetime (time is dropped).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta


@dataclass(frozen=True, slots=True)
class DateRange:
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


def as_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(day: date | datetime) -> datetime:
    return datetime.combine(as_date(day), time.min)


def end_of_day(day: date | datetime) -> datetime:
    return datetime.combine(as_date(day), time.max)


def start_of_week(day: date | datetime) -> date:
    """Sunday on or before `day`."""
    d = as_date(day)
    # date.weekday(): Monday=0 .. Sunday=6
    return d - timedelta(days=(d.weekday() + 1) % 7)


def start_of_month(day: date | datetime) -> date:
    d = as_date(day)
    return date(d.year, d.month, 1)


def end_of_month(day: date | datetime) -> date:
    d = as_date(day)
    return date(d.year, d.month, days_in_month(d.year, d.month))


def start_of_year(day: date | datetime) -> date:
    return date(as_date(day).year, 1, 1)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


def iter_days(first: date, last: date):
    """Yield every date from first to last inclusive."""
    d = first
    while d <= last:
        yield d
        d += timedelta(days=1)


def day_range(day: date | datetime) -> DateRange:
    return DateRange(start_of_day(day), end_of_day(day))


def week_range(day: date | datetime) -> DateRange:
    first = start_of_week(day)
    return DateRange(start_of_day(first), end_of_day(first + timedelta(days=6)))


def month_range(day: date | datetime) -> DateRange:
    return DateRange(start_of_day(start_of_month(day)), end_of_day(end_of_month(day)))


def year_range(year: int) -> DateRange:
    return DateRange(start_of_day(date(year, 1, 1)), end_of_day(date(year, 12, 31)))


def week_of_year(day: date | datetime) -> int:
    """
    Week number where week 1 is the (Sunday-based) week containing January 1st.
    Partial first weeks count as week 1.
    """
    d = as_date(day)
    jan1 = date(d.year, 1, 1)
    offset = (jan1.weekday() + 1) % 7  # days between the Sunday before jan1 and jan1
    return ((d - jan1).days + offset) // 7 + 1
