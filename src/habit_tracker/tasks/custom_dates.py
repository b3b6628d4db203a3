# src/habit_tracker/tasks/custom_dates.py

"""
Custom date range selection for task filters.

Exactly one granularity can be chosen at a time (year, month, week or day).
`confirm()` turns the choice into an inclusive DateRange plus display text;
bad input raises InvalidDateInput and leaves the selection untouched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from ..core.dates import DateRange, day_range, end_of_day, month_range, start_of_day, year_range
from ..core.errors import InvalidDateInput

YEAR_MIN = 1900
YEAR_MAX = 2100


@dataclass(frozen=True, slots=True)
class CustomDateResult:
    date_range: DateRange
    display_text: str


@dataclass(slots=True)
class CustomDateSelection:
    year_text: str = ""
    month: date | None = None
    week_start: date | None = None
    day: date | None = None

    year_min: int = YEAR_MIN
    year_max: int = YEAR_MAX

    def active_option(self) -> str | None:
        if self.year_text.strip():
            return "year"
        if self.month is not None:
            return "month"
        if self.week_start is not None:
            return "week"
        if self.day is not None:
            return "day"
        return None

    def enabled_options(self) -> set[str]:
        active = self.active_option()
        if active is None:
            return {"year", "month", "week", "day"}
        return {active}

    def clear(self) -> None:
        self.year_text = ""
        self.month = None
        self.week_start = None
        self.day = None

    def confirm(self) -> CustomDateResult:
        raw = self.year_text.strip()
        if raw:
            if not raw.isdigit() or not (self.year_min <= int(raw) <= self.year_max):
                raise InvalidDateInput(
                    f"Please enter a valid year ({self.year_min}-{self.year_max})"
                )
            year = int(raw)
            return CustomDateResult(year_range(year), str(year))

        if self.month is not None:
            return CustomDateResult(month_range(self.month), self.month.strftime("%m/%Y"))

        if self.week_start is not None:
            first = self.week_start
            last = first + timedelta(days=6)
            return CustomDateResult(
                DateRange(start_of_day(first), end_of_day(last)),
                f"{first.day} - {last.day} {first.strftime('%m/%Y')}",
            )

        if self.day is not None:
            return CustomDateResult(day_range(self.day), self.day.strftime("%d/%m/%Y"))

        raise InvalidDateInput("Please select a date option")


_YEAR_RE = re.compile(r"^\d{4}$")
_MONTH_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
_ISO_MONTH_RE = re.compile(r"^(\d{4})-(\d{1,2})$")
_WEEK_RE = re.compile(r"^week\s+(\S+)$", re.IGNORECASE)


def _parse_day(raw: str) -> date:
    for fmt in ("%Y-%m-%d", "%d/%m/%Y"):
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    raise InvalidDateInput(f"Unrecognized date: {raw!r}")


def _month(year: int, month: int) -> date:
    try:
        return date(year, month, 1)
    except ValueError as e:
        raise InvalidDateInput(f"Invalid month: {month}/{year}") from e


def selection_from_text(
    text: str,
    *,
    year_min: int = YEAR_MIN,
    year_max: int = YEAR_MAX,
) -> CustomDateSelection:
    """
    Build a selection from free text:
      yyyy | MM/yyyy | yyyy-MM | yyyy-MM-dd | dd/MM/yyyy | week <day>
    """
    raw = (text or "").strip()
    sel = CustomDateSelection(year_min=year_min, year_max=year_max)
    if not raw:
        return sel

    if _YEAR_RE.match(raw):
        sel.year_text = raw
        return sel

    m = _MONTH_RE.match(raw)
    if m:
        sel.month = _month(int(m.group(2)), int(m.group(1)))
        return sel

    m = _ISO_MONTH_RE.match(raw)
    if m:
        sel.month = _month(int(m.group(1)), int(m.group(2)))
        return sel

    m = _WEEK_RE.match(raw)
    if m:
        sel.week_start = _parse_day(m.group(1))
        return sel

    sel.day = _parse_day(raw)
    return sel


def parse_custom_range(
    text: str,
    *,
    year_min: int = YEAR_MIN,
    year_max: int = YEAR_MAX,
) -> CustomDateResult:
    return selection_from_text(text, year_min=year_min, year_max=year_max).confirm()
