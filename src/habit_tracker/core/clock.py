# src/habit_tracker/core/clock.py

from __future__ import annotations

from datetime import date, datetime


class SystemClock:
    """Local wall clock (naive datetimes, like the rest of the core)."""

    def now(self) -> datetime:
        return datetime.now()

    def today(self) -> date:
        return date.today()
