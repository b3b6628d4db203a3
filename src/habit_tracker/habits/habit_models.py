# src/habit_tracker/habits/habit_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import IntEnum

from ..core.dates import as_date
from ..core.ids import new_id


class Weekday(IntEnum):
    """Day of week, numbered like `date.weekday()` (Monday=0 .. Sunday=6)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, day: date | datetime) -> Weekday:
        return cls(as_date(day).weekday())

    @classmethod
    def parse(cls, raw: str) -> Weekday:
        """Accept full or 3-letter English names, case-insensitive ("mon", "Friday")."""
        key = (raw or "").strip().upper()
        for wd in cls:
            if wd.name == key or wd.name[:3] == key:
                return wd
        raise ValueError(f"unknown weekday: {raw!r}")

    @property
    def short_name(self) -> str:
        return self.name[:3].title()


@dataclass(slots=True)
class HabitCompletion:
    habit_id: str
    completed_date: date
    note: str | None = None
    id: str = field(default_factory=new_id)


@dataclass(slots=True)
class Habit:
    name: str
    description: str = ""
    track_everyday: bool = True
    tracking_days: set[Weekday] = field(default_factory=set)
    created_at: datetime = field(default_factory=datetime.now)
    deadline: date | None = None

    has_reminders: bool = False
    reminder_time: time | None = None
    notes_enabled: bool = False

    display_order: int = 0
    completions: list[HabitCompletion] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    def is_tracked_on(self, day: date | datetime) -> bool:
        """Weekly schedule only; creation date is not taken into account."""
        if self.track_everyday:
            return True
        return Weekday.of(day) in self.tracking_days

    def completion_on(self, day: date | datetime) -> HabitCompletion | None:
        d = as_date(day)
        for c in self.completions:
            if c.completed_date == d:
                return c
        return None

    def is_completed_on(self, day: date | datetime) -> bool:
        return self.completion_on(day) is not None

    def completed_dates(self) -> set[date]:
        return {c.completed_date for c in self.completions}

    @property
    def tracked_days_per_week(self) -> int:
        return 7 if self.track_everyday else len(self.tracking_days)
