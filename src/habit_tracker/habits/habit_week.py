# src/habit_tracker/habits/habit_week.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta

from ..core.dates import start_of_week, week_of_year
from .habit_models import Habit, Weekday


@dataclass(frozen=True, slots=True)
class DayCompletion:
    habit_id: str
    day: date
    day_name: str
    is_completed: bool
    should_track: bool
    is_today: bool


@dataclass(slots=True)
class HabitWeek:
    """Sunday..Saturday strip shown on a habit card."""

    habit_id: str
    habit_name: str
    week_number: int
    days: list[DayCompletion] = field(default_factory=list)

    @property
    def tracked_days(self) -> int:
        return sum(1 for d in self.days if d.should_track)

    @property
    def completed_days(self) -> int:
        return sum(1 for d in self.days if d.should_track and d.is_completed)

    @property
    def completion_fraction(self) -> float:
        tracked = self.tracked_days
        return self.completed_days / tracked if tracked > 0 else 0.0

    @property
    def completion_percentage(self) -> str:
        return f"{round(self.completion_fraction * 100)}%"


def build_habit_week(habit: Habit, today: date) -> HabitWeek:
    first = start_of_week(today)
    week = HabitWeek(habit_id=habit.id, habit_name=habit.name, week_number=week_of_year(today))
    for i in range(7):
        d = first + timedelta(days=i)
        week.days.append(
            DayCompletion(
                habit_id=habit.id,
                day=d,
                day_name=Weekday.of(d).short_name,
                is_completed=habit.is_completed_on(d),
                should_track=habit.is_tracked_on(d),
                is_today=d == today,
            )
        )
    return week
