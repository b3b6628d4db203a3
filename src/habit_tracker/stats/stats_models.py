# src/habit_tracker/stats/stats_models.py

from __future__ import annotations

from dataclasses import dataclass


def _fraction(done: int, target: int) -> float:
    return done / target if target > 0 else 0.0


@dataclass(frozen=True, slots=True)
class HabitStatistics:
    habit_id: str
    habit_name: str

    daily_completions: int
    daily_target: int
    weekly_completions: int
    weekly_target: int
    monthly_completions: int
    monthly_target: int
    yearly_completions: int
    yearly_target: int

    current_streak: int
    longest_streak: int
    completion_rate: float

    @property
    def weekly_progress(self) -> float:
        return _fraction(self.weekly_completions, self.weekly_target)

    @property
    def monthly_progress(self) -> float:
        return _fraction(self.monthly_completions, self.monthly_target)

    @property
    def yearly_progress(self) -> float:
        return _fraction(self.yearly_completions, self.yearly_target)


@dataclass(frozen=True, slots=True)
class TaskStatistics:
    total_tasks: int
    completed_tasks: int
    pending_tasks: int
    tasks_with_deadlines: int
    completed_on_time: int
    completed_after_deadline: int
    completion_rate: float
    on_time_rate: float
    late_rate: float
