# src/habit_tracker/stats/engine.py

"""
Pure statistics functions.

Everything here takes entities plus an explicit "today" and never touches the
repository or the clock, so results are reproducible in tests.

Scheduling rule used by both streaks: a day is scheduled when it is on or after
the habit's creation date and the habit tracks that weekday. Unscheduled days
neither extend nor break a streak.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from ..core.dates import (
    days_in_month,
    days_in_year,
    end_of_month,
    iter_days,
    start_of_month,
    start_of_week,
    start_of_year,
)
from ..habits.habit_models import Habit, Weekday
from ..tasks.task_models import TodoTask
from .stats_models import HabitStatistics, TaskStatistics


def _rate(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)


def _is_scheduled(habit: Habit, day: date) -> bool:
    return day >= habit.created_at.date() and habit.is_tracked_on(day)


def count_weekdays(first: date, last: date, weekdays: Iterable[Weekday]) -> int:
    wanted = {int(w) for w in weekdays}
    if not wanted:
        return 0
    return sum(1 for d in iter_days(first, last) if d.weekday() in wanted)


def weekly_target(habit: Habit) -> int:
    return habit.tracked_days_per_week


def monthly_target(habit: Habit, today: date) -> int:
    if habit.track_everyday:
        return days_in_month(today.year, today.month)
    return count_weekdays(start_of_month(today), end_of_month(today), habit.tracking_days)


def yearly_target(habit: Habit, today: date) -> int:
    if habit.track_everyday:
        return days_in_year(today.year)
    return count_weekdays(date(today.year, 1, 1), date(today.year, 12, 31), habit.tracking_days)


def current_streak(habit: Habit, today: date) -> int:
    if not habit.track_everyday and not habit.tracking_days:
        return 0

    done = habit.completed_dates()
    created = habit.created_at.date()
    streak = 0
    d = today
    while d >= created:
        if habit.is_tracked_on(d):
            if d not in done:
                break
            streak += 1
        d -= timedelta(days=1)
    return streak


def longest_streak(habit: Habit, today: date) -> int:
    if not habit.completions:
        return 0

    done = habit.completed_dates()
    longest = 0
    running = 0
    for d in iter_days(habit.created_at.date(), today):
        if not _is_scheduled(habit, d):
            continue
        if d in done:
            running += 1
            longest = max(longest, running)
        else:
            running = 0
    return longest


def completion_rate(habit: Habit, today: date) -> float:
    total_days = (today - habit.created_at.date()).days + 1
    return _rate(len(habit.completions), total_days)


def habit_statistics(habit: Habit, today: date) -> HabitStatistics:
    week_start = start_of_week(today)
    month_start = start_of_month(today)
    year_start = start_of_year(today)

    dates = [c.completed_date for c in habit.completions]

    return HabitStatistics(
        habit_id=habit.id,
        habit_name=habit.name,
        daily_completions=sum(1 for d in dates if d == today),
        daily_target=1,
        weekly_completions=sum(1 for d in dates if d >= week_start),
        weekly_target=weekly_target(habit),
        monthly_completions=sum(1 for d in dates if d >= month_start),
        monthly_target=monthly_target(habit, today),
        yearly_completions=sum(1 for d in dates if d >= year_start),
        yearly_target=yearly_target(habit, today),
        current_streak=current_streak(habit, today),
        longest_streak=longest_streak(habit, today),
        completion_rate=completion_rate(habit, today),
    )


def task_statistics(tasks: Iterable[TodoTask]) -> TaskStatistics:
    items = list(tasks)
    total = len(items)
    completed = sum(1 for t in items if t.is_completed)
    with_deadlines = sum(1 for t in items if t.due_date is not None)
    on_time = sum(1 for t in items if t.completed_on_time)
    late = sum(1 for t in items if t.completed_after_deadline)

    return TaskStatistics(
        total_tasks=total,
        completed_tasks=completed,
        pending_tasks=total - completed,
        tasks_with_deadlines=with_deadlines,
        completed_on_time=on_time,
        completed_after_deadline=late,
        completion_rate=_rate(completed, total),
        on_time_rate=_rate(on_time, with_deadlines),
        late_rate=_rate(late, with_deadlines),
    )
