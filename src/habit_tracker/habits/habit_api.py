# src/habit_tracker/habits/habit_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .habit_week import HabitWeek, build_habit_week

logger = logging.getLogger(__name__)


def toggle_today(state: AppState, habit_id: str, note: str | None = None) -> bool | None:
    """
    Convenience helper: mark/unmark a habit for the clock's today.
    Returns the new state, or None for an unknown habit.
    """
    return state.repository.toggle_habit_completion(habit_id, state.clock.today(), note)


def get_habit_week(state: AppState, habit_id: str) -> HabitWeek | None:
    habit = state.repository.get_habit(habit_id)
    if habit is None:
        return None
    return build_habit_week(habit, state.clock.today())


def get_habit_weeks(state: AppState) -> list[HabitWeek]:
    today = state.clock.today()
    return [build_habit_week(h, today) for h in state.repository.list_habits()]
