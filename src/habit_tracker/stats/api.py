# src/habit_tracker/stats/api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .engine import habit_statistics, task_statistics
from .stats_models import HabitStatistics, TaskStatistics

logger = logging.getLogger(__name__)


def get_habit_statistics(state: AppState, habit_id: str) -> HabitStatistics | None:
    """Statistics for one habit as of the clock's today; None for an unknown id."""
    habit = state.repository.get_habit(habit_id)
    if habit is None:
        logger.debug("Statistics requested for unknown habit id=%s", habit_id)
        return None
    return habit_statistics(habit, state.clock.today())


def get_all_habit_statistics(state: AppState) -> list[HabitStatistics]:
    today = state.clock.today()
    return [habit_statistics(h, today) for h in state.repository.list_habits()]


def get_task_statistics(state: AppState) -> TaskStatistics:
    return task_statistics(state.repository.list_tasks())
