# src/habit_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires clock, repository and filter state into AppState,
- optionally seeds demo data.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.clock import SystemClock
from ..core.ports import Clock, TrackerPersistence
from ..core.state import AppState
from ..store.repository import TrackerRepository
from ..store.sample_data import seed_sample_data
from ..tasks.filter_state import TaskFilterState
from ..tasks.task_filter import DatePeriod

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(
    *,
    settings=None,
    clock: Clock | None = None,
    persistence: TrackerPersistence | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and clock injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    clock = clock or SystemClock()
    repository = TrackerRepository(clock=clock, persistence=persistence)

    empty = not repository.list_habits() and not repository.list_tasks()
    if getattr(settings, "seed_sample_data", False) and empty:
        seed_sample_data(repository)

    default_period = getattr(settings, "default_period", DatePeriod.CURRENT_MONTH)
    task_filter = TaskFilterState(default_period=default_period, previous_period=default_period)

    return AppState(
        settings=settings,
        clock=clock,
        repository=repository,
        task_filter=task_filter,
    )
