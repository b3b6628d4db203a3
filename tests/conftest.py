# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from habit_tracker.core.state import AppState
from habit_tracker.store.repository import TrackerRepository
from habit_tracker.tasks.filter_state import TaskFilterState
from habit_tracker.tasks.task_filter import DatePeriod

from .fakes import FixedClock

# Wednesday; the week runs Sunday 2024-01-07 .. Saturday 2024-01-13.
NOW = datetime(2024, 1, 10, 12, 0, 0)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tracker-test",
        log_level="WARNING",
        data_dir=tmp_path / "data",
        console_enabled=False,
        seed_sample_data=False,
        default_period=DatePeriod.CURRENT_MONTH,
        custom_year_min=1900,
        custom_year_max=2100,
    )


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture()
def repo(clock: FixedClock) -> TrackerRepository:
    return TrackerRepository(clock=clock)


@pytest.fixture()
def state(settings: SimpleNamespace, clock: FixedClock, repo: TrackerRepository) -> AppState:
    """AppState wired with a fixed clock and an empty in-memory repository."""
    return AppState(
        settings=settings,
        clock=clock,
        repository=repo,
        task_filter=TaskFilterState(),
    )
