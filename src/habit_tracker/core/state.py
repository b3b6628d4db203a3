# src/habit_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.filter_state import TaskFilterState
from .ports import Clock, TrackerRepo


@dataclass
class AppState:
    """
    Session state shared by front-ends.

    Built once by cli.bootstrap (composition root) and passed explicitly;
    there is no module-level repository.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: Any
    clock: Clock
    repository: TrackerRepo

    task_filter: TaskFilterState = field(default_factory=TaskFilterState)
