# src/habit_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps the clock and storage swappable and makes testing deterministic.
"""

from datetime import date, datetime
from typing import Any, Protocol


class Clock(Protocol):
    """Source of "now" / "today" for streaks, statistics and date filters."""

    def now(self) -> datetime: ...
    def today(self) -> date: ...


class TrackerPersistence(Protocol):
    """
    Storage-side port: how the repository would load and save its lists.

    No implementation ships with the core; the repository works purely in memory
    when none is provided.
    """

    def load_habits(self) -> list[Any]: ...
    def load_tasks(self) -> list[Any]: ...
    def save_habits(self, habits: list[Any]) -> None: ...
    def save_tasks(self, tasks: list[Any]) -> None: ...


class TrackerRepo(Protocol):
    # Habits
    def list_habits(self) -> list[Any]: ...
    def get_habit(self, habit_id: str) -> Any | None: ...
    def save_habit(self, habit: Any) -> Any: ...
    def delete_habit(self, habit_id: str) -> None: ...
    def reorder_habits(self, habit_ids: list[str]) -> None: ...
    def toggle_habit_completion(
            self,
            habit_id: str,
            day: date | datetime,
            note: str | None = None,
    ) -> bool | None: ...
    def is_habit_completed_on(self, habit_id: str, day: date | datetime) -> bool: ...

    # Tasks
    def list_tasks(self) -> list[Any]: ...
    def get_task(self, task_id: str) -> Any | None: ...
    def save_task(self, task: Any) -> Any: ...
    def delete_task(self, task_id: str) -> None: ...
    def reorder_tasks(self, task_ids: list[str]) -> None: ...
    def toggle_task_completion(self, task_id: str) -> Any | None: ...
    def toggle_subtask_completion(self, task_id: str, subtask_id: str) -> Any | None: ...
