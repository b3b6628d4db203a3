# src/habit_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import StrEnum

from ..core.ids import new_id


class Priority(StrEnum):
    """
    Task priority.

    Notes:
    - "None" is a real value (no priority chosen); an absent/empty raw value maps to it.
    """

    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def from_raw(cls, raw: str | None) -> Priority:
        if not raw or not raw.strip():
            return cls.NONE
        key = raw.strip().lower()
        for p in cls:
            if p.value.lower() == key:
                return p
        raise ValueError(f"unknown priority: {raw!r}")


@dataclass(slots=True)
class SubTask:
    name: str
    parent_task_id: str = ""
    is_completed: bool = False
    display_order: int = 0
    id: str = field(default_factory=new_id)


@dataclass(slots=True)
class TodoTask:
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    due_date: date | None = None
    priority: Priority = Priority.NONE

    is_completed: bool = False
    completed_at: datetime | None = None

    has_reminders: bool = False
    reminder_time: time | None = None

    display_order: int = 0
    subtasks: list[SubTask] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    # ---- derived ----

    @property
    def subtask_count(self) -> int:
        return len(self.subtasks)

    @property
    def completed_subtask_count(self) -> int:
        return sum(1 for st in self.subtasks if st.is_completed)

    @property
    def subtask_percentage(self) -> int:
        if not self.subtasks:
            return 0
        return round(self.completed_subtask_count / len(self.subtasks) * 100)

    @property
    def all_subtasks_completed(self) -> bool:
        return bool(self.subtasks) and all(st.is_completed for st in self.subtasks)

    @property
    def completed_on_time(self) -> bool:
        if self.completed_at is None or self.due_date is None:
            return False
        return self.completed_at.date() <= self.due_date

    @property
    def completed_after_deadline(self) -> bool:
        if self.completed_at is None or self.due_date is None:
            return False
        return self.completed_at.date() > self.due_date

    # ---- mutation ----

    def mark_completed(self, now: datetime) -> None:
        self.is_completed = True
        self.completed_at = now

    def mark_pending(self) -> None:
        self.is_completed = False
        self.completed_at = None

    def add_subtask(self, name: str) -> SubTask:
        st = SubTask(name=name, parent_task_id=self.id, display_order=len(self.subtasks))
        self.subtasks.append(st)
        return st

    def get_subtask(self, subtask_id: str) -> SubTask | None:
        for st in self.subtasks:
            if st.id == subtask_id:
                return st
        return None

    def toggle_subtask(self, subtask_id: str, now: datetime) -> SubTask | None:
        """
        Flip one subtask and keep the parent consistent.

        Completing the last open subtask auto-completes the task (once).
        Un-checking a subtask never re-opens a completed task.
        """
        st = self.get_subtask(subtask_id)
        if st is None:
            return None
        st.is_completed = not st.is_completed
        if self.all_subtasks_completed and not self.is_completed:
            self.mark_completed(now)
        return st
