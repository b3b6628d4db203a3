# src/habit_tracker/store/repository.py

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from typing import TypeVar

from ..core.clock import SystemClock
from ..core.dates import as_date
from ..core.errors import ValidationError
from ..core.ports import Clock, TrackerPersistence
from ..habits.habit_models import Habit, HabitCompletion
from ..tasks.task_models import TodoTask

logger = logging.getLogger(__name__)

_Ordered = TypeVar("_Ordered", Habit, TodoTask)


def _renumber(items: list[_Ordered]) -> None:
    for i, item in enumerate(items):
        item.display_order = i


def _find(items: Iterable[_Ordered], item_id: str) -> _Ordered | None:
    for item in items:
        if item.id == item_id:
            return item
    return None


def _link_completions(habit: Habit) -> None:
    for c in habit.completions:
        c.habit_id = habit.id


def _link_subtasks(task: TodoTask) -> None:
    for i, st in enumerate(task.subtasks):
        st.parent_task_id = task.id
        st.display_order = i


def _reorder(items: list[_Ordered], ids: Iterable[str]) -> list[_Ordered]:
    by_id = {item.id: item for item in items}
    ordered: list[_Ordered] = []
    seen: set[str] = set()
    for item_id in ids:
        item = by_id.get(item_id)
        if item is None or item_id in seen:
            continue
        ordered.append(item)
        seen.add(item_id)
    ordered.extend(item for item in items if item.id not in seen)
    _renumber(ordered)
    return ordered


class TrackerRepository:
    """
    In-memory habit/task store.

    Owns the canonical lists; entities returned by getters are the stored objects
    (mutable records), so callers should mutate them through the toggle/save methods.

    Lists are kept sorted by display_order and renumbered densely (0..n-1) after
    every insert, delete and reorder.

    Not thread-safe: callers serialize all mutations (single UI/event thread).
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        persistence: TrackerPersistence | None = None,
    ) -> None:
        self._clock: Clock = clock or SystemClock()
        self._persistence = persistence
        self._habits: list[Habit] = []
        self._tasks: list[TodoTask] = []

        if persistence is not None:
            self._habits = sorted(persistence.load_habits(), key=lambda h: h.display_order)
            self._tasks = sorted(persistence.load_tasks(), key=lambda t: t.display_order)
            _renumber(self._habits)
            _renumber(self._tasks)
            for h in self._habits:
                _link_completions(h)
            for t in self._tasks:
                _link_subtasks(t)

        logger.info(
            "TrackerRepository ready habits=%s tasks=%s persistence=%s",
            len(self._habits),
            len(self._tasks),
            type(persistence).__name__ if persistence is not None else None,
        )

    @property
    def clock(self) -> Clock:
        return self._clock

    # ---- low-level helpers ----

    def _habits_changed(self) -> None:
        if self._persistence is not None:
            self._persistence.save_habits(list(self._habits))

    def _tasks_changed(self) -> None:
        if self._persistence is not None:
            self._persistence.save_tasks(list(self._tasks))

    @staticmethod
    def _require_name(kind: str, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError(f"{kind} name is required")

    # ---- habits ----

    def list_habits(self) -> list[Habit]:
        return sorted(self._habits, key=lambda h: h.display_order)

    def get_habit(self, habit_id: str) -> Habit | None:
        return _find(self._habits, habit_id)

    def save_habit(self, habit: Habit) -> Habit:
        """Insert a new habit (appended last) or replace the stored one with the same id."""
        self._require_name("habit", habit.name)
        days = [as_date(c.completed_date) for c in habit.completions]
        if len(set(days)) != len(days):
            raise ValidationError("habit has more than one completion on the same day")

        for c, d in zip(habit.completions, days):
            c.completed_date = d
        _link_completions(habit)

        existing = self.get_habit(habit.id)
        if existing is None:
            habit.display_order = len(self._habits)
            self._habits.append(habit)
            logger.debug("Habit added id=%s name=%s", habit.id, habit.name)
        else:
            habit.display_order = existing.display_order
            self._habits[self._habits.index(existing)] = habit
            logger.debug("Habit replaced id=%s name=%s", habit.id, habit.name)

        self._habits_changed()
        return habit

    def delete_habit(self, habit_id: str) -> None:
        habit = self.get_habit(habit_id)
        if habit is None:
            return
        self._habits.remove(habit)
        self._habits = self.list_habits()
        _renumber(self._habits)
        logger.debug("Habit deleted id=%s", habit_id)
        self._habits_changed()

    def reorder_habits(self, habit_ids: Iterable[str]) -> None:
        self._habits = _reorder(self.list_habits(), habit_ids)
        self._habits_changed()

    def toggle_habit_completion(
        self,
        habit_id: str,
        day: date | datetime,
        note: str | None = None,
    ) -> bool | None:
        """
        Mark/unmark a habit for one calendar day.

        Returns the new state (True = completed) or None for an unknown habit.
        """
        habit = self.get_habit(habit_id)
        if habit is None:
            return None

        d = as_date(day)
        existing = habit.completion_on(d)
        if existing is not None:
            habit.completions.remove(existing)
            completed = False
        else:
            completion = HabitCompletion(habit_id=habit.id, completed_date=d, note=note)
            habit.completions.append(completion)
            completed = True

        logger.debug("Habit completion toggled id=%s day=%s completed=%s", habit_id, d, completed)
        self._habits_changed()
        return completed

    def is_habit_completed_on(self, habit_id: str, day: date | datetime) -> bool:
        habit = self.get_habit(habit_id)
        if habit is None:
            return False
        return habit.is_completed_on(day)

    # ---- tasks ----

    def list_tasks(self) -> list[TodoTask]:
        return sorted(self._tasks, key=lambda t: t.display_order)

    def get_task(self, task_id: str) -> TodoTask | None:
        return _find(self._tasks, task_id)

    def save_task(self, task: TodoTask) -> TodoTask:
        """Insert a new task (appended last) or replace the stored one with the same id."""
        self._require_name("task", task.name)

        # blank subtask rows are dropped, not rejected
        kept = [st for st in task.subtasks if st.name and st.name.strip()]
        if len(kept) != len(task.subtasks):
            logger.debug(
                "Dropped blank subtasks task=%s count=%s", task.id, len(task.subtasks) - len(kept)
            )
        task.subtasks = kept
        _link_subtasks(task)

        existing = self.get_task(task.id)
        if existing is None:
            task.display_order = len(self._tasks)
            self._tasks.append(task)
            logger.debug("Task added id=%s name=%s", task.id, task.name)
        else:
            task.display_order = existing.display_order
            self._tasks[self._tasks.index(existing)] = task
            logger.debug("Task replaced id=%s name=%s", task.id, task.name)

        self._tasks_changed()
        return task

    def delete_task(self, task_id: str) -> None:
        task = self.get_task(task_id)
        if task is None:
            return
        self._tasks.remove(task)
        self._tasks = self.list_tasks()
        _renumber(self._tasks)
        logger.debug("Task deleted id=%s", task_id)
        self._tasks_changed()

    def reorder_tasks(self, task_ids: Iterable[str]) -> None:
        self._tasks = _reorder(self.list_tasks(), task_ids)
        self._tasks_changed()

    def toggle_task_completion(self, task_id: str) -> TodoTask | None:
        task = self.get_task(task_id)
        if task is None:
            return None

        if task.is_completed:
            task.mark_pending()
        else:
            task.mark_completed(self._clock.now())

        logger.debug("Task completion toggled id=%s completed=%s", task_id, task.is_completed)
        self._tasks_changed()
        return task

    def toggle_subtask_completion(self, task_id: str, subtask_id: str) -> TodoTask | None:
        task = self.get_task(task_id)
        if task is None:
            return None

        was_completed = task.is_completed
        st = task.toggle_subtask(subtask_id, self._clock.now())
        if st is None:
            return None

        if task.is_completed and not was_completed:
            logger.info("Task auto-completed by subtasks id=%s", task_id)
        logger.debug(
            "Subtask toggled task=%s subtask=%s completed=%s", task_id, subtask_id, st.is_completed
        )
        self._tasks_changed()
        return task
