# src/habit_tracker/tasks/task_filter.py

"""
Task list filtering.

Pipeline: priority filter -> date filter -> partition into pending/completed.
Input order is preserved, so passing `repo.list_tasks()` keeps display order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from ..core.dates import DateRange, day_range, month_range, week_range, year_range
from .task_models import Priority, TodoTask


class PriorityFilter(StrEnum):
    ALL = "ALL"
    NONE = "None"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str) -> PriorityFilter:
        key = (raw or "").strip().lower()
        for p in cls:
            if p.value.lower() == key:
                return p
        raise ValueError(f"unknown priority filter: {raw!r}")


class DateType(StrEnum):
    NA = "N/A"
    CREATED = "Created"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str) -> DateType:
        key = (raw or "").strip().lower()
        if key in ("na", "n/a", "none", "off"):
            return cls.NA
        for dt in cls:
            if dt.value.lower() == key:
                return dt
        raise ValueError(f"unknown date type: {raw!r}")


class DatePeriod(StrEnum):
    ALL_TIME = "all_time"
    CURRENT_YEAR = "current_year"
    CURRENT_MONTH = "current_month"
    CURRENT_WEEK = "current_week"
    TODAY = "today"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, raw: str) -> DatePeriod:
        key = (raw or "").strip().lower().replace("-", "_").replace(" ", "_")
        aliases = {
            "all": cls.ALL_TIME,
            "year": cls.CURRENT_YEAR,
            "month": cls.CURRENT_MONTH,
            "week": cls.CURRENT_WEEK,
        }
        if key in aliases:
            return aliases[key]
        return cls(key)


@dataclass(frozen=True, slots=True)
class TaskFilter:
    priority: PriorityFilter = PriorityFilter.ALL
    date_type: DateType = DateType.NA
    period: DatePeriod = DatePeriod.CURRENT_MONTH
    custom_range: DateRange | None = None


@dataclass(slots=True)
class TaskPartition:
    pending: list[TodoTask] = field(default_factory=list)
    completed: list[TodoTask] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.pending) + len(self.completed)


def resolve_period(
    period: DatePeriod,
    now: datetime,
    custom_range: DateRange | None = None,
) -> DateRange | None:
    """
    Inclusive range for a period relative to `now`.

    ALL_TIME -> None (unbounded). CUSTOM -> the caller's range (may be None).
    """
    if period == DatePeriod.ALL_TIME:
        return None
    if period == DatePeriod.TODAY:
        return day_range(now)
    if period == DatePeriod.CURRENT_WEEK:
        return week_range(now)
    if period == DatePeriod.CURRENT_MONTH:
        return month_range(now)
    if period == DatePeriod.CURRENT_YEAR:
        return year_range(now.year)
    return custom_range


def matches_priority(task: TodoTask, wanted: PriorityFilter) -> bool:
    if wanted == PriorityFilter.ALL:
        return True
    return task.priority == Priority(wanted.value)


def matches_date(task: TodoTask, criteria: TaskFilter, now: datetime) -> bool:
    if criteria.date_type == DateType.NA:
        return True

    if criteria.date_type == DateType.COMPLETED:
        if not task.is_completed or task.completed_at is None:
            return False
        moment = task.completed_at
    else:
        moment = task.created_at

    if criteria.period == DatePeriod.ALL_TIME:
        return True

    rng = resolve_period(criteria.period, now, criteria.custom_range)
    if rng is None:
        # custom period without a chosen range
        return False
    return rng.contains(moment)


def filter_tasks(tasks: Iterable[TodoTask], criteria: TaskFilter, now: datetime) -> list[TodoTask]:
    return [
        t
        for t in tasks
        if matches_priority(t, criteria.priority) and matches_date(t, criteria, now)
    ]


def partition_tasks(tasks: Iterable[TodoTask]) -> TaskPartition:
    out = TaskPartition()
    for t in tasks:
        (out.completed if t.is_completed else out.pending).append(t)
    return out


def apply_filter(tasks: Iterable[TodoTask], criteria: TaskFilter, now: datetime) -> TaskPartition:
    return partition_tasks(filter_tasks(tasks, criteria, now))
