# src/habit_tracker/tasks/filter_state.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from ..core.dates import DateRange
from .task_filter import DatePeriod, DateType, PriorityFilter, TaskFilter

logger = logging.getLogger(__name__)


class FilterAction(Enum):
    """What the presentation layer should do after a selector change."""

    NONE = "none"
    REQUEST_CUSTOM_RANGE = "request_custom_range"


@dataclass(slots=True)
class TaskFilterState:
    """
    Selector state behind the task list filters.

    Rules:
    - date_type N/A disables the period selector and clears period + custom range
    - a non-N/A date_type re-enables the period (previous value, else the default)
    - period CUSTOM without a range asks the caller for custom-range input
    - cancelling custom-range input reverts the period to its previous value
    """

    priority: PriorityFilter = PriorityFilter.ALL
    date_type: DateType = DateType.NA
    period: DatePeriod | None = None
    previous_period: DatePeriod = DatePeriod.CURRENT_MONTH
    custom_range: DateRange | None = None
    custom_label: str | None = None
    default_period: DatePeriod = DatePeriod.CURRENT_MONTH

    @property
    def period_enabled(self) -> bool:
        return self.date_type != DateType.NA

    @property
    def criteria(self) -> TaskFilter:
        return TaskFilter(
            priority=self.priority,
            date_type=self.date_type,
            period=self.period or self.default_period,
            custom_range=self.custom_range,
        )

    def select_priority(self, priority: PriorityFilter) -> FilterAction:
        self.priority = priority
        return FilterAction.NONE

    def select_date_type(self, date_type: DateType) -> FilterAction:
        self.date_type = date_type

        if date_type == DateType.NA:
            if self.period is not None and self.period != DatePeriod.CUSTOM:
                self.previous_period = self.period
            self.period = None
            self.custom_range = None
            self.custom_label = None
            return FilterAction.NONE

        if self.period is None:
            self.period = self.previous_period or self.default_period

        if self.period == DatePeriod.CUSTOM and self.custom_range is None:
            return FilterAction.REQUEST_CUSTOM_RANGE
        return FilterAction.NONE

    def select_period(self, period: DatePeriod) -> FilterAction:
        if not self.period_enabled:
            logger.debug("Period selection ignored while date type is N/A (period=%s)", period)
            return FilterAction.NONE

        if self.period is not None and self.period != DatePeriod.CUSTOM:
            self.previous_period = self.period
        self.period = period

        if period == DatePeriod.CUSTOM:
            return FilterAction.REQUEST_CUSTOM_RANGE

        self.custom_range = None
        self.custom_label = None
        return FilterAction.NONE

    def apply_custom_range(self, rng: DateRange, label: str | None = None) -> None:
        if self.period is not None and self.period != DatePeriod.CUSTOM:
            self.previous_period = self.period
        self.period = DatePeriod.CUSTOM
        self.custom_range = rng
        self.custom_label = label

    def cancel_custom_range(self) -> None:
        """Custom input dismissed: fall back to the period chosen before CUSTOM."""
        if self.period != DatePeriod.CUSTOM or self.custom_range is not None:
            # nothing pending, or a range was already chosen earlier
            return
        self.period = self.previous_period or self.default_period
        self.custom_range = None
        self.custom_label = None

    def reset(self) -> None:
        self.priority = PriorityFilter.ALL
        self.date_type = DateType.NA
        self.period = None
        self.previous_period = self.default_period
        self.custom_range = None
        self.custom_label = None
