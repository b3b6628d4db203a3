# src/habit_tracker/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.state import AppState
from .custom_dates import parse_custom_range
from .task_filter import TaskPartition, apply_filter

logger = logging.getLogger(__name__)


def list_visible_tasks(state: AppState) -> TaskPartition:
    """Tasks passing the session's current filters, split into pending/completed."""
    criteria = state.task_filter.criteria
    return apply_filter(state.repository.list_tasks(), criteria, state.clock.now())


def apply_custom_range_text(state: AppState, text: str) -> str:
    """
    Parse custom-range text and store it on the filter state.

    Raises InvalidDateInput (filter state untouched) when the text is not a valid range.
    Returns the display text of the applied range.
    """
    settings = state.settings
    result = parse_custom_range(
        text,
        year_min=int(getattr(settings, "custom_year_min", 1900)),
        year_max=int(getattr(settings, "custom_year_max", 2100)),
    )
    state.task_filter.apply_custom_range(result.date_range, result.display_text)
    logger.debug("Custom range applied %s", result.display_text)
    return result.display_text
