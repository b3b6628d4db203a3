# tests/test_filter_state.py

from __future__ import annotations

from datetime import date

from habit_tracker.core.dates import day_range
from habit_tracker.tasks.filter_state import FilterAction, TaskFilterState
from habit_tracker.tasks.task_filter import DatePeriod, DateType, PriorityFilter


def test_initial_state_has_period_disabled() -> None:
    fs = TaskFilterState()

    assert not fs.period_enabled
    assert fs.period is None
    assert fs.criteria.date_type == DateType.NA
    assert fs.criteria.priority == PriorityFilter.ALL


def test_enabling_date_type_restores_default_period() -> None:
    fs = TaskFilterState()

    assert fs.select_date_type(DateType.CREATED) == FilterAction.NONE
    assert fs.period_enabled
    assert fs.period == DatePeriod.CURRENT_MONTH


def test_na_clears_period_and_remembers_previous() -> None:
    fs = TaskFilterState()
    fs.select_date_type(DateType.COMPLETED)
    fs.select_period(DatePeriod.CURRENT_WEEK)

    fs.select_date_type(DateType.NA)
    assert fs.period is None
    assert fs.custom_range is None

    fs.select_date_type(DateType.CREATED)
    assert fs.period == DatePeriod.CURRENT_WEEK


def test_period_selection_is_ignored_while_na() -> None:
    fs = TaskFilterState()
    assert fs.select_period(DatePeriod.TODAY) == FilterAction.NONE
    assert fs.period is None


def test_custom_period_requests_range_and_cancel_reverts() -> None:
    fs = TaskFilterState()
    fs.select_date_type(DateType.CREATED)
    fs.select_period(DatePeriod.CURRENT_YEAR)

    assert fs.select_period(DatePeriod.CUSTOM) == FilterAction.REQUEST_CUSTOM_RANGE
    assert fs.period == DatePeriod.CUSTOM

    fs.cancel_custom_range()
    assert fs.period == DatePeriod.CURRENT_YEAR
    assert fs.custom_range is None


def test_applied_custom_range_survives_cancel() -> None:
    fs = TaskFilterState()
    fs.select_date_type(DateType.CREATED)
    fs.select_period(DatePeriod.CUSTOM)
    rng = day_range(date(2024, 2, 1))
    fs.apply_custom_range(rng, "01/02/2024")

    fs.cancel_custom_range()

    assert fs.period == DatePeriod.CUSTOM
    assert fs.criteria.custom_range == rng
    assert fs.custom_label == "01/02/2024"


def test_choosing_regular_period_drops_custom_range() -> None:
    fs = TaskFilterState()
    fs.select_date_type(DateType.CREATED)
    fs.apply_custom_range(day_range(date(2024, 2, 1)), "01/02/2024")

    fs.select_period(DatePeriod.TODAY)

    assert fs.custom_range is None
    assert fs.custom_label is None


def test_na_then_back_to_custom_requests_range_again() -> None:
    fs = TaskFilterState(previous_period=DatePeriod.CUSTOM)

    assert fs.select_date_type(DateType.COMPLETED) == FilterAction.REQUEST_CUSTOM_RANGE


def test_reset_restores_defaults() -> None:
    fs = TaskFilterState(default_period=DatePeriod.CURRENT_WEEK)
    fs.select_priority(PriorityFilter.LOW)
    fs.select_date_type(DateType.CREATED)
    fs.select_period(DatePeriod.TODAY)

    fs.reset()

    assert fs.priority == PriorityFilter.ALL
    assert fs.date_type == DateType.NA
    assert fs.period is None

    fs.select_date_type(DateType.CREATED)
    assert fs.period == DatePeriod.CURRENT_WEEK


def test_cancel_without_pending_custom_input_keeps_period() -> None:
    fs = TaskFilterState()
    fs.select_date_type(DateType.CREATED)
    fs.select_period(DatePeriod.CURRENT_WEEK)

    fs.cancel_custom_range()

    assert fs.period == DatePeriod.CURRENT_WEEK


def test_cancel_while_na_leaves_period_cleared() -> None:
    fs = TaskFilterState()

    fs.cancel_custom_range()

    assert not fs.period_enabled
    assert fs.period is None
