# tests/test_custom_dates.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from habit_tracker.core.errors import InvalidDateInput
from habit_tracker.tasks.custom_dates import (
    CustomDateSelection,
    parse_custom_range,
    selection_from_text,
)
from habit_tracker.tasks.filter_state import TaskFilterState
from habit_tracker.tasks.task_api import apply_custom_range_text, list_visible_tasks
from habit_tracker.tasks.task_filter import DatePeriod, DateType
from habit_tracker.tasks.task_models import TodoTask


def test_year_selection() -> None:
    result = CustomDateSelection(year_text="2023").confirm()

    assert result.display_text == "2023"
    assert result.date_range.start == datetime(2023, 1, 1)
    assert result.date_range.end.date() == date(2023, 12, 31)


@pytest.mark.parametrize("raw", ["1899", "2101", "20x4", "-5"])
def test_invalid_year_is_rejected(raw: str) -> None:
    with pytest.raises(InvalidDateInput, match=r"valid year \(1900-2100\)"):
        CustomDateSelection(year_text=raw).confirm()


def test_month_week_and_day_selection() -> None:
    month = CustomDateSelection(month=date(2024, 2, 14)).confirm()
    assert month.display_text == "02/2024"
    assert month.date_range.end.date() == date(2024, 2, 29)

    week = CustomDateSelection(week_start=date(2024, 1, 7)).confirm()
    assert week.display_text == "7 - 13 01/2024"
    assert week.date_range.start == datetime(2024, 1, 7)
    assert week.date_range.end.date() == date(2024, 1, 13)

    day = CustomDateSelection(day=date(2024, 3, 5)).confirm()
    assert day.display_text == "05/03/2024"


def test_nothing_selected_is_an_error() -> None:
    with pytest.raises(InvalidDateInput, match="select a date option"):
        CustomDateSelection().confirm()


def test_only_one_option_is_enabled_at_a_time() -> None:
    sel = CustomDateSelection()
    assert sel.enabled_options() == {"year", "month", "week", "day"}

    sel.month = date(2024, 1, 1)
    assert sel.active_option() == "month"
    assert sel.enabled_options() == {"month"}

    sel.clear()
    assert sel.active_option() is None


@pytest.mark.parametrize(
    ("text", "display"),
    [
        ("2022", "2022"),
        ("3/2024", "03/2024"),
        ("2024-03", "03/2024"),
        ("2024-03-05", "05/03/2024"),
        ("05/03/2024", "05/03/2024"),
        ("week 2024-01-07", "7 - 13 01/2024"),
    ],
)
def test_text_forms(text: str, display: str) -> None:
    assert parse_custom_range(text).display_text == display


@pytest.mark.parametrize("text", ["", "13/2024", "someday", "2024-02-30"])
def test_bad_text_raises(text: str) -> None:
    with pytest.raises(InvalidDateInput):
        parse_custom_range(text)


def test_year_bounds_are_configurable() -> None:
    sel = selection_from_text("1990", year_min=2000, year_max=2030)
    with pytest.raises(InvalidDateInput, match="2000-2030"):
        sel.confirm()


def test_apply_text_updates_session_filter(state) -> None:
    state.repository.save_task(TodoTask(name="in range", created_at=datetime(2023, 6, 1)))
    state.repository.save_task(TodoTask(name="outside", created_at=datetime(2024, 1, 2)))
    state.task_filter.select_date_type(DateType.CREATED)

    label = apply_custom_range_text(state, "2023")

    assert label == "2023"
    assert state.task_filter.period == DatePeriod.CUSTOM
    assert [t.name for t in list_visible_tasks(state).pending] == ["in range"]


def test_bad_text_leaves_filter_untouched(state) -> None:
    state.task_filter = TaskFilterState()
    state.task_filter.select_date_type(DateType.CREATED)

    with pytest.raises(InvalidDateInput):
        apply_custom_range_text(state, "1800")

    assert state.task_filter.period == DatePeriod.CURRENT_MONTH
    assert state.task_filter.custom_range is None
