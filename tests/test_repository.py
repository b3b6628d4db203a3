# tests/test_repository.py

from __future__ import annotations

from datetime import date, datetime

import pytest

from habit_tracker.core.errors import ValidationError
from habit_tracker.habits.habit_models import Habit, HabitCompletion
from habit_tracker.store.repository import TrackerRepository
from habit_tracker.store.sample_data import seed_sample_data
from habit_tracker.tasks.task_models import SubTask, TodoTask

from .conftest import NOW
from .fakes import FixedClock, RecordingPersistence


def _task_with_subtasks(*names: str) -> TodoTask:
    task = TodoTask(name="Report", created_at=datetime(2024, 1, 1))
    for n in names:
        task.add_subtask(n)
    return task


# ---- habits ----


def test_new_habits_get_display_order_equal_to_count(repo: TrackerRepository) -> None:
    a = repo.save_habit(Habit(name="A"))
    b = repo.save_habit(Habit(name="B"))

    assert (a.display_order, b.display_order) == (0, 1)
    assert [h.name for h in repo.list_habits()] == ["A", "B"]


def test_save_existing_habit_replaces_and_keeps_order(repo: TrackerRepository) -> None:
    repo.save_habit(Habit(name="A"))
    b = repo.save_habit(Habit(name="B"))

    edited = Habit(name="B2", id=b.id, display_order=99)
    repo.save_habit(edited)

    assert len(repo.list_habits()) == 2
    stored = repo.get_habit(b.id)
    assert stored is edited
    assert stored.name == "B2"
    assert stored.display_order == 1


def test_save_relinks_completions(repo: TrackerRepository) -> None:
    h = Habit(name="A")
    h.completions.append(HabitCompletion(habit_id="stale", completed_date=date(2024, 1, 1)))
    repo.save_habit(h)
    assert h.completions[0].habit_id == h.id


@pytest.mark.parametrize("name", ["", "   "])
def test_blank_habit_name_is_rejected_without_changes(repo: TrackerRepository, name: str) -> None:
    with pytest.raises(ValidationError):
        repo.save_habit(Habit(name=name))
    assert repo.list_habits() == []


def test_save_normalizes_completion_datetimes(repo: TrackerRepository) -> None:
    h = Habit(name="A")
    h.completions.append(HabitCompletion(habit_id=h.id, completed_date=datetime(2024, 1, 10, 8, 0)))
    repo.save_habit(h)

    assert h.completions[0].completed_date == date(2024, 1, 10)
    assert repo.is_habit_completed_on(h.id, date(2024, 1, 10))

    assert repo.toggle_habit_completion(h.id, date(2024, 1, 10)) is False
    assert not repo.is_habit_completed_on(h.id, date(2024, 1, 10))


def test_two_completions_on_one_day_are_rejected(repo: TrackerRepository) -> None:
    h = Habit(name="A")
    h.completions = [
        HabitCompletion(habit_id=h.id, completed_date=date(2024, 1, 10)),
        HabitCompletion(habit_id=h.id, completed_date=datetime(2024, 1, 10, 21, 0)),
    ]

    with pytest.raises(ValidationError):
        repo.save_habit(h)
    assert repo.list_habits() == []
    assert h.completions[1].completed_date == datetime(2024, 1, 10, 21, 0)


def test_get_unknown_habit_returns_none(repo: TrackerRepository) -> None:
    assert repo.get_habit("missing") is None


def test_delete_unknown_habit_is_noop(repo: TrackerRepository) -> None:
    repo.save_habit(Habit(name="A"))
    before = [(h.id, h.display_order) for h in repo.list_habits()]

    repo.delete_habit("missing")

    assert [(h.id, h.display_order) for h in repo.list_habits()] == before


def test_delete_renumbers_densely(repo: TrackerRepository) -> None:
    a = repo.save_habit(Habit(name="A"))
    b = repo.save_habit(Habit(name="B"))
    c = repo.save_habit(Habit(name="C"))

    repo.delete_habit(b.id)

    assert [(h.id, h.display_order) for h in repo.list_habits()] == [(a.id, 0), (c.id, 1)]


def test_reorder_habits(repo: TrackerRepository) -> None:
    a = repo.save_habit(Habit(name="A"))
    b = repo.save_habit(Habit(name="B"))
    c = repo.save_habit(Habit(name="C"))

    repo.reorder_habits([c.id, a.id, b.id])
    assert [h.name for h in repo.list_habits()] == ["C", "A", "B"]
    assert [h.display_order for h in repo.list_habits()] == [0, 1, 2]

    # unknown ids ignored, unlisted habits keep their relative order at the end
    repo.reorder_habits(["missing", b.id])
    assert [h.name for h in repo.list_habits()] == ["B", "C", "A"]


def test_toggle_habit_completion_twice_restores_state(repo: TrackerRepository) -> None:
    h = repo.save_habit(Habit(name="A"))
    day = datetime(2024, 1, 10, 21, 45)

    assert repo.toggle_habit_completion(h.id, day, note="late run") is True
    assert repo.is_habit_completed_on(h.id, date(2024, 1, 10))
    assert h.completions[0].completed_date == date(2024, 1, 10)
    assert h.completions[0].note == "late run"
    assert h.completions[0].habit_id == h.id

    assert repo.toggle_habit_completion(h.id, date(2024, 1, 10)) is False
    assert not repo.is_habit_completed_on(h.id, day)
    assert h.completions == []


def test_toggle_keeps_one_completion_per_day(repo: TrackerRepository) -> None:
    h = repo.save_habit(Habit(name="A"))
    repo.toggle_habit_completion(h.id, datetime(2024, 1, 10, 8, 0))
    repo.toggle_habit_completion(h.id, date(2024, 1, 11))

    assert sorted(c.completed_date for c in h.completions) == [date(2024, 1, 10), date(2024, 1, 11)]


def test_toggle_unknown_habit_is_noop(repo: TrackerRepository) -> None:
    assert repo.toggle_habit_completion("missing", date(2024, 1, 10)) is None
    assert repo.is_habit_completed_on("missing", date(2024, 1, 10)) is False


# ---- tasks ----


def test_save_task_links_and_numbers_subtasks(repo: TrackerRepository) -> None:
    task = TodoTask(name="Report")
    task.subtasks = [SubTask(name="a", display_order=7), SubTask(name="b", display_order=3)]

    repo.save_task(task)

    assert [st.parent_task_id for st in task.subtasks] == [task.id, task.id]
    assert [st.display_order for st in task.subtasks] == [0, 1]


def test_blank_subtasks_are_dropped_on_save(repo: TrackerRepository) -> None:
    task = TodoTask(name="Report")
    task.subtasks = [
        SubTask(name="draft"),
        SubTask(name=" "),
        SubTask(name=""),
        SubTask(name="send"),
    ]

    repo.save_task(task)

    assert repo.list_tasks() == [task]
    assert [st.name for st in task.subtasks] == ["draft", "send"]
    assert [st.display_order for st in task.subtasks] == [0, 1]


def test_blank_task_name_is_rejected_before_subtasks_change(repo: TrackerRepository) -> None:
    task = TodoTask(name=" ")
    task.subtasks = [SubTask(name="a"), SubTask(name="")]

    with pytest.raises(ValidationError):
        repo.save_task(task)
    assert repo.list_tasks() == []
    assert len(task.subtasks) == 2
    assert task.subtasks[0].parent_task_id == ""


def test_toggle_task_completion_sets_and_clears_timestamp(
    repo: TrackerRepository, clock: FixedClock
) -> None:
    task = repo.save_task(TodoTask(name="Buy milk"))

    repo.toggle_task_completion(task.id)
    assert task.is_completed
    assert task.completed_at == NOW

    repo.toggle_task_completion(task.id)
    assert not task.is_completed
    assert task.completed_at is None


def test_toggle_unknown_task_is_noop(repo: TrackerRepository) -> None:
    assert repo.toggle_task_completion("missing") is None
    assert repo.toggle_subtask_completion("missing", "x") is None


def test_completing_last_subtask_completes_task_once(
    repo: TrackerRepository, clock: FixedClock
) -> None:
    task = repo.save_task(_task_with_subtasks("a", "b", "c"))
    a, b, c = task.subtasks

    repo.toggle_subtask_completion(task.id, a.id)
    repo.toggle_subtask_completion(task.id, b.id)
    assert not task.is_completed
    assert task.completed_subtask_count == 2
    assert task.subtask_percentage == 67

    clock.advance(hours=1)
    repo.toggle_subtask_completion(task.id, c.id)
    assert task.is_completed
    assert task.all_subtasks_completed
    assert task.completed_at == datetime(2024, 1, 10, 13, 0)


def test_unchecking_subtask_does_not_reopen_task(
    repo: TrackerRepository, clock: FixedClock
) -> None:
    task = repo.save_task(_task_with_subtasks("a", "b"))
    for st in task.subtasks:
        repo.toggle_subtask_completion(task.id, st.id)
    completed_at = task.completed_at

    clock.advance(days=1)
    repo.toggle_subtask_completion(task.id, task.subtasks[0].id)

    assert task.is_completed
    assert task.completed_at == completed_at
    assert not task.all_subtasks_completed


def test_manually_completed_task_keeps_its_timestamp(
    repo: TrackerRepository, clock: FixedClock
) -> None:
    task = repo.save_task(_task_with_subtasks("a"))
    repo.toggle_task_completion(task.id)

    clock.advance(hours=2)
    repo.toggle_subtask_completion(task.id, task.subtasks[0].id)

    assert task.completed_at == NOW


def test_toggle_unknown_subtask_returns_none(repo: TrackerRepository) -> None:
    task = repo.save_task(_task_with_subtasks("a"))
    assert repo.toggle_subtask_completion(task.id, "missing") is None
    assert not task.subtasks[0].is_completed


def test_delete_and_reorder_tasks(repo: TrackerRepository) -> None:
    a = repo.save_task(TodoTask(name="A"))
    b = repo.save_task(TodoTask(name="B"))
    c = repo.save_task(TodoTask(name="C"))

    repo.reorder_tasks([c.id, b.id, a.id])
    repo.delete_task(b.id)
    repo.delete_task("missing")

    assert [(t.name, t.display_order) for t in repo.list_tasks()] == [("C", 0), ("A", 1)]


# ---- persistence port ----


def test_persistence_is_loaded_and_notified() -> None:
    stored = Habit(name="Loaded", display_order=5)
    persistence = RecordingPersistence(habits=[stored])

    repo = TrackerRepository(clock=FixedClock(NOW), persistence=persistence)

    assert repo.list_habits() == [stored]
    assert stored.display_order == 0

    repo.toggle_habit_completion(stored.id, NOW)
    repo.save_task(TodoTask(name="T"))

    assert len(persistence.saved_habits) == 1
    assert len(persistence.saved_tasks) == 1
    assert persistence.saved_tasks[0][0].name == "T"


def test_sample_data_seeds_habits_and_tasks(repo: TrackerRepository) -> None:
    seed_sample_data(repo)

    habits = repo.list_habits()
    tasks = repo.list_tasks()
    assert [h.name for h in habits] == ["Morning Exercise", "Reading"]
    assert [t.name for t in tasks] == ["Complete project report", "Buy groceries"]
    assert repo.is_habit_completed_on(habits[0].id, NOW)
    assert tasks[0].completed_subtask_count == 1
    assert tasks[1].is_completed


def test_loaded_entities_get_back_references() -> None:
    habit = Habit(name="Loaded")
    habit.completions = [HabitCompletion(habit_id="stale", completed_date=date(2024, 1, 9))]
    task = TodoTask(name="Loaded task")
    task.subtasks = [SubTask(name="b", display_order=4), SubTask(name="a", display_order=9)]

    TrackerRepository(
        clock=FixedClock(NOW),
        persistence=RecordingPersistence(habits=[habit], tasks=[task]),
    )

    assert habit.completions[0].habit_id == habit.id
    assert [st.parent_task_id for st in task.subtasks] == [task.id, task.id]
    assert [st.display_order for st in task.subtasks] == [0, 1]
