# src/habit_tracker/store/sample_data.py

"""Demo habits/tasks used when the app starts with an empty repository."""

from __future__ import annotations

import logging
from datetime import time, timedelta

from ..habits.habit_models import Habit, Weekday
from ..tasks.task_models import TodoTask
from .repository import TrackerRepository

logger = logging.getLogger(__name__)


def seed_sample_data(repo: TrackerRepository) -> None:
    now = repo.clock.now()
    today = repo.clock.today()

    exercise = repo.save_habit(
        Habit(
            name="Morning Exercise",
            description="30 minutes of exercise",
            track_everyday=True,
            created_at=now - timedelta(days=6),
            notes_enabled=True,
            has_reminders=True,
            reminder_time=time(7, 0),
        )
    )
    repo.save_habit(
        Habit(
            name="Reading",
            description="Read for 20 minutes",
            track_everyday=False,
            tracking_days={Weekday.MONDAY, Weekday.WEDNESDAY, Weekday.FRIDAY},
            created_at=now,
            has_reminders=True,
            reminder_time=time(20, 0),
        )
    )

    # every other day over the past week
    for i in range(0, 7, 2):
        repo.toggle_habit_completion(
            exercise.id,
            today - timedelta(days=i),
            note="Felt great today!" if i == 0 else None,
        )

    report = TodoTask(
        name="Complete project report",
        description="Finish the Q1 report",
        created_at=now,
        due_date=today + timedelta(days=3),
        has_reminders=True,
        reminder_time=time(9, 0),
    )
    report.add_subtask("Gather data").is_completed = True
    report.add_subtask("Write summary")
    report.add_subtask("Review and submit")
    repo.save_task(report)

    groceries = TodoTask(
        name="Buy groceries",
        description="Weekly shopping",
        created_at=now - timedelta(days=2),
    )
    groceries.mark_completed(now - timedelta(days=1))
    repo.save_task(groceries)

    logger.info(
        "Seeded sample data habits=%s tasks=%s", len(repo.list_habits()), len(repo.list_tasks())
    )
