# src/habit_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..habits.habit_api import get_habit_week, toggle_today
from ..habits.habit_models import Habit, Weekday
from ..stats.api import get_habit_statistics, get_task_statistics
from ..tasks.filter_state import FilterAction
from ..tasks.task_api import apply_custom_range_text, list_visible_tasks
from ..tasks.task_filter import DatePeriod, DateType, PriorityFilter
from ..tasks.task_models import Priority, TodoTask

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

PRIORITY_GLYPHS = {
    Priority.LOW: "● Low",
    Priority.MEDIUM: "⬡ Medium",
    Priority.HIGH: "▼ High",
}


class CommandRegistry:
    """Simple slash-command registry used by the console front-end (/help, /habits, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_options(args: list[str], names: set[str]) -> tuple[list[str], dict[str, str]]:
    """Split `word word --opt value words` into positional words and {opt: value}."""
    words: list[str] = []
    opts: dict[str, str] = {}
    current: str | None = None
    for a in args:
        if a.startswith("--") and a[2:] in names:
            current = a[2:]
            opts[current] = ""
        elif current is not None:
            opts[current] = f"{opts[current]} {a}".strip()
        else:
            words.append(a)
    return words, opts


def _pick(items: list, raw: str | None):
    """1-based index lookup; None when out of range or not a number."""
    if raw is None or not raw.isdigit():
        return None
    idx = int(raw) - 1
    if 0 <= idx < len(items):
        return items[idx]
    return None


def _format_task(n: int, task: TodoTask) -> str:
    mark = "x" if task.is_completed else " "
    parts = [f"{n}. [{mark}] {task.name}"]
    if task.priority in PRIORITY_GLYPHS:
        parts.append(PRIORITY_GLYPHS[task.priority])
    if task.due_date is not None:
        parts.append(f"due {task.due_date:%Y-%m-%d}")
    if task.subtasks:
        parts.append(
            f"{task.completed_subtask_count}/{task.subtask_count} ({task.subtask_percentage}%)"
        )
    lines = ["  ".join(parts)]
    for i, st in enumerate(task.subtasks, start=1):
        lines.append(f"      {i}) [{'x' if st.is_completed else ' '}] {st.name}")
    return "\n".join(lines)


def _describe_filter(state: AppState) -> str:
    f = state.task_filter
    if not f.period_enabled:
        period = "-"
    elif f.period == DatePeriod.CUSTOM:
        period = f"custom ({f.custom_label or 'no range'})"
    else:
        period = str(f.period)
    return f"priority={f.priority} date={f.date_type} period={period}"


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    repo = state.repository
    return (
        "Status:\n"
        f"  Today: {state.clock.today():%Y-%m-%d}\n"
        f"  Habits: {len(repo.list_habits())}\n"
        f"  Tasks: {len(repo.list_tasks())}\n"
        f"  Filter: {_describe_filter(state)}"
    )


def cmd_habits(state: AppState, args: list[str]) -> str:
    habits = state.repository.list_habits()
    if not habits:
        return "No habits yet. Use /habit add <name>."

    lines = ["Habits:"]
    for i, h in enumerate(habits, start=1):
        week = get_habit_week(state, h.id)
        if week is None:
            continue
        strip = " ".join(
            (d.day_name[0] if d.is_completed else ".") if d.should_track else "-" for d in week.days
        )
        stats = get_habit_statistics(state, h.id)
        streak = stats.current_streak if stats else 0
        lines.append(
            f"{i}. {h.name}  [{strip}]  week {week.week_number}: "
            f"{week.completed_days}/{week.tracked_days} {week.completion_percentage}  "
            f"streak {streak}"
        )
    return "\n".join(lines)


def cmd_habit(state: AppState, args: list[str]) -> str:
    """
    /habit add <name> [--days mon,wed,fri] [--desc text]
    /habit rm <n>
    /habit move <n> <position>
    """
    usage = (
        "Usage: /habit add <name> [--days mon,wed] [--desc text] "
        "| /habit rm <n> | /habit move <n> <pos>"
    )
    if not args:
        return usage

    sub = args[0].lower()
    repo = state.repository
    habits = repo.list_habits()

    if sub == "add":
        words, opts = _split_options(args[1:], {"days", "desc"})
        days: set[Weekday] = set()
        if opts.get("days"):
            try:
                days = {Weekday.parse(x) for x in opts["days"].replace(",", " ").split()}
            except ValueError as e:
                return str(e)
        habit = Habit(
            name=" ".join(words),
            description=opts.get("desc", ""),
            track_everyday=not days,
            tracking_days=days,
            created_at=state.clock.now(),
        )
        repo.save_habit(habit)
        return f"Habit added: {habit.name}"

    if sub in ("rm", "del", "delete"):
        habit = _pick(habits, args[1] if len(args) > 1 else None)
        if habit is None:
            return "No such habit."
        repo.delete_habit(habit.id)
        return f"Habit deleted: {habit.name}"

    if sub == "move":
        habit = _pick(habits, args[1] if len(args) > 1 else None)
        if habit is None or len(args) < 3 or not args[2].isdigit():
            return usage
        ids = [h.id for h in habits if h.id != habit.id]
        ids.insert(max(0, int(args[2]) - 1), habit.id)
        repo.reorder_habits(ids)
        return f"Habit moved: {habit.name}"

    return usage


def cmd_done(state: AppState, args: list[str]) -> str:
    """/done <n> [note...] -> toggle today's completion of habit n."""
    habit = _pick(state.repository.list_habits(), args[0] if args else None)
    if habit is None:
        return "Usage: /done <habit number> [note]"
    note = " ".join(args[1:]) or None
    completed = toggle_today(state, habit.id, note)
    return f"{habit.name}: {'done' if completed else 'not done'} today."


def cmd_tasks(state: AppState, args: list[str]) -> str:
    all_tasks = state.repository.list_tasks()
    numbers = {t.id: i for i, t in enumerate(all_tasks, start=1)}
    visible = list_visible_tasks(state)

    lines = [f"Tasks ({_describe_filter(state)}):", "Pending:"]
    lines += [_format_task(numbers[t.id], t) for t in visible.pending] or ["  (none)"]
    lines.append("Completed:")
    lines += [_format_task(numbers[t.id], t) for t in visible.completed] or ["  (none)"]
    return "\n".join(lines)


def cmd_task(state: AppState, args: list[str]) -> str:
    """
    /task add <name> [--due YYYY-MM-DD] [--priority low|medium|high] [--sub a;b;c]
    /task done <n> | /task rm <n> | /task move <n> <position>
    """
    usage = (
        "Usage: /task add <name> [--due YYYY-MM-DD] [--priority P] [--sub a;b] "
        "| /task done <n> | /task rm <n> | /task move <n> <pos>"
    )
    if not args:
        return usage

    sub = args[0].lower()
    repo = state.repository
    tasks = repo.list_tasks()

    if sub == "add":
        words, opts = _split_options(args[1:], {"due", "priority", "sub", "desc"})
        try:
            due = datetime.strptime(opts["due"], "%Y-%m-%d").date() if opts.get("due") else None
            priority = Priority.from_raw(opts.get("priority"))
        except ValueError as e:
            return f"Invalid task option: {e}"
        task = TodoTask(
            name=" ".join(words),
            description=opts.get("desc", ""),
            created_at=state.clock.now(),
            due_date=due,
            priority=priority,
        )
        for name in (opts.get("sub") or "").split(";"):
            if name.strip():
                task.add_subtask(name.strip())
        repo.save_task(task)
        return f"Task added: {task.name}"

    task = _pick(tasks, args[1] if len(args) > 1 else None)
    if task is None:
        return "No such task."

    if sub == "done":
        repo.toggle_task_completion(task.id)
        return f"{task.name}: {'completed' if task.is_completed else 'pending'}."

    if sub in ("rm", "del", "delete"):
        repo.delete_task(task.id)
        return f"Task deleted: {task.name}"

    if sub == "move":
        if len(args) < 3 or not args[2].isdigit():
            return usage
        ids = [t.id for t in tasks if t.id != task.id]
        ids.insert(max(0, int(args[2]) - 1), task.id)
        repo.reorder_tasks(ids)
        return f"Task moved: {task.name}"

    return usage


def cmd_sub(state: AppState, args: list[str]) -> str:
    """/sub <task n> <subtask n> -> toggle a subtask."""
    task = _pick(state.repository.list_tasks(), args[0] if args else None)
    if task is None:
        return "Usage: /sub <task number> <subtask number>"
    st = _pick(task.subtasks, args[1] if len(args) > 1 else None)
    if st is None:
        return "No such subtask."

    was_completed = task.is_completed
    state.repository.toggle_subtask_completion(task.id, st.id)
    reply = f"{st.name}: {'done' if st.is_completed else 'not done'}."
    if task.is_completed and not was_completed:
        reply += f" All subtasks done, task '{task.name}' completed."
    return reply


def cmd_stats(state: AppState, args: list[str]) -> str:
    """/stats -> task statistics, /stats <n> -> statistics of habit n."""
    if args:
        habit = _pick(state.repository.list_habits(), args[0])
        s = get_habit_statistics(state, habit.id) if habit is not None else None
        if s is None:
            return "No such habit."
        return (
            f"{s.habit_name}:\n"
            f"  Today: {s.daily_completions}/{s.daily_target}\n"
            f"  Week: {s.weekly_completions}/{s.weekly_target}\n"
            f"  Month: {s.monthly_completions}/{s.monthly_target}\n"
            f"  Year: {s.yearly_completions}/{s.yearly_target}\n"
            f"  Current streak: {s.current_streak}\n"
            f"  Longest streak: {s.longest_streak}\n"
            f"  Completion rate: {s.completion_rate}%"
        )

    t = get_task_statistics(state)
    return (
        "Tasks:\n"
        f"  Total: {t.total_tasks} (completed {t.completed_tasks}, pending {t.pending_tasks})\n"
        f"  With deadlines: {t.tasks_with_deadlines}\n"
        f"  On time: {t.completed_on_time} ({t.on_time_rate}%)\n"
        f"  Late: {t.completed_after_deadline} ({t.late_rate}%)\n"
        f"  Completion rate: {t.completion_rate}%"
    )


def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /filter                          -> show current filter
    /filter priority all|none|low|medium|high
    /filter type na|created|completed
    /filter period all|year|month|week|today|custom
    /filter custom <yyyy | MM/yyyy | yyyy-MM-dd | week yyyy-MM-dd>
    /filter cancel                   -> dismiss pending custom range input
    /filter reset
    """
    f = state.task_filter
    if not args:
        return f"Filter: {_describe_filter(state)}"

    sub = args[0].lower()
    value = " ".join(args[1:])
    custom_hint = "Enter a range with /filter custom <text> or /filter cancel."

    try:
        if sub == "priority":
            f.select_priority(PriorityFilter.parse(value))
        elif sub == "type":
            if f.select_date_type(DateType.parse(value)) == FilterAction.REQUEST_CUSTOM_RANGE:
                return custom_hint
        elif sub == "period":
            if not f.period_enabled:
                return "Choose a date type first (/filter type created|completed)."
            if f.select_period(DatePeriod.parse(value)) == FilterAction.REQUEST_CUSTOM_RANGE:
                if emit:
                    emit("Custom period selected.")
                return custom_hint
        elif sub == "custom":
            if not f.period_enabled:
                return "Choose a date type first (/filter type created|completed)."
            label = apply_custom_range_text(state, value)
            return f"Custom range: {label}"
        elif sub == "cancel":
            f.cancel_custom_range()
        elif sub == "reset":
            f.reset()
        else:
            return "Unknown /filter subcommand. Use /help."
    except ValueError as e:
        # InvalidDateInput is a ValueError too; selector state is unchanged here
        return str(e)

    return f"Filter: {_describe_filter(state)}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show counts and the current task filter.")
registry.register("habits", cmd_habits, help_text="List habits with this week's progress.")
registry.register(
    "habit",
    cmd_habit,
    help_text="Manage habits: /habit add <name> [--days ..] | rm <n> | move <n> <pos>.",
)
registry.register("done", cmd_done, help_text="Toggle today's completion: /done <n> [note].")
registry.register(
    "tasks", cmd_tasks, help_text="List tasks (pending/completed) using the current filter."
)
registry.register(
    "task",
    cmd_task,
    help_text="Manage tasks: /task add <name> [--due ..] | done <n> | rm <n> | move.",
)
registry.register("sub", cmd_sub, help_text="Toggle a subtask: /sub <task n> <subtask n>.")
registry.register("stats", cmd_stats, help_text="Statistics: /stats (tasks) | /stats <habit n>.")
registry.register(
    "filter",
    cmd_filter,
    help_text="Task filters: /filter priority|type|period|custom|cancel|reset.",
)
