# src/smart_reminder/cli/commands.py

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from datetime import datetime

from ..core.state import AppState
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

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

    def handle(self, state: AppState, line: str) -> str | None:
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
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _fmt_due(ts: float) -> str:
    return datetime.fromtimestamp(ts).astimezone().strftime("%Y-%m-%d %H:%M")


def format_row(n: int, task: Task, now: float) -> str:
    mark = "x" if task.is_completed else " "
    late = " (overdue)" if task.is_overdue(now) else ""
    return f"{n}. [{mark}] {task.title} - due {_fmt_due(task.due_at)}{late}"


def _row_index(state: AppState, args: list[str]) -> int | None:
    """Map a 1-based row number from the UI to a filtered-view index (None if invalid)."""
    if not args:
        return None
    try:
        n = int(args[0])
    except ValueError:
        return None
    if not 1 <= n <= state.store.count():
        return None
    return n - 1


def _persist_note(state: AppState) -> str:
    err = state.store.last_error
    return f" (warning: not saved: {err})" if err is not None else ""


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    store = state.store
    store.refresh()
    if store.count() == 0:
        return f"No {store.filter} tasks."
    now = time.time()
    lines = [f"{str(store.filter).capitalize()} tasks:"]
    for i in range(store.count()):
        lines.append(format_row(i + 1, store.item_at(i), now))
    return "\n".join(lines)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <minutes> <title...>

    Due time is now + minutes (negative values create an already-due task).
    """
    if len(args) < 2:
        return "Usage: /add <minutes> <title>"
    try:
        minutes = float(args[0])
    except ValueError:
        return "Usage: /add <minutes> <title> (minutes must be a number)"

    title = " ".join(args[1:]).strip()
    task = state.store.create(title, time.time() + minutes * 60)
    if task is None:
        return f"Could not save the task: {state.store.last_error}"
    return f"Added #{task.id}: {task.title} (due {_fmt_due(task.due_at)})."


def _set_completion(state: AppState, args: list[str], value: bool, usage: str) -> str:
    index = _row_index(state, args)
    if index is None:
        return f"Usage: {usage} <row> (1..{state.store.count()})"
    task = state.store.set_completion(index, value)
    verb = "completed" if value else "reopened"
    return f"Task '{task.title}' {verb}.{_persist_note(state)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_completion(state, args, True, "/done")


def cmd_undo(state: AppState, args: list[str]) -> str:
    return _set_completion(state, args, False, "/undo")


def cmd_delete(state: AppState, args: list[str]) -> str:
    index = _row_index(state, args)
    if index is None:
        return f"Usage: /delete <row> (1..{state.store.count()})"
    task = state.store.delete(index)
    return f"Deleted '{task.title}'.{_persist_note(state)}"


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter            -> show current filter
    /filter <name>     -> pending | completed | overdue
    """
    if not args:
        return f"Current filter: {state.store.filter}. Use /filter pending|completed|overdue."
    try:
        state.store.apply_filter(args[0])
    except ValueError:
        return "Usage: /filter pending|completed|overdue"
    logger.debug("Filter changed to %s", state.store.filter)
    return cmd_list(state, [])


def cmd_alerts(state: AppState, args: list[str]) -> str:
    """
    /alerts      -> all kept alerts, newest last
    /alerts <n>  -> only the last n
    """
    recent = list(state.alerts)
    if args:
        try:
            n = int(args[0])
        except ValueError:
            return "Usage: /alerts [n]"
        recent = recent[-n:] if n > 0 else []
    if not recent:
        return "No alerts delivered yet."
    return "Recent alerts:\n" + "\n".join(f"  {line}" for line in recent)


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    settings = state.settings
    alerts = "ON" if getattr(settings, "notifications_enabled", False) else "OFF"
    db = getattr(settings, "tasks_db_path", "?")
    now = time.time()
    done = sum(1 for t in store.tasks if t.is_completed)
    overdue = sum(1 for t in store.tasks if t.is_overdue(now))
    return (
        "Status:\n"
        f"  Tasks: {len(store.tasks)} "
        f"(pending {len(store.tasks) - done}, completed {done}, overdue {overdue})\n"
        f"  Filter: {store.filter}\n"
        f"  Alerts: {alerts}\n"
        f"  Database: {db}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks in the current filter.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <minutes> <title>.")
registry.register("done", cmd_done, help_text="Mark row as completed: /done <row>.")
registry.register("undo", cmd_undo, help_text="Mark row as pending again: /undo <row>.")
registry.register("delete", cmd_delete, help_text="Delete row: /delete <row>.", aliases=["rm"])
registry.register(
    "filter", cmd_filter, help_text="Switch view: /filter pending | completed | overdue."
)
registry.register("alerts", cmd_alerts, help_text="Show recently delivered alerts: /alerts [n].")
registry.register("status", cmd_status, help_text="Show task totals and settings.")
