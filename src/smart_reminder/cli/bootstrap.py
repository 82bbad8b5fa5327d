# src/smart_reminder/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires the SQLite store and the notifier into a TaskStore,
- loads the persisted tasks (a failing store is logged, the app still starts).
"""

from __future__ import annotations

import logging
from collections import deque
from datetime import datetime

from ..config import get_settings
from ..core.state import ALERT_HISTORY, AppState
from ..tasks.errors import PersistenceError
from ..tasks.notifications import Alert, AlertSink, APSchedulerNotifier
from ..tasks.task_db import SqliteTaskDB
from ..tasks.task_models import TaskRecord
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


class _UnavailableDB:
    """Stand-in used when the SQLite file cannot be opened: every call fails."""

    def __init__(self, error: PersistenceError) -> None:
        self._error = error

    def fetch_all(self) -> list[TaskRecord]:
        raise self._error

    def insert(self, title: str, due_at: float, is_completed: bool = False) -> TaskRecord:
        raise self._error

    def update_completion(self, task_id: int, is_completed: bool) -> None:
        raise self._error

    def delete(self, task_id: int) -> None:
        raise self._error


class _NullNotifier:
    """Notifier used when alerts are disabled in settings."""

    def schedule_one_shot(self, *, after_delay: float, title: str, body: str) -> None:
        logger.debug("Notifications disabled; dropping alert %r", body)

    def start(self) -> None:
        return

    def shutdown(self, wait: bool = False) -> None:
        return


def format_alert(alert: Alert) -> str:
    ts = datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")
    return f"[{ts}] [{alert.title}] {alert.body} (badge {alert.badge})"


def alert_printer(history: deque[str]) -> AlertSink:
    """Sink for the notifier: print each alert and keep it in the bounded history."""

    def sink(alert: Alert) -> None:
        line = format_alert(alert)
        history.append(line)
        print(f"\n{line}", flush=True)

    return sink


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    alerts: deque[str] = deque(maxlen=ALERT_HISTORY)
    sink = alert_printer(alerts)

    notifier: APSchedulerNotifier | _NullNotifier
    if settings.notifications_enabled:
        notifier = APSchedulerNotifier(sink)
    else:
        notifier = _NullNotifier()

    try:
        db = SqliteTaskDB(settings.tasks_db_path)
    except PersistenceError as e:
        logger.error("Task database unavailable: %s", e)
        db = _UnavailableDB(e)

    store = TaskStore(db, notifier, alert_title=settings.alert_title)
    store.initialize()
    store.apply_filter(settings.default_filter)

    return AppState(settings=settings, store=store, notifier=notifier, alerts=alerts)
