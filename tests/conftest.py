# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from smart_reminder.core.state import AppState
from smart_reminder.tasks.task_db import SqliteTaskDB
from smart_reminder.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeNotifier, FakeTaskDB


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def db() -> FakeTaskDB:
    return FakeTaskDB()


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def store(db: FakeTaskDB, notifier: FakeNotifier, clock: FakeClock) -> TaskStore:
    s = TaskStore(db, notifier, clock=clock, log=logging.getLogger("tests.task_store"))
    s.initialize()
    return s


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Smart Reminder",
        log_level="INFO",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        log_dir=tmp_path,
        default_filter="pending",
        alert_title="Smart Reminder Alert",
        notifications_enabled=True,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a fake notifier.

    NOTE: We keep the real SQLite store here because CLI commands go all the
    way down to storage.
    """
    notifier = FakeNotifier()
    store = TaskStore(SqliteTaskDB(settings.tasks_db_path), notifier)
    store.initialize()
    return AppState(settings=settings, store=store, notifier=notifier)
