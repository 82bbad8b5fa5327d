# tests/test_notifications.py

from __future__ import annotations

import threading

import pytest

from smart_reminder.tasks.notifications import (
    ALERT_TITLE,
    Alert,
    APSchedulerNotifier,
    schedule_task_reminder,
)
from smart_reminder.tasks.task_models import Task

from .fakes import FakeNotifier


def test_future_task_is_scheduled_with_remaining_delay() -> None:
    notifier = FakeNotifier()
    task = Task(id=1, title="Dentist", due_at=1_000.0)

    assert schedule_task_reminder(task, notifier, now=400.0) is True

    assert len(notifier.scheduled) == 1
    sent = notifier.scheduled[0]
    assert sent.after_delay == pytest.approx(600.0)
    assert sent.title == ALERT_TITLE
    assert sent.body == "Dentist"


@pytest.mark.parametrize("now", [1_000.0, 1_000.5, 5_000.0])
def test_due_or_past_due_task_is_not_scheduled(now: float) -> None:
    notifier = FakeNotifier()

    assert schedule_task_reminder(Task(id=1, title="x", due_at=1_000.0), notifier, now=now) is False
    assert notifier.scheduled == []


def test_notifier_errors_are_swallowed(caplog) -> None:
    notifier = FakeNotifier(raise_on_schedule=True)

    assert schedule_task_reminder(Task(id=7, title="x", due_at=10.0), notifier, now=0.0) is False
    assert "schedule_one_shot failed task_id=7" in caplog.text


def test_apscheduler_notifier_delivers_one_shot_alert() -> None:
    delivered: list[Alert] = []
    fired = threading.Event()

    def sink(alert: Alert) -> None:
        delivered.append(alert)
        fired.set()

    notifier = APSchedulerNotifier(sink)
    notifier.start()
    try:
        notifier.schedule_one_shot(after_delay=0.05, title=ALERT_TITLE, body="Water plants")
        assert fired.wait(timeout=5.0)
    finally:
        notifier.shutdown(wait=True)

    assert delivered == [Alert(title=ALERT_TITLE, body="Water plants", badge=1)]
    assert notifier.running is False


def test_apscheduler_notifier_jobs_do_not_repeat() -> None:
    fired = threading.Event()
    calls: list[Alert] = []

    def sink(alert: Alert) -> None:
        calls.append(alert)
        fired.set()

    notifier = APSchedulerNotifier(sink)
    notifier.start()
    try:
        notifier.schedule_one_shot(after_delay=0.01, title="t", body="b")
        assert fired.wait(timeout=5.0)
        fired.clear()
        assert not fired.wait(timeout=0.3)
        assert notifier.pending_count() == 0
    finally:
        notifier.shutdown(wait=True)

    assert len(calls) == 1


def test_apscheduler_notifier_queues_jobs_before_start() -> None:
    notifier = APSchedulerNotifier(lambda alert: None)

    notifier.schedule_one_shot(after_delay=3600, title="t", body="later")
    notifier.schedule_one_shot(after_delay=7200, title="t", body="much later")

    assert notifier.pending_count() == 2
    assert notifier.running is False
