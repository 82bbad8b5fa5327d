# src/smart_reminder/tasks/notifications.py

from __future__ import annotations

"""
Reminder notifications.

Two pieces:
- schedule_task_reminder(): the policy TaskStore applies after a successful create
  (skip already-due tasks, hand the rest to the notifier fire-and-forget),
- APSchedulerNotifier: a NotificationScheduler backed by an APScheduler
  BackgroundScheduler. Delivery (printing, desktop popup, ...) is an injected sink.
"""

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MISSED, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

from ..core.ports import NotificationScheduler
from .task_models import Task

logger = logging.getLogger(__name__)

ALERT_TITLE = "Smart Reminder Alert"


@dataclass(slots=True, frozen=True)
class Alert:
    title: str
    body: str
    badge: int = 1


AlertSink = Callable[[Alert], None]


def schedule_task_reminder(
    task: Task,
    notifier: NotificationScheduler,
    *,
    now: float | None = None,
    title: str = ALERT_TITLE,
) -> bool:
    """
    Ask the notifier for a one-shot alert at the task's due time.

    Returns True if the notifier accepted the request. Tasks that are already
    due (delay <= 0) get no alert. Notifier failures are logged and never raised.
    """
    if now is None:
        now = time.time()

    delay = task.due_at - now
    if delay <= 0:
        logger.debug("Task %s already due (delay=%.1fs); no alert scheduled", task.id, delay)
        return False

    try:
        notifier.schedule_one_shot(after_delay=delay, title=title, body=task.title)
    except Exception:
        logger.exception("schedule_one_shot failed task_id=%s", task.id)
        return False

    logger.info("Alert scheduled task_id=%s in %.0fs", task.id, delay)
    return True


class APSchedulerNotifier:
    """
    NotificationScheduler on top of APScheduler.

    Each request becomes a DateTrigger job (runs once, never repeats) that
    passes an Alert to the sink on the scheduler's worker thread.
    """

    def __init__(
        self,
        sink: AlertSink,
        *,
        scheduler: BackgroundScheduler | None = None,
    ) -> None:
        self._sink = sink
        self._scheduler = scheduler or BackgroundScheduler()
        self._scheduler.add_listener(self._on_job_event, EVENT_JOB_ERROR | EVENT_JOB_MISSED)

    @property
    def running(self) -> bool:
        return bool(self._scheduler.running)

    def start(self) -> None:
        if not self._scheduler.running:
            self._scheduler.start()
            logger.info("Notification scheduler started")

    def shutdown(self, wait: bool = False) -> None:
        if self._scheduler.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("Notification scheduler stopped")

    def pending_count(self) -> int:
        return len(self._scheduler.get_jobs())

    def schedule_one_shot(self, *, after_delay: float, title: str, body: str) -> None:
        run_at = datetime.now().astimezone() + timedelta(seconds=max(0.0, float(after_delay)))
        alert = Alert(title=title, body=body)
        self._scheduler.add_job(
            self._deliver,
            trigger=DateTrigger(run_date=run_at),
            args=(alert,),
            id=f"alert-{uuid.uuid4().hex}",
            name=f"alert: {body}",
            misfire_grace_time=None,
        )
        logger.debug("Alert job added run_at=%s body=%r", run_at.isoformat(), body)

    def _deliver(self, alert: Alert) -> None:
        self._sink(alert)

    @staticmethod
    def _on_job_event(event: JobExecutionEvent) -> None:
        if event.code == EVENT_JOB_MISSED:
            logger.warning("Alert job %s missed its run time", event.job_id)
            return
        logger.error("Alert job %s failed: %r", event.job_id, event.exception)
