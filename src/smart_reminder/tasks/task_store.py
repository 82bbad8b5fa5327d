# src/smart_reminder/tasks/task_store.py

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Iterable

from ..core.ports import NotificationScheduler, TaskPersistence
from .errors import PersistenceError
from .notifications import ALERT_TITLE, schedule_task_reminder
from .task_models import Task, TaskFilter, matches

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class TaskStore:
    """
    Authoritative in-memory task list plus the filtered view shown to the user.

    - The full list is the single source of truth; the filtered view is
      recomputed from it after every mutation, never patched in place.
    - Display indices always refer to the filtered view. The full list is
      searched by task id.
    - Persistence errors are logged and kept in `last_error`; they never reach
      the display layer. delete/set_completion still change memory when the
      storage write fails.

    Not thread-safe: all calls are expected from one (UI) thread.
    """

    DEFAULT_FILTER = TaskFilter.PENDING

    def __init__(
        self,
        persistence: TaskPersistence,
        notifier: NotificationScheduler,
        *,
        log: logging.Logger | None = None,
        clock: Clock = time.time,
        alert_title: str = ALERT_TITLE,
    ) -> None:
        self._persistence = persistence
        self._notifier = notifier
        self._log = log or logger
        self._clock = clock
        self._alert_title = alert_title

        self._tasks: list[Task] = []
        self._filtered: list[Task] = []
        self._filter: TaskFilter = self.DEFAULT_FILTER
        self._last_error: PersistenceError | None = None

    # ---- read side ----

    @property
    def filter(self) -> TaskFilter:
        return self._filter

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def filtered_tasks(self) -> tuple[Task, ...]:
        return tuple(self._filtered)

    @property
    def last_error(self) -> PersistenceError | None:
        return self._last_error

    def count(self) -> int:
        return len(self._filtered)

    def item_at(self, index: int) -> Task:
        return self._filtered[self._check_index(index)]

    # ---- loading ----

    def initialize(self) -> bool:
        """
        Load every persisted task and show the default (pending) view.

        A failing store is a degraded start, not a crash: the list stays empty
        and False is returned.
        """
        self._last_error = None
        self._filter = self.DEFAULT_FILTER
        try:
            records = self._persistence.fetch_all()
        except PersistenceError as e:
            self._fail("Could not fetch tasks", e)
            self._tasks = []
            self.apply_filter(self._filter)
            return False

        self._tasks = []
        self.replace(Task.from_record(r) for r in records)
        self._log.info("Loaded %d tasks (%d %s)", len(self._tasks), len(self._filtered), self._filter)
        return True

    def replace(self, new_tasks: Iterable[Task], reset: bool = False) -> None:
        """Bulk refresh: optionally clear, append `new_tasks`, reapply the filter."""
        if reset:
            self._tasks.clear()

        known = {t.id for t in self._tasks}
        for task in new_tasks:
            if task.id in known:
                self._log.warning("Skipping duplicate task id=%s", task.id)
                continue
            known.add(task.id)
            self._tasks.append(task)

        self.apply_filter(self._filter)

    # ---- view ----

    def apply_filter(self, task_filter: TaskFilter | str) -> None:
        self._filter = TaskFilter.parse(task_filter)
        self.refresh()

    def refresh(self, now: float | None = None) -> None:
        """Recompute the filtered view for the current filter (overdue depends on time)."""
        if now is None:
            now = self._clock()
        self._filtered = [t for t in self._tasks if matches(self._filter, t, now)]

    # ---- mutations ----

    def create(self, title: str, due_at: float, is_completed: bool = False) -> Task | None:
        """
        Persist a new task, then add it and schedule its reminder.

        The save gates both side effects: if it fails, nothing is added and
        nothing is scheduled.
        """
        self._last_error = None
        try:
            record = self._persistence.insert(title, due_at, is_completed)
        except PersistenceError as e:
            self._fail("Could not save task", e)
            return None

        task = Task.from_record(record)
        self._tasks.append(task)
        schedule_task_reminder(task, self._notifier, now=self._clock(), title=self._alert_title)
        self.apply_filter(self._filter)
        self._log.debug("Task created id=%s due_at=%s", task.id, task.due_at)
        return task

    def delete(self, index: int) -> Task:
        """Delete the task shown at `index` from storage and from both lists."""
        self._last_error = None
        task = self.item_at(index)

        try:
            self._persistence.delete(task.id)
        except PersistenceError as e:
            self._fail(f"Could not delete task id={task.id}", e)

        pos = self._position_of(task.id)
        if pos is not None:
            del self._tasks[pos]
        self.apply_filter(self._filter)
        return task

    def set_completion(self, index: int, is_completed: bool) -> Task:
        """
        Change the completion flag of the task shown at `index`.

        The view is recomputed afterwards, so the row may leave the current
        filter (e.g. completing a task while viewing pending ones).
        """
        self._last_error = None
        current = self.item_at(index)
        updated = dataclasses.replace(current, is_completed=bool(is_completed))

        try:
            self._persistence.update_completion(updated.id, updated.is_completed)
        except PersistenceError as e:
            self._fail(f"Could not update task id={updated.id}", e)

        pos = self._position_of(updated.id)
        if pos is not None:
            self._tasks[pos] = updated
        self.apply_filter(self._filter)
        return updated

    # ---- helpers ----

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._filtered):
            raise IndexError(f"task index {index} out of range (count={len(self._filtered)})")
        return index

    def _position_of(self, task_id: int) -> int | None:
        for pos, t in enumerate(self._tasks):
            if t.id == task_id:
                return pos
        return None

    def _fail(self, message: str, error: PersistenceError) -> None:
        self._last_error = error
        self._log.error("%s: %s", message, error, exc_info=error)
