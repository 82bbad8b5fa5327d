# src/smart_reminder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskStore depends on Protocols instead of concrete implementations.
This keeps storage and notification delivery swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import TaskRecord


class TaskPersistence(Protocol):
    """
    Storage collaborator.

    Every method raises a PersistenceError subclass on failure.
    insert() returns the stored record, including its generated id.
    """

    def fetch_all(self) -> list[TaskRecord]: ...
    def insert(self, title: str, due_at: float, is_completed: bool = False) -> TaskRecord: ...
    def update_completion(self, task_id: int, is_completed: bool) -> None: ...
    def delete(self, task_id: int) -> None: ...


class NotificationScheduler(Protocol):
    """Host facility that fires a one-shot alert after a delay (seconds)."""

    def schedule_one_shot(self, *, after_delay: float, title: str, body: str) -> None: ...
