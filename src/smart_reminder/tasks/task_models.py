# src/smart_reminder/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TaskFilter(StrEnum):
    """
    View selection for the task list.

    Notes:
    - OVERDUE is not a stored state: it is computed from pending tasks past their due time.
    """

    COMPLETED = "completed"
    PENDING = "pending"
    OVERDUE = "overdue"

    @classmethod
    def parse(cls, raw: TaskFilter | str) -> TaskFilter:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            raise ValueError(f"unknown filter: {raw!r}") from None


@dataclass(slots=True, frozen=True)
class TaskRecord:
    """Row shape returned by the persistence collaborator."""

    id: int
    title: str
    due_at: float
    is_completed: bool = False


@dataclass(slots=True, frozen=True)
class Task:
    id: int
    title: str
    due_at: float
    is_completed: bool = False

    @classmethod
    def from_record(cls, record: TaskRecord) -> Task:
        return cls(
            id=record.id,
            title=record.title,
            due_at=float(record.due_at),
            is_completed=bool(record.is_completed),
        )

    def is_overdue(self, now: float) -> bool:
        return not self.is_completed and self.due_at < now


def matches(task_filter: TaskFilter, task: Task, now: float) -> bool:
    if task_filter is TaskFilter.COMPLETED:
        return task.is_completed
    if task_filter is TaskFilter.PENDING:
        return not task.is_completed
    return task.is_overdue(now)
