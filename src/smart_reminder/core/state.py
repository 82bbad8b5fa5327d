# src/smart_reminder/core/state.py

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_store import TaskStore

ALERT_HISTORY = 20


@dataclass
class AppState:
    """
    Runtime state shared by the CLI and connectors.

    Contains:
    - settings: Settings (or a compatible object in tests)
    - store: the TaskStore the console renders
    - notifier: the notification collaborator wired into the store
    - alerts: the last ALERT_HISTORY delivered alerts (oldest first), listed by /alerts.
      Appended from the notifier's worker thread; deque appends are atomic.
    """

    settings: Any
    store: TaskStore
    notifier: Any

    alerts: deque[str] = field(default_factory=lambda: deque(maxlen=ALERT_HISTORY))
