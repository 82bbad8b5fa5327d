# src/smart_reminder/tasks/errors.py

from __future__ import annotations


class PersistenceError(RuntimeError):
    """Base class for failures of the task persistence collaborator."""


class PersistenceUnavailable(PersistenceError):
    """The backing store could not be opened."""


class PersistenceReadFailure(PersistenceError):
    pass


class PersistenceWriteFailure(PersistenceError):
    """Insert, completion update or delete failed at the storage layer."""
