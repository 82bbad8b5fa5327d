"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskRecord, TaskFilter)
- errors.py: persistence error taxonomy
- task_db.py: SQLite-backed persistence collaborator
- task_store.py: in-memory task list + filtered view, mediates all mutations
- notifications.py: reminder policy and the APScheduler-backed notifier
"""
