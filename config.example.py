# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "SMART_REMINDER_APP_NAME": "App display name (default: Smart Reminder).",
    "SMART_REMINDER_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "SMART_REMINDER_DATA_DIR": "Local data directory (default: .local/smart_reminder).",
    "SMART_REMINDER_TASKS_DB_PATH": "Task SQLite path (default: <data_dir>/tasks.sqlite3).",
    "SMART_REMINDER_LOG_DIR": "Directory for smart_reminder.log (default: <data_dir>).",
    # Reminders
    "SMART_REMINDER_DEFAULT_FILTER": "Initial view: pending | completed | overdue (default: pending).",
    "SMART_REMINDER_ALERT_TITLE": "Alert title (default: Smart Reminder Alert).",
    "SMART_REMINDER_NOTIFICATIONS_ENABLED": "Schedule alerts for new tasks (true/false, default: true).",
}
