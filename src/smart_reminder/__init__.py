"""Smart Reminder: a single-list reminder tracker with due-time alerts."""

__version__ = "0.1.0"
