# src/smart_reminder/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "smart_reminder.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keeps the REPL readable while alerts print on the same terminal.

    smart_reminder.* records pass at the handler level; APScheduler announces
    every alert job it runs, so only its warnings get through. Anything else
    (including captured warnings) has to be an error to reach the prompt.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("smart_reminder."):
            return True
        if name.startswith("apscheduler"):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/smart_reminder",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all records to stderr (filtered) and to <log_dir>/smart_reminder.log.

    The file keeps DEBUG detail such as storage failures with tracebacks and
    every alert job, while the console stays at `console_level`. Handlers
    installed earlier are replaced, so calling this twice does not duplicate
    output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(file_level)
    to_file.setFormatter(fmt)
    root.addHandler(to_file)

    logging.captureWarnings(True)
    return log_file
