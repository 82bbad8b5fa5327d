# src/smart_reminder/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the notification scheduler and
runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    # SqliteTaskDB uses short-lived connections per call; no explicit close required.
    try:
        state.notifier.shutdown(wait=False)
    except Exception:
        logger.debug("Notifier shutdown failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)
    state.notifier.start()

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
