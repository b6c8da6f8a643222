# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts connectors:
- console REPL in the main thread (optional),
- HTTP API in a background thread (optional).
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..connectors.http_connector import HttpBackgroundRunner, start_http_in_background
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("uvicorn").setLevel(max(console_level, logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    http_runner: HttpBackgroundRunner | None = None
    if settings.http_enabled:
        http_runner = start_http_in_background(state)
        if http_runner is not None:
            logger.info(
                "API ready at http://%s:%s/api/tasks", settings.http_host, settings.http_port
            )

    if not settings.console_enabled and http_runner is None:
        logger.error("Nothing to run: console is disabled and the HTTP API did not start.")
        return

    # Use an Event so main can wait without a busy while-loop.
    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()

    try:
        signal.signal(signal.SIGTERM, _handle_signal)
        # With the console running, Ctrl+C stays a KeyboardInterrupt inside input().
        if not settings.console_enabled:
            signal.signal(signal.SIGINT, _handle_signal)
    except (ValueError, OSError, AttributeError):
        # Some platforms may not support SIGTERM, etc.
        logger.debug("Signal handlers not installed.", exc_info=True)

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Serving the HTTP API only. Press Ctrl+C to stop.")
            stop_main.wait()

    finally:
        if http_runner is not None:
            http_runner.stop()
            http_runner.join(timeout=10.0)

        # Tasks live in memory only; they are gone once the process exits.
        logger.info("Bye. %s task(s) discarded.", state.task_store.count_tasks())


if __name__ == "__main__":
    main()
