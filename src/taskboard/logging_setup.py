# src/taskboard/logging_setup.py

"""
Logging for the taskboard process.

stderr shares the terminal with the console REPL, so it only gets our own
records plus real trouble from libraries. taskboard.log keeps everything.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Decide which records are worth printing next to the REPL prompt."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        level = record.levelno

        if name.startswith("taskboard."):
            # Request chatter from the API thread stays in the file.
            if name.startswith("taskboard.connectors.http_"):
                return level >= logging.WARNING
            return True

        # One line per request would scroll the table away.
        if name == "uvicorn.access":
            return False
        if name.startswith("uvicorn"):
            return level >= logging.WARNING

        # py.warnings and everything else
        return level >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskboard/logs",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """Install the stderr and file handlers on the root logger, replacing any present."""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(formatter)
    console.addFilter(_ConsoleNoiseFilter())

    logfile = logging.FileHandler(str(log_dir / "taskboard.log"), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(formatter)

    root.addHandler(console)
    root.addHandler(logfile)

    logging.captureWarnings(True)
