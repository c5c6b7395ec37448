# src/tasks_api/logging_setup.py

from __future__ import annotations

import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow every src.tasks_api / src.tasks_client log
    - uvicorn startup/shutdown lines are kept, its access log is replaced by ours
    - any other 3rd party only from WARNING up
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith(("src.tasks_api", "src.tasks_client")):
            return True

        if name == "uvicorn.access":
            return False

        if name.startswith("uvicorn"):
            return record.levelno >= logging.INFO

        return record.levelno >= logging.WARNING


def setup_logging(*, console_level: int = logging.INFO) -> None:
    """
    Configure logging with a single stderr handler.

    Call this ONCE, very early (before first logger.info).
    """
    root = logging.getLogger()
    root.setLevel(console_level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)
