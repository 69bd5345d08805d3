"""Application-wide logging configuration using rich handlers."""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> None:
    """Configure the console ``RichHandler`` and an optional log file.

    Parameters
    ----------
    level:
        Minimum severity shown on the console. ``pomo --verbose`` passes
        ``logging.DEBUG``, which also shows the emitting module.
    log_file:
        Optional path to a rotating log file. If ``None``, ``POMO_LOG_FILE``
        is consulted. The file always records ``DEBUG`` and above, so kill
        and relaunch details are kept even when the console is quiet.
    """
    if log_file is None:
        log_file = os.getenv("POMO_LOG_FILE")

    console = RichHandler(
        rich_tracebacks=True, markup=False, show_path=level <= logging.DEBUG
    )
    console.setLevel(level)
    handlers: list[logging.Handler] = [console]
    root_level = level

    if log_file:
        file_handler = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=3)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        handlers.append(file_handler)
        root_level = logging.DEBUG

    logging.basicConfig(
        level=root_level,
        handlers=handlers,
        format="%(message)s",
        force=True,
    )
    logging.captureWarnings(True)


__all__ = ["FILE_FORMAT", "setup_logging"]
