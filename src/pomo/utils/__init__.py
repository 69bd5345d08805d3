"""Subprocess and logging helpers shared across Pomo."""
from __future__ import annotations

from .logging_config import setup_logging
from .process_utils import (
    run_command_async_ex,
    run_command_background,
    run_command_ex,
)

__all__ = [
    "run_command_async_ex",
    "run_command_background",
    "run_command_ex",
    "setup_logging",
]
