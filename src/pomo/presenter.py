"""Boundary between the session state machine and whatever displays it.

The state machine only emits signals; trays, windows and the console
front-end implement :class:`Presenter`.
"""
from __future__ import annotations

import logging
from typing import Protocol

from .models import PresentationMode, SessionState
from .platforms import PlatformStrategy, get_strategy
from .utils.process_utils import run_command_background

logger = logging.getLogger(__name__)


class Presenter(Protocol):
    def set_mode(self, mode: PresentationMode) -> None:
        """Show the tray/window mode. Last write wins."""

    def notify(self, title: str, body: str) -> None:
        """Tell the user a session ended. Best-effort."""

    def on_tick(self, state: SessionState) -> None:
        """Refresh the remaining-time display."""


class NullPresenter:
    """Presenter that discards every signal."""

    def set_mode(self, mode: PresentationMode) -> None:
        pass

    def notify(self, title: str, body: str) -> None:
        pass

    def on_tick(self, state: SessionState) -> None:
        pass


class SystemNotifier:
    """Desktop notifications through the platform's notification command."""

    def __init__(self, strategy: PlatformStrategy | None = None) -> None:
        self.strategy = strategy or get_strategy()

    @property
    def supported(self) -> bool:
        return self.strategy.notify_command("", "") is not None

    def notify(self, title: str, body: str) -> bool:
        cmd = self.strategy.notify_command(title, body)
        if cmd is None:
            logger.warning("Notifications not supported on this system.")
            return False
        ok, _err = run_command_background(cmd)
        return ok


__all__ = ["NullPresenter", "Presenter", "SystemNotifier"]
