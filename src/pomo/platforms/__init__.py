"""Platform strategies, selected once per process by host OS."""
from __future__ import annotations

import sys

from ..errors import InventoryError
from ..models import AppDescriptor
from .base import CONTROLLER_TAGS, PlatformStrategy, controller_process_name
from .linux import LinuxStrategy
from .macos import MacOSStrategy
from .windows import WindowsStrategy


class UnsupportedStrategy(PlatformStrategy):
    """Fallback for hosts without a known command set."""

    name = "unsupported"
    supported = False

    def list_command(self) -> list[str]:
        return []

    def parse_listing(self, stdout: str) -> list[AppDescriptor]:
        raise InventoryError(f"app listing not supported on platform: {sys.platform}")

    def kill_command(self, app_id: str) -> None:
        return None

    def relaunch_command(self, app: AppDescriptor) -> None:
        return None


def strategy_for(platform: str) -> PlatformStrategy:
    """Return the strategy matching a ``sys.platform`` value."""

    if platform == "win32":
        return WindowsStrategy()
    if platform == "darwin":
        return MacOSStrategy()
    if platform.startswith("linux"):
        return LinuxStrategy()
    return UnsupportedStrategy()


_strategy: PlatformStrategy | None = None


def get_strategy() -> PlatformStrategy:
    """Return the strategy for the host, created on first use."""

    global _strategy
    if _strategy is None:
        _strategy = strategy_for(sys.platform)
    return _strategy


__all__ = [
    "CONTROLLER_TAGS",
    "LinuxStrategy",
    "MacOSStrategy",
    "PlatformStrategy",
    "UnsupportedStrategy",
    "WindowsStrategy",
    "controller_process_name",
    "get_strategy",
    "strategy_for",
]
