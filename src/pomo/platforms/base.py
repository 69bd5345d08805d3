"""Common interface for the per-OS list/kill/relaunch/notify command sets."""
from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from functools import lru_cache

import psutil

from ..models import AppDescriptor

logger = logging.getLogger(__name__)

# Substrings identifying the controller itself under any of its packagings.
CONTROLLER_TAGS: tuple[str, ...] = ("pomo", "electron")


@lru_cache(maxsize=1)
def controller_process_name() -> str:
    """Return the lower-cased name of the running controller process."""

    try:
        return psutil.Process(os.getpid()).name().lower()
    except psutil.Error:
        logger.debug("could not resolve own process name", exc_info=True)
        return ""


class PlatformStrategy(ABC):
    """One host platform's way of listing, killing and relaunching apps.

    Concrete strategies share identical input and output contracts so callers
    never branch on the platform themselves; :func:`pomo.platforms.get_strategy`
    picks one at startup.
    """

    name: str = "generic"
    supported: bool = True
    blacklist: frozenset[str] = frozenset()
    min_name_length: int = 4
    not_found_codes: frozenset[int] = frozenset()
    # Relaunch commands that start a GUI app and never return are spawned
    # detached instead of awaited.
    relaunch_detached: bool = False

    # -- inventory --------------------------------------------------------
    @abstractmethod
    def list_command(self) -> list[str]:
        """Command that enumerates user-facing processes."""

    @abstractmethod
    def parse_listing(self, stdout: str) -> list[AppDescriptor]:
        """Turn the listing output into descriptors.

        Raises :class:`pomo.errors.InventoryError` when the output cannot be
        parsed. Deduplication and sorting are done by the caller.
        """

    def is_ignored(self, name: str) -> bool:
        """Return ``True`` for blacklisted, self or too-short names."""

        lowered = name.lower()
        if name in self.blacklist:
            return True
        if len(name) < self.min_name_length:
            return True
        if any(tag in lowered for tag in CONTROLLER_TAGS):
            return True
        own = controller_process_name()
        return bool(own) and lowered in (own, own.removesuffix(".exe"))

    # -- termination ------------------------------------------------------
    @abstractmethod
    def kill_command(self, app_id: str) -> list[str] | None:
        """Command signalling every process named ``app_id``."""

    def is_not_found(self, returncode: int, stderr: str | None = None) -> bool:
        """Classify a termination exit status as "target not found"."""

        return returncode in self.not_found_codes

    # -- relaunch ---------------------------------------------------------
    @abstractmethod
    def relaunch_command(self, app: AppDescriptor) -> list[str] | None:
        """Command restarting ``app``; ``None`` when it has no usable target."""

    # -- notifications ----------------------------------------------------
    def notify_command(self, title: str, body: str) -> list[str] | None:
        """Command showing a desktop notification, if the platform has one."""

        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


__all__ = ["CONTROLLER_TAGS", "PlatformStrategy", "controller_process_name"]
