"""Running-application inventory for the kill-list picker.

:func:`list_apps` never raises: a failing or unparsable listing command is
reported as a single sentinel descriptor whose ``id`` is ``"Error"`` so the
picker can render the message inline.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable

from .errors import InventoryError
from .models import AppDescriptor, sort_by_display
from .platforms import PlatformStrategy, get_strategy
from .utils.process_utils import run_command_ex

logger = logging.getLogger(__name__)


def _dedupe(apps: Iterable[AppDescriptor]) -> list[AppDescriptor]:
    seen: dict[tuple[str, str], AppDescriptor] = {}
    for app in apps:
        seen.setdefault(app.key, app)
    return list(seen.values())


def list_apps(strategy: PlatformStrategy | None = None, *, timeout: float = 15.0) -> list[AppDescriptor]:
    """Return running user-facing apps, deduplicated and sorted by display name."""
    strategy = strategy or get_strategy()
    if not strategy.supported:
        return [AppDescriptor.unsupported()]

    cmd = strategy.list_command()
    logger.debug("Executing command: %s", cmd)
    stdout, stderr, status = run_command_ex(cmd, timeout=timeout)
    if isinstance(status, Exception):
        logger.error("Error listing apps: %s", status)
        return [AppDescriptor.error(f"Error fetching list: {status}")]
    if status != 0 or (stderr or "").strip():
        message = (stderr or "").strip() or f"{cmd[0]} exited with status {status}"
        logger.error("Error listing apps: %s", message)
        return [AppDescriptor.error(f"Error fetching list: {message}")]

    try:
        apps = strategy.parse_listing(stdout or "")
    except InventoryError as exc:
        logger.error("Error parsing app list: %s", exc)
        return [AppDescriptor.error(f"Error parsing list output: {exc}")]
    return sort_by_display(_dedupe(apps))


async def async_list_apps(strategy: PlatformStrategy | None = None) -> list[AppDescriptor]:
    """Asynchronous wrapper for :func:`list_apps`."""

    return await asyncio.to_thread(list_apps, strategy)


def filter_apps(apps: Iterable[AppDescriptor], term: str) -> list[AppDescriptor]:
    """Keep apps whose display or detail contains ``term`` (case-insensitive)."""
    needle = term.strip().lower()
    apps = list(apps)
    if not needle:
        return apps
    return [a for a in apps if needle in a.display.lower() or needle in a.detail.lower()]


__all__ = ["async_list_apps", "filter_apps", "list_apps"]
