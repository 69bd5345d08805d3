"""Fire-and-forget relaunch of applications silenced during focus."""
from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from .errors import RelaunchFailure
from .models import AppDescriptor
from .platforms import PlatformStrategy, get_strategy
from .utils.process_utils import run_command_async_ex, run_command_background

logger = logging.getLogger(__name__)

# scheduled relaunches, held until done
_pending: set[asyncio.Task[bool]] = set()


async def relaunch_app(app: AppDescriptor, strategy: PlatformStrategy, *, timeout: float = 15.0) -> bool:
    """Relaunch a single app, logging instead of raising on failure."""
    cmd = strategy.relaunch_command(app)
    if cmd is None:
        if strategy.supported:
            logger.warning("Cannot relaunch %s, path is missing.", app.display)
        else:
            logger.error("App relaunch not supported on platform: %s", strategy.name)
        return False

    logger.info("Attempting to relaunch %s app: %s", strategy.name, app.display)
    try:
        if strategy.relaunch_detached:
            ok, err = await asyncio.to_thread(run_command_background, cmd, start_new_session=True)
            if not ok:
                raise RelaunchFailure(app.display, str(err))
        else:
            _out, stderr, status = await run_command_async_ex(cmd, timeout=timeout)
            if isinstance(status, Exception):
                raise RelaunchFailure(app.display, str(status))
            if status != 0:
                raise RelaunchFailure(app.display, (stderr or "").strip() or f"exit status {status}")
    except RelaunchFailure as exc:
        logger.error("Relaunch failure for %s", exc)
        return False

    logger.info("Successfully attempted relaunch of: %s", app.display)
    return True


def relaunch_apps(
    apps: Sequence[AppDescriptor],
    *,
    strategy: PlatformStrategy | None = None,
) -> list[asyncio.Task[bool]]:
    """Schedule one relaunch per app on the running loop without awaiting.

    Returns the scheduled tasks for callers (and tests) that want to observe
    them; normal callers ignore the return value.
    """
    if not apps:
        logger.info("No apps to relaunch. Skipping.")
        return []

    strategy = strategy or get_strategy()
    loop = asyncio.get_running_loop()
    tasks: list[asyncio.Task[bool]] = []
    for app in apps:
        task = loop.create_task(relaunch_app(app, strategy), name=f"relaunch:{app.id}")
        _pending.add(task)
        task.add_done_callback(_pending.discard)
        tasks.append(task)
    return tasks


async def wait_pending(timeout: float | None = 5.0) -> None:
    """Give in-flight relaunches a chance to finish, e.g. before shutdown."""

    if not _pending:
        return
    await asyncio.wait(set(_pending), timeout=timeout)


__all__ = ["relaunch_app", "relaunch_apps", "wait_pending"]
