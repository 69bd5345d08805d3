"""Concurrent termination of kill-list applications.

:func:`kill_apps` issues one termination command per id, all at once, and
returns only when every command has settled. The returned ids are those the
active :class:`ConfirmationPolicy` judges as terminated.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Sequence

from .errors import TerminationFailure
from .platforms import PlatformStrategy, get_strategy
from .utils.process_utils import CommandStatus, run_command_async_ex

logger = logging.getLogger(__name__)

Runner = Callable[..., Awaitable[CommandStatus]]


@dataclass(frozen=True, slots=True)
class KillOutcome:
    """Result of one termination command."""

    app_id: str
    returncode: int | None = None
    failure: TerminationFailure | None = None
    not_found: bool = False
    supported: bool = True

    @property
    def succeeded(self) -> bool:
        return self.supported and self.returncode == 0


class ConfirmationPolicy(str, Enum):
    """How a termination outcome maps to "confirmed terminated".

    ``LENIENT`` treats every failure except "target not found" as confirmed.
    ``STRICT`` requires a zero exit status. Unsupported platforms never
    confirm anything.
    """

    LENIENT = "lenient"
    STRICT = "strict"

    def confirms(self, outcome: KillOutcome) -> bool:
        if not outcome.supported:
            return False
        if self is ConfirmationPolicy.STRICT:
            return outcome.succeeded
        return not outcome.not_found

    @classmethod
    def parse(cls, value: str | "ConfirmationPolicy" | None) -> "ConfirmationPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or cls.LENIENT.value).strip().lower())
        except ValueError:
            logger.warning("Unknown kill confirmation policy %r, using lenient", value)
            return cls.LENIENT


async def terminate_app(
    app_id: str,
    strategy: PlatformStrategy,
    *,
    runner: Runner = run_command_async_ex,
    timeout: float | None = 10.0,
) -> KillOutcome:
    """Send a single termination command for ``app_id``."""

    app_id = app_id.strip()
    cmd = strategy.kill_command(app_id)
    if cmd is None:
        logger.error("App killing not supported on platform: %s", strategy.name)
        return KillOutcome(
            app_id,
            failure=TerminationFailure(app_id, "unsupported platform"),
            supported=False,
        )

    logger.info("Attempting to kill %s process: %s", strategy.name, app_id)
    _out, stderr, status = await runner(cmd, timeout=timeout)
    if isinstance(status, Exception):
        failure = TerminationFailure(app_id, str(status))
        logger.warning("Kill warning/failure for %s: %s", app_id, failure)
        return KillOutcome(app_id, failure=failure)
    if status == 0:
        logger.info("Successfully sent kill command for: %s", app_id)
        return KillOutcome(app_id, returncode=0)

    message = (stderr or "").strip() or f"exit status {status}"
    failure = TerminationFailure(app_id, message, returncode=status)
    not_found = strategy.is_not_found(status, stderr)
    logger.warning(
        "Kill warning/failure for %s%s: %s",
        app_id,
        " (not running)" if not_found else "",
        message,
    )
    return KillOutcome(app_id, returncode=status, failure=failure, not_found=not_found)


async def kill_apps(
    app_ids: Sequence[str],
    *,
    strategy: PlatformStrategy | None = None,
    policy: ConfirmationPolicy = ConfirmationPolicy.LENIENT,
    runner: Runner = run_command_async_ex,
    timeout: float | None = 10.0,
) -> list[str]:
    """Terminate ``app_ids`` concurrently and return the confirmed subset.

    The coroutine completes once, after all commands have settled. The
    result preserves input order. An empty input returns immediately without
    issuing any command.
    """
    if not app_ids:
        logger.info("No apps configured to kill. Skipping.")
        return []

    strategy = strategy or get_strategy()
    # gather keeps results in input order; only this coroutine reads them
    results = await asyncio.gather(
        *(terminate_app(app_id, strategy, runner=runner, timeout=timeout) for app_id in app_ids),
        return_exceptions=True,
    )
    outcomes = []
    for app_id, result in zip(app_ids, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error("Kill command for %s raised: %s", app_id, result)
            result = KillOutcome(app_id, failure=TerminationFailure(app_id, str(result)))
        outcomes.append(result)
    confirmed = [
        app_id for app_id, outcome in zip(app_ids, outcomes) if policy.confirms(outcome)
    ]
    logger.info("%d of %d apps confirmed for relaunch.", len(confirmed), len(app_ids))
    return confirmed


__all__ = ["ConfirmationPolicy", "KillOutcome", "kill_apps", "terminate_app"]
