"""Convenient wrappers for subprocess commands.

:func:`run_command_ex` executes an external command while hiding any console
window and returns a ``(stdout, stderr, status)`` triple. ``status`` is the
process return code, or the exception raised when the command could not be
started or timed out (in which case both output fields are ``None``).

:func:`run_command_async_ex` mirrors the synchronous helper for ``asyncio``
based workflows and is what the terminator and relauncher fan out over.

:func:`run_command_background` launches a command fully detached and does not
wait for it, which is how GUI applications are relaunched.
"""
from __future__ import annotations

import subprocess
import asyncio
import logging
from typing import Sequence, Optional, Tuple

from .win_console import hidden_creation_flags

logger = logging.getLogger(__name__)

__all__ = [
    "CommandStatus",
    "run_command_ex",
    "run_command_async_ex",
    "run_command_background",
]

CommandStatus = Tuple[Optional[str], Optional[str], "int | Exception"]


def _decode(data: bytes | None) -> str:
    if not data:
        return ""
    return data.decode(errors="replace")


def run_command_ex(
    cmd: Sequence[str],
    *,
    timeout: float | None = 10.0,
    creationflags: int | None = None,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> CommandStatus:
    """Execute ``cmd`` returning captured output and the exit status."""

    if creationflags is None:
        creationflags = hidden_creation_flags(detach=False)

    try:
        proc = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            check=False,
            timeout=timeout,
            creationflags=creationflags,
            cwd=cwd,
            env=env,
        )
    except subprocess.TimeoutExpired as e:
        logger.exception("Command %s timed out", cmd)
        return None, None, e
    except OSError as e:
        logger.exception("Command %s failed", cmd)
        return None, None, e

    return proc.stdout or "", proc.stderr or "", proc.returncode


async def run_command_async_ex(
    cmd: Sequence[str],
    *,
    timeout: float | None = 10.0,
    creationflags: int | None = None,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> CommandStatus:
    """Asynchronously execute ``cmd`` returning output and the exit status.

    Parameters are identical to :func:`run_command_ex`.
    """

    if creationflags is None:
        creationflags = hidden_creation_flags(detach=False)

    kwargs = {
        "stdout": asyncio.subprocess.PIPE,
        "stderr": asyncio.subprocess.PIPE,
        "creationflags": creationflags,
        "cwd": cwd,
        "env": env,
    }

    try:
        proc = await asyncio.create_subprocess_exec(*cmd, **kwargs)
    except OSError as e:
        logger.exception("Command %s failed to start", cmd)
        return None, None, e

    try:
        if timeout is not None:
            out, err = await asyncio.wait_for(proc.communicate(), timeout)
        else:
            out, err = await proc.communicate()
    except asyncio.TimeoutError as e:
        logger.exception("Command %s timed out", cmd)
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        return None, None, e

    return _decode(out), _decode(err), proc.returncode


def run_command_background(
    cmd: Sequence[str],
    *,
    creationflags: int | None = None,
    stdout: object | None = subprocess.DEVNULL,
    stderr: object | None = subprocess.DEVNULL,
    start_new_session: bool = False,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> Tuple[bool, Exception | None]:
    """Launch ``cmd`` detached from the current process.

    Parameters
    ----------
    start_new_session:
        When ``True`` the subprocess is started in a new session so it does not
        receive signals from the parent.
    cwd:
        Optional working directory for the new process.
    env:
        Optional environment overrides for the new process.
    """

    if creationflags is None:
        creationflags = hidden_creation_flags(detach=True)

    try:
        subprocess.Popen(
            list(cmd),
            stdin=subprocess.DEVNULL,
            stdout=stdout,
            stderr=stderr,
            creationflags=creationflags,
            start_new_session=start_new_session,
            cwd=cwd,
            env=env,
        )
        return True, None
    except OSError as e:
        logger.exception("Failed to launch %s", cmd)
        return False, e
