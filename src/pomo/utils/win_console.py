"""Helpers for spawning processes without a Windows console window."""
from __future__ import annotations

import platform
import subprocess

__all__ = ["hidden_creation_flags", "is_windows"]


def is_windows() -> bool:
    """Return ``True`` when running on Windows."""

    return platform.system() == "Windows"


def hidden_creation_flags(*, detach: bool = True) -> int:
    """Return Windows-specific creation flags for a hidden process."""
    if not is_windows():
        return 0
    flags = getattr(subprocess, "CREATE_NO_WINDOW", 0)
    if detach:
        flags |= getattr(subprocess, "DETACHED_PROCESS", 0)
        flags |= getattr(subprocess, "CREATE_NEW_PROCESS_GROUP", 0)
    return flags
