"""Exception hierarchy for the distraction control subsystem.

None of these escape to the user interface: inventory failures become a
sentinel descriptor, termination and relaunch failures are logged per app,
and persistence failures fall back to defaults or a ``False`` status.
"""
from __future__ import annotations


class PomoError(Exception):
    """Base class for Pomo errors."""


class InventoryError(PomoError):
    """The process listing command failed or produced unparsable output."""


class TerminationFailure(PomoError):
    """A termination command for a single kill id did not succeed."""

    def __init__(self, app_id: str, message: str, *, returncode: int | None = None) -> None:
        super().__init__(f"{app_id}: {message}")
        self.app_id = app_id
        self.returncode = returncode


class RelaunchFailure(PomoError):
    """Relaunching a previously terminated application failed."""

    def __init__(self, display: str, message: str) -> None:
        super().__init__(f"{display}: {message}")
        self.display = display


class PersistenceFailure(PomoError):
    """Settings could not be read from or written to disk."""


__all__ = [
    "InventoryError",
    "PersistenceFailure",
    "PomoError",
    "RelaunchFailure",
    "TerminationFailure",
]
