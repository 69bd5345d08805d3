"""Shared data models for the distraction control subsystem."""
from __future__ import annotations

import locale
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

ERROR_ID = "Error"
UNSUPPORTED_ID = "Unsupported"


@dataclass(frozen=True, slots=True)
class AppDescriptor:
    """A running application, described uniformly across platforms."""

    id: str  # kill target (process/image name)
    display: str  # human label
    detail: str  # best available relaunch target (path or bundle id)

    @property
    def key(self) -> tuple[str, str]:
        """Composite identity used by the kill list."""

        return (self.id, self.detail)

    @property
    def is_sentinel(self) -> bool:
        return self.id in (ERROR_ID, UNSUPPORTED_ID)

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "display": self.display, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppDescriptor":
        """Build a descriptor from a persisted mapping.

        Raises ``KeyError`` or ``TypeError`` when the mapping is malformed.
        """

        return cls(id=str(data["id"]), display=str(data["display"]), detail=str(data["detail"]))

    @classmethod
    def error(cls, message: str) -> "AppDescriptor":
        return cls(id=ERROR_ID, display=message, detail=message)

    @classmethod
    def unsupported(cls) -> "AppDescriptor":
        return cls(id=UNSUPPORTED_ID, display="Unsupported OS", detail="N/A")


def display_sort_key(app: AppDescriptor) -> tuple[str, str, str, str]:
    """Case-insensitive, locale-aware ordering key on ``display``.

    Ties are broken on the raw fields so the order is total and a removed
    then re-added entry lands where it was.
    """

    return (locale.strxfrm(app.display.casefold()), app.display, app.id, app.detail)


def sort_by_display(apps: Iterable[AppDescriptor]) -> list[AppDescriptor]:
    return sorted(apps, key=display_sort_key)


class Mode(str, Enum):
    """Kind of interval the timer is counting down."""

    FOCUS = "focus"
    BREAK = "break"

    @property
    def other(self) -> "Mode":
        return Mode.BREAK if self is Mode.FOCUS else Mode.FOCUS


class PresentationMode(str, Enum):
    """Three-valued signal sent to the tray/window layer."""

    FOCUS = "focus"
    BREAK = "break"
    PAUSED = "paused"

    @property
    def label(self) -> str:
        return {
            PresentationMode.FOCUS: "Pomo (Focus Mode)",
            PresentationMode.BREAK: "Pomo (Break Mode)",
            PresentationMode.PAUSED: "Pomo (Paused)",
        }[self]


class SessionPhase(str, Enum):
    FOCUS_RUNNING = "focus_running"
    FOCUS_PAUSED = "focus_paused"
    BREAK_RUNNING = "break_running"
    BREAK_PAUSED = "break_paused"

    @classmethod
    def of(cls, mode: Mode, running: bool) -> "SessionPhase":
        if mode is Mode.FOCUS:
            return cls.FOCUS_RUNNING if running else cls.FOCUS_PAUSED
        return cls.BREAK_RUNNING if running else cls.BREAK_PAUSED

    @property
    def presentation(self) -> PresentationMode:
        """Paused phases share one signal regardless of the underlying mode."""

        if self is SessionPhase.FOCUS_RUNNING:
            return PresentationMode.FOCUS
        if self is SessionPhase.BREAK_RUNNING:
            return PresentationMode.BREAK
        return PresentationMode.PAUSED


@dataclass(frozen=True, slots=True)
class Durations:
    """Configured interval lengths, in minutes."""

    focus_minutes: int = 25
    break_minutes: int = 5

    def minutes(self, mode: Mode) -> int:
        return self.focus_minutes if mode is Mode.FOCUS else self.break_minutes

    def seconds(self, mode: Mode) -> int:
        return self.minutes(mode) * 60


@dataclass
class SessionState:
    mode: Mode = Mode.FOCUS
    running: bool = False
    remaining: int = 25 * 60
    killed: list[AppDescriptor] = field(default_factory=list)

    @property
    def phase(self) -> SessionPhase:
        return SessionPhase.of(self.mode, self.running)

    def copy(self) -> "SessionState":
        return SessionState(self.mode, self.running, self.remaining, list(self.killed))


def format_clock(seconds: int) -> str:
    """Render ``seconds`` as ``MM:SS``."""

    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


__all__ = [
    "AppDescriptor",
    "Durations",
    "ERROR_ID",
    "Mode",
    "PresentationMode",
    "SessionPhase",
    "SessionState",
    "UNSUPPORTED_ID",
    "display_sort_key",
    "format_clock",
    "sort_by_display",
]
