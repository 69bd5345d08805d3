"""Default settings for Pomo."""
from __future__ import annotations

from typing import Any, Dict

DEFAULT_FOCUS_MINUTES = 25
DEFAULT_BREAK_MINUTES = 5

DEFAULT_SETTINGS: Dict[str, Any] = {
    "focusTime": DEFAULT_FOCUS_MINUTES,
    "breakTime": DEFAULT_BREAK_MINUTES,
    # JSON-encoded array of {id, display, detail}
    "appKillList": "[]",
    "relaunchOptional": True,
    "killConfirmation": "lenient",
}

__all__ = ["DEFAULT_BREAK_MINUTES", "DEFAULT_FOCUS_MINUTES", "DEFAULT_SETTINGS"]
