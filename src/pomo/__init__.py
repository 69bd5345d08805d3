"""Pomo: a focus timer that silences distracting apps during focus sessions."""
from __future__ import annotations

from .kill_list import KillList
from .models import AppDescriptor, Durations, Mode, PresentationMode, SessionPhase, SessionState
from .session import SessionStateMachine
from .terminator import ConfirmationPolicy, kill_apps
from .relauncher import relaunch_apps
from .inventory import async_list_apps, list_apps

__version__ = "1.0.0"

__all__ = [
    "AppDescriptor",
    "ConfirmationPolicy",
    "Durations",
    "KillList",
    "Mode",
    "PresentationMode",
    "SessionPhase",
    "SessionState",
    "SessionStateMachine",
    "__version__",
    "async_list_apps",
    "kill_apps",
    "list_apps",
    "relaunch_apps",
]
