"""Settings persistence for Pomo."""
from __future__ import annotations

from .defaults import DEFAULT_SETTINGS
from .manager import Settings, SettingsStore
from .paths import ConfigPaths

__all__ = ["ConfigPaths", "DEFAULT_SETTINGS", "Settings", "SettingsStore"]
