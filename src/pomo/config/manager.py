"""Load, normalise and persist Pomo settings."""
from __future__ import annotations

import json
import logging
import shutil
from copy import deepcopy
from dataclasses import dataclass
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Dict, Mapping

from ..errors import PersistenceFailure
from ..models import Durations
from ..terminator import ConfirmationPolicy
from .defaults import DEFAULT_BREAK_MINUTES, DEFAULT_FOCUS_MINUTES, DEFAULT_SETTINGS
from .paths import ConfigPaths

logger = logging.getLogger(__name__)


def _positive_int(value: Any, default: int, key: str) -> int:
    if isinstance(value, bool):
        number = None
    elif isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        number = None
    if number is None or number <= 0:
        logger.warning("Invalid %s %r, using default %d", key, value, default)
        return default
    return number


_TRUE_WORDS = {"true", "yes", "on", "1"}
_FALSE_WORDS = {"false", "no", "off", "0"}


def _flag(value: Any, default: bool, key: str) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
    logger.warning("Invalid %s %r, using default %s", key, value, default)
    return default


@dataclass
class Settings:
    """Typed view of the settings document."""

    focus_minutes: int = DEFAULT_FOCUS_MINUTES
    break_minutes: int = DEFAULT_BREAK_MINUTES
    app_kill_list: str = "[]"
    relaunch_enabled: bool = True
    kill_confirmation: ConfirmationPolicy = ConfirmationPolicy.LENIENT

    @property
    def durations(self) -> Durations:
        return Durations(self.focus_minutes, self.break_minutes)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "Settings":
        """Build settings from a stored mapping, repairing invalid values.

        Non-positive or non-numeric durations fall back to 25/5 minutes.
        ``appKillList`` is kept as the raw JSON string; decoding it is the
        kill list's job.
        """

        kill_list = data.get("appKillList", "[]")
        if not isinstance(kill_list, str):
            kill_list = json.dumps(kill_list)
        return cls(
            focus_minutes=_positive_int(data.get("focusTime"), DEFAULT_FOCUS_MINUTES, "focusTime"),
            break_minutes=_positive_int(data.get("breakTime"), DEFAULT_BREAK_MINUTES, "breakTime"),
            app_kill_list=kill_list,
            relaunch_enabled=_flag(data.get("relaunchOptional"), True, "relaunchOptional"),
            kill_confirmation=ConfirmationPolicy.parse(data.get("killConfirmation")),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            "focusTime": self.focus_minutes,
            "breakTime": self.break_minutes,
            "appKillList": self.app_kill_list,
            "relaunchOptional": self.relaunch_enabled,
            "killConfirmation": self.kill_confirmation.value,
        }


class SettingsStore:
    """JSON settings file with defaults and corrupt-file recovery."""

    def __init__(
        self,
        *,
        paths: ConfigPaths | None = None,
        defaults: Dict[str, Any] | None = None,
    ) -> None:
        self.paths = paths or ConfigPaths.create()
        self.defaults: Dict[str, Any] = deepcopy(defaults or DEFAULT_SETTINGS)
        self.config: Dict[str, Any] = self.defaults.copy()
        self.load_ok = self._load_config()

    @property
    def settings_file(self) -> Path:
        return self.paths.settings_file

    def _read(self) -> Dict[str, Any]:
        path = self.paths.settings_file
        try:
            with open(path, "r", encoding="utf-8") as handle:
                loaded = json.load(handle)
        except OSError as exc:
            raise PersistenceFailure(f"Error reading settings: {exc}") from exc
        if not isinstance(loaded, dict):
            raise JSONDecodeError("settings document is not an object", "", 0)
        return loaded

    def _load_config(self) -> bool:
        """Load settings from disk, falling back to defaults."""

        self.paths.ensure()
        path = self.paths.settings_file
        if not path.exists():
            self.config = self.defaults.copy()
            return True
        try:
            loaded = self._read()
        except JSONDecodeError as exc:
            logger.warning("Invalid settings file, resetting to defaults: %s", exc)
            backup = path.with_suffix(path.suffix + ".bak")
            try:
                shutil.move(path, backup)
            except OSError as backup_err:
                logger.warning("Failed to back up invalid settings: %s", backup_err)
            self.config = self.defaults.copy()
            self.save()
            return False
        except PersistenceFailure as exc:
            logger.error("%s", exc)
            self.config = self.defaults.copy()
            return False
        self.config = {**self.defaults, **loaded}
        return True

    def load(self) -> Settings:
        """Re-read the settings file and return the normalised settings."""

        self.load_ok = self._load_config()
        return Settings.from_mapping(self.config)

    def settings(self) -> Settings:
        """Return the normalised in-memory settings without touching disk."""

        return Settings.from_mapping(self.config)

    def save(self, settings: Settings | None = None) -> bool:
        """Persist settings to disk. Never raises."""

        if settings is not None:
            self.config.update(settings.to_mapping())
        try:
            self.paths.ensure()
            with open(self.paths.settings_file, "w", encoding="utf-8") as handle:
                json.dump(self.config, handle, indent=4)
        except (OSError, TypeError, ValueError) as exc:
            failure = PersistenceFailure(f"Error saving settings: {exc}")
            logger.error("%s", failure)
            return False
        return True

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.config[key] = value

    def reset_to_defaults(self) -> None:
        """Replace the settings with the default values."""

        self.config = self.defaults.copy()
        self.save()


__all__ = ["Settings", "SettingsStore"]
