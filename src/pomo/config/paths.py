"""Filesystem helpers for settings storage."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ConfigPaths:
    """Resolved filesystem locations for settings data."""

    root: Path
    settings_file: Path

    @classmethod
    def create(cls, root: Path | str | None = None) -> "ConfigPaths":
        """Return paths rooted at *root*, ``$POMO_HOME`` or ``~/.pomo``."""

        if root is None:
            env_root = os.getenv("POMO_HOME")
            root = env_root if env_root else Path.home() / ".pomo"
        base = Path(root).expanduser().resolve()
        return cls(root=base, settings_file=base / "settings.json")

    def ensure(self) -> None:
        """Create the settings directory if needed."""

        self.root.mkdir(parents=True, exist_ok=True)


__all__ = ["ConfigPaths"]
