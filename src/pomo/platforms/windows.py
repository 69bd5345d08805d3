"""Windows process listing via ``wmic`` and termination via ``taskkill``."""
from __future__ import annotations

import csv
import re

from ..errors import InventoryError
from ..models import AppDescriptor
from .base import PlatformStrategy

_EXE_SUFFIX = re.compile(r"\.exe$", re.IGNORECASE)


class WindowsStrategy(PlatformStrategy):
    """The full executable path is both the uniqueness key and the relaunch
    target."""

    name = "windows"
    blacklist = frozenset(
        {
            "System",
            "svchost.exe",
            "conhost.exe",
            "explorer.exe",
            "taskhostw.exe",
            "audiodg.exe",
            "lsass.exe",
            "wininit.exe",
            "RuntimeBroker.exe",
            "electron",
            "Pomo.exe",
            "wmic.exe",
            "tasklist.exe",
        }
    )
    # taskkill exits with 128 when no process matched the image name
    not_found_codes = frozenset({128})

    def list_command(self) -> list[str]:
        return ["wmic", "process", "get", "Caption,ExecutablePath", "/format:csv"]

    def parse_listing(self, stdout: str) -> list[AppDescriptor]:
        lines = [line.strip() for line in stdout.splitlines() if line.strip()]
        rows = list(csv.reader(lines))
        header_index = next(
            (i for i, row in enumerate(rows) if "Caption" in row and "ExecutablePath" in row),
            None,
        )
        if header_index is None:
            raise InventoryError("wmic output is missing the Caption/ExecutablePath header")
        header = rows[header_index]
        caption_col = header.index("Caption")
        path_col = header.index("ExecutablePath")

        by_path: dict[str, AppDescriptor] = {}
        for row in rows[header_index + 1 :]:
            if len(row) <= max(caption_col, path_col):
                continue
            caption = row[caption_col].strip()
            executable_path = row[path_col].strip()
            if not caption or not executable_path or self.is_ignored(caption):
                continue
            kill_id = _EXE_SUFFIX.sub("", caption).strip()
            by_path.setdefault(
                executable_path,
                AppDescriptor(id=kill_id, display=kill_id, detail=executable_path),
            )
        return list(by_path.values())

    def kill_command(self, app_id: str) -> list[str]:
        image = app_id.strip()
        if not image.lower().endswith(".exe"):
            image = f"{image}.exe"
        return ["taskkill", "/IM", image, "/F"]

    def relaunch_command(self, app: AppDescriptor) -> list[str] | None:
        if not app.detail:
            return None
        # the empty string is the window title ``start`` expects first
        return ["cmd", "/c", "start", "", app.detail]


__all__ = ["WindowsStrategy"]
