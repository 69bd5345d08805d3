"""Linux process listing via ``ps``; kill and relaunch by command name."""
from __future__ import annotations

from ..models import AppDescriptor
from .base import PlatformStrategy


class LinuxStrategy(PlatformStrategy):
    name = "linux"
    blacklist = frozenset(
        {
            "systemd",
            "kworker",
            "sh",
            "bash",
            "zsh",
            "gnome-shell",
            "xfwm4",
            "kwin_x11",
            "dbus-daemon",
            "Xorg",
            "electron",
            "pomo",
        }
    )
    not_found_codes = frozenset({1})
    relaunch_detached = True

    def list_command(self) -> list[str]:
        return ["ps", "-e", "-o", "comm="]

    def parse_listing(self, stdout: str) -> list[AppDescriptor]:
        apps: dict[str, AppDescriptor] = {}
        for line in stdout.splitlines():
            name = line.strip()
            # kernel threads and truncated paths are not relaunchable apps
            if not name or "/" in name or self.is_ignored(name):
                continue
            apps.setdefault(name, AppDescriptor(id=name, display=name, detail=name))
        return list(apps.values())

    def kill_command(self, app_id: str) -> list[str]:
        return ["killall", app_id.strip()]

    def relaunch_command(self, app: AppDescriptor) -> list[str] | None:
        if not app.detail:
            return None
        return [app.detail]

    def notify_command(self, title: str, body: str) -> list[str]:
        return ["notify-send", title, body]


__all__ = ["LinuxStrategy"]
