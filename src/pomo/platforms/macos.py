"""macOS process listing through System Events and ``osascript``."""
from __future__ import annotations

from typing import Any

from ..errors import InventoryError
from ..models import AppDescriptor
from .base import PlatformStrategy

_LIST_SCRIPT = (
    'tell application "System Events" to get {name, bundle identifier} '
    "of (processes where background only is false)"
)

_ESCAPES = {'"': '"', "\\": "\\", "n": "\n", "r": "\r", "t": "\t"}


def escape_applescript_string(text: str) -> str:
    """Escape special characters for AppleScript string literals."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", "\\n")
    text = text.replace("\r", "\\r")
    return text.replace("\t", "\\t")


class _LiteralParser:
    """Recursive-descent reader for ``osascript -ss`` list output."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> Any:
        value = self._value()
        self._skip_ws()
        if self.pos != len(self.text):
            raise InventoryError(f"unexpected trailing output at offset {self.pos}")
        return value

    def _skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _value(self) -> Any:
        self._skip_ws()
        if self.pos >= len(self.text):
            raise InventoryError("unexpected end of osascript output")
        ch = self.text[self.pos]
        if ch == "{":
            return self._list()
        if ch == '"':
            return self._string()
        return self._bare()

    def _list(self) -> list[Any]:
        self.pos += 1
        items: list[Any] = []
        self._skip_ws()
        if self.text.startswith("}", self.pos):
            self.pos += 1
            return items
        while True:
            items.append(self._value())
            self._skip_ws()
            if self.pos >= len(self.text):
                raise InventoryError("unterminated list in osascript output")
            ch = self.text[self.pos]
            self.pos += 1
            if ch == "}":
                return items
            if ch != ",":
                raise InventoryError(f"expected ',' or '}}' at offset {self.pos - 1}")

    def _string(self) -> str:
        self.pos += 1
        out: list[str] = []
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            self.pos += 1
            if ch == '"':
                return "".join(out)
            if ch == "\\" and self.pos < len(self.text):
                nxt = self.text[self.pos]
                self.pos += 1
                out.append(_ESCAPES.get(nxt, nxt))
            else:
                out.append(ch)
        raise InventoryError("unterminated string in osascript output")

    def _bare(self) -> str | None:
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in ",}":
            self.pos += 1
        word = self.text[start : self.pos].strip()
        if not word:
            raise InventoryError(f"empty value at offset {start}")
        return None if word == "missing value" else word


def parse_applescript_list(text: str) -> Any:
    """Parse an AppleScript list literal such as ``{{"a", "b"}, {"x", missing value}}``."""

    return _LiteralParser(text.strip()).parse()


class MacOSStrategy(PlatformStrategy):
    name = "macos"
    blacklist = frozenset(
        {
            "Finder",
            "Dock",
            "System Settings",
            "SystemUIServer",
            "ControlCenter",
            "Electron",
            "Pomo",
        }
    )
    # GUI process names such as "Mail" or "Arc" are legitimately short
    min_name_length = 1
    # killall exits with 1 when no process matched
    not_found_codes = frozenset({1})

    def list_command(self) -> list[str]:
        return ["osascript", "-ss", "-e", _LIST_SCRIPT]

    def parse_listing(self, stdout: str) -> list[AppDescriptor]:
        parsed = parse_applescript_list(stdout)
        if (
            not isinstance(parsed, list)
            or len(parsed) != 2
            or not all(isinstance(part, list) for part in parsed)
        ):
            raise InventoryError("expected {names, bundle identifiers} from System Events")
        names, identifiers = parsed
        apps: list[AppDescriptor] = []
        for index, name in enumerate(names):
            if not isinstance(name, str) or not name or self.is_ignored(name):
                continue
            identifier = identifiers[index] if index < len(identifiers) else None
            if not isinstance(identifier, str) or not identifier:
                identifier = name
            apps.append(AppDescriptor(id=name, display=name, detail=identifier))
        return apps

    def kill_command(self, app_id: str) -> list[str]:
        return ["killall", app_id.strip()]

    def relaunch_command(self, app: AppDescriptor) -> list[str] | None:
        # ``open -a`` resolves the application name more reliably than the bundle id
        if not app.display:
            return None
        return ["open", "-a", app.display]

    def notify_command(self, title: str, body: str) -> list[str]:
        script = (
            f'display notification "{escape_applescript_string(body)}" '
            f'with title "{escape_applescript_string(title)}"'
        )
        return ["osascript", "-e", script]


__all__ = ["MacOSStrategy", "escape_applescript_string", "parse_applescript_list"]
