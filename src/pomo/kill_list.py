"""User-selected applications to silence during focus sessions."""

from __future__ import annotations

import json
import logging
from typing import Callable, Iterable, Iterator, Sequence

from .models import AppDescriptor, sort_by_display

logger = logging.getLogger(__name__)


class KillList:
    """Ordered, deduplicated set of :class:`AppDescriptor` entries.

    Entries are unique by ``(id, detail)`` and kept sorted by ``display``
    after every mutation.

    Parameters
    ----------
    entries:
        Optional initial entries. Duplicates are dropped.
    on_change:
        Optional callback invoked after each mutation, typically used to
        persist the list.
    """

    def __init__(
        self,
        entries: Iterable[AppDescriptor] = (),
        *,
        on_change: Callable[["KillList"], None] | None = None,
    ) -> None:
        self._entries: list[AppDescriptor] = []
        for entry in entries:
            if not self.contains(entry):
                self._entries.append(entry)
        self._entries = sort_by_display(self._entries)
        self.on_change = on_change

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def toggle(self, app: AppDescriptor) -> bool:
        """Add ``app`` when absent, remove it when present.

        Returns ``True`` if the app is selected afterwards.
        """
        index = self._index_of(app)
        if index is None:
            self._entries.append(app)
            selected = True
        else:
            del self._entries[index]
            selected = False
        self._changed()
        return selected

    def clear(self) -> None:
        if not self._entries:
            return
        self._entries.clear()
        self._changed()

    def _changed(self) -> None:
        self._entries = sort_by_display(self._entries)
        if self.on_change is not None:
            self.on_change(self)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def _index_of(self, app: AppDescriptor) -> int | None:
        key = app.key
        for index, entry in enumerate(self._entries):
            if entry.key == key:
                return index
        return None

    def contains(self, app: AppDescriptor) -> bool:
        return self._index_of(app) is not None

    @property
    def entries(self) -> list[AppDescriptor]:
        return list(self._entries)

    def ids(self) -> list[str]:
        """Kill ids in list order, as handed to the terminator."""
        return [entry.id for entry in self._entries]

    def selected_keys(self) -> set[tuple[str, str]]:
        return {entry.key for entry in self._entries}

    def descriptors_for(self, ids: Sequence[str]) -> list[AppDescriptor]:
        """Map confirmed kill ids back to their entries, in list order."""
        wanted = set(ids)
        return [entry for entry in self._entries if entry.id in wanted]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[AppDescriptor]:
        return iter(list(self._entries))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_json(self) -> str:
        """Encode as a JSON array of ``{id, display, detail}`` objects."""
        return json.dumps([entry.to_dict() for entry in self._entries])

    @classmethod
    def from_json(
        cls,
        text: str | None,
        *,
        on_change: Callable[["KillList"], None] | None = None,
    ) -> "KillList":
        """Decode a stored list; malformed data yields an empty list."""
        try:
            raw = json.loads(text or "[]")
            if not isinstance(raw, list):
                raise TypeError(f"expected a JSON array, got {type(raw).__name__}")
            entries = [AppDescriptor.from_dict(item) for item in raw]
        except (ValueError, TypeError, KeyError) as exc:
            logger.warning("Failed to parse appKillList JSON, resetting to empty list: %s", exc)
            entries = []
        return cls(entries, on_change=on_change)


__all__ = ["KillList"]
