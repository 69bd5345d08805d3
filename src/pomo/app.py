"""Composition root wiring settings, kill list and session together."""
from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path

from .config import ConfigPaths, Settings, SettingsStore
from .inventory import filter_apps, list_apps
from .kill_list import KillList
from .models import AppDescriptor
from .platforms import PlatformStrategy, get_strategy
from .presenter import Presenter
from .relauncher import wait_pending
from .session import Killer, Relauncher, SessionStateMachine
from .terminator import ConfirmationPolicy

logger = logging.getLogger(__name__)

DEFAULT_TICK_INTERVAL = 1.0


def tick_interval_from_env() -> float:
    """Return ``$POMO_TICK_INTERVAL`` as seconds per tick, default ``1.0``."""

    raw = os.getenv("POMO_TICK_INTERVAL")
    if not raw:
        return DEFAULT_TICK_INTERVAL
    try:
        value = float(raw)
    except ValueError:
        value = 0.0
    if value <= 0:
        logger.warning("Ignoring invalid POMO_TICK_INTERVAL=%r", raw)
        return DEFAULT_TICK_INTERVAL
    return value


class AppContext:
    """Long-lived application objects shared by every front-end."""

    def __init__(
        self,
        store: SettingsStore,
        *,
        strategy: PlatformStrategy | None = None,
        presenter: Presenter | None = None,
        tick_interval: float | None = None,
        killer: Killer | None = None,
        relauncher: Relauncher | None = None,
    ) -> None:
        self.store = store
        self.strategy = strategy or get_strategy()
        settings = store.settings()
        self.kill_list = KillList.from_json(
            settings.app_kill_list, on_change=self._kill_list_changed
        )
        self.session = SessionStateMachine(
            self.kill_list,
            durations=settings.durations,
            relaunch_enabled=settings.relaunch_enabled,
            policy=settings.kill_confirmation,
            strategy=self.strategy,
            presenter=presenter,
            tick_interval=tick_interval or tick_interval_from_env(),
            killer=killer,
            relauncher=relauncher,
        )

    @classmethod
    def create(cls, root: Path | str | None = None, **kwargs) -> "AppContext":
        """Load settings from *root* (or the default location) and wire up."""

        return cls(SettingsStore(paths=ConfigPaths.create(root)), **kwargs)

    @property
    def settings(self) -> Settings:
        return self.store.settings()

    def persist(self) -> bool:
        return self.store.save()

    def _kill_list_changed(self, kill_list: KillList) -> None:
        self.store.set("appKillList", kill_list.to_json())
        if not self.persist():
            logger.error("Kill list changed but could not be saved.")

    # ------------------------------------------------------------------
    # Picker
    # ------------------------------------------------------------------

    def running_apps(self, search: str | None = None) -> list[AppDescriptor]:
        apps = list_apps(self.strategy)
        return filter_apps(apps, search) if search else apps

    def toggle_app(self, app: AppDescriptor) -> bool:
        """Toggle *app* in the kill list; the change is saved immediately."""

        selected = self.kill_list.toggle(app)
        logger.info("%s %s kill list", app.display, "added to" if selected else "removed from")
        return selected

    # ------------------------------------------------------------------
    # Settings form
    # ------------------------------------------------------------------

    def update_settings(
        self,
        *,
        focus_minutes: int | None = None,
        break_minutes: int | None = None,
        relaunch_enabled: bool | None = None,
        policy: ConfirmationPolicy | str | None = None,
    ) -> Settings:
        """Apply and save changed settings.

        Invalid durations are normalised to the defaults. A change of
        durations resets the running session.
        """

        current = self.store.settings()
        updated = replace(
            current,
            focus_minutes=current.focus_minutes if focus_minutes is None else focus_minutes,
            break_minutes=current.break_minutes if break_minutes is None else break_minutes,
            relaunch_enabled=current.relaunch_enabled if relaunch_enabled is None else relaunch_enabled,
            kill_confirmation=(
                current.kill_confirmation if policy is None else ConfirmationPolicy.parse(policy)
            ),
        )
        updated = Settings.from_mapping(updated.to_mapping())
        self.store.save(updated)
        self.session.configure(
            durations=updated.durations,
            relaunch_enabled=updated.relaunch_enabled,
            policy=updated.kill_confirmation,
        )
        return updated

    async def shutdown(self, timeout: float | None = 5.0) -> None:
        """Reset the session, restoring silenced apps, and let relaunches start."""

        self.session.reset()
        await wait_pending(timeout)


__all__ = ["AppContext", "DEFAULT_TICK_INTERVAL", "tick_interval_from_env"]
