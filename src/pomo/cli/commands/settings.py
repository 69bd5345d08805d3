"""``config`` command: show or change settings."""
from __future__ import annotations

from rich.console import Console
from rich.table import Table

from ...app import AppContext
from ...config import Settings

console = Console()


def _settings_table(settings: Settings, location: str) -> Table:
    table = Table(title=f"Settings ({location})")
    table.add_column("Setting")
    table.add_column("Value")
    table.add_row("Focus", f"{settings.focus_minutes} min")
    table.add_row("Break", f"{settings.break_minutes} min")
    table.add_row("Relaunch apps", "yes" if settings.relaunch_enabled else "no")
    table.add_row("Kill confirmation", settings.kill_confirmation.value)
    return table


def cmd_config(
    *,
    focus: int | None = None,
    break_: int | None = None,
    relaunch: bool | None = None,
    policy: str | None = None,
) -> int:
    ctx = AppContext.create()
    if all(value is None for value in (focus, break_, relaunch, policy)):
        settings = ctx.settings
    else:
        settings = ctx.update_settings(
            focus_minutes=focus,
            break_minutes=break_,
            relaunch_enabled=relaunch,
            policy=policy,
        )
    if not ctx.store.load_ok:
        console.print("[yellow]Settings file was unreadable and has been reset[/yellow]")
    console.print(_settings_table(settings, str(ctx.store.settings_file)))
    return 0
