"""Kill-list picker commands: ``apps``, ``toggle`` and ``list``."""
from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.table import Table

from ...app import AppContext
from ...models import AppDescriptor

console = Console()


def _apps_table(title: str, apps: Iterable[AppDescriptor], selected: set[tuple[str, str]]) -> Table:
    table = Table(title=title)
    table.add_column("Kill", justify="center")
    table.add_column("Name")
    table.add_column("Id")
    table.add_column("Relaunch target", overflow="fold")
    for app in apps:
        table.add_row("x" if app.key in selected else "", app.display, app.id, app.detail)
    return table


def cmd_apps(search: str = "") -> int:
    ctx = AppContext.create()
    apps = ctx.running_apps(search)
    if len(apps) == 1 and apps[0].is_sentinel:
        console.print(f"[red]{apps[0].display}[/red]")
        return 1
    if not apps:
        console.print(f"[yellow]No running apps match {search!r}[/yellow]")
        return 0
    console.print(_apps_table("Running apps", apps, ctx.kill_list.selected_keys()))
    return 0


def cmd_toggle(app_id: str, detail: str, display: str | None = None) -> int:
    ctx = AppContext.create()
    app = AppDescriptor(id=app_id, display=display or app_id, detail=detail)
    if app.is_sentinel:
        console.print(f"[red]{app_id!r} cannot be added to the kill list[/red]")
        return 1
    if ctx.toggle_app(app):
        console.print(f"[green]Added {app.display} to the kill list[/green]")
    else:
        console.print(f"[yellow]Removed {app.display} from the kill list[/yellow]")
    return 0


def cmd_list() -> int:
    ctx = AppContext.create()
    if not len(ctx.kill_list):
        console.print("No apps in the kill list.")
        return 0
    console.print(_apps_table("Kill list", ctx.kill_list, ctx.kill_list.selected_keys()))
    return 0
