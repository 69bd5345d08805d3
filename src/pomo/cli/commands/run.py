"""``run`` command: a console countdown driving the session state machine."""
from __future__ import annotations

import asyncio
import logging

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ...app import AppContext
from ...models import PresentationMode, SessionState, format_clock
from ...presenter import SystemNotifier

logger = logging.getLogger(__name__)

console = Console()

_MODE_STYLES = {
    PresentationMode.FOCUS: "bold red",
    PresentationMode.BREAK: "bold green",
    PresentationMode.PAUSED: "bold yellow",
}


class ConsolePresenter:
    """Render session signals into a ``rich.live.Live`` panel."""

    def __init__(self, notifier: SystemNotifier | None = None) -> None:
        self.notifier = notifier
        self.mode = PresentationMode.PAUSED
        self.state = SessionState()
        self.last_message = ""
        self.live: Live | None = None

    def set_mode(self, mode: PresentationMode) -> None:
        self.mode = mode
        self.refresh()

    def notify(self, title: str, body: str) -> None:
        self.last_message = f"{title} {body}"
        if self.notifier is not None:
            self.notifier.notify(title, body)
        self.refresh()

    def on_tick(self, state: SessionState) -> None:
        self.state = state
        self.refresh()

    def render(self) -> Panel:
        clock = Text(format_clock(self.state.remaining), style=_MODE_STYLES[self.mode])
        lines = [clock]
        if self.state.killed:
            names = ", ".join(app.display for app in self.state.killed)
            lines.append(Text(f"Silenced: {names}", style="dim"))
        if self.last_message:
            lines.append(Text(self.last_message, style="italic"))
        return Panel(Group(*lines), title=self.mode.label, subtitle="Ctrl+C to stop")

    def refresh(self) -> None:
        if self.live is not None:
            self.live.update(self.render())


async def run_session(ctx: AppContext, presenter: ConsolePresenter) -> None:
    """Start sessions and keep them going until cancelled.

    Cancellation resets the session, which relaunches silenced apps, and
    waits briefly for the relaunch commands to be spawned.
    """

    with Live(presenter.render(), console=console, refresh_per_second=4) as live:
        presenter.live = live
        try:
            if len(ctx.kill_list):
                live.update(Panel(Text("Silencing apps..."), title=presenter.mode.label))
            await ctx.session.start()
            await asyncio.Event().wait()
        finally:
            presenter.live = None
            await ctx.shutdown()


def cmd_run(*, notify: bool = True) -> int:
    presenter = ConsolePresenter(SystemNotifier() if notify else None)
    ctx = AppContext.create(presenter=presenter)
    presenter.on_tick(ctx.session.snapshot())
    try:
        asyncio.run(run_session(ctx, presenter))
    except KeyboardInterrupt:
        logger.info("Session stopped by user.")
    console.print("Session stopped.")
    return 0
