"""Focus/break session state machine.

The machine owns the timer state and sequences the terminator and relauncher
around mode changes:

* a fresh focus session awaits the terminator before it is reported as
  running, so "focus started" is never shown before distracting apps have
  been addressed;
* entering a break schedules a relaunch of the apps confirmed terminated for
  the finished focus session, without waiting for it;
* ``reset`` always returns to a paused, full-length focus session and
  restores anything still silenced.

All transitions run on one asyncio event loop. At most one ticker task exists
at a time.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Literal, Sequence

from .kill_list import KillList
from .models import (
    AppDescriptor,
    Durations,
    Mode,
    PresentationMode,
    SessionPhase,
    SessionState,
)
from .platforms import PlatformStrategy, get_strategy
from .presenter import NullPresenter, Presenter
from .relauncher import relaunch_apps
from .terminator import ConfirmationPolicy, kill_apps

logger = logging.getLogger(__name__)

Killer = Callable[[Sequence[str]], Awaitable[list[str]]]
Relauncher = Callable[[Sequence[AppDescriptor]], object]


class SessionStateMachine:
    """Drive focus and break sessions for a :class:`KillList`.

    Parameters
    ----------
    kill_list:
        The user's kill list; read at the start of every focus session.
    durations:
        Focus and break lengths in minutes.
    relaunch_enabled:
        Whether silenced apps are relaunched when the break begins or on reset.
    policy:
        Termination confirmation policy passed to the terminator.
    tick_interval:
        Seconds per tick. Each tick removes one second from ``remaining``.
    killer, relauncher:
        Overrides for the terminator and relauncher calls. By default they
        use :func:`pomo.terminator.kill_apps` and
        :func:`pomo.relauncher.relaunch_apps` with ``strategy``.
    """

    def __init__(
        self,
        kill_list: KillList,
        *,
        durations: Durations | None = None,
        relaunch_enabled: bool = True,
        policy: ConfirmationPolicy | str = ConfirmationPolicy.LENIENT,
        strategy: PlatformStrategy | None = None,
        presenter: Presenter | None = None,
        tick_interval: float = 1.0,
        killer: Killer | None = None,
        relauncher: Relauncher | None = None,
    ) -> None:
        self.kill_list = kill_list
        self.durations = durations or Durations()
        self.relaunch_enabled = relaunch_enabled
        self.policy = ConfirmationPolicy.parse(policy)
        self.strategy = strategy or get_strategy()
        self.presenter: Presenter = presenter or NullPresenter()
        self.tick_interval = tick_interval
        self.killer: Killer = killer or self._kill_with_strategy
        self.relauncher: Relauncher = relauncher or self._relaunch_with_strategy
        self.state = SessionState(remaining=self.full_duration(Mode.FOCUS))

        self._ticker: asyncio.Task[None] | None = None
        # bumped by pause/reset so an in-flight start knows it was superseded
        self._epoch = 0
        self._reset_epoch = 0
        # epoch and completion event of the newest terminator join
        self._join_epoch: int | None = None
        self._join_done: asyncio.Event | None = None

    async def _kill_with_strategy(self, ids: Sequence[str]) -> list[str]:
        return await kill_apps(ids, strategy=self.strategy, policy=self.policy)

    def _relaunch_with_strategy(self, apps: Sequence[AppDescriptor]) -> object:
        return relaunch_apps(apps, strategy=self.strategy)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self.state.running

    @property
    def mode(self) -> Mode:
        return self.state.mode

    @property
    def remaining(self) -> int:
        return self.state.remaining

    @property
    def phase(self) -> SessionPhase:
        return self.state.phase

    @property
    def starting(self) -> bool:
        """``True`` while a fresh focus session waits on the terminator.

        A join superseded by pause or reset no longer counts as starting.
        """
        return self._join_epoch is not None and self._join_epoch == self._epoch

    @property
    def killed(self) -> list[AppDescriptor]:
        return list(self.state.killed)

    def full_duration(self, mode: Mode | None = None) -> int:
        return self.durations.seconds(mode or self.state.mode)

    def snapshot(self) -> SessionState:
        return self.state.copy()

    # ------------------------------------------------------------------
    # User transitions
    # ------------------------------------------------------------------

    async def toggle(self) -> None:
        """Start/resume when paused, pause when running."""
        if self.state.running or self.starting:
            self.pause()
        else:
            await self.start()

    async def start(self) -> None:
        """Start a fresh session or resume a paused one.

        A fresh focus session (``remaining`` equal to the full focus length)
        awaits the terminator before ticking begins. Resuming mid-session
        never terminates anything.
        """
        if self.state.running or self.starting:
            return
        mode = self.state.mode
        fresh = self.state.remaining >= self.full_duration(mode)
        if fresh and mode is Mode.FOCUS:
            if not await self._silence_distractions():
                return
        self._begin_running()

    def pause(self) -> None:
        """Stop ticking. In-flight terminate/relaunch calls are left alone."""
        was_active = self.state.running or self.starting
        self._interrupt("pause")
        self._stop_ticker()
        self.state.running = False
        if was_active:
            self._emit_mode()

    def reset(self) -> None:
        """Return to a paused, full-length focus session and restore apps."""
        self._interrupt("reset")
        self._stop_ticker()
        self.state.running = False
        self.state.mode = Mode.FOCUS
        self.state.remaining = self.full_duration(Mode.FOCUS)
        self._release_killed()
        self._emit_mode()
        self.presenter.on_tick(self.snapshot())

    def configure(
        self,
        *,
        durations: Durations | None = None,
        relaunch_enabled: bool | None = None,
        policy: ConfirmationPolicy | str | None = None,
    ) -> None:
        """Apply changed settings; new durations reset the timer."""
        if relaunch_enabled is not None:
            self.relaunch_enabled = relaunch_enabled
        if policy is not None:
            self.policy = ConfirmationPolicy.parse(policy)
        if durations is not None and durations != self.durations:
            self.durations = durations
            self.reset()

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    async def tick(self) -> None:
        """Remove one second; switch modes once the time runs out."""
        if not self.state.running:
            return
        self.state.remaining -= 1
        if self.state.remaining < 0:
            await self._switch()
        else:
            self.presenter.on_tick(self.snapshot())

    async def _switch(self) -> None:
        self._stop_ticker()
        self.state.running = False
        new_mode = self.state.mode.other
        self.state.mode = new_mode
        self.state.remaining = self.full_duration(new_mode)
        self.presenter.set_mode(PresentationMode(new_mode.value))
        self.presenter.notify(*self._session_end_message(new_mode))
        self.presenter.on_tick(self.snapshot())
        if new_mode is Mode.BREAK:
            self._release_killed()
        # sessions continue automatically; start() awaits the terminator for focus
        await self.start()

    def _session_end_message(self, new_mode: Mode) -> tuple[str, str]:
        minutes = self.durations.minutes(new_mode)
        if new_mode is Mode.BREAK:
            return "Focus Session Done!", f"Time for a {minutes}-minute break!"
        return "Break Over!", f"Time for a {minutes}-minute focus session."

    def _begin_running(self) -> None:
        self.state.running = True
        self._emit_mode()
        self._start_ticker()

    def _start_ticker(self) -> None:
        self._stop_ticker()
        loop = asyncio.get_running_loop()
        self._ticker = loop.create_task(self._tick_loop(), name="pomo-ticker")

    def _stop_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is None or ticker.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        # a ticker switching modes stops itself by losing its slot instead
        if ticker is not current:
            ticker.cancel()

    async def _tick_loop(self) -> None:
        me = asyncio.current_task()
        while self._ticker is me:
            await asyncio.sleep(self.tick_interval)
            if self._ticker is not me:
                return
            await self.tick()

    # ------------------------------------------------------------------
    # Terminate / relaunch sequencing
    # ------------------------------------------------------------------

    async def _silence_distractions(self) -> bool:
        """Await the terminator over the kill list.

        Returns ``False`` when a pause or reset arrived while waiting, in
        which case the session must not start ticking. Apps confirmed by a
        join that any reset overtook are restored at once, even if a pause
        followed the reset. A join started while a superseded one is still
        pending waits for it first; the stale restore is issued before
        the new terminate commands.
        """
        epoch = self._epoch
        stale = self._join_done
        done = asyncio.Event()
        self._join_epoch, self._join_done = epoch, done
        try:
            if stale is not None:
                await stale.wait()
                if epoch != self._epoch:
                    return False
            targets = KillList(self.kill_list.entries)
            confirmed = await self.killer(targets.ids())
        finally:
            done.set()
            if self._join_done is done:
                self._join_epoch, self._join_done = None, None
        killed = targets.descriptors_for(confirmed)
        logger.info("Silenced %d apps for this focus session.", len(killed))

        if self._reset_epoch > epoch:
            logger.info("Session reset while silencing apps; restoring them.")
            self._restore(killed)
            return False
        self._remember(killed)
        return epoch == self._epoch

    def _remember(self, apps: Sequence[AppDescriptor]) -> None:
        known = {app.key for app in self.state.killed}
        self.state.killed.extend(app for app in apps if app.key not in known)

    def _release_killed(self) -> None:
        killed, self.state.killed = self.state.killed, []
        self._restore(killed)

    def _restore(self, apps: Sequence[AppDescriptor]) -> None:
        if not apps:
            return
        if not self.relaunch_enabled:
            logger.info("Auto-relaunch disabled by user setting.")
            return
        logger.info(
            "Relaunching previously closed apps: %s",
            ", ".join(app.display for app in apps),
        )
        self.relauncher(list(apps))

    def _interrupt(self, reason: Literal["pause", "reset"]) -> None:
        self._epoch += 1
        if reason == "reset":
            self._reset_epoch = self._epoch

    def _emit_mode(self) -> None:
        self.presenter.set_mode(self.state.phase.presentation)


__all__ = ["Killer", "Relauncher", "SessionStateMachine"]
