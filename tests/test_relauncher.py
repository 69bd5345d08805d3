import asyncio

import pomo.relauncher as relauncher
from pomo.models import AppDescriptor
from pomo.platforms import LinuxStrategy, MacOSStrategy, UnsupportedStrategy

SLACK = AppDescriptor("Slack", "Slack", "com.tinyspeck.slackmacgap")
MAIL = AppDescriptor("Mail", "Mail", "com.apple.mail")


def test_relaunch_nothing_is_a_no_op():
    assert relauncher.relaunch_apps([], strategy=MacOSStrategy()) == []


async def test_relaunch_does_not_wait(monkeypatch):
    calls = []

    async def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return "", "", 0

    monkeypatch.setattr(relauncher, "run_command_async_ex", fake_run)
    tasks = relauncher.relaunch_apps([SLACK, MAIL], strategy=MacOSStrategy())
    # scheduled but not yet run when the call returns
    assert calls == []
    assert await asyncio.gather(*tasks) == [True, True]
    assert calls == [["open", "-a", "Slack"], ["open", "-a", "Mail"]]


async def test_relaunch_failures_are_logged_not_raised(monkeypatch, caplog):
    async def fake_run(cmd, **kwargs):
        if cmd[-1] == "Slack":
            return "", "Unable to find application named 'Slack'", 1
        return None, None, OSError("open missing")

    monkeypatch.setattr(relauncher, "run_command_async_ex", fake_run)
    tasks = relauncher.relaunch_apps([SLACK, MAIL], strategy=MacOSStrategy())
    assert await asyncio.gather(*tasks) == [False, False]
    assert "Unable to find application" in caplog.text
    assert "open missing" in caplog.text


async def test_detached_relaunch_uses_background_spawn(monkeypatch):
    spawned = []

    def fake_background(cmd, **kwargs):
        spawned.append((cmd, kwargs))
        return True, None

    monkeypatch.setattr(relauncher, "run_command_background", fake_background)
    app = AppDescriptor("firefox", "firefox", "firefox")
    assert await relauncher.relaunch_app(app, LinuxStrategy()) is True
    assert spawned == [(["firefox"], {"start_new_session": True})]


async def test_detached_relaunch_failure(monkeypatch):
    monkeypatch.setattr(
        relauncher, "run_command_background", lambda cmd, **kw: (False, FileNotFoundError(cmd[0]))
    )
    app = AppDescriptor("firefox", "firefox", "firefox")
    assert await relauncher.relaunch_app(app, LinuxStrategy()) is False


async def test_relaunch_without_target_or_support():
    assert await relauncher.relaunch_app(AppDescriptor("x", "x", ""), LinuxStrategy()) is False
    assert await relauncher.relaunch_app(SLACK, UnsupportedStrategy()) is False


async def test_wait_pending_drains_scheduled_relaunches(monkeypatch):
    done = []

    async def fake_run(cmd, **kwargs):
        await asyncio.sleep(0.01)
        done.append(cmd[-1])
        return "", "", 0

    monkeypatch.setattr(relauncher, "run_command_async_ex", fake_run)
    relauncher.relaunch_apps([SLACK], strategy=MacOSStrategy())
    await relauncher.wait_pending(timeout=1)
    assert done == ["Slack"]
