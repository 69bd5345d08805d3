import json

import pomo.app as app_module
from pomo.app import AppContext, tick_interval_from_env
from pomo.config import SettingsStore, ConfigPaths
from pomo.models import AppDescriptor, Durations
from pomo.platforms import LinuxStrategy
from pomo.terminator import ConfirmationPolicy

SLACK = AppDescriptor("slack", "Slack", "/usr/bin/slack")


async def confirm_all(ids):
    return list(ids)


def make_context(tmp_path, **kwargs):
    kwargs.setdefault("strategy", LinuxStrategy())
    kwargs.setdefault("tick_interval", 3600.0)
    kwargs.setdefault("killer", confirm_all)
    return AppContext.create(tmp_path, **kwargs)


def test_toggle_app_persists_kill_list(tmp_path):
    ctx = make_context(tmp_path)
    assert ctx.toggle_app(SLACK) is True

    stored = json.loads(ctx.store.settings_file.read_text())
    assert json.loads(stored["appKillList"]) == [SLACK.to_dict()]
    assert make_context(tmp_path).kill_list.entries == [SLACK]

    assert ctx.toggle_app(SLACK) is False
    assert make_context(tmp_path).kill_list.entries == []


def test_settings_flow_into_session(tmp_path):
    store = SettingsStore(paths=ConfigPaths.create(tmp_path))
    store.config.update({"focusTime": 40, "breakTime": 8, "relaunchOptional": False,
                         "killConfirmation": "strict"})
    store.save()

    ctx = make_context(tmp_path)
    assert ctx.session.durations == Durations(40, 8)
    assert ctx.session.remaining == 40 * 60
    assert ctx.session.relaunch_enabled is False
    assert ctx.session.policy is ConfirmationPolicy.STRICT


def test_update_settings_normalises_and_resets(tmp_path):
    ctx = make_context(tmp_path)
    ctx.session.state.remaining = 12
    updated = ctx.update_settings(focus_minutes=0, break_minutes=15, policy="strict")
    assert updated.durations == Durations(25, 15)
    assert ctx.session.remaining == 25 * 60
    assert ctx.session.policy is ConfirmationPolicy.STRICT
    assert make_context(tmp_path).settings.break_minutes == 15


def test_update_settings_keeps_unchanged_values(tmp_path):
    ctx = make_context(tmp_path)
    ctx.update_settings(focus_minutes=30)
    updated = ctx.update_settings(relaunch_enabled=False)
    assert updated.focus_minutes == 30
    assert updated.relaunch_enabled is False
    assert ctx.session.relaunch_enabled is False


def test_running_apps_search(monkeypatch, tmp_path):
    apps = [SLACK, AppDescriptor("firefox", "Firefox", "/usr/bin/firefox")]
    monkeypatch.setattr(app_module, "list_apps", lambda strategy: list(apps))
    ctx = make_context(tmp_path)
    assert ctx.running_apps() == apps
    assert ctx.running_apps("fire") == [apps[1]]


def test_tick_interval_from_env(monkeypatch):
    monkeypatch.delenv("POMO_TICK_INTERVAL", raising=False)
    assert tick_interval_from_env() == 1.0
    monkeypatch.setenv("POMO_TICK_INTERVAL", "0.25")
    assert tick_interval_from_env() == 0.25
    monkeypatch.setenv("POMO_TICK_INTERVAL", "soon")
    assert tick_interval_from_env() == 1.0
    monkeypatch.setenv("POMO_TICK_INTERVAL", "-1")
    assert tick_interval_from_env() == 1.0


async def test_shutdown_restores_silenced_apps(tmp_path):
    relaunched = []
    ctx = make_context(tmp_path, relauncher=relaunched.append)
    ctx.toggle_app(SLACK)
    await ctx.session.start()
    assert ctx.session.killed == [SLACK]
    await ctx.shutdown()
    assert relaunched == [[SLACK]]
    assert not ctx.session.running
