import asyncio

import pytest

import pomo.inventory as inventory
from pomo.models import ERROR_ID, AppDescriptor
from pomo.platforms import LinuxStrategy, UnsupportedStrategy, WindowsStrategy, base


@pytest.fixture(autouse=True)
def own_name(monkeypatch):
    monkeypatch.setattr(base, "controller_process_name", lambda: "pytest-runner")


def _fake_run(result, calls=None):
    def fake(cmd, **kwargs):
        if calls is not None:
            calls.append(cmd)
        return result

    return fake


def test_list_apps_sorted_and_unique(monkeypatch):
    monkeypatch.setattr(
        inventory, "run_command_ex", _fake_run(("zoom\nFirefox\nslack\nzoom\n", "", 0))
    )
    apps = inventory.list_apps(LinuxStrategy())
    assert [app.display for app in apps] == ["Firefox", "slack", "zoom"]


def test_list_apps_command_failure(monkeypatch):
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run(("", "ps: bad option", 1)))
    apps = inventory.list_apps(LinuxStrategy())
    assert apps == [AppDescriptor.error("Error fetching list: ps: bad option")]


def test_list_apps_stderr_output_is_an_error(monkeypatch):
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run(("firefox\n", "warning", 0)))
    [app] = inventory.list_apps(LinuxStrategy())
    assert app.id == ERROR_ID
    assert "warning" in app.display


def test_list_apps_command_exception(monkeypatch):
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run((None, None, OSError("boom"))))
    [app] = inventory.list_apps(LinuxStrategy())
    assert app.id == ERROR_ID
    assert app.display == "Error fetching list: boom"


def test_list_apps_parse_failure(monkeypatch):
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run(("not csv at all", "", 0)))
    [app] = inventory.list_apps(WindowsStrategy())
    assert app.id == ERROR_ID
    assert app.display.startswith("Error parsing list output:")


def test_list_apps_unsupported_runs_nothing(monkeypatch):
    calls = []
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run(("", "", 0), calls))
    assert inventory.list_apps(UnsupportedStrategy()) == [AppDescriptor.unsupported()]
    assert calls == []


async def test_async_list_apps(monkeypatch):
    monkeypatch.setattr(inventory, "run_command_ex", _fake_run(("slack\n", "", 0)))
    apps = await inventory.async_list_apps(LinuxStrategy())
    assert apps == [AppDescriptor("slack", "slack", "slack")]


def test_filter_apps_matches_display_or_detail():
    apps = [
        AppDescriptor("Slack", "Slack", "C:\\Apps\\slack.exe"),
        AppDescriptor("Code", "Visual Studio Code", "C:\\Apps\\Code.exe"),
    ]
    assert inventory.filter_apps(apps, "STUDIO") == [apps[1]]
    assert inventory.filter_apps(apps, "apps\\slack") == [apps[0]]
    assert inventory.filter_apps(apps, "  ") == apps
