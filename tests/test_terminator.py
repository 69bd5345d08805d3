import asyncio

import pytest

from pomo.platforms import LinuxStrategy, UnsupportedStrategy, WindowsStrategy
from pomo.terminator import ConfirmationPolicy, KillOutcome, kill_apps, terminate_app


def make_runner(statuses, calls):
    async def runner(cmd, timeout=None):
        calls.append(cmd)
        status = statuses.get(cmd[-1], 0)
        if isinstance(status, Exception):
            return None, None, status
        return "", "" if status == 0 else "failed", status

    return runner


async def test_empty_input_issues_no_commands():
    calls = []
    assert await kill_apps([], strategy=LinuxStrategy(), runner=make_runner({}, calls)) == []
    assert calls == []


async def test_commands_run_concurrently():
    started = []
    all_started = asyncio.Event()

    async def runner(cmd, timeout=None):
        started.append(cmd[-1])
        if len(started) == 3:
            all_started.set()
        await all_started.wait()
        return "", "", 0

    confirmed = await asyncio.wait_for(
        kill_apps(["a", "b", "c"], strategy=LinuxStrategy(), runner=runner), timeout=1
    )
    assert sorted(started) == ["a", "b", "c"]
    assert confirmed == ["a", "b", "c"]


async def test_returns_after_slowest_in_input_order():
    delays = {"slow": 0.05, "mid": 0.02, "fast": 0.0}
    finished = []

    async def runner(cmd, timeout=None):
        await asyncio.sleep(delays[cmd[-1]])
        finished.append(cmd[-1])
        return "", "", 0

    confirmed = await kill_apps(["slow", "mid", "fast"], strategy=LinuxStrategy(), runner=runner)
    assert finished == ["fast", "mid", "slow"]
    assert confirmed == ["slow", "mid", "fast"]


async def test_lenient_policy_excludes_only_not_found():
    calls = []
    statuses = {"ok": 0, "gone": 1, "broken": OSError("no killall"), "denied": 2}
    confirmed = await kill_apps(
        ["ok", "gone", "broken", "denied"],
        strategy=LinuxStrategy(),
        runner=make_runner(statuses, calls),
    )
    assert confirmed == ["ok", "broken", "denied"]
    assert len(calls) == 4


async def test_strict_policy_requires_success():
    statuses = {"ok": 0, "gone": 1, "denied": 2}
    confirmed = await kill_apps(
        ["ok", "gone", "denied"],
        strategy=LinuxStrategy(),
        policy=ConfirmationPolicy.STRICT,
        runner=make_runner(statuses, []),
    )
    assert confirmed == ["ok"]


async def test_windows_not_found_code():
    calls = []
    confirmed = await kill_apps(
        ["Slack", "Code"],
        strategy=WindowsStrategy(),
        runner=make_runner({"/F": 128}, calls),
    )
    assert confirmed == []
    assert calls[0] == ["taskkill", "/IM", "Slack.exe", "/F"]


async def test_unsupported_platform_confirms_nothing():
    calls = []
    confirmed = await kill_apps(
        ["Slack"], strategy=UnsupportedStrategy(), runner=make_runner({}, calls)
    )
    assert confirmed == []
    assert calls == []


async def test_raising_runner_does_not_abandon_other_commands():
    finished = []

    async def runner(cmd, timeout=None):
        if cmd[-1] == "b":
            raise ValueError("bad command")
        await asyncio.sleep(0.01)
        finished.append(cmd[-1])
        return "", "", 0

    strict = await kill_apps(
        ["a", "b", "c"], strategy=LinuxStrategy(), policy=ConfirmationPolicy.STRICT, runner=runner
    )
    assert strict == ["a", "c"]
    assert sorted(finished) == ["a", "c"]

    lenient = await kill_apps(["a", "b", "c"], strategy=LinuxStrategy(), runner=runner)
    assert lenient == ["a", "b", "c"]


async def test_terminate_app_outcome():
    outcome = await terminate_app(" slack ", LinuxStrategy(), runner=make_runner({"slack": 1}, []))
    assert outcome.app_id == "slack"
    assert outcome.not_found and not outcome.succeeded
    assert outcome.failure is not None and outcome.failure.returncode == 1


@pytest.mark.parametrize(
    "value, expected",
    [
        ("strict", ConfirmationPolicy.STRICT),
        (" STRICT ", ConfirmationPolicy.STRICT),
        (None, ConfirmationPolicy.LENIENT),
        ("bogus", ConfirmationPolicy.LENIENT),
        (ConfirmationPolicy.STRICT, ConfirmationPolicy.STRICT),
    ],
)
def test_policy_parse(value, expected):
    assert ConfirmationPolicy.parse(value) is expected


def test_policies_never_confirm_unsupported():
    outcome = KillOutcome("x", supported=False)
    assert not ConfirmationPolicy.LENIENT.confirms(outcome)
    assert not ConfirmationPolicy.STRICT.confirms(outcome)
