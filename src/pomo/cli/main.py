"""Argument parsing and dispatch for the ``pomo`` command."""
from __future__ import annotations

import argparse
import logging
from typing import Iterable

from ..terminator import ConfirmationPolicy
from ..utils.logging_config import setup_logging
from .commands import apps, run, settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pomo", description="Focus timer that silences distracting apps"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", help="Also write logs to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    apps_parser = sub.add_parser("apps", help="List running apps for the kill list")
    apps_parser.add_argument("--search", "-s", default="", help="Filter by name or path")

    toggle_parser = sub.add_parser("toggle", help="Add or remove an app from the kill list")
    toggle_parser.add_argument("id", help="Process name used to terminate the app")
    toggle_parser.add_argument("detail", help="Path or bundle id used to relaunch the app")
    toggle_parser.add_argument("--display", help="Label shown in lists (defaults to the id)")

    sub.add_parser("list", help="Show the kill list")

    config_parser = sub.add_parser("config", help="Show or change settings")
    config_parser.add_argument("--focus", type=int, metavar="MINUTES", help="Focus length")
    config_parser.add_argument(
        "--break", dest="break_", type=int, metavar="MINUTES", help="Break length"
    )
    config_parser.add_argument(
        "--relaunch",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Relaunch silenced apps when the break starts",
    )
    config_parser.add_argument(
        "--policy",
        choices=[policy.value for policy in ConfirmationPolicy],
        help="How strictly a kill must succeed before the app is relaunched",
    )

    run_parser = sub.add_parser("run", help="Run focus/break sessions until interrupted")
    run_parser.add_argument(
        "--no-notify", action="store_true", help="Do not send desktop notifications"
    )

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    if args.command == "apps":
        return apps.cmd_apps(args.search)
    if args.command == "toggle":
        return apps.cmd_toggle(args.id, args.detail, args.display)
    if args.command == "list":
        return apps.cmd_list()
    if args.command == "config":
        return settings.cmd_config(
            focus=args.focus, break_=args.break_, relaunch=args.relaunch, policy=args.policy
        )
    if args.command == "run":
        return run.cmd_run(notify=not args.no_notify)
    parser.error(f"Unknown command: {args.command}")
    return 2
