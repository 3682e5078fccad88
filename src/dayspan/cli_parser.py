"""Parser construction for dayspan CLI."""

from __future__ import annotations

import argparse
from typing import Any

from dayspan.runtime_config import OUTPUT_FORMATS


def _common_parent(*, suppress_defaults: bool) -> argparse.ArgumentParser:
    # Subcommands suppress defaults so flags given before the subcommand survive.
    default: Any = argparse.SUPPRESS if suppress_defaults else ""
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--zone",
        default=default,
        help="IANA zone identifier, e.g. Asia/Kolkata (default: [resolver] default_zone).",
    )
    parent.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default=default,
        help="Output format (default: [output] format from runtime config).",
    )
    return parent


def build_parser(*, handlers: Any) -> argparse.ArgumentParser:
    _cmd_start = handlers._cmd_start
    _cmd_day = handlers._cmd_day
    _cmd_span = handlers._cmd_span
    _cmd_days = handlers._cmd_days
    _cmd_month = handlers._cmd_month
    _cmd_which = handlers._cmd_which
    _cmd_today = handlers._cmd_today
    parser = argparse.ArgumentParser(
        prog="dayspan",
        parents=[_common_parent(suppress_defaults=False)],
        description="Resolve local calendar days into half-open UTC ranges.",
    )
    parser.add_argument(
        "--config",
        default="",
        help="Path to runtime config TOML (default: config/runtime.toml).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command")
    common = _common_parent(suppress_defaults=True)

    start = subparsers.add_parser(
        "start", parents=[common], help="UTC instant at which a local day begins"
    )
    start.set_defaults(func=_cmd_start)
    start.add_argument("day", help="Local day, YYYY-MM-DD.")

    day = subparsers.add_parser("day", parents=[common], help="UTC range covering one local day")
    day.set_defaults(func=_cmd_day)
    day.add_argument("day", help="Local day, YYYY-MM-DD.")

    span = subparsers.add_parser(
        "span", parents=[common], help="UTC range covering local days FROM..TO inclusive"
    )
    span.set_defaults(func=_cmd_span)
    span.add_argument("from_day", metavar="FROM", help="First local day, YYYY-MM-DD.")
    span.add_argument("to_day", metavar="TO", help="Last local day (inclusive), YYYY-MM-DD.")

    days = subparsers.add_parser(
        "days", parents=[common], help="One UTC range per local day in FROM..TO"
    )
    days.set_defaults(func=_cmd_days)
    days.add_argument("from_day", metavar="FROM", help="First local day, YYYY-MM-DD.")
    days.add_argument("to_day", metavar="TO", help="Last local day (inclusive), YYYY-MM-DD.")

    month = subparsers.add_parser(
        "month", parents=[common], help="UTC range covering one local calendar month"
    )
    month.set_defaults(func=_cmd_month)
    month.add_argument("month", help="Calendar month, YYYY-MM.")

    which = subparsers.add_parser(
        "which", parents=[common], help="Local day a UTC instant falls on"
    )
    which.set_defaults(func=_cmd_which)
    which.add_argument("instant", help="ISO-8601 instant (naive = UTC) or epoch milliseconds.")

    today = subparsers.add_parser(
        "today", parents=[common], help="UTC range covering today (or the last N days)"
    )
    today.set_defaults(func=_cmd_today)
    today.add_argument("--days", type=int, default=1, help="Trailing local days, today included.")
    today.add_argument("--now", default="", help="Reference UTC instant (default: current time).")

    return parser
