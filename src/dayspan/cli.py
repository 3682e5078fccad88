"""CLI entrypoint for dayspan."""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

from dayspan.cli_parser import build_parser
from dayspan.errors import DayspanError
from dayspan.ranges import UtcRange
from dayspan.resolver import LocalRangeResolver
from dayspan.runtime_config import load_runtime_config
from dayspan.settings import Settings
from dayspan.time_utils import epoch_ms, from_epoch_ms, iso_z, parse_iso_z

logger = logging.getLogger(__name__)

_MONTH_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})$")
_EPOCH_MS_RE = re.compile(r"^-?\d+$")


class CLIError(RuntimeError):
    """User-facing CLI error."""


def _settings(args: argparse.Namespace) -> Settings:
    config_arg = str(getattr(args, "config", "")).strip()
    try:
        runtime = load_runtime_config(Path(config_arg) if config_arg else None)
    except RuntimeError as exc:
        raise CLIError(str(exc)) from exc
    settings = Settings.from_runtime(runtime)
    overrides: dict[str, Any] = {}
    zone = str(getattr(args, "zone", "")).strip()
    if zone:
        overrides["default_zone"] = zone
    output_format = str(getattr(args, "output_format", "")).strip()
    if output_format:
        overrides["output_format"] = output_format
    if bool(getattr(args, "verbose", False)):
        overrides["log_level"] = "DEBUG"
    return settings.model_copy(update=overrides)


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )


def _zone(settings: Settings) -> str:
    if not settings.default_zone:
        raise CLIError("--zone is required (or set [resolver] default_zone in runtime config)")
    return settings.default_zone


def _instant_text(value: datetime, output_format: str) -> str:
    if output_format == "epoch-ms":
        return str(epoch_ms(value))
    return iso_z(value)


def _range_payload(window: UtcRange, output_format: str) -> dict[str, Any]:
    if output_format == "epoch-ms":
        start_ms, end_ms = window.epoch_ms()
        return {"start": start_ms, "end": end_ms}
    return window.as_dict()


def _print_range(
    window: UtcRange, settings: Settings, zone: str, extra: dict[str, Any] | None = None
) -> None:
    if settings.output_format == "json":
        payload = {"zone": zone, **(extra or {}), **window.as_dict()}
        payload["duration_s"] = int(window.duration.total_seconds())
        print(json.dumps(payload, sort_keys=True, indent=2))
        return
    payload = _range_payload(window, settings.output_format)
    print(f"{payload['start']}\t{payload['end']}")


def _parse_instant(raw: str) -> datetime:
    value = raw.strip()
    if _EPOCH_MS_RE.match(value):
        try:
            return from_epoch_ms(int(value))
        except OverflowError as exc:
            raise CLIError(f"epoch milliseconds out of range: {raw}") from exc
    parsed = parse_iso_z(value)
    if parsed is None:
        raise CLIError(f"invalid instant: {raw!r}; expected ISO-8601 or epoch milliseconds")
    return parsed


def _cmd_start(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    instant = LocalRangeResolver().start_of_local_day(args.day, zone)
    if settings.output_format == "json":
        payload = {"day": str(args.day).strip(), "zone": zone, "start": iso_z(instant)}
        print(json.dumps(payload, sort_keys=True, indent=2))
    else:
        print(_instant_text(instant, settings.output_format))
    return 0


def _cmd_day(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    window = LocalRangeResolver().day_range(args.day, zone)
    _print_range(window, settings, zone, {"day": str(args.day).strip()})
    return 0


def _cmd_span(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    window = LocalRangeResolver().span_range(args.from_day, args.to_day, zone)
    extra = {"from": str(args.from_day).strip(), "to": str(args.to_day).strip()}
    _print_range(window, settings, zone, extra)
    return 0


def _cmd_days(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    tiles = LocalRangeResolver().day_ranges(args.from_day, args.to_day, zone)
    if settings.output_format == "json":
        rows = [{"day": day.isoformat(), **window.as_dict()} for day, window in tiles]
        print(json.dumps({"zone": zone, "days": rows}, sort_keys=True, indent=2))
        return 0
    for day, window in tiles:
        payload = _range_payload(window, settings.output_format)
        print(f"{day.isoformat()}\t{payload['start']}\t{payload['end']}")
    return 0


def _cmd_month(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    match = _MONTH_RE.match(str(args.month).strip())
    if not match:
        raise CLIError(f"invalid month value: {args.month!r}; expected YYYY-MM")
    year, month = int(match.group("year")), int(match.group("month"))
    window = LocalRangeResolver().month_range(year, month, zone)
    _print_range(window, settings, zone, {"month": f"{year:04d}-{month:02d}"})
    return 0


def _cmd_which(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    instant = _parse_instant(args.instant)
    local_day: date = LocalRangeResolver().local_date_of(instant, zone)
    if settings.output_format == "json":
        payload = {"instant": iso_z(instant), "zone": zone, "day": local_day.isoformat()}
        print(json.dumps(payload, sort_keys=True, indent=2))
    else:
        print(local_day.isoformat())
    return 0


def _cmd_today(args: argparse.Namespace, settings: Settings) -> int:
    zone = _zone(settings)
    now = _parse_instant(args.now) if str(args.now).strip() else None
    resolver = LocalRangeResolver()
    days = int(args.days)
    if days == 1:
        window = resolver.today_range(zone, now=now)
    else:
        window = resolver.trailing_days_range(days, zone, now=now)
    _print_range(window, settings, zone, {"days": days})
    return 0


def _build_parser() -> argparse.ArgumentParser:
    return build_parser(handlers=sys.modules[__name__])


def main(argv: list[str] | None = None) -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 0
    try:
        settings = _settings(args)
        _configure_logging(settings.log_level)
        logger.debug("running %s with zone=%r", args.command, settings.default_zone)
        return int(func(args, settings))
    except (CLIError, DayspanError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
