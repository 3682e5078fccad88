"""Value types for local dates and half-open UTC ranges."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Any

from dayspan.errors import InvalidDateError, InvalidRangeError
from dayspan.time_utils import as_utc, epoch_ms, iso_z

_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_local_date(value: Any) -> date:
    """Coerce a `date` or `YYYY-MM-DD` string into a calendar date.

    Datetimes are rejected: a local day carries no time-of-day and no zone.
    """
    if isinstance(value, datetime):
        raise InvalidDateError(f"expected a calendar date without time-of-day: {value!r}")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not _ISO_DAY_RE.match(raw):
            raise InvalidDateError(f"invalid day value: {value!r}; expected YYYY-MM-DD")
        try:
            return date.fromisoformat(raw)
        except ValueError as exc:
            raise InvalidDateError(f"invalid day value: {value!r}") from exc
    raise InvalidDateError(f"unsupported day value: {value!r}")


def local_date(year: int, month: int, day: int) -> date:
    """Build a validated Gregorian date."""
    try:
        return date(int(year), int(month), int(day))
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(f"invalid calendar date: {year}-{month}-{day}") from exc


def next_day(value: date) -> date:
    try:
        return value + timedelta(days=1)
    except OverflowError as exc:
        raise InvalidDateError(f"no day follows {value.isoformat()}") from exc


@dataclass(frozen=True)
class UtcRange:
    """Half-open UTC interval `[start, end)`.

    Use as `ts >= start AND ts < end`; never close the interval at 23:59:59.999.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        for name in ("start", "end"):
            value = getattr(self, name)
            if not isinstance(value, datetime) or value.tzinfo is None:
                raise ValueError(f"{name} must be a timezone-aware datetime: {value!r}")
            object.__setattr__(self, name, value.astimezone(UTC))
        if not self.start < self.end:
            raise InvalidRangeError(
                f"range start must precede end: {iso_z(self.start)} >= {iso_z(self.end)}"
            )

    def __contains__(self, instant: object) -> bool:
        if not isinstance(instant, datetime):
            return False
        value = as_utc(instant)
        return self.start <= value < self.end

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def iso_z(self) -> tuple[str, str]:
        return iso_z(self.start), iso_z(self.end)

    def epoch_ms(self) -> tuple[int, int]:
        return epoch_ms(self.start), epoch_ms(self.end)

    def as_dict(self) -> dict[str, str]:
        start, end = self.iso_z()
        return {"start": start, "end": end}
