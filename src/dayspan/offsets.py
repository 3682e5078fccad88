"""Offset providers: zone + wall-clock time -> UTC offset(s) in effect."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Literal, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dayspan.errors import UnknownZoneError

WallClockStatus = Literal["unique", "gap", "ambiguous"]

_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True)
class WallClockResolution:
    """How one naive local wall-clock time maps onto the UTC timeline.

    - `unique`: one offset.
    - `ambiguous`: the wall time occurs twice; offsets are in occurrence order.
    - `gap`: the wall time never occurs; offsets are (before, after) the
      transition and `transition` is the UTC instant where the gap begins.
    """

    status: WallClockStatus
    offsets: tuple[timedelta, ...]
    transition: datetime | None = None

    def __post_init__(self) -> None:
        expected = 1 if self.status == "unique" else 2
        if len(self.offsets) != expected:
            raise ValueError(f"{self.status} resolution needs {expected} offset(s)")
        if self.status == "gap" and self.transition is None:
            raise ValueError("gap resolution needs a transition instant")


class OffsetProvider(Protocol):
    def resolve(self, zone: str, local: datetime) -> WallClockResolution:
        """Resolve a naive wall-clock time in `zone`."""
        ...

    def utc_offset(self, zone: str, instant: datetime) -> timedelta:
        """Return the offset in effect in `zone` at an aware UTC instant."""
        ...


def load_zone(zone: str) -> ZoneInfo:
    if not isinstance(zone, str) or not zone.strip():
        raise UnknownZoneError(f"zone identifier must be a non-empty string: {zone!r}")
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise UnknownZoneError(f"unknown time zone: {zone}") from exc


class ZoneInfoOffsetProvider:
    """Offset provider backed by the IANA database via `zoneinfo`.

    `ZoneInfo` instances are cached by the standard library, so repeated
    lookups are in-memory and safe to share across threads.
    """

    def resolve(self, zone: str, local: datetime) -> WallClockResolution:
        if local.tzinfo is not None:
            raise ValueError(f"expected a naive wall-clock datetime: {local!r}")
        tz = load_zone(zone)
        early = local.replace(tzinfo=tz, fold=0)
        late = local.replace(tzinfo=tz, fold=1)
        early_offset = early.utcoffset()
        late_offset = late.utcoffset()
        if early_offset is None or late_offset is None:
            raise UnknownZoneError(f"zone has no UTC offset: {zone}")
        if early_offset == late_offset:
            return WallClockResolution(status="unique", offsets=(early_offset,))

        # A wall time that exists survives a round trip through UTC.
        round_trip = early.astimezone(UTC).astimezone(tz).replace(tzinfo=None)
        if round_trip == local:
            return WallClockResolution(status="ambiguous", offsets=(early_offset, late_offset))

        return WallClockResolution(
            status="gap",
            offsets=(early_offset, late_offset),
            transition=_find_transition(
                tz,
                after_gap=(local - early_offset).replace(tzinfo=UTC),
                before_gap=(local - late_offset).replace(tzinfo=UTC),
            ),
        )

    def utc_offset(self, zone: str, instant: datetime) -> timedelta:
        tz = load_zone(zone)
        offset = instant.astimezone(tz).utcoffset()
        if offset is None:
            raise UnknownZoneError(f"zone has no UTC offset: {zone}")
        return offset


def _find_transition(tz: ZoneInfo, *, before_gap: datetime, after_gap: datetime) -> datetime:
    """Bisect to the first UTC second carrying the post-transition offset."""
    before_offset = before_gap.astimezone(tz).utcoffset()
    lo = 0
    hi = int((after_gap - before_gap) / _ONE_SECOND)
    while hi - lo > 1:
        mid = (lo + hi) // 2
        if (before_gap + mid * _ONE_SECOND).astimezone(tz).utcoffset() == before_offset:
            lo = mid
        else:
            hi = mid
    return before_gap + hi * _ONE_SECOND


class FixedOffsetProvider:
    """Offset provider for zones pinned to a constant offset (no DST)."""

    def __init__(self, offsets: dict[str, timedelta]) -> None:
        self._offsets = dict(offsets)

    def _offset(self, zone: str) -> timedelta:
        try:
            return self._offsets[zone]
        except KeyError as exc:
            raise UnknownZoneError(f"unknown time zone: {zone}") from exc

    def resolve(self, zone: str, local: datetime) -> WallClockResolution:
        return WallClockResolution(status="unique", offsets=(self._offset(zone),))

    def utc_offset(self, zone: str, instant: datetime) -> timedelta:
        return self._offset(zone)
