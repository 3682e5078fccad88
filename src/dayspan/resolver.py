"""Local calendar day -> half-open UTC range resolution."""

from __future__ import annotations

import logging
from datetime import UTC, date, datetime, time, timedelta

from dayspan.errors import InvalidDateError, InvalidRangeError
from dayspan.offsets import OffsetProvider, ZoneInfoOffsetProvider
from dayspan.ranges import UtcRange, local_date, next_day, parse_local_date
from dayspan.time_utils import as_utc, iso_z, utc_now

logger = logging.getLogger(__name__)


class LocalRangeResolver:
    """Convert local days in an explicit zone into UTC instants and ranges.

    Midnight policy:
    - spring-forward gap through 00:00: the day starts at the first valid
      instant after the gap (the UTC transition instant);
    - fall-back fold through 00:00: the day starts at the earlier occurrence,
      the first instant whose local date reads the requested day.
    """

    def __init__(self, provider: OffsetProvider | None = None) -> None:
        self._provider = provider if provider is not None else ZoneInfoOffsetProvider()

    def start_of_local_day(self, day: date | str, zone: str) -> datetime:
        local_day = parse_local_date(day)
        midnight = datetime.combine(local_day, time.min)
        try:
            resolution = self._provider.resolve(zone, midnight)
            if resolution.status == "gap" and resolution.transition is not None:
                logger.debug(
                    "midnight skipped in %s on %s; using transition %s",
                    zone,
                    local_day.isoformat(),
                    iso_z(resolution.transition),
                )
                return as_utc(resolution.transition)
            candidates = [midnight - offset for offset in resolution.offsets]
            if resolution.status == "ambiguous":
                logger.debug(
                    "midnight repeats in %s on %s; using earlier occurrence",
                    zone,
                    local_day.isoformat(),
                )
            return min(candidates).replace(tzinfo=UTC)
        except OverflowError as exc:
            raise InvalidDateError(
                f"start of {local_day.isoformat()} in {zone} is outside the supported range"
            ) from exc

    def day_range(self, day: date | str, zone: str) -> UtcRange:
        local_day = parse_local_date(day)
        start = self.start_of_local_day(local_day, zone)
        end = self.start_of_local_day(next_day(local_day), zone)
        if not start < end:
            raise InvalidDateError(f"local day {local_day.isoformat()} does not occur in {zone}")
        return UtcRange(start=start, end=end)

    def span_range(self, from_day: date | str, to_day: date | str, zone: str) -> UtcRange:
        """Return the range covering every local day in `[from_day, to_day]`."""
        start_day = parse_local_date(from_day)
        end_day = parse_local_date(to_day)
        if end_day < start_day:
            raise InvalidRangeError(
                f"range end {end_day.isoformat()} is before start {start_day.isoformat()}"
            )
        start = self.start_of_local_day(start_day, zone)
        end = self.start_of_local_day(next_day(end_day), zone)
        if not start < end:
            raise InvalidDateError(
                f"no local day in {start_day.isoformat()}..{end_day.isoformat()} occurs in {zone}"
            )
        return UtcRange(start=start, end=end)

    def day_ranges(
        self, from_day: date | str, to_day: date | str, zone: str
    ) -> list[tuple[date, UtcRange]]:
        """Return one tile per local day; days a zone skipped entirely are omitted."""
        start_day = parse_local_date(from_day)
        end_day = parse_local_date(to_day)
        if end_day < start_day:
            raise InvalidRangeError(
                f"range end {end_day.isoformat()} is before start {start_day.isoformat()}"
            )
        tiles: list[tuple[date, UtcRange]] = []
        current = start_day
        boundary = self.start_of_local_day(current, zone)
        while current <= end_day:
            following = next_day(current)
            next_boundary = self.start_of_local_day(following, zone)
            if boundary < next_boundary:
                tiles.append((current, UtcRange(start=boundary, end=next_boundary)))
            else:
                logger.debug("skipping %s: day does not occur in %s", current.isoformat(), zone)
            current = following
            boundary = next_boundary
        return tiles

    def month_range(self, year: int, month: int, zone: str) -> UtcRange:
        first = local_date(year, month, 1)
        last = local_date(year + 1, 1, 1) if month == 12 else local_date(year, month + 1, 1)
        return self.span_range(first, last - timedelta(days=1), zone)

    def local_date_of(self, instant: datetime, zone: str) -> date:
        """Return the local calendar day `instant` falls on; naive input is UTC."""
        utc_instant = as_utc(instant)
        try:
            offset = self._provider.utc_offset(zone, utc_instant)
            return (utc_instant.replace(tzinfo=None) + offset).date()
        except OverflowError as exc:
            raise InvalidDateError(f"{iso_z(utc_instant)} is outside the supported range") from exc

    def today_range(self, zone: str, now: datetime | None = None) -> UtcRange:
        today = self.local_date_of(now if now is not None else utc_now(), zone)
        return self.day_range(today, zone)

    def trailing_days_range(self, days: int, zone: str, now: datetime | None = None) -> UtcRange:
        """Return the last `days` local days, today included."""
        if isinstance(days, bool) or not isinstance(days, int) or days < 1:
            raise InvalidRangeError(f"days must be a whole number >= 1: {days!r}")
        today = self.local_date_of(now if now is not None else utc_now(), zone)
        try:
            first = today - timedelta(days=days - 1)
        except OverflowError as exc:
            raise InvalidRangeError(
                f"{days} days before {today.isoformat()} is out of range"
            ) from exc
        return self.span_range(first, today, zone)


_DEFAULT_RESOLVER = LocalRangeResolver()


def start_of_local_day(day: date | str, zone: str) -> datetime:
    return _DEFAULT_RESOLVER.start_of_local_day(day, zone)


def day_range(day: date | str, zone: str) -> UtcRange:
    return _DEFAULT_RESOLVER.day_range(day, zone)


def span_range(from_day: date | str, to_day: date | str, zone: str) -> UtcRange:
    return _DEFAULT_RESOLVER.span_range(from_day, to_day, zone)
