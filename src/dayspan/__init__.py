"""Resolve local calendar days into half-open UTC ranges."""

from dayspan.errors import DayspanError, InvalidDateError, InvalidRangeError, UnknownZoneError
from dayspan.offsets import (
    FixedOffsetProvider,
    OffsetProvider,
    WallClockResolution,
    ZoneInfoOffsetProvider,
)
from dayspan.query import filter_frame, sql_predicate
from dayspan.ranges import UtcRange, local_date, parse_local_date
from dayspan.resolver import LocalRangeResolver, day_range, span_range, start_of_local_day

__all__ = [
    "DayspanError",
    "FixedOffsetProvider",
    "InvalidDateError",
    "InvalidRangeError",
    "LocalRangeResolver",
    "OffsetProvider",
    "UnknownZoneError",
    "UtcRange",
    "WallClockResolution",
    "ZoneInfoOffsetProvider",
    "day_range",
    "filter_frame",
    "local_date",
    "parse_local_date",
    "span_range",
    "sql_predicate",
    "start_of_local_day",
]
