"""Error types raised by local-day range resolution."""

from __future__ import annotations


class DayspanError(ValueError):
    """Base error for day-range resolution."""


class InvalidDateError(DayspanError):
    """Raised when a local date is malformed or has no representable boundary."""


class UnknownZoneError(DayspanError):
    """Raised when a zone identifier cannot be resolved by the offset provider."""


class InvalidRangeError(DayspanError):
    """Raised when a range would start after it ends."""
