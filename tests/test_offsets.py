from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from dayspan.errors import UnknownZoneError
from dayspan.offsets import FixedOffsetProvider, WallClockResolution, ZoneInfoOffsetProvider


def test_zoneinfo_provider_reports_unique_offset() -> None:
    resolution = ZoneInfoOffsetProvider().resolve("Asia/Kolkata", datetime(2025, 7, 19))

    assert resolution.status == "unique"
    assert resolution.offsets == (timedelta(hours=5, minutes=30),)
    assert resolution.transition is None


def test_zoneinfo_provider_locates_transition_inside_gap() -> None:
    # 02:30 never happens in Chicago on 2025-03-09; clocks jump at 08:00Z.
    resolution = ZoneInfoOffsetProvider().resolve("America/Chicago", datetime(2025, 3, 9, 2, 30))

    assert resolution.status == "gap"
    assert resolution.offsets == (timedelta(hours=-6), timedelta(hours=-5))
    assert resolution.transition == datetime(2025, 3, 9, 8, 0, tzinfo=UTC)


def test_zoneinfo_provider_reports_fold_in_occurrence_order() -> None:
    resolution = ZoneInfoOffsetProvider().resolve("America/Chicago", datetime(2025, 11, 2, 1, 30))

    assert resolution.status == "ambiguous"
    assert resolution.offsets == (timedelta(hours=-5), timedelta(hours=-6))


def test_zoneinfo_provider_rejects_aware_wall_clock() -> None:
    with pytest.raises(ValueError, match="naive"):
        ZoneInfoOffsetProvider().resolve("UTC", datetime(2025, 1, 1, tzinfo=UTC))


def test_zoneinfo_provider_utc_offset_at_instant() -> None:
    provider = ZoneInfoOffsetProvider()

    assert provider.utc_offset("America/Chicago", datetime(2025, 3, 9, 7, 59, 59, tzinfo=UTC)) == (
        timedelta(hours=-6)
    )
    assert provider.utc_offset("America/Chicago", datetime(2025, 3, 9, 8, 0, tzinfo=UTC)) == (
        timedelta(hours=-5)
    )


def test_zoneinfo_provider_unknown_zone() -> None:
    with pytest.raises(UnknownZoneError, match="unknown time zone"):
        ZoneInfoOffsetProvider().resolve("Nowhere/Special", datetime(2025, 1, 1))
    with pytest.raises(UnknownZoneError):
        ZoneInfoOffsetProvider().utc_offset("Nowhere/Special", datetime(2025, 1, 1, tzinfo=UTC))


def test_fixed_offset_provider_unknown_zone() -> None:
    provider = FixedOffsetProvider({"Office/HQ": timedelta(hours=2)})

    assert provider.resolve("Office/HQ", datetime(2025, 1, 1)).offsets == (timedelta(hours=2),)
    with pytest.raises(UnknownZoneError):
        provider.utc_offset("Office/Branch", datetime(2025, 1, 1, tzinfo=UTC))


def test_wall_clock_resolution_validates_shape() -> None:
    with pytest.raises(ValueError, match="needs a transition"):
        WallClockResolution(status="gap", offsets=(timedelta(0), timedelta(hours=1)))
    with pytest.raises(ValueError, match="2 offset"):
        WallClockResolution(status="ambiguous", offsets=(timedelta(0),))
