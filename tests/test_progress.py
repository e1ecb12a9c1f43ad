"""Tests for stateless track progress helpers."""

from __future__ import annotations

import pytest

from gpx_nav.geometry.distance import haversine
from gpx_nav.models import OffTrackLevel, Point, Track
from gpx_nav.navigation.progress import (
    find_nearest_waypoint,
    off_track_level,
    track_progress,
)

TRACK = Track(name="East", points=[Point(48.0, 16.0), Point(48.0, 17.0)])


@pytest.mark.parametrize(
    "distance, expected",
    [
        (0.0, OffTrackLevel.ON_TRACK),
        (100.0, OffTrackLevel.ON_TRACK),
        (150.0, OffTrackLevel.WARNING),
        (500.0, OffTrackLevel.WARNING),
        (600.0, OffTrackLevel.CRITICAL),
    ],
)
def test_off_track_level(distance: float, expected: OffTrackLevel) -> None:
    assert off_track_level(distance) == expected


def test_off_track_level_custom_thresholds() -> None:
    assert off_track_level(30.0, warn_m=20.0, critical_m=40.0) == OffTrackLevel.WARNING
    assert off_track_level(45.0, warn_m=20.0, critical_m=40.0) == OffTrackLevel.CRITICAL


def test_progress_halfway_along_track() -> None:
    progress = track_progress(Point(48.0, 16.5), TRACK)

    assert progress is not None
    total = haversine(*TRACK.points)
    assert progress.total_length_m == pytest.approx(total)
    assert progress.remaining_m == pytest.approx(total / 2, rel=1e-3)
    assert progress.off_track == OffTrackLevel.ON_TRACK
    assert not progress.arrived


def test_progress_at_destination_reports_arrival() -> None:
    progress = track_progress(Point(48.0, 17.0), TRACK)
    assert progress is not None
    assert progress.remaining_m == pytest.approx(0.0, abs=1e-6)
    assert progress.arrived


def test_progress_beyond_destination_never_goes_negative() -> None:
    progress = track_progress(Point(48.0, 17.5), TRACK)
    assert progress is not None
    assert progress.remaining_m >= 0.0
    assert progress.off_track == OffTrackLevel.CRITICAL


def test_progress_far_from_track_is_critical() -> None:
    progress = track_progress(Point(49.0, 16.5), TRACK)
    assert progress is not None
    assert progress.projection.distance_m > 100_000.0
    assert progress.off_track == OffTrackLevel.CRITICAL


def test_progress_requires_two_points() -> None:
    assert track_progress(Point(48.0, 16.0), Track(points=[Point(48.0, 16.0)])) is None


def test_find_nearest_waypoint_within_radius() -> None:
    points = [Point(48.0, 16.0), Point(48.0, 16.001), Point(48.0, 16.002)]

    assert find_nearest_waypoint(points, Point(48.0, 16.0011)) == 1
    assert find_nearest_waypoint(points, Point(48.0001, 16.0019), radius_m=30.0) == 2


def test_find_nearest_waypoint_outside_radius() -> None:
    points = [Point(48.0, 16.0), Point(48.0, 16.001)]
    assert find_nearest_waypoint(points, Point(48.01, 16.0)) is None
    assert find_nearest_waypoint([], Point(48.0, 16.0)) is None


def test_find_nearest_waypoint_prefers_first_duplicate() -> None:
    points = [Point(48.0, 16.0), Point(48.0, 16.0)]
    assert find_nearest_waypoint(points, Point(48.0, 16.0001)) == 0
