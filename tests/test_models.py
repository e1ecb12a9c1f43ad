"""Tests for the frozen data model."""

from dataclasses import FrozenInstanceError, fields

import pytest

from gpx_nav.models import Point, Route, Track, Waypoint


def test_waypoint_fields_are_name_point_icon():
    assert [item.name for item in fields(Waypoint)] == ["name", "point", "icon"]


def test_waypoint_is_keyword_only():
    with pytest.raises(TypeError):
        Waypoint("Cafe", Point(48.0, 16.0))  # type: ignore[misc]

    waypoint = Waypoint(point=Point(48.0, 16.0))
    assert waypoint.name is None
    assert waypoint.icon is None


def test_sequences_are_frozen_tuples():
    points = [Point(48.0, 16.0), Point(48.1, 16.1)]
    track = Track(name="T", points=points)
    points.append(Point(0.0, 0.0))

    assert track.points == (Point(48.0, 16.0), Point(48.1, 16.1))
    assert isinstance(Route(points=points).points, tuple)
    with pytest.raises(FrozenInstanceError):
        track.name = "other"  # type: ignore[misc]
