"""Stateless progress checks for a position following a track or route."""

from __future__ import annotations

from typing import Optional, Sequence

from ..config import (
    ARRIVAL_RADIUS_M,
    OFF_TRACK_CRITICAL_M,
    OFF_TRACK_WARN_M,
    WAYPOINT_SNAP_RADIUS_M,
)
from ..geometry.distance import haversine, track_length
from ..geometry.projection import PolylineLike, polyline_points, project_on_track
from ..models import OffTrackLevel, Point, TrackProgress


def off_track_level(
    distance_m: float,
    *,
    warn_m: float = OFF_TRACK_WARN_M,
    critical_m: float = OFF_TRACK_CRITICAL_M,
) -> OffTrackLevel:
    """Classify an offset from the track into on-track/warning/critical."""

    if distance_m > critical_m:
        return OffTrackLevel.CRITICAL
    if distance_m > warn_m:
        return OffTrackLevel.WARNING
    return OffTrackLevel.ON_TRACK


def track_progress(
    position: Point,
    track: PolylineLike,
    *,
    arrival_radius_m: float = ARRIVAL_RADIUS_M,
) -> Optional[TrackProgress]:
    """Project ``position`` and report remaining distance and detour level.

    Returns ``None`` when the track has fewer than 2 points.
    """

    points = polyline_points(track)
    projection = project_on_track(position, points)
    if projection is None:
        return None
    total = track_length(points)
    remaining = max(total - projection.distance_along_m, 0.0)
    return TrackProgress(
        projection=projection,
        total_length_m=total,
        remaining_m=remaining,
        off_track=off_track_level(projection.distance_m),
        arrived=remaining < arrival_radius_m,
    )


def find_nearest_waypoint(
    points: Sequence[Point],
    position: Point,
    radius_m: float = WAYPOINT_SNAP_RADIUS_M,
) -> Optional[int]:
    """Index of the point closest to ``position`` within ``radius_m``.

    The first point wins ties; ``None`` when nothing lies inside the radius.
    """

    best_index: Optional[int] = None
    best_distance = radius_m
    for index, point in enumerate(points):
        distance = haversine(position, point)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


__all__ = ["find_nearest_waypoint", "off_track_level", "track_progress"]
