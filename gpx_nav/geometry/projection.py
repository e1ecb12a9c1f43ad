"""Nearest-point projection of a position onto a track polyline."""

from __future__ import annotations

import logging
from typing import Optional, Sequence, Union

import numpy as np

from ..models import Point, ProjectionResult, Route, Track
from .distance import coordinate_arrays, haversine, haversine_array, track_length
from .planar import segment_parameters

_LOG = logging.getLogger(__name__)

PolylineLike = Union[Track, Route, Sequence[Point]]


def polyline_points(track: PolylineLike) -> Sequence[Point]:
    """Return the point sequence of a track, route or plain sequence."""

    if isinstance(track, (Track, Route)):
        return track.points
    return track


def project_on_track(
    position: Point, track: PolylineLike
) -> Optional[ProjectionResult]:
    """Project ``position`` onto the nearest segment of ``track``.

    Each segment is projected in the local planar approximation with the
    parameter clamped to the segment, so positions beyond an endpoint snap to
    that endpoint. The segment with the smallest haversine offset wins; on
    ties the earliest segment is kept.

    Returns ``None`` if the track has fewer than 2 points.
    """

    points = polyline_points(track)
    if len(points) < 2:
        return None

    lats, lons = coordinate_arrays(points)
    a_lats, a_lons = lats[:-1], lons[:-1]
    b_lats, b_lons = lats[1:], lons[1:]
    t, degenerate = segment_parameters(position, a_lats, a_lons, b_lats, b_lons)
    proj_lats = a_lats + t * (b_lats - a_lats)
    proj_lons = a_lons + t * (b_lons - a_lons)
    offsets = haversine_array(position.lat, position.lon, proj_lats, proj_lons)

    # argmin keeps the first minimum, i.e. strict improvement only.
    index = int(np.argmin(offsets))
    a = points[index]
    b = points[index + 1]
    if degenerate[index]:
        projected = a
    else:
        projected = _interpolate(a, b, float(t[index]))

    prior = track_length(points[: index + 1])
    result = ProjectionResult(
        point=projected,
        segment_index=index,
        distance_m=haversine(position, projected),
        distance_along_m=prior + haversine(a, projected),
    )
    _LOG.debug(
        "Projected (%.6f, %.6f) onto segment %d of %d (offset %.1f m)",
        position.lat,
        position.lon,
        index,
        len(points) - 1,
        result.distance_m,
    )
    return result


def _interpolate(a: Point, b: Point, t: float) -> Point:
    """Linear interpolation between ``a`` and ``b``; elevation needs both ends."""

    ele: Optional[float] = None
    if a.ele is not None and b.ele is not None:
        ele = a.ele + t * (b.ele - a.ele)
    return Point(
        lat=a.lat + t * (b.lat - a.lat),
        lon=a.lon + t * (b.lon - a.lon),
        ele=ele,
    )


__all__ = ["PolylineLike", "polyline_points", "project_on_track"]
