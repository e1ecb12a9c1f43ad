"""Great-circle distance and bearing primitives.

All inputs are WGS84 degrees. Scalar helpers use :mod:`math`; the array
helpers apply the same formulas to numpy arrays for the polyline engines.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..models import Point

MetricArray = NDArray[np.float64]

# WGS84 mean Earth radius in metres.
EARTH_RADIUS_M = 6_371_008.8


def haversine(a: Point, b: Point) -> float:
    """Return the great-circle distance between two points in metres."""

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)
    h = math.sin(dlat / 2.0) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(
        dlon / 2.0
    ) ** 2
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(min(h, 1.0)))


def haversine_array(
    lats1: ArrayLike, lons1: ArrayLike, lats2: ArrayLike, lons2: ArrayLike
) -> MetricArray:
    """Vectorised :func:`haversine` over broadcastable coordinate arrays."""

    lat1 = np.radians(np.asarray(lats1, dtype=float))
    lat2 = np.radians(np.asarray(lats2, dtype=float))
    dlat = lat2 - lat1
    dlon = np.radians(np.asarray(lons2, dtype=float) - np.asarray(lons1, dtype=float))
    h = np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    # Rounding can push h a hair above 1 for antipodal pairs.
    h = np.clip(h, 0.0, 1.0)
    return 2.0 * EARTH_RADIUS_M * np.arcsin(np.sqrt(h))


def track_length(points: Sequence[Point]) -> float:
    """Total path length of ``points`` in metres (0 for fewer than 2 points)."""

    total = 0.0
    for a, b in zip(points, points[1:]):
        total += haversine(a, b)
    return total


def bearing(a: Point, b: Point) -> float:
    """Initial bearing from ``a`` to ``b`` in degrees within ``[0, 360)``.

    Coincident points have no defined direction; callers must avoid them.
    """

    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlon = math.radians(b.lon - a.lon)
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        dlon
    )
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def coordinate_arrays(points: Sequence[Point]) -> tuple[MetricArray, MetricArray]:
    """Split points into ``(lats, lons)`` float arrays."""

    lats = np.fromiter((p.lat for p in points), dtype=float, count=len(points))
    lons = np.fromiter((p.lon for p in points), dtype=float, count=len(points))
    return lats, lons


__all__ = [
    "EARTH_RADIUS_M",
    "bearing",
    "coordinate_arrays",
    "haversine",
    "haversine_array",
    "track_length",
]
