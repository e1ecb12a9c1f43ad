"""Local planar approximation shared by simplification and projection.

Latitude/longitude offsets are converted to metres with a fixed
111,320 m/degree on both axes, longitude additionally scaled by the cosine of
the mean latitude of the reference segment. This is accurate for spans of a
few to a few tens of kilometres only.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from ..models import Point

MetricArray = NDArray[np.float64]

METERS_PER_DEGREE = 111_320.0

# Squared chord length (m^2) under which a simplification chord is degenerate.
CHORD_DEGENERATE_SQ_M = 1e-10

# Squared segment length (m^2) under which a projection segment is degenerate.
SEGMENT_DEGENERATE_SQ_M = 1e-20


def lon_scale(a_lat: float, b_lat: float) -> float:
    """Metres per degree of longitude around the segment ``a``-``b``."""

    return METERS_PER_DEGREE * math.cos(math.radians((a_lat + b_lat) / 2.0))


def perpendicular_distances(
    lats: MetricArray, lons: MetricArray, a: Point, b: Point
) -> MetricArray:
    """Distance in metres from each ``(lat, lon)`` to the infinite line ``a``-``b``.

    Falls back to the distance from ``a`` when the chord is degenerate.
    """

    m_lon = lon_scale(a.lat, b.lat)
    dx = (b.lon - a.lon) * m_lon
    dy = (b.lat - a.lat) * METERS_PER_DEGREE
    px = (lons - a.lon) * m_lon
    py = (lats - a.lat) * METERS_PER_DEGREE
    len_sq = dx * dx + dy * dy
    if len_sq < CHORD_DEGENERATE_SQ_M:
        return np.sqrt(px * px + py * py)
    return np.abs(px * dy - py * dx) / math.sqrt(len_sq)


def segment_parameters(
    position: Point,
    a_lats: MetricArray,
    a_lons: MetricArray,
    b_lats: MetricArray,
    b_lons: MetricArray,
) -> tuple[MetricArray, NDArray[np.bool_]]:
    """Clamped projection parameter ``t`` of ``position`` on each segment.

    Returns ``(t, degenerate)``; degenerate segments get ``t = 0`` so the
    projection coincides with the segment start.
    """

    m_lon = METERS_PER_DEGREE * np.cos(np.radians((a_lats + b_lats) / 2.0))
    dx = (b_lons - a_lons) * m_lon
    dy = (b_lats - a_lats) * METERS_PER_DEGREE
    px = (position.lon - a_lons) * m_lon
    py = (position.lat - a_lats) * METERS_PER_DEGREE
    len_sq = dx * dx + dy * dy
    degenerate = len_sq < SEGMENT_DEGENERATE_SQ_M
    raw = np.divide(
        px * dx + py * dy,
        len_sq,
        out=np.zeros_like(len_sq),
        where=~degenerate,
    )
    return np.clip(raw, 0.0, 1.0), degenerate


__all__ = [
    "CHORD_DEGENERATE_SQ_M",
    "METERS_PER_DEGREE",
    "SEGMENT_DEGENERATE_SQ_M",
    "lon_scale",
    "perpendicular_distances",
    "segment_parameters",
]
