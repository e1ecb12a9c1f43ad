"""Ramer-Douglas-Peucker simplification of recorded tracks into routes."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..config import SIMPLIFY_TOLERANCE_M
from ..models import Point, PointSequence, Route, Track
from .distance import coordinate_arrays
from .planar import perpendicular_distances

_LOG = logging.getLogger(__name__)


def simplify(points: Sequence[Point], tolerance_m: float) -> PointSequence:
    """Simplify ``points`` so no dropped point deviates more than ``tolerance_m``.

    The result is a subsequence of ``points`` sharing both endpoints. Each
    range is split at the interior point farthest from its chord (the
    lowest index wins ties) while that distance exceeds the tolerance;
    otherwise the range collapses to its endpoints. Ranges are processed from
    an explicit stack, so input size is not limited by the recursion depth.
    Negative tolerances behave like zero.
    """

    count = len(points)
    if count <= 2:
        return tuple(points)

    tolerance = max(float(tolerance_m), 0.0)
    lats, lons = coordinate_arrays(points)
    keep = np.zeros(count, dtype=bool)
    keep[0] = keep[-1] = True

    stack: List[Tuple[int, int]] = [(0, count - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        split = _farthest_interior(points, lats, lons, start, end, tolerance)
        if split is None:
            continue
        keep[split] = True
        stack.append((split, end))
        stack.append((start, split))

    simplified = tuple(point for point, kept in zip(points, keep) if kept)
    _LOG.debug(
        "Simplified %d points to %d (tolerance %.2f m)",
        count,
        len(simplified),
        tolerance,
    )
    return simplified


def _farthest_interior(
    points: Sequence[Point],
    lats: np.ndarray,
    lons: np.ndarray,
    start: int,
    end: int,
    tolerance: float,
) -> Optional[int]:
    """Return the split index for ``points[start..=end]`` or ``None`` to collapse."""

    distances = perpendicular_distances(
        lats[start + 1 : end], lons[start + 1 : end], points[start], points[end]
    )
    # argmax reports the first occurrence, matching a strict ">" scan.
    offset = int(np.argmax(distances))
    max_distance = float(distances[offset])
    if max_distance > tolerance:
        return start + 1 + offset
    return None


def track_to_route(track: Track, tolerance_m: float = SIMPLIFY_TOLERANCE_M) -> Route:
    """Convert a dense track into a sparse route by simplifying its points."""

    return Route(name=track.name, points=simplify(track.points, tolerance_m))


def route_to_track(route: Route) -> Track:
    """Convert a route into a track by copying its points.

    Interpolating between route points would need road network data, so the
    route points are used verbatim.
    """

    return Track(name=route.name, points=route.points)


__all__ = ["route_to_track", "simplify", "track_to_route"]
