"""Geometry engines for GPS tracks.

Distance and bearing primitives, Ramer-Douglas-Peucker simplification and
nearest-point projection, all working on :class:`gpx_nav.models.Point`
sequences with a local planar approximation where needed.
"""

from .distance import bearing, haversine, track_length
from .projection import project_on_track
from .simplify import route_to_track, simplify, track_to_route

__all__ = [
    "bearing",
    "haversine",
    "project_on_track",
    "route_to_track",
    "simplify",
    "track_length",
    "track_to_route",
]
