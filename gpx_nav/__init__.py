"""GPX track simplification, projection and turn-by-turn navigation."""

__version__ = "0.1.0"

from .errors import BridgeError, CoordinateRangeError, GpxNavError, GpxParseError
from .geometry import (
    bearing,
    haversine,
    project_on_track,
    route_to_track,
    simplify,
    track_length,
    track_to_route,
)
from .gpx_io import parse_gpx, to_gpx_xml
from .main import main
from .models import (
    GpxData,
    Instruction,
    Point,
    ProjectionResult,
    Route,
    Track,
    TurnKind,
    Waypoint,
)
from .navigation import generate_instructions, track_progress

__all__ = [
    "__version__",
    "main",
    "BridgeError",
    "CoordinateRangeError",
    "GpxData",
    "GpxNavError",
    "GpxParseError",
    "Instruction",
    "Point",
    "ProjectionResult",
    "Route",
    "Track",
    "TurnKind",
    "Waypoint",
    "bearing",
    "generate_instructions",
    "haversine",
    "parse_gpx",
    "project_on_track",
    "route_to_track",
    "simplify",
    "to_gpx_xml",
    "track_length",
    "track_progress",
    "track_to_route",
]
