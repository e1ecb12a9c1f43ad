"""Navigation helpers built on the geometry engines."""

from .instructions import classify_turn, compute_turn, generate_instructions
from .progress import find_nearest_waypoint, off_track_level, track_progress

__all__ = [
    "classify_turn",
    "compute_turn",
    "find_nearest_waypoint",
    "generate_instructions",
    "off_track_level",
    "track_progress",
]
