"""Dataclasses describing GPS geometry inputs and navigation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True, slots=True)
class Point:
    """A WGS84 coordinate in degrees with optional elevation in metres."""

    lat: float
    lon: float
    ele: Optional[float] = None


PointSequence = Tuple[Point, ...]


def _freeze_points(points: Iterable[Point]) -> PointSequence:
    return tuple(points)


@dataclass(frozen=True, slots=True)
class Track:
    """A named, dense sequence of recorded points."""

    name: Optional[str] = None
    points: PointSequence = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _freeze_points(self.points))


@dataclass(frozen=True, slots=True)
class Route:
    """A named, sparse sequence of planned points."""

    name: Optional[str] = None
    points: PointSequence = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _freeze_points(self.points))


@dataclass(frozen=True, slots=True, kw_only=True)
class Waypoint:
    """A single annotated location; ``icon`` maps to the GPX ``<sym>`` tag."""

    name: Optional[str] = None
    point: Point
    icon: Optional[str] = None


@dataclass(frozen=True, slots=True)
class GpxData:
    """Everything extracted from one GPX document."""

    tracks: Tuple[Track, ...] = ()
    routes: Tuple[Route, ...] = ()
    waypoints: Tuple[Waypoint, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "tracks", tuple(self.tracks))
        object.__setattr__(self, "routes", tuple(self.routes))
        object.__setattr__(self, "waypoints", tuple(self.waypoints))


@dataclass(frozen=True, slots=True)
class ProjectionResult:
    """Nearest point on a polyline for a query position.

    ``segment_index`` is the index of the segment's starting point,
    ``distance_m`` the straight-line offset from the query position and
    ``distance_along_m`` the path length from the polyline start.
    """

    point: Point
    segment_index: int
    distance_m: float
    distance_along_m: float


class TurnKind(str, Enum):
    """Turn categories; values are the tokens used in serialized output."""

    START = "start"
    STRAIGHT = "straight"
    SLIGHT_LEFT = "slight_left"
    LEFT = "left"
    SHARP_LEFT = "sharp_left"
    SLIGHT_RIGHT = "slight_right"
    RIGHT = "right"
    SHARP_RIGHT = "sharp_right"
    U_TURN = "u_turn"
    ARRIVE = "arrive"


@dataclass(frozen=True, slots=True)
class Instruction:
    waypoint_index: int
    distance_m: float
    turn: TurnKind
    text: str


class OffTrackLevel(str, Enum):
    """How far a position has strayed from the followed track."""

    ON_TRACK = "on_track"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class TrackProgress:
    """Snapshot of a position relative to a track."""

    projection: ProjectionResult
    total_length_m: float
    remaining_m: float
    off_track: OffTrackLevel
    arrived: bool


__all__ = [
    "GpxData",
    "Instruction",
    "OffTrackLevel",
    "Point",
    "PointSequence",
    "ProjectionResult",
    "Route",
    "Track",
    "TrackProgress",
    "TurnKind",
    "Waypoint",
]
