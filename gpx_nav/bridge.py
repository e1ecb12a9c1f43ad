"""JSON bridge between a host application and the geometry engines.

Every entry point accepts and returns JSON text. Failures never raise: they
come back as ``{"error": "<message>"}`` so a host only has to check for the
``error`` key.
"""

from __future__ import annotations

import functools
import json
import logging
import math
from typing import Any, Callable, List, Mapping, Optional, Union

from .config import SIMPLIFY_TOLERANCE_M
from .errors import BridgeError, GpxNavError
from .geometry.projection import project_on_track
from .geometry.simplify import route_to_track, track_to_route
from .gpx_io import parse_gpx
from .models import Point, Route, Track
from .navigation.instructions import generate_instructions
from .navigation.progress import track_progress
from .utils import json_dumps

LOGGER = logging.getLogger(__name__)

JsonText = Union[str, bytes]


def error_payload(message: str) -> str:
    """Return ``{"error": message}`` with the message JSON-escaped."""

    return json.dumps({"error": message})


def _bridged(func: Callable[..., Any]) -> Callable[..., str]:
    """Serialize the wrapped result, turning gpx_nav failures into error JSON."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> str:
        try:
            result = func(*args, **kwargs)
            try:
                return json_dumps(result)
            except ValueError as exc:
                raise BridgeError(f"Result is not representable as JSON: {exc}") from exc
        except GpxNavError as exc:
            LOGGER.warning("%s failed: %s", func.__name__, exc)
            return error_payload(str(exc))
        except (ValueError, OverflowError) as exc:
            # math domain errors from coordinates that overflow in the engines
            LOGGER.warning("%s failed on numeric input: %s", func.__name__, exc)
            return error_payload(f"Numeric error: {exc}")

    return wrapper


# ---------------------------------------------------------------------------
# Payload decoding
# ---------------------------------------------------------------------------


def load_json(text: JsonText) -> Any:
    """Decode JSON text, reporting malformed input as :class:`BridgeError`."""

    try:
        return json.loads(text)
    except (TypeError, ValueError) as exc:
        raise BridgeError(f"Invalid JSON: {exc}") from exc


def point_from_payload(payload: Any) -> Point:
    """Build a :class:`Point` from ``{"lat", "lon", "ele"?}``."""

    if not isinstance(payload, Mapping):
        raise BridgeError("Point must be a JSON object")
    try:
        lat = _finite(payload["lat"], "lat")
        lon = _finite(payload["lon"], "lon")
        ele = payload.get("ele")
        return Point(lat=lat, lon=lon, ele=None if ele is None else _finite(ele, "ele"))
    except KeyError as exc:
        raise BridgeError(f"Point is missing {exc.args[0]!r}") from exc
    except (TypeError, ValueError) as exc:
        raise BridgeError(f"Point has a non-numeric coordinate: {exc}") from exc


def _finite(value: Any, field: str) -> float:
    number = float(value)
    if not math.isfinite(number):
        raise BridgeError(f"{field} must be a finite number, got {value!r}")
    return number


def points_from_payload(payload: Any) -> List[Point]:
    """Accept either a bare list of points or an object with ``points``."""

    if isinstance(payload, Mapping):
        payload = payload.get("points")
    if not isinstance(payload, list):
        raise BridgeError("Expected a list of points")
    return [point_from_payload(item) for item in payload]


def _position(lat: Any, lon: Any) -> Point:
    try:
        return Point(lat=_finite(lat, "lat"), lon=_finite(lon, "lon"))
    except (TypeError, ValueError) as exc:
        raise BridgeError(f"Position has a non-numeric coordinate: {exc}") from exc


def _optional_name(payload: Any) -> Optional[str]:
    if not isinstance(payload, Mapping):
        return None
    name = payload.get("name")
    return None if name is None else str(name)


def track_from_payload(payload: Any) -> Track:
    return Track(name=_optional_name(payload), points=points_from_payload(payload))


def route_from_payload(payload: Any) -> Route:
    return Route(name=_optional_name(payload), points=points_from_payload(payload))


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


@_bridged
def parse_gpx_json(data: Union[bytes, str]) -> Any:
    """Parse GPX bytes into ``{"tracks", "routes", "waypoints"}`` JSON."""

    return parse_gpx(data)


@_bridged
def project_on_track_json(lat: float, lon: float, track_json: JsonText) -> Any:
    """Project a position onto a track; ``null`` when the track is too short."""

    track = track_from_payload(load_json(track_json))
    return project_on_track(_position(lat, lon), track)


@_bridged
def track_progress_json(lat: float, lon: float, track_json: JsonText) -> Any:
    """Progress report for a position on a track; ``null`` for short tracks."""

    track = track_from_payload(load_json(track_json))
    return track_progress(_position(lat, lon), track)


@_bridged
def generate_instructions_json(points_json: JsonText) -> Any:
    """Turn-by-turn instructions for a list of route points."""

    return generate_instructions(points_from_payload(load_json(points_json)))


@_bridged
def track_to_route_json(
    track_json: JsonText, tolerance_m: float = SIMPLIFY_TOLERANCE_M
) -> Any:
    """Simplify a track payload into a route payload."""

    try:
        tolerance = _finite(tolerance_m, "tolerance_m")
    except (TypeError, ValueError) as exc:
        raise BridgeError(f"Tolerance must be numeric: {exc}") from exc
    return track_to_route(track_from_payload(load_json(track_json)), tolerance)


@_bridged
def route_to_track_json(route_json: JsonText) -> Any:
    return route_to_track(route_from_payload(load_json(route_json)))


__all__ = [
    "error_payload",
    "generate_instructions_json",
    "load_json",
    "parse_gpx_json",
    "point_from_payload",
    "points_from_payload",
    "project_on_track_json",
    "route_from_payload",
    "route_to_track_json",
    "track_from_payload",
    "track_progress_json",
    "track_to_route_json",
]
