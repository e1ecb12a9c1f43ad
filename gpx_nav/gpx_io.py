"""GPX 1.1 reading and writing.

Parsing goes through :mod:`defusedxml` so untrusted documents cannot trigger
entity expansion attacks. Track segments are flattened into a single point
list per track.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Iterable, List, Optional, Union
from xml.etree import ElementTree as StdET

from defusedxml import ElementTree as ET
from defusedxml.common import DefusedXmlException

from .config import GPX_CREATOR, VALIDATE_COORDINATES
from .errors import CoordinateRangeError, GpxParseError
from .models import GpxData, Point, Route, Track, Waypoint

GPX_NS = "http://www.topografix.com/GPX/1/1"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
GPX_SCHEMA_LOCATION = f"{GPX_NS} http://www.topografix.com/GPX/1/1/gpx.xsd"

StdET.register_namespace("", GPX_NS)
StdET.register_namespace("xsi", XSI_NS)

LOGGER = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Coordinate guard
# ---------------------------------------------------------------------------


def validate_point(point: Point) -> Point:
    """Return ``point`` unchanged or raise :class:`CoordinateRangeError`."""

    if not -90.0 <= point.lat <= 90.0:
        raise CoordinateRangeError(f"Latitude {point.lat} outside [-90, 90]")
    if not -180.0 <= point.lon <= 180.0:
        raise CoordinateRangeError(f"Longitude {point.lon} outside [-180, 180]")
    return point


def validate_points(points: Iterable[Point]) -> None:
    """Run :func:`validate_point` over every point."""

    for point in points:
        validate_point(point)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_gpx(
    data: Union[bytes, str], *, validate: Optional[bool] = None
) -> GpxData:
    """Parse a GPX document into tracks, routes and waypoints.

    Raises :class:`GpxParseError` for malformed XML, a non-GPX root element or
    points without numeric ``lat``/``lon`` attributes. When ``validate`` is
    true (default: ``VALIDATE_COORDINATES``) out-of-range coordinates are
    reported as parse errors too.
    """

    try:
        root = ET.fromstring(data)
    except (ET.ParseError, DefusedXmlException) as exc:
        raise GpxParseError(f"GPX parse error: {exc}") from exc
    if _local_name(root.tag) != "gpx":
        raise GpxParseError(
            f"GPX parse error: root element is <{_local_name(root.tag)}>, expected <gpx>"
        )

    tracks: List[Track] = []
    routes: List[Route] = []
    waypoints: List[Waypoint] = []
    for child in root:
        kind = _local_name(child.tag)
        if kind == "trk":
            points = [
                _parse_point(pt)
                for seg in _children(child, "trkseg")
                for pt in _children(seg, "trkpt")
            ]
            tracks.append(Track(name=_child_text(child, "name"), points=points))
        elif kind == "rte":
            points = [_parse_point(pt) for pt in _children(child, "rtept")]
            routes.append(Route(name=_child_text(child, "name"), points=points))
        elif kind == "wpt":
            waypoints.append(
                Waypoint(
                    point=_parse_point(child),
                    name=_child_text(child, "name"),
                    icon=_child_text(child, "sym"),
                )
            )

    gpx = GpxData(tracks=tracks, routes=routes, waypoints=waypoints)
    if VALIDATE_COORDINATES if validate is None else validate:
        try:
            for track in gpx.tracks:
                validate_points(track.points)
            for route in gpx.routes:
                validate_points(route.points)
            validate_points(wpt.point for wpt in gpx.waypoints)
        except CoordinateRangeError as exc:
            raise GpxParseError(f"GPX parse error: {exc}") from exc
    LOGGER.debug(
        "Parsed GPX with %d tracks, %d routes, %d waypoints",
        len(gpx.tracks),
        len(gpx.routes),
        len(gpx.waypoints),
    )
    return gpx


def parse_gpx_file(path: Union[str, Path], **kwargs) -> GpxData:
    """Read ``path`` and parse it with :func:`parse_gpx`."""

    source = Path(path)
    try:
        data = source.read_bytes()
    except OSError as exc:
        raise GpxParseError(f"Unable to read GPX file {source}: {exc}") from exc
    LOGGER.info("Loading GPX from %s", source)
    return parse_gpx(data, **kwargs)


def _local_name(tag: str) -> str:
    # GPX 1.0, 1.1 and namespace-less documents share local names.
    return tag.rsplit("}", 1)[-1]


def _children(element, name: str) -> list:
    return [child for child in element if _local_name(child.tag) == name]


def _child_text(element, name: str) -> Optional[str]:
    for child in _children(element, name):
        if child.text is not None and child.text.strip():
            return child.text.strip()
    return None


def _parse_point(element) -> Point:
    try:
        lat = float(element.attrib["lat"])
        lon = float(element.attrib["lon"])
    except KeyError as exc:
        raise GpxParseError(
            f"GPX parse error: <{_local_name(element.tag)}> is missing the {exc.args[0]!r} attribute"
        ) from exc
    except ValueError as exc:
        raise GpxParseError(
            f"GPX parse error: invalid coordinate on <{_local_name(element.tag)}>: {exc}"
        ) from exc
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise GpxParseError(
            f"GPX parse error: non-finite coordinate on <{_local_name(element.tag)}>: "
            f"lat={lat}, lon={lon}"
        )
    ele: Optional[float] = None
    ele_text = _child_text(element, "ele")
    if ele_text is not None:
        try:
            ele = float(ele_text)
        except ValueError as exc:
            raise GpxParseError(
                f"GPX parse error: invalid elevation {ele_text!r}"
            ) from exc
        if not math.isfinite(ele):
            raise GpxParseError(f"GPX parse error: invalid elevation {ele_text!r}")
    return Point(lat=lat, lon=lon, ele=ele)


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


def build_gpx_tree(
    tracks: Iterable[Track] = (),
    routes: Iterable[Route] = (),
    waypoints: Iterable[Waypoint] = (),
    *,
    creator: str = GPX_CREATOR,
) -> StdET.ElementTree:
    """Build a GPX 1.1 element tree; waypoints are written first per schema."""

    gpx = StdET.Element(
        f"{{{GPX_NS}}}gpx",
        {
            "version": "1.1",
            "creator": creator,
            f"{{{XSI_NS}}}schemaLocation": GPX_SCHEMA_LOCATION,
        },
    )
    for waypoint in waypoints:
        wpt = _point_element(gpx, "wpt", waypoint.point)
        _text_element(wpt, "name", waypoint.name)
        _text_element(wpt, "sym", waypoint.icon)
    for route in routes:
        rte = StdET.SubElement(gpx, f"{{{GPX_NS}}}rte")
        _text_element(rte, "name", route.name)
        for point in route.points:
            _point_element(rte, "rtept", point)
    for track in tracks:
        trk = StdET.SubElement(gpx, f"{{{GPX_NS}}}trk")
        _text_element(trk, "name", track.name)
        trkseg = StdET.SubElement(trk, f"{{{GPX_NS}}}trkseg")
        for point in track.points:
            _point_element(trkseg, "trkpt", point)
    return StdET.ElementTree(gpx)


def to_gpx_xml(
    tracks: Iterable[Track] = (),
    routes: Iterable[Route] = (),
    waypoints: Iterable[Waypoint] = (),
    *,
    creator: str = GPX_CREATOR,
) -> str:
    """Return a GPX 1.1 document as a string, including the XML declaration."""

    tree = build_gpx_tree(tracks, routes, waypoints, creator=creator)
    StdET.indent(tree)
    body = StdET.tostring(tree.getroot(), encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'


def write_gpx(
    path: Union[str, Path],
    tracks: Iterable[Track] = (),
    routes: Iterable[Route] = (),
    waypoints: Iterable[Waypoint] = (),
    *,
    creator: str = GPX_CREATOR,
) -> Path:
    """Write a GPX 1.1 document to ``path`` and return the resolved path."""

    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        to_gpx_xml(tracks, routes, waypoints, creator=creator), encoding="utf-8"
    )
    LOGGER.info("Saved GPX to %s", output)
    return output


def _point_element(parent: StdET.Element, tag: str, point: Point) -> StdET.Element:
    element = StdET.SubElement(
        parent,
        f"{{{GPX_NS}}}{tag}",
        {"lat": str(float(point.lat)), "lon": str(float(point.lon))},
    )
    if point.ele is not None:
        _text_element(element, "ele", str(float(point.ele)))
    return element


def _text_element(parent: StdET.Element, tag: str, text: Optional[str]) -> None:
    if text is None:
        return
    element = StdET.SubElement(parent, f"{{{GPX_NS}}}{tag}")
    element.text = text


__all__ = [
    "GPX_NS",
    "build_gpx_tree",
    "parse_gpx",
    "parse_gpx_file",
    "to_gpx_xml",
    "validate_point",
    "validate_points",
    "write_gpx",
]
