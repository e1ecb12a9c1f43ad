"""Command-line entry point for inspecting and converting GPX files.

Examples::

    gpx-nav info ride.gpx
    gpx-nav simplify ride.gpx --tolerance 25 --output ride_route.gpx
    gpx-nav project ride.gpx --lat 48.21 --lon 16.37
    gpx-nav instructions ride.gpx --track 0 --tolerance 50
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .config import SIMPLIFY_TOLERANCE_M
from .errors import GpxNavError
from .geometry.distance import track_length
from .geometry.simplify import track_to_route
from .gpx_io import parse_gpx_file, write_gpx
from .models import GpxData, Point, Route
from .navigation.instructions import generate_instructions
from .navigation.progress import track_progress
from .utils import json_dumps

LOGGER = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=getattr(logging, level),
            format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )


def _finite_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not math.isfinite(number):
        raise argparse.ArgumentTypeError(f"must be a finite number: {value!r}")
    return number


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gpx-nav",
        description="Simplify GPX tracks, project positions and build turn-by-turn instructions.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Summarise tracks, routes and waypoints")
    info.add_argument("input", type=Path, help="GPX file to read")

    simplify = sub.add_parser("simplify", help="Convert every track into a route")
    simplify.add_argument("input", type=Path, help="GPX file to read")
    simplify.add_argument(
        "--tolerance",
        type=_finite_float,
        default=SIMPLIFY_TOLERANCE_M,
        help=f"Maximum deviation in metres (default: {SIMPLIFY_TOLERANCE_M:g})",
    )
    simplify.add_argument(
        "--output",
        type=Path,
        help="Write the routes to this GPX file instead of printing JSON",
    )

    project = sub.add_parser("project", help="Project a position onto a track")
    project.add_argument("input", type=Path, help="GPX file to read")
    project.add_argument("--lat", type=_finite_float, required=True)
    project.add_argument("--lon", type=_finite_float, required=True)
    project.add_argument(
        "--track", type=int, default=0, help="Track index (default: 0)"
    )

    instructions = sub.add_parser(
        "instructions", help="Generate turn-by-turn instructions"
    )
    instructions.add_argument("input", type=Path, help="GPX file to read")
    source = instructions.add_mutually_exclusive_group()
    source.add_argument("--route", type=int, help="Route index to use")
    source.add_argument(
        "--track", type=int, help="Track index to simplify into a route first"
    )
    instructions.add_argument(
        "--tolerance",
        type=_finite_float,
        default=SIMPLIFY_TOLERANCE_M,
        help="Simplification tolerance when --track is used",
    )
    return parser.parse_args(argv)


def _pick(items: Sequence, index: int, kind: str):
    if not items:
        raise SystemExit(f"GPX file contains no {kind}s")
    if not 0 <= index < len(items):
        raise SystemExit(f"{kind} index {index} out of range (0-{len(items) - 1})")
    return items[index]


def _summary(gpx: GpxData) -> dict:
    return {
        "tracks": [
            {
                "name": track.name,
                "points": len(track.points),
                "length_m": round(track_length(track.points), 1),
            }
            for track in gpx.tracks
        ],
        "routes": [
            {
                "name": route.name,
                "points": len(route.points),
                "length_m": round(track_length(route.points), 1),
            }
            for route in gpx.routes
        ],
        "waypoints": len(gpx.waypoints),
    }


def _instruction_route(gpx: GpxData, args: argparse.Namespace) -> Route:
    if args.track is not None:
        return track_to_route(_pick(gpx.tracks, args.track, "track"), args.tolerance)
    if args.route is not None:
        return _pick(gpx.routes, args.route, "route")
    if gpx.routes:
        return gpx.routes[0]
    return track_to_route(_pick(gpx.tracks, 0, "track"), args.tolerance)


def run(args: argparse.Namespace) -> object:
    """Execute a parsed command and return the JSON-serialisable result."""

    gpx = parse_gpx_file(args.input)
    if args.command == "info":
        return _summary(gpx)
    if args.command == "simplify":
        routes: List[Route] = [
            track_to_route(track, args.tolerance) for track in gpx.tracks
        ]
        for track, route in zip(gpx.tracks, routes):
            LOGGER.info(
                "Track %r: %d -> %d points",
                track.name,
                len(track.points),
                len(route.points),
            )
        if args.output is not None:
            path = write_gpx(args.output, routes=routes, waypoints=gpx.waypoints)
            return {"output": str(path), "routes": len(routes)}
        return routes
    if args.command == "project":
        track = _pick(gpx.tracks, args.track, "track")
        return track_progress(Point(lat=args.lat, lon=args.lon), track)
    if args.command == "instructions":
        return generate_instructions(_instruction_route(gpx, args).points)
    raise SystemExit(f"Unknown command {args.command!r}")  # pragma: no cover


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    _setup_logging(args.log_level)
    try:
        output = json_dumps(run(args))
    except GpxNavError as exc:
        raise SystemExit(str(exc)) from exc
    except (ValueError, OverflowError) as exc:
        raise SystemExit(f"Numeric error: {exc}") from exc
    print(output)


if __name__ == "__main__":  # pragma: no cover - CLI glue
    main()
