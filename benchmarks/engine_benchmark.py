"""Benchmark simplification, projection and instructions on long tracks."""

from __future__ import annotations

import argparse
import math
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Late imports rely on the adjusted sys.path above.
from gpx_nav.config import SIMPLIFY_TOLERANCE_M  # noqa: E402
from gpx_nav.geometry.projection import project_on_track  # noqa: E402
from gpx_nav.geometry.simplify import track_to_route  # noqa: E402
from gpx_nav.models import Point, Track  # noqa: E402
from gpx_nav.navigation.instructions import generate_instructions  # noqa: E402


@dataclass(slots=True)
class StageDurations:
    """Timing measurements (in seconds) for one pass over the engines."""

    simplify: float
    project: float
    instructions: float

    @property
    def total(self) -> float:
        return self.simplify + self.project + self.instructions


@dataclass(slots=True)
class BenchmarkSummary:
    """Aggregated statistics for multiple benchmark iterations."""

    point_count: int
    iterations: int
    route_points: int
    mean_simplify_ms: float
    mean_project_ms: float
    mean_instructions_ms: float
    mean_total_ms: float
    worst_total_ms: float


def _build_track(point_count: int) -> Track:
    """A winding eastbound track with roughly 4 m between points."""

    base_lat = 48.2
    base_lon = 16.3
    step_deg = 5.0e-5
    points = [
        Point(
            base_lat + 0.002 * math.sin(idx / 150.0),
            base_lon + idx * step_deg,
        )
        for idx in range(point_count)
    ]
    return Track(name="benchmark", points=points)


def _run_iteration(track: Track, probes: List[Point]) -> tuple[StageDurations, int]:
    start = time.perf_counter()
    route = track_to_route(track, SIMPLIFY_TOLERANCE_M)
    simplify = time.perf_counter() - start

    start = time.perf_counter()
    for probe in probes:
        if project_on_track(probe, track) is None:
            raise RuntimeError("Synthetic track is too short to project onto")
    project = time.perf_counter() - start

    start = time.perf_counter()
    generate_instructions(route.points)
    elapsed = time.perf_counter() - start

    return StageDurations(simplify=simplify, project=project, instructions=elapsed), len(
        route.points
    )


def run_benchmark(point_count: int, iterations: int, probes: int = 20) -> BenchmarkSummary:
    """Benchmark the engines and return aggregated timings."""

    if point_count < 2:
        raise ValueError("point_count must be at least 2")
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    track = _build_track(point_count)
    step = max(1, point_count // max(probes, 1))
    probe_points = [
        Point(point.lat + 0.0005, point.lon) for point in track.points[::step]
    ]

    durations: List[StageDurations] = []
    route_points = 0
    for _ in range(iterations):
        duration, route_points = _run_iteration(track, probe_points)
        durations.append(duration)

    return BenchmarkSummary(
        point_count=point_count,
        iterations=iterations,
        route_points=route_points,
        mean_simplify_ms=statistics.fmean(d.simplify for d in durations) * 1000.0,
        mean_project_ms=statistics.fmean(d.project for d in durations) * 1000.0,
        mean_instructions_ms=statistics.fmean(d.instructions for d in durations)
        * 1000.0,
        mean_total_ms=statistics.fmean(d.total for d in durations) * 1000.0,
        worst_total_ms=max(d.total for d in durations) * 1000.0,
    )


def _format_summary(summary: BenchmarkSummary) -> Dict[str, float]:
    return {
        "point_count": summary.point_count,
        "iterations": summary.iterations,
        "route_points": summary.route_points,
        "mean_simplify_ms": summary.mean_simplify_ms,
        "mean_project_ms": summary.mean_project_ms,
        "mean_instructions_ms": summary.mean_instructions_ms,
        "mean_total_ms": summary.mean_total_ms,
        "worst_total_ms": summary.worst_total_ms,
    }


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark the geometry engines with a long synthetic track",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=50000,
        help="Number of points in the synthetic track",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of repetitions for averaging",
    )
    return parser.parse_args()


def main() -> None:
    """Entry point when running the module as a script."""

    args = _parse_args()
    summary = run_benchmark(args.points, args.iterations)
    for key, value in _format_summary(summary).items():
        if key in {"point_count", "iterations", "route_points"}:
            print(f"{key}: {value}")
        else:
            print(f"{key}: {value:.3f}")


if __name__ == "__main__":
    main()
