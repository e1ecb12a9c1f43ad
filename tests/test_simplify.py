"""Tests for Ramer-Douglas-Peucker simplification and track/route conversion."""

from __future__ import annotations

import math

import pytest

from gpx_nav.geometry.distance import coordinate_arrays
from gpx_nav.geometry.planar import perpendicular_distances
from gpx_nav.geometry.simplify import route_to_track, simplify, track_to_route
from gpx_nav.models import Point, Route, Track

from conftest import make_zigzag_points


def test_track_to_route_preserves_endpoints_and_name() -> None:
    track = Track(
        name="Test",
        points=[Point(48.0, 16.0), Point(48.001, 16.001), Point(48.0, 16.002)],
    )

    route = track_to_route(track, 1000.0)

    assert isinstance(route, Route)
    assert route.name == "Test"
    # With high tolerance, only endpoints remain
    assert route.points == (Point(48.0, 16.0), Point(48.0, 16.002))


def test_track_to_route_keeps_sharp_turn(l_shaped_track: Track) -> None:
    route = track_to_route(l_shaped_track, 10.0)

    assert len(route.points) >= 3, f"Expected at least 3 points, got {len(route.points)}"
    # Both legs are exactly straight, so only the corner survives.
    assert route.points == (
        Point(48.0, 16.0),
        Point(48.0, 16.02),
        Point(48.02, 16.02),
    )


def test_track_to_route_zero_tolerance_keeps_every_bend() -> None:
    track = Track(points=[Point(48.0, 16.0), Point(48.001, 16.001), Point(48.0, 16.002)])
    assert len(track_to_route(track, 0.0).points) == 3


def test_track_to_route_uses_configured_default(l_shaped_track: Track) -> None:
    assert track_to_route(l_shaped_track).points == track_to_route(l_shaped_track, 10.0).points


def test_route_to_track_copies_points() -> None:
    route = Route(name="Route", points=[Point(48.0, 16.0), Point(48.1, 16.1)])

    track = route_to_track(route)

    assert isinstance(track, Track)
    assert track.name == "Route"
    assert track.points == route.points


@pytest.mark.parametrize("count", [0, 1, 2])
def test_short_inputs_are_returned_unchanged(count: int) -> None:
    points = [Point(0.0, 0.0), Point(1.0, 1.0)][:count]
    assert simplify(points, 100.0) == tuple(points)


def test_straight_line_collapses_to_endpoints() -> None:
    points = [
        Point(48.0, 16.0),
        Point(48.0, 16.005),
        Point(48.0, 16.01),
        Point(48.0, 16.015),
        Point(48.0, 16.02),
    ]
    assert simplify(points, 10.0) == (points[0], points[-1])


@pytest.mark.parametrize("tolerance", [0.0, 0.001, 5.0])
def test_meridian_line_collapses_for_any_tolerance(tolerance: float) -> None:
    points = [Point(48.0 + idx * 0.001, 16.0) for idx in range(12)]
    assert len(simplify(points, tolerance)) == 2


@pytest.mark.parametrize("tolerance", [0.0, 1.0, 10.0, 50.0, 1000.0])
def test_endpoints_are_always_kept(zigzag_points, tolerance: float) -> None:
    result = simplify(zigzag_points, tolerance)
    assert result[0] == zigzag_points[0]
    assert result[-1] == zigzag_points[-1]


def test_result_is_ordered_subsequence(zigzag_points) -> None:
    result = simplify(zigzag_points, 5.0)
    indices = [zigzag_points.index(point) for point in result]
    assert indices == sorted(set(indices))


def test_point_count_never_grows_with_tolerance(zigzag_points) -> None:
    tolerances = [0.0, 0.5, 2.0, 5.0, 10.0, 20.0, 40.0, 1000.0]
    counts = [len(simplify(zigzag_points, tol)) for tol in tolerances]
    assert counts == sorted(counts, reverse=True)
    assert counts[-1] == 2


def test_equal_distances_split_at_first_candidate() -> None:
    # Both interior points sit 111 m north of the chord.
    points = [
        Point(48.0, 16.0),
        Point(48.001, 16.01),
        Point(48.001, 16.02),
        Point(48.0, 16.03),
    ]
    # The remaining half-chord offset is ~55.5 m, below the tolerance.
    result = simplify(points, 60.0)
    assert result == (points[0], points[1], points[3])


def test_negative_tolerance_behaves_like_zero(zigzag_points) -> None:
    assert simplify(zigzag_points, -5.0) == simplify(zigzag_points, 0.0)


def test_coincident_endpoints_use_distance_from_start() -> None:
    # Closed loop: chord has zero length, so offsets are radial distances.
    points = [
        Point(48.0, 16.0),
        Point(48.001, 16.0),
        Point(48.001, 16.001),
        Point(48.0, 16.0),
    ]
    assert len(simplify(points, 1.0)) == 4
    assert simplify(points, 500.0) == (points[0], points[-1])


def test_does_not_mutate_input(zigzag_points) -> None:
    before = list(zigzag_points)
    simplify(zigzag_points, 5.0)
    assert zigzag_points == before


def test_large_convex_track_keeps_every_point_at_zero_tolerance() -> None:
    count = 5000
    points = [
        Point(48.0 + 0.01 * ((idx / count) - 0.5) ** 2, 16.0 + idx * 1e-4)
        for idx in range(count)
    ]
    assert len(simplify(points, 0.0)) == count


def test_long_zigzag_simplifies_without_recursion_limit() -> None:
    points = make_zigzag_points(20_000)
    result = simplify(points, 1.0)
    assert result[0] == points[0]
    assert result[-1] == points[-1]
    assert 2 <= len(result) <= len(points)


def _recursive_rdp_indices(points, tolerance):
    """Textbook recursive RDP over the same planar distances."""

    lats, lons = coordinate_arrays(points)

    def recurse(start, end):
        if end - start < 2:
            return [start, end]
        distances = perpendicular_distances(
            lats[start + 1 : end], lons[start + 1 : end], points[start], points[end]
        )
        best, split = 0.0, None
        for offset, distance in enumerate(distances):
            if distance > best:
                best, split = float(distance), start + 1 + offset
        if split is None or best <= tolerance:
            return [start, end]
        return recurse(start, split)[:-1] + recurse(split, end)

    return recurse(0, len(points) - 1)


def _winding_points(count):
    return [
        Point(
            48.0 + 0.002 * math.sin(idx / 9.0) + 0.0003 * math.sin(idx * 1.7),
            16.0 + idx * 0.0004,
        )
        for idx in range(count)
    ]


@pytest.mark.parametrize("tolerance", [0.0, 0.5, 2.0, 5.0, 10.0, 25.0, 100.0])
@pytest.mark.parametrize(
    "points",
    [make_zigzag_points(300), _winding_points(400)],
    ids=["zigzag", "winding"],
)
def test_matches_recursive_definition(points, tolerance: float) -> None:
    expected = _recursive_rdp_indices(points, tolerance)
    index_of = {point: idx for idx, point in enumerate(points)}

    result = simplify(points, tolerance)

    assert [index_of[point] for point in result] == expected
