"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable GPX documents and tracks so
geometry, bridge and CLI tests share the same inputs.
"""
from __future__ import annotations

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gpx_nav.models import Point, Track


MINIMAL_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test"
     xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Test Track</name>
    <trkseg>
      <trkpt lat="48.2082" lon="16.3738"><ele>171</ele></trkpt>
      <trkpt lat="48.2090" lon="16.3750"><ele>173</ele></trkpt>
      <trkpt lat="48.2100" lon="16.3760"><ele>170</ele></trkpt>
    </trkseg>
  </trk>
  <rte>
    <name>Test Route</name>
    <rtept lat="48.2000" lon="16.3500"></rtept>
    <rtept lat="48.2100" lon="16.3600"></rtept>
  </rte>
  <wpt lat="48.2082" lon="16.3738">
    <name>Vienna</name>
    <ele>171</ele>
    <sym>fuel</sym>
  </wpt>
</gpx>"""


# --- Factory helpers -------------------------------------------------
def make_l_shaped_points():
    """East along 48.0N, then north along 16.02E."""
    return [
        Point(48.0, 16.0),
        Point(48.0, 16.01),
        Point(48.0, 16.02),
        Point(48.01, 16.02),
        Point(48.02, 16.02),
    ]


def make_zigzag_points(count=41):
    """Eastbound track wobbling north/south by a varying amount."""
    points = []
    for idx in range(count):
        wobble = ((idx * 7) % 5 - 2) * 0.0001 * (1 + idx % 3)
        points.append(Point(48.0 + wobble, 16.0 + idx * 0.0005))
    return points


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def minimal_gpx() -> str:
    return MINIMAL_GPX


@pytest.fixture
def l_shaped_track() -> Track:
    return Track(name="L", points=make_l_shaped_points())


@pytest.fixture
def zigzag_points():
    return make_zigzag_points()


@pytest.fixture
def gpx_file(tmp_path):
    path = tmp_path / "sample.gpx"
    path.write_text(MINIMAL_GPX, encoding="utf-8")
    return path
