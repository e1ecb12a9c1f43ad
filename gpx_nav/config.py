"""Central configuration for the gpx_nav toolkit.

All values are constants imported by the rest of the package. Defaults can be
overridden through environment variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------
# Default tolerance (metres) when converting a recorded track into a route.
# Roughly: 10 keeps most detail, 50 suits navigation waypoints, 100 keeps only
# major direction changes.
SIMPLIFY_TOLERANCE_M = _env_float("GPX_NAV_SIMPLIFY_TOLERANCE_M", 10.0)


# ---------------------------------------------------------------------------
# Track progress thresholds
# ---------------------------------------------------------------------------
# Offset from the track (metres) that counts as a warning / critical detour.
OFF_TRACK_WARN_M = _env_float("GPX_NAV_OFF_TRACK_WARN_M", 100.0)
OFF_TRACK_CRITICAL_M = _env_float("GPX_NAV_OFF_TRACK_CRITICAL_M", 500.0)

# Remaining distance (metres) below which the destination counts as reached.
ARRIVAL_RADIUS_M = _env_float("GPX_NAV_ARRIVAL_RADIUS_M", 50.0)

# Search radius (metres) when snapping a tap/position to a route waypoint.
WAYPOINT_SNAP_RADIUS_M = _env_float("GPX_NAV_WAYPOINT_SNAP_RADIUS_M", 50.0)


# ---------------------------------------------------------------------------
# GPX input/output
# ---------------------------------------------------------------------------
# Reject parsed points outside lat [-90, 90] / lon [-180, 180]. The geometry
# engines never validate on their own.
VALIDATE_COORDINATES = _env_bool("GPX_NAV_VALIDATE_COORDINATES", False)

# Value written to the ``creator`` attribute of exported GPX documents.
GPX_CREATOR = os.getenv("GPX_NAV_CREATOR", "gpx_nav")
