"""Central error types used across the application."""

from __future__ import annotations


class GpxNavError(RuntimeError):
    """Base error for failures reported by gpx_nav."""


class GpxParseError(GpxNavError):
    """Raised when a GPX document cannot be read into the data model."""


class BridgeError(GpxNavError):
    """Raised when a JSON payload does not describe the expected structure."""


class CoordinateRangeError(GpxNavError, ValueError):
    """Raised by the optional coordinate guard for out-of-range lat/lon."""


__all__ = [
    "BridgeError",
    "CoordinateRangeError",
    "GpxNavError",
    "GpxParseError",
]
