"""General utility helpers shared across modules."""

from __future__ import annotations

import json
import math
from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any


def format_distance(meters: float) -> str:
    """Format metres as ``"2.5 km"`` from 1 km upwards, else ``"150 m"``.

    Distances below a kilometre are rounded to the nearest 10 m with halves
    rounding away from zero, so ``5.0`` renders as ``"10 m"``. ``NaN`` and
    negative infinity render as ``"0 m"``.
    """

    if meters >= 1000.0:
        return f"{meters / 1000.0:.1f} km"
    if not math.isfinite(meters):
        return "0 m"
    tens = math.copysign(math.floor(abs(meters) / 10.0 + 0.5), meters)
    return f"{int(tens) * 10} m"


def _normalise_value(value: Any) -> Any:
    """Convert model objects to JSON-friendly representations.

    Dataclass fields holding ``None`` are dropped so optional values such as
    ``ele`` or ``name`` disappear from the payload instead of becoming null.
    """

    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        result = {}
        for item in fields(value):
            field_value = getattr(value, item.name)
            if field_value is None:
                continue
            result[item.name] = _normalise_value(field_value)
        return result
    if isinstance(value, (list, tuple)):
        return [_normalise_value(item) for item in value]
    if isinstance(value, dict):
        return {str(key): _normalise_value(val) for key, val in value.items()}
    return value


def json_dumps(value: Any) -> str:
    """Return compact JSON for model objects and plain containers.

    Raises ``ValueError`` for NaN or infinite floats, which strict JSON
    parsers reject.
    """

    return json.dumps(_normalise_value(value), separators=(",", ":"), allow_nan=False)

