"""Turn-by-turn instruction synthesis for a sequence of route points."""

from __future__ import annotations

import logging
from typing import List, Sequence

from ..geometry.distance import bearing, haversine
from ..models import Instruction, Point, TurnKind
from ..utils import format_distance

_LOG = logging.getLogger(__name__)

# Absolute bearing change (degrees) that must be exceeded for each category.
U_TURN_DEG = 170.0
SHARP_TURN_DEG = 120.0
TURN_DEG = 60.0
SLIGHT_TURN_DEG = 20.0

_TURN_PHRASES = {
    TurnKind.START: "start navigation",
    TurnKind.STRAIGHT: "continue straight",
    TurnKind.SLIGHT_LEFT: "keep slightly left",
    TurnKind.LEFT: "turn left",
    TurnKind.SHARP_LEFT: "turn sharp left",
    TurnKind.SLIGHT_RIGHT: "keep slightly right",
    TurnKind.RIGHT: "turn right",
    TurnKind.SHARP_RIGHT: "turn sharp right",
    TurnKind.U_TURN: "make a U-turn",
    TurnKind.ARRIVE: "arrive at destination",
}


def turn_phrase(turn: TurnKind) -> str:
    """Return the lowercase phrase used inside instruction text."""

    return _TURN_PHRASES[turn]


def normalize_angle(angle: float) -> float:
    """Fold an angle difference into ``[-180, 180]``."""

    while angle > 180.0:
        angle -= 360.0
    while angle < -180.0:
        angle += 360.0
    return angle


def classify_turn(angle: float) -> TurnKind:
    """Classify a relative bearing change; positive angles turn right."""

    magnitude = abs(angle)
    if magnitude > U_TURN_DEG:
        return TurnKind.U_TURN
    if magnitude > SHARP_TURN_DEG:
        return TurnKind.SHARP_RIGHT if angle > 0 else TurnKind.SHARP_LEFT
    if magnitude > TURN_DEG:
        return TurnKind.RIGHT if angle > 0 else TurnKind.LEFT
    if magnitude > SLIGHT_TURN_DEG:
        return TurnKind.SLIGHT_RIGHT if angle > 0 else TurnKind.SLIGHT_LEFT
    return TurnKind.STRAIGHT


def compute_turn(a: Point, b: Point, c: Point) -> TurnKind:
    """Turn at ``b`` when arriving from ``a`` and leaving towards ``c``."""

    angle = normalize_angle(bearing(b, c) - bearing(a, b))
    return classify_turn(angle)


def generate_instructions(points: Sequence[Point]) -> List[Instruction]:
    """Build one instruction per route point.

    The first instruction starts navigation, every interior point gets a turn
    announcement with the distance from the previous point, and the last one
    announces arrival. Fewer than 2 points yield an empty list.
    """

    if len(points) < 2:
        return []

    instructions = [
        Instruction(
            waypoint_index=0,
            distance_m=0.0,
            turn=TurnKind.START,
            text="Start navigation",
        )
    ]
    for i in range(1, len(points) - 1):
        distance = haversine(points[i - 1], points[i])
        turn = compute_turn(points[i - 1], points[i], points[i + 1])
        instructions.append(
            Instruction(
                waypoint_index=i,
                distance_m=distance,
                turn=turn,
                text=f"In {format_distance(distance)}, {turn_phrase(turn)}",
            )
        )

    last = len(points) - 1
    distance = haversine(points[last - 1], points[last])
    instructions.append(
        Instruction(
            waypoint_index=last,
            distance_m=distance,
            turn=TurnKind.ARRIVE,
            text=f"In {format_distance(distance)}, {turn_phrase(TurnKind.ARRIVE)}",
        )
    )
    _LOG.debug("Generated %d instructions", len(instructions))
    return instructions


__all__ = [
    "classify_turn",
    "compute_turn",
    "generate_instructions",
    "normalize_angle",
    "turn_phrase",
]
