"""Tangent lines connecting consecutive circles of the path."""

from __future__ import annotations

import logging
import math
from typing import Literal, Optional

from .config import GeometryConfig, resolve_config
from .logging_utils import apply_debug_logging
from .math_utils import (
    circle_intersections,
    cross2,
    distance,
    normalize_angle,
    point_on_circle,
    polar_angle,
    vec2,
)
from .model import CircleNode, Direction, Point, TangentResult

logger = logging.getLogger(__name__)

Side = Literal["left", "right"]


def _side_sign(side: Side) -> float:
    return 1.0 if side == "right" else -1.0


def side_for_direction(direction: Direction) -> Side:
    """Tangent side that leaves a circle travelled in ``direction`` toward the next one."""

    return "left" if direction is Direction.CW else "right"


def external_tangent(
    c1: Point,
    r1: float,
    c2: Point,
    r2: float,
    side: Side = "right",
    *,
    config: Optional[GeometryConfig] = None,
) -> Optional[TangentResult]:
    """Tangent touching both circles on the same side of the centre line.

    Returns ``None`` when one circle is nested in the other or the centres
    coincide.
    """

    cfg = resolve_config(config)
    d = distance(c1, c2)
    if d <= cfg.min_chord or d < abs(r1 - r2):
        return None

    # internally touching circles round to just past 1
    cos_delta = max(-1.0, min(1.0, (r1 - r2) / d))

    theta = polar_angle(c1, c2)
    touch = theta + _side_sign(side) * math.acos(cos_delta)
    return TangentResult(
        p1=point_on_circle(c1, r1, touch),
        p2=point_on_circle(c2, r2, touch),
        angle1=normalize_angle(touch),
        angle2=normalize_angle(touch),
    )


def _pick_intersection(
    c1: Point, c2: Point, candidates: list, side: Side, from_reflection: bool
) -> Point:
    if len(candidates) == 1:
        return candidates[0]
    cross0 = cross2(vec2(c1, c2), vec2(c1, candidates[0]))
    # reflection sectors reverse local winding, so the side flips
    effective = side
    if from_reflection:
        effective = "left" if side == "right" else "right"
    if effective == "right":
        return candidates[0] if cross0 < 0 else candidates[1]
    return candidates[0] if cross0 > 0 else candidates[1]


def internal_tangent(
    c1: Point,
    r1: float,
    c2: Point,
    r2: float,
    side: Side = "right",
    from_reflection: bool = False,
    *,
    config: Optional[GeometryConfig] = None,
) -> Optional[TangentResult]:
    """Tangent crossing between the two circles.

    Overlapping circles have no crossing tangent; they are joined at one of
    their intersection points instead (``is_intersection=True``). The choice
    of intersection is a side heuristic that has not been verified for three
    or more mutually overlapping circles.
    """

    cfg = resolve_config(config)
    d = distance(c1, c2)
    if d <= cfg.min_chord:
        return None
    theta = polar_angle(c1, c2)

    if d < r1 + r2:
        candidates = circle_intersections(c1, r1, c2, r2)
        if not candidates:
            return None
        point = _pick_intersection(c1, c2, candidates, side, from_reflection)
        return TangentResult(
            p1=point,
            p2=point,
            angle1=normalize_angle(polar_angle(c1, point)),
            angle2=normalize_angle(polar_angle(c2, point)),
            is_intersection=True,
        )

    sin_gamma = min(1.0, (r1 + r2) / d)

    angle1 = theta + _side_sign(side) * (math.pi / 2.0 - math.asin(sin_gamma))
    angle2 = angle1 + math.pi
    return TangentResult(
        p1=point_on_circle(c1, r1, angle1),
        p2=point_on_circle(c2, r2, angle2),
        angle1=normalize_angle(angle1),
        angle2=normalize_angle(angle2),
    )


def solve_tangent(
    c1: CircleNode,
    c2: CircleNode,
    dir1: Optional[Direction] = None,
    dir2: Optional[Direction] = None,
    c1_is_reflected: Optional[bool] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> Optional[TangentResult]:
    """Connect ``c1`` to ``c2`` for the given traversal directions.

    Directions default to the circles' own, and ``c1_is_reflected`` defaults
    to whether ``c1`` came from a reflection sector. Equal directions use the
    external tangent, opposite directions the internal one.
    """

    dir1 = c1.direction if dir1 is None else Direction.coerce(dir1)
    dir2 = c2.direction if dir2 is None else Direction.coerce(dir2)
    if c1_is_reflected is None:
        c1_is_reflected = c1.is_reflection

    side = side_for_direction(dir1)
    if dir1 is dir2:
        return external_tangent(c1.center, c1.radius, c2.center, c2.radius, side, config=config)
    return internal_tangent(
        c1.center, c1.radius, c2.center, c2.radius, side, c1_is_reflected, config=config
    )


__all__ = [
    "Side",
    "external_tangent",
    "internal_tangent",
    "side_for_direction",
    "solve_tangent",
]


apply_debug_logging(globals(), logger=logger)
