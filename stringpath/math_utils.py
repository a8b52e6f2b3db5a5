"""Small 2D helpers and the direction/angle conventions used everywhere."""

from __future__ import annotations

import math
from typing import List, Optional

from .model import Direction, Point

TAU = 2.0 * math.pi

_DENOM_EPS = 1e-12


def vec2(a: Point, b: Point) -> Point:
    return b[0] - a[0], b[1] - a[1]


def dot2(a: Point, b: Point) -> float:
    return a[0] * b[0] + a[1] * b[1]


def cross2(a: Point, b: Point) -> float:
    return a[0] * b[1] - a[1] * b[0]


def distance(a: Point, b: Point) -> float:
    return math.hypot(b[0] - a[0], b[1] - a[1])


def midpoint2(a: Point, b: Point) -> Point:
    return (a[0] + b[0]) * 0.5, (a[1] + b[1]) * 0.5


def rotate90(v: Point) -> Point:
    return -v[1], v[0]


def polar_angle(origin: Point, target: Point) -> float:
    return math.atan2(target[1] - origin[1], target[0] - origin[0])


def point_on_circle(center: Point, radius: float, angle: float) -> Point:
    return center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle)


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` into ``[0, 2π)``."""

    wrapped = angle % TAU
    if wrapped >= TAU:
        return 0.0
    return wrapped


def direction_sign(direction: Direction) -> float:
    """Polar-angle sign of travel: ``+1`` for CW, ``-1`` for CCW.

    Offsets, arc sweeps, bezier tangents and arc hit-testing all derive
    their orientation from this mapping.
    """

    return 1.0 if direction is Direction.CW else -1.0


def travel_tangent(angle: float, direction: Direction) -> Point:
    """Unit velocity of the path at polar ``angle`` on a circle travelled in ``direction``."""

    sign = direction_sign(direction)
    return -sign * math.sin(angle), sign * math.cos(angle)


def signed_sweep(start: float, end: float, direction: Direction) -> float:
    """Signed angular travel from ``start`` to ``end`` in ``direction``.

    The magnitude lies in ``[0, 2π)``; the sign follows :func:`direction_sign`.
    """

    if direction is Direction.CW:
        return normalize_angle(end - start)
    return -normalize_angle(start - end)


def angle_within_sweep(angle: float, start: float, sweep: float) -> bool:
    """Return ``True`` when polar ``angle`` lies on the arc ``start .. start + sweep``."""

    if abs(sweep) >= TAU:
        return True
    if sweep >= 0.0:
        return normalize_angle(angle - start) <= sweep
    return normalize_angle(start - angle) <= -sweep


def rotate_point(point: Point, angle: float) -> Point:
    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    return point[0] * cos_a - point[1] * sin_a, point[0] * sin_a + point[1] * cos_a


def reflect_point(point: Point, line_angle: float) -> Point:
    """Reflect ``point`` across the line through the origin at ``line_angle``."""

    cos2 = math.cos(2.0 * line_angle)
    sin2 = math.sin(2.0 * line_angle)
    return point[0] * cos2 + point[1] * sin2, point[0] * sin2 - point[1] * cos2


def same_position(a: Point, b: Point, tolerance: float) -> bool:
    return abs(a[0] - b[0]) < tolerance and abs(a[1] - b[1]) < tolerance


def circle_intersections(c1: Point, r1: float, c2: Point, r2: float) -> Optional[List[Point]]:
    """Return the one or two intersection points of two circles, or ``None``.

    ``None`` covers disjoint circles, nested circles and concentric circles.
    """

    d = distance(c1, c2)
    if d > r1 + r2:
        return None
    if d < abs(r1 - r2):
        return None
    if d <= _DENOM_EPS:
        return None

    a = (r1 * r1 - r2 * r2 + d * d) / (2.0 * d)
    h_sq = r1 * r1 - a * a
    ux = (c2[0] - c1[0]) / d
    uy = (c2[1] - c1[1]) / d
    if h_sq <= 0.0:
        # tangent circles, h_sq may dip below zero through rounding
        return [(c1[0] + a * ux, c1[1] + a * uy)]

    h = math.sqrt(h_sq)
    px = c1[0] + a * ux
    py = c1[1] + a * uy
    return [
        (px + h * uy, py - h * ux),
        (px - h * uy, py + h * ux),
    ]


def ramanujan_perimeter(radius_x: float, radius_y: float) -> float:
    """Ramanujan's second approximation of an ellipse circumference."""

    a = max(radius_x, radius_y)
    b = min(radius_x, radius_y)
    if a + b <= _DENOM_EPS:
        return 0.0
    h = ((a - b) / (a + b)) ** 2
    return math.pi * (a + b) * (1.0 + (3.0 * h) / (10.0 + math.sqrt(4.0 - 3.0 * h)))


__all__ = [
    "TAU",
    "angle_within_sweep",
    "circle_intersections",
    "cross2",
    "direction_sign",
    "distance",
    "dot2",
    "midpoint2",
    "normalize_angle",
    "point_on_circle",
    "polar_angle",
    "ramanujan_perimeter",
    "reflect_point",
    "rotate90",
    "rotate_point",
    "same_position",
    "signed_sweep",
    "travel_tangent",
    "vec2",
]
