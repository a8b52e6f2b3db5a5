"""Arc construction around a single circle, circular or stretched into an ellipse."""

from __future__ import annotations

import math
from typing import Optional

from .config import GeometryConfig, resolve_config
from .math_utils import (
    distance,
    dot2,
    midpoint2,
    point_on_circle,
    polar_angle,
    ramanujan_perimeter,
    rotate90,
    signed_sweep,
    vec2,
)
from .model import Arc, Direction, EllipseArc, PathSegment, Point


def circular_arc(
    center: Point,
    radius: float,
    entry_angle: float,
    exit_angle: float,
    direction: Direction,
    *,
    starts_new_subpath: bool = False,
    circle_index: int = 0,
) -> Arc:
    """Arc from ``entry_angle`` to ``exit_angle`` travelled in ``direction``."""

    sweep = signed_sweep(entry_angle, exit_angle, direction)
    return Arc(
        center=center,
        radius=radius,
        start_angle=entry_angle,
        end_angle=entry_angle + sweep,
        ccw=direction is Direction.CCW,
        length=radius * abs(sweep),
        starts_new_subpath=starts_new_subpath,
        circle_index=circle_index,
    )


def full_circle_arc(center: Point, radius: float, direction: Direction, *, circle_index: int = 0) -> Arc:
    sweep = 2.0 * math.pi if direction is Direction.CW else -2.0 * math.pi
    return Arc(
        center=center,
        radius=radius,
        start_angle=0.0,
        end_angle=sweep,
        ccw=direction is Direction.CCW,
        length=radius * abs(sweep),
        starts_new_subpath=True,
        circle_index=circle_index,
    )


def stretched_arc(
    center: Point,
    radius: float,
    entry_angle: float,
    exit_angle: float,
    direction: Direction,
    stretch: float,
    *,
    starts_new_subpath: bool = False,
    circle_index: int = 0,
    config: Optional[GeometryConfig] = None,
) -> EllipseArc:
    """Half-ellipse through the entry and exit points of a circular arc.

    The ellipse is centred on the chord midpoint with its local X axis along
    the chord, so ``radius_x`` (half the chord) puts both endpoints exactly
    on it. ``radius_y`` is the circular arc's sagitta scaled by
    ``1 + stretch`` and clamped to ``min_sagitta``.
    """

    cfg = resolve_config(config)
    entry = point_on_circle(center, radius, entry_angle)
    exit_ = point_on_circle(center, radius, exit_angle)

    chord_mid = midpoint2(entry, exit_)
    half_chord = max(distance(entry, exit_) * 0.5, cfg.min_chord)
    chord_angle = polar_angle(entry, exit_)

    sweep = signed_sweep(entry_angle, exit_angle, direction)
    arc_mid = point_on_circle(center, radius, entry_angle + sweep * 0.5)
    sagitta = distance(chord_mid, arc_mid)
    radius_y = max(cfg.min_sagitta, sagitta * (1.0 + stretch))

    # which side of the chord the original arc bulges toward
    perp = rotate90((math.cos(chord_angle), math.sin(chord_angle)))
    bulge = dot2(vec2(chord_mid, arc_mid), perp)
    ccw = bulge > 0.0

    return EllipseArc(
        center=chord_mid,
        radius_x=half_chord,
        radius_y=radius_y,
        rotation=chord_angle,
        start_angle=math.pi,
        end_angle=0.0 if ccw else 2.0 * math.pi,
        ccw=ccw,
        length=ramanujan_perimeter(half_chord, radius_y) * 0.5,
        starts_new_subpath=starts_new_subpath,
        circle_index=circle_index,
    )


def ellipse_point(segment: EllipseArc, t: float) -> Point:
    """Point at ellipse-local parameter ``t``."""

    lx = segment.radius_x * math.cos(t)
    ly = segment.radius_y * math.sin(t)
    cos_r = math.cos(segment.rotation)
    sin_r = math.sin(segment.rotation)
    return (
        segment.center[0] + lx * cos_r - ly * sin_r,
        segment.center[1] + lx * sin_r + ly * cos_r,
    )


def build_arc(
    center: Point,
    radius: float,
    entry_angle: float,
    exit_angle: float,
    direction: Direction,
    stretch: float,
    *,
    starts_new_subpath: bool = False,
    circle_index: int = 0,
    config: Optional[GeometryConfig] = None,
) -> PathSegment:
    """Circular arc, or a stretched elliptical arc when ``|stretch|`` is significant."""

    cfg = resolve_config(config)
    if abs(stretch) < cfg.stretch_epsilon:
        return circular_arc(
            center,
            radius,
            entry_angle,
            exit_angle,
            direction,
            starts_new_subpath=starts_new_subpath,
            circle_index=circle_index,
        )
    return stretched_arc(
        center,
        radius,
        entry_angle,
        exit_angle,
        direction,
        stretch,
        starts_new_subpath=starts_new_subpath,
        circle_index=circle_index,
        config=cfg,
    )


__all__ = [
    "build_arc",
    "circular_arc",
    "ellipse_point",
    "full_circle_arc",
    "stretched_arc",
]
