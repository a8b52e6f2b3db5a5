"""Connectors between the exit point of one circle and the entry point of the next."""

from __future__ import annotations

from typing import Optional

from .config import GeometryConfig, resolve_config
from .math_utils import distance, travel_tangent
from .model import DEFAULT_TANGENT_LENGTH, Bezier, Direction, Line, PathSegment, Point


def straight_connector(
    start: Point, end: Point, *, starts_new_subpath: bool = False, circle_index: int = 0
) -> Line:
    return Line(
        start=start,
        end=end,
        length=distance(start, end),
        starts_new_subpath=starts_new_subpath,
        circle_index=circle_index,
    )


def bezier_connector(
    start: Point,
    start_angle: float,
    start_direction: Direction,
    start_length: float,
    end: Point,
    end_angle: float,
    end_direction: Direction,
    end_length: float,
    *,
    starts_new_subpath: bool = False,
    circle_index: int = 0,
    config: Optional[GeometryConfig] = None,
) -> Bezier:
    """Cubic curve leaving ``start`` and arriving at ``end`` along each circle's direction of travel.

    Control points sit on each endpoint's tangent at
    ``chord * tangent_distance_factor * length_multiplier``. The stored
    length averages the chord and the control polygon, which is close
    enough for display and measurement.
    """

    cfg = resolve_config(config)
    chord = distance(start, end)
    reach = chord * cfg.tangent_distance_factor

    t0 = travel_tangent(start_angle, start_direction)
    t1 = travel_tangent(end_angle, end_direction)
    d0 = reach * start_length
    d1 = reach * end_length
    cp1 = (start[0] + t0[0] * d0, start[1] + t0[1] * d0)
    cp2 = (end[0] - t1[0] * d1, end[1] - t1[1] * d1)

    polygon = distance(start, cp1) + distance(cp1, cp2) + distance(cp2, end)
    return Bezier(
        start=start,
        cp1=cp1,
        cp2=cp2,
        end=end,
        length=(chord + polygon) * 0.5,
        starts_new_subpath=starts_new_subpath,
        circle_index=circle_index,
    )


def needs_bezier(
    exit_offset: float, entry_offset: float, exit_length: float, entry_length: float
) -> bool:
    """A straight line keeps tangent continuity only for untouched tangents."""

    return (
        exit_offset != 0.0
        or entry_offset != 0.0
        or exit_length != DEFAULT_TANGENT_LENGTH
        or entry_length != DEFAULT_TANGENT_LENGTH
    )


def build_connector(
    start: Point,
    start_angle: float,
    start_direction: Direction,
    exit_offset: float,
    exit_length: float,
    end: Point,
    end_angle: float,
    end_direction: Direction,
    entry_offset: float,
    entry_length: float,
    *,
    starts_new_subpath: bool = False,
    circle_index: int = 0,
    config: Optional[GeometryConfig] = None,
) -> PathSegment:
    if needs_bezier(exit_offset, entry_offset, exit_length, entry_length):
        return bezier_connector(
            start,
            start_angle,
            start_direction,
            exit_length,
            end,
            end_angle,
            end_direction,
            entry_length,
            starts_new_subpath=starts_new_subpath,
            circle_index=circle_index,
            config=config,
        )
    return straight_connector(
        start, end, starts_new_subpath=starts_new_subpath, circle_index=circle_index
    )


__all__ = [
    "bezier_connector",
    "build_connector",
    "needs_bezier",
    "straight_connector",
]
