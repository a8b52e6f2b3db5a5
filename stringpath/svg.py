"""SVG export of an assembled path."""

from __future__ import annotations

import math
from typing import List, Optional, Tuple

import numpy as np

from .arcs import ellipse_point
from .math_utils import distance, point_on_circle
from .model import Arc, Bezier, EllipseArc, Line, PathData, PathSegment, Point
from .query import bezier_points, ellipse_points

Bounds = Tuple[float, float, float, float]

_CONTINUITY_EPS = 1e-6

svg_tpl = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="%s">
  <path d="%s" fill="none" stroke="%s" stroke-width="%s" stroke-linejoin="round"/>
</svg>
"""


def _format_float(value: float, precision: int) -> str:
    if math.isnan(value) or math.isinf(value):
        raise ValueError("Cannot format non-finite float for SVG output")
    formatted = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if formatted in ("", "-0"):
        return "0"
    return formatted


def _segment_start(segment: PathSegment) -> Point:
    if isinstance(segment, Arc):
        return point_on_circle(segment.center, segment.radius, segment.start_angle)
    if isinstance(segment, EllipseArc):
        return ellipse_point(segment, segment.start_angle)
    return segment.start


def _segment_end(segment: PathSegment) -> Point:
    if isinstance(segment, Arc):
        return point_on_circle(segment.center, segment.radius, segment.end_angle)
    if isinstance(segment, EllipseArc):
        return ellipse_point(segment, segment.end_angle)
    return segment.end


def _arc_commands(seg: Arc, fmt) -> List[str]:
    r = fmt(seg.radius)
    sweep_flag = 1 if seg.sweep > 0 else 0
    if abs(seg.sweep) >= 2.0 * math.pi - 1e-9:
        # a single A command cannot draw a closed circle
        mid = point_on_circle(seg.center, seg.radius, seg.start_angle + seg.sweep * 0.5)
        end = point_on_circle(seg.center, seg.radius, seg.end_angle)
        return [
            f"A {r} {r} 0 0 {sweep_flag} {fmt(mid[0])} {fmt(mid[1])}",
            f"A {r} {r} 0 0 {sweep_flag} {fmt(end[0])} {fmt(end[1])}",
        ]
    large = 1 if abs(seg.sweep) > math.pi else 0
    end = _segment_end(seg)
    return [f"A {r} {r} 0 {large} {sweep_flag} {fmt(end[0])} {fmt(end[1])}"]


def _ellipse_commands(seg: EllipseArc, fmt) -> List[str]:
    end = _segment_end(seg)
    sweep_flag = 1 if seg.end_angle > seg.start_angle else 0
    rotation = math.degrees(seg.rotation)
    return [
        f"A {fmt(seg.radius_x)} {fmt(seg.radius_y)} {fmt(rotation)} 0 {sweep_flag} "
        f"{fmt(end[0])} {fmt(end[1])}"
    ]


def path_to_svg_d(path: PathData, closed: bool = False, precision: int = 3) -> str:
    """Render ``path`` as SVG path data using ``M/L/C/A`` commands.

    ``Z`` is appended when ``closed`` is set and the path returns to its
    first point without a break.
    """

    def fmt(value: float) -> str:
        return _format_float(value, precision)

    commands: List[str] = []
    pen: Optional[Point] = None
    for segment in path.segments:
        start = _segment_start(segment)
        if segment.starts_new_subpath or pen is None or distance(pen, start) > _CONTINUITY_EPS:
            commands.append(f"M {fmt(start[0])} {fmt(start[1])}")
        if isinstance(segment, Line):
            commands.append(f"L {fmt(segment.end[0])} {fmt(segment.end[1])}")
        elif isinstance(segment, Bezier):
            commands.append(
                "C "
                + " ".join(
                    f"{fmt(p[0])} {fmt(p[1])}" for p in (segment.cp1, segment.cp2, segment.end)
                )
            )
        elif isinstance(segment, Arc):
            commands.extend(_arc_commands(segment, fmt))
        elif isinstance(segment, EllipseArc):
            commands.extend(_ellipse_commands(segment, fmt))
        pen = _segment_end(segment)

    if closed and commands and path.subpath_count() == 1 and pen is not None:
        if distance(pen, _segment_start(path.segments[0])) <= _CONTINUITY_EPS:
            commands.append("Z")
    return " ".join(commands)


def _sample_segment(segment: PathSegment, samples: int) -> np.ndarray:
    if isinstance(segment, Line):
        return np.array([segment.start, segment.end], dtype=float)
    if isinstance(segment, Bezier):
        return bezier_points(segment, np.linspace(0.0, 1.0, samples + 1))
    if isinstance(segment, EllipseArc):
        return ellipse_points(segment, np.linspace(segment.start_angle, segment.end_angle, samples + 1))
    angles = np.linspace(segment.start_angle, segment.end_angle, samples + 1)
    return np.stack(
        [
            segment.center[0] + segment.radius * np.cos(angles),
            segment.center[1] + segment.radius * np.sin(angles),
        ],
        axis=1,
    )


def path_bounds(path: PathData, samples: int = 64) -> Optional[Bounds]:
    """Axis-aligned ``(min_x, min_y, max_x, max_y)`` of the sampled path, or ``None`` when empty."""

    if path.is_empty:
        return None
    pts = np.concatenate([_sample_segment(seg, samples) for seg in path.segments], axis=0)
    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1])


def render_svg_document(
    path: PathData,
    closed: bool = False,
    *,
    stroke: str = "#1f77b4",
    stroke_width: float = 2.0,
    padding: float = 0.1,
    precision: int = 3,
) -> str:
    """Standalone SVG document with a viewBox padded by ``padding`` of the larger extent."""

    bounds = path_bounds(path)
    if bounds is None:
        bounds = (0.0, 0.0, 1.0, 1.0)
    min_x, min_y, max_x, max_y = bounds
    pad = max(max_x - min_x, max_y - min_y, 1.0) * padding
    view_box = " ".join(
        _format_float(v, precision)
        for v in (min_x - pad, min_y - pad, max_x - min_x + 2 * pad, max_y - min_y + 2 * pad)
    )
    return svg_tpl % (
        view_box,
        path_to_svg_d(path, closed=closed, precision=precision),
        stroke,
        _format_float(stroke_width, precision),
    )


__all__ = ["Bounds", "path_bounds", "path_to_svg_d", "render_svg_document"]
