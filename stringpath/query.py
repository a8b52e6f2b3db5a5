"""Nearest-point queries against an assembled path."""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import minimize_scalar

from .assembler import assemble
from .config import GeometryConfig, resolve_config
from .logging_utils import apply_debug_logging
from .math_utils import angle_within_sweep, distance, point_on_circle, polar_angle
from .model import (
    Arc,
    Bezier,
    CircleId,
    CircleNode,
    EllipseArc,
    Line,
    MirrorConfig,
    PathData,
    PathHit,
    PathSegment,
    Point,
    is_connector,
)

logger = logging.getLogger(__name__)

Projection = Tuple[float, Point]


def _closest_on_line(probe: Point, seg: Line) -> Projection:
    start = np.asarray(seg.start, dtype=float)
    direction = np.asarray(seg.end, dtype=float) - start
    denom = float(np.dot(direction, direction))
    if denom <= 1e-18:
        return distance(probe, seg.start), seg.start
    t = float(np.dot(np.asarray(probe, dtype=float) - start, direction) / denom)
    t = min(max(t, 0.0), 1.0)
    closest = start + direction * t
    point = (float(closest[0]), float(closest[1]))
    return distance(probe, point), point


def _closest_on_arc(probe: Point, seg: Arc) -> Projection:
    angle = polar_angle(seg.center, probe)
    if angle_within_sweep(angle, seg.start_angle, seg.sweep):
        point = point_on_circle(seg.center, seg.radius, angle)
        return abs(distance(probe, seg.center) - seg.radius), point
    start = point_on_circle(seg.center, seg.radius, seg.start_angle)
    end = point_on_circle(seg.center, seg.radius, seg.end_angle)
    d_start = distance(probe, start)
    d_end = distance(probe, end)
    return (d_start, start) if d_start <= d_end else (d_end, end)


def bezier_points(seg: Bezier, t: np.ndarray) -> np.ndarray:
    """Evaluate the cubic at parameters ``t``; returns an ``(len(t), 2)`` array."""

    controls = np.array([seg.start, seg.cp1, seg.cp2, seg.end], dtype=float)
    mt = 1.0 - t
    basis = np.stack([mt**3, 3.0 * mt**2 * t, 3.0 * mt * t**2, t**3], axis=1)
    return basis @ controls


def ellipse_points(seg: EllipseArc, t: np.ndarray) -> np.ndarray:
    """Evaluate the elliptical arc at ellipse-local parameters ``t``."""

    local = np.stack([seg.radius_x * np.cos(t), seg.radius_y * np.sin(t)], axis=1)
    cos_r = math.cos(seg.rotation)
    sin_r = math.sin(seg.rotation)
    rot = np.array([[cos_r, sin_r], [-sin_r, cos_r]], dtype=float)
    return local @ rot + np.asarray(seg.center, dtype=float)


def _closest_sampled(
    probe: Point,
    evaluate: Callable[[np.ndarray], np.ndarray],
    lo: float,
    hi: float,
    samples: int,
) -> Projection:
    """Best of ``samples + 1`` evenly spaced parameters, refined by a bounded scalar search."""

    params = np.linspace(lo, hi, max(samples, 1) + 1)
    pts = evaluate(params)
    dists = np.hypot(pts[:, 0] - probe[0], pts[:, 1] - probe[1])
    best = int(np.argmin(dists))
    best_dist = float(dists[best])
    best_point = (float(pts[best, 0]), float(pts[best, 1]))

    step = (hi - lo) / max(samples, 1)
    bracket = sorted((params[best] - step, params[best] + step))
    low = max(bracket[0], min(lo, hi))
    high = min(bracket[1], max(lo, hi))
    if high - low <= 1e-12:
        return best_dist, best_point

    def _dist_at(t: float) -> float:
        p = evaluate(np.array([t], dtype=float))[0]
        return float(math.hypot(p[0] - probe[0], p[1] - probe[1]))

    refined = minimize_scalar(_dist_at, bounds=(low, high), method="bounded")
    if refined.success and float(refined.fun) < best_dist:
        p = evaluate(np.array([refined.x], dtype=float))[0]
        return float(refined.fun), (float(p[0]), float(p[1]))
    return best_dist, best_point


def closest_on_segment(
    probe: Point, segment: PathSegment, *, config: Optional[GeometryConfig] = None
) -> Projection:
    """Distance from ``probe`` to ``segment`` and the closest point on it.

    Lines and circular arcs are projected in closed form; curves are sampled
    at a fixed resolution and then refined.
    """

    if isinstance(segment, Line):
        return _closest_on_line(probe, segment)
    if isinstance(segment, Arc):
        return _closest_on_arc(probe, segment)
    cfg = resolve_config(config)
    if isinstance(segment, Bezier):
        return _closest_sampled(
            probe, lambda t: bezier_points(segment, t), 0.0, 1.0, cfg.bezier_samples
        )
    if isinstance(segment, EllipseArc):
        return _closest_sampled(
            probe,
            lambda t: ellipse_points(segment, t),
            segment.start_angle,
            segment.end_angle,
            cfg.ellipse_samples,
        )
    raise TypeError(f"unsupported path segment {type(segment).__name__}")


def map_to_original_index(circle_index: int, original_count: int) -> int:
    """Map an index in the expanded sequence back into the caller's order.

    Indices past the originals mirror back (``2 * count - 1 - index``),
    clamped to the valid range.
    """

    if original_count <= 0:
        return 0
    if circle_index < original_count:
        return circle_index
    mapped = 2 * original_count - 1 - circle_index
    return max(0, min(original_count - 1, mapped))


def nearest_on_path(
    path: PathData,
    probe: Point,
    original_count: int,
    *,
    connectors_only: bool = False,
    threshold: Optional[float] = None,
    config: Optional[GeometryConfig] = None,
) -> Optional[PathHit]:
    """Global nearest hit on ``path``, optionally restricted to connectors within ``threshold``."""

    cfg = resolve_config(config)
    best: Optional[PathHit] = None
    for index, segment in enumerate(path.segments):
        if connectors_only and not is_connector(segment):
            continue
        dist, point = closest_on_segment(probe, segment, config=cfg)
        if threshold is not None and not dist < threshold:
            continue
        if best is None or dist < best.distance:
            best = PathHit(
                segment_index=index,
                point=point,
                from_circle_index=map_to_original_index(segment.circle_index, original_count),
                distance=dist,
            )
    return best


def find_closest_point(
    circles: Sequence[CircleNode],
    order: Sequence[CircleId],
    probe: Point,
    global_stretch: float = 0.0,
    closed: bool = True,
    use_start: bool = True,
    use_end: bool = True,
    mirror: Optional[MirrorConfig] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> Optional[PathHit]:
    """Closest point on the whole path (arcs included) to ``probe``."""

    cfg = resolve_config(config)
    path = assemble(
        circles, order, global_stretch, closed, use_start, use_end, mirror, config=cfg
    )
    if path.is_empty:
        return None
    return nearest_on_path(path, probe, len(order), config=cfg)


def find_segment_at(
    circles: Sequence[CircleNode],
    order: Sequence[CircleId],
    probe: Point,
    threshold: float,
    global_stretch: float = 0.0,
    closed: bool = True,
    use_start: bool = True,
    use_end: bool = True,
    mirror: Optional[MirrorConfig] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> Optional[PathHit]:
    """Closest connector within ``threshold`` of ``probe``, for inserting a circle on the path."""

    cfg = resolve_config(config)
    path = assemble(
        circles, order, global_stretch, closed, use_start, use_end, mirror, config=cfg
    )
    if path.is_empty:
        return None
    return nearest_on_path(
        path, probe, len(order), connectors_only=True, threshold=threshold, config=cfg
    )


__all__ = [
    "bezier_points",
    "closest_on_segment",
    "ellipse_points",
    "find_closest_point",
    "find_segment_at",
    "map_to_original_index",
    "nearest_on_path",
]


apply_debug_logging(globals(), logger=logger, skip={"bezier_points", "ellipse_points"})
