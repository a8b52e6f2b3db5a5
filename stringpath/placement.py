"""Sizing helpers for circles added to an existing layout."""

from __future__ import annotations

from typing import Iterable, Optional

from .config import GeometryConfig
from .math_utils import distance
from .model import CircleNode, MirrorConfig, Point
from .symmetry import mirrored_circles

NON_OVERLAP_MIN_RADIUS = 40.0
NON_OVERLAP_MAX_RADIUS = 120.0
CIRCLE_GAP = 2.0


def non_overlapping_radius(
    center: Point,
    circles: Iterable[CircleNode],
    mirror: Optional[MirrorConfig] = None,
    min_radius: float = NON_OVERLAP_MIN_RADIUS,
    max_radius: float = NON_OVERLAP_MAX_RADIUS,
    gap: float = CIRCLE_GAP,
    *,
    config: Optional[GeometryConfig] = None,
) -> float:
    """Largest radius at ``center`` that clears every circle and mirror ghost by ``gap``.

    The result is clamped to ``[min_radius, max_radius]``, so it may still
    overlap when ``center`` is too crowded.
    """

    circles = list(circles)
    mirror = mirror if mirror is not None else MirrorConfig()
    obstacles = circles + mirrored_circles(circles, mirror, config=config)

    allowed = max_radius
    for circle in obstacles:
        allowed = min(allowed, distance(center, circle.center) - circle.radius - gap)
    return max(min_radius, min(max_radius, allowed))


__all__ = [
    "CIRCLE_GAP",
    "NON_OVERLAP_MAX_RADIUS",
    "NON_OVERLAP_MIN_RADIUS",
    "non_overlapping_radius",
]
