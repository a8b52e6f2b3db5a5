"""Core data structures shared by the tangent-hull pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

Point = Tuple[float, float]
CircleId = str

DEFAULT_TANGENT_LENGTH = 1.0
MIN_TANGENT_LENGTH = 0.1
MAX_TANGENT_LENGTH = 3.0


class Direction(str, Enum):
    """Traversal direction of the path around a circle.

    World coordinates are y-down, so ``CW`` travels with increasing polar
    angle and ``CCW`` with decreasing polar angle.
    """

    CW = "cw"
    CCW = "ccw"

    @classmethod
    def coerce(cls, value: object) -> "Direction":
        if isinstance(value, Direction):
            return value
        if isinstance(value, str):
            return cls(value.strip().lower())
        raise ValueError(f"unknown direction {value!r}")


@dataclass(frozen=True)
class CircleNode:
    """A circle the path wraps around, with its per-circle path parameters."""

    id: CircleId
    center: Point
    radius: float
    direction: Direction = Direction.CW
    entry_offset: float = 0.0
    exit_offset: float = 0.0
    entry_tangent_length: float = DEFAULT_TANGENT_LENGTH
    exit_tangent_length: float = DEFAULT_TANGENT_LENGTH
    stretch: Optional[float] = None
    mirrored: bool = False
    # provenance of symmetry-generated copies; sector 0 is the original
    source_id: Optional[CircleId] = None
    sector: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", (float(self.center[0]), float(self.center[1])))
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "direction", Direction.coerce(self.direction))
        object.__setattr__(self, "entry_offset", float(self.entry_offset))
        object.__setattr__(self, "exit_offset", float(self.exit_offset))
        object.__setattr__(self, "entry_tangent_length", float(self.entry_tangent_length))
        object.__setattr__(self, "exit_tangent_length", float(self.exit_tangent_length))
        if self.stretch is not None:
            object.__setattr__(self, "stretch", float(self.stretch))

    @property
    def is_mirror_copy(self) -> bool:
        return self.source_id is not None

    @property
    def is_reflection(self) -> bool:
        """``True`` for copies generated by a reflection (odd) sector."""

        return self.sector % 2 == 1

    @property
    def is_finite(self) -> bool:
        return (
            math.isfinite(self.center[0])
            and math.isfinite(self.center[1])
            and math.isfinite(self.radius)
        )


@dataclass(frozen=True)
class MirrorConfig:
    """Dihedral mirror configuration: ``plane_count`` planes from ``start_angle``.

    ``plane_count == 0`` disables mirroring.
    """

    plane_count: int = 1
    start_angle: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "plane_count", max(0, int(self.plane_count)))
        object.__setattr__(self, "start_angle", float(self.start_angle))

    @property
    def enabled(self) -> bool:
        return self.plane_count > 0

    @property
    def sector_count(self) -> int:
        return 2 * self.plane_count

    @property
    def sector_angle(self) -> float:
        return math.pi / self.plane_count if self.plane_count else 0.0


@dataclass(frozen=True)
class TangentResult:
    """Contact points connecting one circle to the next.

    ``angle1``/``angle2`` are polar angles on the first/second circle in
    ``[0, 2π)``. When the circles overlap, both points are the same
    intersection point and ``is_intersection`` is set.
    """

    p1: Point
    p2: Point
    angle1: float
    angle2: float
    is_intersection: bool = False


def _all_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


@dataclass(frozen=True)
class Arc:
    """Circular arc; ``end_angle - start_angle`` is the signed sweep travelled."""

    center: Point
    radius: float
    start_angle: float
    end_angle: float
    ccw: bool
    length: float
    starts_new_subpath: bool = False
    circle_index: int = 0

    kind = "arc"

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    def is_valid(self) -> bool:
        return _all_finite(
            self.center[0], self.center[1], self.radius, self.start_angle, self.end_angle, self.length
        )


@dataclass(frozen=True)
class EllipseArc:
    """Half-ellipse from local parameter ``start_angle`` (π) to ``end_angle`` (0 or 2π)."""

    center: Point
    radius_x: float
    radius_y: float
    rotation: float
    start_angle: float
    end_angle: float
    ccw: bool
    length: float
    starts_new_subpath: bool = False
    circle_index: int = 0

    kind = "ellipse-arc"

    def is_valid(self) -> bool:
        return _all_finite(
            self.center[0],
            self.center[1],
            self.radius_x,
            self.radius_y,
            self.rotation,
            self.start_angle,
            self.end_angle,
            self.length,
        )


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    length: float
    starts_new_subpath: bool = False
    circle_index: int = 0

    kind = "line"

    def is_valid(self) -> bool:
        return _all_finite(self.start[0], self.start[1], self.end[0], self.end[1], self.length)


@dataclass(frozen=True)
class Bezier:
    start: Point
    cp1: Point
    cp2: Point
    end: Point
    length: float
    starts_new_subpath: bool = False
    circle_index: int = 0

    kind = "bezier"

    def is_valid(self) -> bool:
        coords = (*self.start, *self.cp1, *self.cp2, *self.end)
        return _all_finite(*coords, self.length)


PathSegment = Union[Arc, EllipseArc, Line, Bezier]
CONNECTOR_TYPES = (Line, Bezier)
ARC_TYPES = (Arc, EllipseArc)


def is_connector(segment: PathSegment) -> bool:
    return isinstance(segment, CONNECTOR_TYPES)


@dataclass
class PathData:
    """Ordered path segments plus their accumulated length."""

    segments: List[PathSegment] = field(default_factory=list)
    total_length: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def arcs(self) -> List[PathSegment]:
        return [seg for seg in self.segments if isinstance(seg, ARC_TYPES)]

    @property
    def connectors(self) -> List[PathSegment]:
        return [seg for seg in self.segments if isinstance(seg, CONNECTOR_TYPES)]

    def subpath_count(self) -> int:
        return sum(1 for seg in self.segments if seg.starts_new_subpath)


@dataclass(frozen=True)
class PathHit:
    """Closest-point hit on an assembled path.

    ``from_circle_index`` is expressed in the caller's original order: a new
    circle inserted at the hit belongs at position ``from_circle_index + 1``.
    """

    segment_index: int
    point: Point
    from_circle_index: int
    distance: float


__all__ = [
    "ARC_TYPES",
    "Arc",
    "Bezier",
    "CONNECTOR_TYPES",
    "CircleId",
    "CircleNode",
    "DEFAULT_TANGENT_LENGTH",
    "Direction",
    "EllipseArc",
    "Line",
    "MAX_TANGENT_LENGTH",
    "MIN_TANGENT_LENGTH",
    "MirrorConfig",
    "PathData",
    "PathHit",
    "PathSegment",
    "Point",
    "TangentResult",
    "is_connector",
]
