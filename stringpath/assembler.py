"""Assembly of the tangent hull: one arc per circle plus a connector to the next."""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, List, Optional, Sequence

from .arcs import build_arc, full_circle_arc
from .config import GeometryConfig, HullOptions, resolve_config
from .connectors import build_connector
from .logging_utils import apply_debug_logging
from .math_utils import direction_sign, point_on_circle
from .model import CircleId, CircleNode, MirrorConfig, PathData, PathSegment, TangentResult
from .symmetry import expand
from .tangent import solve_tangent

logger = logging.getLogger(__name__)

StretchResolver = Callable[[CircleId], float]


def resolve_stretch(circle: CircleNode, global_stretch: float) -> float:
    """Per-circle stretch override, else the global value."""

    return circle.stretch if circle.stretch is not None else global_stretch


def make_stretch_resolver(circles: Iterable[CircleNode], global_stretch: float) -> StretchResolver:
    """Return ``circle_id -> stretch``; unknown ids resolve to ``global_stretch``."""

    lookup = {circle.id: circle for circle in circles}

    def _resolve(circle_id: CircleId) -> float:
        circle = lookup.get(circle_id)
        if circle is None:
            return global_stretch
        return resolve_stretch(circle, global_stretch)

    return _resolve


def compute_tangents(
    ordered: Sequence[CircleNode], *, config: Optional[GeometryConfig] = None
) -> List[Optional[TangentResult]]:
    """Tangent from every circle to its successor, wrapping around at the end."""

    n = len(ordered)
    return [solve_tangent(ordered[i], ordered[(i + 1) % n], config=config) for i in range(n)]


class _SegmentSink:
    """Collects valid segments; a dropped segment or a gap breaks the sub-path."""

    def __init__(self) -> None:
        self.segments: List[PathSegment] = []
        self.total_length = 0.0
        self.break_pending = True

    def push(self, build: Callable[[bool], PathSegment]) -> bool:
        segment = build(self.break_pending)
        if not segment.is_valid():
            logger.debug("Dropping invalid %s at circle %d", segment.kind, segment.circle_index)
            self.break_pending = True
            return False
        self.segments.append(segment)
        self.total_length += segment.length
        self.break_pending = False
        return True

    def gap(self) -> None:
        self.break_pending = True

    def result(self) -> PathData:
        return PathData(segments=self.segments, total_length=self.total_length)


def _valid_input(ordered: Sequence[CircleNode]) -> bool:
    for circle in ordered:
        if not circle.is_finite or circle.radius <= 0.0:
            logger.warning("Circle %s has invalid geometry; returning an empty path", circle.id)
            return False
    return True


def _push_connector(
    sink: _SegmentSink,
    index: int,
    circle: CircleNode,
    exit_angle: float,
    nxt: CircleNode,
    tangent: TangentResult,
    cfg: GeometryConfig,
) -> None:
    exit_point = point_on_circle(circle.center, circle.radius, exit_angle)
    entry_angle = tangent.angle2 + nxt.entry_offset * direction_sign(nxt.direction)
    entry_point = point_on_circle(nxt.center, nxt.radius, entry_angle)
    sink.push(
        lambda brk: build_connector(
            exit_point,
            exit_angle,
            circle.direction,
            circle.exit_offset,
            circle.exit_tangent_length,
            entry_point,
            entry_angle,
            nxt.direction,
            nxt.entry_offset,
            nxt.entry_tangent_length,
            starts_new_subpath=brk,
            circle_index=index,
            config=cfg,
        )
    )


def assemble(
    circles: Sequence[CircleNode],
    order: Sequence[CircleId],
    global_stretch: float = 0.0,
    closed: bool = True,
    use_start: bool = True,
    use_end: bool = True,
    mirror: Optional[MirrorConfig] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> PathData:
    """Compute the tangent hull around ``circles`` visited in ``order``.

    Mirrored circles are expanded first. On open paths ``use_start`` and
    ``use_end`` decide whether the first and last circles are wrapped by a
    half-turn arc (entry opposite the exit) or only touched by their single
    connector. Unsolvable tangents leave a gap: the next emitted segment
    starts a new sub-path.
    """

    cfg = resolve_config(config)
    mirror = mirror if mirror is not None else MirrorConfig()
    ordered = expand(circles, order, mirror, config=cfg).ordered()

    if not ordered or not _valid_input(ordered):
        return PathData()

    n = len(ordered)
    if n == 1:
        circle = ordered[0]
        arc = full_circle_arc(circle.center, circle.radius, circle.direction)
        return PathData(segments=[arc], total_length=arc.length)

    tangents = compute_tangents(ordered, config=cfg)
    sink = _SegmentSink()

    for i, circle in enumerate(ordered):
        is_first = i == 0
        is_last = i == n - 1
        curr = tangents[i]
        prev = tangents[(i - 1) % n]
        nxt = ordered[(i + 1) % n]
        sign = direction_sign(circle.direction)

        if not closed and is_first and not use_start:
            if curr is None:
                sink.gap()
                continue
            exit_angle = curr.angle1 + circle.exit_offset * sign
            _push_connector(sink, i, circle, exit_angle, nxt, curr, cfg)
            continue

        if not closed and is_last and not use_end:
            continue

        open_first = not closed and is_first and use_start
        open_last = not closed and is_last and use_end

        if open_first and curr is not None:
            entry_angle = curr.angle1 + math.pi
        elif prev is not None:
            entry_angle = prev.angle2
        elif curr is not None:
            entry_angle = curr.angle1 + math.pi
        else:
            sink.gap()
            continue

        if open_last and prev is not None:
            exit_angle = prev.angle2 + math.pi
        elif curr is not None:
            exit_angle = curr.angle1
        else:
            exit_angle = entry_angle + math.pi

        entry_angle += circle.entry_offset * sign
        exit_angle += circle.exit_offset * sign
        stretch = resolve_stretch(circle, global_stretch)

        sink.push(
            lambda brk: build_arc(
                circle.center,
                circle.radius,
                entry_angle,
                exit_angle,
                circle.direction,
                stretch,
                starts_new_subpath=brk,
                circle_index=i,
                config=cfg,
            )
        )

        if not closed and is_last:
            continue
        if curr is None:
            sink.gap()
            continue
        _push_connector(sink, i, circle, exit_angle, nxt, curr, cfg)

    path = sink.result()
    logger.debug(
        "Assembled %d segment(s) over %d circle(s), total length %.6g",
        len(path.segments),
        n,
        path.total_length,
    )
    return path


def compute_tangent_hull(
    circles: Sequence[CircleNode],
    order: Sequence[CircleId],
    options: Optional[HullOptions] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> PathData:
    """Options-based entry point over :func:`assemble`."""

    options = options or HullOptions()
    return assemble(
        circles,
        order,
        options.global_stretch,
        options.closed,
        options.use_start,
        options.use_end,
        options.mirror,
        config=config,
    )


__all__ = [
    "StretchResolver",
    "assemble",
    "compute_tangent_hull",
    "compute_tangents",
    "make_stretch_resolver",
    "resolve_stretch",
]


apply_debug_logging(globals(), logger=logger)
