"""Dihedral mirror expansion of the circle sequence.

A mirror configuration with ``N`` planes defines ``2N`` sectors. Even
sectors are rotations by ``sector * π/N``; odd sectors are reflections
across the plane at ``start_angle + ceil(sector/2) * π/N``. Every circle
flagged ``mirrored`` is replicated into each non-identity sector, and the
copies are spliced into the path order so the whole symmetric figure is
traversed as one loop around its outer boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence

from .config import GeometryConfig, resolve_config
from .logging_utils import apply_debug_logging
from .math_utils import reflect_point, rotate_point, same_position
from .model import CircleId, CircleNode, MirrorConfig, Point

logger = logging.getLogger(__name__)


@dataclass
class SymmetryExpansion:
    """Base circles plus their mirror copies, and the path order over them."""

    circles: List[CircleNode]
    order: List[CircleId]

    def ordered(self) -> List[CircleNode]:
        lookup = {circle.id: circle for circle in self.circles}
        return [lookup[cid] for cid in self.order if cid in lookup]


def sector_plane_angle(sector: int, mirror: MirrorConfig) -> float:
    """Angle of the reflection plane used by odd ``sector``."""

    plane_index = ((sector + 1) // 2) % mirror.plane_count
    return mirror.start_angle + plane_index * mirror.sector_angle


def transform_point(point: Point, sector: int, mirror: MirrorConfig) -> Point:
    if sector % 2 == 0:
        return rotate_point(point, sector * mirror.sector_angle)
    return reflect_point(point, sector_plane_angle(sector, mirror))


def sector_image(circle: CircleNode, sector: int, mirror: MirrorConfig) -> CircleNode:
    """Copy of ``circle`` mapped into ``sector``.

    Reflections reverse the local entry/exit roles, so a reflected copy has
    its offsets swapped and negated and its tangent lengths swapped.
    """

    center = transform_point(circle.center, sector, mirror)
    source = circle.source_id or circle.id
    if sector % 2 == 1:
        return replace(
            circle,
            id=f"{source}@s{sector}",
            center=center,
            entry_offset=-circle.exit_offset,
            exit_offset=-circle.entry_offset,
            entry_tangent_length=circle.exit_tangent_length,
            exit_tangent_length=circle.entry_tangent_length,
            mirrored=False,
            source_id=source,
            sector=sector,
        )
    return replace(
        circle,
        id=f"{source}@s{sector}",
        center=center,
        mirrored=False,
        source_id=source,
        sector=sector,
    )


def _drop_coincident(
    order: Sequence[CircleId], lookup: Dict[CircleId, CircleNode], tolerance: float
) -> List[CircleId]:
    kept: List[CircleId] = []
    for cid in order:
        current = lookup.get(cid)
        if current is None:
            continue
        if kept and same_position(current.center, lookup[kept[-1]].center, tolerance):
            continue
        kept.append(cid)
    if len(kept) > 1 and same_position(lookup[kept[0]].center, lookup[kept[-1]].center, tolerance):
        kept.pop()
    return kept


def expand(
    circles: Sequence[CircleNode],
    order: Sequence[CircleId],
    mirror: MirrorConfig,
    *,
    config: Optional[GeometryConfig] = None,
) -> SymmetryExpansion:
    """Expand ``circles``/``order`` with the mirror copies of every mirrored circle.

    Within sector ``k`` the copies follow the original order when ``k`` is
    even and the reverse order when ``k`` is odd. Circles that land on the
    position of their path predecessor are dropped, as is a trailing circle
    that coincides with the first one.
    """

    if not mirror.enabled:
        return SymmetryExpansion(list(circles), list(order))

    cfg = resolve_config(config)
    lookup = {circle.id: circle for circle in circles}
    missing = [cid for cid in order if cid not in lookup]
    if missing:
        logger.warning("Ignoring %d unknown id(s) in path order: %s", len(missing), missing)
    ordered = [lookup[cid] for cid in order if cid in lookup]

    sources = [circle for circle in ordered if circle.mirrored]
    if not sources:
        return SymmetryExpansion(list(circles), list(order))

    copies: List[CircleNode] = []
    copy_order: List[CircleId] = []
    for sector in range(1, mirror.sector_count):
        images = [sector_image(circle, sector, mirror) for circle in sources]
        copies.extend(images)
        walk = reversed(images) if sector % 2 == 1 else images
        copy_order.extend(image.id for image in walk)

    expanded = list(circles) + copies
    expanded_lookup = {circle.id: circle for circle in expanded}
    raw_order = [circle.id for circle in ordered] + copy_order
    final_order = _drop_coincident(raw_order, expanded_lookup, cfg.position_tolerance)

    logger.debug(
        "Expanded %d mirrored circle(s) over %d sector(s): %d -> %d path entries",
        len(sources),
        mirror.sector_count,
        len(ordered),
        len(final_order),
    )
    return SymmetryExpansion(expanded, final_order)


def mirror_images(
    circle: CircleNode, mirror: MirrorConfig, *, config: Optional[GeometryConfig] = None
) -> List[CircleNode]:
    """Distinct copies of ``circle`` over sectors ``1..2N-1``.

    Copies landing on the original or on an earlier copy are skipped, which
    happens when the circle sits on a reflection plane.
    """

    if not mirror.enabled:
        return []
    cfg = resolve_config(config)
    taken: List[Point] = [circle.center]
    images: List[CircleNode] = []
    for sector in range(1, mirror.sector_count):
        image = sector_image(circle, sector, mirror)
        if any(same_position(image.center, pos, cfg.position_tolerance) for pos in taken):
            continue
        images.append(image)
        taken.append(image.center)
    return images


def mirror_positions(
    point: Point, mirror: MirrorConfig, *, config: Optional[GeometryConfig] = None
) -> List[Point]:
    """Distinct images of a bare point under the dihedral group, original excluded."""

    if not mirror.enabled:
        return []
    cfg = resolve_config(config)
    taken: List[Point] = [point]
    positions: List[Point] = []
    for sector in range(1, mirror.sector_count):
        pos = transform_point(point, sector, mirror)
        if any(same_position(pos, other, cfg.position_tolerance) for other in taken):
            continue
        positions.append(pos)
        taken.append(pos)
    return positions


def mirrored_circles(
    circles: Iterable[CircleNode],
    mirror: MirrorConfig,
    order: Optional[Sequence[CircleId]] = None,
    *,
    config: Optional[GeometryConfig] = None,
) -> List[CircleNode]:
    """Ghost copies of every mirrored circle, in path order when ``order`` is given."""

    if not mirror.enabled:
        return []
    circles = list(circles)
    if order:
        lookup = {circle.id: circle for circle in circles}
        sources = [lookup[cid] for cid in order if cid in lookup and lookup[cid].mirrored]
    else:
        sources = [circle for circle in circles if circle.mirrored]

    ghosts: List[CircleNode] = []
    for circle in sources:
        ghosts.extend(mirror_images(circle, mirror, config=config))
    return ghosts


__all__ = [
    "SymmetryExpansion",
    "expand",
    "mirror_images",
    "mirror_positions",
    "mirrored_circles",
    "sector_image",
    "sector_plane_angle",
    "transform_point",
]


apply_debug_logging(globals(), logger=logger)
