"""Reading and writing path documents (JSON)."""

from __future__ import annotations

import json
import logging
import math
import numbers
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Union

from .config import HullOptions
from .model import (
    MAX_TANGENT_LENGTH,
    MIN_TANGENT_LENGTH,
    CircleId,
    CircleNode,
    Direction,
    MirrorConfig,
)

logger = logging.getLogger(__name__)

DOCUMENT_VERSION = 1


class DocumentError(ValueError):
    pass


@dataclass
class PathDocument:
    name: str
    circles: List[CircleNode]
    order: List[CircleId]
    options: HullOptions = field(default_factory=HullOptions)
    names: Dict[CircleId, str] = field(default_factory=dict)
    version: int = DOCUMENT_VERSION


def _is_number(value: object) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _point(value: object, where: str) -> tuple:
    if not isinstance(value, Mapping) or not _is_number(value.get("x")) or not _is_number(value.get("y")):
        raise DocumentError(f"{where} has invalid center coordinates")
    return float(value["x"]), float(value["y"])


def _optional_number(shape: Mapping[str, Any], key: str, lo: float, hi: float, where: str, default=None):
    if key not in shape or shape[key] is None:
        return default
    value = shape[key]
    if not _is_number(value) or not lo <= value <= hi:
        raise DocumentError(f"{where} has invalid {key} (expected a number in [{lo:g}, {hi:g}])")
    return float(value)


def _parse_shape(shape: object, index: int) -> CircleNode:
    where = f"Shape {index + 1}"
    if not isinstance(shape, Mapping):
        raise DocumentError(f"{where} is invalid")
    if not isinstance(shape.get("id"), str):
        raise DocumentError(f"{where} is missing an ID")
    center = _point(shape.get("center"), where)
    radius = shape.get("radius")
    if not _is_number(radius) or radius <= 0:
        raise DocumentError(f"{where} has invalid radius")

    try:
        direction = Direction.coerce(shape.get("direction", "cw"))
    except ValueError as exc:
        raise DocumentError(f"{where} has invalid direction {shape.get('direction')!r}") from exc

    mirrored = shape.get("mirrored", False)
    if not isinstance(mirrored, bool):
        raise DocumentError(f"{where} has invalid mirrored flag (expected true or false)")

    entry_offset = _optional_number(shape, "entryOffset", -math.pi, math.pi, where, 0.0)
    exit_offset = _optional_number(shape, "exitOffset", -math.pi, math.pi, where, 0.0)
    if entry_offset == -math.pi or exit_offset == -math.pi:
        raise DocumentError(f"{where} has an offset of -pi; use pi instead")

    return CircleNode(
        id=shape["id"],
        center=center,
        radius=float(radius),
        direction=direction,
        entry_offset=entry_offset,
        exit_offset=exit_offset,
        entry_tangent_length=_optional_number(
            shape, "entryTangentLength", MIN_TANGENT_LENGTH, MAX_TANGENT_LENGTH, where, 1.0
        ),
        exit_tangent_length=_optional_number(
            shape, "exitTangentLength", MIN_TANGENT_LENGTH, MAX_TANGENT_LENGTH, where, 1.0
        ),
        stretch=_optional_number(shape, "stretch", -1.0, 1.0, where),
        mirrored=mirrored,
    )


def _parse_options(settings: object) -> HullOptions:
    if settings is None:
        return HullOptions()
    if not isinstance(settings, Mapping):
        raise DocumentError("Document settings must be an object")

    stretch = settings.get("globalStretch", 0.0)
    if not _is_number(stretch) or not -1.0 <= stretch <= 1.0:
        raise DocumentError("Document settings have invalid globalStretch")
    for key in ("closedPath", "useStartPoint", "useEndPoint"):
        if key in settings and not isinstance(settings[key], bool):
            raise DocumentError(f"Document setting {key} must be boolean")

    mirror = MirrorConfig()
    raw_mirror = settings.get("mirror")
    if raw_mirror is not None:
        if not isinstance(raw_mirror, Mapping):
            raise DocumentError("Document mirror settings must be an object")
        plane_count = raw_mirror.get("planeCount", 1)
        start_angle = raw_mirror.get("startAngle", 0.0)
        if not isinstance(plane_count, int) or isinstance(plane_count, bool) or plane_count < 0:
            raise DocumentError("Document mirror planeCount must be a non-negative integer")
        if not _is_number(start_angle):
            raise DocumentError("Document mirror startAngle must be a number")
        mirror = MirrorConfig(plane_count=plane_count, start_angle=float(start_angle))

    return HullOptions(
        global_stretch=float(stretch),
        closed=settings.get("closedPath", True),
        use_start=settings.get("useStartPoint", True),
        use_end=settings.get("useEndPoint", True),
        mirror=mirror,
    )


def parse_document(data: object) -> PathDocument:
    """Validate a decoded JSON document and build a :class:`PathDocument`."""

    if not isinstance(data, Mapping):
        raise DocumentError("Document is empty or invalid")
    version = data.get("version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise DocumentError("Document is missing version information")
    if version > DOCUMENT_VERSION:
        raise DocumentError(f"Document version {version} is not supported")
    shapes = data.get("shapes")
    if not isinstance(shapes, list):
        raise DocumentError("Document is missing shapes data")
    order = data.get("pathOrder")
    if not isinstance(order, list) or not all(isinstance(cid, str) for cid in order):
        raise DocumentError("Document is missing path order data")

    circles: List[CircleNode] = []
    names: Dict[CircleId, str] = {}
    for index, shape in enumerate(shapes):
        if isinstance(shape, Mapping) and shape.get("type", "circle") != "circle":
            logger.warning("Skipping shape %d of unsupported type %r", index + 1, shape.get("type"))
            continue
        circle = _parse_shape(shape, index)
        circles.append(circle)
        if isinstance(shape.get("name"), str):
            names[circle.id] = shape["name"]

    known = {circle.id for circle in circles}
    if len(known) != len(circles):
        raise DocumentError("Document contains duplicate shape IDs")
    if len(set(order)) != len(order):
        raise DocumentError("Path order lists a shape more than once")
    unknown = [cid for cid in order if cid not in known]
    if unknown:
        raise DocumentError(f"Path order refers to unknown shape(s): {', '.join(unknown)}")

    name = data.get("name")
    doc = PathDocument(
        name=name if isinstance(name, str) else "Untitled",
        circles=circles,
        order=list(order),
        options=_parse_options(data.get("settings")),
        names=names,
        version=version,
    )
    logger.info("Loaded document %r with %d circle(s)", doc.name, len(doc.circles))
    return doc


def load_document(path: Union[str, Path]) -> PathDocument:
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return parse_document(data)


def _shape_to_dict(circle: CircleNode, name: str) -> Dict[str, Any]:
    shape: Dict[str, Any] = {
        "id": circle.id,
        "type": "circle",
        "name": name,
        "center": {"x": circle.center[0], "y": circle.center[1]},
        "radius": circle.radius,
        "direction": circle.direction.value,
    }
    if circle.entry_offset:
        shape["entryOffset"] = circle.entry_offset
    if circle.exit_offset:
        shape["exitOffset"] = circle.exit_offset
    if circle.entry_tangent_length != 1.0:
        shape["entryTangentLength"] = circle.entry_tangent_length
    if circle.exit_tangent_length != 1.0:
        shape["exitTangentLength"] = circle.exit_tangent_length
    if circle.stretch is not None:
        shape["stretch"] = circle.stretch
    if circle.mirrored:
        shape["mirrored"] = True
    return shape


def document_to_dict(doc: PathDocument) -> Dict[str, Any]:
    opts = doc.options
    return {
        "version": doc.version,
        "name": doc.name,
        "settings": {
            "globalStretch": opts.global_stretch,
            "closedPath": opts.closed,
            "useStartPoint": opts.use_start,
            "useEndPoint": opts.use_end,
            "mirror": {
                "planeCount": opts.mirror.plane_count,
                "startAngle": opts.mirror.start_angle,
            },
        },
        "shapes": [_shape_to_dict(c, doc.names.get(c.id, c.id)) for c in doc.circles],
        "pathOrder": list(doc.order),
    }


def dump_document(doc: PathDocument, path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps(document_to_dict(doc), indent=2) + "\n", encoding="utf-8")


__all__ = [
    "DOCUMENT_VERSION",
    "DocumentError",
    "PathDocument",
    "document_to_dict",
    "dump_document",
    "load_document",
    "parse_document",
]
