from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable

import numpy as np
import pytest

from stringpath import compute_tangent_hull, parse_document, path_bounds, render_svg_document
from stringpath.document import PathDocument
from stringpath.model import Arc, EllipseArc, PathData
from stringpath.query import bezier_points, ellipse_points
from stringpath.arcs import ellipse_point
from stringpath.math_utils import point_on_circle


DATA_DIR = Path(__file__).resolve().parent / "scenes"


@dataclass
class SceneCase:
    case_id: str
    document: PathDocument
    expected: Dict[str, Any]


def _iter_cases() -> Iterable[SceneCase]:
    for scene_path in sorted(DATA_DIR.glob("*.json")):
        with scene_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        expected = data.get("expected")
        if not isinstance(expected, dict):
            raise ValueError(f"{scene_path.name} must carry an 'expected' mapping")
        yield SceneCase(scene_path.stem, parse_document(data), expected)


def _endpoints(segment):
    if isinstance(segment, Arc):
        return (
            point_on_circle(segment.center, segment.radius, segment.start_angle),
            point_on_circle(segment.center, segment.radius, segment.end_angle),
        )
    if isinstance(segment, EllipseArc):
        return (
            ellipse_point(segment, segment.start_angle),
            ellipse_point(segment, segment.end_angle),
        )
    return segment.start, segment.end


def _sample(segment, count: int = 48) -> np.ndarray:
    if isinstance(segment, Arc):
        angles = np.linspace(segment.start_angle, segment.end_angle, count)
        return np.stack(
            [
                segment.center[0] + segment.radius * np.cos(angles),
                segment.center[1] + segment.radius * np.sin(angles),
            ],
            axis=1,
        )
    if isinstance(segment, EllipseArc):
        return ellipse_points(segment, np.linspace(segment.start_angle, segment.end_angle, count))
    if segment.kind == "bezier":
        return bezier_points(segment, np.linspace(0.0, 1.0, count))
    return np.array([segment.start, segment.end], dtype=float)


def _render_scene_plot(path: Path, case_id: str, hull: PathData, document: PathDocument) -> None:
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(4, 4))
    for circle in document.circles:
        ax.add_patch(plt.Circle(circle.center, circle.radius, fill=False, color="0.7"))
    for segment in hull.segments:
        pts = _sample(segment)
        ax.plot(pts[:, 0], pts[:, 1], color="#1f77b4", linewidth=1.5)

    ax.set_aspect("equal", adjustable="datalim")
    ax.invert_yaxis()
    ax.set_title(case_id)
    ax.grid(True, linestyle="--", linewidth=0.5, alpha=0.5)
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


@pytest.mark.parametrize("case", list(_iter_cases()), ids=lambda case: case.case_id)
def test_scene_builds_expected_hull(case: SceneCase) -> None:
    doc = case.document
    hull = compute_tangent_hull(doc.circles, doc.order, doc.options)
    expected = case.expected

    if "kinds" in expected:
        assert [seg.kind for seg in hull.segments] == expected["kinds"]
    if "arcs" in expected:
        assert len(hull.arcs) == expected["arcs"]
    if "connectors" in expected:
        assert len(hull.connectors) == expected["connectors"]
    assert hull.subpath_count() == expected["subpaths"]
    if "total_length" in expected:
        assert math.isclose(hull.total_length, expected["total_length"], rel_tol=1e-9)
    assert math.isclose(hull.total_length, sum(seg.length for seg in hull.segments))

    for current, nxt in zip(hull.segments, hull.segments[1:]):
        if nxt.starts_new_subpath:
            continue
        assert _endpoints(current)[1] == pytest.approx(_endpoints(nxt)[0], abs=1e-6)

    bounds = path_bounds(hull)
    assert bounds is not None
    if expected.get("symmetric_x"):
        assert bounds[0] == pytest.approx(-bounds[2], abs=1e-6)

    svg = render_svg_document(hull, closed=doc.options.closed)
    assert svg.count("M ") == expected["subpaths"]


@pytest.mark.parametrize("case", list(_iter_cases()), ids=lambda case: case.case_id)
def test_scene_plot_renders(case: SceneCase, tmp_path: Path) -> None:
    doc = case.document
    hull = compute_tangent_hull(doc.circles, doc.order, doc.options)
    target = tmp_path / f"{case.case_id}.scene.png"

    _render_scene_plot(target, case.case_id, hull, doc)

    assert target.stat().st_size > 0
