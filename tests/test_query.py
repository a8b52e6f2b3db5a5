import math

import numpy as np
import pytest

from stringpath.arcs import stretched_arc
from stringpath.assembler import assemble
from stringpath.model import Arc, Bezier, CircleNode, Direction, Line, MirrorConfig
from stringpath.query import (
    bezier_points,
    closest_on_segment,
    find_closest_point,
    find_segment_at,
    map_to_original_index,
    nearest_on_path,
)

CIRCLES = [
    CircleNode("a", (0.0, 0.0), 1.0, Direction.CW),
    CircleNode("b", (10.0, 0.0), 1.0, Direction.CW),
]
ORDER = ["a", "b"]


def test_closest_on_line_clamps_to_endpoints():
    line = Line((0.0, 0.0), (10.0, 0.0), 10.0)

    assert closest_on_segment((4.0, 3.0), line) == (pytest.approx(3.0), pytest.approx((4.0, 0.0)))
    assert closest_on_segment((-3.0, 4.0), line) == (pytest.approx(5.0), pytest.approx((0.0, 0.0)))


def test_closest_on_arc_inside_and_outside_sweep():
    arc = Arc((0.0, 0.0), 1.0, math.pi / 2, 3 * math.pi / 2, False, math.pi)

    dist, point = closest_on_segment((-3.0, 0.0), arc)
    assert dist == pytest.approx(2.0)
    assert point == pytest.approx((-1.0, 0.0))

    dist, point = closest_on_segment((5.0, 0.0), arc)
    assert dist == pytest.approx(math.sqrt(26.0))
    assert point[0] == pytest.approx(0.0, abs=1e-12)


def test_closest_on_bezier_and_ellipse():
    bezier = Bezier((0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (3.0, 0.0), 3.0)
    dist, point = closest_on_segment((1.5, 1.0), bezier)
    assert dist == pytest.approx(1.0, abs=1e-6)
    assert point == pytest.approx((1.5, 0.0), abs=1e-6)

    ellipse = stretched_arc((0.0, 0.0), 10.0, math.pi / 2, 3 * math.pi / 2, Direction.CW, 0.5)
    dist, point = closest_on_segment((-20.0, 0.0), ellipse)
    assert dist == pytest.approx(5.0, abs=1e-6)
    assert point == pytest.approx((-15.0, 0.0), abs=1e-6)


def test_closest_refines_between_samples():
    bezier = Bezier((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0), 20.0)
    probe = (3.3, 20.0)

    dist, point = closest_on_segment(probe, bezier)

    dense = bezier_points(bezier, np.linspace(0.0, 1.0, 20001))
    best = float(np.min(np.hypot(dense[:, 0] - probe[0], dense[:, 1] - probe[1])))
    assert dist == pytest.approx(best, abs=1e-4)


def test_closest_on_segment_rejects_unknown_types():
    with pytest.raises(TypeError):
        closest_on_segment((0.0, 0.0), object())


@pytest.mark.parametrize(
    "index, count, expected",
    [(0, 3, 0), (2, 3, 2), (3, 3, 2), (5, 3, 0), (7, 3, 0), (4, 0, 0)],
)
def test_map_to_original_index(index, count, expected):
    assert map_to_original_index(index, count) == expected


def test_find_closest_point_on_connector():
    hit = find_closest_point(CIRCLES, ORDER, (5.0, -3.0))

    assert hit.segment_index == 1
    assert hit.point == pytest.approx((5.0, -1.0))
    assert hit.distance == pytest.approx(2.0)
    assert hit.from_circle_index == 0


def test_find_closest_point_considers_arcs():
    hit = find_closest_point(CIRCLES, ORDER, (-3.0, 0.0))

    assert hit.segment_index == 0
    assert hit.point == pytest.approx((-1.0, 0.0))


def test_find_segment_at_only_hits_connectors_within_threshold():
    hit = find_segment_at(CIRCLES, ORDER, (5.0, 1.5), 1.0)
    assert hit.segment_index == 3
    assert hit.from_circle_index == 1
    assert hit.distance == pytest.approx(0.5)

    assert find_segment_at(CIRCLES, ORDER, (5.0, 1.5), 0.5) is None

    near_arc = find_segment_at(CIRCLES, ORDER, (-3.0, 0.0), 50.0)
    assert near_arc.segment_index in (1, 3)


def test_queries_on_empty_path():
    assert find_closest_point([], [], (0.0, 0.0)) is None
    assert find_segment_at([], [], (0.0, 0.0), 10.0) is None


def test_hits_on_mirror_copies_map_back_into_original_order():
    circles = [
        CircleNode("a", (20.0, -30.0), 5.0, mirrored=True),
        CircleNode("b", (60.0, -10.0), 5.0, mirrored=True),
    ]
    mirror = MirrorConfig(plane_count=1)
    path = assemble(circles, ["a", "b"], mirror=mirror)
    assert len(path.arcs) == 4

    # the connector leaving b@s1 (expanded index 2) heads back to a@s1
    hit = nearest_on_path(path, (40.0, 20.0), 2, connectors_only=True)
    assert path.segments[hit.segment_index].circle_index == 2
    assert hit.from_circle_index == 1
