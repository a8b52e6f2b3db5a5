import math

import pytest

from stringpath.connectors import bezier_connector, build_connector, needs_bezier
from stringpath.model import Bezier, Direction, Line


def test_needs_bezier_only_for_adjusted_tangents():
    assert not needs_bezier(0.0, 0.0, 1.0, 1.0)
    assert needs_bezier(0.1, 0.0, 1.0, 1.0)
    assert needs_bezier(0.0, -0.2, 1.0, 1.0)
    assert needs_bezier(0.0, 0.0, 2.0, 1.0)
    assert needs_bezier(0.0, 0.0, 1.0, 0.5)


def test_default_tangents_give_a_straight_line():
    seg = build_connector(
        (0.0, -1.0), 3 * math.pi / 2, Direction.CW, 0.0, 1.0,
        (10.0, -1.0), 3 * math.pi / 2, Direction.CW, 0.0, 1.0,
        circle_index=4,
    )

    assert isinstance(seg, Line)
    assert seg.length == pytest.approx(10.0)
    assert seg.circle_index == 4


def test_bezier_control_points_follow_travel_direction():
    seg = bezier_connector(
        (0.0, -1.0), 3 * math.pi / 2, Direction.CW, 1.0,
        (10.0, -1.0), 3 * math.pi / 2, Direction.CW, 1.0,
    )

    assert seg.cp1 == pytest.approx((4.0, -1.0))
    assert seg.cp2 == pytest.approx((6.0, -1.0))
    # collinear control polygon: chord and polygon agree
    assert seg.length == pytest.approx(10.0)


def test_bezier_length_multipliers_scale_reach():
    seg = bezier_connector(
        (0.0, -1.0), 3 * math.pi / 2, Direction.CW, 2.0,
        (10.0, -1.0), 3 * math.pi / 2, Direction.CW, 0.5,
    )

    assert seg.cp1 == pytest.approx((8.0, -1.0))
    assert seg.cp2 == pytest.approx((8.0, -1.0))


def test_bezier_length_averages_chord_and_polygon():
    seg = bezier_connector(
        (0.0, 0.0), math.pi, Direction.CW, 1.0,
        (10.0, 0.0), math.pi, Direction.CCW, 1.0,
    )

    # leaving (0,0) at polar angle π clockwise heads toward -y
    assert seg.cp1 == pytest.approx((0.0, -4.0))
    assert seg.cp2 == pytest.approx((10.0, -4.0))
    assert seg.length == pytest.approx((10.0 + 18.0) / 2)


def test_build_connector_uses_bezier_when_offset():
    seg = build_connector(
        (0.0, -1.0), 3 * math.pi / 2, Direction.CW, 0.3, 1.0,
        (10.0, -1.0), 3 * math.pi / 2, Direction.CW, 0.0, 1.0,
        starts_new_subpath=True,
    )

    assert isinstance(seg, Bezier)
    assert seg.starts_new_subpath
