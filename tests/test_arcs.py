import math

import pytest

from stringpath.arcs import build_arc, circular_arc, ellipse_point, full_circle_arc, stretched_arc
from stringpath.math_utils import point_on_circle, ramanujan_perimeter
from stringpath.model import Arc, Direction, EllipseArc


def test_circular_arc_cw_half_turn():
    arc = circular_arc((0.0, 0.0), 2.0, math.pi / 2, 3 * math.pi / 2, Direction.CW, circle_index=3)

    assert arc.start_angle == pytest.approx(math.pi / 2)
    assert arc.end_angle == pytest.approx(3 * math.pi / 2)
    assert arc.sweep == pytest.approx(math.pi)
    assert arc.length == pytest.approx(2 * math.pi)
    assert not arc.ccw
    assert arc.circle_index == 3


def test_circular_arc_ccw_takes_the_long_way():
    arc = circular_arc((0.0, 0.0), 1.0, 0.0, math.pi / 2, Direction.CCW)

    assert arc.sweep == pytest.approx(-3 * math.pi / 2)
    assert arc.length == pytest.approx(3 * math.pi / 2)
    assert arc.ccw
    assert point_on_circle(arc.center, arc.radius, arc.end_angle) == pytest.approx((0.0, 1.0))


def test_full_circle_arc():
    arc = full_circle_arc((1.0, 2.0), 3.0, Direction.CCW)

    assert arc.sweep == pytest.approx(-2 * math.pi)
    assert arc.length == pytest.approx(6 * math.pi)
    assert arc.starts_new_subpath


def _half_turn(stretch):
    return stretched_arc((0.0, 0.0), 10.0, math.pi / 2, 3 * math.pi / 2, Direction.CW, stretch)


def test_stretched_arc_geometry():
    seg = _half_turn(0.5)

    assert seg.center == pytest.approx((0.0, 0.0), abs=1e-9)
    assert seg.radius_x == pytest.approx(10.0)
    assert seg.radius_y == pytest.approx(15.0)
    assert seg.rotation == pytest.approx(-math.pi / 2)
    assert not seg.ccw
    assert (seg.start_angle, seg.end_angle) == (math.pi, 2 * math.pi)
    assert seg.length == pytest.approx(ramanujan_perimeter(10.0, 15.0) / 2)
    # bulges to the same side as the circular arc, 1.5 times as far
    assert ellipse_point(seg, 1.5 * math.pi) == pytest.approx((-15.0, 0.0), abs=1e-9)


def test_stretched_arc_zero_stretch_matches_circular_arc():
    entry_angle, exit_angle = 0.4, 2.9
    seg = stretched_arc((3.0, -4.0), 10.0, entry_angle, exit_angle, Direction.CW, 0.0)
    arc = circular_arc((3.0, -4.0), 10.0, entry_angle, exit_angle, Direction.CW)

    entry = point_on_circle(arc.center, arc.radius, arc.start_angle)
    exit_ = point_on_circle(arc.center, arc.radius, arc.end_angle)
    mid = point_on_circle(arc.center, arc.radius, arc.start_angle + arc.sweep / 2)
    halfway = (seg.start_angle + seg.end_angle) / 2

    assert ellipse_point(seg, seg.start_angle) == pytest.approx(entry, abs=1e-6)
    assert ellipse_point(seg, seg.end_angle) == pytest.approx(exit_, abs=1e-6)
    assert ellipse_point(seg, halfway) == pytest.approx(mid, abs=1e-6)


def test_stretched_arc_ccw_winds_the_other_way():
    seg = stretched_arc((0.0, 0.0), 10.0, 3 * math.pi / 2, math.pi / 2, Direction.CCW, 0.2)

    assert seg.ccw
    assert seg.end_angle == 0.0
    assert ellipse_point(seg, math.pi / 2) == pytest.approx((-12.0, 0.0), abs=1e-9)


def test_negative_stretch_is_clamped_to_min_sagitta():
    seg = _half_turn(-1.0)
    assert seg.radius_y == 1.0


def test_build_arc_switches_on_stretch_epsilon():
    assert isinstance(
        build_arc((0.0, 0.0), 1.0, 0.0, 1.0, Direction.CW, 0.005), Arc
    )
    assert isinstance(
        build_arc((0.0, 0.0), 1.0, 0.0, 1.0, Direction.CW, -0.5), EllipseArc
    )
