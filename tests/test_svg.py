import math

import pytest

from stringpath.arcs import stretched_arc
from stringpath.assembler import assemble
from stringpath.model import CircleNode, Direction, PathData
from stringpath.svg import path_bounds, path_to_svg_d, render_svg_document

BELT = [CircleNode("a", (0.0, 0.0), 1.0), CircleNode("b", (10.0, 0.0), 1.0)]


def test_belt_path_data():
    d = path_to_svg_d(assemble(BELT, ["a", "b"]), closed=True)

    assert d.startswith("M 0 1 A 1 1 0 ")
    assert " 1 0 -1 L 10 -1 A 1 1 0 " in d
    assert d.endswith("L 0 1 Z")
    assert d.count("M ") == 1


def test_open_path_has_no_close_command():
    d = path_to_svg_d(assemble(BELT, ["a", "b"], closed=False), closed=False)
    assert "Z" not in d


def test_full_circle_needs_two_arc_commands():
    d = path_to_svg_d(assemble([BELT[0]], ["a"]))
    assert d.count("A ") == 2
    assert d.startswith("M 1 0 A 1 1 0 0 1 -1 0 A 1 1 0 0 1 1 0")


def test_subpath_break_emits_move_and_skips_close():
    circles = [
        CircleNode("a", (0.0, 0.0), 10.0),
        CircleNode("b", (3.0, 0.0), 2.0),
        CircleNode("c", (40.0, 0.0), 5.0),
    ]
    d = path_to_svg_d(assemble(circles, ["a", "b", "c"]), closed=True)

    assert d.count("M ") == 2
    assert "Z" not in d


def test_ellipse_command_uses_degrees():
    seg = stretched_arc((0.0, 0.0), 10.0, math.pi / 2, 3 * math.pi / 2, Direction.CW, 0.5)
    d = path_to_svg_d(PathData([seg], seg.length))

    assert d == "M 0 10 A 10 15 -90 0 1 0 -10"


def test_path_bounds():
    assert path_bounds(PathData()) is None
    bounds = path_bounds(assemble(BELT, ["a", "b"]))
    assert bounds == pytest.approx((-1.0, -1.0, 11.0, 1.0), abs=1e-9)


def test_render_svg_document():
    svg = render_svg_document(assemble(BELT, ["a", "b"]), closed=True, stroke="red")

    assert svg.startswith('<svg xmlns="http://www.w3.org/2000/svg" viewBox="-2.2 -2.2 14.4 4.4">')
    assert 'stroke="red"' in svg
    assert path_to_svg_d(assemble(BELT, ["a", "b"]), closed=True) in svg


def test_render_empty_path():
    svg = render_svg_document(PathData())
    assert 'd=""' in svg
