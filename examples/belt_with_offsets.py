"""Example pipeline: wrap a belt around three pulleys and export it as SVG."""

from pathlib import Path

from stringpath import CircleNode, Direction, HullOptions, compute_tangent_hull, find_segment_at
from stringpath import non_overlapping_radius, render_svg_document

CIRCLES = [
    CircleNode("drive", (100.0, 100.0), 60.0),
    CircleNode("tensioner", (260.0, 150.0), 25.0, Direction.CCW, entry_offset=0.15, exit_offset=-0.15),
    CircleNode("idler", (420.0, 100.0), 45.0, stretch=0.3),
]
ORDER = ["drive", "tensioner", "idler"]


def main() -> None:
    options = HullOptions(global_stretch=0.0, closed=True)
    path = compute_tangent_hull(CIRCLES, ORDER, options)

    print(f"Segments ({len(path.segments)}):")
    for i, segment in enumerate(path.segments):
        print(f"  [{i}] {segment.kind} (circle {segment.circle_index}, length {segment.length:.3f})")
    print(f"Total length: {path.total_length:.3f}")

    probe = (260.0, 60.0)
    hit = find_segment_at(CIRCLES, ORDER, probe, 40.0)
    if hit is not None:
        radius = non_overlapping_radius(probe, CIRCLES)
        print(
            f"A circle of radius {radius:.1f} at {probe} would go after "
            f"{ORDER[hit.from_circle_index]!r}"
        )

    output = Path(__file__).with_name("belt_with_offsets.svg")
    output.write_text(render_svg_document(path, closed=options.closed), encoding="utf-8")
    print(f"SVG written to {output}")


if __name__ == "__main__":
    main()
