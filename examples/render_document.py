"""Example pipeline: load a path document, print its hull and write an SVG next to it."""

import sys
from pathlib import Path

from stringpath import compute_tangent_hull, load_document, path_to_svg_d, render_svg_document


def main(path: str) -> None:
    doc = load_document(path)
    hull = compute_tangent_hull(doc.circles, doc.order, doc.options)

    print(f"{doc.name}: {len(hull.arcs)} arc(s), {len(hull.connectors)} connector(s)")
    print(f"Sub-paths: {hull.subpath_count()}")
    print(f"Total length: {hull.total_length:.3f}")
    print(f"Path data: {path_to_svg_d(hull, closed=doc.options.closed, precision=1)}")

    output = Path(path).with_suffix(".svg")
    output.write_text(render_svg_document(hull, closed=doc.options.closed), encoding="utf-8")
    print(f"SVG written to {output}")


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else str(Path(__file__).with_name("guitar.json")))
