import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from stringpath import (
    DocumentError,
    compute_tangent_hull,
    find_closest_point,
    find_segment_at,
    load_document,
    render_svg_document,
)
from stringpath.model import Arc, Bezier, EllipseArc, Line, PathSegment

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_probe(value: Optional[str]) -> Optional[Tuple[float, float]]:
    if not value:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 2:
        logger.warning("Probe requires exactly two coordinates, e.g. 120,45")
        return None
    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        logger.warning("Probe coordinates must be numbers: %s", value)
        return None


def _describe(segment: PathSegment) -> str:
    if isinstance(segment, Arc):
        cx, cy = segment.center
        return (
            f"arc center=({cx:.3f}, {cy:.3f}) r={segment.radius:.3f} "
            f"angles={segment.start_angle:.4f}..{segment.end_angle:.4f}"
        )
    if isinstance(segment, EllipseArc):
        cx, cy = segment.center
        return (
            f"ellipse center=({cx:.3f}, {cy:.3f}) rx={segment.radius_x:.3f} "
            f"ry={segment.radius_y:.3f} rotation={segment.rotation:.4f}"
        )
    if isinstance(segment, Bezier):
        return (
            f"bezier ({segment.start[0]:.3f}, {segment.start[1]:.3f}) -> "
            f"({segment.end[0]:.3f}, {segment.end[1]:.3f})"
        )
    if isinstance(segment, Line):
        return (
            f"line ({segment.start[0]:.3f}, {segment.start[1]:.3f}) -> "
            f"({segment.end[0]:.3f}, {segment.end[1]:.3f})"
        )
    return repr(segment)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Compute tangent-hull paths around circles")
    parser.add_argument("path", help="Path to the JSON path document")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--svg-output-path",
        help="Write a standalone SVG document of the path to the given path",
    )
    parser.add_argument(
        "--probe",
        help="Report the closest point on the path to X,Y",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=20.0,
        help="Distance for the connector hit-test of --probe (default: 20)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    logger.info("Loading document from %s", args.path)
    try:
        doc = load_document(args.path)
    except (OSError, DocumentError) as exc:
        logger.error("Cannot load document: %s", exc)
        raise SystemExit(1)

    options = doc.options
    path = compute_tangent_hull(doc.circles, doc.order, options)
    if path.is_empty:
        logger.warning("Document %r produced an empty path", doc.name)

    print(f"Document: {doc.name}")
    print(f"Circles: {len(doc.circles)} (path order: {', '.join(doc.order) or '-'})")
    print(f"Segments ({len(path.segments)}, sub-paths: {path.subpath_count()}):")
    for i, segment in enumerate(path.segments):
        marker = "*" if segment.starts_new_subpath else " "
        print(f"  {marker}[{i}] {_describe(segment)} (circle {segment.circle_index})")
    print(f"Total length: {path.total_length:.6f}")

    probe = _parse_probe(args.probe)
    if probe is not None:
        common = (
            options.global_stretch,
            options.closed,
            options.use_start,
            options.use_end,
            options.mirror,
        )
        closest = find_closest_point(doc.circles, doc.order, probe, *common)
        segment_hit = find_segment_at(doc.circles, doc.order, probe, args.threshold, *common)
        print("Probe:")
        if closest is None:
            print("  closest: (none)")
        else:
            print(
                f"  closest: segment {closest.segment_index} at "
                f"({closest.point[0]:.3f}, {closest.point[1]:.3f}), distance {closest.distance:.3f}"
            )
        if segment_hit is None:
            print(f"  insert: no connector within {args.threshold:g}")
        else:
            print(
                f"  insert: after circle {segment_hit.from_circle_index} "
                f"(segment {segment_hit.segment_index}, distance {segment_hit.distance:.3f})"
            )

    if args.svg_output_path:
        output_path = Path(args.svg_output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing SVG document to %s", output_path)
        output_path.write_text(render_svg_document(path, closed=options.closed), encoding="utf-8")
        print(f"SVG document written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
