from .model import (
    Arc,
    Bezier,
    CircleNode,
    Direction,
    EllipseArc,
    Line,
    MirrorConfig,
    PathData,
    PathHit,
    TangentResult,
)
from .config import GeometryConfig, HullOptions, get_geometry_config, set_geometry_config
from .tangent import external_tangent, internal_tangent, solve_tangent
from .symmetry import expand, mirror_images, mirror_positions, mirrored_circles
from .arcs import build_arc, circular_arc, stretched_arc
from .connectors import bezier_connector, build_connector
from .assembler import assemble, compute_tangent_hull, make_stretch_resolver
from .query import find_closest_point, find_segment_at
from .placement import non_overlapping_radius
from .svg import path_bounds, path_to_svg_d, render_svg_document
from .document import (
    DocumentError,
    PathDocument,
    document_to_dict,
    dump_document,
    load_document,
    parse_document,
)

__all__ = [
    'Arc',
    'Bezier',
    'CircleNode',
    'Direction',
    'EllipseArc',
    'Line',
    'MirrorConfig',
    'PathData',
    'PathHit',
    'TangentResult',
    'GeometryConfig',
    'HullOptions',
    'get_geometry_config',
    'set_geometry_config',
    'external_tangent',
    'internal_tangent',
    'solve_tangent',
    'expand',
    'mirror_images',
    'mirror_positions',
    'mirrored_circles',
    'build_arc',
    'circular_arc',
    'stretched_arc',
    'bezier_connector',
    'build_connector',
    'assemble',
    'compute_tangent_hull',
    'make_stretch_resolver',
    'find_closest_point',
    'find_segment_at',
    'non_overlapping_radius',
    'path_bounds',
    'path_to_svg_d',
    'render_svg_document',
    'DocumentError',
    'PathDocument',
    'document_to_dict',
    'dump_document',
    'load_document',
    'parse_document',
]
