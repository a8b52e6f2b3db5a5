"""Configuration helpers for the tangent-hull pipeline."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Optional

from .model import MirrorConfig


@dataclass
class GeometryConfig:
    """Numeric tolerances shared by the geometry components."""

    # centres closer than this (per axis) are the same position
    position_tolerance: float = 0.01
    # |stretch| below this draws a plain circular arc
    stretch_epsilon: float = 0.01
    min_sagitta: float = 1.0
    tangent_distance_factor: float = 0.4
    bezier_samples: int = 20
    ellipse_samples: int = 48
    min_chord: float = 1e-9


@dataclass
class HullOptions:
    """Path-level options supplied alongside the circle list."""

    global_stretch: float = 0.0
    closed: bool = True
    use_start: bool = True
    use_end: bool = True
    mirror: MirrorConfig = field(default_factory=MirrorConfig)


_GEOMETRY_CONFIG = GeometryConfig()


def get_geometry_config() -> GeometryConfig:
    return copy.deepcopy(_GEOMETRY_CONFIG)


def set_geometry_config(config: GeometryConfig) -> None:
    global _GEOMETRY_CONFIG
    _GEOMETRY_CONFIG = copy.deepcopy(config)


def resolve_config(config: Optional[GeometryConfig]) -> GeometryConfig:
    return config if config is not None else get_geometry_config()


__all__ = [
    "GeometryConfig",
    "HullOptions",
    "get_geometry_config",
    "resolve_config",
    "set_geometry_config",
]
