# File: src/wall_layer_decomposer/utils/__init__.py

"""Geometry primitives and logging helpers."""

from .geometry import (
    Point3,
    Vector3,
    Line,
    distance,
    normalize,
    in_plane_normal,
    project_point_on_line,
    intersect_lines,
    format_point,
)
from .logging_config import DecomposerLogger, get_logger

__all__ = [
    "Point3",
    "Vector3",
    "Line",
    "distance",
    "normalize",
    "in_plane_normal",
    "project_point_on_line",
    "intersect_lines",
    "format_point",
    "DecomposerLogger",
    "get_logger",
]
