# File: src/wall_layer_decomposer/wall_layers/__init__.py

"""Composite wall data model and layer geometry resolver."""

from .layer_types import (
    LayerFunction,
    LocationLine,
    WallEndpoint,
    LayerSpec,
    CompositeWallSpec,
    LayerGeometry,
    WallTypeKey,
    WallSegment,
    Junction,
    WallGroups,
    FUNCTION_CODES,
    FUNCTION_DISPLAY_NAMES,
    parse_layer_function,
)
from .layer_geometry import resolve_layer_geometry, find_contiguity_gaps

__all__ = [
    "LayerFunction",
    "LocationLine",
    "WallEndpoint",
    "LayerSpec",
    "CompositeWallSpec",
    "LayerGeometry",
    "WallTypeKey",
    "WallSegment",
    "Junction",
    "WallGroups",
    "FUNCTION_CODES",
    "FUNCTION_DISPLAY_NAMES",
    "parse_layer_function",
    "resolve_layer_geometry",
    "find_contiguity_gaps",
]
