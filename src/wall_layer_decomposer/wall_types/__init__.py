# File: src/wall_layer_decomposer/wall_types/__init__.py

"""Generated single-layer wall type naming and caching."""

from .type_classifier import (
    DEFAULT_MATERIAL_CODE,
    clean_name,
    round_thickness_mm,
    material_code,
    build_type_key,
    WallTypeCache,
    WallTypeClassifier,
)

__all__ = [
    "DEFAULT_MATERIAL_CODE",
    "clean_name",
    "round_thickness_mm",
    "material_code",
    "build_type_key",
    "WallTypeCache",
    "WallTypeClassifier",
]
