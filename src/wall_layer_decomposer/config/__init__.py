# File: src/wall_layer_decomposer/config/__init__.py

"""
Configuration package for the wall layer decomposer.
Provides a unified interface to:
- Length units and conversion to millimetres
- Decomposition settings (tolerances, naming prefix, template kind)
"""

from .units import (
    LengthUnits,
    parse_units,
    convert_to_mm,
    convert_from_mm,
)

from .settings import (
    DecompositionSettings,
    DEFAULT_SETTINGS,
)

__all__ = [
    "LengthUnits",
    "parse_units",
    "convert_to_mm",
    "convert_from_mm",
    "DecompositionSettings",
    "DEFAULT_SETTINGS",
]
