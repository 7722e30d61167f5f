# File: src/wall_layer_decomposer/config/settings.py

"""Decomposition settings.

Groups every tunable constant of the decomposition pipeline in one
dataclass so that callers pass configuration explicitly instead of
relying on module globals. All lengths are in millimetres.

Example:
    >>> settings = DecompositionSettings(junction_tolerance_mm=300.0)
    >>> settings.type_name_prefix
    'LYR'
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Optional


@dataclass
class DecompositionSettings:
    """Configuration for wall decomposition and junction reconciliation.

    Attributes:
        type_name_prefix: Prefix of every generated single-layer type name.
        junction_tolerance_mm: Max endpoint distance for a junction.
        negligible_change_mm: Length changes below this are not applied.
        min_segment_length_mm: Trims producing shorter segments are refused.
        intersection_margin_mm: Distance both centerlines are extended by
            when their bounded intersection is empty (1000 ft).
        thickness_epsilon: Tolerance for the layer thickness sum check.
        template_kind: Wall type kind cloned when creating new types.
        material_code_length: Max characters kept from a material name.
    """

    type_name_prefix: str = "LYR"
    junction_tolerance_mm: float = 500.0
    negligible_change_mm: float = 1.0
    min_segment_length_mm: float = 50.0
    intersection_margin_mm: float = 304800.0
    thickness_epsilon: float = 1e-6
    template_kind: str = "basic"
    material_code_length: int = 4

    def __post_init__(self) -> None:
        if not self.type_name_prefix or "-" in self.type_name_prefix:
            raise ValueError(
                f"type_name_prefix must be non-empty and contain no '-': "
                f"{self.type_name_prefix!r}"
            )
        if self.junction_tolerance_mm < 0:
            raise ValueError("junction_tolerance_mm must be >= 0")
        if self.min_segment_length_mm <= 0:
            raise ValueError("min_segment_length_mm must be > 0")
        if self.material_code_length < 1:
            raise ValueError("material_code_length must be >= 1")

    @property
    def generated_type_marker(self) -> str:
        """Lowercased name prefix shared by all generated types."""
        return f"{self.type_name_prefix}-".lower()

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "DecompositionSettings":
        """Build settings from a dict, ignoring unknown keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


DEFAULT_SETTINGS = DecompositionSettings()
