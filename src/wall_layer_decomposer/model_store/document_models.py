# File: src/wall_layer_decomposer/model_store/document_models.py

"""Pydantic models of the JSON model document.

A model document lists wall types and walls in one length unit:

    {
        "units": "mm",
        "wall_types": [{"id": "t1", "name": "Ext 160", "kind": "basic",
                        "layers": [{"function": "structure",
                                    "material": "Concrete",
                                    "thickness": 100}]}],
        "walls": [{"id": "w1", "type_id": "t1", "height": 3000,
                   "location_line": {"start": {"x": 0, "y": 0},
                                     "end": {"x": 5000, "y": 0}}}]
    }

Validation happens on load; conversion to millimetre records happens in
to_records().
"""

from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from ..config.units import LengthUnits, convert_to_mm, parse_units
from ..utils.geometry import Line
from ..wall_layers.layer_types import LayerSpec, parse_layer_function
from .base import WallRecord, WallTypeRecord


class PointModel(BaseModel):
    """3D point coordinates."""
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")
    z: float = Field(default=0.0, description="Z coordinate")


class LineModel(BaseModel):
    """Straight location line."""
    start: PointModel
    end: PointModel


class LayerModel(BaseModel):
    """One layer of a basic wall type."""
    function: str = Field(
        description="Layer function (structure, substrate, insulation, "
                    "finish1, finish2, membrane, structural_deck, other)"
    )
    thickness: float = Field(description="Layer thickness in document units", gt=0)
    material: str = Field(default="", description="Material name, may be empty")


class WallTypeModel(BaseModel):
    """A wall type definition."""
    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    kind: Literal["basic", "curtain", "stacked"] = "basic"
    width: Optional[float] = Field(
        default=None,
        description="Declared width; defaults to the sum of layer thicknesses",
        ge=0,
    )
    layers: List[LayerModel] = Field(default_factory=list)
    first_core_index: int = Field(default=-1, ge=-1)
    last_core_index: int = Field(default=-1, ge=-1)

    @model_validator(mode='after')
    def validate_core_indices(self) -> 'WallTypeModel':
        """Core boundaries must both be set or both unset, and in range."""
        first, last = self.first_core_index, self.last_core_index
        if (first < 0) != (last < 0):
            raise ValueError("first_core_index and last_core_index must be set together")
        if first >= 0 and not first <= last < len(self.layers):
            raise ValueError(
                f"Core indices {first}..{last} out of range for "
                f"{len(self.layers)} layer(s)"
            )
        return self


class WallModel(BaseModel):
    """A wall instance."""
    id: str = Field(min_length=1)
    type_id: str
    location_line: Optional[LineModel] = None
    height: float = Field(description="Wall height in document units", gt=0)
    level_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class ModelDocument(BaseModel):
    """A complete model: units, wall types and walls."""
    units: str = Field(default="millimeters", description="Document length unit")
    settings: Dict[str, Any] = Field(default_factory=dict)
    wall_types: List[WallTypeModel] = Field(default_factory=list)
    walls: List[WallModel] = Field(default_factory=list)

    @field_validator('units')
    @classmethod
    def validate_units(cls, v: str) -> str:
        """Normalize unit aliases (mm, m, ft, in) to full names."""
        return parse_units(v).value

    @model_validator(mode='after')
    def validate_references(self) -> 'ModelDocument':
        """Ids must be unique and every wall must reference a known type."""
        type_ids = [t.id for t in self.wall_types]
        if len(set(type_ids)) != len(type_ids):
            raise ValueError("Duplicate wall type id")
        names = [t.name.strip().lower() for t in self.wall_types]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate wall type name (names are case-insensitive)")

        wall_ids = [w.id for w in self.walls]
        if len(set(wall_ids)) != len(wall_ids):
            raise ValueError("Duplicate wall id")
        if set(wall_ids) & set(type_ids):
            raise ValueError("Wall ids and wall type ids must not overlap")

        known = set(type_ids)
        for wall in self.walls:
            if wall.type_id not in known:
                raise ValueError(f"Wall {wall.id} references unknown type {wall.type_id}")
        return self

    def to_records(self) -> Tuple[List[WallTypeRecord], List[WallRecord]]:
        """Convert to store records with all lengths in millimetres."""
        units = LengthUnits(self.units)

        def mm(value: float) -> float:
            return convert_to_mm(value, units)

        def point(p: PointModel) -> Tuple[float, float, float]:
            return (mm(p.x), mm(p.y), mm(p.z))

        wall_types = [
            WallTypeRecord(
                type_id=t.id,
                name=t.name,
                kind=t.kind,
                layers=tuple(
                    LayerSpec(
                        function=parse_layer_function(layer.function),
                        thickness=mm(layer.thickness),
                        material=layer.material,
                    )
                    for layer in t.layers
                ),
                width=mm(t.width) if t.width is not None else None,
                first_core_index=t.first_core_index,
                last_core_index=t.last_core_index,
            )
            for t in self.wall_types
        ]
        walls = [
            WallRecord(
                element_id=w.id,
                type_id=w.type_id,
                location_line=(
                    Line(point(w.location_line.start), point(w.location_line.end))
                    if w.location_line is not None else None
                ),
                height=mm(w.height),
                level_id=w.level_id,
                attributes=dict(w.attributes),
            )
            for w in self.walls
        ]
        return wall_types, walls

    @classmethod
    def from_records(
        cls,
        wall_types: List[WallTypeRecord],
        walls: List[WallRecord],
        settings: Optional[Dict[str, Any]] = None,
    ) -> 'ModelDocument':
        """Build a millimetre document from store records."""
        return cls.model_validate({
            "units": LengthUnits.MILLIMETERS.value,
            "settings": settings or {},
            "wall_types": [t.to_dict() for t in wall_types],
            "walls": [w.to_dict() for w in walls],
        })
