# File: src/wall_layer_decomposer/wall_layers/layer_types.py

"""Data models for composite wall decomposition.

Defines the core types shared by the layer geometry resolver, the type
classifier, the junction detector and the trim/extend engine. All
measurements are in millimetres.

Key Types:
    LayerFunction: Structural role of a layer, with its 4-letter code
    CompositeWallSpec: A multi-layer wall to decompose
    LayerGeometry: One layer's centerline, normal and face offsets
    WallTypeKey: Identity of a generated single-layer wall type
    WallSegment: A single-layer wall created from one layer
    Junction: A neighbouring wall touching one of the wall's endpoints
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum

from ..utils.geometry import Line, Point3, Vector3


# =============================================================================
# Enumerations
# =============================================================================


class LayerFunction(Enum):
    """Layer function classification (Revit MaterialFunctionAssignment)."""

    STRUCTURE = "structure"
    """Load-bearing core (studs, masonry, concrete)."""

    SUBSTRATE = "substrate"
    """Sheathing, backer board, structural panel."""

    INSULATION = "insulation"
    """Thermal layer or air gap."""

    FINISH1 = "finish1"
    """Finish, typically exterior."""

    FINISH2 = "finish2"
    """Finish, typically interior."""

    MEMBRANE = "membrane"
    """Zero-or-near-zero thickness barrier (WRB, vapor retarder)."""

    STRUCTURAL_DECK = "structural_deck"
    """Structural deck layer."""

    OTHER = "other"
    """Anything not covered above."""


# 4-letter codes used in generated type names
FUNCTION_CODES: Dict[LayerFunction, str] = {
    LayerFunction.STRUCTURE: "Stru",
    LayerFunction.SUBSTRATE: "Subs",
    LayerFunction.INSULATION: "Insu",
    LayerFunction.FINISH1: "Fin1",
    LayerFunction.FINISH2: "Fin2",
    LayerFunction.MEMBRANE: "Memb",
    LayerFunction.STRUCTURAL_DECK: "Deck",
    LayerFunction.OTHER: "Othr",
}

# Display names, also used as material name when a layer has none
FUNCTION_DISPLAY_NAMES: Dict[LayerFunction, str] = {
    LayerFunction.STRUCTURE: "Structure",
    LayerFunction.SUBSTRATE: "Substrate",
    LayerFunction.INSULATION: "Insulation",
    LayerFunction.FINISH1: "Finish1",
    LayerFunction.FINISH2: "Finish2",
    LayerFunction.MEMBRANE: "Membrane",
    LayerFunction.STRUCTURAL_DECK: "StructuralDeck",
    LayerFunction.OTHER: "Other",
}

# Accepted spellings when reading layer functions from documents
_FUNCTION_ALIASES: Dict[str, LayerFunction] = {
    "structure": LayerFunction.STRUCTURE,
    "substrate": LayerFunction.SUBSTRATE,
    "insulation": LayerFunction.INSULATION,
    "thermal": LayerFunction.INSULATION,
    "thermalair": LayerFunction.INSULATION,
    "finish1": LayerFunction.FINISH1,
    "finish2": LayerFunction.FINISH2,
    "membrane": LayerFunction.MEMBRANE,
    "membranelayer": LayerFunction.MEMBRANE,
    "structuraldeck": LayerFunction.STRUCTURAL_DECK,
    "other": LayerFunction.OTHER,
}


def parse_layer_function(value: Any) -> LayerFunction:
    """Map a layer function given as enum, name or alias to LayerFunction.

    Unknown names map to OTHER rather than failing, matching how an
    unrecognized Revit function is treated.
    """
    if isinstance(value, LayerFunction):
        return value
    normalized = (
        str(value).lower().replace(" ", "").replace("_", "").replace("/", "")
    )
    return _FUNCTION_ALIASES.get(normalized, LayerFunction.OTHER)


class LocationLine(Enum):
    """Which line of the wall the reference curve represents."""

    WALL_CENTERLINE = "wall_centerline"
    CORE_CENTERLINE = "core_centerline"
    FINISH_FACE_EXTERIOR = "finish_face_exterior"
    FINISH_FACE_INTERIOR = "finish_face_interior"
    CORE_FACE_EXTERIOR = "core_face_exterior"
    CORE_FACE_INTERIOR = "core_face_interior"


class WallEndpoint(Enum):
    """One end of a wall's location line."""

    START = "start"
    END = "end"


# =============================================================================
# Data Models
# =============================================================================


@dataclass(frozen=True)
class LayerSpec:
    """A single layer of a composite wall.

    Attributes:
        function: Layer function classification.
        thickness: Layer thickness in mm (positive).
        material: Material name, empty when the layer has no material.
    """

    function: LayerFunction
    thickness: float
    material: str = ""

    def __post_init__(self) -> None:
        if self.thickness <= 0:
            raise ValueError(f"Layer thickness must be positive, got {self.thickness}")


@dataclass
class CompositeWallSpec:
    """Multi-layer wall to decompose.

    Layers are ordered from exterior to interior (outside to inside).

    Attributes:
        wall_id: Source wall identifier.
        reference_line: Wall location line.
        total_width: Declared assembly width in mm.
        height: Wall height in mm.
        layers: Ordered layers, exterior first.
        location_line: Which line of the wall `reference_line` represents.
        level_id: Level the wall is hosted on.
        type_id: Source wall type identifier.
        first_core_index: Index of the first core layer, -1 if undefined.
        last_core_index: Index of the last core layer, -1 if undefined.
    """

    wall_id: str
    reference_line: Line
    total_width: float
    height: float
    layers: Tuple[LayerSpec, ...]
    location_line: LocationLine = LocationLine.WALL_CENTERLINE
    level_id: Optional[str] = None
    type_id: Optional[str] = None
    first_core_index: int = -1
    last_core_index: int = -1

    @property
    def layers_thickness(self) -> float:
        """Sum of all layer thicknesses in mm."""
        return sum(layer.thickness for layer in self.layers)

    @property
    def is_composite(self) -> bool:
        return len(self.layers) > 1

    def _has_core(self) -> bool:
        return 0 <= self.first_core_index <= self.last_core_index < len(self.layers)

    def reference_offset_from_exterior(self) -> float:
        """Distance from the exterior face to the reference line, in mm."""
        width = self.total_width
        if self._has_core():
            core_exterior = sum(
                l.thickness for l in self.layers[: self.first_core_index]
            )
            core_interior = sum(
                l.thickness for l in self.layers[: self.last_core_index + 1]
            )
        else:
            core_exterior, core_interior = 0.0, width

        offsets = {
            LocationLine.WALL_CENTERLINE: width / 2.0,
            LocationLine.FINISH_FACE_EXTERIOR: 0.0,
            LocationLine.FINISH_FACE_INTERIOR: width,
            LocationLine.CORE_FACE_EXTERIOR: core_exterior,
            LocationLine.CORE_FACE_INTERIOR: core_interior,
            LocationLine.CORE_CENTERLINE: (core_exterior + core_interior) / 2.0,
        }
        return offsets[self.location_line]


@dataclass
class LayerGeometry:
    """Resolved position of one layer.

    Attributes:
        index: Layer index in the assembly (0 = exterior).
        centerline: Layer axis at mid-thickness.
        thickness: Layer thickness in mm.
        normal: Unit in-plane normal, pointing from exterior to interior.
        offset: Signed offset of the centerline from the reference line.
        function: Layer function (copied from the LayerSpec).
        material: Layer material name.
        offset_from_exterior: Distance of the centerline from the assembly's
            exterior face (cumulative thickness of the outer layers plus
            half this layer).
    """

    index: int
    centerline: Line
    thickness: float
    normal: Vector3
    offset: float
    function: LayerFunction = LayerFunction.OTHER
    material: str = ""
    offset_from_exterior: float = 0.0

    @property
    def exterior_face_offset(self) -> float:
        return self.offset - self.thickness / 2.0

    @property
    def interior_face_offset(self) -> float:
        return self.offset + self.thickness / 2.0


@dataclass(frozen=True)
class WallTypeKey:
    """Identity of a generated single-layer wall type.

    Attributes:
        function: Layer function.
        material_code: Cleaned, truncated material name.
        thickness_mm: Thickness rounded to whole millimetres.
    """

    function: LayerFunction
    material_code: str
    thickness_mm: int

    @property
    def function_code(self) -> str:
        return FUNCTION_CODES[self.function]

    @property
    def group_key(self) -> Tuple[LayerFunction, str]:
        """Key used to group segments that should trim together.

        Material codes compare case-insensitively, like type names.
        """
        return (self.function, self.material_code.lower())

    def type_name(self, prefix: str) -> str:
        """Canonical type name: <prefix>-<function>-<material>-<N>mm."""
        return f"{prefix}-{self.function_code}-{self.material_code}-{self.thickness_mm}mm"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function": self.function.value,
            "material_code": self.material_code,
            "thickness_mm": self.thickness_mm,
        }


@dataclass
class WallSegment:
    """Single-layer wall created from one layer of a composite wall.

    The centerline is mutable; only the trim/extend engine changes it.

    Attributes:
        element_id: Store id of the created wall.
        source_wall_id: Composite wall the layer came from.
        layer_index: Index of the layer in the source assembly.
        type_key: Identity of the segment's wall type.
        type_id: Store id of the segment's wall type.
        centerline: Current wall axis.
        thickness: Layer thickness in mm.
        height: Wall height in mm.
        level_id: Level the segment is hosted on.
    """

    element_id: str
    source_wall_id: str
    layer_index: int
    type_key: WallTypeKey
    type_id: str
    centerline: Line
    thickness: float
    height: float
    level_id: Optional[str] = None

    def endpoint(self, which: WallEndpoint) -> Point3:
        if which == WallEndpoint.START:
            return self.centerline.start
        return self.centerline.end

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        return {
            "element_id": self.element_id,
            "source_wall_id": self.source_wall_id,
            "layer_index": self.layer_index,
            "type_key": self.type_key.to_dict(),
            "type_id": self.type_id,
            "centerline": self.centerline.to_dict(),
            "thickness": round(self.thickness, 6),
            "height": round(self.height, 6),
            "level_id": self.level_id,
        }


@dataclass
class Junction:
    """A neighbouring wall touching one endpoint of the target wall.

    Attributes:
        connected_wall_id: The other wall.
        junction_point: The target wall's endpoint at this junction.
        target_endpoint: Which end of the target wall is involved.
        connected_endpoint: Which end of the connected wall is involved.
        distance: Distance between the two endpoints in mm.
    """

    connected_wall_id: str
    junction_point: Point3
    target_endpoint: WallEndpoint
    connected_endpoint: WallEndpoint
    distance: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "connected_wall_id": self.connected_wall_id,
            "junction_point": {
                "x": self.junction_point[0],
                "y": self.junction_point[1],
                "z": self.junction_point[2],
            },
            "target_endpoint": self.target_endpoint.value,
            "connected_endpoint": self.connected_endpoint.value,
            "distance": round(self.distance, 6),
        }


# Group of segments sharing function and material, keyed by WallTypeKey.group_key
WallGroups = Dict[Tuple[LayerFunction, str], List[WallSegment]]
