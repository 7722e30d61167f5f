# File: src/wall_layer_decomposer/model_store/base.py
"""
Model store abstraction.

The decomposer never owns building model data. It reads walls and wall
types from a ModelStore and asks it to create types and segments,
move wall curves and delete elements. Stores decide how elements are
persisted; the in-memory store in memory_store.py backs the CLI and
the tests.

Usage:
    store = InMemoryModelStore.from_json("model.json")
    spec = store.get_wall_spec("w1")
    with store.transaction():
        ...
"""

import logging
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..errors import (
    GeometryUnavailableError,
    NotCompositeError,
    WallNotFoundError,
)
from ..utils.geometry import Line
from ..wall_layers.layer_types import (
    CompositeWallSpec,
    LayerSpec,
    LocationLine,
)

logger = logging.getLogger(__name__)

BASIC_KIND = "basic"


# =============================================================================
# Records
# =============================================================================


@dataclass
class WallTypeRecord:
    """A wall type as stored in the model.

    Attributes:
        type_id: Store id.
        name: Type name, unique case-insensitively.
        kind: "basic", "curtain" or "stacked". Only basic types carry layers.
        layers: Layers from exterior to interior.
        width: Declared width in mm; the layer sum when not given.
        first_core_index: First core layer, -1 if undefined.
        last_core_index: Last core layer, -1 if undefined.
    """

    type_id: str
    name: str
    kind: str = BASIC_KIND
    layers: Tuple[LayerSpec, ...] = ()
    width: Optional[float] = None
    first_core_index: int = -1
    last_core_index: int = -1

    @property
    def total_width(self) -> float:
        if self.width is not None:
            return self.width
        return sum(layer.thickness for layer in self.layers)

    @property
    def is_composite(self) -> bool:
        return self.kind == BASIC_KIND and len(self.layers) > 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.type_id,
            "name": self.name,
            "kind": self.kind,
            "width": self.total_width,
            "layers": [
                {
                    "function": layer.function.value,
                    "material": layer.material,
                    "thickness": layer.thickness,
                }
                for layer in self.layers
            ],
            "first_core_index": self.first_core_index,
            "last_core_index": self.last_core_index,
        }


@dataclass
class WallRecord:
    """A wall instance as stored in the model.

    Attributes:
        element_id: Store id.
        type_id: Id of the wall's type.
        location_line: Wall location line, None if unavailable.
        height: Unconnected height in mm.
        level_id: Hosting level.
        attributes: Remaining instance attributes (location line
            justification, phases, comments, ...).
    """

    element_id: str
    type_id: str
    location_line: Optional[Line]
    height: float
    level_id: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.element_id,
            "type_id": self.type_id,
            "location_line": (
                self.location_line.to_dict() if self.location_line else None
            ),
            "height": self.height,
            "level_id": self.level_id,
            "attributes": dict(self.attributes),
        }


def parse_location_line(value: Any) -> LocationLine:
    """Read a justification attribute, defaulting to the wall centerline."""
    if isinstance(value, LocationLine):
        return value
    if value is None or value == "":
        return LocationLine.WALL_CENTERLINE
    try:
        return LocationLine(str(value).strip().lower())
    except ValueError:
        logger.warning("Unknown location line %r, using wall centerline", value)
        return LocationLine.WALL_CENTERLINE


# =============================================================================
# Abstract Base Class
# =============================================================================


class ModelStore(ABC):
    """Abstract base class for building model stores.

    Subclasses implement element access and mutation; get_wall_spec()
    and is_type_in_use() are built on top of them.
    """

    @abstractmethod
    def get_wall(self, wall_id: str) -> Optional[WallRecord]:
        """Return the wall with this id, or None."""
        ...

    @abstractmethod
    def get_wall_type(self, type_id: str) -> Optional[WallTypeRecord]:
        """Return the wall type with this id, or None."""
        ...

    @abstractmethod
    def enumerate_walls(self, excluding: Iterable[str] = ()) -> List[WallRecord]:
        """All walls in stable store order, minus the excluded ids."""
        ...

    @abstractmethod
    def list_wall_types(self) -> List[WallTypeRecord]:
        ...

    @abstractmethod
    def find_type_by_name(self, name: str) -> Optional[WallTypeRecord]:
        """Case-insensitive lookup of a wall type by name."""
        ...

    @abstractmethod
    def create_single_layer_type(
        self, template_kind: str, name: str, layer: LayerSpec
    ) -> WallTypeRecord:
        """Clone a template type of template_kind into a one-layer type.

        Raises:
            TypeCreationError: No template of that kind exists.
            DuplicateTypeNameError: A type with this name already exists.
        """
        ...

    @abstractmethod
    def create_wall_segment(
        self,
        centerline: Line,
        type_id: str,
        level_id: Optional[str],
        height: float,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> WallRecord:
        """Create a wall along centerline.

        Raises:
            SegmentCreationError: The wall cannot be created.
        """
        ...

    @abstractmethod
    def set_wall_curve(self, wall_id: str, line: Line) -> None:
        ...

    @abstractmethod
    def delete_element(self, element_id: str) -> None:
        """Delete a wall or wall type.

        Raises:
            ModelStoreError: Unknown id, or a type still in use.
        """
        ...

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Atomic boundary around a batch.

        On an exception inside the block all changes made in it are
        undone and TransactionFatalError is raised.
        """
        ...

    def get_wall_spec(self, wall_id: str) -> CompositeWallSpec:
        """Layer structure and placement of a composite wall.

        Raises:
            WallNotFoundError: No wall with this id.
            GeometryUnavailableError: No location line or no layer
                structure (curtain and stacked walls).
            NotCompositeError: Fewer than two layers.
        """
        wall = self.get_wall(wall_id)
        if wall is None:
            raise WallNotFoundError(f"Wall {wall_id} not found", wall_id=wall_id)
        if wall.location_line is None:
            raise GeometryUnavailableError(
                f"Wall {wall_id} has no location line", wall_id=wall_id
            )

        wall_type = self.get_wall_type(wall.type_id)
        if wall_type is None or wall_type.kind != BASIC_KIND or not wall_type.layers:
            kind = wall_type.kind if wall_type else "missing"
            raise GeometryUnavailableError(
                f"Wall {wall_id} has no layer structure (type kind: {kind})",
                wall_id=wall_id,
            )
        if len(wall_type.layers) < 2:
            raise NotCompositeError(
                f"Wall {wall_id} has a single layer", wall_id=wall_id
            )

        return CompositeWallSpec(
            wall_id=wall.element_id,
            reference_line=wall.location_line,
            total_width=wall_type.total_width,
            height=wall.height,
            layers=tuple(wall_type.layers),
            location_line=parse_location_line(wall.attributes.get("location_line")),
            level_id=wall.level_id,
            type_id=wall_type.type_id,
            first_core_index=wall_type.first_core_index,
            last_core_index=wall_type.last_core_index,
        )

    def is_type_in_use(self, type_id: str) -> bool:
        return any(wall.type_id == type_id for wall in self.enumerate_walls())
