# File: src/wall_layer_decomposer/model_store/memory_store.py
"""
In-memory model store.

Holds wall types and walls in insertion-ordered dicts. Loaded from a
JSON model document (validated by ModelDocument) and written back as
one, always in millimetres.

Usage:
    store = InMemoryModelStore.from_json("model.json")
    with store.transaction():
        segment = store.create_wall_segment(line, type_id, "L1", 3000.0)
    store.save_json("out.json")
"""

import copy
import json
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional

from pydantic import ValidationError

from ..errors import (
    DecompositionError,
    DuplicateTypeNameError,
    ModelStoreError,
    SegmentCreationError,
    TransactionFatalError,
    TypeCreationError,
)
from ..utils.geometry import Line
from ..wall_layers.layer_types import LayerSpec
from .base import BASIC_KIND, ModelStore, WallRecord, WallTypeRecord
from .document_models import ModelDocument

logger = logging.getLogger(__name__)


class InMemoryModelStore(ModelStore):
    """ModelStore backed by plain dicts.

    Args:
        wall_types: Initial wall types.
        walls: Initial walls.
        settings: Decomposition settings carried by the source document.
    """

    def __init__(
        self,
        wall_types: Optional[Iterable[WallTypeRecord]] = None,
        walls: Optional[Iterable[WallRecord]] = None,
        settings: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._types: Dict[str, WallTypeRecord] = {}
        self._walls: Dict[str, WallRecord] = {}
        self._next_id = 1
        self._in_transaction = False
        self.settings: Dict[str, Any] = dict(settings or {})

        for wall_type in wall_types or ():
            self.add_wall_type(wall_type)
        for wall in walls or ():
            self.add_wall(wall)

    # -------------------------------------------------------------------------
    # Loading / saving
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InMemoryModelStore":
        """Build a store from a model document dict.

        Raises:
            pydantic.ValidationError: If the document is invalid.
        """
        document = ModelDocument.model_validate(data)
        wall_types, walls = document.to_records()
        logger.info("Loaded model: %d wall type(s), %d wall(s), units %s",
                    len(wall_types), len(walls), document.units)
        return cls(wall_types, walls, document.settings)

    @classmethod
    def from_json(cls, path: str) -> "InMemoryModelStore":
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        try:
            return cls.from_dict(data)
        except ValidationError as e:
            logger.error("Invalid model document %s: %s", path, e)
            raise

    def to_document(self) -> ModelDocument:
        return ModelDocument.from_records(
            list(self._types.values()), list(self._walls.values()), self.settings
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.to_document().model_dump()

    def save_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info("Model written to %s", path)

    # -------------------------------------------------------------------------
    # Direct registration
    # -------------------------------------------------------------------------

    def _new_id(self, prefix: str) -> str:
        while True:
            candidate = f"{prefix}-{self._next_id:04d}"
            self._next_id += 1
            if candidate not in self._types and candidate not in self._walls:
                return candidate

    def add_wall_type(self, wall_type: WallTypeRecord) -> WallTypeRecord:
        if wall_type.type_id in self._types or wall_type.type_id in self._walls:
            raise ModelStoreError(f"Id {wall_type.type_id} already in use")
        if self.find_type_by_name(wall_type.name) is not None:
            raise DuplicateTypeNameError(
                f"Wall type {wall_type.name!r} already exists",
                extra={"type_name": wall_type.name},
            )
        self._types[wall_type.type_id] = wall_type
        return wall_type

    def add_wall(self, wall: WallRecord) -> WallRecord:
        if wall.element_id in self._walls or wall.element_id in self._types:
            raise ModelStoreError(f"Id {wall.element_id} already in use")
        if wall.type_id not in self._types:
            raise ModelStoreError(
                f"Wall {wall.element_id} references unknown type {wall.type_id}"
            )
        self._walls[wall.element_id] = wall
        return wall

    # -------------------------------------------------------------------------
    # ModelStore interface
    # -------------------------------------------------------------------------

    def get_wall(self, wall_id: str) -> Optional[WallRecord]:
        return self._walls.get(wall_id)

    def get_wall_type(self, type_id: str) -> Optional[WallTypeRecord]:
        return self._types.get(type_id)

    def enumerate_walls(self, excluding: Iterable[str] = ()) -> List[WallRecord]:
        excluded = set(excluding)
        return [w for w in self._walls.values() if w.element_id not in excluded]

    def list_wall_types(self) -> List[WallTypeRecord]:
        return list(self._types.values())

    def find_type_by_name(self, name: str) -> Optional[WallTypeRecord]:
        key = name.strip().lower()
        for wall_type in self._types.values():
            if wall_type.name.strip().lower() == key:
                return wall_type
        return None

    def _find_template(self, template_kind: str) -> Optional[WallTypeRecord]:
        """First type of the requested kind; basic templates must have layers."""
        for wall_type in self._types.values():
            if wall_type.kind != template_kind:
                continue
            if template_kind == BASIC_KIND and not wall_type.layers:
                continue
            return wall_type
        return None

    def create_single_layer_type(
        self, template_kind: str, name: str, layer: LayerSpec
    ) -> WallTypeRecord:
        if self.find_type_by_name(name) is not None:
            raise DuplicateTypeNameError(
                f"Wall type {name!r} already exists", extra={"type_name": name}
            )
        template = self._find_template(template_kind)
        if template is None:
            raise TypeCreationError(
                f"No {template_kind} wall type available as template for {name}",
                extra={"type_name": name, "template_kind": template_kind},
            )

        record = WallTypeRecord(
            type_id=self._new_id("type"),
            name=name,
            kind=template.kind,
            layers=(layer,),
            width=layer.thickness,
            first_core_index=0,
            last_core_index=0,
        )
        self._types[record.type_id] = record
        logger.debug("Type %s cloned from template %s", name, template.name)
        return record

    def create_wall_segment(
        self,
        centerline: Line,
        type_id: str,
        level_id: Optional[str],
        height: float,
        attributes: Optional[Dict[str, Any]] = None,
    ) -> WallRecord:
        if type_id not in self._types:
            raise SegmentCreationError(f"Unknown wall type {type_id}")
        if centerline.is_degenerate():
            raise SegmentCreationError("Cannot create a wall on a zero-length line")
        if height <= 0:
            raise SegmentCreationError(f"Invalid wall height {height}")

        wall = WallRecord(
            element_id=self._new_id("wall"),
            type_id=type_id,
            location_line=centerline,
            height=height,
            level_id=level_id,
            attributes=dict(attributes or {}),
        )
        self._walls[wall.element_id] = wall
        return wall

    def set_wall_curve(self, wall_id: str, line: Line) -> None:
        wall = self._walls.get(wall_id)
        if wall is None:
            raise ModelStoreError(f"Wall {wall_id} not found")
        wall.location_line = line

    def delete_element(self, element_id: str) -> None:
        if element_id in self._walls:
            del self._walls[element_id]
            return
        if element_id in self._types:
            if self.is_type_in_use(element_id):
                raise ModelStoreError(f"Wall type {element_id} is still in use")
            del self._types[element_id]
            return
        raise ModelStoreError(f"Element {element_id} not found")

    @contextmanager
    def transaction(self) -> Iterator["InMemoryModelStore"]:
        """Snapshot the store; restore it if the block raises.

        Nested calls join the outer transaction.
        """
        if self._in_transaction:
            yield self
            return

        snapshot = (copy.deepcopy(self._types), copy.deepcopy(self._walls), self._next_id)
        self._in_transaction = True
        try:
            yield self
        except Exception as e:
            self._types, self._walls, self._next_id = snapshot
            logger.error("Transaction rolled back: %s", e)
            if isinstance(e, TransactionFatalError):
                raise
            detail = e.detail if isinstance(e, DecompositionError) else str(e)
            raise TransactionFatalError(f"Transaction rolled back: {detail}") from e
        finally:
            self._in_transaction = False
