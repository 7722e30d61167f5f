# File: src/wall_layer_decomposer/model_store/__init__.py

"""Model store interface, JSON document models and in-memory store."""

from .base import (
    BASIC_KIND,
    ModelStore,
    WallRecord,
    WallTypeRecord,
    parse_location_line,
)
from .document_models import (
    PointModel,
    LineModel,
    LayerModel,
    WallTypeModel,
    WallModel,
    ModelDocument,
)
from .memory_store import InMemoryModelStore

__all__ = [
    "BASIC_KIND",
    "ModelStore",
    "WallRecord",
    "WallTypeRecord",
    "parse_location_line",
    "PointModel",
    "LineModel",
    "LayerModel",
    "WallTypeModel",
    "WallModel",
    "ModelDocument",
    "InMemoryModelStore",
]
