# File: src/wall_layer_decomposer/__init__.py

"""
Wall Layer Decomposer

Splits composite (multi-layer) walls into single-layer walls that
reproduce the original assembly, then trims and extends each layer at
junctions so matching layers of neighbouring walls line up.
"""

__version__ = "0.1.0"

from .config.settings import DecompositionSettings, DEFAULT_SETTINGS
from .decomposer.batch import WallDecomposer
from .decomposer.results import BatchSummary, DecompositionResult, PurgeResult
from .model_store.base import ModelStore
from .model_store.memory_store import InMemoryModelStore

__all__ = [
    "DecompositionSettings",
    "DEFAULT_SETTINGS",
    "WallDecomposer",
    "BatchSummary",
    "DecompositionResult",
    "PurgeResult",
    "ModelStore",
    "InMemoryModelStore",
]
