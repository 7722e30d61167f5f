# File: src/wall_layer_decomposer/decomposer/__init__.py

"""Batch orchestration of wall decomposition."""

from .batch import WallDecomposer
from .results import BatchSummary, DecompositionResult, PurgeResult

__all__ = [
    "WallDecomposer",
    "BatchSummary",
    "DecompositionResult",
    "PurgeResult",
]
