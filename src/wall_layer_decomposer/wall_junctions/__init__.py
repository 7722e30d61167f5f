# File: src/wall_layer_decomposer/wall_junctions/__init__.py

"""Junction detection and layer-wise trim/extend reconciliation.

Typical flow for one decomposed wall:

    junctions = detect_junctions(line, store.enumerate_walls(), tolerance)
    groups = group_segments(segments)
    for junction in junctions:
        resolve_junction(groups, junction, connected_spec)
"""

from .junction_detector import detect_junctions
from .junction_resolver import (
    MatchPriority,
    TargetMethod,
    GroupCorrespondence,
    JunctionResolution,
    group_segments,
    find_corresponding_layer,
    layer_intersection_point,
    resolve_junction,
)
from .trim_extend import TrimOutcome, TrimResult, trim_extend_segment

__all__ = [
    "detect_junctions",
    "MatchPriority",
    "TargetMethod",
    "GroupCorrespondence",
    "JunctionResolution",
    "group_segments",
    "find_corresponding_layer",
    "layer_intersection_point",
    "resolve_junction",
    "TrimOutcome",
    "TrimResult",
    "trim_extend_segment",
]
