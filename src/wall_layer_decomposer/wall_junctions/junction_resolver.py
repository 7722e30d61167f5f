# File: src/wall_layer_decomposer/wall_junctions/junction_resolver.py

"""Group-and-correspond junction resolution.

Reconciles the single-layer segments of a decomposed wall with one
connected wall at one junction:

- Segments are grouped by (function, material code). Every segment in a
  group receives the same target point.
- Simple junction: the connected wall has no layer structure. Every
  group is trimmed to the junction point.
- Composite junction: the connected wall's layers are resolved (without
  creating anything) and each group is matched to one connected layer:

    1. Same function and same material code
    2. Same function
    3. The connected wall's Structure layer

  The target point is the intersection of the group's representative
  centerline with the matched layer's centerline. When the bounded
  segments do not meet, both are extended by the intersection margin
  and intersected again; failing that, the junction point is used.

Groups without any match fall back to the junction point and record a
CorrespondenceNotFoundError. This is degraded, not fatal.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config.settings import DecompositionSettings, DEFAULT_SETTINGS
from ..errors import CorrespondenceNotFoundError, DecompositionError
from ..utils.geometry import Line, Point3, format_point, intersect_lines
from ..wall_layers.layer_geometry import resolve_layer_geometry
from ..wall_layers.layer_types import (
    CompositeWallSpec,
    Junction,
    LayerFunction,
    LayerGeometry,
    WallGroups,
    WallSegment,
)
from ..wall_types.type_classifier import material_code
from .trim_extend import TrimResult, trim_extend_segment

logger = logging.getLogger(__name__)


# =============================================================================
# Types
# =============================================================================


class MatchPriority(Enum):
    """Rule that matched a group to a connected layer (lower wins)."""

    FUNCTION_AND_MATERIAL = 1
    FUNCTION_ONLY = 2
    STRUCTURE_FALLBACK = 3


class TargetMethod(Enum):
    """How a group's target point was obtained."""

    INTERSECTION = "intersection"
    EXTENDED_INTERSECTION = "extended_intersection"
    JUNCTION_POINT = "junction_point"


@dataclass
class GroupCorrespondence:
    """Resolved target of one segment group at one junction."""

    group_key: Tuple[LayerFunction, str]
    target_point: Point3
    method: TargetMethod
    connected_layer_index: Optional[int] = None
    priority: Optional[MatchPriority] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "function": self.group_key[0].value,
            "material_code": self.group_key[1],
            "method": self.method.value,
            "connected_layer_index": self.connected_layer_index,
            "priority": self.priority.name if self.priority else None,
        }


@dataclass
class JunctionResolution:
    """Everything that happened while resolving one junction."""

    junction: Junction
    composite: bool
    correspondences: List[GroupCorrespondence] = field(default_factory=list)
    trims: List[TrimResult] = field(default_factory=list)
    errors: List[DecompositionError] = field(default_factory=list)

    @property
    def modified_segment_ids(self) -> List[str]:
        return [t.segment_id for t in self.trims if t.outcome.modified]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "junction": self.junction.to_dict(),
            "composite": self.composite,
            "correspondences": [c.to_dict() for c in self.correspondences],
            "trims": [t.to_dict() for t in self.trims],
            "errors": [e.to_dict() for e in self.errors],
        }


# =============================================================================
# Grouping and Correspondence
# =============================================================================


def group_segments(segments: Iterable[WallSegment]) -> WallGroups:
    """Group segments by their type key's (function, material code)."""
    groups: WallGroups = {}
    for segment in segments:
        groups.setdefault(segment.type_key.group_key, []).append(segment)
    return groups


def find_corresponding_layer(
    group_key: Tuple[LayerFunction, str],
    connected_layers: Dict[int, LayerGeometry],
    material_code_length: int = 4,
) -> Optional[Tuple[int, MatchPriority]]:
    """Pick the connected layer a group should meet.

    Within one priority the lowest layer index (most exterior) wins.

    Returns:
        (layer index, priority) or None when nothing matches.
    """
    function, code = group_key
    ordered = [connected_layers[i] for i in sorted(connected_layers)]

    for layer in ordered:
        if (layer.function == function
                and material_code(layer.material, layer.function,
                                  material_code_length).lower() == code.lower()):
            return layer.index, MatchPriority.FUNCTION_AND_MATERIAL

    for layer in ordered:
        if layer.function == function:
            return layer.index, MatchPriority.FUNCTION_ONLY

    for layer in ordered:
        if layer.function == LayerFunction.STRUCTURE:
            return layer.index, MatchPriority.STRUCTURE_FALLBACK

    return None


def layer_intersection_point(
    line: Line,
    connected_line: Line,
    junction_point: Point3,
    margin: float,
) -> Tuple[Point3, TargetMethod]:
    """Intersection of two layer centerlines with extension fallback."""
    point = intersect_lines(line, connected_line, bounded=True)
    if point is not None:
        return point, TargetMethod.INTERSECTION

    if not line.is_degenerate() and not connected_line.is_degenerate():
        point = intersect_lines(
            line.extended(margin), connected_line.extended(margin), bounded=True
        )
        if point is not None:
            return point, TargetMethod.EXTENDED_INTERSECTION

    return junction_point, TargetMethod.JUNCTION_POINT


# =============================================================================
# Junction Resolution
# =============================================================================


def _apply_target(
    resolution: JunctionResolution,
    segments: List[WallSegment],
    target_point: Point3,
    settings: DecompositionSettings,
    logger: logging.Logger,
) -> None:
    for segment in segments:
        result = trim_extend_segment(
            segment, target_point, resolution.junction.target_endpoint,
            settings=settings, logger=logger,
        )
        resolution.trims.append(result)
        if result.error is not None:
            resolution.errors.append(result.error)


def resolve_junction(
    groups: WallGroups,
    junction: Junction,
    connected_spec: Optional[CompositeWallSpec],
    settings: Optional[DecompositionSettings] = None,
    logger: logging.Logger = logger,
) -> JunctionResolution:
    """Trim or extend every segment group at one junction.

    Args:
        groups: Segments of the decomposed wall, grouped by group_segments.
        junction: Junction to resolve.
        connected_spec: Layer structure of the connected wall, or None
            when it is not composite.
        settings: Tolerances and intersection margin.
        logger: Logger receiving diagnostics.

    Raises:
        LayerThicknessMismatchError: If the connected wall's layers do
            not add up to its width.
    """
    settings = settings or DEFAULT_SETTINGS

    connected_layers: Dict[int, LayerGeometry] = {}
    if connected_spec is not None:
        connected_layers = resolve_layer_geometry(connected_spec, settings, logger)

    resolution = JunctionResolution(junction=junction, composite=bool(connected_layers))

    if not connected_layers:
        logger.debug("Simple junction with %s: trimming all groups to %s",
                     junction.connected_wall_id, format_point(junction.junction_point))
        for group_key, segments in groups.items():
            resolution.correspondences.append(GroupCorrespondence(
                group_key, junction.junction_point, TargetMethod.JUNCTION_POINT
            ))
            _apply_target(resolution, segments, junction.junction_point, settings, logger)
        return resolution

    for group_key, segments in groups.items():
        match = find_corresponding_layer(
            group_key, connected_layers, settings.material_code_length
        )
        if match is None:
            error = CorrespondenceNotFoundError(
                f"No layer of wall {junction.connected_wall_id} matches "
                f"{group_key[0].value}/{group_key[1]}",
                wall_id=segments[0].source_wall_id,
                extra={"connected_wall_id": junction.connected_wall_id},
            )
            logger.warning("%s, using junction point", error.detail)
            resolution.errors.append(error)
            correspondence = GroupCorrespondence(
                group_key, junction.junction_point, TargetMethod.JUNCTION_POINT
            )
        else:
            index, priority = match
            target, method = layer_intersection_point(
                segments[0].centerline,
                connected_layers[index].centerline,
                junction.junction_point,
                settings.intersection_margin_mm,
            )
            logger.debug(
                "Group %s/%s -> layer %d of %s (%s, %s) at %s",
                group_key[0].value, group_key[1], index,
                junction.connected_wall_id, priority.name, method.value,
                format_point(target),
            )
            correspondence = GroupCorrespondence(
                group_key, target, method, index, priority
            )

        resolution.correspondences.append(correspondence)
        _apply_target(resolution, segments, correspondence.target_point, settings, logger)

    return resolution
