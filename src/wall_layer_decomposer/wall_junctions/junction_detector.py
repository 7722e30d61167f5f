# File: src/wall_layer_decomposer/wall_junctions/junction_detector.py

"""Endpoint junction detection.

Finds the walls whose endpoints lie within tolerance of a target wall's
endpoints. Every target endpoint is compared against both endpoints of
every other wall; for one target endpoint and one other wall only the
closer of the two pairs is kept, so a short wall whose two ends both
fall inside the tolerance does not register twice.

Walls meeting the target at mid-span (T-intersections seen from the
stem) are not junctions of the target wall; they are found when the
stem wall itself is decomposed.

All measurements are in millimetres.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..utils.geometry import Line, Point3, distance, format_point
from ..wall_layers.layer_types import Junction, WallEndpoint

logger = logging.getLogger(__name__)


# =============================================================================
# Endpoint Utilities
# =============================================================================


def _endpoints(line: Line) -> Tuple[Tuple[WallEndpoint, Point3], ...]:
    return ((WallEndpoint.START, line.start), (WallEndpoint.END, line.end))


def _closest_endpoint(
    point: Point3, line: Line
) -> Tuple[WallEndpoint, float]:
    """Endpoint of line nearest to point; START wins ties."""
    start_dist = distance(point, line.start)
    end_dist = distance(point, line.end)
    if end_dist < start_dist:
        return WallEndpoint.END, end_dist
    return WallEndpoint.START, start_dist


# =============================================================================
# Detection
# =============================================================================


def detect_junctions(
    target_line: Line,
    candidates: Iterable,
    tolerance: float,
    target_id: Optional[str] = None,
    exclude_ids: Sequence[str] = (),
    logger: logging.Logger = logger,
) -> List[Junction]:
    """Find walls touching either endpoint of target_line.

    Args:
        target_line: Location line of the wall being decomposed.
        candidates: Wall records (with `element_id` and `location_line`)
            in store enumeration order.
        tolerance: Maximum endpoint distance, inclusive.
        target_id: Id of the target wall, never reported as connected.
        exclude_ids: Further ids to ignore, e.g. freshly created segments.
        logger: Logger receiving diagnostics.

    Returns:
        Junctions in discovery order: candidate order, then START before END
        of the target wall.
    """
    excluded = set(exclude_ids)
    if target_id is not None:
        excluded.add(target_id)

    junctions: List[Junction] = []
    for wall in candidates:
        if wall.element_id in excluded:
            continue
        other_line = wall.location_line
        if other_line is None:
            logger.debug("Wall %s has no location line, skipped", wall.element_id)
            continue

        for target_end, point in _endpoints(target_line):
            other_end, dist = _closest_endpoint(point, other_line)
            if dist > tolerance:
                continue
            junctions.append(Junction(
                connected_wall_id=wall.element_id,
                junction_point=point,
                target_endpoint=target_end,
                connected_endpoint=other_end,
                distance=dist,
            ))
            logger.debug(
                "Junction: %s end of target at %s touches %s end of %s (%.1f mm)",
                target_end.value, format_point(point),
                other_end.value, wall.element_id, dist,
            )

    logger.debug("Detected %d junction(s) within %.1f mm", len(junctions), tolerance)
    return junctions
