# File: src/wall_layer_decomposer/wall_junctions/trim_extend.py

"""Trim/extend engine for single-layer wall segments.

Moves one endpoint of a segment to the projection of a target point on
the segment's infinite line. Whether this shortens (trim) or lengthens
(extend) the segment depends only on where the projection falls; both
go through the same code path.

A move is refused, leaving the segment untouched, when it would make
the segment shorter than the minimum length or flip its direction.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..config.settings import DecompositionSettings, DEFAULT_SETTINGS
from ..errors import TrimDegenerateError
from ..utils.geometry import Point3, dot, format_point, project_point_on_line, subtract
from ..wall_layers.layer_types import WallEndpoint, WallSegment

logger = logging.getLogger(__name__)


class TrimOutcome(Enum):
    """What happened to a segment endpoint."""

    TRIMMED = "trimmed"
    EXTENDED = "extended"
    UNCHANGED = "unchanged"
    DEGENERATE = "degenerate"

    @property
    def modified(self) -> bool:
        return self in (TrimOutcome.TRIMMED, TrimOutcome.EXTENDED)


@dataclass
class TrimResult:
    """Result of one trim/extend operation.

    Attributes:
        segment_id: Segment that was (or would have been) modified.
        endpoint: Which end was moved.
        outcome: What happened.
        old_length: Length before the operation in mm.
        new_length: Length after the operation, or the refused length.
        target_point: Projected point the endpoint was moved to.
        error: Recorded error for DEGENERATE outcomes.
    """

    segment_id: str
    endpoint: WallEndpoint
    outcome: TrimOutcome
    old_length: float
    new_length: float
    target_point: Point3
    error: Optional[TrimDegenerateError] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "segment_id": self.segment_id,
            "endpoint": self.endpoint.value,
            "outcome": self.outcome.value,
            "old_length": round(self.old_length, 6),
            "new_length": round(self.new_length, 6),
        }
        if self.error is not None:
            result["error"] = self.error.to_dict()
        return result


def trim_extend_segment(
    segment: WallSegment,
    target_point: Point3,
    endpoint: WallEndpoint,
    settings: Optional[DecompositionSettings] = None,
    logger: logging.Logger = logger,
) -> TrimResult:
    """Move `endpoint` of segment onto the projection of target_point.

    The segment's centerline is replaced only for TRIMMED and EXTENDED
    outcomes.
    """
    settings = settings or DEFAULT_SETTINGS
    line = segment.centerline
    old_length = line.length

    def degenerate(detail: str, new_length: float, point: Point3) -> TrimResult:
        error = TrimDegenerateError(
            detail,
            wall_id=segment.source_wall_id,
            extra={"segment_id": segment.element_id, "endpoint": endpoint.value},
        )
        logger.warning("Trim of %s skipped: %s", segment.element_id, detail)
        return TrimResult(segment.element_id, endpoint, TrimOutcome.DEGENERATE,
                          old_length, new_length, point, error)

    if line.is_degenerate():
        return degenerate("segment centerline has zero length", old_length, target_point)

    projected = project_point_on_line(target_point, line)
    if endpoint == WallEndpoint.START:
        new_line = line.with_start(projected)
    else:
        new_line = line.with_end(projected)
    new_length = new_line.length

    if abs(new_length - old_length) < settings.negligible_change_mm:
        logger.debug("Segment %s %s unchanged (delta %.3f mm)",
                     segment.element_id, endpoint.value, new_length - old_length)
        return TrimResult(segment.element_id, endpoint, TrimOutcome.UNCHANGED,
                          old_length, old_length, projected)

    reversed_direction = dot(
        subtract(new_line.end, new_line.start), subtract(line.end, line.start)
    ) <= 0
    if reversed_direction:
        return degenerate(
            f"moving {endpoint.value} to {format_point(projected)} reverses the segment",
            new_length, projected,
        )

    if new_length < settings.min_segment_length_mm:
        return degenerate(
            f"new length {new_length:.1f} mm is below minimum "
            f"{settings.min_segment_length_mm:.1f} mm",
            new_length, projected,
        )

    segment.centerline = new_line
    outcome = TrimOutcome.TRIMMED if new_length < old_length else TrimOutcome.EXTENDED
    logger.debug("Segment %s %s %s: %.1f -> %.1f mm", segment.element_id,
                 endpoint.value, outcome.value, old_length, new_length)
    return TrimResult(segment.element_id, endpoint, outcome,
                      old_length, new_length, projected)
