# File: src/wall_layer_decomposer/decomposer/results.py

"""Result records returned by the decomposer."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import DecompositionError
from ..wall_junctions.junction_resolver import JunctionResolution
from ..wall_layers.layer_types import Junction, WallSegment


@dataclass
class DecompositionResult:
    """Outcome of decomposing one wall.

    Attributes:
        wall_id: Source wall.
        created_segments: Single-layer walls that replace the source wall.
        errors: Recorded, non-fatal errors.
        junctions: Junctions found at the source wall's endpoints.
        resolutions: Per-junction trim/extend details.
        original_removed: Whether the source wall has been deleted.
    """

    wall_id: str
    created_segments: List[WallSegment] = field(default_factory=list)
    errors: List[DecompositionError] = field(default_factory=list)
    junctions: List[Junction] = field(default_factory=list)
    resolutions: List[JunctionResolution] = field(default_factory=list)
    original_removed: bool = False

    @property
    def succeeded(self) -> bool:
        return bool(self.created_segments)

    def record(self, error: DecompositionError) -> None:
        if error.wall_id is None:
            error.wall_id = self.wall_id
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "wall_id": self.wall_id,
            "created_segments": [s.to_dict() for s in self.created_segments],
            "errors": [e.to_dict() for e in self.errors],
            "junctions": [r.to_dict() for r in self.resolutions],
            "original_removed": self.original_removed,
        }


@dataclass
class PurgeResult:
    """Outcome of purging unused generated wall types."""

    purged: int = 0
    kept: int = 0
    purged_names: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "purged": self.purged,
            "kept": self.kept,
            "purged_names": list(self.purged_names),
        }


@dataclass
class BatchSummary:
    """Outcome of a batch run over several walls."""

    results: List[DecompositionResult] = field(default_factory=list)
    types_created: int = 0
    types_reused: int = 0
    purge: Optional[PurgeResult] = None

    @property
    def processed(self) -> List[str]:
        return [r.wall_id for r in self.results if r.succeeded]

    @property
    def skipped(self) -> List[str]:
        return [r.wall_id for r in self.results if not r.succeeded]

    @property
    def segments_created(self) -> int:
        return sum(len(r.created_segments) for r in self.results)

    @property
    def error_count(self) -> int:
        return sum(len(r.errors) for r in self.results)

    def summary_lines(self) -> List[str]:
        """Human-readable summary, one fact per line."""
        lines = [
            f"Walls processed: {len(self.processed)}",
            f"Walls skipped: {len(self.skipped)}",
            f"Segments created: {self.segments_created}",
            f"Wall types created: {self.types_created} (reused: {self.types_reused})",
            f"Errors recorded: {self.error_count}",
        ]
        if self.purge is not None:
            lines.append(
                f"Generated types purged: {self.purge.purged} (kept: {self.purge.kept})"
            )
        return lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "processed": self.processed,
            "skipped": self.skipped,
            "segments_created": self.segments_created,
            "types_created": self.types_created,
            "types_reused": self.types_reused,
            "purge": self.purge.to_dict() if self.purge else None,
            "results": [r.to_dict() for r in self.results],
        }
