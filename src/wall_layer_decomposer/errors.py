# File: src/wall_layer_decomposer/errors.py

"""Error kinds raised and recorded during wall decomposition.

Every error derives from DecompositionError, which carries a stable
machine-readable `code`, the wall it relates to and a human-readable
detail. Most kinds are recorded in results and never abort a batch;
only TransactionFatalError propagates out of a batch run.
"""

from typing import Any, Dict, Optional


class DecompositionError(Exception):
    """
    Base class for decomposition errors.

    Attributes:
        code: Stable error code for reports (e.g. "not_composite").
        wall_id: Wall being processed when the error occurred.
        detail: Human-readable message.
        extra: Optional additional context.
    """

    code = "decomposition_error"

    def __init__(
        self,
        detail: str,
        wall_id: Optional[str] = None,
        extra: Optional[Dict[str, Any]] = None,
    ):
        self.detail = detail
        self.wall_id = wall_id
        self.extra = extra or {}
        super().__init__(detail)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dictionary."""
        result: Dict[str, Any] = {"code": self.code, "detail": self.detail}
        if self.wall_id is not None:
            result["wall_id"] = self.wall_id
        if self.extra:
            result["extra"] = self.extra
        return result


class WallNotFoundError(DecompositionError):
    """The requested wall does not exist in the model store."""
    code = "wall_not_found"


class GeometryUnavailableError(DecompositionError):
    """Wall has no usable location line or no layer structure."""
    code = "geometry_unavailable"


class NotCompositeError(DecompositionError):
    """Wall has fewer than two layers; nothing to decompose."""
    code = "not_composite"


class LayerThicknessMismatchError(DecompositionError):
    """Layer thicknesses do not add up to the declared wall width."""
    code = "layer_thickness_mismatch"


class TypeCreationError(DecompositionError):
    """No template type is available or the store refused to create one."""
    code = "type_creation_failed"


class DuplicateTypeNameError(TypeCreationError):
    """A type with the same name (case-insensitive) already exists."""
    code = "duplicate_type_name"


class SegmentCreationError(DecompositionError):
    """The store could not create a wall segment for a layer."""
    code = "segment_creation_failed"


class CorrespondenceNotFoundError(DecompositionError):
    """No layer of the connected wall matches a layer group."""
    code = "junction_correspondence_not_found"


class TrimDegenerateError(DecompositionError):
    """A trim would leave a segment below the minimum length."""
    code = "trim_degenerate"


class TransactionFatalError(DecompositionError):
    """The enclosing store transaction failed and was rolled back."""
    code = "transaction_fatal"


class ModelStoreError(DecompositionError):
    """The model store rejected an operation (unknown id, type in use)."""
    code = "model_store_error"
