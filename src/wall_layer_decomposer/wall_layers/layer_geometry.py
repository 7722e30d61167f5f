# File: src/wall_layer_decomposer/wall_layers/layer_geometry.py

"""Layer geometry resolver.

Turns a composite wall's reference line and ordered layer thicknesses
into one parallel centerline per layer. Offsets are measured along the
in-plane normal `(dir.y, -dir.x, 0)`, starting at the exterior face:

    offset_i = -ref_from_exterior + cumulative_i + thickness_i / 2

where `ref_from_exterior` is the distance from the exterior face to the
reference line (half the width for a centerline-justified wall) and
`cumulative_i` is the summed thickness of layers 0..i-1. The distance
from the exterior face, `cumulative_i + thickness_i / 2`, is kept on
each LayerGeometry as `offset_from_exterior`. Because every
offset is derived from the same running sum, consecutive layers are
face-to-face with no gap or overlap.
"""

import logging
from typing import Dict, List, Optional

from ..config.settings import DecompositionSettings, DEFAULT_SETTINGS
from ..errors import LayerThicknessMismatchError
from ..utils.geometry import ZERO_LENGTH, format_point, in_plane_normal, scale
from ..utils.logging_config import DecomposerLogger
from .layer_types import CompositeWallSpec, LayerGeometry

logger = logging.getLogger(__name__)


def resolve_layer_geometry(
    spec: CompositeWallSpec,
    settings: Optional[DecompositionSettings] = None,
    logger: logging.Logger = logger,
) -> Dict[int, LayerGeometry]:
    """Compute the centerline, normal and offset of every layer.

    Args:
        spec: Composite wall to resolve.
        settings: Tolerances; defaults to DEFAULT_SETTINGS.
        logger: Logger receiving diagnostics.

    Returns:
        Mapping of layer index to LayerGeometry. Empty when there is
        nothing to decompose: one layer or fewer, no measurable width,
        or a reference line that is degenerate or vertical.

    Raises:
        LayerThicknessMismatchError: If the layer thicknesses do not sum
            to the declared total width.
    """
    settings = settings or DEFAULT_SETTINGS
    eps = settings.thickness_epsilon

    if not spec.is_composite:
        logger.debug("Wall %s has %d layer(s), nothing to decompose",
                     spec.wall_id, len(spec.layers))
        return {}

    if spec.total_width <= eps:
        logger.debug("Wall %s has no measurable width", spec.wall_id)
        return {}

    layers_sum = spec.layers_thickness
    if abs(layers_sum - spec.total_width) > eps:
        raise LayerThicknessMismatchError(
            f"Layer thicknesses sum to {layers_sum:.6f} mm but wall width is "
            f"{spec.total_width:.6f} mm",
            wall_id=spec.wall_id,
            extra={"layers_sum": layers_sum, "total_width": spec.total_width},
        )

    if spec.reference_line.is_degenerate():
        logger.warning("Wall %s has a degenerate location line", spec.wall_id)
        return {}

    if spec.reference_line.plan_length < ZERO_LENGTH:
        logger.warning("Wall %s location line has no horizontal extent", spec.wall_id)
        return {}

    normal = in_plane_normal(spec.reference_line.direction)
    ref_from_exterior = spec.reference_offset_from_exterior()

    geometries: Dict[int, LayerGeometry] = {}
    cumulative = 0.0
    for index, layer in enumerate(spec.layers):
        from_exterior = cumulative + layer.thickness / 2.0
        offset = from_exterior - ref_from_exterior
        centerline = spec.reference_line.translated(scale(normal, offset))
        geometries[index] = LayerGeometry(
            index=index,
            centerline=centerline,
            thickness=layer.thickness,
            normal=normal,
            offset=offset,
            function=layer.function,
            material=layer.material,
            offset_from_exterior=from_exterior,
        )
        logger.debug(
            "Layer %d (%s, %.1f mm): offset %.3f mm",
            index, layer.function.value, layer.thickness, offset,
        )
        logger.log(
            DecomposerLogger.TRACE_LEVEL, "Layer %d centerline %s -> %s",
            index, format_point(centerline.start), format_point(centerline.end),
        )
        cumulative += layer.thickness

    return geometries


def find_contiguity_gaps(
    geometries: Dict[int, LayerGeometry],
    tolerance: float = 1e-6,
) -> List[int]:
    """Return indices i whose interior face does not meet layer i+1's exterior face."""
    gaps = []
    indices = sorted(geometries)
    for current, following in zip(indices, indices[1:]):
        delta = (geometries[following].exterior_face_offset
                 - geometries[current].interior_face_offset)
        if abs(delta) > tolerance:
            gaps.append(current)
    return gaps
