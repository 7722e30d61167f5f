# File: src/wall_layer_decomposer/wall_data/attribute_policies.py

"""Attributes copied from a composite wall onto its layer segments.

The copy is driven by a fixed table instead of iterating over whatever
attributes the source wall happens to carry. Each entry names one
attribute and how it is copied:

- ALWAYS: copied as-is, including None
- IF_SET: copied only when the source has a non-empty value
- OVERRIDE: set to a fixed value regardless of the source

Height and level are passed to segment creation explicitly and are not
part of the table.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence

from ..wall_layers.layer_types import LocationLine

logger = logging.getLogger(__name__)


class CopyPolicy(Enum):
    ALWAYS = "always"
    IF_SET = "if_set"
    OVERRIDE = "override"


@dataclass(frozen=True)
class AttributePolicy:
    """How one attribute moves from source wall to segment."""

    key: str
    policy: CopyPolicy
    value: Any = None


SEGMENT_ATTRIBUTE_POLICIES: Sequence[AttributePolicy] = (
    AttributePolicy("base_constraint", CopyPolicy.ALWAYS),
    AttributePolicy("base_offset", CopyPolicy.ALWAYS),
    AttributePolicy("height_type", CopyPolicy.IF_SET),
    AttributePolicy("phase_created", CopyPolicy.IF_SET),
    AttributePolicy("phase_demolished", CopyPolicy.IF_SET),
    AttributePolicy("workset", CopyPolicy.IF_SET),
    AttributePolicy("comments", CopyPolicy.IF_SET),
    # Segments are placed by their own layer centerline
    AttributePolicy("location_line", CopyPolicy.OVERRIDE,
                    LocationLine.WALL_CENTERLINE.value),
)


def _is_set(value: Any) -> bool:
    return value is not None and value != ""


def copy_segment_attributes(
    source: Mapping[str, Any],
    policies: Optional[Sequence[AttributePolicy]] = None,
) -> Dict[str, Any]:
    """Build the attribute dict of a segment from its source wall's attributes."""
    policies = SEGMENT_ATTRIBUTE_POLICIES if policies is None else policies
    copied: Dict[str, Any] = {}
    for entry in policies:
        if entry.policy == CopyPolicy.OVERRIDE:
            copied[entry.key] = entry.value
        elif entry.policy == CopyPolicy.ALWAYS:
            if entry.key in source:
                copied[entry.key] = source[entry.key]
        elif _is_set(source.get(entry.key)):
            copied[entry.key] = source[entry.key]

    skipped = sorted(set(source) - {entry.key for entry in policies})
    if skipped:
        logger.debug("Attributes not copied to segments: %s", ", ".join(skipped))
    return copied
