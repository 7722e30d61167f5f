# File: src/wall_layer_decomposer/wall_data/__init__.py

"""Source wall attribute handling."""

from .attribute_policies import (
    CopyPolicy,
    AttributePolicy,
    SEGMENT_ATTRIBUTE_POLICIES,
    copy_segment_attributes,
)

__all__ = [
    "CopyPolicy",
    "AttributePolicy",
    "SEGMENT_ATTRIBUTE_POLICIES",
    "copy_segment_attributes",
]
