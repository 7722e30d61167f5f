# File: tests/wall_junctions/conftest.py

"""Shared test fixtures for junction tests.

Provides wall records for junction layouts (L-corners, T-junctions,
free ends) and a builder for single-layer segments.
"""

import pytest

from wall_layer_decomposer.model_store.base import WallRecord
from wall_layer_decomposer.utils.geometry import Line
from wall_layer_decomposer.wall_layers.layer_types import (
    LayerFunction,
    WallSegment,
    WallTypeKey,
)


def create_wall_record(wall_id: str, start: tuple, end: tuple) -> WallRecord:
    """Wall record with a location line from start to end (mm)."""
    return WallRecord(
        element_id=wall_id,
        type_id="ext160",
        location_line=Line(start, end),
        height=3000.0,
    )


@pytest.fixture
def wall_record():
    return create_wall_record


@pytest.fixture
def make_segment():
    """Build a WallSegment along start -> end."""

    def _build(
        element_id: str,
        start: tuple,
        end: tuple,
        function: LayerFunction = LayerFunction.STRUCTURE,
        material_code: str = "Conc",
        thickness: float = 100.0,
        source_wall_id: str = "A",
    ) -> WallSegment:
        return WallSegment(
            element_id=element_id,
            source_wall_id=source_wall_id,
            layer_index=0,
            type_key=WallTypeKey(function, material_code, int(thickness)),
            type_id=f"type-{element_id}",
            centerline=Line(start, end),
            thickness=thickness,
            height=3000.0,
        )

    return _build


@pytest.fixture
def l_corner_records():
    """Target A along +X ending at (5000, 0); B leaves that corner along +Y."""
    return [
        create_wall_record("B", (5000, 0, 0), (5000, 5000, 0)),
    ]


@pytest.fixture
def free_end_records():
    """A wall far away from the target's endpoints."""
    return [create_wall_record("far", (0, 3000, 0), (5000, 3000, 0))]
