# tests/conftest.py
import copy
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from typing import Any, Dict, List, Optional

from wall_layer_decomposer.model_store.memory_store import InMemoryModelStore
from wall_layer_decomposer.utils.geometry import Line
from wall_layer_decomposer.wall_layers.layer_types import (
    CompositeWallSpec,
    LayerFunction,
    LayerSpec,
)


# =============================================================================
# Document builders
# =============================================================================


def layer_dict(function: str, thickness: float, material: str = "") -> Dict[str, Any]:
    return {"function": function, "thickness": thickness, "material": material}


def wall_dict(
    wall_id: str,
    start: tuple,
    end: tuple,
    type_id: str = "ext160",
    height: float = 3000.0,
    **attributes,
) -> Dict[str, Any]:
    """Wall entry of a model document, coordinates in mm."""
    return {
        "id": wall_id,
        "type_id": type_id,
        "height": height,
        "level_id": "L1",
        "location_line": {
            "start": {"x": start[0], "y": start[1], "z": start[2] if len(start) > 2 else 0.0},
            "end": {"x": end[0], "y": end[1], "z": end[2] if len(end) > 2 else 0.0},
        },
        "attributes": attributes,
    }


# Structure 100 + Insulation 50 + Finish1 10 = 160 mm, exterior first
EXT_160_TYPE = {
    "id": "ext160",
    "name": "Exterior 160",
    "kind": "basic",
    "width": 160.0,
    "layers": [
        layer_dict("structure", 100.0, "Concrete"),
        layer_dict("insulation", 50.0, "Mineral Wool"),
        layer_dict("finish1", 10.0, "Gypsum"),
    ],
}

GENERIC_200_TYPE = {
    "id": "generic200",
    "name": "Generic 200",
    "kind": "basic",
    "layers": [layer_dict("structure", 200.0, "Concrete")],
}

CURTAIN_TYPE = {"id": "curtain", "name": "Storefront", "kind": "curtain"}


@pytest.fixture
def make_wall():
    """The wall_dict builder, for tests assembling their own layouts."""
    return wall_dict


@pytest.fixture
def make_layer():
    return layer_dict


@pytest.fixture
def ext160_type() -> Dict[str, Any]:
    """Fresh copy of the 160 mm exterior type entry."""
    return copy.deepcopy(EXT_160_TYPE)


@pytest.fixture
def store_factory():
    """Build an InMemoryModelStore from wall dicts and optional extra types."""

    def _build(
        walls: List[Dict[str, Any]],
        extra_types: Optional[List[Dict[str, Any]]] = None,
        units: str = "mm",
        settings: Optional[Dict[str, Any]] = None,
    ) -> InMemoryModelStore:
        return InMemoryModelStore.from_dict({
            "units": units,
            "settings": settings or {},
            "wall_types": [EXT_160_TYPE, GENERIC_200_TYPE, CURTAIN_TYPE]
            + list(extra_types or []),
            "walls": walls,
        })

    return _build


# =============================================================================
# Spec builders
# =============================================================================


@pytest.fixture
def three_layer_layers() -> tuple:
    return (
        LayerSpec(LayerFunction.STRUCTURE, 100.0, "Concrete"),
        LayerSpec(LayerFunction.INSULATION, 50.0, "Mineral Wool"),
        LayerSpec(LayerFunction.FINISH1, 10.0, "Gypsum"),
    )


@pytest.fixture
def three_layer_spec(three_layer_layers) -> CompositeWallSpec:
    """5 m straight wall along +X, 160 mm wide, centerline justified."""
    return CompositeWallSpec(
        wall_id="w1",
        reference_line=Line((0.0, 0.0, 0.0), (5000.0, 0.0, 0.0)),
        total_width=160.0,
        height=3000.0,
        layers=three_layer_layers,
        level_id="L1",
    )


@pytest.fixture
def l_corner_store(store_factory) -> InMemoryModelStore:
    """Two 160 mm walls meeting at (5000, 0): A along +X, B along +Y."""
    return store_factory([
        wall_dict("A", (0, 0, 0), (5000, 0, 0), comments="north"),
        wall_dict("B", (5000, 0, 0), (5000, 5000, 0)),
    ])
