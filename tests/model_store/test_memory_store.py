# File: tests/model_store/test_memory_store.py

"""Tests for the in-memory model store.

Tests cover:
- Loading and saving model documents
- Case-insensitive type lookup and type creation from templates
- Segment creation, curve updates and deletion
- Transaction rollback
- Composite wall spec extraction
"""

import json

import pytest
from pydantic import ValidationError

from wall_layer_decomposer.errors import (
    DuplicateTypeNameError,
    GeometryUnavailableError,
    ModelStoreError,
    NotCompositeError,
    SegmentCreationError,
    TransactionFatalError,
    TypeCreationError,
    WallNotFoundError,
)
from wall_layer_decomposer.model_store.memory_store import InMemoryModelStore
from wall_layer_decomposer.utils.geometry import Line
from wall_layer_decomposer.wall_layers.layer_types import (
    LayerFunction,
    LayerSpec,
    LocationLine,
)

INSULATION_50 = LayerSpec(LayerFunction.INSULATION, 50.0, "Mineral Wool")


@pytest.fixture
def store(l_corner_store):
    return l_corner_store


class TestLoading:

    def test_counts(self, store):
        assert len(store.list_wall_types()) == 3
        assert [w.element_id for w in store.enumerate_walls()] == ["A", "B"]

    def test_feet_document_converted(self, store_factory, make_wall):
        ft_type = {
            "id": "ft", "name": "Feet Wall", "kind": "basic",
            "layers": [{"function": "structure", "thickness": 0.5}],
        }
        store = store_factory(
            [make_wall("w", (0, 0, 0), (10, 0, 0), type_id="ft", height=10)],
            extra_types=[ft_type], units="ft",
        )
        wall = store.get_wall("w")
        assert wall.location_line.end == pytest.approx((3048.0, 0.0, 0.0))
        assert wall.height == pytest.approx(3048.0)
        assert store.get_wall_type("ft").total_width == pytest.approx(152.4)

    def test_invalid_json_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"walls": [{"id": "w"}]}))
        with pytest.raises(ValidationError):
            InMemoryModelStore.from_json(str(path))

    def test_save_and_reload(self, store, tmp_path):
        path = tmp_path / "out.json"
        store.save_json(str(path))
        reloaded = InMemoryModelStore.from_json(str(path))

        assert reloaded.get_wall("A").attributes == {"comments": "north"}
        assert reloaded.get_wall("B").location_line == store.get_wall("B").location_line
        assert reloaded.get_wall_type("ext160").total_width == pytest.approx(160.0)

    def test_settings_carried(self, store_factory):
        store = store_factory([], settings={"junction_tolerance_mm": 250})
        assert store.settings == {"junction_tolerance_mm": 250}


class TestTypes:

    def test_find_type_by_name_is_case_insensitive(self, store):
        assert store.find_type_by_name("exterior 160").type_id == "ext160"
        assert store.find_type_by_name("  EXTERIOR 160 ").type_id == "ext160"
        assert store.find_type_by_name("Interior 100") is None

    def test_create_single_layer_type(self, store):
        record = store.create_single_layer_type("basic", "LYR-Insu-Mine-50", INSULATION_50)

        assert record.name == "LYR-Insu-Mine-50"
        assert record.kind == "basic"
        assert record.layers == (INSULATION_50,)
        assert record.total_width == pytest.approx(50.0)
        assert store.get_wall_type(record.type_id) is record

    def test_duplicate_name_rejected(self, store):
        store.create_single_layer_type("basic", "LYR-Insu-Mine-50", INSULATION_50)
        with pytest.raises(DuplicateTypeNameError):
            store.create_single_layer_type("basic", "lyr-insu-mine-50", INSULATION_50)

    def test_missing_template(self, store):
        with pytest.raises(TypeCreationError) as exc:
            store.create_single_layer_type("stacked", "LYR-Insu-Mine-50", INSULATION_50)
        assert not isinstance(exc.value, DuplicateTypeNameError)

    def test_curtain_template(self, store):
        record = store.create_single_layer_type("curtain", "LYR-Insu-Mine-50", INSULATION_50)
        assert record.kind == "curtain"


class TestWalls:

    def test_create_wall_segment(self, store):
        line = Line((0, 30, 0), (5000, 30, 0))
        wall = store.create_wall_segment(line, "ext160", "L1", 3000.0, {"comments": "x"})

        assert store.get_wall(wall.element_id) is wall
        assert wall.attributes == {"comments": "x"}
        assert wall.element_id not in ("A", "B")

    @pytest.mark.parametrize("type_id, line, height", [
        ("missing", Line((0, 0, 0), (1000, 0, 0)), 3000.0),
        ("ext160", Line((0, 0, 0), (0, 0, 0)), 3000.0),
        ("ext160", Line((0, 0, 0), (1000, 0, 0)), 0.0),
    ])
    def test_create_wall_segment_errors(self, store, type_id, line, height):
        with pytest.raises(SegmentCreationError):
            store.create_wall_segment(line, type_id, "L1", height)

    def test_set_wall_curve(self, store):
        line = Line((0, 0, 0), (4000, 0, 0))
        store.set_wall_curve("A", line)
        assert store.get_wall("A").location_line == line

    def test_set_curve_of_unknown_wall(self, store):
        with pytest.raises(ModelStoreError):
            store.set_wall_curve("zzz", Line((0, 0, 0), (1, 0, 0)))

    def test_enumerate_excluding(self, store):
        assert [w.element_id for w in store.enumerate_walls(excluding=["A"])] == ["B"]


class TestDeletion:

    def test_delete_wall(self, store):
        store.delete_element("A")
        assert store.get_wall("A") is None

    def test_type_in_use_cannot_be_deleted(self, store):
        assert store.is_type_in_use("ext160")
        with pytest.raises(ModelStoreError):
            store.delete_element("ext160")

    def test_delete_unused_type(self, store):
        assert not store.is_type_in_use("generic200")
        store.delete_element("generic200")
        assert store.get_wall_type("generic200") is None

    def test_delete_unknown(self, store):
        with pytest.raises(ModelStoreError):
            store.delete_element("nothing")


class TestTransaction:

    def test_commit(self, store):
        with store.transaction():
            store.delete_element("A")
        assert store.get_wall("A") is None

    def test_rollback_restores_everything(self, store):
        line_before = store.get_wall("B").location_line
        with pytest.raises(TransactionFatalError) as exc:
            with store.transaction():
                store.create_single_layer_type("basic", "LYR-Insu-Mine-50", INSULATION_50)
                store.delete_element("A")
                store.set_wall_curve("B", Line((5000, 0, 0), (5000, 100, 0)))
                raise RuntimeError("lost connection")

        assert isinstance(exc.value.__cause__, RuntimeError)
        assert store.get_wall("A") is not None
        assert store.get_wall("B").location_line == line_before
        assert store.find_type_by_name("LYR-Insu-Mine-50") is None

    def test_nested_transaction_joins_outer(self, store):
        with pytest.raises(TransactionFatalError):
            with store.transaction():
                with store.transaction():
                    store.delete_element("A")
                raise RuntimeError("fail after inner block")
        assert store.get_wall("A") is not None

    def test_store_usable_after_rollback(self, store):
        with pytest.raises(TransactionFatalError):
            with store.transaction():
                raise RuntimeError("boom")
        with store.transaction():
            store.delete_element("B")
        assert store.get_wall("B") is None


class TestWallSpec:

    def test_composite_spec(self, store):
        spec = store.get_wall_spec("A")
        assert spec.wall_id == "A"
        assert spec.total_width == pytest.approx(160.0)
        assert [layer.function for layer in spec.layers] == [
            LayerFunction.STRUCTURE, LayerFunction.INSULATION, LayerFunction.FINISH1,
        ]
        assert spec.location_line == LocationLine.WALL_CENTERLINE
        assert spec.level_id == "L1"

    def test_location_line_attribute(self, store_factory, make_wall):
        store = store_factory([
            make_wall("w", (0, 0, 0), (1000, 0, 0), location_line="Core_Centerline"),
        ])
        assert store.get_wall_spec("w").location_line == LocationLine.CORE_CENTERLINE

    def test_missing_wall(self, store):
        with pytest.raises(WallNotFoundError):
            store.get_wall_spec("zzz")

    def test_single_layer_wall(self, store_factory, make_wall):
        store = store_factory([make_wall("w", (0, 0, 0), (1000, 0, 0), type_id="generic200")])
        with pytest.raises(NotCompositeError):
            store.get_wall_spec("w")

    def test_curtain_wall(self, store_factory, make_wall):
        store = store_factory([make_wall("w", (0, 0, 0), (1000, 0, 0), type_id="curtain")])
        with pytest.raises(GeometryUnavailableError):
            store.get_wall_spec("w")

    def test_wall_without_location_line(self, store_factory, make_wall):
        wall = make_wall("w", (0, 0, 0), (1000, 0, 0))
        wall["location_line"] = None
        store = store_factory([wall])
        with pytest.raises(GeometryUnavailableError) as exc:
            store.get_wall_spec("w")
        assert exc.value.wall_id == "w"
