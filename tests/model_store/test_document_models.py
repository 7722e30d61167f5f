# File: tests/model_store/test_document_models.py

"""Tests for model document validation and unit conversion."""

import pytest
from pydantic import ValidationError

from wall_layer_decomposer.model_store.document_models import (
    ModelDocument,
    WallTypeModel,
)
from wall_layer_decomposer.wall_layers.layer_types import LayerFunction


@pytest.fixture
def document(ext160_type, make_wall):
    """Build a valid mm document, with top-level keys overridable."""

    def _build(**overrides):
        data = {
            "units": "mm",
            "wall_types": [ext160_type],
            "walls": [make_wall("w1", (0, 0, 0), (5000, 0, 0))],
        }
        data.update(overrides)
        return data

    return _build


class TestUnits:

    @pytest.mark.parametrize("alias, expected", [
        ("mm", "millimeters"),
        ("M", "meters"),
        ("ft", "feet"),
        ("inches", "inches"),
    ])
    def test_aliases_are_normalized(self, document, alias, expected):
        assert ModelDocument.model_validate(document(units=alias)).units == expected

    def test_unknown_units_rejected(self, document):
        with pytest.raises(ValidationError):
            ModelDocument.model_validate(document(units="cubits"))

    def test_records_are_in_millimetres(self):
        metres = ModelDocument.model_validate({
            "units": "m",
            "wall_types": [{
                "id": "t1", "name": "Thin", "kind": "basic",
                "layers": [
                    {"function": "structure", "thickness": 0.1, "material": "Concrete"},
                    {"function": "Finish 1", "thickness": 0.01},
                ],
            }],
            "walls": [{
                "id": "w1", "type_id": "t1", "height": 3.0,
                "location_line": {"start": {"x": 0, "y": 0}, "end": {"x": 5, "y": 0}},
            }],
        })
        wall_types, walls = metres.to_records()

        assert wall_types[0].layers[0].thickness == pytest.approx(100.0)
        assert wall_types[0].layers[1].function == LayerFunction.FINISH1
        assert wall_types[0].total_width == pytest.approx(110.0)
        assert walls[0].location_line.end == pytest.approx((5000.0, 0.0, 0.0))
        assert walls[0].height == pytest.approx(3000.0)


class TestReferences:

    def test_unknown_type_reference(self, document, make_wall):
        walls = [make_wall("w1", (0, 0, 0), (1, 0, 0), type_id="nope")]
        with pytest.raises(ValidationError, match="unknown type"):
            ModelDocument.model_validate(document(walls=walls))

    def test_duplicate_wall_ids(self, document, make_wall):
        walls = [make_wall("w1", (0, 0, 0), (1, 0, 0)), make_wall("w1", (0, 0, 0), (0, 1, 0))]
        with pytest.raises(ValidationError, match="Duplicate wall id"):
            ModelDocument.model_validate(document(walls=walls))

    def test_type_names_are_case_insensitive(self, document, ext160_type):
        twin = dict(ext160_type, id="other", name="EXTERIOR 160")
        with pytest.raises(ValidationError, match="case-insensitive"):
            ModelDocument.model_validate(document(wall_types=[ext160_type, twin]))

    def test_wall_and_type_ids_must_not_overlap(self, document, make_wall):
        walls = [make_wall("ext160", (0, 0, 0), (1, 0, 0))]
        with pytest.raises(ValidationError, match="overlap"):
            ModelDocument.model_validate(document(walls=walls))

    def test_missing_location_line_allowed(self, document, make_wall):
        wall = make_wall("w1", (0, 0, 0), (1, 0, 0))
        wall["location_line"] = None
        _, walls = ModelDocument.model_validate(document(walls=[wall])).to_records()
        assert walls[0].location_line is None


class TestWallTypeModel:

    def test_core_indices_must_be_paired(self):
        with pytest.raises(ValidationError, match="set together"):
            WallTypeModel(id="t", name="T", layers=[
                {"function": "structure", "thickness": 10}
            ], first_core_index=0)

    def test_core_indices_in_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            WallTypeModel(id="t", name="T", layers=[
                {"function": "structure", "thickness": 10}
            ], first_core_index=0, last_core_index=1)

    def test_layer_thickness_must_be_positive(self):
        with pytest.raises(ValidationError):
            WallTypeModel(id="t", name="T", layers=[
                {"function": "structure", "thickness": 0}
            ])

    def test_unsupported_kind(self):
        with pytest.raises(ValidationError):
            WallTypeModel(id="t", name="T", kind="profile")
