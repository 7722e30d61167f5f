# File: tests/test_main.py

"""Tests for the command-line entry point."""

import json
import logging

import pytest

from wall_layer_decomposer.main import (
    default_wall_selection,
    load_settings,
    main,
    parse_arguments,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("wall_layer_decomposer")
    for handler in list(package_logger.handlers):
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def model_file(tmp_path, l_corner_store):
    path = tmp_path / "model.json"
    l_corner_store.save_json(str(path))
    return path


class TestArguments:

    def test_defaults(self):
        args = parse_arguments(["model.json"])
        assert args.model == "model.json"
        assert args.walls is None
        assert args.purge is False
        assert args.tolerance is None

    def test_wall_list(self):
        args = parse_arguments(["model.json", "--walls", "A", "B", "--purge"])
        assert args.walls == ["A", "B"]
        assert args.purge is True


class TestSettings:

    def test_overrides(self, l_corner_store, tmp_path):
        config = tmp_path / "settings.json"
        config.write_text(json.dumps({"type_name_prefix": "SPLIT",
                                      "junction_tolerance_mm": 100}))
        args = parse_arguments(["m.json", "--config", str(config), "--tolerance", "250"])
        settings = load_settings(l_corner_store, args)

        assert settings.type_name_prefix == "SPLIT"
        assert settings.junction_tolerance_mm == 250.0

    def test_default_selection_skips_non_composite(self, store_factory, make_wall):
        store = store_factory([
            make_wall("A", (0, 0, 0), (5000, 0, 0)),
            make_wall("S", (0, 9000, 0), (5000, 9000, 0), type_id="generic200"),
            make_wall("G", (0, 19000, 0), (5000, 19000, 0), type_id="curtain"),
        ])
        assert default_wall_selection(store) == ["A"]


class TestMain:

    def test_writes_model_and_report(self, model_file, tmp_path, capsys):
        output = tmp_path / "out.json"
        report = tmp_path / "report.json"
        code = main([str(model_file), "--output", str(output), "--report", str(report)])

        assert code == 0
        model = json.loads(output.read_text())
        assert len(model["walls"]) == 6
        assert {w["id"] for w in model["walls"]}.isdisjoint({"A", "B"})

        data = json.loads(report.read_text())
        assert data["processed"] == ["A", "B"]
        assert "Segments created: 6" in capsys.readouterr().out

    def test_missing_model_file(self, tmp_path):
        assert main([str(tmp_path / "nope.json")]) == 2

    def test_invalid_document(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"walls": [{"id": "w", "type_id": "t", "height": 1}]}))
        assert main([str(path)]) == 2

    def test_invalid_settings(self, model_file):
        assert main([str(model_file), "--tolerance", "-5"]) == 2
