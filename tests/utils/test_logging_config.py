# File: tests/utils/test_logging_config.py

"""Tests for logging configuration."""

import logging
from pathlib import Path

import pytest

from wall_layer_decomposer.utils.logging_config import DecomposerLogger, get_logger


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    package_logger = logging.getLogger("wall_layer_decomposer")
    for handler in list(package_logger.handlers):
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


class TestConfigure:

    def test_console_only(self):
        assert DecomposerLogger.configure(console=False) is None
        assert logging.getLogger("wall_layer_decomposer").level == logging.INFO

    def test_log_file_in_given_directory(self, tmp_path):
        log_dir = tmp_path / "logs"
        log_file = DecomposerLogger.configure(debug_mode=True, log_dir=str(log_dir),
                                              console=False)

        assert log_file is not None
        assert log_file.startswith(str(log_dir))
        get_logger("wall_layer_decomposer.tests").debug("written to file")
        assert "written to file" in Path(log_file).read_text(encoding="utf-8")

    def test_reconfigure_replaces_handlers(self, tmp_path):
        DecomposerLogger.configure(console=True)
        DecomposerLogger.configure(console=True)
        assert len(logging.getLogger("wall_layer_decomposer").handlers) == 1


class TestTraceLevel:

    def test_trace_level_named(self):
        assert logging.getLevelName(DecomposerLogger.TRACE_LEVEL) == "TRACE"

    def test_trace_records_emitted_below_debug(self, caplog):
        name = "wall_layer_decomposer.trace_test"
        with caplog.at_level(DecomposerLogger.TRACE_LEVEL, logger=name):
            get_logger(name).log(DecomposerLogger.TRACE_LEVEL, "point %d", 1)

        assert caplog.records[-1].levelname == "TRACE"
        assert caplog.records[-1].getMessage() == "point 1"

    def test_get_logger_level(self):
        logger = get_logger("wall_layer_decomposer.level_test", logging.WARNING)
        assert logger.level == logging.WARNING
        logger.setLevel(logging.NOTSET)
