"""
Tests for logging setup.
"""

import json
import logging

import pytest

from valheim_launcher.logging_setup import _JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLoggingSetup:

    def test_creates_rotating_log_file(self, settings, restore_root_logger):
        setup_logging(settings)
        logging.getLogger("valheim.launcher.test").info("hello")
        assert (settings.logs_dir / "launcher.log").exists()
        assert restore_root_logger.level == logging.INFO

    def test_debug_mode_forces_debug(self, settings, restore_root_logger):
        settings.debug_mode = True
        setup_logging(settings, log_to_file=False)
        assert restore_root_logger.level == logging.DEBUG

    def test_json_formatter(self):
        record = logging.LogRecord("valheim.launcher.x", logging.WARNING, __file__, 1, "msg %s", ("a",), None)
        payload = json.loads(_JsonFormatter().format(record))
        assert payload["level"] == "WARNING"
        assert payload["logger"] == "valheim.launcher.x"
        assert payload["msg"] == "msg a"
