"""
Tests for logging configuration.
"""

import logging
from pathlib import Path

import pytest

from archetype.core.observability.logging_config import level_from_flags, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestLevelFromFlags:
    def test_flag_precedence(self):
        assert level_from_flags(debug=True, verbose=True, quiet=True) == "DEBUG"
        assert level_from_flags(verbose=True, quiet=True) == "INFO"
        assert level_from_flags(quiet=True) == "ERROR"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("ARCHETYPE_LOG_LEVEL", "INFO")
        assert level_from_flags() == "INFO"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("ARCHETYPE_LOG_LEVEL", raising=False)
        assert level_from_flags() == "WARNING"


class TestSetupLogging:
    def test_console_level(self):
        setup_logging("INFO")
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 1

    def test_unknown_level_falls_back(self):
        setup_logging("LOUD")
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler_lowers_root_level(self, tmp_path: Path):
        log_file = tmp_path / "archetype.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG

        logging.getLogger("archetype.test").debug("traced")
        for handler in root.handlers:
            handler.flush()
        assert "traced" in log_file.read_text()

    def test_noisy_loggers_quieted(self):
        setup_logging("INFO")
        assert logging.getLogger("jinja2").level == logging.WARNING
