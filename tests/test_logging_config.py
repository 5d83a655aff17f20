"""Tests for loguru sink configuration."""

from gemedit import logging_config
from gemedit.logging_config import logger, setup_logging


class TestSetupLogging:

    def test_file_sink_is_opt_in(self, temp_dir, monkeypatch):
        monkeypatch.setattr(logging_config, "LOG_DIR", temp_dir / "logs")
        monkeypatch.delenv("GEMEDIT_FILE_LOGGING", raising=False)

        setup_logging(suppress_console=True, force=True)
        logger.info("pinned rails")

        assert not (temp_dir / "logs").exists()

    def test_file_sink_from_env(self, temp_dir, monkeypatch):
        monkeypatch.setattr(logging_config, "LOG_DIR", temp_dir / "logs")
        monkeypatch.setenv("GEMEDIT_FILE_LOGGING", "true")

        setup_logging(suppress_console=True, force=True)
        logger.info("pinned rails")
        # Removing the sinks closes the log file
        setup_logging(suppress_console=True, enable_file_logging=False, force=True)

        assert "pinned rails" in (temp_dir / "logs" / "gemedit.log").read_text()

    def test_configured_once_without_force(self, temp_dir, monkeypatch):
        monkeypatch.setattr(logging_config, "LOG_DIR", temp_dir / "logs")

        setup_logging(suppress_console=True, enable_file_logging=True)

        assert not (temp_dir / "logs").exists()
