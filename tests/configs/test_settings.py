# tests/configs/test_settings.py
"""Tests for inkwell/configs/settings.py."""

from logging import getLogger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest
from pythonjsonlogger.json import JsonFormatter

from inkwell.configs import Settings, file_logger, settings


class TestSettings:
    """Tests for Settings defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default settings."""
        monkeypatch.delenv("STORE_BACKEND", raising=False)
        defaults = Settings(_env_file=None)
        assert defaults.PORT == 5000
        assert defaults.STORE_BACKEND == "auto"
        assert defaults.API_TIMEOUT == 15.0
        assert defaults.AUTOSAVE_DELAY_MS == 5000
        assert defaults.SAVE_POLICY == "optimistic"

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("SAVE_POLICY", "strict")
        configured = Settings(_env_file=None)
        assert configured.PORT == 8080
        assert configured.SAVE_POLICY == "strict"

    def test_invalid_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an unknown store backend is rejected."""
        monkeypatch.setenv("STORE_BACKEND", "redis")
        with pytest.raises(ValueError, match="STORE_BACKEND"):
            Settings(_env_file=None)


class TestFileLogger:
    """Tests for file_logger."""

    def test_disabled_by_default(self) -> None:
        """Test that file logging adds no handler when disabled."""
        logger = file_logger(getLogger("inkwell.tests.disabled"))
        assert not any(isinstance(h, RotatingFileHandler) for h in logger.handlers)

    def test_adds_json_handler_once(self, tmp_path: Path) -> None:
        """Test that the JSON file handler is added only once."""
        log_file = tmp_path / "logs" / "inkwell.log"
        logger = getLogger("inkwell.tests.enabled")
        with (
            patch.object(settings, "LOG_TO_FILE", True),
            patch.object(settings, "LOG_FILE", str(log_file)),
        ):
            file_logger(logger)
            file_logger(logger)

        handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
        try:
            assert len(handlers) == 1
            assert isinstance(handlers[0].formatter, JsonFormatter)
            assert log_file.parent.is_dir()
        finally:
            for handler in handlers:
                logger.removeHandler(handler)
                handler.close()
