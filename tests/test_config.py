"""Tests for transform and logging configuration."""

import argparse

import pytest
from pydantic import ValidationError

from routemacro.api.cli.main import setup_logging
from routemacro.core.config.logging_config import FileLoggingConfig, LoggingConfig
from routemacro.core.config.transform_config import TransformConfig


class TestTransformConfig:
    """Test TransformConfig defaults, validation and environment overrides."""

    def test_defaults(self):
        """Test default transform configuration."""
        config = TransformConfig()
        assert config.macro_name == "definePage"
        assert config.export_prefix == "export default "
        assert config.isolate_marker is None
        assert config.effective_isolate_marker == "definePage"
        assert config.sourcemap is True
        assert config.sourcemap_hires is True

    def test_isolate_marker_falls_back_to_macro_name(self):
        """Test that the isolate marker follows a custom macro name."""
        config = TransformConfig(macro_name="defineRoute")
        assert config.effective_isolate_marker == "defineRoute"

        config = TransformConfig(macro_name="defineRoute", isolate_marker="?route")
        assert config.effective_isolate_marker == "?route"

    @pytest.mark.parametrize("name", ["define-page", "1page", "", "define page"])
    def test_invalid_macro_name(self, name):
        """Test that non-identifier macro names are rejected."""
        with pytest.raises(ValidationError, match="Invalid macro name"):
            TransformConfig(macro_name=name)

    def test_empty_isolate_marker(self):
        """Test that a blank isolate marker is rejected."""
        with pytest.raises(ValidationError, match="Isolate marker cannot be empty"):
            TransformConfig(isolate_marker="  ")

    def test_environment_overrides(self, monkeypatch):
        """Test ROUTEMACRO_* environment variables."""
        monkeypatch.setenv("ROUTEMACRO_MACRO_NAME", "$route")
        monkeypatch.setenv("ROUTEMACRO_SOURCEMAP", "false")
        monkeypatch.setenv("ROUTEMACRO_ISOLATE_MARKER", "?page-info")

        config = TransformConfig()
        assert config.macro_name == "$route"
        assert config.sourcemap is False
        assert config.effective_isolate_marker == "?page-info"

    def test_invalid_environment_value(self, monkeypatch):
        """Test that invalid environment values fail validation."""
        monkeypatch.setenv("ROUTEMACRO_MACRO_NAME", "not valid")
        with pytest.raises(ValidationError):
            TransformConfig()


class TestFileLoggingConfig:
    """Test FileLoggingConfig validation."""

    def test_defaults(self):
        """Test default file logging configuration."""
        config = FileLoggingConfig()
        assert config.enabled is False
        assert config.path == "routemacro.log"
        assert config.level == "INFO"
        assert config.rotation == "10 MB"
        assert config.retention == "1 week"
        assert "time" in config.format

    def test_level_is_normalised(self):
        """Test that log levels are upper-cased."""
        assert FileLoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        """Test that invalid log levels raise ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            FileLoggingConfig(level="INVALID")

    def test_empty_path(self):
        """Test that empty paths raise ValueError."""
        with pytest.raises(ValueError, match="Log file path cannot be empty"):
            FileLoggingConfig(path="")


class TestLoggingConfig:
    """Test LoggingConfig and its CLI overrides."""

    def test_defaults(self):
        config = LoggingConfig()
        assert config.console_level == "WARNING"
        assert config.file.enabled is False

    def test_invalid_console_level(self):
        with pytest.raises(ValueError, match="Invalid console log level"):
            LoggingConfig(console_level="LOUD")

    def test_no_cli_overrides(self):
        """Test that absent CLI options produce no overrides."""
        args = argparse.Namespace(log_file=None, log_level=None, verbose=False)
        assert LoggingConfig.extract_cli_overrides(args) is None
        assert LoggingConfig.from_cli_args(args) == LoggingConfig()

    def test_cli_overrides(self):
        """Test that CLI options enable file logging and debug output."""
        args = argparse.Namespace(log_file="/tmp/rm.log", log_level="DEBUG", verbose=True)

        overrides = LoggingConfig.extract_cli_overrides(args)
        assert overrides == {
            "file": {"enabled": True, "path": "/tmp/rm.log", "level": "DEBUG"},
            "console_level": "DEBUG",
        }

        config = LoggingConfig.from_cli_args(args)
        assert config.file.enabled is True
        assert config.file.path == "/tmp/rm.log"
        assert config.console_level == "DEBUG"


class TestSetupLogging:
    """Test loguru sink configuration."""

    def test_file_sink_receives_messages(self, tmp_path):
        """Test that an enabled file sink is written to."""
        from loguru import logger

        log_path = tmp_path / "routemacro.log"
        config = LoggingConfig(
            file=FileLoggingConfig(enabled=True, path=str(log_path), level="DEBUG")
        )

        setup_logging(verbose=False, config=config)
        try:
            logger.debug("file sink message")
        finally:
            logger.remove()

        assert "file sink message" in log_path.read_text()
