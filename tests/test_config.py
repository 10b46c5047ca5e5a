"""Tests for configuration management."""

import logging

import pytest
from pydantic import ValidationError

from pollwatch.config import Settings, setup_logging
from pollwatch.watcher import OSStatProvider


class TestSettings:
    """Tests for Settings class."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Test default values without environment overrides."""
        monkeypatch.chdir(tmp_path)
        for name in ("POLLWATCH_ROOT", "POLLWATCH_POLL_INTERVAL", "POLLWATCH_LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings()

        assert settings.root is None
        assert settings.poll_interval == 1.0
        assert settings.log_level == "INFO"

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test POLLWATCH_* variables are read."""
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("POLLWATCH_ROOT", str(tmp_path))
        monkeypatch.setenv("POLLWATCH_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("POLLWATCH_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.root == tmp_path.resolve()
        assert settings.poll_interval == 0.5
        assert settings.log_level == "DEBUG"

    def test_missing_root_rejected(self, tmp_path):
        """Test a root that does not exist is a validation error."""
        with pytest.raises(ValidationError):
            Settings(root=tmp_path / "missing")

    def test_file_root_rejected(self, tmp_path):
        """Test a root that is a file is a validation error."""
        path = tmp_path / "file.txt"
        path.write_text("")
        with pytest.raises(ValidationError):
            Settings(root=path)

    def test_invalid_log_level_rejected(self):
        """Test an unknown log level is a validation error."""
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_non_positive_interval_rejected(self):
        """Test the poll interval must be positive."""
        with pytest.raises(ValidationError):
            Settings(poll_interval=0)

    def test_create_provider_uses_root(self, tmp_path):
        """Test the provider is rooted at the configured directory."""
        provider = Settings(root=tmp_path).create_provider()

        assert isinstance(provider, OSStatProvider)
        assert provider.root == tmp_path.resolve()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_root_logger(self, monkeypatch):
        """Test the level name is mapped onto basicConfig."""
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

        setup_logging("DEBUG")

        assert len(calls) == 1
        assert calls[0]["level"] == logging.DEBUG
        assert "%(name)s" in calls[0]["format"]
