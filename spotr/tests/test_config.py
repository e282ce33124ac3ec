"""Tests for settings loaded from the environment."""

from pathlib import Path

import pytest

from spotr.config import Settings
from spotr.errors import ConfigurationError


def test_from_env_reads_spotr_variables():
    """from_env should read the SPOTR_* variables."""
    settings = Settings.from_env(
        {
            "SPOTR_BASE_URL": "https://api.spotr.test",
            "SPOTR_API_KEY": "key",
            "SPOTR_WEB_APP_URL": "https://app.spotr.test",
            "SPOTR_TIMEOUT": "5",
            "SPOTR_LOG_LEVEL": "debug",
        }
    )

    assert settings.base_url == "https://api.spotr.test"
    assert settings.api_key == "key"
    assert settings.web_app_url == "https://app.spotr.test"
    assert settings.timeout == 5.0
    assert settings.log_level == "DEBUG"
    assert not settings.mock_mode


def test_missing_credentials_raise():
    """Missing URL or key outside mock mode should raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="SPOTR_BASE_URL and SPOTR_API_KEY must be set"):
        Settings.from_env({"SPOTR_BASE_URL": "https://api.spotr.test"})


def test_mock_mode_needs_no_credentials():
    """Mock mode should start without URL or key."""
    settings = Settings.from_env({"SPOTR_MOCK_MODE": "true", "SPOTR_MOCK_DATA_DIR": "/tmp/spotr"})

    assert settings.mock_mode
    assert settings.mock_data_dir == Path("/tmp/spotr")
    assert settings.web_app_url == "http://localhost:3000"


def test_overrides_win_over_environment():
    """Explicit overrides should win over the environment."""
    settings = Settings.from_env({}, mock_mode=True, log_level=None)

    assert settings.mock_mode
    assert settings.log_level == "INFO"


def test_bad_timeout_is_a_configuration_error():
    """A non-numeric timeout should raise ConfigurationError."""
    with pytest.raises(ConfigurationError, match="SPOTR_TIMEOUT"):
        Settings.from_env({"SPOTR_MOCK_MODE": "1", "SPOTR_TIMEOUT": "soon"})


def test_settings_are_frozen():
    """Settings should be immutable."""
    settings = Settings.from_env({"SPOTR_MOCK_MODE": "yes"})

    with pytest.raises(AttributeError):
        settings.api_key = "changed"


def test_unknown_log_level_is_a_configuration_error():
    """An unknown log level should raise ConfigurationError, not ValueError."""
    with pytest.raises(ConfigurationError, match="log level must be one of"):
        Settings.from_env({"SPOTR_MOCK_MODE": "1", "SPOTR_LOG_LEVEL": "foo"})

    with pytest.raises(ConfigurationError):
        Settings.from_env({"SPOTR_MOCK_MODE": "1"}, log_level="LOUD")
