# Assumptions:
# - Using pytest for testing framework
# - Settings are read from TOOLKIT_* environment variables

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from toolkit.config import (
    HttpSettings,
    LoggingSettings,
    configure_logging,
    get_http_settings,
    get_logging_settings,
)


class TestHttpSettings:
    """Test cases for HTTP settings"""

    def test_defaults(self):
        settings = HttpSettings()

        assert settings.timeout == 10
        assert settings.user_agent is None
        assert settings.propagate_correlation is True

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TOOLKIT_HTTP_TIMEOUT", "30")
        monkeypatch.setenv("TOOLKIT_HTTP_USER_AGENT", "agent/2.0")
        monkeypatch.setenv("TOOLKIT_HTTP_PROPAGATE_CORRELATION", "0")

        settings = HttpSettings()

        assert settings.timeout == 30
        assert settings.user_agent == "agent/2.0"
        assert settings.propagate_correlation is False

    def test_non_positive_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("TOOLKIT_HTTP_TIMEOUT", "0")

        with pytest.raises(ValidationError):
            HttpSettings()

    def test_get_http_settings_is_cached(self, monkeypatch):
        first = get_http_settings()
        monkeypatch.setenv("TOOLKIT_HTTP_TIMEOUT", "99")

        assert get_http_settings() is first

        get_http_settings.cache_clear()
        assert get_http_settings().timeout == 99


class TestLoggingSettings:
    """Test cases for logging settings"""

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("TOOLKIT_LOG_SERVICE_NAME", "billing")
        monkeypatch.setenv("TOOLKIT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("TOOLKIT_LOG_FORMAT", "console")

        settings = get_logging_settings()

        assert settings == LoggingSettings(service_name="billing", level="DEBUG", format="console")

    def test_configure_logging(self):
        settings = LoggingSettings(service_name="billing", level="WARNING", format="console")

        with patch("toolkit.config.settings.setup_logging") as mock_setup:
            configure_logging(settings)

        mock_setup.assert_called_once_with("billing", level="WARNING", format_type="console")
