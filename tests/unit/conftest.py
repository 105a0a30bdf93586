import logging

import pytest
import structlog

from toolkit.config.settings import get_http_settings, get_logging_settings
from toolkit.logging.setup import clear_correlation_context


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Start every test from default settings and an empty logging context"""
    for name in ("TOOLKIT_HTTP_TIMEOUT", "TOOLKIT_HTTP_USER_AGENT", "TOOLKIT_HTTP_PROPAGATE_CORRELATION"):
        monkeypatch.delenv(name, raising=False)
    get_http_settings.cache_clear()
    get_logging_settings.cache_clear()
    clear_correlation_context()
    root_handlers = list(logging.getLogger().handlers)

    yield

    get_http_settings.cache_clear()
    get_logging_settings.cache_clear()
    clear_correlation_context()
    structlog.reset_defaults()
    logging.getLogger().handlers = root_handlers
