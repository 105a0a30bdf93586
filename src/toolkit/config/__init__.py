"""Configuration management utilities."""

from .settings import (
    HttpSettings,
    LoggingSettings,
    configure_logging,
    get_http_settings,
    get_logging_settings,
)

__all__ = [
    "HttpSettings",
    "LoggingSettings",
    "get_http_settings",
    "get_logging_settings",
    "configure_logging",
]
