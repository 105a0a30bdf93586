# Assumptions:
# - Configuration management using environment variables
# - Pydantic Settings for validation
# - Defaults match the behaviour of the bare helper functions

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..logging.setup import setup_logging

# Default request timeout in seconds
DEFAULT_TIMEOUT = 10


class HttpSettings(BaseSettings):
    """Outbound HTTP settings"""

    model_config = SettingsConfigDict(env_prefix="TOOLKIT_HTTP_", env_file=".env", extra="ignore")

    # Seconds
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    user_agent: str | None = None
    propagate_correlation: bool = True


class LoggingSettings(BaseSettings):
    """Logging settings"""

    model_config = SettingsConfigDict(env_prefix="TOOLKIT_LOG_", env_file=".env", extra="ignore")

    service_name: str = "global-toolkit"
    level: str = "INFO"
    format: str = "json"


@lru_cache()
def get_http_settings() -> HttpSettings:
    """Get HTTP settings singleton"""
    return HttpSettings()


@lru_cache()
def get_logging_settings() -> LoggingSettings:
    """Get logging settings singleton"""
    return LoggingSettings()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Apply logging settings to structlog and stdlib logging"""
    settings = settings or get_logging_settings()
    setup_logging(settings.service_name, level=settings.level, format_type=settings.format)
