"""Configuration loading and validation."""

from athena.config.loader import load_config
from athena.config.schema import (
    AthenaConfig,
    CacheConfig,
    LoggingConfig,
    OpenAIConfig,
    RetrySettings,
    ServerConfig,
    WebRequestConfig,
)

__all__ = [
    "AthenaConfig",
    "CacheConfig",
    "LoggingConfig",
    "OpenAIConfig",
    "RetrySettings",
    "ServerConfig",
    "WebRequestConfig",
    "load_config",
]
