"""Pydantic models for athena configuration."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from athena import __version__


class ServerConfig(BaseModel):
    """MCP server identity."""

    name: str = "athena"
    version: str = __version__


class CacheConfig(BaseModel):
    """Response cache for cacheable tools."""

    enabled: bool = True
    ttl_seconds: float = Field(default=300.0, gt=0)
    max_entries: int = Field(default=1000, ge=1)


class RetrySettings(BaseModel):
    """Backoff for tool handler calls."""

    max_attempts: int = Field(default=3, ge=1)
    base_delay: float = Field(default=1.0, ge=0)


class OpenAIConfig(BaseModel):
    """OpenAI client settings used by the chat and image tools."""

    api_key: str | None = None
    api_key_env: str | None = "OPENAI_API_KEY"
    base_url: str | None = None
    chat_model: str = "gpt-4"
    image_model: str = "dall-e-3"


class WebRequestConfig(BaseModel):
    """HTTP client settings for the web_request tool."""

    timeout: float = Field(default=10.0, gt=0)
    user_agent: str = f"Athena-MCP-Server/{__version__}"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: str = ""

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class AthenaConfig(BaseModel):
    """Top-level configuration for athena."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    web_request: WebRequestConfig = Field(default_factory=WebRequestConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
