"""httpstreaming configuration.

Settings loaded from environment variables with HTTPSTREAMING_ prefix.

Example:
    >>> from httpstreaming.core.config import get_settings
    >>> settings = get_settings(bandwidth_limit=1000)
    >>> settings.bandwidth_limit
    1000
    >>> settings.debug
    False
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Loads from environment variables with HTTPSTREAMING_ prefix.

    Example:
        >>> from httpstreaming.core.config import Settings
        >>> s = Settings(size_hint=2048)
        >>> s.size_hint
        2048
        >>> s.chunk_size
        65536
    """

    model_config = SettingsConfigDict(
        env_prefix="HTTPSTREAMING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Transfer
    bandwidth_limit: int = Field(default=0, ge=0, description="Bytes per second, 0 = unlimited")
    size_hint: int = Field(default=0, ge=0, description="Expected transfer size, 0 = unknown")
    chunk_size: int = Field(default=65536, ge=512, description="Bytes per body/response chunk")
    show_progress: bool = Field(default=False, description="Render progress on the console")

    # HTTP
    timeout: float = Field(default=30.0, ge=1.0)
    user_agent: str = Field(default="httpstreaming/0.1")

    # Logging
    debug: bool = Field(default=False, description="Log request/response streaming notices")
    log_level: str = Field(default="INFO", description="Logging level")


def get_settings(**overrides: Any) -> Settings:
    """Get settings with optional overrides.

    Example:
        >>> from httpstreaming.core.config import get_settings
        >>> get_settings(show_progress=True).show_progress
        True
    """
    return Settings(**overrides)
