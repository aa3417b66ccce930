"""
Configuration for the MCP dispatcher.

Values are read from ``MCP_``-prefixed environment variables or a ``.env``
file, e.g. ``MCP_SERVER_NAME`` and ``MCP_SERVER_VERSION``.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Dispatcher settings."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server identity advertised by initialize/ping
    server_name: str = Field(default="GitHub Copilot MCP Server")
    server_version: str = Field(default="1.0.0")
    protocol_version: str = Field(default="2024-11-05", description="MCP revision reported on initialize")

    # Logging
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Render logs as JSON lines")

    # Tools
    validate_arguments: bool = Field(
        default=False,
        description="Validate tools/call arguments against the advertised inputSchema",
    )
    enabled_tools: List[str] = Field(
        default_factory=list,
        description="Tool names to register; empty registers every tool offered",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
