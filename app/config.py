"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Optional[str] = Field(default=None, description="Root log level")

    # API Configuration
    api_title: str = Field(default="Simple Tasks")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="")
    host: str = Field(default="0.0.0.0")
    port: int = Field(description="HTTP port to listen on (required)")

    # Graceful shutdown
    shutdown_timeout: int = Field(default=3, ge=0, description="Seconds to wait for in-flight requests")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Reject ports outside the TCP range."""
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("api_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """Strip the trailing slash so routes can be appended directly."""
        return v.rstrip("/")

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.debug else "INFO"

    def describe(self) -> str:
        """One-line summary suitable for the startup log."""
        return (
            f"environment={self.environment} host={self.host} port={self.port} "
            f"prefix={self.api_prefix or '/'} debug={self.debug}"
        )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Raises pydantic.ValidationError when PORT is missing or invalid.
    """
    return Settings()
