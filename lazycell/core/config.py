"""
lazycell Configuration

Settings for the ambient concerns of the library (logging and tracing),
read from ``LAZYCELL_``-prefixed environment variables or a ``.env`` file.
Cell behaviour itself is configured per cell, never through the environment.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with validation and safe defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LAZYCELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    ENVIRONMENT: str = Field(
        default="development", description="Runtime environment"
    )
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_JSON: bool = Field(
        default=False, description="Render log events as JSON instead of console lines"
    )
    TRACE_LOADS: bool = Field(
        default=True, description="Wrap loader invocations in OpenTelemetry spans"
    )

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment value."""
        allowed = ["development", "test", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"ENVIRONMENT must be one of: {allowed}")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {allowed}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def log_level(self) -> str:
        """Alias for LOG_LEVEL."""
        return self.LOG_LEVEL

    @property
    def trace_loads(self) -> bool:
        """Alias for TRACE_LOADS."""
        return self.TRACE_LOADS


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
