"""
Application configuration using Pydantic Settings.

Loads configuration from GRAPHDELTA_* environment variables and .env file.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPHDELTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="graphdelta", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/production)")
    log_level: str = Field(default="WARNING", description="Logging level")

    # Diff
    diff_ruleset: str | None = Field(
        default=None,
        description="Ruleset applied when --ruleset is not given (packaged defaults when unset)",
    )
    document_pattern: str = Field(
        default="**/*.json*",
        description="Glob used to collect documents in directory mode",
    )
    output_format: str | None = Field(
        default=None,
        description="Default output format (json/text); chosen per destination when unset",
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator("output_format")
    @classmethod
    def _validate_output_format(cls, value: str | None) -> str | None:
        if value is not None and value not in ("json", "text"):
            raise ValueError("output_format must be 'json' or 'text'")
        return value

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env.lower() == "production"


# Global settings instance
settings = Settings()
