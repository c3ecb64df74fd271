"""
Configuration for the gerryaway district analysis.

Uses pydantic-settings for environment variable management.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class AnalysisConfig(BaseSettings):
    """Thresholds and naming used when classifying districts."""

    model_config = SettingsConfigDict(
        env_prefix="GERRYAWAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Classification thresholds
    hull_area_ratio_threshold: float = Field(
        default=1.4,
        description="Fail a district when hull area / district area exceeds this",
        gt=1.0,
    )
    aspect_ratio_threshold: float | None = Field(
        default=None,
        description=(
            "Fail a district when its minimum bounding rectangle aspect "
            "ratio exceeds this (disabled when unset)"
        ),
        ge=1.0,
    )

    # Feature naming
    id_property: str = Field(
        default="OFFICE_ID",
        description="Feature property holding the district identifier",
        min_length=1,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level used by the command line entry point",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize to upper case and reject unknown level names."""
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level: {v}")
        return level


@lru_cache
def get_config() -> AnalysisConfig:
    """Get cached configuration instance."""
    return AnalysisConfig()
