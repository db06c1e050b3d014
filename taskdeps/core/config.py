"""Configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TASKDEPS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path (rotated daily)",
    )

    # Graph layout
    graph_node_width: int = Field(
        default=180,
        gt=0,
        description="Node width in pixels",
    )
    graph_node_height: int = Field(
        default=80,
        gt=0,
        description="Node height in pixels",
    )
    graph_horizontal_gap: int = Field(
        default=40,
        ge=0,
        description="Gap between nodes of the same level",
    )
    graph_vertical_gap: int = Field(
        default=120,
        ge=0,
        description="Gap between levels",
    )
    graph_top_offset: int = Field(
        default=50,
        ge=0,
        description="Offset of the first level from the top",
    )

    # Dependencies view
    default_view: Literal["graph", "chains", "critical"] = Field(
        default="graph",
        description="View shown when the dependencies view opens",
    )
    stats_against_full_collection: bool = Field(
        default=False,
        description=(
            "Resolve prerequisites in the full collection when counting "
            "blocked tasks, instead of the filtered subset"
        ),
    )

    # API
    api_host: str = Field(
        default="127.0.0.1",
        description="Host for the HTTP API",
    )
    api_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> settings.graph_node_width
        180
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
