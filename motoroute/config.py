"""Configuration management."""

import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


def _optional_path(name: str) -> Path | None:
    value = os.getenv(name)
    return Path(value) if value else None


class Settings(BaseModel):
    """Application settings."""

    # Directions service (OpenRouteService)
    openrouteservice_api_key: str | None = Field(
        default_factory=lambda: os.getenv("OPENROUTESERVICE_API_KEY")
    )
    ors_base_url: str = Field(
        default_factory=lambda: os.getenv("ORS_BASE_URL", "https://api.openrouteservice.org")
    )
    ors_profile: str = Field(
        default_factory=lambda: os.getenv("ORS_PROFILE", "driving-car")
    )
    ors_timeout: float = Field(
        default_factory=lambda: float(os.getenv("ORS_TIMEOUT", "60")),
        gt=0,
    )

    # Default ride settings
    default_duration_hours: float = 3.0
    default_start: tuple[float, float] = (42.3889, -71.1294)
    default_bike: str = "R 1250 GS"
    default_template: str = "Custom Route"

    # Optional catalog override (JSON file with bikes and templates)
    catalog_path: Path | None = Field(
        default_factory=lambda: _optional_path("MOTOROUTE_CATALOG")
    )

    # Output settings
    output_dir: Path = Field(
        default_factory=lambda: _optional_path("MOTOROUTE_OUTPUT_DIR")
        or Path(__file__).parent.parent / "output"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"),
        validate_default=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def validate_required(self) -> list[str]:
        """Check for missing required configuration."""
        missing = []

        if not self.openrouteservice_api_key:
            missing.append("OPENROUTESERVICE_API_KEY")

        return missing


# Global settings instance
settings = Settings()
