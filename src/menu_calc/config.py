"""
Configuration management for the Menu-Makers Calculator.

Handles loading configuration from environment variables and YAML files,
and provides the defaults used by every engine instance.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MENU_CALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application settings
    app_name: str = "Menu-Makers Calculator"
    log_level: str = "WARNING"

    # Input and history limits
    max_input_length: int = Field(default=15, gt=0)
    history_capacity: int = Field(default=10, gt=0)

    # Rounding (arithmetic and financial results are rounded separately)
    arithmetic_precision: int = Field(default=8, ge=0, le=15)
    financial_precision: int = Field(default=2, ge=0, le=15)

    # Financial rates
    tax_rate: float = Field(default=0.13, ge=0.0, le=1.0)
    discount_rate: float = Field(default=0.15, ge=0.0, le=1.0)
    tip_rate: float = Field(default=0.18, ge=0.0, le=1.0)


# Global settings instance
settings = Settings()


def load_yaml_config(path: Path) -> dict:
    """Load configuration from a YAML file."""
    import yaml

    if not path.exists():
        return {}

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_settings(path: Path | None = None, **overrides) -> Settings:
    """Build settings from an optional YAML file plus explicit overrides."""
    data = load_yaml_config(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return Settings(**data)
