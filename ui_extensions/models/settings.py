"""Configuration models.

Models for config/ui_extensions.yaml.
"""

import math
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class DisplayConfig(BaseModel):
    """Display metrics used when no density provider is injected."""

    density: float = Field(default=1.0, gt=0, description="Pixels per density-independent unit")

    @field_validator("density")
    @classmethod
    def density_must_be_finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("density must be finite")
        return value


class LoggingConfig(BaseModel):
    """Logging output settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Minimum log level"
    )
    format: Literal["json", "console"] = Field(default="json", description="Log renderer")
    include_timestamp: bool = Field(default=True, description="Add ISO 8601 timestamps")

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value):
        if isinstance(value, str):
            return value.upper()
        return value


class ExtensionsConfig(BaseModel):
    """Root of the configuration file."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    class Config:
        json_schema_extra = {
            "example": {
                "display": {"density": 2.75},
                "logging": {"level": "INFO", "format": "console", "include_timestamp": True},
            }
        }
