"""Settings file models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from dasdcalc.models.geometry import DEVICE_TYPES


class ConfigValidationError(Exception):
    """Raised when a settings file cannot be loaded or fails validation."""
    pass


class Thresholds(BaseModel):
    """Utilization alert thresholds in percent."""

    model_config = ConfigDict(extra='forbid')

    warning: float = Field(75.0, ge=0, le=100, description="Percent used that triggers a warning")
    critical: float = Field(90.0, ge=0, le=100, description="Percent used that triggers a critical alert")

    @model_validator(mode='after')
    def validate_order(self) -> 'Thresholds':
        """Warning must trip before critical."""
        if self.warning >= self.critical:
            raise ValueError(
                f"Warning threshold ({self.warning}) must be lower than critical ({self.critical})"
            )
        return self


class SettingsFile(BaseModel):
    """Top-level layout of dasdcalc.yml."""

    model_config = ConfigDict(extra='forbid')

    thresholds: Optional[Thresholds] = None
    default_device: Optional[str] = None
    precision: Optional[int] = Field(None, ge=0, le=10, description="Decimals shown by the CLI")

    @field_validator('default_device', mode='before')
    @classmethod
    def validate_device(cls, v):
        """Device must be in the catalog."""
        if v is None:
            return v
        v = str(v)
        if v not in DEVICE_TYPES:
            raise ValueError(
                f"Unknown device type '{v}'. Known types: {', '.join(DEVICE_TYPES)}"
            )
        return v
