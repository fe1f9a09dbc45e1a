"""dasdcalc runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from dasdcalc.models.config import ConfigValidationError, SettingsFile


@dataclass
class DasdCalcConfig:
    """Runtime configuration for the dasdcalc front end.

    The calculation core never reads this; callers pass the values in.

    Attributes:
        warning_threshold: Percent used that raises a warning (default: 75)
        critical_threshold: Percent used that raises a critical alert (default: 90)
        default_device: Device type used when none is given (default: 3390)
        precision: Decimals shown when rendering results (default: 2)
    """

    # Utilization alerts
    warning_threshold: float = 75.0
    critical_threshold: float = 90.0

    # Conversion defaults
    default_device: str = "3390"

    # Rendering
    precision: int = 2

    @classmethod
    def from_env(cls) -> "DasdCalcConfig":
        """Create config from environment variables.

        Environment variables:
            DASDCALC_WARNING_THRESHOLD: Warning threshold in percent
            DASDCALC_CRITICAL_THRESHOLD: Critical threshold in percent
            DASDCALC_DEFAULT_DEVICE: Default device type key
            DASDCALC_PRECISION: Decimals shown in results

        Returns:
            DasdCalcConfig instance with values from environment or defaults

        Raises:
            ConfigValidationError: If a variable fails the settings file rules
        """
        raw = {
            "thresholds": {
                "warning": os.getenv("DASDCALC_WARNING_THRESHOLD", cls.warning_threshold),
                "critical": os.getenv("DASDCALC_CRITICAL_THRESHOLD", cls.critical_threshold),
            },
            "default_device": os.getenv("DASDCALC_DEFAULT_DEVICE", cls.default_device),
            "precision": os.getenv("DASDCALC_PRECISION", cls.precision),
        }

        try:
            settings = SettingsFile.model_validate(raw)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid DASDCALC_* environment settings:\n{e}") from e

        return cls(
            warning_threshold=settings.thresholds.warning,
            critical_threshold=settings.thresholds.critical,
            default_device=settings.default_device,
            precision=settings.precision,
        )


# Global config instance (can be overridden)
_config: Optional[DasdCalcConfig] = None


def get_config() -> DasdCalcConfig:
    """Get the global dasdcalc configuration.

    Returns:
        DasdCalcConfig instance (creates from environment if not set)
    """
    global _config
    if _config is None:
        _config = DasdCalcConfig.from_env()
    return _config


def set_config(config: Optional[DasdCalcConfig]):
    """Set the global dasdcalc configuration.

    Args:
        config: DasdCalcConfig instance to use globally, or None to re-read the environment
    """
    global _config
    _config = config
