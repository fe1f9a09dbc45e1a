"""YAML settings loader."""
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from dasdcalc.core.config import DasdCalcConfig
from dasdcalc.core.logger import get_logger
from dasdcalc.models.config import ConfigValidationError, SettingsFile

logger = get_logger(__name__)

# Default settings search paths (ordered by proximity to current run)
CONFIG_PATHS = [
    "./dasdcalc.yml",
    str(Path.home() / ".config" / "dasdcalc" / "dasdcalc.yml"),
    "/etc/dasdcalc/dasdcalc.yml",
]


def find_settings(config_path: Optional[str] = None) -> Optional[str]:
    """Locate the active settings file, if any."""
    if config_path:
        return config_path

    if env_config := os.environ.get("DASDCALC_CONFIG"):
        return env_config

    for path in CONFIG_PATHS:
        if Path(path).exists():
            return path

    return None


class SettingsLoader:
    """Loads dasdcalc.yml and layers it over the runtime config."""

    def __init__(self, config_path: str = "dasdcalc.yml"):
        self.config_path = Path(config_path)
        self.raw_config = None
        self.settings: Optional[SettingsFile] = None

    def load(self) -> SettingsFile:
        """Load and validate the settings file."""
        if not self.config_path.exists():
            raise ConfigValidationError(f"Settings file not found: {self.config_path}")

        try:
            with open(self.config_path) as f:
                self.raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigValidationError(f"Invalid YAML in {self.config_path}: {e}") from e

        # Empty file means "use defaults"
        if self.raw_config is None:
            self.raw_config = {}

        if not isinstance(self.raw_config, dict):
            raise ConfigValidationError(
                f"Settings file {self.config_path} must contain a mapping, "
                f"got {type(self.raw_config).__name__}"
            )

        try:
            self.settings = SettingsFile.model_validate(self.raw_config)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid settings in {self.config_path}:\n{e}") from e

        logger.debug(f"Loaded settings from {self.config_path}")
        return self.settings

    def apply(self, base: DasdCalcConfig) -> DasdCalcConfig:
        """Return a copy of base with the file's values applied."""
        settings = self.settings if self.settings is not None else self.load()

        overrides = {}
        if settings.thresholds is not None:
            overrides['warning_threshold'] = settings.thresholds.warning
            overrides['critical_threshold'] = settings.thresholds.critical
        if settings.default_device is not None:
            overrides['default_device'] = settings.default_device
        if settings.precision is not None:
            overrides['precision'] = settings.precision

        return replace(base, **overrides)
