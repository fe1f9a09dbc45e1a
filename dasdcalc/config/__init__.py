"""Settings file handling."""
from dasdcalc.config.loader import CONFIG_PATHS, SettingsLoader, find_settings

__all__ = ['CONFIG_PATHS', 'SettingsLoader', 'find_settings']
