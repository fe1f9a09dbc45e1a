"""Tests for runtime config and the YAML settings loader."""
import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

from dasdcalc.cli import app

from dasdcalc.cli_support import load_runtime_config
from dasdcalc.config.loader import SettingsLoader, find_settings
from dasdcalc.core.config import DasdCalcConfig, get_config, set_config
from dasdcalc.models.config import ConfigValidationError, SettingsFile, Thresholds


class TestDasdCalcConfig:
    """Test environment-driven runtime config."""

    def test_defaults(self):
        config = DasdCalcConfig.from_env()

        assert config.warning_threshold == 75.0
        assert config.critical_threshold == 90.0
        assert config.default_device == "3390"
        assert config.precision == 2

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("DASDCALC_WARNING_THRESHOLD", "60")
        monkeypatch.setenv("DASDCALC_CRITICAL_THRESHOLD", "80.5")
        monkeypatch.setenv("DASDCALC_DEFAULT_DEVICE", "3350")
        monkeypatch.setenv("DASDCALC_PRECISION", "4")

        config = DasdCalcConfig.from_env()

        assert config.warning_threshold == 60.0
        assert config.critical_threshold == 80.5
        assert config.default_device == "3350"
        assert config.precision == 4

    @pytest.mark.parametrize("name,value", [
        ("DASDCALC_PRECISION", "abc"),
        ("DASDCALC_PRECISION", "-1"),
        ("DASDCALC_WARNING_THRESHOLD", "high"),
        ("DASDCALC_WARNING_THRESHOLD", "95"),
        ("DASDCALC_CRITICAL_THRESHOLD", "150"),
        ("DASDCALC_DEFAULT_DEVICE", "9999"),
    ])
    def test_invalid_env_rejected(self, monkeypatch, name, value):
        """Environment values follow the same rules as the settings file."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigValidationError, match="DASDCALC_"):
            DasdCalcConfig.from_env()

    def test_invalid_env_reported_by_cli(self, monkeypatch):
        monkeypatch.setenv("DASDCALC_PRECISION", "abc")

        result = CliRunner().invoke(app, ["devices"])

        assert result.exit_code == 1
        assert "Error:" in result.stdout
        assert "Invalid DASDCALC_" in result.stdout
        assert not isinstance(result.exception, ValueError)

    def test_global_instance(self):
        custom = DasdCalcConfig(precision=5)
        set_config(custom)
        assert get_config() is custom

    def test_global_instance_created_lazily(self, monkeypatch):
        monkeypatch.setenv("DASDCALC_DEFAULT_DEVICE", "3380")
        set_config(None)
        assert get_config().default_device == "3380"


class TestSettingsModels:
    """Test pydantic validation of settings."""

    def test_thresholds_defaults(self):
        thresholds = Thresholds()
        assert thresholds.warning == 75.0
        assert thresholds.critical == 90.0

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValidationError, match="must be lower than critical"):
            Thresholds(warning=90, critical=75)

    def test_thresholds_in_range(self):
        with pytest.raises(ValidationError):
            Thresholds(warning=50, critical=150)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ValidationError):
            SettingsFile(history=True)

    def test_unknown_device_rejected(self):
        with pytest.raises(ValidationError, match="Unknown device type"):
            SettingsFile(default_device="9999")

    def test_integer_device_accepted(self):
        assert SettingsFile(default_device=3380).default_device == "3380"

    def test_precision_range(self):
        with pytest.raises(ValidationError):
            SettingsFile(precision=-1)


class TestSettingsLoader:
    """Test loading dasdcalc.yml."""

    def test_load_and_apply(self, settings_file):
        path = settings_file(
            "thresholds:\n"
            "  warning: 60\n"
            "  critical: 85\n"
            "default_device: '3380'\n"
            "precision: 3\n"
        )

        config = SettingsLoader(str(path)).apply(DasdCalcConfig())

        assert config.warning_threshold == 60
        assert config.critical_threshold == 85
        assert config.default_device == "3380"
        assert config.precision == 3

    def test_partial_file_keeps_base_values(self, settings_file):
        path = settings_file("precision: 0\n")
        base = DasdCalcConfig(default_device="3350")

        config = SettingsLoader(str(path)).apply(base)

        assert config.precision == 0
        assert config.default_device == "3350"
        assert config.warning_threshold == 75.0
        assert base.precision == 2

    def test_empty_file_uses_defaults(self, settings_file):
        path = settings_file("")
        settings = SettingsLoader(str(path)).load()
        assert settings == SettingsFile()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigValidationError, match="not found"):
            SettingsLoader(str(tmp_path / "nope.yml")).load()

    def test_invalid_yaml(self, settings_file):
        path = settings_file("thresholds: [unclosed\n")
        with pytest.raises(ConfigValidationError, match="Invalid YAML"):
            SettingsLoader(str(path)).load()

    def test_non_mapping(self, settings_file):
        path = settings_file("- just\n- a list\n")
        with pytest.raises(ConfigValidationError, match="must contain a mapping"):
            SettingsLoader(str(path)).load()

    def test_invalid_values(self, settings_file):
        path = settings_file("thresholds:\n  warning: 95\n  critical: 90\n")
        with pytest.raises(ConfigValidationError, match="Invalid settings"):
            SettingsLoader(str(path)).load()


class TestFindSettings:
    """Test the settings search order."""

    def test_explicit_path_wins(self, monkeypatch):
        monkeypatch.setenv("DASDCALC_CONFIG", "/from/env.yml")
        assert find_settings("/explicit.yml") == "/explicit.yml"

    def test_env_var(self, monkeypatch):
        monkeypatch.setenv("DASDCALC_CONFIG", "/from/env.yml")
        assert find_settings() == "/from/env.yml"

    def test_search_paths(self, tmp_path, monkeypatch):
        candidate = tmp_path / "found.yml"
        candidate.write_text("precision: 1\n")
        monkeypatch.setattr(
            "dasdcalc.config.loader.CONFIG_PATHS",
            [str(tmp_path / "missing.yml"), str(candidate)],
        )
        assert find_settings() == str(candidate)

    def test_nothing_found(self):
        assert find_settings() is None


class TestLoadRuntimeConfig:
    """Test layering env and settings file into the global config."""

    def test_file_overrides_env(self, settings_file, monkeypatch):
        monkeypatch.setenv("DASDCALC_PRECISION", "4")
        monkeypatch.setenv("DASDCALC_DEFAULT_DEVICE", "3350")
        path = settings_file("precision: 1\n")

        config = load_runtime_config(str(path))

        assert config.precision == 1
        assert config.default_device == "3350"
        assert get_config() is config

    def test_without_file(self):
        config = load_runtime_config()
        assert config == DasdCalcConfig()
