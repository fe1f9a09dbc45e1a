"""Shared test fixtures for dasdcalc tests."""
import pytest

from dasdcalc.core.config import set_config
from dasdcalc.models.storage import StorageState

ENV_VARS = [
    "DASDCALC_CONFIG",
    "DASDCALC_WARNING_THRESHOLD",
    "DASDCALC_CRITICAL_THRESHOLD",
    "DASDCALC_DEFAULT_DEVICE",
    "DASDCALC_PRECISION",
]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every test without ambient settings files or env overrides."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("dasdcalc.config.loader.CONFIG_PATHS", [])
    monkeypatch.chdir(tmp_path)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def settings_file(tmp_path):
    """Write a dasdcalc.yml and return its path."""
    def _write(content: str):
        path = tmp_path / "dasdcalc.yml"
        path.write_text(content)
        return path
    return _write


# Common test data
@pytest.fixture
def volume_state():
    """1000 bytes total with 400 free."""
    return StorageState(total_space=1000, free_space=400)
