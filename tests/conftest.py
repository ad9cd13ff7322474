"""Shared fixtures for the cosmogen test suite."""

import pytest

from cosmogen import config as config_module
from cosmogen.config import GenerationConfig
from cosmogen.registry import get_registry


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear COSMOGEN_* env vars."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_dir / "config.json")
    for name in list(config_module._ENV_VARS):
        monkeypatch.delenv(name, raising=False)
    return config_dir / "config.json"


@pytest.fixture
def registry():
    return get_registry()


@pytest.fixture
def generation():
    return GenerationConfig()
