"""Shared test fixtures for assetdb."""

import os
import tempfile

import pytest

from assetdb.core.storage import LocalAssetStore


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file pointing at a scratch asset root."""
    import yaml

    config_data = {
        "storage": {"assets_dir": os.path.join(tmp_dir, "assets")},
        "compression": {"type": "zstd", "level": 5},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def store(tmp_path):
    return LocalAssetStore(base_path=tmp_path / "assets")


@pytest.fixture(autouse=True)
def _clear_assetdb_env(monkeypatch):
    """Keep the developer's ASSETDB_* variables out of config tests."""
    for key in list(os.environ):
        if key.startswith("ASSETDB_"):
            monkeypatch.delenv(key, raising=False)
