"""Shared test fixtures for mizan."""

import os
import tempfile

import pytest

from mizan.core.config import reset_config
from mizan.zakat.registry import MethodologyRegistry, reset_registry

SILVER_PRICE = 24.50
GOLD_PRICE = 2650.0


@pytest.fixture(autouse=True)
def _isolated_singletons(monkeypatch):
    """Keep the global config and registry from leaking between tests."""
    for key in list(os.environ):
        if key.startswith("MIZAN_"):
            monkeypatch.delenv(key)
    reset_config()
    reset_registry()
    yield
    reset_config()
    reset_registry()


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "prices": {"silver_per_ounce": 30.0, "gold_per_ounce": 2000.0},
        "logging": {"level": "info"},
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(scope="session")
def registry():
    """The built-in methodologies, loaded once."""
    reg = MethodologyRegistry()
    reg.load_builtin()
    return reg


@pytest.fixture
def methodology_doc(registry):
    """A plain-dict copy of the bradford document, for building variants."""
    return registry.get("bradford").model_dump(mode="json")


@pytest.fixture
def prices():
    return {"silver_price": SILVER_PRICE, "gold_price": GOLD_PRICE}
