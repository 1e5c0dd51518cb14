"""Tests for mizan.core.config."""

import json
import os

import pytest
import yaml

from mizan.core.config import Config, get_config, reset_config
from mizan.core.exceptions import ConfigurationError


class TestConfig:
    def test_defaults(self):
        config = Config(config_file=None)
        assert config.get("methodologies.default") == "bradford"
        assert config.get("methodologies.extra_dirs") == []
        assert config.get("prices.silver_per_ounce") == 24.50
        assert config.get("logging.level") == "WARNING"

    def test_custom_env_prefix(self, monkeypatch):
        monkeypatch.setenv("MYAPP_LOGGING__LEVEL", "DEBUG")
        config = Config(env_prefix="MYAPP_")
        assert config.get("logging.level") == "DEBUG"

    def test_yaml_config_file(self, tmp_config_file):
        config = Config(config_file=tmp_config_file)
        assert config.get("prices.silver_per_ounce") == 30.0
        assert config.get("prices.gold_per_ounce") == 2000.0
        # Untouched defaults survive the merge
        assert config.get("methodologies.default") == "bradford"

    def test_json_config_file(self, tmp_dir):
        config_path = os.path.join(tmp_dir, "config.json")
        with open(config_path, "w") as f:
            json.dump({"logging": {"file": "/tmp/mizan.log"}}, f)

        config = Config(config_file=config_path)
        assert config.get("logging.file") == "/tmp/mizan.log"

    def test_env_overrides_file(self, tmp_dir, monkeypatch):
        config_path = os.path.join(tmp_dir, "config.yaml")
        with open(config_path, "w") as f:
            yaml.dump({"prices": {"gold_per_ounce": 1900}}, f)

        monkeypatch.setenv("MIZAN_PRICES__GOLD_PER_OUNCE", "2100")
        config = Config(config_file=config_path)
        assert config.get("prices.gold_per_ounce") == "2100"
        assert config.validated().prices.gold_per_ounce == 2100.0

    def test_missing_file_uses_defaults(self, tmp_dir):
        config = Config(config_file=os.path.join(tmp_dir, "absent.yaml"))
        assert config.get("logging.level") == "WARNING"

    def test_get_missing_key(self):
        config = Config()
        assert config.get("nonexistent.key") is None
        assert config.get("nonexistent.key", "fallback") == "fallback"

    def test_set(self):
        config = Config()
        config.set("custom.nested.value", 42)
        assert config.get("custom.nested.value") == 42

    def test_extra_defaults(self):
        config = Config(defaults={"custom": {"key": "value"}})
        assert config.get("custom.key") == "value"

    def test_validated_rejects_bad_values(self, monkeypatch):
        monkeypatch.setenv("MIZAN_PRICES__SILVER_PER_OUNCE", "-3")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            Config().validated()


class TestGetConfig:
    def test_singleton(self):
        c1 = get_config()
        c2 = get_config()
        assert c1 is c2

    def test_reset_clears_singleton(self):
        c1 = get_config()
        reset_config()
        c2 = get_config()
        assert c1 is not c2

    def test_explicit_file(self, tmp_config_file):
        assert get_config(config_file=tmp_config_file).get("prices.gold_per_ounce") == 2000.0
