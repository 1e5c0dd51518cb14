"""Tests for the CLI entry point."""

import json
import os
import sys
from importlib import resources

import pytest
import yaml
from click.testing import CliRunner
from loguru import logger

from mizan.core.cli import main

METHODOLOGY_DIR = resources.files("mizan.zakat") / "methodologies"


@pytest.fixture(autouse=True)
def _restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def snapshot_file(tmp_dir):
    path = os.path.join(tmp_dir, "snapshot.yaml")
    with open(path, "w") as f:
        yaml.safe_dump({"methodology": "bradford", "cashOnHand": 15000, "monthlyLivingExpenses": 1000}, f)
    return path


def invoke(*args):
    return CliRunner().invoke(main, list(args))


class TestCliGroup:
    def test_help(self):
        result = invoke("--help")
        assert result.exit_code == 0
        assert "Mizan" in result.output
        assert "compute" in result.output
        assert "methodologies" in result.output

    def test_version(self):
        result = invoke("--version")
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestComputeCommand:
    def test_compute_help(self):
        result = invoke("compute", "--help")
        assert result.exit_code == 0
        assert "SNAPSHOT_FILE" in result.output

    def test_summary(self, snapshot_file):
        result = invoke("compute", snapshot_file, "--silver-price", "24.50", "--gold-price", "2650")
        assert result.exit_code == 0, result.output
        assert "Net zakatable:      $3,000.00" in result.output
        assert "Zakat due:          $75.00" in result.output

    def test_json(self, snapshot_file):
        result = invoke("compute", snapshot_file, "--json", "--silver-price", "24.50", "--gold-price", "2650")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["bradford"]["zakat"]["due"] == 75.0
        assert payload["bradford"]["liabilities"]["total"] == 12000.0

    def test_methodology_option_overrides_snapshot(self, snapshot_file):
        result = invoke("compute", snapshot_file, "-m", "shafii", "--json")
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert list(payload) == ["shafii"]
        assert payload["shafii"]["liabilities"]["total"] == 0.0

    def test_prices_from_config(self, snapshot_file, tmp_config_file):
        result = invoke("--config", tmp_config_file, "compute", snapshot_file)
        assert result.exit_code == 0, result.output
        # 595g of silver at $30/oz
        assert "$573.89" in result.output

    def test_config_default_methodology(self, tmp_dir):
        snapshot = os.path.join(tmp_dir, "unnamed.yaml")
        with open(snapshot, "w") as f:
            yaml.safe_dump({"cashOnHand": 15000}, f)
        config = os.path.join(tmp_dir, "default.yaml")
        with open(config, "w") as f:
            yaml.safe_dump({"methodologies": {"default": "shafii"}}, f)

        result = invoke("--config", config, "compute", snapshot, "--json")
        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)) == ["shafii"]

    def test_snapshot_choice_beats_config_default(self, snapshot_file, tmp_dir):
        config = os.path.join(tmp_dir, "default.yaml")
        with open(config, "w") as f:
            yaml.safe_dump({"methodologies": {"default": "shafii"}}, f)

        result = invoke("--config", config, "compute", snapshot_file, "--json")
        assert result.exit_code == 0, result.output
        assert list(json.loads(result.output)) == ["bradford"]

    def test_compare(self, snapshot_file):
        result = invoke("compute", snapshot_file, "--compare")
        assert result.exit_code == 0, result.output
        for mid in ("amja", "bradford", "hanafi", "shafii"):
            assert mid in result.output

    def test_unknown_methodology(self, snapshot_file):
        result = invoke("compute", snapshot_file, "-m", "nope")
        assert result.exit_code == 1
        assert "Unknown methodology 'nope'" in result.output

    def test_invalid_snapshot(self, tmp_dir):
        path = os.path.join(tmp_dir, "bad.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({"cashOnHand": -5}, f)
        result = invoke("compute", path)
        assert result.exit_code == 1
        assert "negative" in result.output

    def test_snapshot_must_be_mapping(self, tmp_dir):
        path = os.path.join(tmp_dir, "list.yaml")
        with open(path, "w") as f:
            yaml.safe_dump([1, 2], f)
        result = invoke("compute", path)
        assert result.exit_code == 1
        assert "mapping" in result.output


class TestMethodologiesCommand:
    def test_list(self):
        result = invoke("methodologies", "list")
        assert result.exit_code == 0, result.output
        assert "bradford" in result.output
        assert "AMJA Standard" in result.output

    def test_registry_follows_each_config(self, tmp_dir, methodology_doc):
        extra = os.path.join(tmp_dir, "extra")
        os.makedirs(extra)
        methodology_doc["meta"]["id"] = "local_imam"
        methodology_doc["meta"]["name"] = "Local Imam"
        with open(os.path.join(extra, "local_imam.yaml"), "w") as f:
            yaml.safe_dump(methodology_doc, f)
        config = os.path.join(tmp_dir, "extra.yaml")
        with open(config, "w") as f:
            yaml.safe_dump({"methodologies": {"extra_dirs": [extra]}}, f)

        assert "local_imam" in invoke("--config", config, "methodologies", "list").output

        result = invoke("--config", os.path.join(tmp_dir, "missing.yaml"), "methodologies", "list")
        assert result.exit_code == 0, result.output
        assert "local_imam" not in result.output
        assert "bradford" in result.output

    def test_validate_builtin(self):
        path = str(METHODOLOGY_DIR / "hanafi.yaml")
        result = invoke("methodologies", "validate", path)
        assert result.exit_code == 0, result.output
        assert "OK" in result.output

    def test_validate_broken(self, tmp_dir):
        path = os.path.join(tmp_dir, "broken.yaml")
        with open(path, "w") as f:
            yaml.safe_dump({"meta": {"id": "broken", "name": "Broken"}, "assets": {"cash_on_hand": "full"}}, f)
        result = invoke("methodologies", "validate", path)
        assert result.exit_code == 1
        assert "FAIL" in result.output
        assert "missing treatments" in result.output
