"""Shared setup logic for CLI commands."""

from __future__ import annotations

from pathlib import Path

import click
import yaml

from mizan.core.config import Config, get_config, reset_config
from mizan.core.exceptions import ConfigurationError, InvalidSnapshotError
from mizan.core.utils.logging import setup_logging
from mizan.zakat.registry import reset_registry


def setup_from_config(config_file: str | None, verbose: bool = False) -> Config:
    """Load config (replacing the global one) and configure logging from it."""
    reset_config()
    reset_registry()
    config = get_config(config_file=config_file)
    try:
        settings = config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    level = "DEBUG" if verbose else settings.logging.level
    log_file = str(settings.logging.file) if settings.logging.file else None
    setup_logging(level=level, log_file=log_file)
    return config


def load_snapshot_data(path: str | Path) -> dict:
    """Read a snapshot mapping from a YAML or JSON file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidSnapshotError(f"{path}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidSnapshotError(f"{path}: snapshot must be a mapping of field names to values")
    return data


def format_money(amount: float) -> str:
    return f"${amount:,.2f}"
