"""
Methodology registry.

Loads the methodology documents shipped with the package (``methodologies/``
next to this module) plus any directories listed in the
``methodologies.extra_dirs`` config key. Every document is validated once at
load time; an incomplete or malformed document stops the load rather than
being skipped.

Lookups fail closed: an unknown id raises ``MethodologyNotFoundError``.
There is no fallback to a default methodology.
"""

from collections.abc import Iterable
from importlib import resources
from pathlib import Path
from types import MappingProxyType

import yaml
from loguru import logger

from mizan.core.exceptions import MethodologyNotFoundError, MethodologyValidationError

from .methodology import MethodologyConfig

_BUILTIN_DIR = "methodologies"


def load_methodology_file(path: str | Path) -> MethodologyConfig:
    """Parse and validate a single methodology YAML file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MethodologyValidationError(f"{path}: invalid YAML: {e}") from e
    return MethodologyConfig.from_document(data, source=str(path))


class MethodologyRegistry:
    """Validated methodology documents keyed by id."""

    def __init__(self, methodologies: Iterable[MethodologyConfig] = ()):
        self._methodologies: dict[str, MethodologyConfig] = {}
        for methodology in methodologies:
            self.register(methodology)

    def register(self, methodology: MethodologyConfig, replace: bool = False) -> None:
        if methodology.id in self._methodologies and not replace:
            raise MethodologyValidationError(f"Duplicate methodology id '{methodology.id}'")
        self._methodologies[methodology.id] = methodology
        logger.debug(f"Registered methodology: {methodology.id} v{methodology.meta.version}")

    def load_builtin(self) -> None:
        """Load the documents bundled with the package."""
        root = resources.files(__package__) / _BUILTIN_DIR
        for entry in sorted(root.iterdir(), key=lambda e: e.name):
            if not entry.name.endswith((".yaml", ".yml")):
                continue
            try:
                data = yaml.safe_load(entry.read_text(encoding="utf-8"))
            except yaml.YAMLError as e:
                raise MethodologyValidationError(f"{entry.name}: invalid YAML: {e}") from e
            self.register(MethodologyConfig.from_document(data, source=entry.name))

    def load_directory(self, directory: str | Path, replace: bool = False) -> list[str]:
        """Load every ``*.yaml``/``*.yml`` document in ``directory``.

        Returns the ids that were loaded.
        """
        directory = Path(directory).expanduser()
        if not directory.is_dir():
            raise MethodologyValidationError(f"Methodology directory not found: {directory}")

        loaded = []
        for path in sorted(directory.iterdir()):
            if path.suffix.lower() not in (".yaml", ".yml"):
                continue
            methodology = load_methodology_file(path)
            self.register(methodology, replace=replace)
            loaded.append(methodology.id)

        logger.info(f"Loaded {len(loaded)} methodologies from {directory}")
        return loaded

    def get(self, methodology_id: str) -> MethodologyConfig:
        """Return the methodology for ``methodology_id`` or raise."""
        try:
            return self._methodologies[methodology_id]
        except KeyError:
            raise MethodologyNotFoundError(methodology_id, self.ids()) from None

    def __contains__(self, methodology_id: object) -> bool:
        return methodology_id in self._methodologies

    def __len__(self) -> int:
        return len(self._methodologies)

    def ids(self) -> list[str]:
        return sorted(self._methodologies)

    def as_mapping(self) -> MappingProxyType:
        """Read-only view of id -> methodology."""
        return MappingProxyType(self._methodologies)


# Module-level singleton
_registry_instance: MethodologyRegistry | None = None


def get_registry() -> MethodologyRegistry:
    """Get or build the process-wide registry.

    Built-in documents load first, then each directory in the
    ``methodologies.extra_dirs`` config key (documents there may replace a
    built-in with the same id).
    """
    global _registry_instance
    if _registry_instance is None:
        from mizan.core.config import get_config

        registry = MethodologyRegistry()
        registry.load_builtin()
        for directory in get_config().validated().methodologies.extra_dirs:
            registry.load_directory(directory, replace=True)
        _registry_instance = registry
    return _registry_instance


def reset_registry() -> None:
    """Drop the process-wide registry (useful for testing)."""
    global _registry_instance
    _registry_instance = None
