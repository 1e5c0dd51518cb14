"""
Mizan exception hierarchy.

All mizan exceptions inherit from MizanError, so callers can catch library
errors in one place while still telling configuration defects apart from
bad caller input.
"""


class MizanError(Exception):
    """Base exception class for all mizan errors."""


class ConfigurationError(MizanError):
    """Raised for configuration errors (missing keys, invalid values)."""


class MethodologyNotFoundError(ConfigurationError, KeyError):
    """Raised when a methodology id is not registered."""

    def __init__(self, methodology_id: str, available: list[str] | None = None):
        self.methodology_id = methodology_id
        self.available = sorted(available or [])
        super().__init__(f"Unknown methodology '{methodology_id}'. Available: {self.available}")

    def __str__(self) -> str:
        return self.args[0]


class MethodologyValidationError(ConfigurationError):
    """Raised when a methodology document does not match the schema."""


class IncompleteMethodologyError(MethodologyValidationError):
    """Raised when a methodology leaves asset classes unmapped or names unknown ones."""

    def __init__(self, methodology_id: str, missing: list[str] | None = None, unknown: list[str] | None = None):
        self.methodology_id = methodology_id
        self.missing = sorted(missing or [])
        self.unknown = sorted(unknown or [])
        parts = []
        if self.missing:
            parts.append(f"missing treatments for {self.missing}")
        if self.unknown:
            parts.append(f"unknown asset classes {self.unknown}")
        super().__init__(f"Methodology '{methodology_id}' is incomplete: {'; '.join(parts)}")


class InvalidInputError(MizanError, ValueError):
    """Raised for caller-supplied values the engine refuses to compute with."""


class InvalidSnapshotError(InvalidInputError):
    """Raised for negative, non-finite, or unknown snapshot fields."""


class InvalidPriceError(InvalidInputError):
    """Raised for missing, negative, or non-finite metal prices."""
