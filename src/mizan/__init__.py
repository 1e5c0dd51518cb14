"""Mizan: methodology-driven Zakat obligation engine."""

__version__ = "0.1.0"

from .zakat.engine import compare_methodologies, compute, compute_for_snapshot  # noqa: E402

__all__ = [
    "__version__",
    "compare_methodologies",
    "compute",
    "compute_for_snapshot",
]
