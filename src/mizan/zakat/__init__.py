"""Zakat calculation: snapshot model, methodology documents, and the engine."""

from .engine import compare_methodologies, compute, compute_for_snapshot, compute_with_methodology
from .methodology import MethodologyConfig
from .models import CalendarType, FinancialSnapshot, HouseholdMember, NisabStandard
from .nisab import calculate_nisab
from .registry import MethodologyRegistry, get_registry, reset_registry
from .result import CalculationResult

__all__ = [
    "CalculationResult",
    "CalendarType",
    "FinancialSnapshot",
    "HouseholdMember",
    "MethodologyConfig",
    "MethodologyRegistry",
    "NisabStandard",
    "calculate_nisab",
    "compare_methodologies",
    "compute",
    "compute_for_snapshot",
    "compute_with_methodology",
    "get_registry",
    "reset_registry",
]
