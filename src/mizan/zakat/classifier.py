"""
Asset classifier: applies a methodology's treatment rules to a snapshot.

Each asset class in the catalog is looked up in the methodology and its value
passed through the assigned treatment. The result keeps one ledger line per
asset class so the final breakdown can show what was counted, what was
exempted, and why.
"""

from collections import defaultdict
from dataclasses import dataclass, field

from loguru import logger

from .catalog import ASSET_CLASSES, AssetClass, LedgerCategory
from .methodology import (
    ConditionalAgeTreatment,
    DeferredUponAccessTreatment,
    ExemptTreatment,
    FullTreatment,
    MethodologyConfig,
    NetAccessibleTreatment,
    NetOfPurificationTreatment,
    ProportionalTreatment,
    Treatment,
)
from .models import FinancialSnapshot


@dataclass(frozen=True)
class AssetLine:
    """One asset class as it was treated."""

    key: str
    label: str
    category: LedgerCategory
    value: float
    treatment: str
    zakatable: float
    note: str = ""

    @property
    def exempt_amount(self) -> float:
        return self.value - self.zakatable


@dataclass
class Classification:
    """Output of ``classify_assets``."""

    lines: list[AssetLine] = field(default_factory=list)
    total_assets: float = 0.0
    zakatable_total: float = 0.0
    categories: dict[LedgerCategory, float] = field(default_factory=dict)

    def zakatable(self, key: str) -> float:
        for line in self.lines:
            if line.key == key:
                return line.zakatable
        raise KeyError(key)


def evaluate_treatment(
    treatment: Treatment,
    value: float,
    snapshot: FinancialSnapshot,
) -> tuple[float, str]:
    """Apply one treatment rule to a value.

    Returns the zakatable amount and a short note for the ledger.
    """
    match treatment:
        case FullTreatment():
            return value, ""
        case ExemptTreatment():
            return 0.0, "exempt"
        case ProportionalTreatment(rate=rate):
            return value * rate, f"{rate:.0%} of value"
        case DeferredUponAccessTreatment():
            return 0.0, "deferred until accessible"
        case ConditionalAgeTreatment(threshold=threshold, fallback=fallback):
            if snapshot.age < threshold:
                return 0.0, f"exempt under age {threshold:g}"
            return evaluate_treatment(fallback, value, snapshot)
        case NetAccessibleTreatment():
            return _net_accessible(treatment, value, snapshot)
        case NetOfPurificationTreatment():
            share = snapshot.dividend_purification_percent / 100
            note = f"less {share:.0%} purification" if share else ""
            return value * (1 - share), note
        case _:
            # Unreachable for validated documents; the union is closed
            raise TypeError(f"Unsupported treatment: {treatment!r}")


def _net_accessible(
    treatment: NetAccessibleTreatment,
    value: float,
    snapshot: FinancialSnapshot,
) -> tuple[float, str]:
    if not snapshot.retirement_withdrawal_allowed:
        return 0.0, "withdrawal not allowed"
    if snapshot.retirement_withdrawal_limit == 0:
        return 0.0, "withdrawal limit is zero"

    penalty = treatment.penalty_rate if snapshot.age < treatment.penalty_free_age else 0.0
    if treatment.tax_source == "flat_rate":
        tax = treatment.flat_tax_rate
    else:
        tax = snapshot.estimated_tax_rate

    accessible = value * snapshot.retirement_withdrawal_limit * max(0.0, 1 - penalty - tax)
    return accessible, f"net of {penalty:.0%} penalty and {tax:.0%} tax"


def _gate(asset_class: AssetClass, snapshot: FinancialSnapshot) -> bool:
    if asset_class.access_flag is None:
        return True
    return bool(getattr(snapshot, asset_class.access_flag))


def classify_assets(snapshot: FinancialSnapshot, methodology: MethodologyConfig) -> Classification:
    """Run every asset class in the catalog through the methodology."""
    result = Classification()
    categories: dict[LedgerCategory, float] = defaultdict(float)

    for asset_class in ASSET_CLASSES:
        value = snapshot.amount(asset_class.key)
        treatment = methodology.treatment_for(asset_class.key)

        if _gate(asset_class, snapshot):
            zakatable, note = evaluate_treatment(treatment, value, snapshot)
        else:
            zakatable, note = 0.0, "not accessible"

        line = AssetLine(
            key=asset_class.key,
            label=asset_class.label,
            category=asset_class.category,
            value=value,
            treatment=treatment.kind,
            zakatable=zakatable,
            note=note,
        )
        result.lines.append(line)
        result.total_assets += value
        result.zakatable_total += zakatable
        categories[asset_class.category] += zakatable

        if value:
            logger.debug(f"{asset_class.key}: {value:,.2f} -> {zakatable:,.2f} ({treatment.kind}) {note}".rstrip())

    result.categories = {category: categories[category] for category in LedgerCategory}
    return result
