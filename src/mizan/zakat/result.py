"""
Calculation result: the auditable breakdown returned by ``compute``.

Values are held unrounded; ``to_dict`` rounds money to cents for display
using ROUND_HALF_UP.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from .catalog import LedgerCategory
from .classifier import AssetLine
from .liabilities import LiabilityLine
from .models import CalendarType, HouseholdMember, NisabStandard
from .nisab import NisabComparison
from .obligation import RatePool


def round_money(amount: float) -> float:
    """Round to cents, halves away from zero."""
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class CalculationResult:
    """Complete result of one zakat calculation."""

    methodology_id: str
    methodology_name: str
    calendar_type: CalendarType
    household_members: tuple[HouseholdMember, ...]

    total_assets: float
    total_zakatable_assets: float
    categories: dict[LedgerCategory, float]
    ledger: tuple[AssetLine, ...]

    total_liabilities: float
    liability_lines: tuple[LiabilityLine, ...]
    net_zakatable_wealth: float

    nisab_standard: NisabStandard
    nisab_threshold: float
    nisab: NisabComparison
    is_above_nisab: bool

    zakat_rate: float
    rate_pools: tuple[RatePool, ...]
    zakat_due: float

    interest_to_purify: float
    dividends_to_purify: float

    @property
    def exempt_lines(self) -> tuple[AssetLine, ...]:
        """Ledger lines that held value the methodology did not count."""
        return tuple(line for line in self.ledger if line.value and line.zakatable < line.value)

    @property
    def total_to_purify(self) -> float:
        return self.interest_to_purify + self.dividends_to_purify

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable payload for presentation."""
        ratio = self.nisab.ratio
        return {
            "methodology": {"id": self.methodology_id, "name": self.methodology_name},
            "calendar_type": self.calendar_type.value,
            "household_members": [
                {"id": m.id, "name": m.name, "relationship": m.relationship} for m in self.household_members
            ],
            "assets": {
                "total": round_money(self.total_assets),
                "zakatable": round_money(self.total_zakatable_assets),
                "categories": {c.value: round_money(v) for c, v in self.categories.items() if v},
                "ledger": [
                    {
                        "field": line.key,
                        "label": line.label,
                        "category": line.category.value,
                        "value": round_money(line.value),
                        "treatment": line.treatment,
                        "zakatable": round_money(line.zakatable),
                        "note": line.note,
                    }
                    for line in self.ledger
                    if line.value
                ],
            },
            "liabilities": {
                "total": round_money(self.total_liabilities),
                "lines": [
                    {
                        "field": line.key,
                        "label": line.label,
                        "amount": round_money(line.amount),
                        "rule": line.rule,
                        "months": line.months,
                        "deductible": round_money(line.deductible),
                    }
                    for line in self.liability_lines
                    if line.amount
                ],
            },
            "nisab": {
                "standard": self.nisab_standard.value,
                "threshold": round_money(self.nisab_threshold),
                "is_above": self.is_above_nisab,
                "ratio": round(ratio, 4) if math.isfinite(ratio) else None,
                "status": self.nisab.status.value,
            },
            "zakat": {
                "net_zakatable_wealth": round_money(self.net_zakatable_wealth),
                "rate": self.zakat_rate,
                "pools": [
                    {"name": p.name, "amount": round_money(p.amount), "rate": p.rate, "due": round_money(p.due)}
                    for p in self.rate_pools
                    if p.amount
                ],
                "due": round_money(self.zakat_due),
            },
            "purification": {
                "interest": round_money(self.interest_to_purify),
                "dividends": round_money(self.dividends_to_purify),
                "total": round_money(self.total_to_purify),
            },
        }
