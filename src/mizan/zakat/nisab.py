"""
Nisab threshold: the minimum net wealth on which zakat is due.

Classical weights are 85g of gold or 595g of silver; spot prices come in per
troy ounce, so the weight is converted to ounces first.
"""

import math
from dataclasses import dataclass
from enum import Enum

from mizan.core.exceptions import InvalidPriceError

from .models import NisabStandard

GRAMS_PER_OUNCE = 31.1035
GOLD_NISAB_GRAMS = 85.0
SILVER_NISAB_GRAMS = 595.0

# Share of the threshold at which a household is reported as "near" nisab
NEAR_NISAB_RATIO = 0.90


def calculate_nisab(
    silver_price_per_ounce: float,
    gold_price_per_ounce: float,
    standard: NisabStandard = NisabStandard.SILVER,
    gold_grams: float = GOLD_NISAB_GRAMS,
    silver_grams: float = SILVER_NISAB_GRAMS,
) -> float:
    """Convert the standard's metal weight into a monetary threshold.

    Prices are validated by the caller. A zero price gives a zero threshold.
    """
    if standard == NisabStandard.GOLD:
        return gold_grams / GRAMS_PER_OUNCE * gold_price_per_ounce
    return silver_grams / GRAMS_PER_OUNCE * silver_price_per_ounce


def validate_price(name: str, price: float | None) -> float:
    """Reject missing, negative, or non-finite spot prices."""
    if price is None:
        raise InvalidPriceError(f"{name} is required")
    if isinstance(price, bool):
        raise InvalidPriceError(f"{name} must be a number, got {price!r}")
    try:
        value = float(price)
    except (TypeError, ValueError) as e:
        raise InvalidPriceError(f"{name} must be a number, got {price!r}") from e
    if not math.isfinite(value) or value < 0:
        raise InvalidPriceError(f"{name} must be a finite, non-negative number, got {price!r}")
    return value


class NisabStatus(Enum):
    BELOW = "below"
    NEAR = "near"
    ABOVE = "above"


@dataclass(frozen=True)
class NisabComparison:
    ratio: float
    status: NisabStatus


def nisab_status(net_wealth: float, threshold: float) -> NisabComparison:
    """How far net wealth sits from the threshold."""
    if threshold <= 0:
        return NisabComparison(ratio=math.inf if net_wealth > 0 else 1.0, status=NisabStatus.ABOVE)
    ratio = net_wealth / threshold
    if ratio >= 1.0:
        status = NisabStatus.ABOVE
    elif ratio >= NEAR_NISAB_RATIO:
        status = NisabStatus.NEAR
    else:
        status = NisabStatus.BELOW
    return NisabComparison(ratio=ratio, status=status)
