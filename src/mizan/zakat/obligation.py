"""
Obligation calculator: nisab gate and rate application.

Asset classes with a rate override (e.g. rental income at 10%) are charged
their own rate and leave the standard pool; everything else in net wealth is
charged the methodology's base rate, scaled for a solar hawl when needed.
Nothing is rounded here.
"""

from dataclasses import dataclass

from loguru import logger

from .methodology import RateConfig
from .models import CalendarType


@dataclass(frozen=True)
class RatePool:
    """A slice of net wealth charged at one rate."""

    name: str
    amount: float
    rate: float

    @property
    def due(self) -> float:
        return self.amount * self.rate


@dataclass(frozen=True)
class Obligation:
    is_above_nisab: bool
    zakat_rate: float
    pools: tuple[RatePool, ...]
    zakat_due: float


def effective_rate(rate: RateConfig, calendar: CalendarType) -> float:
    """Standard rate for the hawl's calendar."""
    if calendar == CalendarType.SOLAR:
        return rate.base * rate.solar_factor
    return rate.base


def calculate_obligation(
    net_wealth: float,
    threshold: float,
    rate: RateConfig,
    calendar: CalendarType,
    override_amounts: dict[str, float] | None = None,
) -> Obligation:
    """Apply the nisab gate, then the rate(s).

    Args:
        net_wealth: Zakatable wealth after liabilities.
        threshold: Nisab in the same currency.
        rate: The methodology's rate section.
        calendar: Lunar or solar hawl.
        override_amounts: Zakatable amount per asset class that carries a rate
            override in ``rate.overrides``.
    """
    standard_rate = effective_rate(rate, calendar)
    is_above = net_wealth >= threshold

    override_amounts = override_amounts or {}
    override_pools = tuple(
        RatePool(name=key, amount=amount, rate=rate.overrides[key])
        for key, amount in sorted(override_amounts.items())
        if key in rate.overrides
    )
    override_total = sum(pool.amount for pool in override_pools)
    standard_pool = RatePool(name="standard", amount=max(0.0, net_wealth - override_total), rate=standard_rate)
    pools = (standard_pool, *override_pools)

    if not is_above:
        logger.debug(f"Net wealth {net_wealth:,.2f} below nisab {threshold:,.2f}, no zakat due")
        return Obligation(is_above_nisab=False, zakat_rate=standard_rate, pools=pools, zakat_due=0.0)

    due = sum(pool.due for pool in pools)
    for pool in pools:
        if pool.amount:
            logger.debug(f"Pool {pool.name}: {pool.amount:,.2f} @ {pool.rate:.4%} = {pool.due:,.2f}")

    return Obligation(is_above_nisab=True, zakat_rate=standard_rate, pools=pools, zakat_due=due)
