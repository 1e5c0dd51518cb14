"""
Liability adjuster: how much of the household's debt reduces zakatable wealth.

Monthly fields (living expenses, mortgage) are multiplied by the number of
months the policy allows: 12 under ``full``, ``n`` under ``trailing_months(n)``.
Lump-sum fields are deducted in full under any policy except ``none``.
"""

from dataclasses import dataclass, field

from loguru import logger

from .catalog import LIABILITY_FIELDS, LiabilityField
from .methodology import FullDeduction, LiabilityPolicy, NoDeduction, TrailingMonthsDeduction
from .models import FinancialSnapshot

MONTHS_PER_YEAR = 12


@dataclass(frozen=True)
class LiabilityLine:
    key: str
    label: str
    amount: float
    rule: str
    months: int | None
    deductible: float


@dataclass
class LiabilityAdjustment:
    lines: list[LiabilityLine] = field(default_factory=list)
    total: float = 0.0


def _deductible(
    liability: LiabilityField,
    amount: float,
    rule: NoDeduction | FullDeduction | TrailingMonthsDeduction,
) -> tuple[float, int | None]:
    match rule:
        case NoDeduction():
            return 0.0, None
        case FullDeduction():
            if liability.monthly:
                return amount * MONTHS_PER_YEAR, MONTHS_PER_YEAR
            return amount, None
        case TrailingMonthsDeduction(months=months):
            if liability.monthly:
                return amount * months, months
            return amount, None
        case _:
            raise TypeError(f"Unsupported liability rule: {rule!r}")


def calculate_liabilities(snapshot: FinancialSnapshot, policy: LiabilityPolicy) -> LiabilityAdjustment:
    """Compute the deductible amount for every liability field."""
    result = LiabilityAdjustment()

    for liability in LIABILITY_FIELDS:
        amount = snapshot.amount(liability.key)
        rule = policy.rule_for(liability.key)
        deductible, months = _deductible(liability, amount, rule)

        result.lines.append(
            LiabilityLine(
                key=liability.key,
                label=liability.label,
                amount=amount,
                rule=rule.kind,
                months=months,
                deductible=deductible,
            )
        )
        result.total += deductible

        if amount:
            suffix = f" x{months}" if months else ""
            logger.debug(f"Liability {liability.key}: {amount:,.2f}{suffix} -> {deductible:,.2f} ({rule.kind})")

    return result


def net_zakatable_wealth(gross_zakatable: float, deductible: float) -> float:
    """Zakatable wealth after debts, never below zero."""
    return max(0.0, gross_zakatable - deductible)
