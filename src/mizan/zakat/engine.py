"""
Zakat engine: snapshot + methodology + prices -> CalculationResult.

The pipeline runs leaf-first in one synchronous call:
classify assets, deduct liabilities, check nisab, apply rate(s), assemble.
Every call builds a fresh result; nothing is cached between calls.
"""

from collections.abc import Iterable

from loguru import logger

from mizan.core.exceptions import InvalidSnapshotError

from .classifier import classify_assets
from .liabilities import calculate_liabilities, net_zakatable_wealth
from .methodology import MethodologyConfig
from .models import FinancialSnapshot
from .nisab import calculate_nisab, nisab_status, validate_price
from .obligation import calculate_obligation
from .registry import MethodologyRegistry, get_registry
from .result import CalculationResult


def compute_with_methodology(
    snapshot: FinancialSnapshot,
    methodology: MethodologyConfig,
    silver_price: float,
    gold_price: float,
) -> CalculationResult:
    """Run the full calculation against an already-loaded methodology."""
    silver_price = validate_price("silver_price", silver_price)
    gold_price = validate_price("gold_price", gold_price)

    nisab_cfg = methodology.thresholds.nisab
    standard = snapshot.nisab_standard or nisab_cfg.default_standard
    threshold = calculate_nisab(
        silver_price,
        gold_price,
        standard,
        gold_grams=nisab_cfg.gold_grams,
        silver_grams=nisab_cfg.silver_grams,
    )
    if threshold == 0:
        logger.warning(f"Nisab threshold is zero ({standard.value} price is 0); any positive wealth is above nisab")

    classification = classify_assets(snapshot, methodology)
    liabilities = calculate_liabilities(snapshot, methodology.liabilities)
    net = net_zakatable_wealth(classification.zakatable_total, liabilities.total)

    overrides = {
        line.key: line.zakatable
        for line in classification.lines
        if line.key in methodology.rate.overrides and line.zakatable
    }
    obligation = calculate_obligation(net, threshold, methodology.rate, snapshot.calendar_type, overrides)

    dividends_to_purify = snapshot.dividends * snapshot.dividend_purification_percent / 100

    result = CalculationResult(
        methodology_id=methodology.id,
        methodology_name=methodology.meta.name,
        calendar_type=snapshot.calendar_type,
        household_members=snapshot.household_members,
        total_assets=classification.total_assets,
        total_zakatable_assets=classification.zakatable_total,
        categories=classification.categories,
        ledger=tuple(classification.lines),
        total_liabilities=liabilities.total,
        liability_lines=tuple(liabilities.lines),
        net_zakatable_wealth=net,
        nisab_standard=standard,
        nisab_threshold=threshold,
        nisab=nisab_status(net, threshold),
        is_above_nisab=obligation.is_above_nisab,
        zakat_rate=obligation.zakat_rate,
        rate_pools=obligation.pools,
        zakat_due=obligation.zakat_due,
        interest_to_purify=snapshot.interest_earned,
        dividends_to_purify=dividends_to_purify,
    )

    logger.info(
        f"[{methodology.id}] net ${net:,.2f} vs nisab ${threshold:,.2f} ({standard.value}), "
        f"zakat due ${obligation.zakat_due:,.2f}"
    )
    return result


def compute(
    snapshot: FinancialSnapshot,
    methodology_id: str,
    silver_price: float,
    gold_price: float,
    registry: MethodologyRegistry | None = None,
) -> CalculationResult:
    """Compute the zakat obligation for ``snapshot`` under ``methodology_id``.

    Args:
        snapshot: The household's financial snapshot.
        methodology_id: A registered methodology id. Unknown ids raise
            ``MethodologyNotFoundError``.
        silver_price: Silver spot price in USD per troy ounce.
        gold_price: Gold spot price in USD per troy ounce.
        registry: Registry to look the id up in. Defaults to the
            process-wide registry.
    """
    methodology = (registry or get_registry()).get(methodology_id)
    return compute_with_methodology(snapshot, methodology, silver_price, gold_price)


def compute_for_snapshot(
    snapshot: FinancialSnapshot,
    silver_price: float,
    gold_price: float,
    registry: MethodologyRegistry | None = None,
) -> CalculationResult:
    """Compute under the methodology chosen in the snapshot itself.

    Raises ``InvalidSnapshotError`` when the snapshot names no methodology.
    """
    if not snapshot.methodology:
        raise InvalidSnapshotError("Snapshot does not name a methodology; pass one to compute() explicitly")
    return compute(snapshot, snapshot.methodology, silver_price, gold_price, registry=registry)


def compare_methodologies(
    snapshot: FinancialSnapshot,
    silver_price: float,
    gold_price: float,
    methodology_ids: Iterable[str] | None = None,
    registry: MethodologyRegistry | None = None,
) -> dict[str, CalculationResult]:
    """Compute the same snapshot under several methodologies.

    Defaults to every registered methodology, in id order.
    """
    registry = registry or get_registry()
    ids = list(methodology_ids) if methodology_ids is not None else registry.ids()
    return {mid: compute(snapshot, mid, silver_price, gold_price, registry=registry) for mid in ids}
