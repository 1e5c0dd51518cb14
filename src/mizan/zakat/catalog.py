"""
Catalog of the asset classes and liability fields the engine knows about.

Every methodology document must assign a treatment to each entry in
``ASSET_CLASSES``; the snapshot model carries one numeric field per entry in
``ASSET_CLASSES`` and ``LIABILITY_FIELDS``.
"""

from dataclasses import dataclass
from enum import Enum


class LedgerCategory(Enum):
    """Groupings used for per-category subtotals in the result ledger."""

    LIQUID = "liquid"
    PRECIOUS_METALS = "precious_metals"
    CRYPTO = "crypto"
    INVESTMENTS = "investments"
    RETIREMENT = "retirement"
    TRUSTS = "trusts"
    REAL_ESTATE = "real_estate"
    BUSINESS = "business"
    DEBTS_OWED_TO_YOU = "debts_owed_to_you"
    ILLIQUID = "illiquid"


@dataclass(frozen=True)
class AssetClass:
    """A single snapshot field that can hold zakatable wealth.

    ``access_flag`` names a boolean snapshot field that must be true before the
    methodology's treatment is applied at all (the holder cannot reach the
    funds otherwise).
    """

    key: str
    label: str
    category: LedgerCategory
    access_flag: str | None = None


@dataclass(frozen=True)
class LiabilityField:
    key: str
    label: str
    monthly: bool = False


_L = LedgerCategory

ASSET_CLASSES: tuple[AssetClass, ...] = (
    # Liquid
    AssetClass("checking_accounts", "Checking accounts", _L.LIQUID),
    AssetClass("savings_accounts", "Savings accounts", _L.LIQUID),
    AssetClass("cash_on_hand", "Cash on hand", _L.LIQUID),
    AssetClass("digital_wallets", "Digital wallets", _L.LIQUID),
    AssetClass("foreign_currency", "Foreign currency", _L.LIQUID),
    # Precious metals
    AssetClass("gold_investment_value", "Investment gold", _L.PRECIOUS_METALS),
    AssetClass("gold_jewelry_value", "Personal gold jewelry", _L.PRECIOUS_METALS),
    AssetClass("silver_investment_value", "Investment silver", _L.PRECIOUS_METALS),
    AssetClass("silver_jewelry_value", "Personal silver jewelry", _L.PRECIOUS_METALS),
    # Crypto
    AssetClass("crypto_currency", "Cryptocurrency", _L.CRYPTO),
    AssetClass("crypto_trading", "Crypto trading positions", _L.CRYPTO),
    AssetClass("staked_assets", "Staked assets", _L.CRYPTO),
    AssetClass("staked_rewards_vested", "Vested staking rewards", _L.CRYPTO),
    AssetClass("liquidity_pool_value", "Liquidity pool positions", _L.CRYPTO),
    # Investments
    AssetClass("active_investments", "Actively traded investments", _L.INVESTMENTS),
    AssetClass("passive_investments_value", "Passive investments", _L.INVESTMENTS),
    AssetClass("reits_value", "REITs", _L.INVESTMENTS),
    AssetClass("dividends", "Dividends", _L.INVESTMENTS),
    # Retirement
    AssetClass("roth_ira_contributions", "Roth IRA contributions", _L.RETIREMENT),
    AssetClass("roth_ira_earnings", "Roth IRA earnings", _L.RETIREMENT),
    AssetClass("traditional_ira_balance", "Traditional IRA", _L.RETIREMENT),
    AssetClass("four_oh_one_k_vested_balance", "401(k) vested balance", _L.RETIREMENT),
    AssetClass("four_oh_one_k_unvested_match", "401(k) unvested match", _L.RETIREMENT),
    AssetClass("ira_withdrawals", "IRA withdrawals", _L.RETIREMENT),
    AssetClass("esa_withdrawals", "ESA withdrawals", _L.RETIREMENT),
    AssetClass("five_twenty_nine_withdrawals", "529 withdrawals", _L.RETIREMENT),
    AssetClass("hsa_balance", "HSA balance", _L.RETIREMENT),
    # Trusts
    AssetClass("revocable_trust_value", "Revocable trust", _L.TRUSTS),
    AssetClass("irrevocable_trust_value", "Irrevocable trust", _L.TRUSTS, access_flag="irrevocable_trust_accessible"),
    AssetClass("clat_value", "Charitable lead annuity trust", _L.TRUSTS),
    # Real estate
    AssetClass("primary_residence_value", "Primary residence", _L.REAL_ESTATE),
    AssetClass("rental_property_value", "Rental property", _L.REAL_ESTATE),
    AssetClass("rental_property_income", "Rental income held", _L.REAL_ESTATE),
    AssetClass("real_estate_for_sale", "Real estate held for sale", _L.REAL_ESTATE),
    AssetClass("land_banking_value", "Land banking", _L.REAL_ESTATE),
    # Business
    AssetClass("business_cash_and_receivables", "Business cash & receivables", _L.BUSINESS),
    AssetClass("business_inventory", "Business inventory", _L.BUSINESS),
    AssetClass("business_fixed_assets", "Business fixed assets", _L.BUSINESS),
    # Debts owed to you
    AssetClass("good_debt_owed_to_you", "Collectible debts owed to you", _L.DEBTS_OWED_TO_YOU),
    AssetClass("bad_debt_recovered", "Recovered bad debt", _L.DEBTS_OWED_TO_YOU),
    # Illiquid
    AssetClass("illiquid_assets_value", "Illiquid assets", _L.ILLIQUID),
    AssetClass("livestock_value", "Livestock", _L.ILLIQUID),
)

LIABILITY_FIELDS: tuple[LiabilityField, ...] = (
    LiabilityField("monthly_living_expenses", "Living expenses", monthly=True),
    LiabilityField("monthly_mortgage", "Mortgage payments", monthly=True),
    LiabilityField("insurance_expenses", "Insurance"),
    LiabilityField("credit_card_balance", "Credit card balance"),
    LiabilityField("unpaid_bills", "Unpaid bills"),
    LiabilityField("student_loans_due", "Student loan payments due"),
    LiabilityField("property_tax", "Property tax"),
    LiabilityField("late_tax_payments", "Late tax payments"),
)

ASSET_CLASS_KEYS: frozenset[str] = frozenset(a.key for a in ASSET_CLASSES)
LIABILITY_KEYS: frozenset[str] = frozenset(f.key for f in LIABILITY_FIELDS)

_BY_KEY = {a.key: a for a in ASSET_CLASSES}


def get_asset_class(key: str) -> AssetClass:
    """Look up an asset class by snapshot field name."""
    return _BY_KEY[key]
