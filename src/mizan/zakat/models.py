"""
Snapshot data model for zakat calculations.

``FinancialSnapshot`` is an immutable record of everything the engine needs
from the household: one numeric field per asset class and liability field in
the catalog, plus the context that drives methodology rules (age, tax rate,
nisab standard, calendar).

Build snapshots with ``FinancialSnapshot(...)`` or
``FinancialSnapshot.from_mapping(data)``. Both paths validate: numeric fields
must be finite and non-negative, rates must sit in their ranges.
"""

import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from loguru import logger

from mizan.core.exceptions import InvalidSnapshotError

from .catalog import ASSET_CLASS_KEYS, LIABILITY_KEYS


class NisabStandard(Enum):
    GOLD = "gold"
    SILVER = "silver"


class CalendarType(Enum):
    """Time base for the hawl. Solar years are longer, so the rate is scaled up."""

    LUNAR = "lunar"
    SOLAR = "solar"


@dataclass(frozen=True)
class HouseholdMember:
    id: str
    name: str
    relationship: str = "self"


SELF_MEMBER = HouseholdMember(id="self", name="You", relationship="self")

# Keys used by older payloads that map onto a renamed field
_FIELD_ALIASES = {
    "gold_value": "gold_investment_value",
    "silver_value": "silver_investment_value",
    "madhab": "methodology",
}

_RATE_FIELDS = {
    "estimated_tax_rate": (0.0, 1.0),
    "retirement_withdrawal_limit": (0.0, 1.0),
    "dividend_purification_percent": (0.0, 100.0),
}


def _snake_case(key: str) -> str:
    """rothIRAContributions -> roth_ira_contributions."""
    key = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", key)
    key = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", key)
    return key.lower()


@dataclass(frozen=True)
class FinancialSnapshot:
    """A household's wealth on the zakat due date."""

    # Context
    methodology: str | None = None
    nisab_standard: NisabStandard | None = None
    calendar_type: CalendarType = CalendarType.LUNAR
    is_household: bool = False
    household_members: tuple[HouseholdMember, ...] = (SELF_MEMBER,)
    age: float = 30.0
    estimated_tax_rate: float = 0.25
    retirement_withdrawal_allowed: bool = True
    retirement_withdrawal_limit: float = 1.0
    irrevocable_trust_accessible: bool = False
    dividend_purification_percent: float = 0.0
    interest_earned: float = 0.0

    # Liquid
    checking_accounts: float = 0.0
    savings_accounts: float = 0.0
    cash_on_hand: float = 0.0
    digital_wallets: float = 0.0
    foreign_currency: float = 0.0

    # Precious metals
    gold_investment_value: float = 0.0
    gold_jewelry_value: float = 0.0
    silver_investment_value: float = 0.0
    silver_jewelry_value: float = 0.0

    # Crypto
    crypto_currency: float = 0.0
    crypto_trading: float = 0.0
    staked_assets: float = 0.0
    staked_rewards_vested: float = 0.0
    liquidity_pool_value: float = 0.0

    # Investments
    active_investments: float = 0.0
    passive_investments_value: float = 0.0
    reits_value: float = 0.0
    dividends: float = 0.0

    # Retirement
    roth_ira_contributions: float = 0.0
    roth_ira_earnings: float = 0.0
    traditional_ira_balance: float = 0.0
    four_oh_one_k_vested_balance: float = 0.0
    four_oh_one_k_unvested_match: float = 0.0
    ira_withdrawals: float = 0.0
    esa_withdrawals: float = 0.0
    five_twenty_nine_withdrawals: float = 0.0
    hsa_balance: float = 0.0

    # Trusts
    revocable_trust_value: float = 0.0
    irrevocable_trust_value: float = 0.0
    clat_value: float = 0.0

    # Real estate
    primary_residence_value: float = 0.0
    rental_property_value: float = 0.0
    rental_property_income: float = 0.0
    real_estate_for_sale: float = 0.0
    land_banking_value: float = 0.0

    # Business
    business_cash_and_receivables: float = 0.0
    business_inventory: float = 0.0
    business_fixed_assets: float = 0.0

    # Debts owed to you
    good_debt_owed_to_you: float = 0.0
    bad_debt_recovered: float = 0.0

    # Illiquid
    illiquid_assets_value: float = 0.0
    livestock_value: float = 0.0

    # Liabilities
    monthly_living_expenses: float = 0.0
    monthly_mortgage: float = 0.0
    insurance_expenses: float = 0.0
    credit_card_balance: float = 0.0
    unpaid_bills: float = 0.0
    student_loans_due: float = 0.0
    property_tax: float = 0.0
    late_tax_payments: float = 0.0

    extra: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def __post_init__(self):
        for name in (*_numeric_field_names(), *_RATE_FIELDS):
            object.__setattr__(self, name, _check_amount(name, getattr(self, name)))

        for name, (low, high) in _RATE_FIELDS.items():
            value = getattr(self, name)
            if not low <= value <= high:
                raise InvalidSnapshotError(f"{name} must be between {low} and {high}, got {value}")

        object.__setattr__(self, "calendar_type", _coerce_enum(CalendarType, "calendar_type", self.calendar_type))
        if self.nisab_standard is not None:
            standard = _coerce_enum(NisabStandard, "nisab_standard", self.nisab_standard)
            object.__setattr__(self, "nisab_standard", standard)

        members = tuple(_coerce_member(m) for m in self.household_members) or (SELF_MEMBER,)
        object.__setattr__(self, "household_members", members)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, ignore_unknown: bool = False) -> "FinancialSnapshot":
        """Build a snapshot from a loosely-typed mapping (form payload, YAML file).

        Keys may be camelCase or snake_case. Missing or ``None`` numeric
        values count as zero. Unknown keys raise unless ``ignore_unknown`` is
        set, in which case they are kept in ``extra`` for the caller.
        """
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = {}

        for raw_key, value in data.items():
            key = _snake_case(str(raw_key))
            key = _FIELD_ALIASES.get(key, key)
            if key not in known:
                extra[raw_key] = value
                continue
            if value is None:
                continue
            kwargs[key] = value

        if extra and not ignore_unknown:
            raise InvalidSnapshotError(f"Unknown snapshot fields: {sorted(extra)}")
        if extra:
            logger.debug(f"Ignoring {len(extra)} non-snapshot keys: {sorted(extra)}")

        return cls(**kwargs, extra=extra)

    def with_values(self, **changes: Any) -> "FinancialSnapshot":
        """Return a copy with the given fields replaced (validated again)."""
        return replace(self, **changes)

    def amount(self, key: str) -> float:
        return getattr(self, key)

    @property
    def total_assets(self) -> float:
        """Gross value of every asset field, before any methodology rule."""
        return sum(getattr(self, key) for key in ASSET_CLASS_KEYS)


def _numeric_field_names() -> tuple[str, ...]:
    return tuple(sorted(ASSET_CLASS_KEYS | LIABILITY_KEYS | {"interest_earned", "age"}))


def _check_amount(name: str, value: Any) -> float:
    if isinstance(value, bool):
        raise InvalidSnapshotError(f"{name} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidSnapshotError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise InvalidSnapshotError(f"{name} must be finite, got {value!r}")
    if number < 0:
        raise InvalidSnapshotError(f"{name} must not be negative, got {value!r}")
    return number


def _coerce_enum(enum_cls: type[Enum], name: str, value: Any) -> Any:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as e:
        allowed = [m.value for m in enum_cls]
        raise InvalidSnapshotError(f"{name} must be one of {allowed}, got {value!r}") from e


def _coerce_member(member: Any) -> HouseholdMember:
    if isinstance(member, HouseholdMember):
        return member
    if isinstance(member, Mapping):
        try:
            return HouseholdMember(
                id=str(member["id"]),
                name=str(member.get("name", member["id"])),
                relationship=str(member.get("relationship", "other")),
            )
        except KeyError as e:
            raise InvalidSnapshotError(f"Household member is missing {e}") from e
    raise InvalidSnapshotError(f"Invalid household member: {member!r}")
