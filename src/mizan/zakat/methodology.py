"""
Methodology documents: the declarative rulings of one scholarly tradition.

A methodology is pure data. It says, per asset class, which treatment applies
and with what parameters, how liabilities are deducted, which nisab standard
is the default, and what rate applies. The classifier, liability adjuster and
obligation calculator interpret it; nothing here computes money.

Treatments are a closed tagged union keyed by ``kind``. YAML documents may use
the bare kind as shorthand for parameterless rules::

    assets:
      checking_accounts: full
      primary_residence_value: exempt
      passive_investments_value: {kind: proportional, rate: 0.30}
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationError,
    field_serializer,
    field_validator,
    model_validator,
)

from mizan.core.exceptions import IncompleteMethodologyError, MethodologyValidationError

from .catalog import ASSET_CLASS_KEYS, LIABILITY_KEYS
from .models import NisabStandard

# Age at which US retirement accounts can be tapped without penalty
PENALTY_FREE_AGE = 59.5


class _Rule(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# frozen=True only blocks attribute assignment; mapping fields need a read-only view too
def _frozen(v: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(v))


def _dump_mapping(v: Mapping[str, Any], handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(v))


class FullTreatment(_Rule):
    """Entire value is zakatable."""

    kind: Literal["full"] = "full"


class ExemptTreatment(_Rule):
    kind: Literal["exempt"] = "exempt"


class ProportionalTreatment(_Rule):
    """A fixed share of the value is zakatable (e.g. 30% of a passive fund)."""

    kind: Literal["proportional"] = "proportional"
    rate: float = Field(ge=0.0, le=1.0)


class DeferredUponAccessTreatment(_Rule):
    """Nothing is due while locked; withdrawn amounts are reported separately."""

    kind: Literal["deferred_upon_access"] = "deferred_upon_access"


class ConditionalAgeTreatment(_Rule):
    """Exempt below ``threshold``; at or above it, ``fallback`` applies."""

    kind: Literal["conditional_age"] = "conditional_age"
    threshold: float = Field(ge=0.0)
    fallback: Treatment

    @field_validator("fallback", mode="before")
    @classmethod
    def _expand_fallback(cls, v: Any) -> Any:
        return _expand_shorthand(v)


class NetAccessibleTreatment(_Rule):
    """Value net of early-withdrawal penalty and income tax.

    ``tax_source`` picks the tax rate: the household's own estimate
    (``user_input``) or the document's ``flat_tax_rate``.
    """

    kind: Literal["net_accessible"] = "net_accessible"
    penalty_rate: float = Field(default=0.10, ge=0.0, le=1.0)
    tax_source: Literal["user_input", "flat_rate"] = "user_input"
    flat_tax_rate: float = Field(default=0.30, ge=0.0, le=1.0)
    penalty_free_age: float = Field(default=PENALTY_FREE_AGE, ge=0.0)


class NetOfPurificationTreatment(_Rule):
    """Value less the share the household will give away to purify it."""

    kind: Literal["net_of_purification"] = "net_of_purification"


Treatment = Annotated[
    Union[
        FullTreatment,
        ExemptTreatment,
        ProportionalTreatment,
        DeferredUponAccessTreatment,
        ConditionalAgeTreatment,
        NetAccessibleTreatment,
        NetOfPurificationTreatment,
    ],
    Field(discriminator="kind"),
]

ConditionalAgeTreatment.model_rebuild()


def _expand_shorthand(v: Any) -> Any:
    if isinstance(v, str):
        return {"kind": v}
    return v


# --- Liabilities ---


class NoDeduction(_Rule):
    kind: Literal["none"] = "none"


class FullDeduction(_Rule):
    """Deduct everything; monthly fields count for a whole year."""

    kind: Literal["full"] = "full"


class TrailingMonthsDeduction(_Rule):
    """Deduct ``months`` of each monthly field plus lump sums in full."""

    kind: Literal["trailing_months"] = "trailing_months"
    months: int = Field(ge=1, le=12)


LiabilityRule = Annotated[
    Union[NoDeduction, FullDeduction, TrailingMonthsDeduction],
    Field(discriminator="kind"),
]


class LiabilityPolicy(_Rule):
    policy: LiabilityRule = NoDeduction()
    overrides: Mapping[str, LiabilityRule] = Field(default_factory=dict, validate_default=True)

    @field_validator("policy", mode="before")
    @classmethod
    def _expand_policy(cls, v: Any) -> Any:
        return _expand_shorthand(v)

    @field_validator("overrides", mode="before")
    @classmethod
    def _expand_overrides(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {k: _expand_shorthand(rule) for k, rule in v.items()}
        return v

    @field_validator("overrides")
    @classmethod
    def _known_fields(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        unknown = sorted(set(v) - LIABILITY_KEYS)
        if unknown:
            raise ValueError(f"unknown liability fields in overrides: {unknown}")
        return _frozen(v)

    @field_serializer("overrides", mode="wrap")
    def _dump_overrides(self, v: Mapping[str, Any], handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_mapping(v, handler)

    def rule_for(self, key: str) -> NoDeduction | FullDeduction | TrailingMonthsDeduction:
        return self.overrides.get(key, self.policy)


# --- Thresholds and rate ---


class NisabThresholds(_Rule):
    default_standard: NisabStandard = NisabStandard.SILVER
    gold_grams: float = Field(default=85.0, gt=0.0)
    silver_grams: float = Field(default=595.0, gt=0.0)


class Thresholds(_Rule):
    nisab: NisabThresholds = NisabThresholds()


class RateConfig(_Rule):
    """Zakat rate for a lunar year, with per-class overrides.

    A solar hawl is ``solar_year_days / lunar_year_days`` longer, so the
    standard rate is scaled by that factor. Override rates are fixed.
    """

    base: float = Field(default=0.025, gt=0.0, le=1.0)
    overrides: Mapping[str, float] = Field(default_factory=dict, validate_default=True)
    lunar_year_days: float = Field(default=354.0, gt=0.0)
    solar_year_days: float = Field(default=365.0, gt=0.0)

    @field_validator("overrides")
    @classmethod
    def _override_range(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        for key, rate in v.items():
            if not 0.0 <= rate <= 1.0:
                raise ValueError(f"override rate for {key} must be between 0 and 1, got {rate}")
        return _frozen(v)

    @field_serializer("overrides", mode="wrap")
    def _dump_overrides(self, v: Mapping[str, float], handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_mapping(v, handler)

    @property
    def solar_factor(self) -> float:
        return self.solar_year_days / self.lunar_year_days


class Reference(_Rule):
    authority: str
    url: str | None = None


class MethodologyMeta(_Rule):
    id: str = Field(pattern=r"^[a-z][a-z0-9_]*$")
    name: str
    version: str = "1.0.0"
    description: str = ""
    author: str = ""
    ui_label: str | None = None
    reference: Reference | None = None


class MethodologyConfig(_Rule):
    """A complete, validated methodology document."""

    meta: MethodologyMeta
    assets: Mapping[str, Treatment]
    liabilities: LiabilityPolicy = Field(default_factory=LiabilityPolicy)
    thresholds: Thresholds = Thresholds()
    rate: RateConfig = Field(default_factory=RateConfig)

    @field_validator("assets", mode="before")
    @classmethod
    def _expand_assets(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return {k: _expand_shorthand(rule) for k, rule in v.items()}
        return v

    @field_validator("assets")
    @classmethod
    def _freeze_assets(cls, v: Mapping[str, Any]) -> Mapping[str, Any]:
        return _frozen(v)

    @field_serializer("assets", mode="wrap")
    def _dump_assets(self, v: Mapping[str, Any], handler: SerializerFunctionWrapHandler) -> Any:
        return _dump_mapping(v, handler)

    @model_validator(mode="after")
    def _covers_catalog(self) -> MethodologyConfig:
        missing = ASSET_CLASS_KEYS - set(self.assets)
        unknown = (set(self.assets) | set(self.rate.overrides)) - ASSET_CLASS_KEYS
        if missing or unknown:
            # Not a ValueError, so pydantic lets it through unwrapped
            raise IncompleteMethodologyError(self.meta.id, missing=list(missing), unknown=list(unknown))
        return self

    @property
    def id(self) -> str:
        return self.meta.id

    def treatment_for(self, asset_class: str) -> Treatment:
        return self.assets[asset_class]

    @classmethod
    def from_document(cls, data: Any, source: str = "<memory>") -> MethodologyConfig:
        """Validate a parsed YAML/JSON document, raising mizan exceptions."""
        if not isinstance(data, dict):
            raise MethodologyValidationError(f"{source}: methodology document must be a mapping")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MethodologyValidationError(f"{source}: invalid methodology document\n{e}") from e
