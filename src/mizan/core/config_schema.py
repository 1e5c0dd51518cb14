"""Pydantic models for config validation.

Call ``Config.validated()`` to obtain a typed ``MizanConfig``. Dict-based
access through ``Config.get`` keeps working unchanged.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class MethodologiesConfig(BaseModel):
    """Where methodology documents come from and which one is the default."""

    default: str = "bradford"
    extra_dirs: list[Path] = []

    @field_validator("extra_dirs", mode="before")
    @classmethod
    def _split_and_expand(cls, v: Any) -> Any:
        # Env overrides arrive as a single os.pathsep-separated string
        if isinstance(v, str):
            v = [p for p in v.split(os.pathsep) if p]
        if isinstance(v, list):
            return [Path(p).expanduser() for p in v]
        return v


class PricesConfig(BaseModel):
    """Fallback metal prices in USD per troy ounce."""

    silver_per_ounce: float = 24.50
    gold_per_ounce: float = 2650.0

    @field_validator("silver_per_ounce", "gold_per_ounce")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"price must be non-negative, got {v}")
        return v


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {v!r}")
        return v


class MizanConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so deployments can add their own sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    methodologies: MethodologiesConfig = MethodologiesConfig()
    prices: PricesConfig = PricesConfig()
    logging: LoggingConfig = LoggingConfig()


