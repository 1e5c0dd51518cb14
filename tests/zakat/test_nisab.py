"""Tests for mizan.zakat.nisab."""

import math

import pytest

from mizan.core.exceptions import InvalidPriceError
from mizan.zakat.models import NisabStandard
from mizan.zakat.nisab import (
    GRAMS_PER_OUNCE,
    NisabStatus,
    calculate_nisab,
    nisab_status,
    validate_price,
)


class TestCalculateNisab:
    def test_silver_standard(self):
        threshold = calculate_nisab(24.50, 2650.0, NisabStandard.SILVER)
        assert threshold == pytest.approx(595 / GRAMS_PER_OUNCE * 24.50)
        assert threshold == pytest.approx(468.68, abs=0.01)

    def test_gold_standard(self):
        threshold = calculate_nisab(24.50, 2650.0, NisabStandard.GOLD)
        assert threshold == pytest.approx(7241.95, abs=0.01)

    def test_silver_is_default(self):
        assert calculate_nisab(24.50, 2650.0) == calculate_nisab(24.50, 2650.0, NisabStandard.SILVER)

    def test_custom_weights(self):
        threshold = calculate_nisab(30.0, 2000.0, NisabStandard.GOLD, gold_grams=GRAMS_PER_OUNCE)
        assert threshold == pytest.approx(2000.0)

    def test_zero_price_gives_zero(self):
        assert calculate_nisab(0.0, 2650.0, NisabStandard.SILVER) == 0.0


class TestValidatePrice:
    @pytest.mark.parametrize("price", [None, -1.0, math.nan, math.inf, "abc", True])
    def test_rejected(self, price):
        with pytest.raises(InvalidPriceError):
            validate_price("silver_price", price)

    def test_accepts_zero_and_numeric_strings(self):
        assert validate_price("gold_price", 0) == 0.0
        assert validate_price("gold_price", "2650.5") == 2650.5


class TestNisabStatus:
    def test_above(self):
        result = nisab_status(1000, 500)
        assert result.status == NisabStatus.ABOVE
        assert result.ratio == 2.0

    def test_near(self):
        assert nisab_status(460, 500).status == NisabStatus.NEAR

    def test_below(self):
        assert nisab_status(100, 500).status == NisabStatus.BELOW

    def test_exactly_at_threshold_is_above(self):
        assert nisab_status(500, 500).status == NisabStatus.ABOVE

    def test_zero_threshold(self):
        assert nisab_status(10, 0).status == NisabStatus.ABOVE
