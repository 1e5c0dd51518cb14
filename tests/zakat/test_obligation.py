"""Tests for mizan.zakat.obligation."""

import pytest

from mizan.zakat.methodology import RateConfig
from mizan.zakat.models import CalendarType
from mizan.zakat.obligation import calculate_obligation, effective_rate

LUNAR = CalendarType.LUNAR
SOLAR = CalendarType.SOLAR


class TestEffectiveRate:
    def test_lunar(self):
        assert effective_rate(RateConfig(), LUNAR) == 0.025

    def test_solar_scaled_by_year_length(self):
        rate = effective_rate(RateConfig(), SOLAR)
        assert rate == pytest.approx(0.025 * 365 / 354)
        assert rate == pytest.approx(0.02577, abs=1e-5)


class TestCalculateObligation:
    def test_basic(self):
        result = calculate_obligation(100_000, 500, RateConfig(), LUNAR)
        assert result.is_above_nisab is True
        assert result.zakat_due == pytest.approx(2500)

    def test_below_nisab(self):
        result = calculate_obligation(400, 500, RateConfig(), LUNAR)
        assert result.is_above_nisab is False
        assert result.zakat_due == 0

    def test_exactly_at_nisab(self):
        result = calculate_obligation(500, 500, RateConfig(), LUNAR)
        assert result.is_above_nisab is True
        assert result.zakat_due == pytest.approx(12.5)

    def test_override_pool(self):
        rate = RateConfig(overrides={"rental_property_income": 0.10})
        result = calculate_obligation(30_000, 500, rate, LUNAR, {"rental_property_income": 10_000})
        pools = {pool.name: pool for pool in result.pools}
        assert pools["standard"].amount == 20_000
        assert pools["rental_property_income"].due == pytest.approx(1000)
        assert result.zakat_due == pytest.approx(1500)

    def test_override_rate_is_not_solar_scaled(self):
        rate = RateConfig(overrides={"rental_property_income": 0.10})
        result = calculate_obligation(10_000, 0, rate, SOLAR, {"rental_property_income": 10_000})
        assert result.zakat_due == pytest.approx(1000)

    def test_amounts_without_override_are_ignored(self):
        result = calculate_obligation(10_000, 0, RateConfig(), LUNAR, {"cash_on_hand": 10_000})
        assert len(result.pools) == 1
        assert result.zakat_due == pytest.approx(250)
