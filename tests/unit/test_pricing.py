"""
Тесты для Pricing Engine — Dual-Phase Share Pricing

Проверяемые инварианты:
1. Base price: 0.1 * holders до 10 holders, (holders - 10) + 1.0 после
2. Излом кривой на границе 10/11 воспроизводится точно
3. Inactivity discount строго при time_since_last_trade > 24.0
4. Volume premium при time_since_last_trade <= 24.0
5. average_volume == 0 → ValueError
6. Детерминизм
"""

import pytest

from src.core.domain.market_signal import MarketSignal
from src.core.math.numerical_safeguards import is_close
from src.core.math.pricing import (
    BASE_PRICE_LINEAR_SLOPE,
    BASE_PRICE_TIER_HOLDERS,
    INACTIVITY_ADJUSTMENT_FACTOR,
    INACTIVITY_THRESHOLD,
    VOLUME_ADJUSTMENT_FACTOR,
    PricePoint,
    PricingPhase,
    base_price_from_holders,
    dual_phase_pricing,
    price,
    price_path,
    pricing_phase,
)


# =============================================================================
# ТЕСТЫ: Policy-константы
# =============================================================================


class TestPolicyConstants:
    """Константы совпадают с reference значениями."""

    def test_literal_values(self):
        assert VOLUME_ADJUSTMENT_FACTOR == 0.01
        assert INACTIVITY_ADJUSTMENT_FACTOR == 0.005
        assert INACTIVITY_THRESHOLD == 24.0
        assert BASE_PRICE_TIER_HOLDERS == 10
        assert BASE_PRICE_LINEAR_SLOPE == 0.1


# =============================================================================
# ТЕСТЫ: Base price
# =============================================================================


class TestBasePriceFromHolders:
    """Тесты base_price_from_holders: двухтировая кривая."""

    @pytest.mark.parametrize("holders", range(0, 11))
    def test_linear_tier(self, holders):
        """holders <= 10 → 0.1 * holders."""
        assert base_price_from_holders(holders) == 0.1 * holders

    @pytest.mark.parametrize("holders", [11, 12, 15, 50, 100, 10_000])
    def test_slope_one_tier(self, holders):
        """holders > 10 → (holders - 10) + 1.0."""
        assert base_price_from_holders(holders) == (holders - 10) + 1.0

    def test_boundary_exact(self):
        """Граница: 10 → 1.0, 11 → 2.0 (излом не сглаживается)."""
        assert base_price_from_holders(10) == 1.0
        assert base_price_from_holders(11) == 2.0

    def test_zero_holders_free(self):
        assert base_price_from_holders(0) == 0.0

    def test_fifteen_holders(self):
        assert base_price_from_holders(15) == 6.0

    def test_negative_holders_rejected(self):
        with pytest.raises(ValueError, match="cannot be negative"):
            base_price_from_holders(-1)

    def test_monotonic(self):
        """Кривая неубывающая."""
        prices = [base_price_from_holders(h) for h in range(0, 200)]
        assert all(a <= b for a, b in zip(prices, prices[1:]))


# =============================================================================
# ТЕСТЫ: Dual-phase pricing
# =============================================================================


class TestDualPhasePricing:
    """Тесты dual_phase_pricing: volume premium vs inactivity discount."""

    def test_scenario_volume_premium_low_holders(self):
        """holders=5, volume=10, avg=7, t=1 → 0.5 * (1 + 0.01 * 10/7)."""
        base_price = base_price_from_holders(5)
        volume_ratio = 10.0 / 7.0
        expected = base_price * (1.0 + 0.01 * volume_ratio)

        result = dual_phase_pricing(5, 10.0, 7.0, 1.0)

        assert result == expected
        assert result == pytest.approx(0.50714286, abs=1e-8)

    def test_scenario_inactivity_discount(self):
        """Те же параметры, t=25 → 0.5 * 0.995 = 0.4975."""
        result = dual_phase_pricing(5, 10.0, 7.0, 25.0)

        assert result == base_price_from_holders(5) * (1.0 - 0.005)
        assert result == pytest.approx(0.4975)

    def test_scenario_high_holders(self):
        """holders=15 → base 6.0, результат ≈ 6.0857143."""
        result = dual_phase_pricing(15, 10.0, 7.0, 1.0)

        assert result == 6.0 * (1.0 + 0.01 * (10.0 / 7.0))
        assert result == pytest.approx(6.0857143, abs=1e-7)

    def test_scenario_exact_tier_boundary(self):
        """holders=10 → base 1.0 с volume premium."""
        result = dual_phase_pricing(10, 10.0, 7.0, 1.0)
        assert result == 1.0 * (1.0 + 0.01 * (10.0 / 7.0))

    @pytest.mark.parametrize("t", [24.0000001, 25.0, 48.0, 1e6])
    @pytest.mark.parametrize("holders", [0, 3, 10, 11, 42])
    def test_inactivity_branch(self, holders, t):
        """t > 24.0 → base * 0.995 независимо от volume."""
        result = dual_phase_pricing(holders, 1000.0, 7.0, t)
        assert is_close(result, base_price_from_holders(holders) * 0.995)

    @pytest.mark.parametrize("t", [0.0, 1.0, 12.0, 24.0])
    @pytest.mark.parametrize("holders", [0, 3, 10, 11, 42])
    def test_volume_branch(self, holders, t):
        """t <= 24.0 → base * (1 + 0.01 * v/a)."""
        v, a = 5.0, 7.0
        result = dual_phase_pricing(holders, v, a, t)
        assert is_close(result, base_price_from_holders(holders) * (1 + 0.01 * v / a))

    def test_threshold_inclusive_for_premium(self):
        """Ровно 24.0 — ещё volume premium."""
        assert pricing_phase(24.0) is PricingPhase.VOLUME_PREMIUM
        assert pricing_phase(24.0 + 1e-9) is PricingPhase.INACTIVITY_DISCOUNT

    def test_no_blending_between_phases(self):
        """Фазы не смешиваются: скачок на пороге."""
        before = dual_phase_pricing(20, 70.0, 7.0, 24.0)
        after = dual_phase_pricing(20, 70.0, 7.0, 24.5)
        assert before == pytest.approx(11.0 * 1.1)
        assert after == pytest.approx(11.0 * 0.995)

    def test_zero_average_volume_rejected(self):
        with pytest.raises(ValueError, match="average_volume"):
            dual_phase_pricing(5, 10.0, 0.0, 1.0)

    def test_zero_average_volume_rejected_even_when_inactive(self):
        with pytest.raises(ValueError, match="average_volume"):
            dual_phase_pricing(5, 10.0, 0.0, 48.0)

    def test_deterministic(self):
        results = {dual_phase_pricing(13, 9.5, 7.25, 3.0) for _ in range(100)}
        assert len(results) == 1


# =============================================================================
# ТЕСТЫ: price(holders, signal)
# =============================================================================


class TestPriceWithSignal:
    """Публичный контракт price() поверх MarketSignal."""

    def test_default_signal_matches_reference_defaults(self):
        """Default signal = (10.0, 7.0, 1.0)."""
        assert price(5, MarketSignal()) == dual_phase_pricing(5, 10.0, 7.0, 1.0)

    def test_custom_signal(self):
        signal = MarketSignal(current_volume=14.0, average_volume=7.0, time_since_last_trade=2.0)
        assert price(11, signal) == pytest.approx(2.0 * 1.02)

    def test_inactive_signal(self):
        signal = MarketSignal(time_since_last_trade=30.0)
        assert price(15, signal) == pytest.approx(6.0 * 0.995)


# =============================================================================
# ТЕСТЫ: price_path (pump / dump)
# =============================================================================


class TestPricePath:
    """Симуляция ценовой кривой по последовательности holders."""

    def test_pump_phase(self):
        """Pump: растущее число holders, активный рынок."""
        signal = MarketSignal(current_volume=10.0, average_volume=7.0, time_since_last_trade=1.0)

        points = price_path([1, 10, 100, 10_000], signal)

        assert [p.holders for p in points] == [1, 10, 100, 10_000]
        assert all(p.phase is PricingPhase.VOLUME_PREMIUM for p in points)
        assert [p.base_price for p in points] == pytest.approx([0.1, 1.0, 91.0, 9991.0])
        prices = [p.price for p in points]
        assert prices == sorted(prices)

    def test_dump_phase(self):
        """Dump: падающее число holders, пониженный объём."""
        signal = MarketSignal(current_volume=5.0, average_volume=7.0, time_since_last_trade=12.0)

        points = price_path([50, 80, 30, 20], signal)

        for point in points:
            assert point.price == pytest.approx(point.base_price * (1 + 0.01 * 5.0 / 7.0))
        assert points[1].price > points[0].price > points[2].price > points[3].price

    def test_inactive_phase_marked(self):
        points = price_path([5], MarketSignal(time_since_last_trade=25.0))
        assert points == [
            PricePoint(
                holders=5,
                base_price=0.5,
                price=points[0].price,
                phase=PricingPhase.INACTIVITY_DISCOUNT,
            )
        ]
        assert points[0].price == pytest.approx(0.4975)

    def test_empty_path(self):
        assert price_path([], MarketSignal()) == []

    def test_negative_holders_rejected(self):
        with pytest.raises(ValueError):
            price_path([3, -1], MarketSignal())
