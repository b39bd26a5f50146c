"""
Pricing Engine — Dual-Phase Share Pricing

Детерминированная цена одной share на основе количества holders и
сигналов рыночной активности (volume, recency).

Два этапа:
1. Base price из holders (двухтировая кривая):
   - holders <= 10: base = 0.1 * holders        (медленный линейный рост)
   - holders > 10:  base = (holders - 10) + 1.0  (slope = 1)
   holders=10 → 1.0, holders=11 → 2.0: излом кривой воспроизводится как есть.

2. Dual-phase adjustment (только buy path):
   - time_since_last_trade > 24.0 → inactivity discount: base * (1 - 0.005)
   - иначе                        → volume premium:     base * (1 + 0.01 * volume_ratio)
   volume_ratio = current_volume / average_volume
   Фазы взаимоисключающие, blending отсутствует.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Константы — фиксированная policy, не конфигурация
2. Нет side effects, нет состояния
3. average_volume == 0 → ValueError (а не ZeroDivisionError / Inf)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable

from src.core.domain.market_signal import MarketSignal

# =============================================================================
# POLICY-ПАРАМЕТРЫ
# =============================================================================

# Порог первого тира кривой (включительно)
BASE_PRICE_TIER_HOLDERS: Final[int] = 10

# Наклон первого тира
BASE_PRICE_LINEAR_SLOPE: Final[float] = 0.1

# Премия за объём на единицу volume_ratio
VOLUME_ADJUSTMENT_FACTOR: Final[float] = 0.01

# Скидка за неактивность
INACTIVITY_ADJUSTMENT_FACTOR: Final[float] = 0.005

# Порог неактивности (в единицах time_since_last_trade, часы по умолчанию)
INACTIVITY_THRESHOLD: Final[float] = 24.0


# =============================================================================
# ТИПЫ
# =============================================================================


class PricingPhase(str, Enum):
    """Активная фаза dual-phase pricing."""

    VOLUME_PREMIUM = "VOLUME_PREMIUM"
    INACTIVITY_DISCOUNT = "INACTIVITY_DISCOUNT"


@dataclass(frozen=True)
class PricePoint:
    """Точка на ценовой кривой."""

    holders: int
    base_price: float
    price: float
    phase: PricingPhase


# =============================================================================
# BASE PRICE
# =============================================================================


def base_price_from_holders(holders: int) -> float:
    """
    Base price одной share по количеству holders.

    Args:
        holders: Количество holders (неотрицательное целое)

    Returns:
        Base price (неотрицательный)

    Raises:
        ValueError: Если holders < 0

    Examples:
        >>> base_price_from_holders(5)
        0.5
        >>> base_price_from_holders(10)
        1.0
        >>> base_price_from_holders(11)
        2.0
    """
    if holders < 0:
        raise ValueError(f"holders cannot be negative, got {holders}")

    if holders <= BASE_PRICE_TIER_HOLDERS:
        return BASE_PRICE_LINEAR_SLOPE * holders

    return (float(holders) - BASE_PRICE_TIER_HOLDERS) + 1.0


# =============================================================================
# DUAL-PHASE PRICING
# =============================================================================


def pricing_phase(time_since_last_trade: float) -> PricingPhase:
    """Фаза для заданной давности последней сделки (строго > порога → discount)."""
    if time_since_last_trade > INACTIVITY_THRESHOLD:
        return PricingPhase.INACTIVITY_DISCOUNT
    return PricingPhase.VOLUME_PREMIUM


def dual_phase_pricing(
    holders: int,
    current_volume: float,
    average_volume: float,
    time_since_last_trade: float,
) -> float:
    """
    Цена одной share с dual-phase adjustment.

    Args:
        holders: Количество holders
        current_volume: Текущий объём торгов
        average_volume: Средний объём торгов (!= 0)
        time_since_last_trade: Время с последней сделки (часы)

    Returns:
        Цена одной share

    Raises:
        ValueError: Если average_volume == 0 или holders < 0
    """
    if average_volume == 0:
        raise ValueError("average_volume must be non-zero for volume_ratio")

    base_price = base_price_from_holders(holders)
    volume_ratio = current_volume / average_volume

    if pricing_phase(time_since_last_trade) is PricingPhase.INACTIVITY_DISCOUNT:
        return base_price * (1.0 - INACTIVITY_ADJUSTMENT_FACTOR)

    return base_price * (1.0 + VOLUME_ADJUSTMENT_FACTOR * volume_ratio)


def price(holders: int, signal: MarketSignal) -> float:
    """
    Публичный контракт Pricing Engine: цена одной share под market signal.

    Args:
        holders: Количество holders
        signal: Сигналы рыночной активности

    Returns:
        Цена одной share (buy path)
    """
    return dual_phase_pricing(
        holders,
        signal.current_volume,
        signal.average_volume,
        signal.time_since_last_trade,
    )


def price_path(holder_counts: Iterable[int], signal: MarketSignal) -> list[PricePoint]:
    """
    Ценовая кривая для последовательности holder counts под одним signal.

    Используется для симуляции pump/dump сценариев: одна фаза рынка
    (signal) и меняющееся количество holders.

    Args:
        holder_counts: Последовательность количеств holders
        signal: Сигналы рыночной активности

    Returns:
        Список PricePoint в порядке holder_counts
    """
    phase = pricing_phase(signal.time_since_last_trade)
    points = []
    for holders in holder_counts:
        points.append(
            PricePoint(
                holders=holders,
                base_price=base_price_from_holders(holders),
                price=price(holders, signal),
                phase=phase,
            )
        )
    return points
