"""
MarketSignal — сигналы рыночной активности для Pricing Engine

Immutable Pydantic модель. Не персистится: собирается вызывающей стороной
(context) на каждый вызов и может быть подключена к реальной телеметрии
без изменений в pricing math.

current_holders в модель не входит: берётся из balance аккаунта в момент
вызова.
"""

from typing import Final

from pydantic import BaseModel, Field

# =============================================================================
# DEFAULTS (reference значения)
# =============================================================================

DEFAULT_CURRENT_VOLUME: Final[float] = 10.0
DEFAULT_AVERAGE_VOLUME: Final[float] = 7.0
DEFAULT_TIME_SINCE_LAST_TRADE: Final[float] = 1.0


class MarketSignal(BaseModel):
    """
    Снапшот рыночной активности.

    average_volume строго положительный: деление current_volume /
    average_volume в pricing защищено на уровне модели.
    """

    current_volume: float = Field(
        default=DEFAULT_CURRENT_VOLUME,
        ge=0,
        allow_inf_nan=False,
        description="Текущий объём торгов",
    )
    average_volume: float = Field(
        default=DEFAULT_AVERAGE_VOLUME,
        gt=0,
        allow_inf_nan=False,
        description="Средний объём торгов",
    )
    time_since_last_trade: float = Field(
        default=DEFAULT_TIME_SINCE_LAST_TRADE,
        ge=0,
        allow_inf_nan=False,
        description="Время с последней сделки (часы)",
    )

    model_config = {"frozen": True}
