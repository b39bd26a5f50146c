"""
Core math modules для share ledger

Математические примитивы и Pricing Engine с гарантией детерминизма.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_ABS,
    EPS_FLOAT_COMPARE_REL,
    U64_MAX,
    is_close,
    is_valid_float,
    truncate_to_units,
)

# Pricing Engine
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

__all__ = [
    # Numerical Safeguards — Constants
    "EPS_FLOAT_COMPARE_ABS",
    "EPS_FLOAT_COMPARE_REL",
    "U64_MAX",
    # Numerical Safeguards — Functions
    "is_close",
    "is_valid_float",
    "truncate_to_units",
    # Pricing — Constants
    "BASE_PRICE_LINEAR_SLOPE",
    "BASE_PRICE_TIER_HOLDERS",
    "INACTIVITY_ADJUSTMENT_FACTOR",
    "INACTIVITY_THRESHOLD",
    "VOLUME_ADJUSTMENT_FACTOR",
    # Pricing — Types
    "PricePoint",
    "PricingPhase",
    # Pricing — Functions
    "base_price_from_holders",
    "dual_phase_pricing",
    "price",
    "price_path",
    "pricing_phase",
]
