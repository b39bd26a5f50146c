"""
Numerical Safeguards — Safe Math Primitives для ценообразования shares

Модуль обеспечивает численную устойчивость расчётов Pricing Engine:
- Проверка float на NaN/Inf
- Epsilon-сравнения float с учётом машинной точности
- Truncation цены в целые settlement units (floor, не округление)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в settlement amount
2. Settlement amount всегда целое неотрицательное число
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для сравнения float (относительная толерантность)
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9

# Epsilon для сравнения float (абсолютная толерантность)
EPS_FLOAT_COMPARE_ABS: Final[float] = 1e-12

# Максимальное значение u64 (balance, amount, settlement units)
U64_MAX: Final[int] = 2**64 - 1


# =============================================================================
# NaN/Inf
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, что значение является конечным числом (не NaN и не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное
    """
    return math.isfinite(value)


# =============================================================================
# EPSILON-СРАВНЕНИЯ
# =============================================================================


def is_close(
    a: float,
    b: float,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
    abs_tol: float = EPS_FLOAT_COMPARE_ABS,
) -> bool:
    """
    Сравнение float с относительной и абсолютной толерантностью.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность
        abs_tol: Абсолютная толерантность

    Returns:
        True если значения равны в пределах толерантности

    Examples:
        >>> is_close(0.1 + 0.2, 0.3)
        True
    """
    if not is_valid_float(a) or not is_valid_float(b):
        return False
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


# =============================================================================
# SETTLEMENT UNITS
# =============================================================================


def truncate_to_units(value: float) -> int:
    """
    Перевод цены (float) в целые settlement units с отбрасыванием дробной части.

    Поведение совпадает с приведением float → u64: дробная часть отбрасывается
    (floor для неотрицательных значений), округление НЕ выполняется.
    Значения больше U64_MAX насыщаются до U64_MAX.

    Args:
        value: Неотрицательная сумма в дробных единицах

    Returns:
        Целое количество settlement units в [0, U64_MAX]

    Raises:
        ValueError: Если value NaN/Inf или отрицательное

    Examples:
        >>> truncate_to_units(2.99)
        2
        >>> truncate_to_units(0.4975)
        0
    """
    if not is_valid_float(value):
        raise ValueError(f"Settlement value must be finite, got {value}")
    if value < 0:
        raise ValueError(f"Settlement value cannot be negative: {value}")

    return min(math.floor(value), U64_MAX)

