"""
Numerical Safeguards — Safe Math Primitives

Модуль обеспечивает численную устойчивость всех вычислений над кривыми:
- Clamp значений в пределах ±CLAMP_LIMIT (графики и поиск корней)
- NaN/Inf санитизация для предотвращения распространения невалидных значений
- Знак числа с явным нулём (для поиска смены знака)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. safe() никогда не возвращает NaN/Inf
2. Конечные значения в пределах лимита проходят без изменений
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Максимальная абсолютная величина значения после safe()
# Держит графики и бисекцию в численно разумном диапазоне
CLAMP_LIMIT: Final[float] = 1_000_000.0


# =============================================================================
# NaN/Inf САНИТИЗАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def safe(value: float, limit: float = CLAMP_LIMIT) -> float:
    """
    Санитизация значения кривой.

    - NaN → 0
    - +Inf / значения выше limit → limit
    - -Inf / значения ниже -limit → -limit

    Args:
        value: Исходное значение
        limit: Максимальная абсолютная величина (default: CLAMP_LIMIT)

    Returns:
        Значение в диапазоне [-limit, limit]

    Examples:
        >>> safe(42.0)
        42.0
        >>> safe(float('nan'))
        0.0
        >>> safe(float('inf'))
        1000000.0
        >>> safe(-5e9)
        -1000000.0
    """
    if math.isnan(value):
        return 0.0

    if value > limit:
        return limit

    if value < -limit:
        return -limit

    return value


def sign(value: float) -> int:
    """
    Знак числа: -1, 0 или +1.

    В отличие от math.copysign, ноль имеет собственный знак 0, поэтому
    переход f(x) → 0 считается сменой знака при поиске корней.

    Args:
        value: Число (не NaN)

    Returns:
        -1 если value < 0, 0 если value == 0, +1 если value > 0
    """
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def clamp(
    value: float,
    min_value: float | None = None,
    max_value: float | None = None,
) -> float:
    """
    Ограничение значения в заданном диапазоне.

    Args:
        value: Исходное значение
        min_value: Минимальное допустимое значение (optional)
        max_value: Максимальное допустимое значение (optional)

    Returns:
        Значение, ограниченное диапазоном [min_value, max_value]

    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(-1.0, 0.0, 10.0)
        0.0
    """
    result = value

    if min_value is not None:
        result = max(result, min_value)

    if max_value is not None:
        result = min(result, max_value)

    return result
