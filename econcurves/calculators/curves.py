"""
Curves — общие операции калькуляторов

Каждый калькулятор строит производные функции (спрос со сдвигом, MC, MR, ...)
и прогоняет их через одни и те же шаги:
- сэмплирование кривой на сетке → tuple[ChartPoint, ...]
- поиск точки (равновесие/оптимум) через find_root → float | None
- площадь между кривыми через integrate (излишки, чистые потери)
"""

import math
from typing import Final, Iterator, Optional

from econcurves.core.domain.chart import AreaSamplePoint, ChartPoint
from econcurves.core.math import Function, find_root, integrate, safe

# Количество сэмплов закрашиваемой области
AREA_SAMPLE_STEPS: Final[int] = 80

# Количества ближе этого порога считаются совпадающими (площадь = 0)
QUANTITY_MATCH_TOLERANCE: Final[float] = 1e-3

# Интервал короче этого порога не даёт области
AREA_MIN_RANGE: Final[float] = 1e-6


# =============================================================================
# СЭМПЛИРОВАНИЕ
# =============================================================================


def sample_curve(f: Function, count: int, step: float = 1.0) -> tuple[ChartPoint, ...]:
    """Кривая на сетке q = i·step, i = 0..count-1."""
    return tuple(ChartPoint(i * step, safe(f(i * step))) for i in range(count))


def sample_linspace(f: Function, count: int, end: float) -> tuple[ChartPoint, ...]:
    """
    Кривая из count равноотстоящих точек на [0, end].

    Raises:
        ValueError: Если count < 2
    """
    if count < 2:
        raise ValueError(f"count must be at least 2, got {count}")

    step = end / (count - 1)
    return sample_curve(f, count, step)


def sample_range(start: float, end: float, step: float) -> Iterator[float]:
    """
    Точки start, start+step, ... не превосходящие end.

    Raises:
        ValueError: Если step <= 0
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    value = start
    while value <= end:
        yield value
        value += step


def build_area_samples(
    start: float,
    end: float,
    base: Function,
    top: Function,
    steps: int = AREA_SAMPLE_STEPS,
) -> tuple[AreaSamplePoint, ...]:
    """
    Сэмплы области между base (снизу) и top (сверху) на [start, end].

    Границы можно передавать в любом порядке. Смещение не бывает
    отрицательным. Вырожденный интервал → пустой кортеж.
    """
    if math.isnan(start) or math.isnan(end) or abs(end - start) < AREA_MIN_RANGE:
        return ()

    if end < start:
        start, end = end, start

    samples = []
    for i in range(steps):
        t = 0.0 if steps == 1 else i / (steps - 1)
        q = start + (end - start) * t
        base_value = safe(base(q))
        top_value = safe(top(q))
        samples.append(AreaSamplePoint(q, base_value, max(0.0, top_value - base_value)))

    return tuple(samples)


# =============================================================================
# ТОЧКИ И ПЛОЩАДИ
# =============================================================================


def locate_root(f: Function, low: float, high: float) -> Optional[float]:
    """find_root на [low, high]; None вместо NaN."""
    root = find_root(f, low, high)
    if math.isnan(root):
        return None
    return root


def positive_gap_area(upper: Function, lower: Function, start: float, end: float) -> float:
    """∫ max(0, upper - lower) на [start, end]."""
    return integrate(lambda q: max(0.0, upper(q) - lower(q)), start, end)


def gap_area(
    upper: Function,
    lower: Function,
    start: float,
    end: float,
    tolerance: float = QUANTITY_MATCH_TOLERANCE,
) -> float:
    """
    Площадь треугольника чистых потерь между двумя количествами.

    |∫ max(0, upper - lower)| между start и end (в любом порядке);
    0 если количества совпадают в пределах tolerance.
    """
    if abs(start - end) <= tolerance:
        return 0.0
    return abs(positive_gap_area(upper, lower, start, end))
