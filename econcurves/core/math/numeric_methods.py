"""
Numeric Methods — производная, интеграл, поиск корней

Чистые функции над callable f(x) -> float:
- evaluate_safe: защищённое вычисление (исключения → NaN, значения → safe)
- derivative: центральная разность
- integrate: составная формула трапеций с пропуском NaN-отрезков
- find_root: гибридная бисекция с поиском брекета сэмплированием
- find_roots: все корни на отрезке (сканирование + бисекция каждого брекета)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ни одна функция не пробрасывает арифметические ошибки f
2. Количество итераций/сэмплов фиксировано — время выполнения ограничено
3. Нет разделяемого состояния — безопасно для параллельного вызова
"""

import math
from typing import Callable, Final

from econcurves.core.math.numerical_safeguards import safe, sign

Function = Callable[[float], float]

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Шаг центральной разности
DERIVATIVE_STEP: Final[float] = 1e-4

# Количество отрезков формулы трапеций
INTEGRATION_STEPS: Final[int] = 400

# Интервал короче этого порога считается вырожденным (интеграл = 0)
INTEGRATION_MIN_RANGE: Final[float] = 1e-6

# Интервал поиска корня по умолчанию
ROOT_SEARCH_LOW: Final[float] = 0.0
ROOT_SEARCH_HIGH: Final[float] = 1000.0

# Точность по |f(mid)| и лимит итераций бисекции
ROOT_TOLERANCE: Final[float] = 1e-4
ROOT_MAX_ITERATIONS: Final[int] = 100

# Количество сэмплов при поиске брекета
ROOT_SCAN_SAMPLES: Final[int] = 400

# find_roots: |f(low)| ниже порога → low считается корнем
ROOTS_EDGE_TOLERANCE: Final[float] = 1e-3

# find_roots: корни ближе этого расстояния склеиваются
ROOTS_DEDUP_DISTANCE: Final[float] = 1e-2


# =============================================================================
# ЗАЩИЩЁННОЕ ВЫЧИСЛЕНИЕ
# =============================================================================


def evaluate_safe(f: Function, x: float) -> float:
    """
    Вычисление f(x) с санитизацией результата.

    Ошибка вычисления (переполнение, деление на ноль, выход из области
    определения) превращается в NaN, а не пробрасывается. Любое успешно
    вычисленное значение проходит через safe(), поэтому NaN на выходе
    означает именно ошибку вычисления.

    Args:
        f: Функция одной переменной
        x: Точка вычисления

    Returns:
        safe(f(x)) или NaN при ошибке
    """
    try:
        return safe(f(x))
    except (ArithmeticError, ValueError):
        return math.nan


def derivative(f: Function, x: float, h: float = DERIVATIVE_STEP) -> float:
    """
    Центральная разность: (f(x+h) - f(x-h)) / (2h).

    Args:
        f: Функция одной переменной
        x: Точка
        h: Шаг (default: DERIVATIVE_STEP)

    Returns:
        Оценка f'(x) или NaN, если один из сэмплов невалиден

    Examples:
        >>> round(derivative(lambda q: q * q, 5.0), 6)
        10.0
    """
    forward = evaluate_safe(f, x + h)
    backward = evaluate_safe(f, x - h)
    if math.isnan(forward) or math.isnan(backward):
        return math.nan

    return safe((forward - backward) / (2 * h))


def integrate(
    f: Function,
    start: float,
    end: float,
    steps: int = INTEGRATION_STEPS,
) -> float:
    """
    Составная формула трапеций на [start, end].

    Отрезок, у которого хотя бы один конец невалиден (NaN), пропускается
    и не портит всю сумму.

    Args:
        f: Подынтегральная функция
        start: Начало интервала
        end: Конец интервала (может быть меньше start — знак интеграла меняется)
        steps: Количество отрезков

    Returns:
        safe(сумма) или 0, если длина интервала меньше INTEGRATION_MIN_RANGE

    Raises:
        ValueError: Если steps <= 0
    """
    if steps <= 0:
        raise ValueError(f"steps must be positive, got {steps}")

    span = end - start
    if abs(span) < INTEGRATION_MIN_RANGE:
        return 0.0

    step = span / steps
    total = 0.0
    previous = evaluate_safe(f, start)
    for i in range(1, steps + 1):
        current = evaluate_safe(f, start + i * step)
        if not (math.isnan(previous) or math.isnan(current)):
            total += (previous + current) * 0.5 * step
        previous = current

    return safe(total)


# =============================================================================
# ПОИСК КОРНЕЙ
# =============================================================================


def _scan_for_bracket(
    f: Function,
    low: float,
    high: float,
    samples: int,
) -> tuple[float, tuple[float, float] | None]:
    """
    Равномерное сканирование [low, high].

    Returns:
        (best_x, bracket):
            - best_x: точка с минимальным |f| среди просмотренных (NaN если все невалидны)
            - bracket: первая пара соседних точек со сменой знака или None
    """
    best_value = math.inf
    best_x = math.nan
    prev_x = low
    prev_value = evaluate_safe(f, prev_x)

    for i in range(1, samples + 1):
        x = low + (high - low) * (i / samples)
        value = evaluate_safe(f, x)
        if not math.isnan(value) and abs(value) < best_value:
            best_value = abs(value)
            best_x = x

        if (
            not math.isnan(value)
            and not math.isnan(prev_value)
            and sign(value) != sign(prev_value)
        ):
            return best_x, (prev_x, x)

        prev_x = x
        prev_value = value

    return best_x, None


def find_root(
    f: Function,
    low: float = ROOT_SEARCH_LOW,
    high: float = ROOT_SEARCH_HIGH,
    tolerance: float = ROOT_TOLERANCE,
    max_iterations: int = ROOT_MAX_ITERATIONS,
) -> float:
    """
    Поиск корня f на [low, high].

    Алгоритм:
    1. Если f(low) и f(high) валидны и различаются по знаку → бисекция на [low, high]
    2. Иначе сканирование 400 точек: первая смена знака становится новым брекетом;
       если смены знака нет → возвращается точка с минимальным |f| (без бисекции)
    3. Бисекция: до max_iterations итераций; |f(mid)| < tolerance → mid;
       NaN в середине → последняя валидная середина; по исчерпании итераций
       возвращается последняя середина без проверки невязки

    Сходимость не гарантируется: вызывающий код отсеивает неосмысленные
    корни эвристически (например, требуя q > 0).

    Args:
        f: Функция одной переменной
        low: Левая граница
        high: Правая граница
        tolerance: Допуск по |f(mid)|
        max_iterations: Лимит итераций бисекции

    Returns:
        safe(корень); NaN только если все сэмплы сканирования невалидны

    Examples:
        >>> 9.9 <= find_root(lambda q: q - 10, 0, 20) <= 10.1
        True
    """
    a = low
    b = high
    fa = evaluate_safe(f, a)
    fb = evaluate_safe(f, b)

    sampled = math.nan
    if math.isnan(fa) or math.isnan(fb) or sign(fa) == sign(fb):
        sampled, bracket = _scan_for_bracket(f, low, high, ROOT_SCAN_SAMPLES)
        if bracket is None:
            return sampled if math.isnan(sampled) else safe(sampled)

        a, b = bracket
        fa = evaluate_safe(f, a)
        fb = evaluate_safe(f, b)

    if math.isnan(fa) or math.isnan(fb):
        return sampled if math.isnan(sampled) else safe(sampled)

    mid = 0.5 * (a + b)
    last_valid = mid
    for _ in range(max_iterations):
        mid = 0.5 * (a + b)
        fm = evaluate_safe(f, mid)
        if math.isnan(fm):
            return safe(last_valid)

        last_valid = mid
        if abs(fm) < tolerance:
            return safe(mid)

        if sign(fa) == sign(fm):
            a = mid
            fa = fm
        else:
            b = mid
            fb = fm

    return safe(mid)


def find_roots(
    f: Function,
    low: float,
    high: float,
    samples: int = ROOT_SCAN_SAMPLES,
) -> list[float]:
    """
    Все корни f на [low, high].

    Сканирует samples отрезков, для каждой смены знака запускает find_root
    на этом отрезке. low считается корнем, если |f(low)| < ROOTS_EDGE_TOLERANCE.
    Результат отсортирован; корни ближе ROOTS_DEDUP_DISTANCE к предыдущему
    сохранённому отбрасываются.

    Args:
        f: Функция одной переменной
        low: Левая граница
        high: Правая граница
        samples: Количество отрезков сканирования

    Returns:
        Отсортированный список различных корней (может быть пустым)
    """
    roots: list[float] = []
    prev_x = low
    prev_value = evaluate_safe(f, prev_x)
    if not math.isnan(prev_value) and abs(prev_value) < ROOTS_EDGE_TOLERANCE:
        roots.append(prev_x)

    for i in range(1, samples + 1):
        x = low + (high - low) * (i / samples)
        value = evaluate_safe(f, x)

        if (
            not math.isnan(value)
            and not math.isnan(prev_value)
            and sign(value) != sign(prev_value)
        ):
            root = find_root(f, prev_x, x)
            if not math.isnan(root):
                roots.append(root)

        prev_x = x
        prev_value = value

    distinct: list[float] = []
    for root in sorted(roots):
        if not distinct or abs(distinct[-1] - root) > ROOTS_DEDUP_DISTANCE:
            distinct.append(safe(root))

    return distinct
