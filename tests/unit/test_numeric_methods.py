"""
Тесты для модуля Numeric Methods

Проверяет:
1. evaluate_safe: исключения → NaN, значения → safe
2. derivative: центральная разность
3. integrate: формула трапеций, вырожденный интервал, пропуск NaN-отрезков
4. find_root: прямая бисекция, поиск брекета, лучший сэмпл без брекета
5. find_roots: несколько корней, корень на левой границе, склейка дублей
"""

import math

import pytest

from econcurves.core.math import (
    CLAMP_LIMIT,
    derivative,
    evaluate_safe,
    find_root,
    find_roots,
    integrate,
)


def _always_fails(x: float) -> float:
    raise ZeroDivisionError("boom")


# =============================================================================
# evaluate_safe
# =============================================================================


class TestEvaluateSafe:
    """Тесты для evaluate_safe"""

    def test_regular_value(self) -> None:
        assert evaluate_safe(lambda x: x * 2, 3.0) == 6.0

    def test_large_value_clamped(self) -> None:
        assert evaluate_safe(lambda x: 5e9, 0.0) == CLAMP_LIMIT

    def test_arithmetic_error_becomes_nan(self) -> None:
        """ZeroDivisionError / OverflowError → NaN"""
        assert math.isnan(evaluate_safe(_always_fails, 1.0))
        assert math.isnan(evaluate_safe(lambda x: math.exp(1e6), 1.0))

    def test_domain_error_becomes_nan(self) -> None:
        """ValueError (math domain error) → NaN"""
        assert math.isnan(evaluate_safe(lambda x: math.sqrt(x), -1.0))


# =============================================================================
# derivative
# =============================================================================


class TestDerivative:
    """Тесты для derivative"""

    def test_quadratic(self) -> None:
        assert derivative(lambda q: q * q, 5.0) == pytest.approx(10.0, abs=1e-6)

    def test_linear(self) -> None:
        assert derivative(lambda q: 100 - 0.5 * q, 40.0) == pytest.approx(-0.5, abs=1e-6)

    def test_invalid_sample_gives_nan(self) -> None:
        assert math.isnan(derivative(_always_fails, 1.0))


# =============================================================================
# integrate
# =============================================================================


class TestIntegrate:
    """Тесты для integrate"""

    def test_linear_is_exact(self) -> None:
        """Трапеции точны для линейной функции"""
        assert integrate(lambda x: x, 0.0, 10.0) == pytest.approx(50.0, abs=1e-9)

    def test_unit_interval(self) -> None:
        assert integrate(lambda q: q, 0.0, 1.0) == pytest.approx(0.5, abs=1e-9)

    def test_quadratic(self) -> None:
        assert integrate(lambda x: x * x, 0.0, 3.0) == pytest.approx(9.0, abs=1e-3)

    def test_reversed_bounds_change_sign(self) -> None:
        assert integrate(lambda x: 1.0, 5.0, 0.0) == pytest.approx(-5.0, abs=1e-9)

    def test_degenerate_range_is_zero(self) -> None:
        assert integrate(lambda x: 1e5, 2.0, 2.0 + 1e-7) == 0.0

    def test_non_positive_steps_rejected(self) -> None:
        with pytest.raises(ValueError):
            integrate(lambda x: x, 0.0, 1.0, steps=0)

    def test_nan_subintervals_skipped(self) -> None:
        """Отрезки с невалидным концом пропускаются, остальная сумма сохраняется"""

        def holey(x: float) -> float:
            if 4.0 < x < 6.0:
                raise ZeroDivisionError
            return 1.0

        result = integrate(holey, 0.0, 10.0)
        assert math.isfinite(result)
        assert result == pytest.approx(8.0, abs=0.1)


# =============================================================================
# find_root
# =============================================================================


class TestFindRoot:
    """Тесты для find_root"""

    def test_direct_bisection(self) -> None:
        """Концы разного знака → бисекция на всём интервале"""
        assert find_root(lambda q: q - 10, 0.0, 20.0) == pytest.approx(10.0, abs=1e-3)

    def test_bracket_from_scan(self) -> None:
        """Концы одного знака → первая смена знака при сканировании"""
        root = find_root(lambda q: (q - 3) * (q - 7), 0.0, 10.0)
        assert root == pytest.approx(3.0, abs=1e-3)

    def test_no_sign_change_returns_best_sample(self) -> None:
        """Без смены знака возвращается точка с минимальным |f|"""
        root = find_root(lambda q: q * q + 1, -5.0, 5.0)
        assert root == pytest.approx(0.0, abs=1e-9)

    def test_all_samples_invalid_gives_nan(self) -> None:
        assert math.isnan(find_root(_always_fails, 0.0, 10.0))

    def test_default_interval(self) -> None:
        """Интервал по умолчанию [0, 1000]"""
        assert find_root(lambda q: 500 - q) == pytest.approx(500.0, abs=1e-3)

    def test_result_is_clamped(self) -> None:
        root = find_root(lambda q: q - 2e6, 0.0, 3e6)
        assert root == CLAMP_LIMIT

    def test_nan_midpoint_returns_last_valid_midpoint(self) -> None:
        """Середины 5 → 7.5: f(7.5) невалидна → возвращается 5"""

        def f(q: float) -> float:
            if 7.4 < q < 7.6:
                raise ValueError("hole")
            return q - 7

        assert find_root(f, 0.0, 10.0) == 5.0

    def test_nan_first_midpoint_returns_first_midpoint(self) -> None:
        """Невалидна уже первая середина → возвращается она же"""

        def f(q: float) -> float:
            if 4.9 < q < 5.1:
                raise ValueError("hole")
            return q - 7

        assert find_root(f, 0.0, 10.0) == 5.0


# =============================================================================
# find_roots
# =============================================================================


class TestFindRoots:
    """Тесты для find_roots"""

    def test_two_roots_sorted(self) -> None:
        roots = find_roots(lambda q: (q - 2) * (q - 5), 0.0, 10.0)
        assert len(roots) == 2
        assert roots[0] == pytest.approx(2.0, abs=1e-3)
        assert roots[1] == pytest.approx(5.0, abs=1e-3)

    def test_root_at_low_bound(self) -> None:
        """|f(low)| < 1e-3 → low включается, соседний корень склеивается"""
        roots = find_roots(lambda q: q, 0.0, 5.0)
        assert roots == [0.0]

    def test_no_roots(self) -> None:
        assert find_roots(lambda q: q * q + 1, -5.0, 5.0) == []

    def test_roots_are_distinct(self) -> None:
        roots = find_roots(lambda q: math.sin(q), 0.5, 10.0)
        assert len(roots) == 3
        assert all(b - a > 1e-2 for a, b in zip(roots, roots[1:]))
        assert roots[0] == pytest.approx(math.pi, abs=1e-3)
