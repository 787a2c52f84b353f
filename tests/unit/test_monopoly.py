"""
Тесты для Monopoly калькулятора

P = 120 - q, C = 100 + 10q + 0.2q²:
- MR = 120 - 2q, MC = 10 + 0.4q → q_m = 45.83, P_m = 74.17
- конкурентная точка: 120 - q = 10 + 0.4q → q_c = 78.57
"""

import pytest

from econcurves.calculators import monopoly
from econcurves.calculators.monopoly import calculate_monopoly
from econcurves.core.domain import MonopolyParameters
from econcurves.core.domain.defaults import default_monopoly_parameters
from econcurves.core.expressions import parse


@pytest.fixture
def result():
    return calculate_monopoly(default_monopoly_parameters())


def test_monopoly_point(result) -> None:
    assert result.monopoly_point.x == pytest.approx(45.8333, abs=1e-3)
    assert result.monopoly_point.y == pytest.approx(74.1667, abs=1e-3)


def test_monopoly_profit(result) -> None:
    """R - C = 3399.31 - 978.47"""
    assert result.profit == pytest.approx(2420.83, abs=0.05)


def test_competitive_point(result) -> None:
    assert result.competitive_point.x == pytest.approx(78.5714, abs=1e-3)
    assert result.competitive_point.y == pytest.approx(41.4286, abs=1e-3)


def test_deadweight_loss(result) -> None:
    """Треугольник 0.5 · (78.57 - 45.83) · 45.83"""
    assert result.deadweight_loss == pytest.approx(750.25, rel=1e-3)


def test_curves(result) -> None:
    assert len(result.demand) == 100
    assert result.marginal_revenue[10].y == pytest.approx(100.0, abs=1e-4)
    assert result.marginal_cost[10].y == pytest.approx(14.0, abs=1e-4)
    assert result.errors == ()


def test_competitive_when_mr_equals_mc_at_same_point() -> None:
    """Горизонтальный спрос: MR = P, монопольная и конкурентная точки совпадают"""
    params = MonopolyParameters(
        demand_inverse=parse("50"),
        total_cost=parse("10q + 0.5q^2"),
    )
    result = calculate_monopoly(params)
    assert result.monopoly_point.x == pytest.approx(40.0, abs=1e-3)
    assert result.competitive_point.x == pytest.approx(40.0, abs=1e-3)
    assert result.deadweight_loss == 0.0


def test_missing_roots_leave_metrics_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ни MR = MC, ни P = MC не найдены → обе ошибки, кривые строятся"""
    monkeypatch.setattr(monopoly, "locate_root", lambda *args, **kwargs: None)
    result = calculate_monopoly(default_monopoly_parameters())

    assert result.errors == (
        "No quantity found where MR = MC.",
        "Competitive reference equilibrium not found.",
    )
    assert result.monopoly_point is None
    assert result.competitive_point is None
    assert result.profit is None
    assert result.deadweight_loss is None
    assert len(result.demand) == 100
    assert len(result.marginal_cost) == 100


def test_missing_competitive_point_keeps_monopoly(monkeypatch: pytest.MonkeyPatch) -> None:
    real_locate_root = monopoly.locate_root
    calls = []

    def fake_locate_root(*args, **kwargs):
        calls.append(args)
        return real_locate_root(*args, **kwargs) if len(calls) == 1 else None

    monkeypatch.setattr(monopoly, "locate_root", fake_locate_root)
    result = calculate_monopoly(default_monopoly_parameters())

    assert result.errors == ("Competitive reference equilibrium not found.",)
    assert result.monopoly_point.x == pytest.approx(45.8333, abs=1e-3)
    assert result.profit == pytest.approx(2420.83, abs=0.05)
    assert result.competitive_point is None
    assert result.deadweight_loss is None
