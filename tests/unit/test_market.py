"""
Тесты для Market калькулятора

Сценарий по умолчанию: P_d = 100 - 0.5q, P_s = 20 + 0.5q
→ равновесие q = 80, P = 60; излишки 1600 / 1600.
"""

import pytest

from econcurves.calculators import market
from econcurves.calculators.market import MarketCalculator, MarketConfig, calculate_market
from econcurves.core.domain import MarketParameters
from econcurves.core.domain.defaults import default_market_parameters
from econcurves.core.expressions import parse


@pytest.fixture
def default_result():
    return calculate_market(default_market_parameters())


def make_params(**overrides) -> MarketParameters:
    values = {
        "demand_inverse": parse("100 - 0.5q"),
        "supply_inverse": parse("20 + 0.5q"),
    }
    values.update(overrides)
    return MarketParameters(**values)


class TestMarketWithoutTax:
    """Равновесие без налога"""

    def test_equilibrium(self, default_result) -> None:
        eq = default_result.equilibrium
        assert eq.x == pytest.approx(80.0, abs=1e-3)
        assert eq.y == pytest.approx(60.0, abs=1e-3)
        assert default_result.producer_price == pytest.approx(60.0, abs=1e-3)

    def test_no_tax_equilibrium_matches(self, default_result) -> None:
        assert default_result.no_tax_equilibrium.x == pytest.approx(80.0, abs=1e-3)

    def test_surpluses(self, default_result) -> None:
        assert default_result.consumer_surplus == pytest.approx(1600.0, rel=1e-3)
        assert default_result.producer_surplus == pytest.approx(1600.0, rel=1e-3)

    def test_no_tax_no_deadweight_loss(self, default_result) -> None:
        assert default_result.tax_revenue == 0.0
        assert default_result.deadweight_loss == 0.0
        assert default_result.deadweight_area == ()

    def test_curves_sampled(self, default_result) -> None:
        assert len(default_result.demand_base) == 100
        assert default_result.demand_base[0].y == pytest.approx(100.0)
        assert default_result.supply_base[-1].x == pytest.approx(198.0)
        assert default_result.demand_base == default_result.demand_shifted

    def test_surplus_areas(self, default_result) -> None:
        assert len(default_result.consumer_area) == 80
        assert len(default_result.producer_area) == 80
        assert default_result.consumer_area[0].base_value == pytest.approx(60.0, abs=1e-3)
        assert default_result.consumer_area[0].offset_value == pytest.approx(40.0, abs=1e-3)

    def test_no_errors(self, default_result) -> None:
        assert default_result.errors == ()


class TestMarketWithTax:
    """Потоварный налог 10: q = 70, pc = 65, pp = 55"""

    @pytest.fixture
    def result(self):
        return calculate_market(make_params(tax=10.0))

    def test_prices(self, result) -> None:
        assert result.equilibrium.x == pytest.approx(70.0, abs=1e-3)
        assert result.equilibrium.y == pytest.approx(65.0, abs=1e-3)
        assert result.producer_price == pytest.approx(55.0, abs=1e-3)

    def test_tax_revenue(self, result) -> None:
        assert result.tax_revenue == pytest.approx(700.0, abs=1e-2)

    def test_surpluses(self, result) -> None:
        assert result.consumer_surplus == pytest.approx(1225.0, rel=1e-3)
        assert result.producer_surplus == pytest.approx(1225.0, rel=1e-3)

    def test_deadweight_loss(self, result) -> None:
        """0.5 · 10 · (80 - 70) = 50"""
        assert result.deadweight_loss == pytest.approx(50.0, rel=1e-3)
        assert len(result.deadweight_area) == 80
        assert all(s.offset_value >= 0.0 for s in result.deadweight_area)

    def test_no_tax_reference(self, result) -> None:
        assert result.no_tax_equilibrium.x == pytest.approx(80.0, abs=1e-3)


class TestMarketShocks:
    """Сдвиги спроса и предложения"""

    def test_demand_shock(self) -> None:
        """P_d + 20 → q = 100, P = 70"""
        result = calculate_market(make_params(demand_shock=20.0))
        assert result.equilibrium.x == pytest.approx(100.0, abs=1e-3)
        assert result.equilibrium.y == pytest.approx(70.0, abs=1e-3)
        assert result.demand_shifted[0].y == pytest.approx(120.0)
        assert result.demand_base[0].y == pytest.approx(100.0)

    def test_supply_shock_lowers_supply(self) -> None:
        """P_s - 20 → q = 100, P = 50"""
        result = calculate_market(make_params(supply_shock=20.0))
        assert result.equilibrium.x == pytest.approx(100.0, abs=1e-3)
        assert result.equilibrium.y == pytest.approx(50.0, abs=1e-3)
        assert result.supply_shifted[0].y == pytest.approx(0.0)


def test_custom_config_changes_grid() -> None:
    calculator = MarketCalculator(MarketConfig(sample_count=10, sample_step=5.0))
    result = calculator.calculate(default_market_parameters())
    assert len(result.demand_base) == 10
    assert result.demand_base[-1].x == pytest.approx(45.0)


class TestMissingEquilibrium:
    """Корень не найден → ошибка, метрики None, кривые строятся"""

    @staticmethod
    def fail_calls(monkeypatch: pytest.MonkeyPatch, failing: set[int]) -> None:
        """locate_root возвращает None для вызовов с номерами из failing"""
        real_locate_root = market.locate_root
        calls = []

        def fake_locate_root(*args, **kwargs):
            calls.append(args)
            if len(calls) in failing:
                return None
            return real_locate_root(*args, **kwargs)

        monkeypatch.setattr(market, "locate_root", fake_locate_root)

    def test_both_equilibria_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self.fail_calls(monkeypatch, {1, 2})
        result = calculate_market(make_params(tax=10.0))

        assert result.errors == (
            "Equilibrium with tax not found.",
            "Equilibrium without tax not found.",
        )
        assert result.equilibrium is None
        assert result.no_tax_equilibrium is None
        assert result.producer_price is None
        assert result.consumer_surplus is None
        assert result.producer_surplus is None
        assert result.tax_revenue is None
        assert result.deadweight_loss is None
        assert result.consumer_area == ()
        assert result.deadweight_area == ()
        assert len(result.demand_base) == 100
        assert len(result.supply_shifted) == 100

    def test_taxed_equilibrium_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self.fail_calls(monkeypatch, {1})
        result = calculate_market(make_params(tax=10.0))

        assert result.errors == ("Equilibrium with tax not found.",)
        assert result.equilibrium is None
        assert result.consumer_surplus is None
        assert result.producer_surplus is None
        assert result.deadweight_loss is None
        assert result.no_tax_equilibrium.x == pytest.approx(80.0, abs=1e-3)

    def test_untaxed_equilibrium_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        self.fail_calls(monkeypatch, {2})
        result = calculate_market(make_params(tax=10.0))

        assert result.errors == ("Equilibrium without tax not found.",)
        assert result.no_tax_equilibrium is None
        assert result.deadweight_loss is None
        assert result.deadweight_area == ()
        assert result.equilibrium.x == pytest.approx(70.0, abs=1e-3)
        assert result.consumer_surplus is not None
