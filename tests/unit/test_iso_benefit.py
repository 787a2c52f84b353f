"""
Тесты для IsoBenefit калькулятора

Фирмы по умолчанию: MC_A = 10 + q, MC_B = 12 + 0.6q, MC_C = 8 + 1.6q.
Совокупное предложение S(p) = 3.2917p - 35, спрос Q = 200 - 2p
→ эталонная цена p* = 235 / 5.2917 ≈ 44.41.
"""

import math

import pytest
from pydantic import ValidationError

from econcurves.calculators import iso_benefit
from econcurves.calculators.iso_benefit import (
    IsoBenefitCalculator,
    IsoBenefitConfig,
    IsoProfitStatus,
    calculate_iso_benefit,
)
from econcurves.core.domain import IsoBenefitFirmParameters, IsoBenefitParameters
from econcurves.core.domain.defaults import default_iso_benefit_parameters
from econcurves.core.expressions import parse

REFERENCE_PRICE = 235.0 / (1.0 + 1.0 / 0.6 + 1.0 / 1.6 + 2.0)


@pytest.fixture(scope="module")
def result():
    return calculate_iso_benefit(default_iso_benefit_parameters())


def make_params(firms, **overrides) -> IsoBenefitParameters:
    values = {
        "demand_inverse": parse("100 - 0.5q"),
        "firms": tuple(firms),
        "firm_profit_levels": (-200.0, 0.0, 200.0),
        "market_profit_levels": (-500.0, 0.0, 500.0),
    }
    values.update(overrides)
    return IsoBenefitParameters(**values)


class TestReferencePrice:
    """Эталонная конкурентная цена"""

    def test_reference_price(self, result) -> None:
        assert result.reference_price == pytest.approx(REFERENCE_PRICE, abs=0.05)
        assert result.used_fallback_price is False
        assert result.errors == ()

    def test_reference_quantity_clears_market(self, result) -> None:
        """Q(p*) лежит на кривой спроса: 100 - 0.5Q = p*"""
        assert 100 - 0.5 * result.reference_quantity == pytest.approx(
            result.reference_price, abs=0.05
        )
        assert result.market.reference_point.x == result.reference_quantity


class TestFirms:
    """Результаты по фирмам"""

    def test_firm_names_preserved(self, result) -> None:
        assert [firm.name for firm in result.firms] == ["Firm A", "Firm B", "Firm C"]

    def test_optimal_quantities(self, result) -> None:
        price = result.reference_price
        a, b, c = result.firms
        assert a.optimal_quantity == pytest.approx(price - 10.0, abs=1e-2)
        assert b.optimal_quantity == pytest.approx((price - 12.0) / 0.6, abs=1e-2)
        assert c.optimal_quantity == pytest.approx((price - 8.0) / 1.6, abs=1e-2)

    def test_all_firms_profitable(self, result) -> None:
        for firm in result.firms:
            assert firm.status is IsoProfitStatus.POSITIVE
            assert firm.optimal_point.y == result.reference_price

    def test_firm_a_profit(self, result) -> None:
        price = result.reference_price
        q = price - 10.0
        expected = price * q - (200 + 10 * q + 0.5 * q * q)
        assert result.firms[0].optimal_profit == pytest.approx(expected, abs=0.5)

    def test_curves_per_level(self, result) -> None:
        for firm in result.firms:
            assert [c.target_profit for c in firm.curves] == [-200.0, 0.0, 200.0]
            assert all(len(c.points) == 150 for c in firm.curves)
            assert firm.curves[0].points[0].x == 1.0

    def test_zero_profit_curve_is_average_cost(self, result) -> None:
        """π = 0 → P(q) = C(q) / q"""
        zero_curve = result.firms[0].curves[1]
        point = zero_curve.points[19]
        assert point.x == 20.0
        assert point.y == pytest.approx((200 + 200 + 200) / 20.0, abs=1e-9)

    def test_intersection_on_reference_price(self, result) -> None:
        intersection = result.firms[0].curves[1].intersection
        assert intersection is not None
        assert intersection.y == result.reference_price
        # 200/q + 10 + 0.5q = p* → меньший корень
        price = result.reference_price
        expected = (price - 10.0) - math.sqrt((price - 10.0) ** 2 - 400.0)
        assert intersection.x == pytest.approx(expected, abs=1e-2)


class TestMarket:
    """Результат по рынку"""

    def test_demand_curve(self, result) -> None:
        assert len(result.market.demand) == 221
        assert result.market.demand[0].y == 100.0

    def test_market_curves(self, result) -> None:
        assert [c.target_profit for c in result.market.curves] == [-500.0, 0.0, 500.0]
        assert all(len(c.points) == 216 for c in result.market.curves)
        assert result.market.curves[0].points[0].x == 5.0

    def test_pooled_cost(self, result) -> None:
        """Q = 30 → каждая фирма производит 10"""
        zero_curve = result.market.curves[1]
        point = zero_curve.points[25]
        assert point.x == 30.0
        pooled = (200 + 100 + 50) + (120 + 120 + 30) + (80 + 80 + 80)
        assert point.y == pytest.approx(pooled / 30.0, abs=1e-9)

    def test_market_intersections_on_demand(self, result) -> None:
        for curve in result.market.curves:
            if curve.intersection is not None:
                assert curve.intersection.y == pytest.approx(
                    100 - 0.5 * curve.intersection.x, abs=1e-9
                )


class TestShutdownAndFallback:
    """Закрытие фирмы и запасная цена"""

    def test_unprofitable_firm_shuts_down(self) -> None:
        firms = list(default_iso_benefit_parameters().firms)
        firms.append(IsoBenefitFirmParameters(name="Firm D", total_cost=parse("1000 + 100q")))
        result = calculate_iso_benefit(make_params(firms))

        firm_d = result.firms[-1]
        assert firm_d.optimal_quantity == 0.0
        assert firm_d.optimal_point is None
        assert firm_d.optimal_profit == pytest.approx(-1000.0)
        assert firm_d.status is IsoProfitStatus.NEGATIVE
        assert result.reference_price == pytest.approx(REFERENCE_PRICE, abs=0.05)

    def test_fallback_price_when_root_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(iso_benefit, "find_root", lambda *args, **kwargs: math.nan)
        result = calculate_iso_benefit(default_iso_benefit_parameters())

        assert result.used_fallback_price is True
        assert result.reference_price == 40.0
        assert result.reference_quantity == 0.0
        assert result.market.reference_point is None
        assert len(result.errors) == 1
        assert all(firm.optimal_quantity == 0.0 for firm in result.firms)
        assert result.firms[0].optimal_profit == pytest.approx(-200.0)

    def test_custom_default_price(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(iso_benefit, "find_root", lambda *args, **kwargs: math.nan)
        calculator = IsoBenefitCalculator(IsoBenefitConfig(default_reference_price=25.0))
        result = calculator.calculate(default_iso_benefit_parameters())
        assert result.reference_price == 25.0


class TestStatus:
    """Полоса ±1 вокруг нулевой прибыли"""

    @pytest.mark.parametrize(
        "profit, status",
        [
            (5.0, IsoProfitStatus.POSITIVE),
            (0.5, IsoProfitStatus.ZERO),
            (-1.0, IsoProfitStatus.ZERO),
            (-1.5, IsoProfitStatus.NEGATIVE),
        ],
    )
    def test_status_band(self, profit: float, status: IsoProfitStatus) -> None:
        assert IsoBenefitCalculator()._status(profit) is status


class TestParameters:
    """Валидация параметров"""

    def test_empty_firm_list_rejected(self) -> None:
        with pytest.raises(ValidationError):
            make_params([])

    def test_blank_name_defaults(self) -> None:
        firm = IsoBenefitFirmParameters(name="   ", total_cost=parse("10q"))
        assert firm.name == "Firm"
