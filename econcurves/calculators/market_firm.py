"""MarketFirm: фирма с полиномиальными издержками при рыночной цене

Издержки задаются коэффициентами (разбор выражений не нужен):
    C(q)  = F + c1·q + c2·q² + c3·q³
    MC(q) = c1 + 2·c2·q + 3·c3·q²

Точка закрытия (минимум AVC):
- квадратичная с c2 ≥ 0: (MIN_QUANTITY, c1)
- кубическая с c3 > 0: q = -c2 / (2·c3), ограниченная [MIN_QUANTITY, max_quantity]
- иначе: перебор минимума AVC на сетке

Оптимум: 0 если цена ниже цены закрытия; иначе среди ВСЕХ корней MC(q) = P
выбирается максимизирующий прибыль P·q - C(q).
"""

import math
from dataclasses import dataclass
from typing import Final, Optional

from econcurves.calculators.curves import sample_linspace
from econcurves.core.domain.chart import ChartPoint
from econcurves.core.domain.parameters import (
    MarketCostFunctionType,
    MarketCostParameters,
    MarketFirmParameters,
)
from econcurves.core.math import Function, clamp, find_roots, safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)

# Нижняя граница q в делителе средних издержек и для точки закрытия
MIN_QUANTITY: Final[float] = 0.05


@dataclass(frozen=True)
class MarketFirmResult:
    """Результат расчёта фирмы на рынке."""

    marginal_cost: tuple[ChartPoint, ...]
    average_cost: tuple[ChartPoint, ...]
    average_variable_cost: tuple[ChartPoint, ...]

    # Оптимум
    optimal_quantity: Optional[float]
    marginal_cost_at_optimal: Optional[float]
    average_cost_at_optimal: Optional[float]
    average_variable_cost_at_optimal: Optional[float]
    profit_at_optimal: Optional[float]

    # Точка закрытия и безубыточность
    shutdown_quantity: Optional[float]
    shutdown_price: Optional[float]
    break_even_quantities: tuple[float, ...]

    errors: tuple[str, ...]


@dataclass(frozen=True)
class MarketFirmConfig:
    sample_count: int = 120
    shutdown_scan_samples: int = 200


class MarketFirmCalculator:
    """Калькулятор фирмы с полиномиальными издержками."""

    def __init__(self, config: MarketFirmConfig | None = None):
        self.config = config or MarketFirmConfig()

    def calculate(self, parameters: MarketFirmParameters) -> MarketFirmResult:
        cfg = self.config
        coefficients = parameters.cost
        price = parameters.price
        max_quantity = parameters.max_quantity
        errors: list[str] = []

        fixed = coefficients.fixed_cost
        linear = coefficients.linear_cost
        quadratic = coefficients.quadratic_cost
        cubic = coefficients.effective_cubic_cost

        def cost(q: float) -> float:
            return safe(fixed + linear * q + quadratic * q * q + cubic * q * q * q)

        def marginal_cost(q: float) -> float:
            return safe(linear + 2.0 * quadratic * q + 3.0 * cubic * q * q)

        def average_cost(q: float) -> float:
            safe_q = max(q, MIN_QUANTITY)
            return safe(cost(safe_q) / safe_q)

        def average_variable_cost(q: float) -> float:
            safe_q = max(q, MIN_QUANTITY)
            return safe((cost(safe_q) - fixed) / safe_q)

        mc_points = sample_linspace(marginal_cost, cfg.sample_count, max_quantity)
        ac_points = sample_linspace(average_cost, cfg.sample_count, max_quantity)
        avc_points = sample_linspace(average_variable_cost, cfg.sample_count, max_quantity)

        shutdown_quantity, shutdown_price = self._find_shutdown_point(
            coefficients, average_variable_cost, max_quantity
        )

        optimal_quantity: Optional[float] = None
        if shutdown_price is None or price < shutdown_price:
            optimal_quantity = 0.0
        else:
            candidates = find_roots(lambda q: marginal_cost(q) - price, 0.0, max_quantity)
            roots = [q for q in candidates if q >= 0]
            if not roots:
                errors.append("No quantity found where MC = P.")
            else:
                optimal_quantity = max(roots, key=lambda q: price * q - cost(q))

        marginal_at_optimal: Optional[float] = None
        average_at_optimal: Optional[float] = None
        average_variable_at_optimal: Optional[float] = None
        profit: Optional[float] = None
        if optimal_quantity is not None:
            q = optimal_quantity
            marginal_at_optimal = marginal_cost(q)
            average_at_optimal = average_cost(q)
            average_variable_at_optimal = average_variable_cost(q)
            profit = safe(price * q - cost(q))

        break_even = find_roots(lambda q: cost(q) - price * q, MIN_QUANTITY, max_quantity)

        if errors:
            logger.info("market firm calculation incomplete", extra={"errors": errors})

        return MarketFirmResult(
            marginal_cost=mc_points,
            average_cost=ac_points,
            average_variable_cost=avc_points,
            optimal_quantity=optimal_quantity,
            marginal_cost_at_optimal=marginal_at_optimal,
            average_cost_at_optimal=average_at_optimal,
            average_variable_cost_at_optimal=average_variable_at_optimal,
            profit_at_optimal=profit,
            shutdown_quantity=shutdown_quantity,
            shutdown_price=shutdown_price,
            break_even_quantities=tuple(break_even),
            errors=tuple(errors),
        )

    def _find_shutdown_point(
        self,
        coefficients: MarketCostParameters,
        average_variable_cost: Function,
        max_quantity: float,
    ) -> tuple[Optional[float], Optional[float]]:
        """Точка закрытия (q, AVC_min) или (None, None), если AVC нигде не вычислима."""
        if (
            coefficients.type is MarketCostFunctionType.QUADRATIC
            and coefficients.quadratic_cost >= 0
        ):
            return MIN_QUANTITY, safe(coefficients.linear_cost)

        if coefficients.type is MarketCostFunctionType.CUBIC and coefficients.cubic_cost > 0:
            q = -coefficients.quadratic_cost / (2.0 * coefficients.cubic_cost)
            q = MIN_QUANTITY if math.isnan(q) else clamp(q, MIN_QUANTITY, max_quantity)
            return q, safe(average_variable_cost(q))

        samples = self.config.shutdown_scan_samples
        step = max_quantity / samples
        min_value = math.inf
        min_q = MIN_QUANTITY
        for i in range(1, samples + 1):
            q = i * step
            value = average_variable_cost(q)
            if math.isnan(value):
                continue
            if value < min_value:
                min_value = value
                min_q = q

        if math.isinf(min_value):
            return None, None
        return min_q, safe(min_value)


def calculate_market_firm(parameters: MarketFirmParameters) -> MarketFirmResult:
    """Расчёт фирмы на рынке с конфигурацией по умолчанию."""
    return MarketFirmCalculator().calculate(parameters)
