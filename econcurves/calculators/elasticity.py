"""Elasticity: точечная эластичность спроса по цене

q находится из P(q) + shock = price; эластичность |(1 / P'(q)) · (price / q)|.
При |P'(q)| < DERIVATIVE_EPS эластичность не вычисляется, маркер точки остаётся.
"""

import math
from dataclasses import dataclass
from typing import Final, Optional

from econcurves.calculators.curves import locate_root, sample_curve
from econcurves.core.domain.chart import ChartPoint
from econcurves.core.domain.parameters import ElasticityParameters
from econcurves.core.math import derivative, safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)

# Производная ближе к нулю считается невычислимой
DERIVATIVE_EPS: Final[float] = 1e-6


@dataclass(frozen=True)
class ElasticityResult:
    """Результат расчёта эластичности."""

    demand: tuple[ChartPoint, ...]
    point: Optional[ChartPoint]
    elasticity: Optional[float]
    errors: tuple[str, ...]


@dataclass(frozen=True)
class ElasticityConfig:
    sample_count: int = 150
    sample_step: float = 1.0
    search_low: float = 0.0
    search_high: float = 500.0


class ElasticityCalculator:
    """Калькулятор точечной эластичности спроса."""

    def __init__(self, config: ElasticityConfig | None = None):
        self.config = config or ElasticityConfig()

    def calculate(self, parameters: ElasticityParameters) -> ElasticityResult:
        cfg = self.config
        errors: list[str] = []
        price = parameters.price

        def demand(q: float) -> float:
            return safe(parameters.demand_inverse.evaluate(q) + parameters.demand_shock)

        points = sample_curve(demand, cfg.sample_count, cfg.sample_step)

        marker: Optional[ChartPoint] = None
        elasticity: Optional[float] = None

        quantity = locate_root(lambda q: demand(q) - price, cfg.search_low, cfg.search_high)
        if quantity is None or quantity <= 0:
            errors.append("No quantity found for the selected price.")
        else:
            marker = ChartPoint(quantity, price)
            slope = derivative(demand, quantity)
            if math.isnan(slope) or abs(slope) < DERIVATIVE_EPS:
                errors.append("Elasticity not computable (derivative close to 0).")
            else:
                elasticity = safe(abs((1 / slope) * (price / quantity)))

        if errors:
            logger.info("elasticity calculation incomplete", extra={"errors": errors})

        return ElasticityResult(
            demand=points,
            point=marker,
            elasticity=elasticity,
            errors=tuple(errors),
        )


def calculate_elasticity(parameters: ElasticityParameters) -> ElasticityResult:
    """Расчёт эластичности с конфигурацией по умолчанию."""
    return ElasticityCalculator().calculate(parameters)
