"""Firm: конкурентная фирма в краткосрочном и долгосрочном периоде

Краткосрочный период: q* из MC(q) = P, линия цены = P.
Долгосрочный период: q* из MC(q) = AC(q) (нулевая прибыль, минимум AC),
линия цены = AC(q*).

AC и AVC подставляют MIN_QUANTITY вместо q < MIN_QUANTITY.
"""

from dataclasses import dataclass
from typing import Final, Optional

from econcurves.calculators.curves import locate_root, sample_curve
from econcurves.core.domain.chart import ChartPoint
from econcurves.core.domain.parameters import FirmMode, FirmParameters
from econcurves.core.math import derivative, safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)

# Нижняя граница q в делителе средних издержек
MIN_QUANTITY: Final[float] = 0.01


@dataclass(frozen=True)
class FirmResult:
    """Результат расчёта фирмы."""

    marginal_cost: tuple[ChartPoint, ...]
    average_cost: tuple[ChartPoint, ...]
    average_variable_cost: tuple[ChartPoint, ...]
    price_line: float
    quantity_point: Optional[ChartPoint]
    profit: Optional[float]
    errors: tuple[str, ...]


@dataclass(frozen=True)
class FirmConfig:
    """Конфигурация сетки и интервалов поиска для обоих периодов."""

    sample_count: int = 100
    sample_step: float = 0.6
    short_run_low: float = 0.0
    short_run_high: float = 300.0
    long_run_low: float = 0.1
    long_run_high: float = 500.0


class FirmCalculator:
    """Калькулятор конкурентной фирмы."""

    def __init__(self, config: FirmConfig | None = None):
        self.config = config or FirmConfig()

    def calculate(self, parameters: FirmParameters) -> FirmResult:
        cfg = self.config
        errors: list[str] = []

        def cost(q: float) -> float:
            return safe(parameters.total_cost.evaluate(q))

        fixed_cost = cost(0.0)

        def marginal_cost(q: float) -> float:
            return derivative(cost, q)

        def average_cost(q: float) -> float:
            safe_q = max(q, MIN_QUANTITY)
            return safe(cost(safe_q) / safe_q)

        def average_variable_cost(q: float) -> float:
            safe_q = max(q, MIN_QUANTITY)
            return safe((cost(safe_q) - fixed_cost) / safe_q)

        mc_points = sample_curve(marginal_cost, cfg.sample_count, cfg.sample_step)
        ac_points = sample_curve(average_cost, cfg.sample_count, cfg.sample_step)
        avc_points = sample_curve(average_variable_cost, cfg.sample_count, cfg.sample_step)

        price_line = parameters.price
        quantity: Optional[float]
        if parameters.mode is FirmMode.SHORT_RUN:
            quantity = locate_root(
                lambda q: marginal_cost(q) - price_line, cfg.short_run_low, cfg.short_run_high
            )
            if quantity is None:
                errors.append("No quantity found where MC = P.")
        else:
            quantity = locate_root(
                lambda q: marginal_cost(q) - average_cost(q), cfg.long_run_low, cfg.long_run_high
            )
            if quantity is None:
                errors.append("Minimum of average cost not found.")
            else:
                price_line = average_cost(quantity)

        quantity_point: Optional[ChartPoint] = None
        profit: Optional[float] = None
        if quantity is not None:
            profit = safe(price_line * quantity - cost(quantity))
            quantity_point = ChartPoint(quantity, price_line)

        if errors:
            logger.info(
                "firm calculation incomplete",
                extra={"mode": parameters.mode.value, "errors": errors},
            )

        return FirmResult(
            marginal_cost=mc_points,
            average_cost=ac_points,
            average_variable_cost=avc_points,
            price_line=price_line,
            quantity_point=quantity_point,
            profit=profit,
            errors=tuple(errors),
        )


def calculate_firm(parameters: FirmParameters) -> FirmResult:
    """Расчёт фирмы с конфигурацией по умолчанию."""
    return FirmCalculator().calculate(parameters)
