"""Monopoly: оптимум монополиста и эталонное конкурентное равновесие

- MR(q) = d(P(q)·q)/dq, MC(q) = dC/dq (численные производные)
- точка монополии: MR = MC, цена по кривой спроса, прибыль R - C
- конкурентная точка: P(q) = MC(q)
- чистые потери |∫ max(0, P - MC)| между q_m и q_c
"""

from dataclasses import dataclass
from typing import Optional

from econcurves.calculators.curves import gap_area, locate_root, sample_curve
from econcurves.core.domain.chart import ChartPoint
from econcurves.core.domain.parameters import MonopolyParameters
from econcurves.core.math import derivative, safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class MonopolyResult:
    """Результат расчёта монополии."""

    demand: tuple[ChartPoint, ...]
    marginal_revenue: tuple[ChartPoint, ...]
    marginal_cost: tuple[ChartPoint, ...]
    monopoly_point: Optional[ChartPoint]
    competitive_point: Optional[ChartPoint]
    profit: Optional[float]
    deadweight_loss: Optional[float]
    errors: tuple[str, ...]


@dataclass(frozen=True)
class MonopolyConfig:
    """Конфигурация сетки (q = 0..sample_count-1) и интервала поиска."""

    sample_count: int = 100
    sample_step: float = 1.0
    search_low: float = 0.0
    search_high: float = 300.0


class MonopolyCalculator:
    """Калькулятор монополии."""

    def __init__(self, config: MonopolyConfig | None = None):
        self.config = config or MonopolyConfig()

    def calculate(self, parameters: MonopolyParameters) -> MonopolyResult:
        cfg = self.config
        errors: list[str] = []

        def demand(q: float) -> float:
            return safe(parameters.demand_inverse.evaluate(q))

        def cost(q: float) -> float:
            return safe(parameters.total_cost.evaluate(q))

        def revenue(q: float) -> float:
            return safe(demand(q) * q)

        def marginal_revenue(q: float) -> float:
            return derivative(revenue, q)

        def marginal_cost(q: float) -> float:
            return derivative(cost, q)

        demand_points = sample_curve(demand, cfg.sample_count, cfg.sample_step)
        mr_points = sample_curve(marginal_revenue, cfg.sample_count, cfg.sample_step)
        mc_points = sample_curve(marginal_cost, cfg.sample_count, cfg.sample_step)

        monopoly: Optional[ChartPoint] = None
        profit: Optional[float] = None
        qm = locate_root(
            lambda q: marginal_revenue(q) - marginal_cost(q), cfg.search_low, cfg.search_high
        )
        if qm is None:
            errors.append("No quantity found where MR = MC.")
        else:
            monopoly = ChartPoint(qm, demand(qm))
            profit = safe(revenue(qm) - cost(qm))

        competitive: Optional[ChartPoint] = None
        qc = locate_root(lambda q: demand(q) - marginal_cost(q), cfg.search_low, cfg.search_high)
        if qc is None:
            errors.append("Competitive reference equilibrium not found.")
        else:
            competitive = ChartPoint(qc, demand(qc))

        deadweight_loss: Optional[float] = None
        if monopoly is not None and competitive is not None:
            deadweight_loss = gap_area(demand, marginal_cost, monopoly.x, competitive.x)

        if errors:
            logger.info("monopoly calculation incomplete", extra={"errors": errors})

        return MonopolyResult(
            demand=demand_points,
            marginal_revenue=mr_points,
            marginal_cost=mc_points,
            monopoly_point=monopoly,
            competitive_point=competitive,
            profit=profit,
            deadweight_loss=deadweight_loss,
            errors=tuple(errors),
        )


def calculate_monopoly(parameters: MonopolyParameters) -> MonopolyResult:
    """Расчёт монополии с конфигурацией по умолчанию."""
    return MonopolyCalculator().calculate(parameters)
