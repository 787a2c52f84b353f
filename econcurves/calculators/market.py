"""Market: равновесие спроса и предложения со сдвигами и потоварным налогом

Строит:
- базовые и сдвинутые кривые спроса/предложения
- равновесие с налогом: D'(q) = S'(q) + tax (цена покупателя pc, продавца pp = pc - tax)
- излишек потребителя ∫₀^q max(0, D' - pc), излишек производителя ∫₀^q max(0, pp - S')
- равновесие без налога: D'(q) = S'(q)
- чистые потери |∫ max(0, D' - S')| между двумя равновесиями
"""

from dataclasses import dataclass
from typing import Optional

from econcurves.calculators.curves import (
    QUANTITY_MATCH_TOLERANCE,
    build_area_samples,
    gap_area,
    locate_root,
    positive_gap_area,
    sample_curve,
)
from econcurves.core.domain.chart import AreaSamplePoint, ChartPoint
from econcurves.core.domain.parameters import MarketParameters
from econcurves.core.math import safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class MarketResult:
    """Результат расчёта рынка."""

    # Кривые
    demand_base: tuple[ChartPoint, ...]
    supply_base: tuple[ChartPoint, ...]
    demand_shifted: tuple[ChartPoint, ...]
    supply_shifted: tuple[ChartPoint, ...]

    # Равновесия (x = q, y = цена покупателя)
    equilibrium: Optional[ChartPoint]
    no_tax_equilibrium: Optional[ChartPoint]

    # Метрики
    producer_price: Optional[float]
    consumer_surplus: Optional[float]
    producer_surplus: Optional[float]
    tax_revenue: Optional[float]
    deadweight_loss: Optional[float]

    # Закрашиваемые области
    consumer_area: tuple[AreaSamplePoint, ...]
    producer_area: tuple[AreaSamplePoint, ...]
    deadweight_area: tuple[AreaSamplePoint, ...]

    errors: tuple[str, ...]


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class MarketConfig:
    """Конфигурация сетки и интервала поиска равновесия."""

    sample_count: int = 100
    sample_step: float = 2.0
    search_low: float = 0.0
    search_high: float = 1000.0


# =============================================================================
# CALCULATOR
# =============================================================================


class MarketCalculator:
    """Калькулятор рыночного равновесия."""

    def __init__(self, config: MarketConfig | None = None):
        self.config = config or MarketConfig()

    def calculate(self, parameters: MarketParameters) -> MarketResult:
        cfg = self.config
        errors: list[str] = []

        def demand_base(q: float) -> float:
            return safe(parameters.demand_inverse.evaluate(q))

        def supply_base(q: float) -> float:
            return safe(parameters.supply_inverse.evaluate(q))

        def demand_shifted(q: float) -> float:
            return safe(demand_base(q) + parameters.demand_shock)

        def supply_shifted(q: float) -> float:
            return safe(supply_base(q) - parameters.supply_shock)

        demand0 = sample_curve(demand_base, cfg.sample_count, cfg.sample_step)
        supply0 = sample_curve(supply_base, cfg.sample_count, cfg.sample_step)
        demand1 = sample_curve(demand_shifted, cfg.sample_count, cfg.sample_step)
        supply1 = sample_curve(supply_shifted, cfg.sample_count, cfg.sample_step)

        equilibrium: Optional[ChartPoint] = None
        producer_price: Optional[float] = None
        consumer_surplus: Optional[float] = None
        producer_surplus: Optional[float] = None
        tax_revenue: Optional[float] = None
        consumer_area: tuple[AreaSamplePoint, ...] = ()
        producer_area: tuple[AreaSamplePoint, ...] = ()
        deadweight_area: tuple[AreaSamplePoint, ...] = ()

        q_tax = locate_root(
            lambda q: demand_shifted(q) - (supply_shifted(q) + parameters.tax),
            cfg.search_low,
            cfg.search_high,
        )
        if q_tax is None:
            errors.append("Equilibrium with tax not found.")
        else:
            pc = safe(demand_shifted(q_tax))
            pp = safe(pc - parameters.tax)
            equilibrium = ChartPoint(q_tax, pc)
            producer_price = pp
            consumer_surplus = positive_gap_area(demand_shifted, lambda _: pc, 0.0, q_tax)
            producer_surplus = positive_gap_area(lambda _: pp, supply_shifted, 0.0, q_tax)
            tax_revenue = safe(parameters.tax * q_tax)
            consumer_area = build_area_samples(0.0, q_tax, lambda _: pc, demand_shifted)
            producer_area = build_area_samples(0.0, q_tax, supply_shifted, lambda _: pp)

        no_tax_equilibrium: Optional[ChartPoint] = None
        q_free = locate_root(
            lambda q: demand_shifted(q) - supply_shifted(q),
            cfg.search_low,
            cfg.search_high,
        )
        if q_free is None:
            errors.append("Equilibrium without tax not found.")
        else:
            no_tax_equilibrium = ChartPoint(q_free, demand_shifted(q_free))

        deadweight_loss: Optional[float] = None
        if equilibrium is not None and no_tax_equilibrium is not None:
            deadweight_loss = gap_area(
                demand_shifted, supply_shifted, equilibrium.x, no_tax_equilibrium.x
            )
            if abs(equilibrium.x - no_tax_equilibrium.x) > QUANTITY_MATCH_TOLERANCE:
                deadweight_area = build_area_samples(
                    equilibrium.x, no_tax_equilibrium.x, supply_shifted, demand_shifted
                )

        if errors:
            logger.info("market calculation incomplete", extra={"errors": errors})

        return MarketResult(
            demand_base=demand0,
            supply_base=supply0,
            demand_shifted=demand1,
            supply_shifted=supply1,
            equilibrium=equilibrium,
            no_tax_equilibrium=no_tax_equilibrium,
            producer_price=producer_price,
            consumer_surplus=consumer_surplus,
            producer_surplus=producer_surplus,
            tax_revenue=tax_revenue,
            deadweight_loss=deadweight_loss,
            consumer_area=consumer_area,
            producer_area=producer_area,
            deadweight_area=deadweight_area,
            errors=tuple(errors),
        )


def calculate_market(parameters: MarketParameters) -> MarketResult:
    """Расчёт рынка с конфигурацией по умолчанию."""
    return MarketCalculator().calculate(parameters)
