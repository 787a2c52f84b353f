"""IsoBenefit: кривые изо-прибыли фирм и рынка

Кривая изо-прибыли — множество (q, P), дающих фиксированную прибыль π:
    P(q; π) = (C(q) + π) / q

Шаги:
1. Эталонная конкурентная цена p*: D(max(ΣS_i(p), 0)) = p на [PRICE_LOW, PRICE_HIGH],
   где S_i(p) — корень MC_i(q) = p с правилом закрытия (p < AVC_i - tol → 0).
   Если корень не найден — DEFAULT_REFERENCE_PRICE.
2. Рынок: совокупные издержки C(Q) = Σ C_i(Q / N) (равное распределение выпуска),
   кривые изо-прибыли для каждого уровня и их пересечения со спросом.
3. Фирмы: кривые изо-прибыли для каждого уровня и пересечения с линией p*,
   оптимальный выпуск, прибыль и статус.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence

from econcurves.calculators.curves import locate_root, sample_range
from econcurves.core.domain.chart import ChartPoint
from econcurves.core.domain.parameters import (
    IsoBenefitFirmParameters,
    IsoBenefitParameters,
)
from econcurves.core.math import Function, derivative, find_root, safe
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)


# =============================================================================
# ENUMS / RESULTS
# =============================================================================


class IsoProfitStatus(str, Enum):
    """Знак прибыли фирмы в оптимуме (с полосой ±profit_epsilon вокруг нуля)"""

    NEGATIVE = "negative"
    ZERO = "zero"
    POSITIVE = "positive"


@dataclass(frozen=True)
class IsoProfitCurve:
    """Кривая изо-прибыли для одного уровня прибыли."""

    target_profit: float
    points: tuple[ChartPoint, ...]
    intersection: Optional[ChartPoint]


@dataclass(frozen=True)
class IsoFirmResult:
    """Результат по одной фирме."""

    name: str
    curves: tuple[IsoProfitCurve, ...]
    optimal_point: Optional[ChartPoint]
    optimal_quantity: float
    optimal_profit: float
    status: IsoProfitStatus


@dataclass(frozen=True)
class IsoMarketResult:
    """Результат по рынку в целом."""

    demand: tuple[ChartPoint, ...]
    curves: tuple[IsoProfitCurve, ...]
    reference_point: Optional[ChartPoint]
    reference_price: float


@dataclass(frozen=True)
class IsoBenefitResult:
    """Результат анализа изо-прибыли."""

    reference_price: float
    reference_quantity: float
    market: IsoMarketResult
    firms: tuple[IsoFirmResult, ...]
    used_fallback_price: bool
    errors: tuple[str, ...]


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class IsoBenefitConfig:
    """Конфигурация сеток, интервалов и допусков."""

    firm_quantity_min: float = 1.0
    firm_quantity_max: float = 150.0
    firm_quantity_step: float = 1.0
    market_quantity_min: float = 5.0
    market_quantity_max: float = 220.0
    market_quantity_step: float = 1.0
    price_low: float = 5.0
    price_high: float = 150.0
    profit_epsilon: float = 1.0
    shutdown_tolerance: float = 1e-3
    default_reference_price: float = 40.0
    # Нижняя граница q в делителе цены изо-прибыли и AVC
    min_quantity: float = 0.001


# =============================================================================
# FIRM CONTEXT
# =============================================================================


class _FirmContext:
    """Функции издержек одной фирмы."""

    def __init__(self, name: str, cost: Function, min_quantity: float):
        self.name = name
        self.cost = cost
        self.fixed_cost = cost(0.0)
        self._min_quantity = min_quantity

    @classmethod
    def create(cls, parameters: IsoBenefitFirmParameters, min_quantity: float) -> "_FirmContext":
        expression = parameters.total_cost

        def cost(q: float) -> float:
            return safe(expression.evaluate(q))

        return cls(parameters.name, cost, min_quantity)

    def marginal_cost(self, q: float) -> float:
        return derivative(self.cost, q)

    def average_variable_cost(self, q: float) -> float:
        if q <= self._min_quantity:
            return math.inf
        return safe((self.cost(q) - self.fixed_cost) / q)


# =============================================================================
# CALCULATOR
# =============================================================================


class IsoBenefitCalculator:
    """Калькулятор кривых изо-прибыли."""

    def __init__(self, config: IsoBenefitConfig | None = None):
        self.config = config or IsoBenefitConfig()

    def calculate(self, parameters: IsoBenefitParameters) -> IsoBenefitResult:
        cfg = self.config
        errors: list[str] = []
        contexts = [_FirmContext.create(firm, cfg.min_quantity) for firm in parameters.firms]

        def demand(q: float) -> float:
            return safe(parameters.demand_inverse.evaluate(q) + parameters.demand_shock)

        reference_price, used_fallback = self._reference_price(demand, contexts)
        reference_quantity = self._total_supply(reference_price, contexts)
        if used_fallback:
            errors.append(
                f"Competitive reference price not found; using default price "
                f"{cfg.default_reference_price:g}."
            )
            logger.info(
                "iso-benefit reference price fallback",
                extra={"reference_price": reference_price},
            )

        market = self._market_result(parameters, contexts, demand, reference_price, reference_quantity)
        firms = tuple(
            self._firm_result(context, parameters.firm_profit_levels, reference_price)
            for context in contexts
        )

        return IsoBenefitResult(
            reference_price=reference_price,
            reference_quantity=reference_quantity,
            market=market,
            firms=firms,
            used_fallback_price=used_fallback,
            errors=tuple(errors),
        )

    # -------------------------------------------------------------------------
    # Эталонная цена и предложение
    # -------------------------------------------------------------------------

    def _reference_price(
        self, demand: Function, contexts: Sequence[_FirmContext]
    ) -> tuple[float, bool]:
        cfg = self.config

        def excess(price: float) -> float:
            quantity = self._total_supply(price, contexts)
            return demand(max(quantity, 0.0)) - price

        root = find_root(excess, cfg.price_low, cfg.price_high)
        if math.isnan(root):
            return cfg.default_reference_price, True
        return root, False

    def _total_supply(self, price: float, contexts: Sequence[_FirmContext]) -> float:
        return safe(sum(self._quantity_at_price(context, price) for context in contexts))

    def _quantity_at_price(self, context: _FirmContext, price: float) -> float:
        """Выпуск, максимизирующий прибыль при цене price (0 при закрытии)."""
        cfg = self.config
        if price <= 0:
            return 0.0

        root = find_root(lambda q: context.marginal_cost(q) - price, 0.0, cfg.firm_quantity_max)
        if math.isnan(root) or root <= 0:
            return 0.0

        avc = context.average_variable_cost(root)
        if not math.isnan(avc) and price < avc - cfg.shutdown_tolerance:
            return 0.0

        return safe(root)

    # -------------------------------------------------------------------------
    # Рынок
    # -------------------------------------------------------------------------

    def _market_cost_function(self, contexts: Sequence[_FirmContext]) -> Function:
        count = len(contexts)

        def market_cost(total_quantity: float) -> float:
            if total_quantity <= 0 or count == 0:
                return 0.0
            per_firm = total_quantity / count
            return safe(sum(context.cost(per_firm) for context in contexts))

        return market_cost

    def _market_result(
        self,
        parameters: IsoBenefitParameters,
        contexts: Sequence[_FirmContext],
        demand: Function,
        reference_price: float,
        reference_quantity: float,
    ) -> IsoMarketResult:
        cfg = self.config
        demand_points = tuple(
            ChartPoint(q, demand(q))
            for q in sample_range(0.0, cfg.market_quantity_max, cfg.market_quantity_step)
        )

        market_cost = self._market_cost_function(contexts)
        curves = []
        for level in parameters.market_profit_levels:
            iso_price = self._iso_price_function(market_cost, level)
            points = tuple(
                ChartPoint(q, iso_price(q))
                for q in sample_range(
                    cfg.market_quantity_min, cfg.market_quantity_max, cfg.market_quantity_step
                )
            )
            root = locate_root(
                lambda q: iso_price(q) - demand(q), cfg.market_quantity_min, cfg.market_quantity_max
            )
            intersection = ChartPoint(root, demand(root)) if root is not None and root > 0 else None
            curves.append(IsoProfitCurve(level, points, intersection))

        reference_point = (
            ChartPoint(reference_quantity, reference_price) if reference_quantity > 0 else None
        )
        return IsoMarketResult(demand_points, tuple(curves), reference_point, reference_price)

    # -------------------------------------------------------------------------
    # Фирмы
    # -------------------------------------------------------------------------

    def _firm_result(
        self,
        context: _FirmContext,
        profit_levels: Sequence[float],
        reference_price: float,
    ) -> IsoFirmResult:
        cfg = self.config
        curves = []
        for level in profit_levels:
            iso_price = self._iso_price_function(context.cost, level)
            points = tuple(
                ChartPoint(q, iso_price(q))
                for q in sample_range(
                    cfg.firm_quantity_min, cfg.firm_quantity_max, cfg.firm_quantity_step
                )
            )
            root = locate_root(
                lambda q: iso_price(q) - reference_price,
                cfg.firm_quantity_min,
                cfg.firm_quantity_max,
            )
            intersection = (
                ChartPoint(root, reference_price) if root is not None and root > 0 else None
            )
            curves.append(IsoProfitCurve(level, points, intersection))

        optimal_quantity = self._quantity_at_price(context, reference_price)
        optimal_point: Optional[ChartPoint] = None
        if optimal_quantity > 0:
            profit = safe(reference_price * optimal_quantity - context.cost(optimal_quantity))
            optimal_point = ChartPoint(optimal_quantity, reference_price)
        else:
            profit = -context.fixed_cost

        return IsoFirmResult(
            name=context.name,
            curves=tuple(curves),
            optimal_point=optimal_point,
            optimal_quantity=optimal_quantity,
            optimal_profit=profit,
            status=self._status(profit),
        )

    def _status(self, profit: float) -> IsoProfitStatus:
        if profit > self.config.profit_epsilon:
            return IsoProfitStatus.POSITIVE
        if profit < -self.config.profit_epsilon:
            return IsoProfitStatus.NEGATIVE
        return IsoProfitStatus.ZERO

    def _iso_price_function(self, cost: Function, profit_level: float) -> Callable[[float], float]:
        """P(q) = (C(q) + π) / q, q ограничено снизу min_quantity."""
        min_quantity = self.config.min_quantity

        def iso_price(quantity: float) -> float:
            quantity = max(quantity, min_quantity)
            return safe((cost(quantity) + profit_level) / quantity)

        return iso_price


def calculate_iso_benefit(parameters: IsoBenefitParameters) -> IsoBenefitResult:
    """Расчёт изо-прибыли с конфигурацией по умолчанию."""
    return IsoBenefitCalculator().calculate(parameters)
