"""
Default Scenarios — стандартные сценарии калькуляторов

Значения, с которыми открывается каждый калькулятор, и фабрики готовых
записей параметров для них.
"""

from typing import Final

from econcurves.core.domain.parameters import (
    ElasticityParameters,
    FirmMode,
    FirmParameters,
    IsoBenefitFirmParameters,
    IsoBenefitParameters,
    MarketCostFunctionType,
    MarketCostParameters,
    MarketFirmParameters,
    MarketParameters,
    MonopolyParameters,
)
from econcurves.core.expressions import parse

# =============================================================================
# РЫНОК
# =============================================================================

MARKET_DEMAND_EXPRESSION: Final[str] = "100 - 0.5q"
MARKET_SUPPLY_EXPRESSION: Final[str] = "20 + 0.5q"
MARKET_DEMAND_SHOCK: Final[float] = 0.0
MARKET_SUPPLY_SHOCK: Final[float] = 0.0
MARKET_TAX: Final[float] = 0.0

# Полиномиальные издержки фирмы на рынке
MARKET_COST_TYPE: Final[MarketCostFunctionType] = MarketCostFunctionType.QUADRATIC
MARKET_FIXED_COST: Final[float] = 50.0
MARKET_LINEAR_COST: Final[float] = 8.0
MARKET_QUADRATIC_COST: Final[float] = 0.4
MARKET_CUBIC_COST: Final[float] = 0.01
MARKET_MAX_QUANTITY: Final[float] = 100.0

# =============================================================================
# ФИРМА / МОНОПОЛИЯ / ЭЛАСТИЧНОСТЬ
# =============================================================================

FIRM_COST_EXPRESSION: Final[str] = "200 + 10q + 0.5q^2"
FIRM_PRICE: Final[float] = 40.0
FIRM_MODE: Final[FirmMode] = FirmMode.SHORT_RUN

MONOPOLY_DEMAND_EXPRESSION: Final[str] = "120 - q"
MONOPOLY_COST_EXPRESSION: Final[str] = "100 + 10q + 0.2q^2"

ELASTICITY_PRICE: Final[float] = 50.0

# =============================================================================
# ИЗО-ПРИБЫЛЬ
# =============================================================================

ISO_BENEFIT_FIRMS: Final[tuple[tuple[str, str], ...]] = (
    ("Firm A", "200 + 10q + 0.5q^2"),
    ("Firm B", "120 + 12q + 0.3q^2"),
    ("Firm C", "80 + 8q + 0.8q^2"),
)
ISO_FIRM_PROFIT_LEVELS: Final[tuple[float, ...]] = (-200.0, 0.0, 200.0)
ISO_MARKET_PROFIT_LEVELS: Final[tuple[float, ...]] = (-500.0, 0.0, 500.0)


# =============================================================================
# ФАБРИКИ
# =============================================================================


def default_market_parameters() -> MarketParameters:
    return MarketParameters(
        demand_inverse=parse(MARKET_DEMAND_EXPRESSION),
        supply_inverse=parse(MARKET_SUPPLY_EXPRESSION),
        demand_shock=MARKET_DEMAND_SHOCK,
        supply_shock=MARKET_SUPPLY_SHOCK,
        tax=MARKET_TAX,
    )


def default_market_cost_parameters(
    cost_type: MarketCostFunctionType = MARKET_COST_TYPE,
) -> MarketCostParameters:
    return MarketCostParameters(
        type=cost_type,
        fixed_cost=MARKET_FIXED_COST,
        linear_cost=MARKET_LINEAR_COST,
        quadratic_cost=MARKET_QUADRATIC_COST,
        cubic_cost=MARKET_CUBIC_COST,
    )


def default_market_firm_parameters(price: float) -> MarketFirmParameters:
    """Фирма рынка при цене равновесия price."""
    return MarketFirmParameters(
        cost=default_market_cost_parameters(),
        price=price,
        max_quantity=MARKET_MAX_QUANTITY,
    )


def default_firm_parameters(mode: FirmMode = FIRM_MODE) -> FirmParameters:
    return FirmParameters(
        total_cost=parse(FIRM_COST_EXPRESSION),
        price=FIRM_PRICE,
        mode=mode,
    )


def default_monopoly_parameters() -> MonopolyParameters:
    return MonopolyParameters(
        demand_inverse=parse(MONOPOLY_DEMAND_EXPRESSION),
        total_cost=parse(MONOPOLY_COST_EXPRESSION),
    )


def default_elasticity_parameters() -> ElasticityParameters:
    return ElasticityParameters(
        demand_inverse=parse(MARKET_DEMAND_EXPRESSION),
        demand_shock=MARKET_DEMAND_SHOCK,
        price=ELASTICITY_PRICE,
    )


def default_iso_benefit_parameters() -> IsoBenefitParameters:
    return IsoBenefitParameters(
        demand_inverse=parse(MARKET_DEMAND_EXPRESSION),
        demand_shock=MARKET_DEMAND_SHOCK,
        firms=tuple(
            IsoBenefitFirmParameters(name=name, total_cost=parse(expression))
            for name, expression in ISO_BENEFIT_FIRMS
        ),
        firm_profit_levels=ISO_FIRM_PROFIT_LEVELS,
        market_profit_levels=ISO_MARKET_PROFIT_LEVELS,
    )
