"""Экономические калькуляторы: параметры → результат (кривые, точки, метрики, ошибки)"""

from econcurves.calculators.cost_formula import build_total_cost_formula, total_cost_expression
from econcurves.calculators.elasticity import (
    ElasticityCalculator,
    ElasticityConfig,
    ElasticityResult,
    calculate_elasticity,
)
from econcurves.calculators.firm import FirmCalculator, FirmConfig, FirmResult, calculate_firm
from econcurves.calculators.iso_benefit import (
    IsoBenefitCalculator,
    IsoBenefitConfig,
    IsoBenefitResult,
    IsoFirmResult,
    IsoMarketResult,
    IsoProfitCurve,
    IsoProfitStatus,
    calculate_iso_benefit,
)
from econcurves.calculators.market import (
    MarketCalculator,
    MarketConfig,
    MarketResult,
    calculate_market,
)
from econcurves.calculators.market_firm import (
    MarketFirmCalculator,
    MarketFirmConfig,
    MarketFirmResult,
    calculate_market_firm,
)
from econcurves.calculators.monopoly import (
    MonopolyCalculator,
    MonopolyConfig,
    MonopolyResult,
    calculate_monopoly,
)

__all__ = [
    # Market
    "MarketCalculator",
    "MarketConfig",
    "MarketResult",
    "calculate_market",
    # Monopoly
    "MonopolyCalculator",
    "MonopolyConfig",
    "MonopolyResult",
    "calculate_monopoly",
    # Firm
    "FirmCalculator",
    "FirmConfig",
    "FirmResult",
    "calculate_firm",
    # MarketFirm
    "MarketFirmCalculator",
    "MarketFirmConfig",
    "MarketFirmResult",
    "calculate_market_firm",
    # Elasticity
    "ElasticityCalculator",
    "ElasticityConfig",
    "ElasticityResult",
    "calculate_elasticity",
    # IsoBenefit
    "IsoBenefitCalculator",
    "IsoBenefitConfig",
    "IsoBenefitResult",
    "IsoFirmResult",
    "IsoMarketResult",
    "IsoProfitCurve",
    "IsoProfitStatus",
    "calculate_iso_benefit",
    # Cost formula
    "build_total_cost_formula",
    "total_cost_expression",
]
