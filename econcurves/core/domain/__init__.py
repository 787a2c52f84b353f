"""
Domain models and value objects.

Contains chart primitives, calculator parameter records and default scenarios.
"""

from econcurves.core.domain.chart import AreaSamplePoint, ChartPoint
from econcurves.core.domain.parameters import (
    CalculatorParameters,
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

__all__ = [
    # Chart primitives
    "AreaSamplePoint",
    "ChartPoint",
    # Enums
    "FirmMode",
    "MarketCostFunctionType",
    # Parameters
    "CalculatorParameters",
    "ElasticityParameters",
    "FirmParameters",
    "IsoBenefitFirmParameters",
    "IsoBenefitParameters",
    "MarketCostParameters",
    "MarketFirmParameters",
    "MarketParameters",
    "MonopolyParameters",
]
