"""
Contract Validation Module

JSON Schema контракты результатов калькуляторов econcurves.
"""

from .validators import (
    ContractValidator,
    ElasticityResultValidator,
    FirmResultValidator,
    IsoBenefitResultValidator,
    MarketFirmResultValidator,
    MarketResultValidator,
    MonopolyResultValidator,
    SchemaLoader,
    ValidationError,
    to_payload,
    validate_elasticity_result,
    validate_firm_result,
    validate_iso_benefit_result,
    validate_market_firm_result,
    validate_market_result,
    validate_monopoly_result,
    validate_result,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MarketResultValidator",
    "MonopolyResultValidator",
    "FirmResultValidator",
    "MarketFirmResultValidator",
    "ElasticityResultValidator",
    "IsoBenefitResultValidator",
    "ValidationError",
    # Functions
    "to_payload",
    "validate_result",
    "validate_market_result",
    "validate_monopoly_result",
    "validate_firm_result",
    "validate_market_firm_result",
    "validate_elasticity_result",
    "validate_iso_benefit_result",
]
