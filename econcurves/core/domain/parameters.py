"""
Calculator Parameters — входные записи калькуляторов

Immutable Pydantic модели (frozen=True). Создаются заново на каждый расчёт
и никогда не изменяются. Выражения передаются уже разобранными
(CompiledExpression); разбор строк — ответственность вызывающего слоя.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from econcurves.core.expressions import CompiledExpression
from econcurves.core.math.numerical_safeguards import is_valid_float


# =============================================================================
# ENUMS
# =============================================================================


class FirmMode(str, Enum):
    """Горизонт анализа фирмы"""

    SHORT_RUN = "short_run"
    LONG_RUN = "long_run"


class MarketCostFunctionType(str, Enum):
    """Вид полиномиальной функции издержек"""

    QUADRATIC = "quadratic"
    CUBIC = "cubic"


# =============================================================================
# BASE
# =============================================================================


def _require_finite(v: float) -> float:
    if not is_valid_float(v):
        raise ValueError(f"value must be a finite number, got {v}")
    return v


class CalculatorParameters(BaseModel):
    """Базовая модель параметров: неизменяемая, допускает CompiledExpression."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


# =============================================================================
# MARKET / MONOPOLY / FIRM / ELASTICITY
# =============================================================================


class MarketParameters(CalculatorParameters):
    """
    Рынок: обратные функции спроса и предложения, шоки и потоварный налог.

    Шок спроса сдвигает P(q) вверх, шок предложения сдвигает P(q) вниз.
    """

    demand_inverse: CompiledExpression = Field(..., description="Обратная функция спроса P_d(q)")
    supply_inverse: CompiledExpression = Field(..., description="Обратная функция предложения P_s(q)")
    demand_shock: float = Field(0.0, description="Аддитивный сдвиг спроса")
    supply_shock: float = Field(0.0, description="Аддитивный сдвиг предложения")
    tax: float = Field(0.0, description="Потоварный налог")

    @field_validator("demand_shock", "supply_shock", "tax")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)


class MonopolyParameters(CalculatorParameters):
    """Монополия: обратный спрос и функция общих издержек."""

    demand_inverse: CompiledExpression = Field(..., description="Обратная функция спроса P(q)")
    total_cost: CompiledExpression = Field(..., description="Общие издержки C(q)")


class FirmParameters(CalculatorParameters):
    """Конкурентная фирма: общие издержки, рыночная цена и горизонт."""

    total_cost: CompiledExpression = Field(..., description="Общие издержки C(q)")
    price: float = Field(..., description="Рыночная цена")
    mode: FirmMode = Field(FirmMode.SHORT_RUN, description="Краткосрочный/долгосрочный период")

    @field_validator("price")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)


class ElasticityParameters(CalculatorParameters):
    """Точечная эластичность спроса при заданной цене."""

    demand_inverse: CompiledExpression = Field(..., description="Обратная функция спроса P(q)")
    demand_shock: float = Field(0.0, description="Аддитивный сдвиг спроса")
    price: float = Field(..., description="Цена, при которой считается эластичность")

    @field_validator("demand_shock", "price")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)


# =============================================================================
# MARKET FIRM (полиномиальные издержки)
# =============================================================================


class MarketCostParameters(BaseModel):
    """
    Коэффициенты полиномиальных издержек.

    C(q) = fixed + linear·q + quadratic·q² (+ cubic·q³ для CUBIC)
    """

    type: MarketCostFunctionType = Field(
        MarketCostFunctionType.QUADRATIC, description="Вид функции издержек"
    )
    fixed_cost: float = Field(0.0, description="Постоянные издержки")
    linear_cost: float = Field(0.0, description="Коэффициент при q")
    quadratic_cost: float = Field(0.0, description="Коэффициент при q²")
    cubic_cost: float = Field(0.0, description="Коэффициент при q³ (только CUBIC)")

    model_config = {"frozen": True}

    @field_validator("fixed_cost", "linear_cost", "quadratic_cost", "cubic_cost")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)

    @property
    def effective_cubic_cost(self) -> float:
        """Кубический коэффициент с учётом вида функции (0 для QUADRATIC)."""
        return self.cubic_cost if self.type is MarketCostFunctionType.CUBIC else 0.0


class MarketFirmParameters(CalculatorParameters):
    """Фирма на рынке: полиномиальные издержки, цена и правая граница графика."""

    cost: MarketCostParameters = Field(..., description="Коэффициенты издержек")
    price: float = Field(..., description="Рыночная цена")
    max_quantity: float = Field(100.0, gt=0, description="Правая граница по q")

    @field_validator("price", "max_quantity")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)


# =============================================================================
# ISO-BENEFIT
# =============================================================================


class IsoBenefitFirmParameters(CalculatorParameters):
    """Фирма для анализа изо-прибыли."""

    name: str = Field("Firm", description="Отображаемое имя фирмы")
    total_cost: CompiledExpression = Field(..., description="Общие издержки C(q)")

    @field_validator("name")
    @classmethod
    def default_blank_name(cls, v: str) -> str:
        return v.strip() or "Firm"


class IsoBenefitParameters(CalculatorParameters):
    """
    Изо-прибыль: рыночный спрос, набор фирм и уровни целевой прибыли.

    Требуется хотя бы одна фирма.
    """

    demand_inverse: CompiledExpression = Field(..., description="Обратная функция спроса P(Q)")
    demand_shock: float = Field(0.0, description="Аддитивный сдвиг спроса")
    firms: tuple[IsoBenefitFirmParameters, ...] = Field(..., min_length=1, description="Фирмы")
    firm_profit_levels: tuple[float, ...] = Field(
        ..., description="Уровни прибыли для кривых отдельных фирм"
    )
    market_profit_levels: tuple[float, ...] = Field(
        ..., description="Уровни прибыли для кривых рынка"
    )

    @field_validator("demand_shock")
    @classmethod
    def validate_finite(cls, v: float) -> float:
        return _require_finite(v)

    @field_validator("firm_profit_levels", "market_profit_levels")
    @classmethod
    def validate_levels(cls, v: tuple[float, ...]) -> tuple[float, ...]:
        for level in v:
            _require_finite(level)
        return v
