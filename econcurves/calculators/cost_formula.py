"""
Cost Formula — текстовая запись полиномиальной функции издержек

build_total_cost_formula(params) → "CT(q)=50 + 8q + 0.4q^2"

Правила:
- нулевые слагаемые опускаются; постоянная часть пишется, если она не 0
  или если других слагаемых нет ("CT(q)=0")
- коэффициент 1 перед q-степенью не пишется ("q^2", "-q^3")
- минус у первого слагаемого приклеен к числу ("-2q + q^2")
- числа: не более DISPLAY_DECIMALS знаков после запятой, без хвостовых нулей
"""

from typing import Final, NamedTuple

from econcurves.core.domain.parameters import MarketCostFunctionType, MarketCostParameters

FORMULA_PREFIX: Final[str] = "CT(q)="

# Знаков после запятой в отображаемой формуле
DISPLAY_DECIMALS: Final[int] = 3

# Знаков после запятой в разбираемом выражении (точность коэффициентов)
EXPRESSION_DECIMALS: Final[int] = 12


class _Term(NamedTuple):
    sign: str
    text: str


def _format_number(value: float, decimals: int, decimal_separator: str = ".") -> str:
    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-0"):
        text = "0"
    return text.replace(".", decimal_separator)


def _build_terms(
    params: MarketCostParameters, decimals: int, decimal_separator: str
) -> list[_Term]:
    powers = [(params.linear_cost, "q"), (params.quadratic_cost, "q^2")]
    if params.type is MarketCostFunctionType.CUBIC:
        powers.append((params.cubic_cost, "q^3"))

    variable_terms = []
    for coefficient, variable in powers:
        if coefficient == 0:
            continue
        magnitude = abs(coefficient)
        coefficient_text = (
            "" if magnitude == 1 else _format_number(magnitude, decimals, decimal_separator)
        )
        variable_terms.append(_Term("-" if coefficient < 0 else "+", coefficient_text + variable))

    terms = []
    if params.fixed_cost != 0 or not variable_terms:
        terms.append(
            _Term(
                "-" if params.fixed_cost < 0 else "+",
                _format_number(abs(params.fixed_cost), decimals, decimal_separator),
            )
        )
    terms.extend(variable_terms)
    return terms


def _join_terms(terms: list[_Term]) -> str:
    parts = []
    for i, term in enumerate(terms):
        if i == 0:
            parts.append(term.sign + term.text if term.sign == "-" else term.text)
        else:
            parts.append(f"{term.sign} {term.text}")
    return " ".join(parts)


def build_total_cost_formula(params: MarketCostParameters, decimal_separator: str = ".") -> str:
    """
    Отображаемая формула общих издержек.

    Args:
        params: Коэффициенты издержек
        decimal_separator: Десятичный разделитель ("." или ",")

    Returns:
        Строка вида "CT(q)=50 + 8q + 0.4q^2"
    """
    terms = _build_terms(params, DISPLAY_DECIMALS, decimal_separator)
    return FORMULA_PREFIX + _join_terms(terms)


def total_cost_expression(params: MarketCostParameters) -> str:
    """Правая часть формулы издержек, пригодная для parse()."""
    return _join_terms(_build_terms(params, EXPRESSION_DECIMALS, "."))
