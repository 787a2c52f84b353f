"""
CompiledExpression — выражение в постфиксной записи

Плоская неизменяемая последовательность инструкций (константа, переменная q,
бинарный оператор). Вычисление использует только локальный стек, поэтому один
экземпляр можно вычислять многократно и параллельно.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from econcurves.core.expressions.errors import ExpressionStateError


class InstructionType(str, Enum):
    """Тип постфиксной инструкции"""

    CONSTANT = "constant"
    VARIABLE = "variable"
    OPERATOR = "operator"


@dataclass(frozen=True)
class Instruction:
    """Постфиксная инструкция."""

    type: InstructionType
    value: float = 0.0
    operator: str = ""

    def __str__(self) -> str:
        if self.type is InstructionType.CONSTANT:
            return repr(self.value)
        if self.type is InstructionType.VARIABLE:
            return "q"
        return self.operator


def _power(base: float, exponent: float) -> float:
    """
    Вещественное возведение в степень без исключений.

    Выход из области определения (отрицательное основание с дробным
    показателем) → NaN, переполнение → ±Inf, 0 в отрицательной степени → +Inf.
    """
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and float(exponent).is_integer() and int(exponent) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            return math.inf
        return math.nan


def _apply(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        return math.nan if right == 0 else left / right
    if op == "^":
        return _power(left, right)
    raise ExpressionStateError(f"Unsupported operator {op!r}")


class CompiledExpression:
    """
    Выражение от одной переменной q, готовое к вычислению.

    Создаётся только парсером (parse/try_parse). Для выражений, прошедших
    разбор, evaluate() не выбрасывает исключений ни для какого конечного q:
    деление на ноль даёт NaN, переполнение — ±Inf.
    """

    __slots__ = ("_instructions", "_source")

    def __init__(self, instructions: Sequence[Instruction], source: str = ""):
        self._instructions = tuple(instructions)
        self._source = source

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self._instructions

    @property
    def source(self) -> str:
        """Исходная строка выражения."""
        return self._source

    def evaluate(self, q: float) -> float:
        """
        Вычисление выражения в точке q.

        Args:
            q: Значение переменной

        Returns:
            Значение выражения (может быть NaN/Inf)

        Raises:
            ExpressionStateError: Если постфиксная программа повреждена
        """
        q = float(q)
        stack: list[float] = []
        for instruction in self._instructions:
            if instruction.type is InstructionType.CONSTANT:
                stack.append(instruction.value)
            elif instruction.type is InstructionType.VARIABLE:
                stack.append(q)
            else:
                if len(stack) < 2:
                    raise ExpressionStateError("Invalid expression state.")
                right = stack.pop()
                left = stack.pop()
                stack.append(_apply(instruction.operator, left, right))

        if len(stack) != 1:
            raise ExpressionStateError("Expression did not reduce to a single value.")

        return stack[0]

    def __call__(self, q: float) -> float:
        return self.evaluate(q)

    def to_postfix(self) -> str:
        """Постфиксная запись через пробел (для диагностики)."""
        return " ".join(str(instruction) for instruction in self._instructions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledExpression):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:
        return f"CompiledExpression({self._source!r})"
