"""
Tokens — лексемы выражения

Лексемы создаются токенизатором и потребляются только парсером.
Каждая лексема хранит позицию в исходной строке для сообщений об ошибках.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final

# Допустимые бинарные операторы
OPERATORS: Final[frozenset[str]] = frozenset("+-*/^")

# Символы переменной (регистр не важен)
VARIABLE_CHARS: Final[frozenset[str]] = frozenset("qQ")


class TokenType(str, Enum):
    """Тип лексемы"""

    NUMBER = "number"
    VARIABLE = "variable"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


@dataclass(frozen=True)
class Token:
    """Лексема с позицией в исходной строке."""

    type: TokenType
    position: int
    number: float = 0.0
    operator: str = ""

    @classmethod
    def number_token(cls, value: float, position: int) -> "Token":
        return cls(TokenType.NUMBER, position, number=value)

    @classmethod
    def variable(cls, position: int) -> "Token":
        return cls(TokenType.VARIABLE, position)

    @classmethod
    def operator_token(cls, op: str, position: int) -> "Token":
        return cls(TokenType.OPERATOR, position, operator=op)

    @classmethod
    def left_paren(cls, position: int) -> "Token":
        return cls(TokenType.LEFT_PAREN, position)

    @classmethod
    def right_paren(cls, position: int) -> "Token":
        return cls(TokenType.RIGHT_PAREN, position)

    @property
    def ends_term(self) -> bool:
        """Может ли лексема закрывать операнд (слева от неявного умножения)."""
        return self.type in (TokenType.NUMBER, TokenType.VARIABLE, TokenType.RIGHT_PAREN)

    @property
    def starts_term(self) -> bool:
        """Может ли лексема открывать операнд (справа от неявного умножения)."""
        return self.type in (TokenType.NUMBER, TokenType.VARIABLE, TokenType.LEFT_PAREN)

    def __str__(self) -> str:
        if self.type is TokenType.NUMBER:
            return repr(self.number)
        if self.type is TokenType.VARIABLE:
            return "q"
        if self.type is TokenType.OPERATOR:
            return self.operator
        if self.type is TokenType.LEFT_PAREN:
            return "("
        return ")"
