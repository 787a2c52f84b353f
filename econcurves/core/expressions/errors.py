"""
Expression Errors — ошибки разбора и вычисления выражений

Два уровня:
1. Ошибки разбора (пользовательский ввод) → ParseError / ExpressionParseError
2. Повреждённая постфиксная программа (дефект) → ExpressionStateError
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ParseErrorKind(str, Enum):
    """Категория ошибки разбора"""

    EMPTY_EXPRESSION = "empty_expression"
    INVALID_NUMBER = "invalid_number"
    UNEXPECTED_CHARACTER = "unexpected_character"
    UNBALANCED_PARENTHESIS = "unbalanced_parenthesis"
    MISSING_OPERAND = "missing_operand"


@dataclass(frozen=True)
class ParseError:
    """
    Результат неудачного разбора.

    position — смещение символа в исходной строке (None для пустого выражения).
    """

    kind: ParseErrorKind
    message: str
    position: Optional[int] = None

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (pos {self.position})"


class ExpressionParseError(ValueError):
    """
    Выражение не может быть разобрано.

    Сообщение исключения уже содержит позицию; структурированные данные
    доступны через атрибут error.
    """

    def __init__(self, error: ParseError):
        super().__init__(str(error))
        self.error = error

    @property
    def kind(self) -> ParseErrorKind:
        return self.error.kind

    @property
    def position(self) -> Optional[int]:
        return self.error.position


class ExpressionStateError(RuntimeError):
    """
    Постфиксная программа не сводится к одному значению.

    Не возникает для выражений, прошедших разбор: это внутренний дефект,
    а не ошибка пользователя.
    """
    pass
