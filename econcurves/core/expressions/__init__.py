"""
Expression engine: строка от q → неизменяемое постфиксное выражение.
"""

from econcurves.core.expressions.compiled import (
    CompiledExpression,
    Instruction,
    InstructionType,
)
from econcurves.core.expressions.errors import (
    ExpressionParseError,
    ExpressionStateError,
    ParseError,
    ParseErrorKind,
)
from econcurves.core.expressions.parser import (
    PRECEDENCE,
    insert_implicit_multiplication,
    parse,
    to_postfix,
    tokenize,
    try_parse,
)
from econcurves.core.expressions.tokens import Token, TokenType

__all__ = [
    # Types
    "CompiledExpression",
    "Instruction",
    "InstructionType",
    "Token",
    "TokenType",
    # Errors
    "ExpressionParseError",
    "ExpressionStateError",
    "ParseError",
    "ParseErrorKind",
    # Parsing
    "PRECEDENCE",
    "insert_implicit_multiplication",
    "parse",
    "to_postfix",
    "tokenize",
    "try_parse",
]
