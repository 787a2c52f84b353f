"""
Expression Parser — строка → CompiledExpression

Этапы:
1. Токенизация (числа, q/Q, скобки, операторы + - * / ^); унарный плюс
   отбрасывается, унарный минус переписывается в «0 -»
2. Вставка неявного умножения: 2q, q(q+1), (q+1)(q-1)
3. Shunting-yard → постфиксная запись
   Приоритеты: ^ (3, правоассоциативный) > * / (2) > + - (1)

Соглашение по унарному минусу: «0 -» связывает слабее всего, поэтому
-q^2 = -(q^2), а 2^-1 = (2^0) - 1 = 0.
"""

from typing import Final, Union

from econcurves.core.expressions.compiled import (
    CompiledExpression,
    Instruction,
    InstructionType,
)
from econcurves.core.expressions.errors import (
    ExpressionParseError,
    ParseError,
    ParseErrorKind,
)
from econcurves.core.expressions.tokens import (
    OPERATORS,
    VARIABLE_CHARS,
    Token,
    TokenType,
)
from econcurves.utils.logger import get_logger

logger = get_logger(__name__)

# =============================================================================
# ПРИОРИТЕТЫ ОПЕРАТОРОВ
# =============================================================================

PRECEDENCE: Final[dict[str, int]] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "^": 3,
}

RIGHT_ASSOCIATIVE: Final[frozenset[str]] = frozenset("^")


# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================


def parse(raw: str) -> CompiledExpression:
    """
    Разбор выражения от q.

    Args:
        raw: Исходная строка (например, "100 - 0.5q")

    Returns:
        CompiledExpression

    Raises:
        ExpressionParseError: Если выражение пустое или синтаксически неверно

    Examples:
        >>> parse("2+3*4").evaluate(0)
        14.0
        >>> parse("(q+1)(q-1)").evaluate(3)
        8.0
    """
    if raw is None or not raw.strip():
        raise ExpressionParseError(
            ParseError(ParseErrorKind.EMPTY_EXPRESSION, "The expression is empty.")
        )

    try:
        tokens = insert_implicit_multiplication(tokenize(raw))
        instructions = to_postfix(tokens)
    except ExpressionParseError as exc:
        logger.debug(
            "expression rejected",
            extra={"expression": raw, "kind": exc.kind.value, "position": exc.position},
        )
        raise

    return CompiledExpression(instructions, source=raw.strip())


def try_parse(raw: str) -> Union[CompiledExpression, ParseError]:
    """
    Разбор без исключения: возвращает CompiledExpression или ParseError.

    Examples:
        >>> try_parse("(q + 1").kind
        <ParseErrorKind.UNBALANCED_PARENTHESIS: 'unbalanced_parenthesis'>
    """
    try:
        return parse(raw)
    except ExpressionParseError as exc:
        return exc.error


# =============================================================================
# ТОКЕНИЗАЦИЯ
# =============================================================================


def _fail(kind: ParseErrorKind, message: str, position: int) -> ExpressionParseError:
    return ExpressionParseError(ParseError(kind, message, position))


def _is_unary_context(tokens: list[Token]) -> bool:
    return not tokens or tokens[-1].type in (TokenType.OPERATOR, TokenType.LEFT_PAREN)


def tokenize(raw: str) -> list[Token]:
    """
    Токенизация слева направо.

    Числовой литерал: цифры и не более одной точки; вторая точка завершает
    литерал (не ошибка). Литерал без цифр (".") или с не-ASCII цифрами
    ("٣") → INVALID_NUMBER в позиции начала литерала.

    Raises:
        ExpressionParseError: INVALID_NUMBER / UNEXPECTED_CHARACTER
    """
    tokens: list[Token] = []
    i = 0
    length = len(raw)

    while i < length:
        c = raw[i]

        if c.isspace():
            i += 1
            continue

        if c.isdigit() or c == ".":
            start = i
            has_decimal = c == "."
            i += 1
            while i < length:
                nxt = raw[i]
                if nxt.isdigit():
                    i += 1
                elif nxt == "." and not has_decimal:
                    has_decimal = True
                    i += 1
                else:
                    break

            literal = raw[start:i]
            try:
                # float() принимает и не-ASCII цифры; допустимы только 0-9
                if not literal.isascii():
                    raise ValueError(literal)
                value = float(literal)
            except ValueError:
                raise _fail(ParseErrorKind.INVALID_NUMBER, "Invalid number.", start) from None

            tokens.append(Token.number_token(value, start))
            continue

        if c in VARIABLE_CHARS:
            tokens.append(Token.variable(i))
        elif c == "(":
            tokens.append(Token.left_paren(i))
        elif c == ")":
            tokens.append(Token.right_paren(i))
        elif c in OPERATORS:
            if c in "+-" and _is_unary_context(tokens):
                if c == "-":
                    # Унарный минус: 0 - x
                    tokens.append(Token.number_token(0.0, i))
                    tokens.append(Token.operator_token("-", i))
            else:
                tokens.append(Token.operator_token(c, i))
        else:
            raise _fail(
                ParseErrorKind.UNEXPECTED_CHARACTER,
                f"Unexpected character '{c}'.",
                i,
            )

        i += 1

    return tokens


def insert_implicit_multiplication(tokens: list[Token]) -> list[Token]:
    """
    Вставка «*» между лексемой, закрывающей операнд, и лексемой, открывающей операнд.

    Синтетический оператор получает позицию правой лексемы.
    """
    if len(tokens) < 2:
        return list(tokens)

    result: list[Token] = []
    for current, nxt in zip(tokens, tokens[1:]):
        result.append(current)
        if current.ends_term and nxt.starts_term:
            result.append(Token.operator_token("*", nxt.position))
    result.append(tokens[-1])

    return result


# =============================================================================
# SHUNTING-YARD
# =============================================================================


class _PostfixBuilder:
    """Постфиксный вывод с отслеживанием глубины стека вычисления."""

    def __init__(self) -> None:
        self.instructions: list[Instruction] = []
        self.depth = 0

    def operand(self, instruction: Instruction) -> None:
        self.instructions.append(instruction)
        self.depth += 1

    def operator(self, token: Token) -> None:
        if self.depth < 2:
            raise _fail(
                ParseErrorKind.MISSING_OPERAND,
                f"Operator '{token.operator}' is missing an operand.",
                token.position,
            )
        self.instructions.append(Instruction(InstructionType.OPERATOR, operator=token.operator))
        self.depth -= 1


def _should_pop(top: Token, incoming: Token) -> bool:
    if top.type is not TokenType.OPERATOR:
        return False

    top_rank = PRECEDENCE[top.operator]
    incoming_rank = PRECEDENCE[incoming.operator]
    if top_rank > incoming_rank:
        return True
    return top_rank == incoming_rank and incoming.operator not in RIGHT_ASSOCIATIVE


def to_postfix(tokens: list[Token]) -> list[Instruction]:
    """
    Shunting-yard: инфиксные лексемы → постфиксные инструкции.

    Дополнительно проверяет арность: каждая полученная программа сводится
    ровно к одному значению.

    Raises:
        ExpressionParseError: UNBALANCED_PARENTHESIS для «)» без пары
            или незакрытой «(»; MISSING_OPERAND для оператора без операнда
            или пустых скобок
    """
    output = _PostfixBuilder()
    operators: list[Token] = []

    for token in tokens:
        if token.type is TokenType.NUMBER:
            output.operand(Instruction(InstructionType.CONSTANT, value=token.number))
        elif token.type is TokenType.VARIABLE:
            output.operand(Instruction(InstructionType.VARIABLE))
        elif token.type is TokenType.OPERATOR:
            while operators and _should_pop(operators[-1], token):
                output.operator(operators.pop())
            operators.append(token)
        elif token.type is TokenType.LEFT_PAREN:
            operators.append(token)
        else:
            while operators and operators[-1].type is not TokenType.LEFT_PAREN:
                output.operator(operators.pop())
            if not operators:
                raise _fail(
                    ParseErrorKind.UNBALANCED_PARENTHESIS,
                    "Unmatched closing parenthesis.",
                    token.position,
                )
            operators.pop()

    while operators:
        token = operators.pop()
        if token.type is TokenType.LEFT_PAREN:
            raise _fail(
                ParseErrorKind.UNBALANCED_PARENTHESIS,
                "Unclosed parenthesis.",
                token.position,
            )
        output.operator(token)

    if output.depth != 1:
        position = tokens[-1].position if tokens else 0
        raise _fail(ParseErrorKind.MISSING_OPERAND, "The expression has no value.", position)

    return output.instructions
