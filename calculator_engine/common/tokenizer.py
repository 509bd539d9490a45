"""Split a typed arithmetic expression into tokens."""
import re
from typing import List

from calculator_engine.common.errors import TokenizeError
from calculator_engine.common.logger import logger
from calculator_engine.common.models import LeftParenToken, NumberToken, OperatorToken, RightParenToken, Token

OPERATOR_SYMBOLS = "+-*/"

_WHITESPACE = re.compile(r"\s+")
_INVALID_CHARACTER = re.compile(r"[^0-9.+\-*/()]")
# Two operators in a row, a leading '*' or '/', or a trailing operator
_INVALID_OPERATOR_PLACEMENT = re.compile(r"[+\-*/]{2,}|^[*/]|[+\-*/]$")
# Optional sign, then 12 / 12. / 1.25 / .25
_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)")


def tokenize(expr: str) -> List[Token]:
    """
    Convert an expression such as ``"(-3)+4*2"`` into tokens.

    Whitespace is ignored. A ``-`` belongs to the number that follows it only at
    the start of the expression or right after an operator or ``(``, otherwise it
    is the binary minus operator.

    :param str expr: Expression text

    :return: Tokens in reading order (empty for an empty expression)
    :rtype: List[Token]
    :raises TokenizeError: On invalid characters, malformed numerals or misplaced operators
    """
    expr = _WHITESPACE.sub("", expr)

    if _INVALID_CHARACTER.search(expr):
        raise TokenizeError(f"Invalid characters in expression: {expr!r}")
    if _INVALID_OPERATOR_PLACEMENT.search(expr):
        raise TokenizeError(f"Invalid sequence or placement of operators: {expr!r}")

    tokens: List[Token] = []
    negative_allowed = True
    position = 0

    while position < len(expr):
        match = _NUMBER.match(expr, position)
        if match and (negative_allowed or not match.group().startswith("-")):
            text = match.group()
            tokens.append(NumberToken(value=float(text), text=text))
            position = match.end()
            negative_allowed = False
            continue

        char = expr[position]
        if char in OPERATOR_SYMBOLS:
            tokens.append(OperatorToken(symbol=char))
            negative_allowed = True
        elif char == "(":
            tokens.append(LeftParenToken())
            negative_allowed = True
        elif char == ")":
            tokens.append(RightParenToken())
            negative_allowed = False
        else:
            raise TokenizeError(f"Cannot process character at index {position}: {expr[position:]!r}")
        position += 1

    if expr and not tokens:
        raise TokenizeError(f"Failed to tokenize non-empty expression: {expr!r}")
    if tokens and isinstance(tokens[-1], OperatorToken):
        raise TokenizeError(f"Expression cannot end with an operator: {expr!r}")

    logger.debug(f"🔤 Tokens: {[token.text for token in tokens]}")
    return tokens
