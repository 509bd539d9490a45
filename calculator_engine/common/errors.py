"""Errors raised by the expression pipeline."""
from enum import Enum


class ErrorKind(str, Enum):
    """Tag identifying which pipeline stage rejected an expression."""

    TOKENIZE = "tokenize"
    SYNTAX = "syntax"
    DIVISION_BY_ZERO = "division_by_zero"
    MALFORMED_POSTFIX = "malformed_postfix"


class CalculatorError(ValueError):
    """Base class for every error raised while evaluating an expression."""

    kind: ErrorKind


class TokenizeError(CalculatorError):
    """Invalid character, malformed numeral or misplaced operator."""

    kind = ErrorKind.TOKENIZE


class ExpressionSyntaxError(CalculatorError):
    """Mismatched or unclosed parentheses."""

    kind = ErrorKind.SYNTAX


class DivisionByZeroError(CalculatorError, ZeroDivisionError):
    """Right operand of a division is exactly zero."""

    kind = ErrorKind.DIVISION_BY_ZERO


class MalformedPostfixError(CalculatorError):
    """Wrong number of operands left on the value stack."""

    kind = ErrorKind.MALFORMED_POSTFIX
