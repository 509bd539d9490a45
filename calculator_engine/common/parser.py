"""Parse and evaluate arithmetic expressions safely."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, List, Tuple

from calculator_engine.common.errors import (
    CalculatorError,
    DivisionByZeroError,
    ExpressionSyntaxError,
    MalformedPostfixError,
    TokenizeError,
)
from calculator_engine.common.logger import logger
from calculator_engine.common.models import (
    LeftParenToken,
    NumberToken,
    OperationResult,
    OperatorToken,
    RightParenToken,
    Token,
)
from calculator_engine.common.tokenizer import tokenize


# Type alias for operator functions (taking two floats, returning a float)
OperatorFn: ABCCallable[[float, float], float] = Callable[[float, float], float]

# Mapping of operator symbols to (precedence, function), all left-associative
OPERATORS: dict[str, Tuple[int, OperatorFn]] = {
    "+": (1, operator.add),
    "-": (1, operator.sub),
    "*": (2, operator.mul),
    "/": (2, operator.truediv),
}


class ExpressionParser:
    """
    Parse and evaluate arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - Safe, deterministic computation

    Algorithm:
        1. Tokenize, recognising negative literals such as ``(-3)``
        2. Convert to Reverse Polish Notation (RPN) using Shunting-yard
        3. Evaluate RPN using a stack

    The Shunting-yard algorithm converts an infix expression into Reverse Polish Notation (RPN), allowing safe, stack-based evaluation without parentheses.
    It handles operator precedence by temporarily storing operators on a stack and outputting them in the correct order.

    Examples:
        - Infix expression (standard notation): 3 + 4 * 2
        - Corresponding Reverse Polish Notation (RPN): 3 4 2 * +
        - Infix expression with parentheses: (2 + 3) * 4
        - Corresponding Reverse Polish Notation (RPN): 2 3 + 4 *
    """

    @staticmethod
    def is_number(text: str) -> bool:
        """
        Determine if a text represents a finite numeric value.

        Supports integers, floating-point numbers and incomplete floats like ``"4."``.

        :param str text: Candidate text

        :return: True if text can be converted to a finite float, else False
        :rtype: bool
        """
        try:
            return math.isfinite(float(text))
        except ValueError:
            return False

    @staticmethod
    def to_rpn(tokens: List[Token]) -> List[Token]:
        """
        Convert a list of tokens into Reverse Polish Notation (RPN) using the Shunting-yard algorithm.

        :param List[Token] tokens: List of arithmetic tokens

        :return: List of tokens in RPN order, free of parentheses
        :rtype: List[Token]
        :raises ExpressionSyntaxError: If parentheses are mismatched
        """
        output: List[Token] = []
        stack: List[Token] = []

        for token in tokens:
            if isinstance(token, NumberToken):
                # Numbers are added directly to the output
                output.append(token)
            elif isinstance(token, OperatorToken):
                # Operator: pop operators from stack with higher or equal precedence, stopping at '('
                prec = OPERATORS[token.symbol][0]
                while (
                    stack
                    and isinstance(stack[-1], OperatorToken)
                    and OPERATORS[stack[-1].symbol][0] >= prec
                ):
                    output.append(stack.pop())
                stack.append(token)
            elif isinstance(token, LeftParenToken):
                stack.append(token)
            elif isinstance(token, RightParenToken):
                while stack and not isinstance(stack[-1], LeftParenToken):
                    output.append(stack.pop())
                if not stack:
                    raise ExpressionSyntaxError("Mismatched parentheses: ')' without matching '('")
                # Discard the '('
                stack.pop()

        # Append remaining operators in reverse order (stack top first)
        while stack:
            token = stack.pop()
            if isinstance(token, LeftParenToken):
                raise ExpressionSyntaxError("Mismatched parentheses: unclosed '('")
            output.append(token)

        logger.debug(f"🔁 Postfix: {[token.text for token in output]}")
        return output

    @staticmethod
    def evaluate_rpn(postfix: List[Token]) -> float:
        """
        Evaluate tokens in Reverse Polish Notation using a value stack.

        :param List[Token] postfix: Tokens in RPN order

        :return: Computed result as float
        :rtype: float
        :raises DivisionByZeroError: If a division has a right operand of exactly 0
        :raises MalformedPostfixError: If an operator lacks operands or operands remain
        """
        stack: List[float] = []
        for token in postfix:
            if isinstance(token, NumberToken):
                stack.append(token.value)
            elif isinstance(token, OperatorToken):
                # Operator requires two operands
                if len(stack) < 2:
                    raise MalformedPostfixError(f"Not enough operands for operator {token.symbol!r}")
                b: float = stack.pop()
                a: float = stack.pop()
                if token.symbol == "/" and b == 0:
                    raise DivisionByZeroError("Division by zero")
                stack.append(OPERATORS[token.symbol][1](a, b))
            else:
                raise MalformedPostfixError(f"Unexpected token in postfix expression: {token.text!r}")

        if len(stack) != 1:
            raise MalformedPostfixError(f"Invalid expression ({len(stack)} operands left on stack)")

        return stack[0]

    @staticmethod
    def evaluate(expr: str) -> float:
        """
        Evaluate an arithmetic expression safely.

        :param str expr: Arithmetic expression string

        :return: Computed result as float
        :rtype: float
        :raises CalculatorError: If expression is invalid or cannot be evaluated
        """
        tokens: List[Token] = tokenize(expr)

        if not tokens:
            raise TokenizeError("Empty expression")

        rpn: List[Token] = ExpressionParser.to_rpn(tokens)
        return ExpressionParser.evaluate_rpn(rpn)

    @staticmethod
    def calculate(expr: str) -> OperationResult:
        """
        Evaluate an expression, returning errors as a value instead of raising them.

        :param str expr: Arithmetic expression string

        :return: Result carrying either the value or the tagged error
        :rtype: OperationResult
        """
        try:
            result = ExpressionParser.evaluate(expr)
        except CalculatorError as exc:
            logger.warning(f"🧮❌ Could not evaluate {expr!r} ({exc.kind.value}): {exc}")
            return OperationResult(expression=expr, error=exc.kind, message=str(exc))

        logger.info(f"🧮✅ {expr} = {result}")
        return OperationResult(expression=expr, result=result)
