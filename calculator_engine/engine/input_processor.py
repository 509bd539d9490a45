"""Turn calculator key presses into an editable arithmetic expression."""
import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from calculator_engine.common.config import DEFAULT_DIGIT_LIMIT
from calculator_engine.common.logger import logger
from calculator_engine.common.models import OperationResult, OperatorSymbol, SessionState
from calculator_engine.common.parser import OPERATORS, ExpressionParser
from calculator_engine.common.precision import count_digits, sanitize

MODIFIERS = ("decimal", "negative")

ERROR_NOTATION = "ERROR"

_TRAILING_OPERATOR = re.compile(r"[+\-*/]$")
# An operator following an operand, as opposed to the sign of a negative literal
_BINARY_OPERATOR = re.compile(r"[0-9.)][+\-*/]")


class InputProcessor(BaseModel):
    """
    State machine editing a calculator expression one key press at a time.

    Every operation is a pure function: it takes the current ``SessionState``
    and returns a new one, leaving the input untouched. Negative numbers are
    written into the expression as ``(-n)`` so the finished expression stays
    unambiguous for the tokenizer.

    Lifecycle of an expression:
        - digits, operators and modifiers extend ``expression``
        - ``compute_result`` evaluates it and marks the state dirty
        - the next digit or modifier starts a new expression, the next
          operator continues from the result
    """

    # The digit limit is fixed once the processor is built
    model_config = ConfigDict(frozen=True)

    digit_limit: int = Field(default=DEFAULT_DIGIT_LIMIT, ge=1, description="Maximum digits per entry or result")

    @staticmethod
    def reset() -> SessionState:
        """Return the initial state of a session."""
        return SessionState()

    @staticmethod
    def _wraps_negative(expression: str, notation: str) -> bool:
        """Whether the trailing term of the expression is ``notation`` written as ``(-n)``."""
        return notation.startswith("-") and expression.endswith(f"({notation})")

    @staticmethod
    def _resume(state: SessionState) -> Tuple[str, str]:
        """
        Pick the (expression, notation) pair an operator or result continues from.

        A dirty state continues from the last computed result, unless that result
        was an error, in which case it starts over from zero.
        """
        if not state.is_dirty:
            return state.expression, state.notation
        if ExpressionParser.is_number(state.notation):
            return (state.history[-1] if state.history else state.notation), state.notation
        return "", "0"

    def insert_digit(self, state: SessionState, digit: str) -> SessionState:
        """
        Append a digit to the number being typed.

        A lone ``0`` is replaced rather than extended, and a digit typed into a
        negative number goes inside its parentheses. Digits beyond the digit limit
        are ignored.

        :param SessionState state: Current state
        :param str digit: Single numeral ``"0"`` to ``"9"``

        :return: New state
        :rtype: SessionState
        :raises ValueError: If digit is not a single numeral
        """
        if len(digit) != 1 or digit not in "0123456789":
            raise ValueError(f"Not a digit: {digit!r}")

        expression, notation = ("", "0") if state.is_dirty else (state.expression, state.notation)
        is_number = ExpressionParser.is_number(notation)

        if is_number and count_digits(notation) >= self.digit_limit:
            return state.model_copy(update={"expression": expression, "notation": notation, "is_dirty": False})

        if notation == "0":
            expression = expression[:-1] + digit if expression.endswith("0") else expression + digit
            notation = digit
        elif not is_number:
            # Notation holds an operator, a new operand starts here
            expression += digit
            notation = digit
        elif self._wraps_negative(expression, notation):
            expression = f"{expression[:-1]}{digit})"
            notation += digit
        else:
            expression += digit
            notation += digit

        return state.model_copy(update={"expression": expression, "notation": notation, "is_dirty": False})

    def insert_operator(self, state: SessionState, symbol: OperatorSymbol) -> SessionState:
        """
        Append a binary operator, or replace the operator typed just before it.

        The number it closes is pushed onto the history. An incomplete float such
        as ``4.`` loses its dangling decimal point.

        :param SessionState state: Current state
        :param str symbol: One of ``+ - * /``

        :return: New state
        :rtype: SessionState
        :raises ValueError: If symbol is not an arithmetic operator
        """
        if symbol not in OPERATORS:
            raise ValueError(f"Unknown operator: {symbol!r}")

        expression, notation = self._resume(state)

        if not ExpressionParser.is_number(notation):
            expression = _TRAILING_OPERATOR.sub(symbol, expression)
            return state.model_copy(update={"expression": expression, "notation": symbol, "is_dirty": False})

        if expression.endswith("."):
            expression = expression[:-1] + symbol
        elif expression.endswith(".)"):
            expression = f"{expression[:-2]}){symbol}"
        else:
            expression = (expression or "0") + symbol

        return SessionState(
            expression=expression,
            notation=symbol,
            history=(*state.history, notation),
            is_dirty=False,
        )

    def insert_modifier(self, state: SessionState, modifier_id: str, symbol: str = ".") -> SessionState:
        """
        Apply the ``decimal`` or ``negative`` modifier to the number being typed.

        ``decimal`` appends ``symbol`` once per number, starting a ``0.`` when no
        number is being typed. ``negative`` toggles the trailing number between
        ``n`` and ``(-n)``, and does nothing on zero.

        :param SessionState state: Current state
        :param str modifier_id: ``"decimal"`` or ``"negative"``
        :param str symbol: Symbol of the pressed key, appended by ``decimal``

        :return: New state
        :rtype: SessionState
        :raises ValueError: If modifier_id is unknown
        """
        if modifier_id not in MODIFIERS:
            raise ValueError(f"Unknown modifier: {modifier_id!r}")

        expression, notation = ("", "0") if state.is_dirty else (state.expression, state.notation)
        is_number = ExpressionParser.is_number(notation)

        if modifier_id == "decimal" and "." not in notation:
            if not is_number:
                expression += "0" + symbol
                notation = "0" + symbol
            elif not expression:
                expression = notation + symbol
                notation += symbol
            elif self._wraps_negative(expression, notation):
                expression = f"{expression[:-1]}{symbol})"
                notation += symbol
            else:
                expression += symbol
                notation += symbol

        elif modifier_id == "negative" and is_number and expression:
            if notation.startswith("-"):
                wrapped = f"({notation})"
                if expression.endswith(wrapped):
                    notation = notation[1:]
                    expression = expression[: -len(wrapped)] + notation
            elif notation != "0" and expression.endswith(notation):
                expression = f"{expression[: -len(notation)]}(-{notation})"
                notation = f"-{notation}"

        return state.model_copy(update={"expression": expression, "notation": notation, "is_dirty": False})

    def compute_result(self, state: SessionState, equals_symbol: str = "=") -> SessionState:
        """
        Evaluate the expression and show its result.

        A single trailing operator or decimal point is dropped before evaluation.
        Evaluation errors are shown as the ``ERROR`` notation, the expression is
        kept for correction. The resulting state is dirty.

        :param SessionState state: Current state
        :param str equals_symbol: Symbol placed between expression and result

        :return: New state
        :rtype: SessionState
        """
        expression, _ = self._resume(state)

        valid_expression: str = expression or "0"
        if valid_expression[-1] in "+-*/.":
            valid_expression = valid_expression[:-1] or "0"

        outcome: OperationResult = ExpressionParser.calculate(valid_expression)

        if outcome.ok:
            _, final_result = sanitize(outcome.result, self.digit_limit)
            if _BINARY_OPERATOR.search(expression):
                expression = f"{valid_expression}{equals_symbol}{final_result}"
            else:
                expression = valid_expression
        else:
            final_result = ERROR_NOTATION
            expression = valid_expression

        logger.debug(f"🟰 {expression!r} -> {final_result}")
        return SessionState(
            expression=expression,
            notation=final_result,
            history=(*state.history, state.notation, final_result),
            is_dirty=True,
        )
