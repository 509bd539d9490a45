"""Test class InputProcessor."""

import pytest

from calculator_engine.common.models import SessionState
from calculator_engine.engine.input_processor import InputProcessor


@pytest.fixture
def processor() -> InputProcessor:
    """Processor with the reference digit limit."""
    return InputProcessor()


def press(processor: InputProcessor, state: SessionState, keys: str) -> SessionState:
    """Apply a compact key sequence: digits, operators, '.', 'n' (negative) and '='."""
    for key in keys:
        if key.isdigit():
            state = processor.insert_digit(state, key)
        elif key in "+-*/":
            state = processor.insert_operator(state, key)
        elif key == ".":
            state = processor.insert_modifier(state, "decimal", ".")
        elif key == "n":
            state = processor.insert_modifier(state, "negative", "±")
        elif key == "=":
            state = processor.compute_result(state, "=")
    return state


def test_reset_returns_initial_state(processor: InputProcessor) -> None:
    """reset always yields the same initial state."""
    busy = press(processor, processor.reset(), "12+3=")
    assert processor.reset() == SessionState(expression="", notation="0", history=(), is_dirty=False)
    assert processor.reset() == processor.reset()
    assert busy != processor.reset()


def test_operations_do_not_mutate_input(processor: InputProcessor) -> None:
    """Operations return a new state and leave their input untouched."""
    state = SessionState(expression="5", notation="5")
    processor.insert_digit(state, "3")
    processor.insert_operator(state, "+")
    processor.compute_result(state, "=")
    assert state == SessionState(expression="5", notation="5")


# --- insert_digit ---

def test_insert_digit_replaces_initial_zero(processor: InputProcessor) -> None:
    """The first digit replaces the sentinel zero."""
    state = processor.insert_digit(processor.reset(), "7")
    assert (state.expression, state.notation) == ("7", "7")


def test_insert_digit_appends(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "123")
    assert (state.expression, state.notation) == ("123", "123")


def test_insert_digit_leading_zero_not_repeated(processor: InputProcessor) -> None:
    """Zeros typed on a zero notation do not pile up."""
    state = press(processor, processor.reset(), "005")
    assert (state.expression, state.notation) == ("5", "5")


def test_insert_digit_after_operator_starts_new_operand(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+03")
    assert (state.expression, state.notation) == ("5+3", "3")


def test_insert_digit_respects_digit_limit() -> None:
    """With a digit limit of 3 the fourth digit is rejected."""
    processor = InputProcessor(digit_limit=3)
    state = press(processor, processor.reset(), "1234")
    assert (state.expression, state.notation) == ("123", "123")


def test_insert_digit_limit_ignores_sign_and_point() -> None:
    """Sign and decimal point do not count towards the digit limit."""
    processor = InputProcessor(digit_limit=3)
    state = press(processor, processor.reset(), "1.2n34")
    assert (state.expression, state.notation) == ("(-1.23)", "-1.23")


def test_insert_digit_inside_negative_float(processor: InputProcessor) -> None:
    """Digits typed after the point of a negative number stay inside its parentheses."""
    state = press(processor, processor.reset(), "4.n5")
    assert (state.expression, state.notation) == ("(-4.5)", "-4.5")


def test_insert_digit_inside_negative_integer(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "2+5n6")
    assert (state.expression, state.notation) == ("2+(-56)", "-56")


def test_insert_digit_after_result_starts_new_expression(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+3=")
    state = processor.insert_digit(state, "9")
    assert (state.expression, state.notation, state.is_dirty) == ("9", "9", False)
    assert state.history == ("5", "3", "8")


def test_insert_digit_rejects_non_numeral(processor: InputProcessor) -> None:
    with pytest.raises(ValueError):
        processor.insert_digit(processor.reset(), "12")


# --- insert_operator ---

def test_insert_operator_appends_and_records_history(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "12+")
    assert (state.expression, state.notation) == ("12+", "+")
    assert state.history == ("12",)


def test_insert_operator_on_empty_expression_uses_zero(processor: InputProcessor) -> None:
    state = processor.insert_operator(processor.reset(), "*")
    assert (state.expression, state.notation) == ("0*", "*")
    assert state.history == ("0",)


def test_insert_operator_replaces_previous_operator(processor: InputProcessor) -> None:
    """A second operator replaces the first one without consuming an operand."""
    state = press(processor, processor.reset(), "5+*-")
    assert (state.expression, state.notation) == ("5-", "-")
    assert state.history == ("5",)


def test_insert_operator_replaces_dangling_point(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "4.+")
    assert (state.expression, state.notation) == ("4+", "+")
    assert state.history == ("4.",)


def test_insert_operator_drops_point_inside_negative(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "4.n+")
    assert (state.expression, state.notation) == ("(-4)+", "+")


def test_insert_operator_after_negative_number(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "3n*2")
    assert state.expression == "(-3)*2"


def test_insert_operator_rejects_unknown_symbol(processor: InputProcessor) -> None:
    with pytest.raises(ValueError):
        processor.insert_operator(processor.reset(), "^")


# --- insert_modifier ---

def test_decimal_on_fresh_state(processor: InputProcessor) -> None:
    state = processor.insert_modifier(processor.reset(), "decimal", ".")
    assert (state.expression, state.notation) == ("0.", "0.")


def test_decimal_after_operator_prefixes_zero(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+.2")
    assert (state.expression, state.notation) == ("5+0.2", "0.2")


def test_decimal_only_once(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "1.2.3")
    assert (state.expression, state.notation) == ("1.23", "1.23")


def test_decimal_inside_negative(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "4n.5")
    assert (state.expression, state.notation) == ("(-4.5)", "-4.5")


def test_negative_wraps_trailing_number(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+12n")
    assert (state.expression, state.notation) == ("5+(-12)", "-12")


def test_negative_toggle_round_trips(processor: InputProcessor) -> None:
    """Pressing negative twice restores expression and notation."""
    state = SessionState(expression="5", notation="5")
    negated = processor.insert_modifier(state, "negative", "±")
    assert (negated.expression, negated.notation) == ("(-5)", "-5")
    restored = processor.insert_modifier(negated, "negative", "±")
    assert (restored.expression, restored.notation) == ("5", "5")


def test_negative_on_zero_is_noop(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "0n")
    assert (state.expression, state.notation) == ("0", "0")


def test_negative_on_operator_is_noop(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+n")
    assert (state.expression, state.notation) == ("5+", "+")


def test_negative_after_result_is_noop_on_fresh_state(processor: InputProcessor) -> None:
    """Negative pressed right after a result acts on a fresh zero, which it leaves alone."""
    state = press(processor, processor.reset(), "5+3=n")
    assert (state.expression, state.notation, state.is_dirty) == ("", "0", False)


def test_decimal_after_result_starts_new_number(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+3=.5")
    assert (state.expression, state.notation) == ("0.5", "0.5")


def test_insert_modifier_rejects_unknown_id(processor: InputProcessor) -> None:
    with pytest.raises(ValueError):
        processor.insert_modifier(processor.reset(), "percent", "%")


# --- compute_result ---

def test_chained_computation(processor: InputProcessor) -> None:
    """5 + 3 = shows 8 and a following operator continues from the result."""
    state = press(processor, processor.reset(), "5+3=")
    assert (state.expression, state.notation, state.is_dirty) == ("5+3=8", "8", True)
    assert state.history == ("5", "3", "8")

    state = processor.insert_operator(state, "*")
    assert (state.expression, state.notation, state.is_dirty) == ("8*", "*", False)

    state = press(processor, state, "2=")
    assert (state.expression, state.notation) == ("8*2=16", "16")


@pytest.mark.parametrize("keys,expression,notation", [
    ("3+4*2=", "3+4*2=11", "11"),
    ("3n+4=", "(-3)+4=1", "1"),
    ("1/3=", "1/3=0.33333333333", "0.33333333333"),
    (".1+.2=", "0.1+0.2=0.3", "0.3"),
    ("7-9=", "7-9=-2", "-2"),
    ("5*2n=", "5*(-2)=-10", "-10"),
])
def test_compute_result_values(processor: InputProcessor, keys: str, expression: str, notation: str) -> None:
    state = press(processor, processor.reset(), keys)
    assert (state.expression, state.notation) == (expression, notation)


def test_compute_result_trims_trailing_operator(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+3*=")
    assert (state.expression, state.notation) == ("5+3=8", "8")


def test_compute_result_trims_trailing_point(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+3.=")
    assert (state.expression, state.notation) == ("5+3=8", "8")


def test_compute_result_single_literal(processor: InputProcessor) -> None:
    """A lone number is re-displayed unchanged, without '=' and result."""
    state = press(processor, processor.reset(), "42=")
    assert (state.expression, state.notation, state.is_dirty) == ("42", "42", True)


def test_compute_result_single_negative_literal(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "3n=")
    assert (state.expression, state.notation) == ("(-3)", "-3")


def test_compute_result_on_fresh_state(processor: InputProcessor) -> None:
    state = processor.compute_result(processor.reset(), "=")
    assert (state.expression, state.notation, state.is_dirty) == ("0", "0", True)
    assert state.history == ("0", "0")


def test_compute_result_division_by_zero(processor: InputProcessor) -> None:
    """Errors show as ERROR and keep the expression for correction."""
    state = press(processor, processor.reset(), "5/0=")
    assert (state.expression, state.notation, state.is_dirty) == ("5/0", "ERROR", True)
    assert state.history == ("5", "0", "ERROR")


def test_operator_after_error_starts_from_zero(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5/0=+2=")
    assert (state.expression, state.notation) == ("0+2=2", "2")


def test_digit_after_error_starts_new_expression(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5/0=7")
    assert (state.expression, state.notation, state.is_dirty) == ("7", "7", False)


def test_compute_result_exponential_overflow(processor: InputProcessor) -> None:
    """Results beyond the digit limit render in exponential form."""
    state = press(processor, processor.reset(), "999999999999*999999999999=")
    assert state.notation == "1.00e+24"
    assert state.expression == "999999999999*999999999999=1.00e+24"


def test_equals_after_exponential_result_is_error(processor: InputProcessor) -> None:
    """An exponential result cannot be evaluated again, so a second equals shows ERROR."""
    state = press(processor, processor.reset(), "999999999999*999999999999==")
    assert (state.expression, state.notation, state.is_dirty) == ("1.00e+24", "ERROR", True)
    assert state.history[-2:] == ("1.00e+24", "ERROR")


def test_compute_result_small_digit_limit() -> None:
    processor = InputProcessor(digit_limit=3)
    state = press(processor, processor.reset(), "999*2=")
    assert state.notation == "2.00e+03"


def test_repeated_equals_keeps_result(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "5+3==")
    assert (state.expression, state.notation) == ("8", "8")
    assert state.history == ("5", "3", "8", "8", "8")


def test_custom_equals_symbol(processor: InputProcessor) -> None:
    state = press(processor, processor.reset(), "2*3")
    state = processor.compute_result(state, "→")
    assert state.expression == "2*3→6"


def test_processor_rejects_invalid_digit_limit() -> None:
    with pytest.raises(ValueError):
        InputProcessor(digit_limit=0)
