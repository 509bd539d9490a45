"""Route user actions to the input processor."""
from typing import Optional

from calculator_engine.common.models import Action, ActionType, SessionState
from calculator_engine.engine.input_processor import InputProcessor


def _bindings() -> dict[str, Action]:
    bindings: dict[str, Action] = {
        digit: Action(type=ActionType.NUMBER, id=f"digit-{digit}", key=digit) for digit in "0123456789"
    }
    for symbol, name in (("+", "add"), ("-", "subtract"), ("*", "multiply"), ("/", "divide")):
        bindings[symbol] = Action(type=ActionType.OPERATOR, id=name, key=symbol)
    bindings["."] = Action(type=ActionType.MODIFIER, id="decimal", key=".")
    for key in ("n", "_"):
        bindings[key] = Action(type=ActionType.MODIFIER, id="negative", key="±")
    for key in ("=", "Enter"):
        bindings[key] = Action(type=ActionType.RESULT, id="equals", key="=")
    for key in ("c", "Escape"):
        bindings[key] = Action(type=ActionType.RESET, id="clear", key="AC")
    return bindings


# Default key table, keyboard keys and button symbols alike
KEY_BINDINGS: dict[str, Action] = _bindings()


def action_for_key(key: str) -> Optional[Action]:
    """Look up the action bound to a key, None for keys without a binding."""
    return KEY_BINDINGS.get(key)


def reduce(processor: InputProcessor, state: SessionState, action: Action) -> SessionState:
    """
    Apply one action to the session state.

    :param InputProcessor processor: Processor holding the digit limit
    :param SessionState state: Current state
    :param Action action: Action to apply

    :return: New state
    :rtype: SessionState
    :raises ValueError: If the action type is unknown
    """
    if action.type == ActionType.RESET:
        return processor.reset()
    if action.type == ActionType.RESULT:
        return processor.compute_result(state, action.key)
    if action.type == ActionType.NUMBER:
        return processor.insert_digit(state, action.key)
    if action.type == ActionType.OPERATOR:
        return processor.insert_operator(state, action.key)
    if action.type == ActionType.MODIFIER:
        return processor.insert_modifier(state, action.id, action.key)
    raise ValueError(f"Unknown action: {action.type}")
