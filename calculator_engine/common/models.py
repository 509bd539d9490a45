"""Pydantic models for tokens, engine results and the editing session."""
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calculator_engine.common.errors import ErrorKind

OperatorSymbol = Literal["+", "-", "*", "/"]


class NumberToken(BaseModel):
    """A numeric literal, possibly negative (``-3``) or incomplete (``4.``)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number"] = "number"
    value: float = Field(..., description="Numeric value of the literal")
    text: str = Field(..., description="Literal as it appeared in the expression")


class OperatorToken(BaseModel):
    """A binary arithmetic operator."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["operator"] = "operator"
    symbol: OperatorSymbol

    @property
    def text(self) -> str:
        return self.symbol


class LeftParenToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["lparen"] = "lparen"

    @property
    def text(self) -> str:
        return "("


class RightParenToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rparen"] = "rparen"

    @property
    def text(self) -> str:
        return ")"


Token = Annotated[
    Union[NumberToken, OperatorToken, LeftParenToken, RightParenToken],
    Field(discriminator="kind"),
]


class OperationResult(BaseModel):
    """Outcome of evaluating one expression: either a result or a tagged error."""

    model_config = ConfigDict(frozen=True)

    expression: str = Field(..., description="Expression that was evaluated")
    result: Optional[float] = Field(default=None, description="Evaluated numeric result")
    error: Optional[ErrorKind] = Field(default=None, description="Stage that rejected the expression")
    message: Optional[str] = Field(default=None, description="Human readable error detail")

    @model_validator(mode="after")
    def result_xor_error(self) -> "OperationResult":
        """Ensure exactly one of ``result`` and ``error`` is set."""
        if (self.result is None) == (self.error is None):
            raise ValueError("OperationResult needs exactly one of result or error")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None


class SessionState(BaseModel):
    """
    Editable state of one calculator session.

    Attributes:
        - expression: running, possibly incomplete, formula shown as a preview
        - notation: value being edited or last computed (``"0"`` when fresh, ``"ERROR"`` after a failure)
        - history: every committed notation and computed result, oldest first
        - is_dirty: a result was just computed, the next edit starts a new expression
    """

    model_config = ConfigDict(frozen=True)

    expression: str = ""
    notation: str = "0"
    history: tuple[str, ...] = ()
    is_dirty: bool = False


class ActionType(str, Enum):
    """Role of an input action, mirroring the roles a calculator button can have."""

    RESET = "RESET"
    RESULT = "RESULT"
    NUMBER = "NUMBER"
    OPERATOR = "OPERATOR"
    MODIFIER = "MODIFIER"


class Action(BaseModel):
    """A single user action routed to the input processor."""

    model_config = ConfigDict(frozen=True)

    type: ActionType
    id: str = Field(default="", description="Button identifier, used by modifiers (decimal, negative)")
    key: str = Field(..., min_length=1, description="Symbol carried by the action")
