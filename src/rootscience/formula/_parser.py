"""Recursive backtracking parser and evaluator for formulas in one variable.

The parser walks the text directly and computes the value as it goes; no
syntax tree is built. Each grammar rule receives an immutable
:class:`ParseState` and returns the parsed value together with the state
after it, so an alternative that fails leaves the caller's state untouched
and the next alternative starts from the same position.

Grammar::

    expression := binary | call | ("+" | "-") expression
    binary     := operand (operator operand)*
    operand    := literal | "x" | call | "(" expression ")"
    call       := name "(" expression ")"
"""

import dataclasses
import enum
import functools
import re
from typing import Any, Callable, NamedTuple, Sequence, Union

import torch
from torch import Tensor

from ._tables import FUNCTIONS, OPERATOR_SYMBOLS, OPERATORS, VARIABLE, Operator

Value = Union[Tensor, float]

# Stands in for the variable and every intermediate result during a dry run.
PLACEHOLDER = 1.0

_NUMBER = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_ALPHABET = frozenset(
    "0123456789."
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_"
    "()" + "".join(OPERATOR_SYMBOLS)
)


class Mode(enum.Enum):
    """What a parse pass does with the values it recognizes."""

    VALIDATE = "validate"
    EVALUATE = "evaluate"


class ParseError(Exception):
    """Raised when a grammar rule does not match at a position.

    ``message`` is ``None`` when the failure has no more specific
    explanation than "this rule does not apply here".
    """

    def __init__(self, message: str | None, position: int):
        super().__init__(message, position)
        self.message = message
        self.position = position


@dataclasses.dataclass(frozen=True)
class ParseState:
    """Cursor over the formula text together with the variable binding.

    ``outcomes`` is shared by every state advanced from the same initial
    state; it records what each memoized rule produced at each position.
    """

    text: str
    position: int
    argument: Value
    mode: Mode
    outcomes: dict[tuple[str, int], Any] = dataclasses.field(
        default_factory=dict, compare=False, repr=False
    )

    @property
    def at_end(self) -> bool:
        return self.position >= len(self.text)

    @property
    def current(self) -> str:
        return "" if self.at_end else self.text[self.position]

    def startswith(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.position)

    def advance(self, count: int = 1) -> "ParseState":
        return dataclasses.replace(self, position=self.position + count)

    def constant(self, value: float) -> Value:
        if self.mode is Mode.VALIDATE:
            return PLACEHOLDER
        return torch.tensor(
            value, dtype=torch.float64, device=self.argument.device
        )


class Operand(NamedTuple):
    """A left operand waiting for the right-hand side of ``operator``."""

    value: Value
    operator: Operator


Rule = Callable[[ParseState], tuple[Value, ParseState]]


def _memoized(rule: Rule) -> Rule:
    """Run ``rule`` at most once per position of a parse.

    Later calls at the same position return the recorded result or raise
    a copy of the recorded failure, so a parse takes time polynomial in
    the length of the text however deeply calls are nested.
    """

    @functools.wraps(rule)
    def wrapper(state: ParseState) -> tuple[Value, ParseState]:
        key = (rule.__name__, state.position)
        if key not in state.outcomes:
            try:
                state.outcomes[key] = rule(state)
            except ParseError as error:
                state.outcomes[key] = error
        outcome = state.outcomes[key]
        if isinstance(outcome, ParseError):
            raise ParseError(outcome.message, outcome.position)
        return outcome

    return wrapper


def _diagnose(state: ParseState) -> str | None:
    if state.at_end:
        return "unexpected end of formula"
    if state.current not in _ALPHABET:
        return f"unexpected character '{state.current}'"
    return None


def _furthest(failures: Sequence[ParseError]) -> ParseError:
    # Ties go to a failure that carries a message.
    return max(
        failures, key=lambda error: (error.position, error.message is not None)
    )


def _first_match(state: ParseState, rules: Sequence[Rule]) -> tuple[Value, ParseState]:
    failures = []
    for rule in rules:
        try:
            return rule(state)
        except ParseError as error:
            failures.append(error)
    raise _furthest(failures)


def _ends_expression(state: ParseState) -> bool:
    return state.at_end or state.current == ")"


def _expect_closing(state: ParseState) -> ParseState:
    if state.current != ")":
        raise ParseError(_diagnose(state) or "expected ')'", state.position)
    return state.advance()


def _literal(state: ParseState) -> tuple[Value, ParseState]:
    match = _NUMBER.match(state.text, state.position)
    if match is None:
        raise ParseError(_diagnose(state), state.position)
    token = match.group()
    return state.constant(float(token)), state.advance(len(token))


def _variable(state: ParseState) -> tuple[Value, ParseState]:
    match = _NAME.match(state.text, state.position)
    if match is None or match.group() != VARIABLE:
        raise ParseError(_diagnose(state), state.position)
    if state.mode is Mode.VALIDATE:
        return PLACEHOLDER, state.advance(len(VARIABLE))
    return state.argument, state.advance(len(VARIABLE))


@_memoized
def _function_call(state: ParseState) -> tuple[Value, ParseState]:
    match = _NAME.match(state.text, state.position)
    if match is None:
        raise ParseError(_diagnose(state), state.position)
    name = match.group()
    after_name = state.advance(len(name))
    if name not in FUNCTIONS:
        if name == VARIABLE:
            raise ParseError(None, state.position)
        if after_name.current == "(":
            raise ParseError(f"unknown function '{name}'", state.position)
        raise ParseError(f"unknown name '{name}'", state.position)
    if after_name.current != "(":
        raise ParseError(
            _diagnose(after_name) or f"expected '(' after '{name}'",
            after_name.position,
        )

    argument, state = _expression(after_name.advance())
    state = _expect_closing(state)
    if state.mode is Mode.VALIDATE:
        return PLACEHOLDER, state
    return FUNCTIONS[name](argument), state


def _parenthesized(state: ParseState) -> tuple[Value, ParseState]:
    if state.current != "(":
        raise ParseError(_diagnose(state), state.position)
    value, state = _expression(state.advance())
    return value, _expect_closing(state)


@_memoized
def _operand(state: ParseState) -> tuple[Value, ParseState]:
    return _first_match(
        state, (_literal, _variable, _function_call, _parenthesized)
    )


def _operator(state: ParseState) -> tuple[Operator, ParseState]:
    for symbol in OPERATOR_SYMBOLS:
        if state.startswith(symbol):
            return OPERATORS[symbol], state.advance(len(symbol))
    message = _diagnose(state) or f"expected an operator, found '{state.current}'"
    raise ParseError(message, state.position)


def _next_operator(state: ParseState) -> tuple[Operator, ParseState] | None:
    """Read the operator after an operand, or ``None`` at the end of an expression."""
    if _ends_expression(state):
        return None
    return _operator(state)


def _apply(operator: Operator, left: Value, right: Value, mode: Mode) -> Value:
    if mode is Mode.VALIDATE:
        return PLACEHOLDER
    return operator.function(left, right)


def _fold(
    pending: Operand, state: ParseState, floor: Operator | None
) -> tuple[Value, ParseState]:
    """Fold ``pending`` with the operands that follow it.

    A right operand is first extended by every following operator that
    takes precedence over the pending one. The fold then reduces and goes
    on with the next operator, unless that operator does not bind tighter
    than ``floor``, the operator the caller is still holding; it is then
    left unread for the caller.
    """
    while True:
        right, state = _operand(state)
        following = _next_operator(state)
        while following is not None and following[0].takes_precedence_over(
            pending.operator
        ):
            right, state = _fold(
                Operand(right, following[0]), following[1], pending.operator
            )
            following = _next_operator(state)

        value = _apply(pending.operator, pending.value, right, state.mode)
        if following is None:
            return value, state
        if floor is not None and not following[0].takes_precedence_over(floor):
            return value, state
        pending, state = Operand(value, following[0]), following[1]


def _binary_expression(state: ParseState) -> tuple[Value, ParseState]:
    value, state = _operand(state)
    if _ends_expression(state):
        return value, state
    operator, state = _operator(state)
    return _fold(Operand(value, operator), state, None)


def _signed_expression(state: ParseState) -> tuple[Value, ParseState]:
    sign = state.current
    if sign not in ("+", "-"):
        raise ParseError(_diagnose(state), state.position)
    value, state = _expression(state.advance())
    if sign == "-" and state.mode is Mode.EVALUATE:
        value = torch.neg(value)
    return value, state


@_memoized
def _expression(state: ParseState) -> tuple[Value, ParseState]:
    return _first_match(
        state, (_binary_expression, _function_call, _signed_expression)
    )


def parse(text: str, argument: Value, mode: Mode) -> tuple[Value, ParseState]:
    """Parse the longest expression at the start of ``text``.

    Parameters
    ----------
    text : str
        Formula text without blanks.
    argument : Tensor or float
        Value bound to the variable. Ignored when ``mode`` is
        ``Mode.VALIDATE``.
    mode : Mode
        ``Mode.EVALUATE`` computes the value with float64 tensor
        arithmetic; ``Mode.VALIDATE`` only checks the shape of the grammar
        and returns :data:`PLACEHOLDER`.

    Returns
    -------
    tuple[Tensor or float, ParseState]
        The value of the expression and the state after it. The state may
        stop before the end of ``text``.

    Raises
    ------
    ParseError
        If no expression starts at the beginning of ``text``.
    """
    return _expression(ParseState(text, 0, argument, mode))
