"""Formulas in one variable given as text."""

import logging
import re

import torch
from torch import Tensor

from ._exceptions import FormulaError, FormulaSyntaxError
from ._parser import PLACEHOLDER, Mode, ParseError, parse

logger = logging.getLogger(__name__)

_BLANKS = re.compile(r"\s+")

UNCLASSIFIED = "failed to classify token sequence"
TOO_DEEP = "formula is nested too deeply"


def _check_parentheses(text: str) -> FormulaError | None:
    depth = 0
    for position, character in enumerate(text):
        if character == "(":
            depth += 1
        elif character == ")":
            if depth == 0:
                return FormulaError("unexpected ')'", position)
            depth -= 1
    if depth:
        return FormulaError("no ')' to match '('", len(text))
    return None


class Formula:
    """A real function of ``x`` written as text.

    Blanks are removed on construction and nothing else is checked, so
    any string makes a ``Formula``. Call :meth:`validate` before relying
    on :meth:`evaluate`.

    Parameters
    ----------
    text : str
        Formula such as ``"sin(x) / x + x"``. Operands are decimal
        literals, the variable ``x``, function calls ``name(expr)`` and
        parenthesised expressions; operators are ``+ - * / // % ^``,
        and ``+``/``-`` may prefix an expression.

    Examples
    --------
    >>> from rootscience.formula import Formula
    >>> f = Formula("x^2 - 2")
    >>> f.validate() is None
    True
    >>> f(3.0)
    7.0
    >>> Formula("(1 + 2").validate()
    FormulaError(message="no ')' to match '('", position=4)

    Notes
    -----
    The formula is parsed again on every evaluation; instances hold no
    other state and may be evaluated from several threads at once.

    A unary sign applies to the whole expression after it, so ``-x+1``
    reads as ``-(x+1)``.
    """

    def __init__(self, text: str):
        self._text = _BLANKS.sub("", text)

    @property
    def text(self) -> str:
        return self._text

    def validate(self) -> FormulaError | None:
        """Check that the whole text is a well-formed formula.

        Parentheses are checked for balance first; then the text is parsed
        in a dry run that applies no function or operator.
        Nesting deeper than the interpreter stack allows is reported as an
        error at position 0.

        Returns
        -------
        FormulaError or None
            ``None`` if the formula is valid.
        """
        error = _check_parentheses(self._text)
        if error is None:
            try:
                _, state = parse(self._text, PLACEHOLDER, Mode.VALIDATE)
            except ParseError as failure:
                error = FormulaError(failure.message or UNCLASSIFIED, failure.position)
            except RecursionError:
                error = FormulaError(TOO_DEEP, 0)
            else:
                if not state.at_end:
                    error = FormulaError("unexpected trailing input", state.position)
        if error is not None:
            logger.debug(
                "rejected formula %r: %s at position %d",
                self._text,
                error.message,
                error.position,
            )
        return error

    def evaluate(self, argument: float | Tensor) -> float | Tensor:
        """Evaluate the formula at ``argument``.

        Arithmetic follows IEEE 754 in double precision: division by zero
        gives an infinity and functions outside their domain give NaN
        instead of raising.

        Parameters
        ----------
        argument : float or Tensor
            Value of ``x``. A tensor is evaluated element-wise.

        Returns
        -------
        float or Tensor
            A float for a scalar argument, otherwise a float64 tensor of the
            same shape as ``argument``. NaN where no expression could be
            parsed from the start of the text, or where the text is nested
            too deeply to parse.

        Notes
        -----
        Text left over after a complete expression is ignored here; only
        :meth:`validate` rejects it.
        """
        x = torch.as_tensor(argument, dtype=torch.float64)
        try:
            value, _ = parse(self._text, x, Mode.EVALUATE)
        except (ParseError, RecursionError):
            value = torch.full_like(x, float("nan"))
        value = value.expand_as(x).clone()
        if isinstance(argument, Tensor) or value.dim():
            return value
        return value.item()

    def __call__(self, argument: float | Tensor) -> float | Tensor:
        return self.evaluate(argument)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Formula):
            return NotImplemented
        return self._text == other._text

    def __hash__(self) -> int:
        return hash(self._text)

    def __repr__(self) -> str:
        return f"Formula({self._text!r})"

    def __str__(self) -> str:
        return self._text


def parse_formula(text: str) -> Formula:
    """Build a :class:`Formula` and validate it.

    Raises
    ------
    FormulaSyntaxError
        If :meth:`Formula.validate` rejects the text.
    """
    formula = Formula(text)
    error = formula.validate()
    if error is not None:
        raise FormulaSyntaxError(error.message, error.position, formula.text)
    return formula
