"""Error types of the formula module."""

from typing import NamedTuple


class FormulaError(NamedTuple):
    """Why a formula was rejected and where.

    Parameters
    ----------
    message : str
        Human-readable description of the problem.
    position : int
        Offset into the blank-stripped formula text, in ``[0, len(text)]``.
    """

    message: str
    position: int


class FormulaSyntaxError(ValueError):
    """Raised by :func:`~rootscience.formula.parse_formula` for invalid formulas."""

    def __init__(self, message: str, position: int, text: str = ""):
        super().__init__(f"{message} at position {position}")
        self.message = message
        self.position = position
        self.text = text
