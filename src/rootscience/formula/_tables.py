"""Operator and function tables of the formula grammar."""

import enum
import types
from typing import Callable, NamedTuple

import torch
from torch import Tensor


class Precedence(enum.IntEnum):
    """Binding strength of a binary operator, lowest first."""

    ADDITIVE = 1
    MULTIPLICATIVE = 2
    POWER = 3


class Operator(NamedTuple):
    """A binary operator of the grammar.

    Parameters
    ----------
    symbol : str
        Text of the operator as it appears in a formula.
    function : Callable[[Tensor, Tensor], Tensor]
        Element-wise float64 operation applied to the two operands.
    precedence : Precedence
        Precedence class of the operator.
    """

    symbol: str
    function: Callable[[Tensor, Tensor], Tensor]
    precedence: Precedence

    def takes_precedence_over(self, pending: "Operator") -> bool:
        """Whether this operator must be applied before ``pending``.

        Power binds tighter than any pending operator, including another
        power, which makes ``^`` right-associative. All other operators
        only take precedence over strictly weaker ones, which makes them
        left-associative.
        """
        if self.precedence is Precedence.POWER:
            return True
        return self.precedence > pending.precedence


def _floor_divide(a: Tensor, b: Tensor) -> Tensor:
    return torch.div(a, b, rounding_mode="floor")


def _cbrt(x: Tensor) -> Tensor:
    return torch.sign(x) * torch.pow(torch.abs(x), 1.0 / 3.0)


OPERATORS = types.MappingProxyType(
    {
        "+": Operator("+", torch.add, Precedence.ADDITIVE),
        "-": Operator("-", torch.sub, Precedence.ADDITIVE),
        "*": Operator("*", torch.mul, Precedence.MULTIPLICATIVE),
        "/": Operator("/", torch.div, Precedence.MULTIPLICATIVE),
        "//": Operator("//", _floor_divide, Precedence.MULTIPLICATIVE),
        "%": Operator("%", torch.remainder, Precedence.MULTIPLICATIVE),
        "^": Operator("^", torch.pow, Precedence.POWER),
    }
)

# Longest symbols first so that "//" is never read as two "/".
OPERATOR_SYMBOLS = tuple(sorted(OPERATORS, key=len, reverse=True))

FUNCTIONS = types.MappingProxyType(
    {
        "abs": torch.abs,
        "acos": torch.acos,
        "asin": torch.asin,
        "atan": torch.atan,
        "cbrt": _cbrt,
        "ceil": torch.ceil,
        "cos": torch.cos,
        "cosh": torch.cosh,
        "exp": torch.exp,
        "floor": torch.floor,
        "ln": torch.log,
        "log": torch.log10,
        "log2": torch.log2,
        "log10": torch.log10,
        "sign": torch.sign,
        "sin": torch.sin,
        "sinh": torch.sinh,
        "sqrt": torch.sqrt,
        "tan": torch.tan,
        "tanh": torch.tanh,
    }
)

VARIABLE = "x"
