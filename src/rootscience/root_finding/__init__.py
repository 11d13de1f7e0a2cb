import types
from typing import Callable, Literal, NamedTuple

from ._bisection import bisection
from ._chord import chord
from ._convergence import (
    DEFAULT_MAXITER,
    DEFAULT_XTOL,
    default_parameters,
    sign,
    sign_matches,
)
from ._differentiation import (
    FINITE_DIFFERENCE_STEP,
    compute_derivative,
    compute_second_derivative,
    second_difference,
)
from ._exceptions import (
    BracketError,
    ConvergenceError,
    DerivativeError,
    NonFiniteError,
    RootFindingError,
)
from ._halley import halley
from ._newton import newton
from ._secant import secant
from ._simple_iteration import simple_iteration
from ._step import Callback, Step


class Method(NamedTuple):
    """A root-finding method and the kind of starting values it takes.

    ``"interval"`` methods are called as ``function(f, a, b, **kwargs)``,
    ``"point"`` methods as ``function(f, x0, **kwargs)``.
    """

    name: str
    function: Callable[..., float]
    start: Literal["interval", "point"]


METHODS = types.MappingProxyType(
    {
        "secant": Method("secant", secant, "interval"),
        "chord": Method("chord", chord, "interval"),
        "bisection": Method("bisection", bisection, "interval"),
        "newton": Method("newton", newton, "point"),
        "halley": Method("halley", halley, "point"),
        "simple_iteration": Method("simple_iteration", simple_iteration, "interval"),
    }
)

__all__ = [
    "DEFAULT_MAXITER",
    "DEFAULT_XTOL",
    "FINITE_DIFFERENCE_STEP",
    "METHODS",
    "BracketError",
    "Callback",
    "ConvergenceError",
    "DerivativeError",
    "Method",
    "NonFiniteError",
    "RootFindingError",
    "Step",
    "bisection",
    "chord",
    "compute_derivative",
    "compute_second_derivative",
    "default_parameters",
    "halley",
    "newton",
    "second_difference",
    "secant",
    "sign",
    "sign_matches",
    "simple_iteration",
]
