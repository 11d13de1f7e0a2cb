"""Per-iteration trace of a root-finding run.

The solvers iterate on Python floats, one scalar approximation at a time,
so that every step can be reported as it happens. A tensor-valued ``f``
such as :class:`~rootscience.formula.Formula` converts each float argument
to a 0-d tensor and returns a float.
"""

from typing import Callable, NamedTuple


class Step(NamedTuple):
    """One iteration of a solver.

    Parameters
    ----------
    iteration : int
        1-based iteration index.
    x : float
        Approximation produced by the iteration.
    fx : float
        Function value at ``x``.
    """

    iteration: int
    x: float
    fx: float


Callback = Callable[[Step], None]


def report(callback: Callback | None, iteration: int, x: float, fx: float) -> None:
    if callback is not None:
        callback(Step(iteration, x, fx))
