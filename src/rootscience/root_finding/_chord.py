"""Chord (fixed-endpoint regula falsi) root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, sign_matches, step_converged
from ._differentiation import second_difference
from ._exceptions import ConvergenceError, DerivativeError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def _select_anchor(
    f: Callable[[float], float], a: float, b: float
) -> tuple[float, float]:
    """Return ``(anchor, start)``.

    ``a`` is the anchor when ``f(a)`` has the same sign as the second
    difference of ``f`` at ``a``, i.e. when ``a`` lies on the convex side
    of the root; otherwise ``b`` is.
    """
    if sign_matches(f(a), second_difference(f, a)):
        return a, b
    return b, a


def chord(
    f: Callable[[float], float],
    a: float,
    b: float,
    *,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 using the chord method.

    One endpoint of ``[a, b]`` is fixed as the anchor for the whole run and
    the other moves to the zero of the chord through the anchor and the
    current point:
    x_{n+1} = x_n - f(x_n) * (x_n - c) / (f(x_n) - f(c))

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought. Should be convex or concave on
        ``[a, b]`` for the iteration to approach the root monotonically.
    a, b : float
        Endpoints of an interval containing the root.
    xtol : float, optional
        Precision on x. The run stops once a step is no longer than
        ``xtol / 2``. Default: ``1e-8``.
    maxiter : int, optional
        Maximum iterations. Default: ``100``.
    callback : Callable[[Step], None], optional
        Receives a :class:`Step` after every iteration.

    Returns
    -------
    float
        The approximation produced by the last step.

    Raises
    ------
    DerivativeError
        If the chord is horizontal (equal function values).
    NonFiniteError
        If a new approximation is NaN or infinite.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import chord
    >>> round(chord(lambda x: x**2 - 2, 1.0, 2.0), 6)
    1.414214
    """
    xtol, maxiter = default_parameters(xtol, maxiter)
    anchor, x = _select_anchor(f, a, b)
    logger.debug("chord: anchor %r, start %r", anchor, x)

    f_anchor = f(anchor)
    fx = f(x)
    for iteration in range(1, maxiter + 1):
        denominator = fx - f_anchor
        if denominator == 0:
            raise DerivativeError(
                "chord has zero slope", iterations=iteration - 1, x=x
            )
        dx = fx * (x - anchor) / denominator
        x = x - dx
        fx = f(x)
        report(callback, iteration, x, fx)

        if not math.isfinite(x):
            raise NonFiniteError(
                f"approximation became {x}", iterations=iteration, x=x
            )
        if step_converged(dx, xtol):
            logger.debug("chord: converged to %r in %d iterations", x, iteration)
            return x

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations", iterations=maxiter, x=x
    )
