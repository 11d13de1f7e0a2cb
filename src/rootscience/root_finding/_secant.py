"""Secant root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, step_converged
from ._exceptions import ConvergenceError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def secant(
    f: Callable[[float], float],
    x0: float,
    x1: float,
    *,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 using the Secant method.

    Each iteration replaces the older of the two most recent points by
    the zero of the line through both of them:
    x_{n+1} = x_{n-1} - f(x_{n-1}) * (x_n - x_{n-1}) / (f(x_n) - f(x_{n-1}))

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    x0, x1 : float
        Two distinct initial approximations.
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
    NonFiniteError
        If a new approximation is NaN or infinite, including when the two
        points have equal function values.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import secant
    >>> round(secant(lambda x: x**2 - 2, 1.0, 2.0), 6)
    1.414214

    Notes
    -----
    **Convergence**: The Secant method has superlinear convergence with order
    approximately 1.618 (the golden ratio), which is slower than Newton's
    quadratic convergence but does not require derivative computation.

    See Also
    --------
    chord : Keeps one endpoint fixed instead of the older point
    newton : Newton-Raphson method (requires derivatives, quadratic convergence)
    """
    xtol, maxiter = default_parameters(xtol, maxiter)
    logger.debug("secant: start at %r, %r", x0, x1)

    f0 = f(x0)
    f1 = f(x1)
    for iteration in range(1, maxiter + 1):
        denominator = f1 - f0
        if denominator == 0:
            raise NonFiniteError(
                "secant line through points with equal function values",
                iterations=iteration - 1,
                x=x1,
            )
        dx = f0 * (x1 - x0) / denominator
        x2 = x0 - dx
        f2 = f(x2)
        report(callback, iteration, x2, f2)

        if not math.isfinite(x2):
            raise NonFiniteError(
                f"approximation became {x2}", iterations=iteration, x=x2
            )
        if step_converged(dx, xtol):
            logger.debug("secant: converged to %r in %d iterations", x2, iteration)
            return x2

        x0, f0 = x1, f1
        x1, f1 = x2, f2

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations", iterations=maxiter, x=x1
    )
