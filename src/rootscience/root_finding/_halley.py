"""Halley's root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, step_converged
from ._differentiation import compute_derivative, compute_second_derivative
from ._exceptions import ConvergenceError, DerivativeError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def halley(
    f: Callable[[float], float],
    x0: float,
    *,
    df: Callable[[float], float] | None = None,
    ddf: Callable[[float], float] | None = None,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 using Halley's method.

    Halley's method corrects the Newton step with the second derivative:

        a = f(x) / f'(x)
        x_{n+1} = x_n - a / (1 - a * f''(x) / (2 * f'(x)))

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    x0 : float
        Initial guess for the root.
    df : Callable[[float], float], optional
        Explicit first derivative. If None (default), a central difference
        with step ``0.01`` is used.
    ddf : Callable[[float], float], optional
        Explicit second derivative. If None (default),
        :func:`compute_second_derivative` is used.
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
        If the first derivative or the correction denominator is zero, NaN
        or infinite.
    NonFiniteError
        If an approximation is NaN or infinite.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import halley
    >>> round(halley(lambda x: x**2 - 2, 1.5), 6)
    1.414214

    Notes
    -----
    The default second derivative is the second difference divided by
    ``2h`` rather than ``h**2``, which damps the correction term; with an
    explicit ``ddf`` the method has its usual cubic convergence.

    See Also
    --------
    newton : Newton-Raphson method (quadratic convergence)
    """
    xtol, maxiter = default_parameters(xtol, maxiter)
    if not math.isfinite(x0):
        raise NonFiniteError(f"initial approximation is {x0}", x=x0)
    logger.debug("halley: start at %r", x0)

    x = x0
    for iteration in range(1, maxiter + 1):
        dfdx = compute_derivative(f, x, df=df)
        if dfdx == 0 or not math.isfinite(dfdx):
            raise DerivativeError(
                f"derivative is {dfdx} at {x}", iterations=iteration - 1, x=x
            )
        a = f(x) / dfdx
        b = 1 - a * compute_second_derivative(f, x, ddf=ddf) / (2 * dfdx)
        if b == 0 or math.isinf(b):
            raise DerivativeError(
                f"Halley correction is degenerate at {x}",
                iterations=iteration - 1,
                x=x,
            )
        dx = a / b
        x = x - dx
        report(callback, iteration, x, f(x))

        if step_converged(dx, xtol):
            logger.debug("halley: converged to %r in %d iterations", x, iteration)
            return x
        if not math.isfinite(x):
            raise NonFiniteError(
                f"approximation became {x}", iterations=iteration, x=x
            )

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations", iterations=maxiter, x=x
    )
