"""Newton-Raphson root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, step_converged
from ._differentiation import compute_derivative
from ._exceptions import ConvergenceError, DerivativeError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def newton(
    f: Callable[[float], float],
    x0: float,
    *,
    df: Callable[[float], float] | None = None,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 using Newton-Raphson method.

    Newton's method uses the iteration x_{n+1} = x_n - f(x_n) / f'(x_n)
    to find roots. It converges quadratically when starting near a root,
    but may diverge if the initial guess is far from any root or if the
    derivative is zero near the root.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought.
    x0 : float
        Initial guess for the root.
    df : Callable[[float], float], optional
        Explicit derivative function. If None (default), the derivative is
        approximated by a central difference with step ``0.01``.
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
        If the derivative is zero, NaN or infinite at an approximation.
    NonFiniteError
        If an approximation is NaN or infinite.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import newton
    >>> round(newton(lambda x: x**2 - 2, 1.5), 6)
    1.414214

    Notes
    -----
    **Convergence**: Newton's method has quadratic convergence near simple
    roots, meaning the number of correct digits roughly doubles each iteration.
    With the finite-difference derivative the error stops shrinking at the
    level of the difference's truncation error, which the step-size test
    tolerates since the step itself still shrinks quadratically.

    See Also
    --------
    halley : Halley's method (cubic convergence)
    secant : Secant method (no derivative)
    """
    xtol, maxiter = default_parameters(xtol, maxiter)
    if not math.isfinite(x0):
        raise NonFiniteError(f"initial approximation is {x0}", x=x0)
    logger.debug("newton: start at %r", x0)

    x = x0
    for iteration in range(1, maxiter + 1):
        dfdx = compute_derivative(f, x, df=df)
        if dfdx == 0 or not math.isfinite(dfdx):
            raise DerivativeError(
                f"derivative is {dfdx} at {x}", iterations=iteration - 1, x=x
            )
        dx = f(x) / dfdx
        x = x - dx
        report(callback, iteration, x, f(x))

        if step_converged(dx, xtol):
            logger.debug("newton: converged to %r in %d iterations", x, iteration)
            return x
        if not math.isfinite(x):
            raise NonFiniteError(
                f"approximation became {x}", iterations=iteration, x=x
            )

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations", iterations=maxiter, x=x
    )
