"""Simple (relaxed fixed-point) iteration root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, sign, step_converged
from ._differentiation import compute_derivative
from ._exceptions import ConvergenceError, DerivativeError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def _relaxation_factor(
    f: Callable[[float], float],
    a: float,
    b: float,
    df: Callable[[float], float] | None,
) -> float:
    df_a = compute_derivative(f, a, df=df)
    df_b = compute_derivative(f, b, df=df)
    if sign(df_a) != sign(df_b):
        raise DerivativeError(
            f"derivative changes sign between {a} and {b} "
            f"(f'({a}) = {df_a}, f'({b}) = {df_b})"
        )
    scale = max(abs(df_a), abs(df_b))
    if scale == 0 or math.isinf(scale):
        raise DerivativeError(f"derivative is {scale} on [{a}, {b}]")
    return sign(df_a) / scale


def _residual(f: Callable[[float], float], x: float) -> float:
    # NaN never wins the comparison for the starting point.
    value = abs(f(x))
    return math.inf if math.isnan(value) else value


def simple_iteration(
    f: Callable[[float], float],
    a: float,
    b: float,
    *,
    df: Callable[[float], float] | None = None,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 by simple iteration.

    The equation is rewritten as the fixed-point problem
    x = x - lambda * f(x) with

        lambda = sign(f'(a)) / max(|f'(a)|, |f'(b)|)

    which makes the iteration a contraction on ``[a, b]`` when ``f`` is
    monotonic there.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought. Must be monotonic on ``[a, b]``.
    a, b : float
        Interval used to derive the relaxation factor and the starting point.
    df : Callable[[float], float], optional
        Explicit derivative function. If None (default), a central
        difference with step ``0.01`` is used.
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
        If the derivative has different signs at ``a`` and ``b``, or
        vanishes at both. Raised before any iteration.
    NonFiniteError
        If an approximation is NaN or infinite.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import simple_iteration
    >>> round(simple_iteration(lambda x: x**2 - 2, 1.0, 2.0), 6)
    1.414214

    Notes
    -----
    The iteration starts from whichever of ``a``, ``b`` and their midpoint
    has the smallest ``|f|``; a point where ``f`` is NaN is chosen only if
    ``f`` is NaN at all three.
    """
    xtol, maxiter = default_parameters(xtol, maxiter)
    factor = _relaxation_factor(f, a, b, df)
    x = min((a, b, (a + b) / 2), key=lambda point: _residual(f, point))
    logger.debug("simple_iteration: factor %r, start at %r", factor, x)

    for iteration in range(1, maxiter + 1):
        dx = factor * f(x)
        x = x - dx
        report(callback, iteration, x, f(x))

        if step_converged(dx, xtol):
            logger.debug(
                "simple_iteration: converged to %r in %d iterations", x, iteration
            )
            return x
        if not math.isfinite(x):
            raise NonFiniteError(
                f"approximation became {x}", iterations=iteration, x=x
            )

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations", iterations=maxiter, x=x
    )
