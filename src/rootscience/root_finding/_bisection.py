"""Bisection root finding method."""

import logging
import math
from typing import Callable

from ._convergence import default_parameters, sign
from ._exceptions import BracketError, ConvergenceError, NonFiniteError
from ._step import Callback, report

logger = logging.getLogger(__name__)


def bisection(
    f: Callable[[float], float],
    a: float,
    b: float,
    *,
    xtol: float | None = None,
    maxiter: int | None = None,
    callback: Callback | None = None,
) -> float:
    """
    Find a root of f(x) = 0 by repeatedly halving a bracket.

    Parameters
    ----------
    f : Callable[[float], float]
        Function whose root is sought. Must be continuous on ``[a, b]``.
    a, b : float
        Bracket endpoints, in any order. ``f(a)`` and ``f(b)`` must have
        opposite signs unless one of them is exactly zero.
    xtol : float, optional
        Precision on x. The run stops once the bracket is no longer than
        ``xtol``. Default: ``1e-8``.
    maxiter : int, optional
        Maximum iterations. Checking the bracket length uses up an
        iteration, so a bracket of length ``L`` needs
        ``ceil(log2(L / xtol)) + 1`` of them. Default: ``100``.
    callback : Callable[[Step], None], optional
        Receives a :class:`Step` for every evaluated midpoint.

    Returns
    -------
    float
        An endpoint at which ``f`` is exactly zero, a midpoint at which it
        is exactly zero, or the midpoint of the final bracket.

    Raises
    ------
    BracketError
        If ``f(a)`` and ``f(b)`` have the same sign.
    NonFiniteError
        If ``f`` is NaN at an endpoint or a midpoint.
    ConvergenceError
        If convergence is not achieved within maxiter iterations.

    Examples
    --------
    >>> from rootscience.root_finding import bisection
    >>> round(bisection(lambda x: x**2 - 2, 1.0, 2.0), 6)
    1.414214

    Notes
    -----
    Every evaluated midpoint halves the bracket, so after ``k`` reported
    steps its length is ``|b - a| / 2**k``.
    """
    xtol, maxiter = default_parameters(xtol, maxiter)

    sign_a = sign(f(a))
    sign_b = sign(f(b))
    if sign_a == 0:
        return a
    if sign_b == 0:
        return b
    if math.isnan(sign_a) or math.isnan(sign_b):
        raise NonFiniteError("function is NaN at a bracket endpoint")
    if sign_a == sign_b:
        raise BracketError(
            f"f({a}) and f({b}) have the same sign; no root is bracketed"
        )

    # Keep the positive endpoint in `positive`.
    positive, negative = (a, b) if sign_a > 0 else (b, a)
    logger.debug("bisection: bracket [%r, %r]", a, b)

    for iteration in range(1, maxiter + 1):
        mid = (positive + negative) / 2
        if abs(positive - negative) <= xtol:
            logger.debug("bisection: converged to %r in %d iterations", mid, iteration)
            return mid

        f_mid = f(mid)
        report(callback, iteration, mid, f_mid)

        mid_sign = sign(f_mid)
        if mid_sign == 0:
            return mid
        if mid_sign > 0:
            positive = mid
        elif mid_sign < 0:
            negative = mid
        else:
            raise NonFiniteError(
                f"function is NaN at {mid}", iterations=iteration, x=mid
            )

    raise ConvergenceError(
        f"no convergence within {maxiter} iterations",
        iterations=maxiter,
        x=(positive + negative) / 2,
    )
