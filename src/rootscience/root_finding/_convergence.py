"""Convergence utilities for root finding."""

import math

DEFAULT_XTOL = 1e-8
DEFAULT_MAXITER = 100


def default_parameters(
    xtol: float | None, maxiter: int | None
) -> tuple[float, int]:
    """Fill in defaults and check the common solver parameters.

    Parameters
    ----------
    xtol : float or None
        Precision on x. Default: :data:`DEFAULT_XTOL`.
    maxiter : int or None
        Iteration budget. Default: :data:`DEFAULT_MAXITER`.

    Returns
    -------
    tuple[float, int]
        ``(xtol, maxiter)``.

    Raises
    ------
    ValueError
        If ``xtol`` is negative or NaN, or ``maxiter`` is negative.
    """
    if xtol is None:
        xtol = DEFAULT_XTOL
    if maxiter is None:
        maxiter = DEFAULT_MAXITER
    if not xtol >= 0:
        raise ValueError(f"xtol must be non-negative, got {xtol}")
    if maxiter < 0:
        raise ValueError(f"maxiter must be non-negative, got {maxiter}")
    return xtol, maxiter


def sign(x: float) -> float:
    """Return -1.0, 0.0 or 1.0 according to the sign of ``x``; NaN stays NaN."""
    if math.isnan(x):
        return x
    if x == 0:
        return 0.0
    return math.copysign(1.0, x)


def sign_matches(a: float, b: float) -> bool:
    """Whether ``a`` and ``b`` have the same sign bit. False if ``a`` is NaN."""
    return math.copysign(a, b) == a


def step_converged(dx: float, xtol: float) -> bool:
    """Whether a step of size ``dx`` is within half of ``xtol``."""
    return abs(dx) <= xtol / 2
