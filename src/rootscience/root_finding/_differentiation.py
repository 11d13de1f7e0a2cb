"""Finite-difference utilities for root finding."""

from typing import Callable, TypeVar

T = TypeVar("T")

FINITE_DIFFERENCE_STEP = 0.01


def compute_derivative(
    f: Callable[[T], T],
    x: T,
    *,
    df: Callable[[T], T] | None = None,
    h: float | None = None,
) -> T:
    """Compute the derivative of a scalar function.

    Parameters
    ----------
    f : Callable
        Scalar function to differentiate. Floats and tensors both work.
    x : float or Tensor
        Point at which to evaluate the derivative.
    df : Callable or None
        Optional explicit derivative function. If provided, use it directly.
    h : float or None
        Step size. Default: :data:`FINITE_DIFFERENCE_STEP`.

    Returns
    -------
    float or Tensor
        Central difference ``(f(x + h) - f(x - h)) / (2h)``.
    """
    if df is not None:
        return df(x)
    if h is None:
        h = FINITE_DIFFERENCE_STEP
    return (f(x + h) - f(x - h)) / (2 * h)


def second_difference(
    f: Callable[[T], T], x: T, *, h: float | None = None
) -> T:
    """Return ``f(x + h) - 2 f(x) + f(x - h)``."""
    if h is None:
        h = FINITE_DIFFERENCE_STEP
    return f(x + h) - 2 * f(x) + f(x - h)


def compute_second_derivative(
    f: Callable[[T], T],
    x: T,
    *,
    ddf: Callable[[T], T] | None = None,
    h: float | None = None,
) -> T:
    """Compute the second derivative of a scalar function.

    Parameters
    ----------
    f : Callable
        Scalar function to differentiate twice.
    x : float or Tensor
        Point at which to evaluate the second derivative.
    ddf : Callable or None
        Optional explicit second derivative function. If provided, use it
        directly.
    h : float or None
        Step size. Default: :data:`FINITE_DIFFERENCE_STEP`.

    Returns
    -------
    float or Tensor
        ``second_difference(f, x) / (2h)``.

    Notes
    -----
    The second difference is divided by ``2h``, not ``h**2``, so the
    result is ``h / 2`` times the second derivative. The correction term
    of :func:`~rootscience.root_finding.halley` is computed with this
    scaling and must not be changed independently.
    """
    if ddf is not None:
        return ddf(x)
    if h is None:
        h = FINITE_DIFFERENCE_STEP
    return second_difference(f, x, h=h) / (2 * h)
