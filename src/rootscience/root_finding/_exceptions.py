"""Exception classes for root finding module."""


class RootFindingError(Exception):
    """Base exception for root finding errors.

    Parameters
    ----------
    message : str
        What went wrong.
    iterations : int
        Number of iterations completed before the failure.
    x : float or None
        Last approximation, if any was computed.
    """

    def __init__(self, message: str, *, iterations: int = 0, x: float | None = None):
        super().__init__(message)
        self.iterations = iterations
        self.x = x


class BracketError(RootFindingError):
    """Raised when bracket doesn't contain sign change."""

    pass


class DerivativeError(RootFindingError):
    """Raised when derivative computation fails (e.g., zero derivative)."""

    pass


class NonFiniteError(RootFindingError):
    """Raised when an approximation or function value becomes NaN or infinite."""

    pass


class ConvergenceError(RootFindingError):
    """Raised when the iteration budget is exhausted."""

    pass
