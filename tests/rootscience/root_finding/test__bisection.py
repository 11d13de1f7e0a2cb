# tests/rootscience/root_finding/test__bisection.py
import math

import pytest

from rootscience.formula import Formula
from rootscience.root_finding import (
    BracketError,
    ConvergenceError,
    NonFiniteError,
    bisection,
)

# Check if scipy is available for comparison tests
try:
    from scipy.optimize import bisect as scipy_bisect

    scipy_available = True
except ImportError:
    scipy_available = False


class TestBisection:
    """Tests for bisection root-finding method."""

    def test_square_root_of_two(self):
        """x^2 - 2 over [1, 2] converges to sqrt(2)."""
        root = bisection(Formula("x^2 - 2"), 1.0, 2.0, xtol=1e-8)

        assert root == pytest.approx(1.41421356, abs=1e-8)

    def test_reversed_bracket(self):
        root = bisection(lambda x: x**2 - 2, 2.0, 1.0, xtol=1e-8)

        assert root == pytest.approx(math.sqrt(2), abs=1e-8)

    def test_no_sign_change(self):
        """Both endpoints positive fails before any iteration."""
        steps = []
        with pytest.raises(BracketError):
            bisection(Formula("x + 5"), 1.0, 2.0, callback=steps.append)

        assert steps == []

    def test_root_at_endpoint(self):
        """An exact root at an endpoint is returned immediately."""
        steps = []

        assert bisection(lambda x: x - 1, 1.0, 2.0, callback=steps.append) == 1.0
        assert bisection(lambda x: x - 1, 0.0, 1.0, callback=steps.append) == 1.0
        assert steps == []

    def test_root_at_midpoint(self):
        """An exact root at a midpoint ends the run."""
        steps = []
        root = bisection(lambda x: x - 1.5, 1.0, 2.0, callback=steps.append)

        assert root == 1.5
        assert len(steps) == 1

    def test_bracket_halves(self):
        """Each step halves the bracket."""
        steps = []
        bisection(lambda x: x**2 - 2, 1.0, 2.0, xtol=1e-6, callback=steps.append)
        mids = [step.x for step in steps]

        for k in range(1, len(mids)):
            assert abs(mids[k] - mids[k - 1]) == 1.0 / 2 ** (k + 1)

    def test_number_of_steps(self):
        """Converges within ceil(log2(length / xtol)) steps."""
        steps = []
        bisection(lambda x: x**2 - 2, 1.0, 2.0, xtol=1e-6, callback=steps.append)

        assert len(steps) == math.ceil(math.log2(1.0 / 1e-6))

    def test_trace_values(self):
        steps = []
        f = lambda x: x**3 - 1
        bisection(f, 0.0, 3.0, callback=steps.append)

        for step in steps:
            assert step.fx == f(step.x)

    def test_nan_at_endpoint(self):
        with pytest.raises(NonFiniteError):
            bisection(Formula("sqrt(x)"), -1.0, 1.0)

    def test_nan_at_midpoint(self):
        f = lambda x: math.nan if 0.4 < x < 0.6 else x - 0.5

        with pytest.raises(NonFiniteError) as info:
            bisection(f, 0.0, 1.0)

        assert info.value.iterations == 1
        assert info.value.x == 0.5

    def test_budget_exhausted(self):
        with pytest.raises(ConvergenceError) as info:
            bisection(lambda x: x**2 - 2, 1.0, 2.0, maxiter=5)

        assert info.value.iterations == 5
        assert abs(info.value.x - math.sqrt(2)) < 1.0 / 2**5

    @pytest.mark.skipif(not scipy_available, reason="scipy not available")
    def test_matches_scipy(self):
        """Agrees with SciPy's bisection."""
        f = lambda x: math.cos(x) - x

        root = bisection(f, 0.0, 1.0, xtol=1e-12)
        expected = scipy_bisect(f, 0.0, 1.0, xtol=1e-12)

        assert root == pytest.approx(expected, abs=1e-11)
