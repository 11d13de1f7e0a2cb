# tests/rootscience/root_finding/test__convergence.py
import math

import pytest

from rootscience.root_finding._convergence import (
    DEFAULT_MAXITER,
    DEFAULT_XTOL,
    default_parameters,
    sign,
    sign_matches,
    step_converged,
)


class TestSign:
    """Tests for sign function."""

    @pytest.mark.parametrize(
        "x, expected",
        [(-3.5, -1.0), (0.0, 0.0), (-0.0, 0.0), (2.0, 1.0), (math.inf, 1.0)],
    )
    def test_values(self, x, expected):
        assert sign(x) == expected

    def test_nan_propagates(self):
        assert math.isnan(sign(math.nan))


class TestSignMatches:
    """Tests for sign_matches function."""

    def test_same_sign(self):
        assert sign_matches(1.0, 2.0)
        assert sign_matches(-1.0, -0.5)

    def test_different_sign(self):
        assert not sign_matches(1.0, -2.0)
        assert not sign_matches(-1.0, 0.5)

    def test_nan_never_matches(self):
        assert not sign_matches(math.nan, 1.0)


class TestDefaultParameters:
    """Tests for default_parameters function."""

    def test_defaults(self):
        assert default_parameters(None, None) == (DEFAULT_XTOL, DEFAULT_MAXITER)

    def test_explicit(self):
        assert default_parameters(1e-3, 5) == (1e-3, 5)

    def test_zero_is_allowed(self):
        assert default_parameters(0.0, 0) == (0.0, 0)

    @pytest.mark.parametrize("xtol", [-1e-3, math.nan])
    def test_invalid_xtol(self, xtol):
        with pytest.raises(ValueError, match="xtol"):
            default_parameters(xtol, None)

    def test_invalid_maxiter(self):
        with pytest.raises(ValueError, match="maxiter"):
            default_parameters(None, -1)


class TestStepConverged:
    """Tests for step_converged function."""

    def test_half_precision_threshold(self):
        assert step_converged(0.5e-3, 1e-3)
        assert step_converged(-0.5e-3, 1e-3)
        assert not step_converged(0.6e-3, 1e-3)

    def test_nan_step(self):
        assert not step_converged(math.nan, 1e-3)
